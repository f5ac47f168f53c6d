"""Command-line interface for the Snow Day Calculator."""

import json
from typing import Optional

import click
import numpy as np

from snow_day import __version__
from snow_day.config import DEFAULT_PRESET, get_preset, list_presets
from snow_day.core import WeatherObservation
from snow_day.data import DemoWeatherSource
from snow_day.engine import (
    ClosureProbabilityEngine,
    ForecastProjector,
    classify_postal_code,
    generate_advice,
    summarize,
)
from snow_day.cli.display import ResultDisplay, sparkline
from snow_day.utils import get_logger, setup_logging

logger = get_logger(__name__)


def _rng(seed: Optional[int]) -> Optional[np.random.Generator]:
    return np.random.default_rng(seed) if seed is not None else None


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Snow Day Calculator - School closure probability from winter weather."""
    setup_logging(level="DEBUG" if debug else None)


@main.command()
@click.argument("postal_code")
@click.option("--temperature", "-t", type=float, default=None, help="Temperature (°F)")
@click.option("--snowfall", "-s", type=click.FloatRange(min=0), default=None, help="Snowfall (inches)")
@click.option("--wind", "-w", type=click.FloatRange(min=0), default=None, help="Wind speed (mph)")
@click.option("--preset", "-p", default=DEFAULT_PRESET, help="Weight preset (see `presets`)")
@click.option("--weight-temperature", type=click.FloatRange(0, 10), default=None, help="Temperature weight (0-10)")
@click.option("--weight-snowfall", type=click.FloatRange(0, 10), default=None, help="Snowfall weight (0-10)")
@click.option("--weight-wind", type=click.FloatRange(0, 10), default=None, help="Wind speed weight (0-10)")
@click.option("--weight-district", type=click.FloatRange(0, 10), default=None, help="School district weight (0-10)")
@click.option("--location-name", "-l", default=None, help="Display name for the location")
@click.option("--forecast/--no-forecast", default=True, help="Include the 48-hour trend")
@click.option("--seed", type=int, default=None, help="Seed for demo weather and forecast noise")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def calculate(
    postal_code: str,
    temperature: Optional[float],
    snowfall: Optional[float],
    wind: Optional[float],
    preset: str,
    weight_temperature: Optional[float],
    weight_snowfall: Optional[float],
    weight_wind: Optional[float],
    weight_district: Optional[float],
    location_name: Optional[str],
    forecast: bool,
    seed: Optional[int],
    as_json: bool,
):
    """Calculate the snow day probability for a ZIP or postal code."""
    if not postal_code.strip():
        click.echo("Error: ZIP code or postal code is required", err=True)
        return

    try:
        weights = get_preset(preset).replace(
            temperature=weight_temperature,
            snowfall=weight_snowfall,
            wind_speed=weight_wind,
            school_district=weight_district,
        )
    except KeyError as e:
        click.echo(f"Error: {e.args[0]}", err=True)
        return

    rng = _rng(seed)

    if None in (temperature, snowfall, wind):
        demo = DemoWeatherSource(rng=rng).observe(postal_code)
        temperature = demo.temperature_f if temperature is None else temperature
        snowfall = demo.snowfall_in if snowfall is None else snowfall
        wind = demo.wind_speed_mph if wind is None else wind

    try:
        observation = WeatherObservation(
            temperature_f=temperature,
            snowfall_in=snowfall,
            wind_speed_mph=wind,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        return

    engine = ClosureProbabilityEngine(weights)
    result = engine.compute(observation, postal_code, location_name=location_name)
    advice = generate_advice(result)

    summary = None
    if forecast:
        projector = ForecastProjector(rng=rng)
        summary = summarize(projector.project(result.probability))

    if as_json:
        payload = result.to_dict()
        payload["advice"] = [
            {
                "category": a.category.value,
                "title": a.title,
                "description": a.description,
                "priority": a.priority.value,
            }
            for a in advice
        ]
        if summary is not None:
            payload["forecast"] = {
                "peak": summary.peak,
                "average": summary.average,
                "points": [
                    {"timestamp": p.timestamp.isoformat(), "probability": p.probability}
                    for p in summary.points
                ],
            }
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    ResultDisplay().render(result, advice, summary)


@main.command()
@click.argument("base_probability", type=click.FloatRange(0, 100))
@click.option("--seed", type=int, default=None, help="Seed for the forecast noise")
def forecast(base_probability: float, seed: Optional[int]):
    """Project a 48-hour closure probability trend."""
    points = ForecastProjector(rng=_rng(seed)).project(base_probability)
    summary = summarize(points)

    click.echo(f"\n{'='*40}")
    click.echo(f"48-Hour Trend around {base_probability:g}%")
    click.echo(f"{'='*40}")
    click.echo(sparkline([p.probability for p in points]))

    click.echo(f"\n{'Time':<18} {'Prob':>6}")
    click.echo("-" * 25)
    for p in points:
        click.echo(f"{p.timestamp:%a %m-%d %H:00}    {p.probability:>5}%")

    click.echo("-" * 25)
    click.echo(f"Peak: {summary.peak}%  Average: {summary.average}%")


@main.command()
@click.argument("postal_code")
def classify(postal_code: str):
    """Show how a ZIP or postal code is classified."""
    classification = classify_postal_code(postal_code)
    if classification.is_fallback:
        logger.warning(f"Could not parse {postal_code!r}; using default classification")

    click.echo(f"\nPostal Code:     {classification.postal_code or '-'}")
    click.echo(f"Region:          {classification.region.value} (x{classification.region.multiplier:g})")
    click.echo(f"District:        {classification.district.value} (x{classification.district.multiplier:g})")
    click.echo(f"Multiplier:      x{classification.combined_multiplier:.2f}")
    if classification.is_fallback:
        click.echo("Note:            unrecognized code, default classification used")


@main.command()
def presets():
    """List available weight presets."""
    click.echo(f"\n{'Preset':<16} {'Temp':>6} {'Snow':>6} {'Wind':>6} {'District':>9}")
    click.echo("-" * 47)
    for name in list_presets():
        pct = get_preset(name).percentages()
        click.echo(
            f"{name:<16} {pct['temperature']:>5.0f}% {pct['snowfall']:>5.0f}% "
            f"{pct['wind_speed']:>5.0f}% {pct['school_district']:>8.0f}%"
        )


if __name__ == "__main__":
    main()
