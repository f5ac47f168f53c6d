"""
Terminal output for the Snow Day Calculator.

Uses Rich to show the probability gauge, factor breakdown, weight
distribution, advice and forecast trend for one calculation.
"""

from datetime import datetime
from typing import List, Optional

from rich import box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from snow_day.core.models import (
    Advice,
    AdvicePriority,
    CalculationResult,
    ForecastSummary,
    RiskLevel,
)

FACTOR_NAMES = {
    "temperature": "Temperature",
    "snowfall": "Snowfall",
    "wind_speed": "Wind Speed",
    "school_district": "School District",
}

RISK_STYLES = {
    RiskLevel.EXTREMELY_HIGH: "bold white on red",
    RiskLevel.VERY_HIGH: "bold red",
    RiskLevel.HIGH: "red",
    RiskLevel.MODERATE: "yellow",
    RiskLevel.LOW_TO_MODERATE: "cyan",
    RiskLevel.LOW: "green",
    RiskLevel.VERY_LOW: "bold green",
}

PRIORITY_STYLES = {
    AdvicePriority.HIGH: "bold red",
    AdvicePriority.MEDIUM: "yellow",
    AdvicePriority.LOW: "dim",
}

SPARK_CHARS = "▁▂▃▄▅▆▇█"
GAUGE_WIDTH = 40


def sparkline(values: List[int], maximum: int = 100) -> str:
    """Render 0-maximum values as a row of block characters."""
    if not values:
        return ""
    top = len(SPARK_CHARS) - 1
    return "".join(
        SPARK_CHARS[min(top, max(0, round(v / maximum * top)))] for v in values
    )


class ResultDisplay:
    """
    Renders a calculation to the terminal.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def generate_header(self, result: CalculationResult) -> Panel:
        """Create header panel."""
        grid = Table.grid(expand=True)
        grid.add_column(justify="center", ratio=1)
        grid.add_row("[b]❄ Snow Day Calculator ❄[/b]")
        grid.add_row(f"[dim]{result.location}[/dim]")
        return Panel(grid, style="bold white on blue")

    def generate_gauge_panel(self, result: CalculationResult) -> Panel:
        """Create the probability gauge."""
        style = RISK_STYLES.get(result.recommendation, "white")

        headline = Text(justify="center")
        headline.append(f"{result.probability}%", style=f"bold {style}")
        headline.append(" probability", style="dim")

        gauge = ProgressBar(
            total=100,
            completed=result.probability,
            width=GAUGE_WIDTH,
            complete_style=style,
        )

        recommendation = Text(justify="center")
        recommendation.append(result.recommendation.label, style=style)
        recommendation.append(f" - {result.recommendation.description}")

        return Panel(
            Group(Align.center(headline), Align.center(gauge), Align.center(recommendation)),
            title="Snow Day Probability",
            border_style="blue",
        )

    def generate_conditions_table(self, result: CalculationResult) -> Panel:
        """Create the weather conditions and factor score table."""
        descriptions = result.describe_factors()
        factors = result.factors

        table = Table(box=box.SIMPLE, expand=True)
        table.add_column("Condition")
        table.add_column("Value", justify="right")
        table.add_column("Score", justify="right")

        table.add_row("Temperature", descriptions["temperature"], f"{factors.temperature:.0f}")
        table.add_row("Snowfall", descriptions["snowfall"], f"{factors.snowfall:.0f}")
        table.add_row("Wind Speed", descriptions["wind_speed"], f"{factors.wind:.0f}")
        table.add_row("Visibility", "[dim]from wind + snow[/dim]", f"{factors.visibility:.0f}")
        table.add_row("Road Ice", "[dim]from temp + snow + wind[/dim]", f"{factors.ice:.0f}")

        return Panel(table, title="Conditions", border_style="cyan")

    def generate_contribution_table(self, result: CalculationResult) -> Panel:
        """Create the factor contribution and weight distribution table."""
        weight_pct = result.applied_weights.percentages()
        weights = result.applied_weights.as_dict()

        table = Table(box=box.SIMPLE, expand=True)
        table.add_column("Factor")
        table.add_column("Weight", justify="right")
        table.add_column("Share")
        table.add_column("Contribution", justify="right")

        for key, name in FACTOR_NAMES.items():
            table.add_row(
                name,
                f"{weights[key]:.1f}",
                ProgressBar(total=100, completed=weight_pct[key], width=20),
                f"{result.factor_contributions[key]:.1f}",
            )

        table.add_section()
        table.add_row(
            "[b]Total[/b]",
            f"{result.total_weight:.1f}",
            "",
            f"[b]{result.weighted_probability:.1f}[/b]",
            style="yellow",
        )

        return Panel(table, title="Weight Distribution", border_style="magenta")

    def generate_advice_panel(self, advice: List[Advice]) -> Panel:
        """Create the recommendations list."""
        table = Table(box=box.ROUNDED, expand=True, show_header=False)
        table.add_column(ratio=1)

        for item in advice:
            content = Text()
            content.append(f"{item.title} ", style="bold white")
            content.append(f"[{item.priority.value}]", style=PRIORITY_STYLES[item.priority])
            content.append(f"\n{item.description}", style="dim")
            table.add_row(content)

        return Panel(table, title=f"Recommendations ({len(advice)})", border_style="green")

    def generate_forecast_panel(self, summary: ForecastSummary) -> Panel:
        """Create the 48-hour trend panel."""
        if not summary.points:
            return Panel("No forecast available", title="48-Hour Trend", border_style="white")

        values = [p.probability for p in summary.points]
        start: datetime = summary.points[0].timestamp
        end: datetime = summary.points[-1].timestamp

        grid = Table.grid(expand=True)
        grid.add_column()
        grid.add_column(justify="right")
        grid.add_row(Text(sparkline(values), style="cyan"), "")
        grid.add_row(
            f"[dim]{start:%a %H:%M} → {end:%a %H:%M}[/dim]",
            f"Peak: [b]{summary.peak}%[/b]  Average: [b]{summary.average}%[/b]",
        )

        return Panel(grid, title="48-Hour Trend", border_style="blue")

    def render(
        self,
        result: CalculationResult,
        advice: Optional[List[Advice]] = None,
        forecast: Optional[ForecastSummary] = None,
    ) -> None:
        """Print every panel for a calculation."""
        self.console.print(self.generate_header(result))
        self.console.print(self.generate_gauge_panel(result))
        self.console.print(self.generate_conditions_table(result))
        self.console.print(self.generate_contribution_table(result))
        if advice:
            self.console.print(self.generate_advice_panel(advice))
        if forecast is not None:
            self.console.print(self.generate_forecast_panel(forecast))
