"""Output formatters for workout reports and workout exports."""

from __future__ import annotations

import csv
import io
import json
from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from neofit.reporting.aggregation import Trend, WorkoutReport
from neofit.tracking.models import Workout, WorkoutSource

CSV_HEADERS = [
    "date",
    "type",
    "duration_min",
    "calories_kcal",
    "distance_km",
    "heart_rate_bpm",
    "source",
]

TREND_ARROWS = {
    Trend.UP: "↑",
    Trend.DOWN: "↓",
    Trend.STABLE: "→",
}


def workouts_to_csv(workouts: Iterable[Workout]) -> str:
    """Render workouts as CSV, one row per workout.

    Missing distance and heart rate are written as empty cells.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for w in workouts:
        writer.writerow([
            w.date.date().isoformat(),
            w.type,
            f"{w.duration:g}",
            f"{w.calories_burned:g}",
            "" if w.distance is None else f"{w.distance:g}",
            "" if w.heart_rate is None else w.heart_rate,
            w.source.value,
        ])
    return buffer.getvalue()


def report_to_dict(report: WorkoutReport) -> dict:
    """Convert a WorkoutReport to a JSON-serializable dict."""
    return {
        "days": report.days,
        "start": report.start.isoformat(),
        "end": report.end.isoformat(),
        "summary": {
            "count": report.summary.count,
            "total_calories": report.summary.total_calories,
            "total_distance": round(report.summary.total_distance, 2),
            "total_duration": report.summary.total_duration,
            "average_duration": round(report.summary.average_duration, 1),
        },
        "trend": report.trend.value,
        "daily": [
            {
                "date": d.key,
                "workouts": d.workouts,
                "duration": d.duration,
                "calories_burned": d.calories_burned,
                "distance": round(d.distance, 2),
            }
            for d in report.daily
        ],
        "type_counts": report.type_counts,
    }


class TableFormatter:
    """Format reports as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(self, report: WorkoutReport) -> None:
        """Print formatted tables to console."""
        s = report.summary
        trend = report.trend
        trend_color = {"up": "green", "down": "red", "stable": "yellow"}[trend.value]
        header_lines = [
            f"[bold]WORKOUT REPORT[/bold] - last {report.days} days",
            f"{report.start:%Y-%m-%d} to {report.end:%Y-%m-%d}",
            f"Workouts: {s.count}",
            f"Calories: {s.total_calories:.0f} kcal",
            f"Distance: {s.total_distance:.1f} km",
            f"Avg duration: {s.average_duration:.0f} min",
            f"Trend: [{trend_color}]{TREND_ARROWS[trend]} {trend.value}[/{trend_color}]",
        ]
        self.console.print(Panel("\n".join(header_lines), title="Statistics"))

        if not report.daily:
            self.console.print("[dim]No workouts in this period[/dim]")
            return

        daily_table = Table(title="Daily Totals")
        daily_table.add_column("Date", style="cyan")
        daily_table.add_column("Workouts", justify="right")
        daily_table.add_column("Duration", justify="right")
        daily_table.add_column("Calories", justify="right", style="green")
        daily_table.add_column("Distance", justify="right")

        for d in report.daily:
            daily_table.add_row(
                d.key,
                str(d.workouts),
                f"{d.duration:.0f} min",
                f"{d.calories_burned:.0f}",
                f"{d.distance:.1f} km",
            )

        self.console.print(daily_table)

        type_table = Table(title="Workout Types")
        type_table.add_column("Type", style="cyan")
        type_table.add_column("Count", justify="right")
        for workout_type, count in report.type_counts.items():
            type_table.add_row(workout_type, str(count))

        self.console.print(type_table)


class JSONFormatter:
    """Format reports as JSON for programmatic use."""

    def format(self, report: WorkoutReport) -> str:
        return json.dumps(report_to_dict(report), indent=2)


class MarkdownFormatter:
    """Format reports as Markdown for sharing."""

    def format(self, report: WorkoutReport) -> str:
        s = report.summary
        lines = [
            f"# Workout Report ({report.days} days)",
            "",
            f"**Period:** {report.start:%Y-%m-%d} to {report.end:%Y-%m-%d}",
            f"**Workouts:** {s.count}",
            f"**Calories:** {s.total_calories:.0f} kcal",
            f"**Distance:** {s.total_distance:.1f} km",
            f"**Average duration:** {s.average_duration:.0f} min",
            f"**Trend:** {report.trend.value}",
            "",
            "## Daily Totals",
            "",
            "| Date | Workouts | Duration | Calories | Distance |",
            "|------|----------|----------|----------|----------|",
        ]

        for d in report.daily:
            lines.append(
                f"| {d.key} | {d.workouts} | {d.duration:.0f} min "
                f"| {d.calories_burned:.0f} | {d.distance:.1f} km |"
            )

        if report.type_counts:
            lines.extend(["", "## Workout Types", "", "| Type | Count |", "|------|-------|"])
            for workout_type, count in report.type_counts.items():
                lines.append(f"| {workout_type} | {count} |")

        return "\n".join(lines)


def format_report(
    report: WorkoutReport,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a workout report in the specified format.

    Args:
        report: Report to format
        output_format: One of 'table', 'json', 'markdown'
        console: Rich console (for table format)

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    if output_format == "table":
        formatter = TableFormatter(console)
        formatter.format(report)
        return None
    elif output_format == "json":
        return JSONFormatter().format(report)
    elif output_format == "markdown":
        return MarkdownFormatter().format(report)
    else:
        raise ValueError(f"Unknown output format: {output_format}")


def source_label(source: WorkoutSource) -> str:
    return "Device" if source == WorkoutSource.DEVICE else "Manual"
