"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from neofit.avatar import body_scale_for, compute_body_scale
from neofit.config import get_settings
from neofit.db import SnapshotRepository, get_db
from neofit.errors import NeofitError
from neofit.export.formatters import format_report, source_label, workouts_to_csv
from neofit.integrations import JSONFileDeviceSource, sync_device_workouts
from neofit.profiles.metrics import compute_metrics
from neofit.reporting import build_report, filter_recent
from neofit.tracking.models import BodyType, DailyStats, Gender
from neofit.tracking.serialization import serialize_profile
from neofit.tracking.store import Store

app = typer.Typer(
    help="Local fitness tracker: body metrics, workouts and avatar scaling",
    no_args_is_help=True,
)
console = Console()

# Subcommand groups
profile_app = typer.Typer(help="Show and edit the body profile")
weight_app = typer.Typer(help="Log weight measurements")
workout_app = typer.Typer(help="Log and import workouts")
daily_app = typer.Typer(help="Log daily calorie intake and expenditure")

app.add_typer(profile_app, name="profile")
app.add_typer(weight_app, name="weight")
app.add_typer(workout_app, name="workout")
app.add_typer(daily_app, name="daily")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """neofit command line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def open_store() -> Store:
    """Load the persisted store and save it again after every change."""
    settings = get_settings()
    repo = SnapshotRepository(get_db(), key=settings.storage.key)
    return repo.open()


def fail(command: str, message: str, json_output: bool) -> None:
    """Report an error and exit with status 1."""
    if json_output:
        output_json({"success": False, "command": command, "errors": [message]})
    else:
        console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def parse_day(value: Optional[str]) -> date:
    """Parse YYYY-MM-DD, defaulting to today."""
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date '{value}', expected YYYY-MM-DD") from None


def parse_timestamp(value: Optional[str]) -> datetime:
    """Parse an ISO date or date-time, defaulting to now."""
    if value is None:
        return datetime.now()
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(
            f"Invalid date '{value}', expected YYYY-MM-DD or YYYY-MM-DDTHH:MM"
        ) from None


# ============================================================================
# Profile Commands
# ============================================================================


@profile_app.command("show")
def profile_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the body profile."""
    store = open_store()
    profile = store.get_profile()
    latest = store.latest_weight()

    if json_output:
        output_json({
            "success": True,
            "command": "profile show",
            "data": {**serialize_profile(profile), "latest_weight": latest},
            "human_summary": (
                f"{profile.gender.value}, {profile.age}y, {profile.height:g}cm, {latest:g}kg"
            ),
        })
        return

    console.print("[bold]Body Profile[/bold]")
    console.print(f"  Gender: {profile.gender.value}")
    console.print(f"  Age: {profile.age}")
    console.print(f"  Height: {profile.height:g} cm")
    console.print(f"  Weight: {latest:.1f} kg")
    if latest != profile.weight:
        console.print(f"  [dim]Profile weight: {profile.weight:.1f} kg[/dim]")
    console.print(f"  Target weight: {profile.target_weight:.1f} kg")
    console.print(f"  Body fat: {profile.body_fat:g} %")
    console.print(f"  Body type: {profile.body_type.value}")


@profile_app.command("set")
def profile_set(
    gender: Optional[str] = typer.Option(None, "--gender", help="male or female"),
    age: Optional[int] = typer.Option(None, "--age", help="Age in years"),
    height: Optional[float] = typer.Option(None, "--height", help="Height in cm"),
    weight: Optional[float] = typer.Option(None, "--weight", help="Baseline weight in kg"),
    target_weight: Optional[float] = typer.Option(
        None, "--target-weight", help="Target weight in kg"
    ),
    body_fat: Optional[float] = typer.Option(None, "--body-fat", help="Body fat in %"),
    body_type: Optional[str] = typer.Option(
        None, "--body-type", help="ectomorph, mesomorph or endomorph"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Update profile fields; omitted fields keep their value."""
    changes: dict = {}
    try:
        if gender is not None:
            changes["gender"] = Gender(gender.lower())
        if body_type is not None:
            changes["body_type"] = BodyType(body_type.lower())
    except ValueError as e:
        fail("profile set", str(e), json_output)
    if age is not None:
        changes["age"] = age
    if height is not None:
        changes["height"] = height
    if weight is not None:
        changes["weight"] = weight
    if target_weight is not None:
        changes["target_weight"] = target_weight
    if body_fat is not None:
        changes["body_fat"] = body_fat

    if not changes:
        fail("profile set", "Nothing to update", json_output)

    store = open_store()
    profile = store.set_profile(**changes)

    if json_output:
        output_json({
            "success": True,
            "command": "profile set",
            "data": serialize_profile(profile),
            "human_summary": f"Updated {', '.join(sorted(changes))}",
        })
    else:
        console.print(f"[green]Profile updated:[/green] {', '.join(sorted(changes))}")


# ============================================================================
# Weight Commands
# ============================================================================


@weight_app.command("add")
def weight_add(
    weight: float = typer.Argument(..., help="Weight in kg"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    note: Optional[str] = typer.Option(None, "--note", "-n", help="Optional note"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Add a weight measurement."""
    measured_at = parse_day(date_str)
    store = open_store()

    try:
        entry = store.add_weight_entry(measured_at, weight, note)
    except NeofitError as e:
        fail("weight add", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "weight add",
            "data": {
                "id": entry.id,
                "weight": entry.weight,
                "date": entry.date.isoformat(),
                "latest_weight": store.latest_weight(),
            },
            "human_summary": f"Logged {weight:.1f} kg on {measured_at}",
        })
    else:
        console.print(f"[green]Logged:[/green] {weight:.1f} kg on {measured_at}")
        console.print(f"[blue]Current weight:[/blue] {store.latest_weight():.1f} kg")


@weight_app.command("list")
def weight_list(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List the weight log, newest first."""
    store = open_store()
    entries = store.weight_entries

    if json_output:
        output_json({
            "success": True,
            "command": "weight list",
            "data": {
                "entries": [
                    {"id": e.id, "date": e.date.isoformat(), "weight": e.weight, "note": e.note}
                    for e in entries
                ]
            },
            "human_summary": f"{len(entries)} weight entries",
        })
        return

    if not entries:
        console.print("No weight entries found")
        return

    target = store.get_profile().target_weight
    table = Table(title="Weight History")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("To target", justify="right", style="blue")
    table.add_column("Note")

    for entry in entries:
        table.add_row(
            entry.id,
            entry.date.isoformat(),
            f"{entry.weight:.1f}",
            f"{entry.weight - target:+.1f}",
            entry.note or "",
        )

    console.print(table)


@weight_app.command("delete")
def weight_delete(
    entry_id: str = typer.Argument(..., help="Entry ID (see 'weight list')"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Delete a weight entry."""
    store = open_store()
    deleted = store.delete_weight_entry(entry_id)

    if json_output:
        output_json({
            "success": True,
            "command": "weight delete",
            "data": {"deleted": deleted, "latest_weight": store.latest_weight()},
            "human_summary": f"Deleted entry {entry_id}" if deleted else f"No entry {entry_id}",
        })
        return

    if not deleted:
        console.print(f"[yellow]No weight entry with ID {entry_id}[/yellow]")
    console.print(f"[green]Current weight:[/green] {store.latest_weight():.1f} kg")


# ============================================================================
# Workout Commands
# ============================================================================


@workout_app.command("add")
def workout_add(
    workout_type: str = typer.Argument(..., help="Workout type, e.g. Running"),
    duration: float = typer.Option(..., "--duration", help="Duration in minutes"),
    calories: float = typer.Option(..., "--calories", help="Calories burned (kcal)"),
    distance: Optional[float] = typer.Option(None, "--distance", help="Distance in km"),
    heart_rate: Optional[int] = typer.Option(None, "--heart-rate", help="Average heart rate"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date or date-time (default: now)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a workout."""
    performed_at = parse_timestamp(date_str)
    store = open_store()

    try:
        workout = store.add_workout(
            type=workout_type,
            date=performed_at,
            duration=duration,
            calories_burned=calories,
            distance=distance,
            heart_rate=heart_rate,
        )
    except NeofitError as e:
        fail("workout add", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "workout add",
            "data": {"id": workout.id, "date": workout.date.isoformat()},
            "human_summary": f"Logged {workout_type}: {duration:g} min, {calories:g} kcal",
        })
    else:
        console.print(
            f"[green]Logged:[/green] {workout_type} - {duration:g} min, {calories:g} kcal"
        )


@workout_app.command("list")
def workout_list(
    days: int = typer.Option(30, "--days", "-d", help="Number of days to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List recent workouts, newest first."""
    store = open_store()
    try:
        workouts = filter_recent(store.workouts, days)
    except NeofitError as e:
        fail("workout list", str(e), json_output)
    workouts.sort(key=lambda w: w.date, reverse=True)

    if json_output:
        output_json({
            "success": True,
            "command": "workout list",
            "data": {
                "workouts": [
                    {
                        "id": w.id,
                        "type": w.type,
                        "date": w.date.isoformat(),
                        "duration": w.duration,
                        "calories_burned": w.calories_burned,
                        "distance": w.distance,
                        "heart_rate": w.heart_rate,
                        "source": w.source.value,
                    }
                    for w in workouts
                ]
            },
            "human_summary": f"{len(workouts)} workouts in the last {days} days",
        })
        return

    if not workouts:
        console.print("No workouts found")
        return

    table = Table(title=f"Workouts (last {days} days)")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Duration", justify="right")
    table.add_column("Calories", justify="right", style="green")
    table.add_column("Distance", justify="right")
    table.add_column("HR", justify="right")
    table.add_column("Source")

    for w in workouts:
        table.add_row(
            w.id,
            w.date.strftime("%Y-%m-%d %H:%M"),
            w.type,
            f"{w.duration:g} min",
            f"{w.calories_burned:g}",
            f"{w.distance:.1f} km" if w.distance is not None else "-",
            f"{w.heart_rate} bpm" if w.heart_rate is not None else "-",
            source_label(w.source),
        )

    console.print(table)


@workout_app.command("delete")
def workout_delete(
    workout_id: str = typer.Argument(..., help="Workout ID (see 'workout list')"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Delete a workout."""
    store = open_store()
    deleted = store.delete_workout(workout_id)

    if json_output:
        output_json({
            "success": True,
            "command": "workout delete",
            "data": {"deleted": deleted, "remaining": len(store.workouts)},
            "human_summary": f"Deleted workout {workout_id}" if deleted else f"No workout {workout_id}",
        })
        return

    if not deleted:
        console.print(f"[yellow]No workout with ID {workout_id}[/yellow]")
    console.print(f"[green]Workouts remaining:[/green] {len(store.workouts)}")


@workout_app.command("import")
def workout_import(
    path: Path = typer.Argument(..., help="JSON file exported from a device"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Import device workouts from a JSON file."""
    if not path.exists():
        fail("workout import", f"File not found: {path}", json_output)

    store = open_store()
    try:
        added = sync_device_workouts(store, JSONFileDeviceSource(path))
    except (NeofitError, json.JSONDecodeError) as e:
        fail("workout import", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "workout import",
            "data": {"imported": len(added), "ids": [w.id for w in added]},
            "human_summary": f"Imported {len(added)} workouts",
        })
    else:
        console.print(f"[green]Imported {len(added)} workouts[/green] from {path.name}")


# ============================================================================
# Daily Stats Commands
# ============================================================================


@daily_app.command("log")
def daily_log(
    consumed: float = typer.Option(..., "--consumed", help="Calories consumed (kcal)"),
    burned: float = typer.Option(0.0, "--burned", help="Calories burned (kcal)"),
    steps: Optional[int] = typer.Option(None, "--steps", help="Step count"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Record calories for a day, replacing any earlier record for that day."""
    day = parse_day(date_str)
    store = open_store()
    stats = store.add_daily_stats(
        DailyStats(date=day, calories_consumed=consumed, calories_burned=burned, steps=steps)
    )

    if json_output:
        output_json({
            "success": True,
            "command": "daily log",
            "data": {"date": day.isoformat(), "balance": stats.calorie_balance},
            "human_summary": f"{day}: balance {stats.calorie_balance:+.0f} kcal",
        })
    else:
        console.print(f"[green]{day}:[/green] balance {stats.calorie_balance:+.0f} kcal")


# ============================================================================
# Metrics, Avatar and Reports
# ============================================================================


@app.command()
def stats(
    activity: Optional[str] = typer.Option(
        None, "--activity", "-a",
        help="sedentary, light, moderate, active, very_active (default from config)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show BMI, body fat, BMR, TDEE and monthly totals."""
    level = activity or get_settings().defaults.activity_level
    store = open_store()

    try:
        metrics = compute_metrics(store, level)
    except NeofitError as e:
        fail("stats", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "stats",
            "data": metrics.to_dict(),
            "human_summary": (
                f"BMI {metrics.bmi:.1f}, TDEE {metrics.tdee:.0f} kcal/day "
                f"({metrics.activity_level.value})"
            ),
        })
        return

    table = Table(title="Body Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Current weight", f"{metrics.latest_weight:.1f} kg")
    table.add_row("Target weight", f"{metrics.target_weight:.1f} kg")
    table.add_row("To target", f"{metrics.weight_to_target:+.1f} kg")
    table.add_row("BMI", f"{metrics.bmi:.1f} ({metrics.bmi_category.value})")
    table.add_row("Body fat (est.)", f"{metrics.body_fat_estimate:.1f} %")
    table.add_row("BMR", f"{metrics.bmr:.0f} kcal/day")
    table.add_row(f"TDEE ({metrics.activity_level.value})", f"{metrics.tdee:.0f} kcal/day")
    table.add_row("Burned this month", f"{metrics.monthly_calories_burned:.0f} kcal")
    table.add_row("Distance this month", f"{metrics.monthly_distance:.1f} km")
    table.add_row("Balance today", f"{metrics.daily_calorie_balance:+.0f} kcal")

    console.print(table)


@app.command()
def avatar(
    profile_weight: bool = typer.Option(
        False, "--profile-weight", help="Use the profile weight instead of the weight log"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the avatar scale factors for the current profile."""
    store = open_store()
    if profile_weight:
        scale = compute_body_scale(store.get_profile())
    else:
        scale = body_scale_for(store)

    if json_output:
        output_json({
            "success": True,
            "command": "avatar",
            "data": scale.to_dict(),
            "human_summary": f"height {scale.height:.3f}, width {scale.width:.3f}",
        })
        return

    lines = [
        f"Height:     {scale.height:.3f}",
        f"Width:      {scale.width:.3f}",
        f"Muscle:     {scale.muscle:.3f}",
        f"Definition: {scale.definition:.3f}",
        f"[dim]BMI used:   {scale.bmi:.1f}[/dim]",
    ]
    console.print(Panel("\n".join(lines), title="Avatar Scale"))


@app.command()
def report(
    days: Optional[int] = typer.Option(
        None, "--days", "-d", help="Trailing window in days (default from config)"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="table, json or markdown (default from config)"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
) -> None:
    """Workout statistics for a trailing window: totals, daily sums, trend."""
    settings = get_settings()
    days = days if days is not None else settings.defaults.report_days
    output_format = output_format or settings.defaults.output_format
    if output_format not in ("table", "json", "markdown"):
        fail("report", f"Unknown output format: {output_format}", False)

    store = open_store()
    try:
        workout_report = build_report(store, days)
    except NeofitError as e:
        fail("report", str(e), output_format == "json")

    if output_format == "table" and output is not None:
        output_format = "markdown"

    text = format_report(workout_report, output_format, console)
    if text is None:
        return
    if output:
        output.write_text(text)
        console.print(f"[green]Report written to {output}[/green]")
    else:
        print(text)


@app.command("export")
def export_workouts(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="CSV file to write"),
    days: Optional[int] = typer.Option(None, "--days", "-d", help="Only the last N days"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Export workouts as CSV."""
    store = open_store()
    workouts = store.workouts
    if days is not None:
        try:
            workouts = filter_recent(workouts, days)
        except NeofitError as e:
            fail("export", str(e), json_output)
    workouts.sort(key=lambda w: w.date)

    text = workouts_to_csv(workouts)
    if output:
        output.write_text(text)

    if json_output:
        data = {"count": len(workouts), "output": str(output) if output else None}
        if not output:
            data["csv"] = text
        output_json({
            "success": True,
            "command": "export",
            "data": data,
            "human_summary": f"Exported {len(workouts)} workouts",
        })
    elif output:
        console.print(f"[green]Exported {len(workouts)} workouts to {output}[/green]")
    else:
        print(text, end="")


if __name__ == "__main__":
    app()
