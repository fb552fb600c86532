"""
assignsim CLI - Classroom simulation for assignments.

Runs a roster of synthetic learner personas through an assignment's
problem sequence and reports how the class is likely to fare.

Usage:
    assignsim simulate assignment.json                  # Catalog roster
    assignsim simulate assignment.json --roster standard --seed 7
    assignsim simulate assignment.json --json-out result.json --csv-out students.csv
    assignsim personas                                  # List preset personas
    assignsim personas --generated --count 12 --seed 3  # Preview a generated roster
    assignsim overlays assignment.json                  # Explain strategic overlays
"""

from __future__ import annotations

import json
import random
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from assignsim.cli.loader import AssignmentFile, load_assignment
from assignsim.core.models import CognitiveLevel, LearnerPersona
from assignsim.core.validation import SimulationInputError
from assignsim.export import write_problems_csv, write_result_json, write_students_csv
from assignsim.personas import (
    PersonaGenerator,
    assign_overlays,
    explain_overlays,
    get_accessibility_personas,
    get_all_personas,
    get_standard_personas,
)
from assignsim.simulation import (
    ClassroomSimulationResult,
    ClassroomSimulator,
    LoggingObserver,
    SimulationConfig,
)
from config import Settings, get_settings

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="assignsim",
    help="Assignment simulation - predict how a classroom of learner personas will fare",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}"


class RosterSource(str, Enum):
    CATALOG = "catalog"
    STANDARD = "standard"
    ACCESSIBILITY = "accessibility"
    GENERATED = "generated"


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    """Route loguru output to stderr (and the configured log file, if any)."""
    level = "DEBUG" if verbose else settings.log_level
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    if settings.log_file:
        logger.add(settings.log_file, level=level, rotation="10 MB")


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """
    Assignment simulation engine.

    Load an assignment JSON file and run it against a roster of personas.
    """
    configure_logging(get_settings(), verbose)


def _load_or_exit(path: Path) -> AssignmentFile:
    try:
        return load_assignment(path)
    except FileNotFoundError:
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {path}: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]Invalid assignment file {path}:[/red]\n{escape(str(e))}")
        raise typer.Exit(1)


def build_roster(
    source: RosterSource | None,
    assignment: AssignmentFile,
    count: int | None,
    seed: int | None,
) -> list[LearnerPersona]:
    """
    Pick the personas to simulate.

    With no explicit source, a roster embedded in the assignment file wins;
    otherwise the full preset catalog is used.
    """
    if source is None:
        if assignment.personas:
            return list(assignment.personas)
        source = RosterSource.CATALOG

    if source is RosterSource.STANDARD:
        return get_standard_personas()
    if source is RosterSource.ACCESSIBILITY:
        return get_accessibility_personas()
    if source is RosterSource.GENERATED:
        generator = PersonaGenerator(random.Random(seed))
        if count is None:
            return generator.generate_classroom()
        return generator.generate_custom_classroom(count)
    return get_all_personas()


# =============================================================================
# Display
# =============================================================================


def _print_students(result: ClassroomSimulationResult) -> None:
    table = Table(title="Student Outcomes")
    table.add_column("Student", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Grade", justify="center")
    table.add_column("Time (min)", justify="right")
    table.add_column("Engagement", style="white")
    table.add_column("Peak Fatigue", justify="right")
    table.add_column("Risk", style="red")

    for student in result.student_results:
        grade = student.estimated_grade
        table.add_row(
            student.display_name or student.student_id,
            f"{student.estimated_score_percent:.0f}%",
            f"[{grade.color}]{grade.value}[/{grade.color}]",
            str(student.total_time_minutes),
            student.engagement_trajectory.trend.value,
            f"{student.fatigue_trajectory.peak:.2f}",
            "; ".join(student.risk_factors) if student.at_risk else "-",
        )
    console.print(table)


def _print_summary(result: ClassroomSimulationResult) -> None:
    table = Table(title=f"Classroom Summary: {result.assignment_id}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Students", str(result.student_count))
    table.add_row("Problems", str(result.problem_count))
    table.add_row("Average Score", f"{result.average_score}%")
    table.add_row("Average Time", f"{result.average_time_minutes} min")
    table.add_row("Completion Rate", f"{result.completion_rate}%")
    table.add_row("At Risk", str(result.at_risk_student_count))
    table.add_row(
        "Common Confusion",
        ", ".join(result.common_confusion_points) or "-",
    )
    levels = [(CognitiveLevel.from_value(name), percent) for name, percent in result.bloom_coverage.items()]
    coverage = ", ".join(
        f"[{level.color}]{level.value}[/{level.color}] {percent:.0f}%"
        for level, percent in levels
        if percent
    )
    table.add_row("Bloom Coverage", coverage)
    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")


# =============================================================================
# Commands
# =============================================================================


@app.command()
def simulate(
    path: Annotated[Path, typer.Argument(help="Assignment JSON file")],
    roster: Annotated[
        RosterSource | None,
        typer.Option("--roster", "-r", help="Persona roster (default: file roster or catalog)"),
    ] = None,
    count: Annotated[
        int | None,
        typer.Option("--count", "-n", min=1, help="Roster size for --roster generated"),
    ] = None,
    strategic_overlays: Annotated[
        bool,
        typer.Option("--strategic-overlays", help="Assign overlays from problem-set statistics"),
    ] = False,
    seed: Annotated[
        int | None, typer.Option("--seed", "-s", help="Seed for deterministic replay")
    ] = None,
    workers: Annotated[
        int | None, typer.Option("--workers", "-w", min=1, help="Worker threads")
    ] = None,
    json_out: Annotated[
        Path | None, typer.Option("--json-out", help="Write the full result as JSON")
    ] = None,
    csv_out: Annotated[
        Path | None, typer.Option("--csv-out", help="Write per-student rows as CSV")
    ] = None,
    problems_csv: Annotated[
        Path | None, typer.Option("--problems-csv", help="Write per-problem metadata as CSV")
    ] = None,
) -> None:
    """
    Simulate a classroom working through an assignment.

    Prints a per-student outcome table and the classroom summary.
    """
    settings = get_settings()
    assignment = _load_or_exit(path)

    seed = seed if seed is not None else settings.simulation_seed
    workers = workers or settings.simulation_max_workers
    count = count if count is not None else settings.persona_generation_count

    try:
        personas = build_roster(roster, assignment, count, seed)
        if strategic_overlays:
            personas = assign_overlays(personas, assignment.problems)

        simulator = ClassroomSimulator(
            config=SimulationConfig.from_settings(settings),
            rng=random.Random(seed),
            max_workers=workers,
            observer=LoggingObserver(),
        )
        result = simulator.run(assignment.problems, personas, assignment.assignment_id)
    except SimulationInputError as e:
        console.print(f"[red]Cannot simulate: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    _print_students(result)
    _print_summary(result)

    if json_out:
        write_result_json(result, json_out, assignment.problems)
        console.print(f"[green]✓[/green] Result written to {json_out}")
    if csv_out:
        write_students_csv(result, csv_out)
        console.print(f"[green]✓[/green] Student rows written to {csv_out}")
    if problems_csv:
        write_problems_csv(assignment.problems, problems_csv)
        console.print(f"[green]✓[/green] Problem rows written to {problems_csv}")


@app.command()
def personas(
    generated: Annotated[
        bool, typer.Option("--generated", "-g", help="Show a generated roster instead of presets")
    ] = False,
    count: Annotated[
        int | None, typer.Option("--count", "-n", min=1, help="Generated roster size")
    ] = None,
    seed: Annotated[int | None, typer.Option("--seed", "-s", help="Generator seed")] = None,
) -> None:
    """List learner personas with their traits and overlays."""
    if generated:
        roster = build_roster(RosterSource.GENERATED, AssignmentFile(), count, seed)
        title = f"Generated Roster ({len(roster)})"
    else:
        roster = get_all_personas()
        title = f"Persona Catalog ({len(roster)})"

    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Reading", justify="right")
    table.add_column("Quant", justify="right")
    table.add_column("Attention", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Overlays", style="yellow")
    table.add_column("Tags", style="dim")

    for persona in roster:
        traits = persona.traits
        table.add_row(
            persona.id,
            persona.label,
            f"{traits.reading:.2f}",
            f"{traits.quantitative:.2f}",
            f"{traits.attention:.2f}",
            f"{traits.confidence:.2f}",
            ", ".join(persona.overlays) or "-",
            ", ".join(persona.narrative_tags) or "-",
        )
    console.print(table)


@app.command()
def overlays(
    path: Annotated[Path, typer.Argument(help="Assignment JSON file")],
    roster: Annotated[
        RosterSource | None, typer.Option("--roster", "-r", help="Persona roster")
    ] = None,
    count: Annotated[
        int | None, typer.Option("--count", "-n", min=1, help="Roster size for generated")
    ] = None,
    seed: Annotated[int | None, typer.Option("--seed", "-s", help="Generator seed")] = None,
) -> None:
    """Explain which overlays each persona would receive for an assignment."""
    assignment = _load_or_exit(path)
    roster_personas = build_roster(roster, assignment, count, seed)

    explanations = explain_overlays(roster_personas, assignment.problems)
    applied = [e for e in explanations if e.applied_overlays]
    if not applied:
        console.print("[dim]No overlays triggered for this assignment.[/dim]")
        return

    for explanation in applied:
        console.print(
            Panel(
                "\n".join(f"• {t}" for t in explanation.triggers),
                title=f"[cyan]{explanation.display_name}[/cyan]: "
                f"{', '.join(explanation.applied_overlays)}",
                border_style="yellow",
            )
        )


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    configure_logging(get_settings())
    app()


if __name__ == "__main__":
    main()
