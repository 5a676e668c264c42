"""
Answer Grader CLI Application.

Provides a command-line interface for grading a student's answer to a
subjective question with an LLM provider.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from answer_grader.config import (
    ConfigurationError,
    check_api_key_format,
    default_base_url,
    get_settings,
)
from answer_grader.grading import GradingEngine, GradingError, PromptBuilder
from answer_grader.models import GradingRequest, GradingResult, ProviderKind

# Create Typer app
app = typer.Typer(
    name="answer-grader",
    help="Grade subjective answers on a 5-point scale with an LLM",
    add_completion=False,
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _read_text(path: Path) -> str:
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8").strip()


def _build_request(
    question_file: Path,
    reference_file: Path,
    answer_file: Path,
    criteria_file: Optional[Path],
    current_score: Optional[int] = None,
) -> GradingRequest:
    try:
        return GradingRequest(
            question_text=_read_text(question_file),
            reference_answer=_read_text(reference_file),
            student_answer=_read_text(answer_file),
            scoring_criteria=_read_text(criteria_file) if criteria_file else "",
            current_score=current_score,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid grading request:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def grade(
    question_file: Annotated[Path, typer.Argument(help="Path to the question text")],
    reference_file: Annotated[Path, typer.Argument(help="Path to the reference answer")],
    answer_file: Annotated[Path, typer.Argument(help="Path to the student answer")],
    criteria: Annotated[
        Optional[Path],
        typer.Option("--criteria", "-c", help="Path to the scoring rubric"),
    ] = None,
    current_score: Annotated[
        Optional[int],
        typer.Option("--current-score", min=1, max=5, help="Student's previous score (1-5)"),
    ] = None,
    provider: Annotated[
        Optional[ProviderKind],
        typer.Option("--provider", "-p", help="LLM provider (overrides GRADER_PROVIDER)"),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Model identifier (overrides configured model)"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Grade a student answer against a question and reference answer.

    A single request is sent to the configured LLM provider and its reply
    is normalized into a 1-5 score with an upgrade template and feedback.
    """
    _configure_logging(verbose)
    request = _build_request(question_file, reference_file, answer_file, criteria, current_score)

    try:
        engine = GradingEngine(get_settings())

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Grading answer... (this may take a moment)", total=None)
            result = asyncio.run(engine.grade(request, provider=provider, model=model))

    except ConfigurationError as e:
        console.print(f"[red]Configuration Error:[/red] {e}")
        raise typer.Exit(1)
    except GradingError as e:
        console.print(f"[red]Grading Error:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
    else:
        _display_results(result)


@app.command("check-config")
def check_config(
    provider: Annotated[
        Optional[ProviderKind],
        typer.Option("--provider", "-p", help="Provider to check (defaults to GRADER_PROVIDER)"),
    ] = None,
) -> None:
    """
    Check the provider configuration without calling the API.

    Verifies that an API key is configured and that its format matches
    the provider.
    """
    settings = get_settings()
    try:
        config = settings.provider_config(provider)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print("[bold]Answer Grader Configuration[/bold]\n")
    console.print(f"  Provider: {config.provider.value}")
    console.print(f"  Model: {config.resolved_model}")
    console.print(f"  Base URL: {config.base_url or default_base_url(config.provider)}")

    is_valid, message = check_api_key_format(config.provider, config.api_key)
    if not is_valid:
        console.print(f"\n[red]✗ {message}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[green]✓ {message}[/green]")


@app.command("show-prompt")
def show_prompt(
    question_file: Annotated[Path, typer.Argument(help="Path to the question text")],
    reference_file: Annotated[Path, typer.Argument(help="Path to the reference answer")],
    answer_file: Annotated[Path, typer.Argument(help="Path to the student answer")],
    criteria: Annotated[
        Optional[Path],
        typer.Option("--criteria", "-c", help="Path to the scoring rubric"),
    ] = None,
) -> None:
    """Print the grading prompt that would be sent, without calling the API."""
    request = _build_request(question_file, reference_file, answer_file, criteria)
    console.print(Panel(PromptBuilder.get_system_prompt(), title="System"))
    console.print(PromptBuilder.build_grading_prompt(request), markup=False, highlight=False)


def _display_results(result: GradingResult) -> None:
    """Display grading results in panels and tables."""

    score_color = "green" if result.score >= 4 else "yellow" if result.score == 3 else "red"
    console.print(
        Panel(
            f"[{score_color}][bold]{result.score} / 5[/bold] "
            f"({result.score_label.value})[/{score_color}]",
            title="Score",
        )
    )

    if result.is_wrong:
        console.print("[yellow]⚠ Added to the wrong-answer notebook for review[/yellow]")

    upgrade = result.upgrade_answer
    console.print(
        Panel(upgrade.template_answer, title=f"Upgrade Answer (target {upgrade.target_score})")
    )

    if upgrade.key_points:
        points = Table(title="Key Points")
        points.add_column("#", justify="right")
        points.add_column("Point", style="cyan")
        for i, point in enumerate(upgrade.key_points, start=1):
            points.add_row(str(i), point)
        console.print(points)

    table = Table(title="Feedback")
    table.add_column("Kind", style="cyan")
    table.add_column("Comment")

    for kind, items in (
        ("Strength", result.feedback.strengths),
        ("Weakness", result.feedback.weaknesses),
        ("Suggestion", result.feedback.suggestions),
    ):
        for item in items:
            table.add_row(kind, item)

    console.print(table)

    if result.encouragement:
        enc = result.encouragement
        console.print(Panel(f"{enc.message}\n{enc.tip}\n{enc.progress}", title="Encouragement"))


if __name__ == "__main__":
    app()
