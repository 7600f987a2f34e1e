"""
Fraction Trainer CLI - Exact fraction arithmetic and adaptive practice

Usage:
    fraction-trainer calc 1/3 + 1/4        # Step-by-step calculation
    fraction-trainer compare 2/3 3/5       # Compare two fractions
    fraction-trainer order 1/2 2/5 3/4     # Order smallest to largest
    fraction-trainer practice -s addition  # Adaptive practice session
    fraction-trainer progress              # Mastery report
    fraction-trainer problems              # List the problem bank

Negative fractions must follow "--", e.g. fraction-trainer calc -- -1/2 + 3/4
"""

from __future__ import annotations

import sys
from typing import Annotated

import typer
from loguru import logger
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from config import Settings, get_settings
from src.adaptive import ProblemBank, ProblemSelector, load_default_bank
from src.arithmetic import (
    DerivationStep,
    OperationKind,
    calculate,
    explain_comparison,
    is_consistent,
    order_ascending,
    order_descending,
    to_mixed,
    worked_steps,
)
from src.core import (
    DivisionByZero,
    Fraction,
    InvalidFraction,
    MasteryRecord,
    NoMatchingProblem,
    Problem,
    SkillMode,
)
from src.core.mastery import format_progress_bar
from src.core.problem import ExpectedAnswer
from src.learning import MasteryTracker, ProgressStore, next_difficulty, weakest_skills
from src.validation import ValidationResult, feedback_for, normalize_answer, validate

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="fraction-trainer",
    help="Fraction Trainer - exact fraction arithmetic and adaptive practice",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}"

# Inputs recognized at the practice prompt
HINT_INPUTS = {"h", "hint"}
SOLUTION_INPUTS = {"s", "solution"}
QUIT_INPUTS = {"q", "quit"}


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    """Route loguru output to stderr (and the configured log file)."""
    level = "DEBUG" if verbose else settings.log_level
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    if settings.log_file:
        logger.add(settings.log_file, level=level, rotation="1 MB")


def _fail(message: str) -> None:
    console.print(f"[red]✗[/red] {message}")
    raise typer.Exit(code=1)


def _parse_fraction(text: str) -> Fraction:
    try:
        return Fraction.parse(text)
    except InvalidFraction as e:
        _fail(str(e))


def _parse_skill(text: str | None) -> SkillMode | None:
    if text is None:
        return None
    for mode in SkillMode:
        if text.lower() in (mode.value.lower(), mode.name.lower()):
            return mode
    valid = ", ".join(mode.value for mode in SkillMode)
    _fail(f"Unknown skill {text!r}. Choose one of: {valid}")


def format_answer(answer: ExpectedAnswer | None) -> str:
    """Display form of any answer shape."""
    if answer is None:
        return "-"
    if isinstance(answer, Fraction):
        return str(answer)
    if isinstance(answer, tuple):
        return ", ".join(str(f) for f in answer)
    return answer.value


def _print_steps(steps: tuple[DerivationStep, ...]) -> None:
    if not steps:
        return
    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 1))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Step")
    table.add_column("Result", style="cyan")
    for i, step in enumerate(steps, 1):
        table.add_row(str(i), step.description, ", ".join(str(f) for f in step.fractions))
    console.print(table)


def _load_bank(settings: Settings) -> ProblemBank:
    if settings.problem_bank_file:
        try:
            return ProblemBank.from_file(settings.problem_bank_file)
        except (OSError, ValueError) as e:
            _fail(f"Cannot load problem bank {settings.problem_bank_file}: {e}")
    return load_default_bank()


# =============================================================================
# Calculation Commands
# =============================================================================


@app.command()
def calc(
    left: Annotated[str, typer.Argument(help="Left operand, e.g. 1/3 or '2 1/3'")],
    operator: Annotated[str, typer.Argument(help="One of + - x * / ÷")],
    right: Annotated[str, typer.Argument(help="Right operand")],
) -> None:
    """
    Calculate with two fractions and show every step.

    Examples:
        fraction-trainer calc 1/3 + 1/4
        fraction-trainer calc "2 1/3" - 3/4
        fraction-trainer calc 3/4 / 1/2
    """
    try:
        kind = OperationKind.from_symbol(operator)
    except ValueError as e:
        _fail(str(e))

    a = _parse_fraction(left)
    b = _parse_fraction(right)
    try:
        result = calculate(kind, a, b)
    except DivisionByZero as e:
        _fail(str(e))

    console.print(f"[bold]{a} {kind.symbol} {b}[/bold]")
    _print_steps(result.steps)

    answer = str(result.result)
    mixed = to_mixed(result.result)
    if mixed != result.result:
        answer += f"  [dim](= {mixed})[/dim]"
    console.print(f"[bold green]= {answer}[/bold green]")


@app.command()
def compare(
    left: Annotated[str, typer.Argument(help="First fraction")],
    right: Annotated[str, typer.Argument(help="Second fraction")],
) -> None:
    """
    Compare two fractions.

    Examples:
        fraction-trainer compare 2/3 3/5
    """
    a = _parse_fraction(left)
    b = _parse_fraction(right)
    result = explain_comparison(a, b)
    _print_steps(result.steps)
    console.print(f"[bold green]{a} {result.symbol.value} {b}[/bold green]")


@app.command()
def order(
    fractions: Annotated[list[str], typer.Argument(help="Fractions to order")],
    descending: Annotated[
        bool, typer.Option("--descending", "-d", help="Largest first")
    ] = False,
) -> None:
    """
    Order fractions from smallest to largest.

    Examples:
        fraction-trainer order 1/2 2/5 3/4
        fraction-trainer order 1/2 2/5 3/4 --descending
    """
    parsed = [_parse_fraction(text) for text in fractions]
    ordered = order_descending(parsed) if descending else order_ascending(parsed)
    separator = " ≥ " if descending else " ≤ "
    console.print(f"[bold green]{separator.join(str(f) for f in ordered)}[/bold green]")


# =============================================================================
# Practice Commands
# =============================================================================


def _present(problem: Problem, number: int, total: int, difficulty: int) -> None:
    panel = Panel(
        problem.question or ", ".join(str(f) for f in problem.operands),
        title=f"[bold cyan]{problem.skill_mode.display_name.upper()} · {number}/{total}[/bold cyan]",
        subtitle=f"[dim]difficulty {problem.difficulty} (target {difficulty})[/dim]",
        border_style="cyan",
        box=box.HEAVY,
        padding=(1, 2),
    )
    console.print(panel)


def _ask(problem: Problem) -> tuple[str | None, int, bool]:
    """
    Prompt until the learner answers, gives up or quits.

    Returns:
        (answer text or None, hints used, quit requested)
    """
    console.print("[dim]'h'=hint, 's'=show solution, 'q'=quit[/dim]")
    hints_used = 0
    while True:
        text = Prompt.ask("[bold]Answer[/bold]").strip()
        lowered = text.lower()

        if lowered in QUIT_INPUTS:
            return None, hints_used, True

        if lowered in HINT_INPUTS:
            if hints_used < len(problem.hints):
                hints_used += 1
                console.print(f"[yellow]Hint {hints_used}:[/yellow] {problem.hints[hints_used - 1]}")
            else:
                console.print("[dim]No more hints available[/dim]")
            continue

        if lowered in SOLUTION_INPUTS:
            return None, hints_used, False

        if not text:
            continue
        return text, hints_used, False


def _show_solution(problem: Problem) -> None:
    _print_steps(worked_steps(problem))
    console.print(f"[bold]Answer:[/bold] {format_answer(problem.expected_answer)}")


def _next_problem(
    selector: ProblemSelector,
    skill_mode: SkillMode | None,
    difficulty: int,
    seen: set[str],
) -> Problem | None:
    """Select adaptively, broadening to every skill before giving up."""
    try:
        return selector.select_adaptive(skill_mode, difficulty, exclude_ids=seen)
    except NoMatchingProblem:
        if skill_mode is None:
            return None
    logger.debug(f"No {skill_mode.value} problems left, broadening to all skills")
    try:
        return selector.select_adaptive(None, difficulty, exclude_ids=seen)
    except NoMatchingProblem:
        return None


@app.command()
def practice(
    skill: Annotated[
        str | None, typer.Option("--skill", "-s", help="Skill to practice (default: any)")
    ] = None,
    difficulty: Annotated[
        int | None,
        typer.Option("--difficulty", "-d", min=1, max=5, help="Starting difficulty 1-5"),
    ] = None,
    learner: Annotated[
        str | None, typer.Option("--learner", "-l", help="Learner id")
    ] = None,
    count: Annotated[
        int, typer.Option("--count", "-n", min=1, help="Number of problems")
    ] = 5,
    seed: Annotated[
        int | None, typer.Option("--seed", help="Random seed for problem selection")
    ] = None,
) -> None:
    """
    Start an adaptive practice session.

    Difficulty moves up or down after each answer according to the
    learner's recent accuracy and hint use. Progress is saved after
    every answer.

    Examples:
        fraction-trainer practice
        fraction-trainer practice --skill addition --count 3
        fraction-trainer practice -l alice -d 3
    """
    settings = get_settings()
    skill_mode = _parse_skill(skill)
    learner_id = learner or settings.default_learner

    store = ProgressStore.from_settings(settings)
    tracker = MasteryTracker.from_settings(settings)
    selector = ProblemSelector.with_seed(
        _load_bank(settings), seed if seed is not None else settings.random_seed
    )

    record = store.load(learner_id)
    current = difficulty or settings.default_difficulty
    seen: set[str] = set()
    answered = correct = 0

    for number in range(1, count + 1):
        problem = _next_problem(selector, skill_mode, current, seen)
        if problem is None:
            console.print("[yellow]Nothing left to practice.[/yellow]")
            break
        seen.add(problem.id)

        _present(problem, number, count, current)
        text, hints_used, quit_requested = _ask(problem)
        if quit_requested:
            break

        if text is None:
            _show_solution(problem)
            result = ValidationResult(
                is_correct=False,
                mistake_kind=None,
                normalized_user_answer=None,
                normalized_expected_answer=normalize_answer(problem.expected_answer),
            )
        else:
            result = validate(problem, text)
            feedback = feedback_for(result, attempt=answered)
            if result.is_correct:
                console.print(f"[bold green]✓ {feedback.message}[/bold green]")
            else:
                console.print(f"[bold red]✗ {feedback.title}[/bold red] {feedback.message}")
                console.print(f"  [dim]{feedback.suggestion}[/dim]")
                console.print(f"  Correct answer: [cyan]{format_answer(problem.expected_answer)}[/cyan]")

        answered += 1
        correct += int(result.is_correct)
        record = store.save(
            tracker.fold(record, problem.skill_mode, result, hints_used, problem.difficulty)
        )
        current = next_difficulty(current, tracker.difficulty_signal(record, problem.skill_mode))

    if answered:
        console.print(
            Panel(
                f"Correct: [green]{correct}[/green]/{answered}\n"
                f"Streak: {record.current_streak} (best {record.best_streak})\n"
                f"Overall mastery: {record.overall_mastery:.0f}%",
                title="[bold]Session complete[/bold]",
                border_style="green",
            )
        )


# =============================================================================
# Report Commands
# =============================================================================


def _progress_table(record: MasteryRecord, tracker: MasteryTracker) -> Table:
    table = Table(title=f"Mastery · {record.learner_id}", box=box.ROUNDED)
    table.add_column("Skill")
    table.add_column("Attempts", justify="right")
    table.add_column("Accuracy", justify="right")
    table.add_column("Mastery")
    table.add_column("Level")
    table.add_column("Signal", justify="center")
    table.add_column("Top mistake", style="dim")

    for mode in SkillMode:
        progress = record.skill(mode)
        level = progress.level
        if progress.attempts:
            accuracy = f"{progress.accuracy:.0f}%"
            signal = tracker.difficulty_signal(record, mode).arrow
        else:
            accuracy = signal = "-"
        table.add_row(
            mode.display_name,
            str(progress.attempts),
            accuracy,
            f"{format_progress_bar(progress.mastery_score)} {progress.mastery_score:.0f}",
            f"[{level.color}]{level.emoji} {level.display_name}[/{level.color}]",
            signal,
            progress.top_mistake or "-",
        )
    return table


def _difficulty_table(record: MasteryRecord) -> Table:
    table = Table(title="By difficulty", box=box.ROUNDED)
    table.add_column("Difficulty", justify="center")
    table.add_column("Attempts", justify="right")
    table.add_column("Correct", justify="right")
    table.add_column("Accuracy", justify="right")

    for level, stats in record.by_difficulty.items():
        table.add_row(
            str(level),
            str(stats.attempts),
            str(stats.correct),
            f"{stats.accuracy:.0f}%",
        )
    return table


@app.command()
def progress(
    learner: Annotated[
        str | None, typer.Option("--learner", "-l", help="Learner id")
    ] = None,
) -> None:
    """
    Show per-skill mastery for a learner.

    Examples:
        fraction-trainer progress
        fraction-trainer progress -l alice
    """
    settings = get_settings()
    learner_id = learner or settings.default_learner
    record = ProgressStore.from_settings(settings).load(learner_id)
    tracker = MasteryTracker.from_settings(settings)

    if record.total_attempts == 0:
        console.print(f"[dim]No practice recorded for {learner_id} yet.[/dim]")
        return

    console.print(_progress_table(record, tracker))
    if record.by_difficulty:
        console.print(_difficulty_table(record))
    level = record.level
    summary = (
        f"Overall mastery: [{level.color}]{record.overall_mastery:.0f}% "
        f"({level.display_name})[/{level.color}]\n"
        f"Answered: {record.total_correct}/{record.total_attempts} correct\n"
        f"Streak: {record.current_streak} correct in a row (best {record.best_streak})"
    )
    weak = weakest_skills(record)
    if weak:
        summary += "\nFocus next on: " + ", ".join(mode.display_name for mode in weak)
    console.print(Panel(summary, border_style="cyan"))


@app.command()
def problems(
    skill: Annotated[
        str | None, typer.Option("--skill", "-s", help="Only this skill")
    ] = None,
    check: Annotated[
        bool, typer.Option("--check", help="Verify stored answers against the solver")
    ] = False,
) -> None:
    """
    List the problem bank.

    Examples:
        fraction-trainer problems
        fraction-trainer problems --skill comparison --check
    """
    settings = get_settings()
    bank = _load_bank(settings)
    skill_mode = _parse_skill(skill)

    table = Table(title=f"Problem bank v{bank.version}", box=box.ROUNDED)
    table.add_column("ID", style="cyan")
    table.add_column("Skill")
    table.add_column("Type")
    table.add_column("Difficulty", justify="center")
    table.add_column("Answer")
    if check:
        table.add_column("Check", justify="center")

    mismatches = 0
    for problem in bank.query(skill_mode=skill_mode):
        row = [
            problem.id,
            problem.skill_mode.display_name,
            problem.problem_type.value,
            str(problem.difficulty),
            format_answer(problem.expected_answer),
        ]
        if check:
            try:
                ok = is_consistent(problem)
                mark = "[green]✓[/green]" if ok else "[red]✗[/red]"
            except DivisionByZero as e:
                logger.warning(f"Problem {problem.id} cannot be solved: {e}")
                ok = False
                mark = "[red]✗ ÷0[/red]"
            mismatches += 0 if ok else 1
            row.append(mark)
        table.add_row(*row)

    console.print(table)
    if mismatches:
        _fail(f"{mismatches} problem(s) disagree with the solver")


# =============================================================================
# Entry Point
# =============================================================================


@app.callback()
def callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Debug logging")
    ] = False,
) -> None:
    """
    Fraction Trainer - exact fraction arithmetic and adaptive practice

    \b
    Quick Start:
      fraction-trainer calc 1/3 + 1/4
      fraction-trainer practice --skill addition
      fraction-trainer progress
    """
    configure_logging(get_settings(), verbose)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
