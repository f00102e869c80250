"""
gentle-study CLI - inspect the scheduling engine from a terminal.

A thin wrapper: every command builds engine inputs from options (or JSON
record files validated at the storage boundary), calls one engine
function, and prints the result.

Usage:
    gentle-study schedule --age 30 --chronotype morning --chronotype-score 4
    gentle-study review --interval 6 --ease 2.5 --quality 4 --policy sm2
    gentle-study attention --rt 480,510,495 --errors 0,0,1
    gentle-study fatigue --rt 900,1100,1400 --error-rates 0.1,0.2,0.3 --self-report 7
    gentle-study interleave topics.json --minutes 40 --age 30
    gentle-study feedback history.json
    gentle-study trigger --motivation 2 --ability 2 --context start
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from gentle_study.adaptive import (
    TriggerContext,
    assess_attention_span,
    assess_fatigue,
    get_adaptive_trigger,
)
from gentle_study.core.config import get_settings
from gentle_study.core.exceptions import GentleStudyError
from gentle_study.core.log import configure_logging
from gentle_study.core.models import Chronotype, LearnerProfile, ReviewItem, StudyIntensity
from gentle_study.core.schemas import load_profile, load_segment_history, load_topics
from gentle_study.profile import calculate_optimal_study_schedule
from gentle_study.study import (
    InterleaveConfig,
    InterleavingScheduler,
    ReviewContext,
    ReviewScheduler,
    analyze_effectiveness,
    get_policy,
)

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="gentle-study",
    help="Adaptive study scheduling and spaced repetition",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def _minutes_to_clock(minutes: float) -> str:
    minutes = int(round(minutes)) % (24 * 60)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_numbers(raw: str, name: str) -> list[float]:
    """Parse a comma-separated list of numbers."""
    if not raw.strip():
        return []
    try:
        return [float(part) for part in raw.split(",") if part.strip()]
    except ValueError as e:
        raise typer.BadParameter(f"{name} must be comma-separated numbers") from e


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise GentleStudyError(f"Could not read {path}: {e}") from e


def _fail(error: Exception) -> None:
    console.print(f"[red]Error:[/] {escape(str(error))}")
    raise typer.Exit(code=1)


def _profile_from_options(
    profile_file: Path | None,
    age: int,
    chronotype: Chronotype,
    chronotype_score: float,
    intensity: StudyIntensity | None,
) -> LearnerProfile:
    if profile_file is not None:
        return load_profile(_read_json(profile_file))
    return LearnerProfile(
        id="cli",
        age=age,
        chronotype=chronotype,
        chronotype_score=chronotype_score,
        study_intensity=intensity,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show engine debug logging")
    ] = False,
) -> None:
    """Adaptive study scheduling and spaced repetition."""
    configure_logging("DEBUG" if verbose else get_settings().log_level)


# =============================================================================
# Profile Commands
# =============================================================================


@app.command()
def schedule(
    age: Annotated[int, typer.Option("--age", help="Learner age in years")] = 30,
    chronotype: Annotated[
        Chronotype, typer.Option("--chronotype", "-c", help="morning, evening or intermediate")
    ] = Chronotype.INTERMEDIATE,
    chronotype_score: Annotated[
        float, typer.Option("--chronotype-score", help="1 (morning) to 5 (evening)")
    ] = 3.0,
    intensity: Annotated[
        StudyIntensity | None, typer.Option("--intensity", "-i", help="intensive or casual")
    ] = None,
    profile_file: Annotated[
        Path | None, typer.Option("--profile", "-p", help="JSON profile record")
    ] = None,
) -> None:
    """
    Show the personalized study schedule for a learner.

    Examples:
        gentle-study schedule --age 16
        gentle-study schedule --age 30 -c morning --chronotype-score 4
        gentle-study schedule --profile learner.json
    """
    try:
        profile = _profile_from_options(profile_file, age, chronotype, chronotype_score, intensity)
    except GentleStudyError as e:
        _fail(e)

    plan = calculate_optimal_study_schedule(profile)

    table = Table(title="Study Schedule", show_header=False)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value")
    table.add_row("Session length", f"{plan.session_length:.0f} min")
    table.add_row("Break", f"{plan.break_duration:.1f} min")
    table.add_row("Start time", _minutes_to_clock(plan.optimal_start_time))
    table.add_row(
        "Peak windows",
        ", ".join(f"{_minutes_to_clock(s)}-{_minutes_to_clock(e)}" for s, e in plan.peak_performance_windows),
    )
    table.add_row("Max daily study", f"{plan.max_daily_study_time} min")
    table.add_row("New concepts per session", str(plan.max_concepts))
    table.add_row(
        "Microbreaks",
        f"{plan.microbreak_duration}s every {plan.microbreak_interval} min",
    )
    console.print(table)

    console.print(Panel("\n".join(f"• {a}" for a in plan.break_activities), title="Break ideas"))


# =============================================================================
# Spaced Repetition Commands
# =============================================================================


@app.command()
def review(
    quality: Annotated[float, typer.Option("--quality", "-q", help="Recall quality 0-5")],
    interval: Annotated[int, typer.Option("--interval", help="Current interval in days")] = 0,
    ease: Annotated[float, typer.Option("--ease", help="Current ease factor")] = 2.5,
    reps: Annotated[int, typer.Option("--reps", help="Reviews so far")] = 0,
    subject: Annotated[str, typer.Option("--subject", help="Subject name")] = "subject",
    policy: Annotated[
        str | None, typer.Option("--policy", help="lector or sm2 (default from settings)")
    ] = None,
    age: Annotated[int | None, typer.Option("--age", help="Learner age for LECTOR")] = None,
    reviewed_at: Annotated[
        datetime | None, typer.Option("--reviewed-at", help="When the session ended")
    ] = None,
) -> None:
    """
    Fold one review into an item and show the next review date.

    Examples:
        gentle-study review -q 4 --interval 6 --ease 2.5 --policy sm2
        gentle-study review -q 2 --interval 15
    """
    settings = get_settings()
    try:
        interval_policy = get_policy(policy or settings.default_policy, settings.interference_window)
    except ValueError as e:
        _fail(e)

    item = ReviewItem(subject=subject, interval=interval, ease_factor=ease, repetition_count=reps)
    scheduler = ReviewScheduler(policy=interval_policy, review_hour=settings.review_hour)
    outcome = scheduler.complete_review(
        item,
        quality,
        reviewed_at or datetime.now(),
        context=ReviewContext(age=age, concept=subject),
    )

    table = Table(title=f"Review ({outcome.policy})", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Before")
    table.add_column("After", style="green")
    table.add_row("Interval (days)", str(item.interval), str(outcome.item.interval))
    table.add_row("Ease factor", f"{item.ease_factor:.2f}", f"{outcome.item.ease_factor:.2f}")
    table.add_row("Repetitions", str(item.repetition_count), str(outcome.item.repetition_count))
    table.add_row("Difficulty", item.difficulty.value, outcome.item.difficulty.value)
    console.print(table)
    console.print(f"Next review: [bold]{outcome.next_review:%Y-%m-%d %H:%M}[/]")
    console.print(f"[dim]Suggested reminder day: {outcome.engagement_date:%A %Y-%m-%d}[/]")


# =============================================================================
# Assessment Commands
# =============================================================================


@app.command()
def attention(
    rt: Annotated[str, typer.Option("--rt", help="Response times in ms, comma-separated")],
    errors: Annotated[str, typer.Option("--errors", help="Error flags 0/1, comma-separated")],
) -> None:
    """Estimate sustained attention span from a timed task."""
    response_times = _parse_numbers(rt, "--rt")
    error_flags = [int(e) for e in _parse_numbers(errors, "--errors")]

    span = assess_attention_span(response_times, error_flags)
    console.print(f"Sustained attention span: [bold]{span}[/] seconds")


@app.command()
def fatigue(
    rt: Annotated[str, typer.Option("--rt", help="Response-time history in ms")],
    error_rates: Annotated[str, typer.Option("--error-rates", help="Error-rate history 0-1")],
    self_report: Annotated[
        float, typer.Option("--self-report", "-s", help="Self-reported fatigue 1-10")
    ] = 1,
) -> None:
    """Classify current fatigue and recommend an intervention."""
    settings = get_settings()
    result = assess_fatigue(
        _parse_numbers(rt, "--rt"),
        _parse_numbers(error_rates, "--error-rates"),
        self_report,
        window=settings.fatigue_window,
    )

    color = {"low": "green", "moderate": "yellow", "high": "red", "severe": "bold red"}[result.tier.value]
    console.print(
        f"Fatigue: [{color}]{result.tier.value}[/] (score {result.score}, "
        f"confidence {result.confidence:.0%}) -> [bold]{result.action.value}[/]"
    )
    for line in result.evidence:
        console.print(f"  [dim]• {line}[/]")


@app.command()
def trigger(
    motivation: Annotated[float, typer.Option("--motivation", help="Motivation 1-5")],
    ability: Annotated[float, typer.Option("--ability", help="Ability 1-5")],
    context: Annotated[
        TriggerContext, typer.Option("--context", help="start, during or break")
    ] = TriggerContext.START,
) -> None:
    """Show the adaptive intervention message for a learner state."""
    message = get_adaptive_trigger(motivation, ability, context)
    console.print(
        Panel(
            f"{message.body}\n\n[dim]{message.action}[/]",
            title=f"[bold]{message.trigger.value}[/]",
            border_style="cyan",
        )
    )


# =============================================================================
# Interleaving Commands
# =============================================================================


@app.command()
def interleave(
    topics_file: Annotated[Path, typer.Argument(help="JSON list of topic records")],
    minutes: Annotated[float, typer.Option("--minutes", "-m", help="Session budget")] = 45,
    age: Annotated[int, typer.Option("--age", help="Learner age")] = 30,
    profile_file: Annotated[
        Path | None, typer.Option("--profile", "-p", help="JSON profile record")
    ] = None,
) -> None:
    """
    Plan an interleaved multi-topic session.

    Examples:
        gentle-study interleave topics.json --minutes 40
    """
    settings = get_settings()
    try:
        topics = load_topics(_read_json(topics_file))
        profile = _profile_from_options(profile_file, age, Chronotype.INTERMEDIATE, 3.0, None)
    except GentleStudyError as e:
        _fail(e)

    scheduler = InterleavingScheduler(InterleaveConfig(max_topics=settings.max_interleaved_topics))
    segments = scheduler.schedule(topics, minutes, profile)

    names = {t.id: t.name for t in topics}
    table = Table(title="Interleaved Session")
    table.add_column("#", justify="right")
    table.add_column("Topic", style="cyan")
    table.add_column("Minutes", justify="right")
    table.add_column("Why", style="dim")
    for segment in segments:
        table.add_row(
            str(segment.order + 1),
            names.get(segment.topic_id, segment.topic_id),
            f"{segment.duration:g}",
            segment.rationale,
        )
    console.print(table)

    summary = scheduler.get_session_summary(segments)
    console.print(
        f"[green]{summary['total_minutes']:g} of {minutes:g} minutes scheduled, "
        f"{summary['topic_switches']} topic switches[/]"
    )


@app.command()
def feedback(
    history_file: Annotated[Path, typer.Argument(help="JSON list of segment outcomes")],
) -> None:
    """Analyze whether interleaving is helping."""
    try:
        history = load_segment_history(_read_json(history_file))
    except GentleStudyError as e:
        _fail(e)

    report = analyze_effectiveness(history)
    console.print(f"Average performance: [bold]{report.average_performance:.0%}[/]")
    console.print(f"Switching benefit: [bold]{report.switching_benefit:+.2f}[/]")
    console.print(f"Recommended segment length: [bold]{report.recommended_duration:g}[/] min")
    console.print(f"[dim]{report.message}[/]")


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
