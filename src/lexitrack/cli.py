"""Command line entry: learning statistics and practice selection."""
import random
from typing import Annotated, Optional

import typer

from lexitrack.config import ensure_directories
from lexitrack.errors import LexitrackError
from lexitrack.logging_config import setup_logging
from lexitrack.models.base import SessionLocal, init_db
from lexitrack.services.word_service import WordService

app = typer.Typer(
    help="lexitrack: vocabulary progress tracking.",
    no_args_is_help=True,
)

DictionaryOption = Annotated[
    Optional[int], typer.Option("--dictionary", "-d", help="Limit to one dictionary.")
]
SetOption = Annotated[Optional[int], typer.Option("--set", "-s", help="Limit to one set.")]


@app.callback()
def main_callback(
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", help="Override LOG_LEVEL.")
    ] = None,
):
    """Global settings for lexitrack."""
    try:
        setup_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e
    ensure_directories()
    init_db()


def _fail(error: LexitrackError) -> None:
    typer.echo(f"Error: {error.message}", err=True)
    raise typer.Exit(code=1)


@app.command()
def stats(dictionary: DictionaryOption = None, word_set: SetOption = None):
    """Show learning statistics."""
    db = SessionLocal()
    try:
        service = WordService(db)
        summary = service.get_statistics(dictionary_id=dictionary, set_id=word_set)
        weekly = service.get_weekly_progress()
    except LexitrackError as e:
        _fail(e)
    finally:
        db.close()

    typer.echo(f"Words: {summary.total_words} (learned {summary.learned_words})")
    typer.echo(f"Average rate: {summary.average_rate}")
    typer.echo(f"Streak: {summary.current_streak} days (longest {summary.longest_streak})")
    typer.echo(f"Time spent: {summary.total_time_spent} min")
    typer.echo(f"Accuracy: {summary.average_accuracy}%")
    typer.echo(
        f"Per day: {weekly.words_per_day} words, {weekly.tests_per_day} tests, "
        f"{weekly.time_per_day} min"
    )
    levels = ", ".join(
        f"{level.value}={count}" for level, count in summary.level_distribution.items()
    )
    typer.echo(f"Levels: {levels}")


@app.command()
def practice(
    count: Annotated[Optional[int], typer.Option("--count", "-n", help="Number of words.")] = None,
    dictionary: DictionaryOption = None,
    word_set: SetOption = None,
    seed: Annotated[Optional[int], typer.Option(help="Seed for a reproducible pick.")] = None,
):
    """Pick words for a practice session."""
    rng = random.Random(seed) if seed is not None else None
    db = SessionLocal()
    try:
        words = WordService(db).practice_words(count, dictionary, word_set, rng)
    except LexitrackError as e:
        _fail(e)
    finally:
        db.close()

    if not words:
        typer.echo("No words to practice.")
        return
    for item in words:
        translation = f" - {item.translation}" if item.translation else ""
        typer.echo(f"{item.id}\t{item.word}{translation}\t(rate {item.rate}, reviews {item.review_count})")


@app.command()
def review(
    word_id: int,
    correct: Annotated[bool, typer.Option("--correct/--wrong", help="Answer result.")] = True,
):
    """Record a test answer for a word."""
    db = SessionLocal()
    try:
        item = WordService(db).update_progress(word_id, correct)
    except LexitrackError as e:
        _fail(e)
    finally:
        db.close()

    typer.echo(f"{item.word}: rate {item.rate}, reviews {item.review_count}")


@app.command()
def quiz(
    word_id: int,
    seed: Annotated[Optional[int], typer.Option(help="Seed for reproducible options.")] = None,
):
    """Print the quiz cards for a word."""
    rng = random.Random(seed) if seed is not None else None
    db = SessionLocal()
    try:
        cards = WordService(db).build_cards(word_id, rng=rng)
    except LexitrackError as e:
        _fail(e)
    finally:
        db.close()

    for card in cards:
        typer.echo(f"[{card.card_type}] {card.question}")
        for number, option in enumerate(card.options, start=1):
            typer.echo(f"  {number}. {option}")
