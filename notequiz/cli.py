"""notequiz CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import click

from notequiz import __version__
from notequiz.attempt import InMemoryAttemptStore, QuestionConfig, QuestionKind
from notequiz.clefs import CLEFS, DEFAULT_CLEFS, staff_position, valid_registers
from notequiz.grading_strategy import QuestionState
from notequiz.note_generator import NumpyRandomChoice, RandomNoteGenerator
from notequiz.note_model import LETTERS
from notequiz.note_validator import ACCIDENTAL_FIELD, ANSWER_FIELD, LETTER_FIELD, REGISTER_FIELD
from notequiz.questions import NoteQuestion
from notequiz.strings import EnglishStrings, StringLookup

MAX_QUESTIONS = 100

KIND_CHOICES = {
    "write": QuestionKind.NOTE_WRITE,
    "identify": QuestionKind.NOTE_IDENTIFY,
}


def _prompt_response(question: NoteQuestion) -> dict[str, Any]:
    """Ask for every expected field; blank input is allowed and validated later."""
    if question.state.kind is QuestionKind.NOTE_WRITE:
        return {ANSWER_FIELD: click.prompt("  Answer", default="", show_default=False)}

    labels = {
        LETTER_FIELD: "  Letter (A-G)",
        ACCIDENTAL_FIELD: "  Accidental (n, #, b, x, bb)",
        REGISTER_FIELD: "  Register (1-6)",
    }
    return {
        name: click.prompt(labels[name], default="", show_default=False)
        for name in question.expected_fields()
    }


def _describe_position(question: NoteQuestion, strings: StringLookup) -> str:
    state = question.state
    position = staff_position(state.clef, state.given_note)
    return strings.lookup("clef_position", params={"clef": state.clef, "position": position})


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="notequiz")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool) -> None:
    """notequiz — note writing and identification drills."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ── quiz subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.option(
    "--kind",
    type=click.Choice(sorted(KIND_CHOICES), case_sensitive=False),
    default="write",
    show_default=True,
    help="write: type the named note as a token (e.g. C#4). identify: name the note shown.",
)
@click.option(
    "--clef",
    "clefs",
    type=click.Choice(sorted(CLEFS), case_sensitive=False),
    multiple=True,
    help=f"Clef to draw notes on; repeat for several. Defaults to {', '.join(DEFAULT_CLEFS)}.",
)
@click.option(
    "--register/--no-register",
    default=True,
    show_default=True,
    help="Whether the register (octave number) is part of the answer.",
)
@click.option(
    "--count",
    type=click.IntRange(1, MAX_QUESTIONS),
    default=5,
    show_default=True,
    help="Number of questions.",
)
@click.option("--seed", type=int, default=None, help="Random seed for a repeatable session.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
    default=None,
    metavar="PATH",
    help="JSON question config; overrides --kind, --clef and --register.",
)
def quiz(
    kind: str,
    clefs: tuple[str, ...],
    register: bool,
    count: int,
    seed: int | None,
    config_path: Path | None,
) -> None:
    """
    Run an interactive note quiz in the terminal.

    \b
    Examples:
      notequiz quiz --kind write --clef treble
      notequiz quiz --kind identify --no-register --count 10
      notequiz quiz --config question.json --seed 42
    """
    if config_path is not None:
        try:
            config = QuestionConfig.load(config_path)
        except (OSError, ValueError) as exc:
            click.echo(f"  ERROR: Could not load config — {exc}", err=True)
            sys.exit(1)
    else:
        config = QuestionConfig(
            kind=KIND_CHOICES[kind.lower()],
            consider_register=register,
            clefs=tuple(c.lower() for c in clefs) or DEFAULT_CLEFS,
        )

    strings = EnglishStrings()
    generator = RandomNoteGenerator(NumpyRandomChoice(seed))
    score = 0.0

    click.echo(f"notequiz v{__version__}")
    click.echo(f"  Kind     : {config.kind.value}  |  Clefs: {', '.join(config.clefs)}")
    click.echo(f"  Register : {'yes' if config.consider_register else 'no'}")
    click.echo()

    for number in range(1, count + 1):
        store = InMemoryAttemptStore()
        question = NoteQuestion.start(config, store, strings, generator)

        click.echo(f"[{number}/{count}] {question.question_text}")
        if config.kind is QuestionKind.NOTE_IDENTIFY:
            click.echo(f"      {_describe_position(question, strings)}")

        response = _prompt_response(question)
        while not question.is_complete(response):
            click.echo(f"  {question.validation_error(response)}")
            response = _prompt_response(question)

        # Grade from the stored attempt, as a host would on submission.
        question = NoteQuestion.from_store(store, strings)
        result = question.grade(response)
        score += result.fraction

        if result.state is QuestionState.CORRECT:
            click.echo(f"  Correct: {question.summarise(response)}")
        else:
            expected = question.summarise(question.correct_response())
            click.echo(f"  Incorrect: {question.summarise(response)} (answer: {expected})")
        click.echo()

    click.echo(f"Score: {score:g}/{count}")


# ── check subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("answer")
@click.option(
    "--reference",
    "-r",
    required=True,
    metavar="TOKEN",
    help="Correct note token, e.g. C#4.",
)
@click.option(
    "--register/--no-register",
    default=True,
    show_default=True,
    help="Whether the register (octave number) is graded.",
)
def check(answer: str, reference: str, register: bool) -> None:
    """
    Validate and grade a single written note.

    ANSWER is the submitted token (quote it if it contains # or spaces).

    \b
    Examples:
      notequiz check "C#4" --reference "C#4"
      notequiz check "Bb" --reference "Bb5" --no-register
    """
    strings = EnglishStrings()
    try:
        config = QuestionConfig(consider_register=register, given_note=reference)
    except ValueError as exc:
        click.echo(f"  ERROR: Invalid reference — {exc}", err=True)
        sys.exit(1)

    question = NoteQuestion.start(config, InMemoryAttemptStore(), strings)
    response = {ANSWER_FIELD: answer}
    if not question.is_complete(response):
        click.echo(f"  ERROR: {question.validation_error(response)}", err=True)
        sys.exit(1)

    result = question.grade(response)
    click.echo(f"{result.state.value}: {question.summarise(response)}")


# ── ranges subcommand ──────────────────────────────────────────────────────────

@main.command()
def ranges() -> None:
    """List the registers each letter may be drawn in, per clef."""
    for name in sorted(CLEFS):
        cells = [
            f"{letter}:{','.join(str(r) for r in valid_registers(name, letter))}"
            for letter in LETTERS
        ]
        click.echo(f"{name:<7} {'  '.join(cells)}")
