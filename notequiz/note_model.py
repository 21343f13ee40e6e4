"""Note: value type for a written note (letter, accidental, register)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Final, cast

# ── Notation constants ──────────────────────────────────────────────────────
LETTERS: Final[tuple[str, ...]] = ("A", "B", "C", "D", "E", "F", "G")

#: Accidental tokens: natural, sharp, flat, double sharp, double flat.
ACCIDENTALS: Final[tuple[str, ...]] = ("n", "#", "b", "x", "bb")

MIN_REGISTER = 1
MAX_REGISTER = 6
DEFAULT_REGISTER = 4  # appended to register-less correct answers

#: Diatonic step of each letter within an octave (octaves start on C).
LETTER_STEPS: Final[dict[str, int]] = {
    "C": 0, "D": 1, "E": 2, "F": 3, "G": 4, "A": 5, "B": 6,
}

NOTE_PATTERN_WITH_REGISTER = re.compile(r"^[A-G](n|#|b|x|bb)[1-6]$")
NOTE_PATTERN_NO_REGISTER = re.compile(r"^[A-G](n|#|b|x|bb)[1-6]?$")


class ErrorKind(Enum):
    """Outcome of validating a submitted answer, in priority order."""

    OK = "ok"
    EMPTY_ANSWER = "empty"
    CONTAINS_WHITESPACE = "whitespace"
    INVALID_SYNTAX = "invalidsyntax"
    INCOMPLETE_RESPONSE = "incomplete"


class NoteSyntaxError(ValueError):
    """Raised by ``Note.parse`` when a token does not describe a note."""

    def __init__(self, text: str | None, kind: ErrorKind) -> None:
        super().__init__(f"Invalid note token {text!r}: {kind.value}")
        self.text = text
        self.kind = kind


def note_pattern(consider_register: bool) -> re.Pattern[str]:
    """Return the token grammar for the given register mode."""
    return NOTE_PATTERN_WITH_REGISTER if consider_register else NOTE_PATTERN_NO_REGISTER


def classify_token(text: str | None, consider_register: bool) -> ErrorKind:
    """
    Classify a raw answer token.

    Checks run in a fixed order: empty, then whitespace, then the grammar, so
    "C #4" reports whitespace even though "C#4" would parse.
    """
    if not text:
        return ErrorKind.EMPTY_ANSWER
    if re.search(r"\s", text):
        return ErrorKind.CONTAINS_WHITESPACE
    if not note_pattern(consider_register).match(text):
        return ErrorKind.INVALID_SYNTAX
    return ErrorKind.OK


@dataclass(frozen=True)
class Note:
    """
    A written note.

    Attributes:
        letter:     Note name, one of ``LETTERS``.
        accidental: Accidental token, one of ``ACCIDENTALS``.
        register:   Octave number (1-6), or None when the owning question
                    does not consider register.
    """

    letter: str
    accidental: str
    register: int | None = None

    def __post_init__(self) -> None:
        if self.letter not in LETTERS:
            raise ValueError(f"Unknown note letter '{self.letter}'.")
        if self.accidental not in ACCIDENTALS:
            raise ValueError(f"Unknown accidental '{self.accidental}'.")
        if self.register is not None and not MIN_REGISTER <= self.register <= MAX_REGISTER:
            raise ValueError(
                f"Register {self.register} outside {MIN_REGISTER}-{MAX_REGISTER}."
            )

    @classmethod
    def parse(cls, text: str | None, consider_register: bool) -> Note:
        """
        Parse a compact token such as ``"C#4"`` or ``"Bbb"``.

        Without register mode a trailing register digit is accepted and
        dropped, so the result always has ``register=None``.

        Raises:
            NoteSyntaxError: If the token fails validation.
        """
        kind = classify_token(text, consider_register)
        if kind is not ErrorKind.OK:
            raise NoteSyntaxError(text, kind)
        token = cast(str, text)

        letter, rest = token[0], token[1:]
        if rest and rest[-1].isdigit():
            accidental, register = rest[:-1], int(rest[-1])
        else:
            accidental, register = rest, None

        return cls(
            letter=letter,
            accidental=accidental,
            register=register if consider_register else None,
        )

    def serialize(self) -> str:
        """Compact token: letter + accidental (+ register when present)."""
        register = "" if self.register is None else str(self.register)
        return f"{self.letter}{self.accidental}{register}"

    def without_register(self) -> Note:
        return Note(self.letter, self.accidental)

    def diatonic_index(self) -> int:
        """Number of diatonic steps above C0; requires a register."""
        if self.register is None:
            raise ValueError(f"Note '{self.serialize()}' has no register.")
        return self.register * len(LETTERS) + LETTER_STEPS[self.letter]

    def __str__(self) -> str:
        return self.serialize()
