"""NoteValidator: syntax and completeness checks for submitted answers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from notequiz.note_model import ErrorKind, classify_token

# ── Response field names ────────────────────────────────────────────────────
ANSWER_FIELD = "answer"  # single-token answer (note writing)
LETTER_FIELD = "answer_ltr"
ACCIDENTAL_FIELD = "answer_acc"
REGISTER_FIELD = "answer_reg"


@dataclass(frozen=True)
class ValidationResult:
    """Whether a response is acceptable, and if not, why."""

    valid: bool
    error_kind: ErrorKind

    @classmethod
    def of(cls, kind: ErrorKind) -> ValidationResult:
        return cls(valid=kind is ErrorKind.OK, error_kind=kind)


def validate(raw_text: str | None, consider_register: bool) -> ValidationResult:
    """
    Validate a single-token answer such as ``"C#4"``.

    Args:
        raw_text:          The submitted text (None when the field is unset).
        consider_register: Whether a register digit is required.

    Returns:
        ValidationResult whose error_kind is the first failing check among
        EMPTY_ANSWER, CONTAINS_WHITESPACE and INVALID_SYNTAX, or OK.
    """
    return ValidationResult.of(classify_token(raw_text, consider_register))


def structured_fields(consider_register: bool) -> tuple[str, ...]:
    """Names of the discrete fields a structured answer must provide."""
    if consider_register:
        return (LETTER_FIELD, ACCIDENTAL_FIELD, REGISTER_FIELD)
    return (LETTER_FIELD, ACCIDENTAL_FIELD)


def check_fields(response: Mapping[str, Any], consider_register: bool) -> ValidationResult:
    """
    Check that a structured answer has every required field filled in.

    Missing or blank fields make the response incomplete. Incomplete
    responses are never graded; the user is asked to finish them.
    """
    for name in structured_fields(consider_register):
        if not response.get(name):
            return ValidationResult.of(ErrorKind.INCOMPLETE_RESPONSE)
    return ValidationResult.of(ErrorKind.OK)
