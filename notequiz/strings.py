"""String lookup service and the built-in English catalogue."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final, Protocol, runtime_checkable

DOMAIN = "notequiz"


@runtime_checkable
class StringLookup(Protocol):
    """Resolves a string key to display text."""

    def lookup(
        self,
        key: str,
        domain: str = DOMAIN,
        params: Mapping[str, Any] | None = None,
    ) -> str: ...


ENGLISH: Final[dict[str, str]] = {
    "questiontext_note_write": "Write the following note",
    "questiontext_note_identify": "Identify the following note",
    "noteA": "A",
    "noteB": "B",
    "noteC": "C",
    "noteD": "D",
    "noteE": "E",
    "noteF": "F",
    "noteG": "G",
    "acc_n": "♮",
    "acc_sharp": "♯",
    "acc_b": "♭",
    "acc_x": "\U0001d12a",
    "acc_bb": "\U0001d12b",
    "validationerror_empty": "Please enter an answer.",
    "validationerror_whitespace": "Your answer must not contain spaces.",
    "validationerror_invalidsyntax": (
        "Invalid answer. Enter a letter (A-G), an accidental (n, #, b, x or bb)"
        " and, if required, a register (1-6), e.g. C#4."
    ),
    "validationerror_note_identify": "Please select a letter, an accidental and a register.",
    "validationerror_note_identify_no_reg": "Please select a letter and an accidental.",
    "clef_position": "{clef} clef, {position}",
}


class EnglishStrings:
    """
    Dict-backed StringLookup.

    Parameters are substituted with ``str.format``. Unknown keys render as
    ``[[key]]`` so missing strings are visible rather than fatal.
    """

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        self.strings: dict[str, str] = dict(ENGLISH)
        if overrides:
            self.strings.update(overrides)

    def lookup(
        self,
        key: str,
        domain: str = DOMAIN,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        template = self.strings.get(key)
        if template is None:
            return f"[[{key}]]"
        return template.format(**params) if params else template
