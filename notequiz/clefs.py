"""Clef geometry: notatable ranges and staff positions per clef."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from notequiz.note_model import MAX_REGISTER, MIN_REGISTER, Note

STAFF_LINES = 5
LEDGER_LINES = 2  # ledger lines allowed above and below the staff

#: Highest staff position (top line), counting lines and spaces from 0.
TOP_LINE_POSITION = (STAFF_LINES - 1) * 2


@dataclass(frozen=True)
class Clef:
    """
    A clef, defined by the note on its bottom staff line.

    The notatable range spans the staff plus ``LEDGER_LINES`` ledger lines on
    either side, e.g. A3-C6 for treble.
    """

    name: str
    bottom_line: Note

    @property
    def lowest_index(self) -> int:
        return self.bottom_line.diatonic_index() - LEDGER_LINES * 2

    @property
    def highest_index(self) -> int:
        return self.bottom_line.diatonic_index() + TOP_LINE_POSITION + LEDGER_LINES * 2

    def contains(self, note: Note) -> bool:
        """Return True if the note (with register) is notatable on this clef."""
        return self.lowest_index <= note.diatonic_index() <= self.highest_index


CLEFS: Final[dict[str, Clef]] = {
    "treble": Clef("treble", Note("E", "n", 4)),
    "bass": Clef("bass", Note("G", "n", 2)),
    "alto": Clef("alto", Note("F", "n", 3)),
    "tenor": Clef("tenor", Note("D", "n", 3)),
}

DEFAULT_CLEFS: Final[tuple[str, ...]] = ("treble", "bass")


def get_clef(name: str) -> Clef:
    """
    Look up a clef by name.

    Raises:
        ValueError: If the clef is unknown.
    """
    try:
        return CLEFS[name]
    except KeyError:
        supported = ", ".join(sorted(CLEFS))
        raise ValueError(f"Unknown clef '{name}'. Use one of: {supported}.") from None


def valid_registers(clef: str, letter: str) -> list[int]:
    """Registers in which ``letter`` can be written on ``clef``, ascending."""
    clef_def = get_clef(clef)
    return [
        register
        for register in range(MIN_REGISTER, MAX_REGISTER + 1)
        if clef_def.contains(Note(letter, "n", register))
    ]


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def staff_position(clef: str, note: Note) -> str:
    """
    Describe where a note is written on a clef.

    Examples (treble): E4 → "line 1", F4 → "space 1", C4 → "1 ledger line
    below", D4 → "below the staff", A5 → "1 ledger line above".
    """
    position = note.diatonic_index() - get_clef(clef).bottom_line.diatonic_index()

    if 0 <= position <= TOP_LINE_POSITION:
        kind = "line" if position % 2 == 0 else "space"
        return f"{kind} {position // 2 + 1}"

    if position < 0:
        distance, side = -position, "below"
    else:
        distance, side = position - TOP_LINE_POSITION, "above"

    ledgers = distance // 2
    if distance % 2 == 0:
        return f"{_plural(ledgers, 'ledger line')} {side}"
    if ledgers == 0:
        return f"{side} the staff"
    return f"{side} {_plural(ledgers, 'ledger line')}"
