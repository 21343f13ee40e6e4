"""RandomNoteGenerator: draws reference notes constrained by clef."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol, TypeVar, runtime_checkable

import numpy as np

from notequiz.clefs import get_clef, valid_registers
from notequiz.note_model import ACCIDENTALS, LETTERS, Note

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class RandomChoiceService(Protocol):
    """Source of uniform random selection."""

    def uniform_pick(self, options: Sequence[T]) -> T: ...


class NumpyRandomChoice:
    """RandomChoiceService backed by a numpy ``Generator``."""

    def __init__(self, seed: int | None = None) -> None:
        """
        Args:
            seed: Seed for the underlying generator. None draws fresh entropy.
        """
        self._rng = np.random.default_rng(seed)

    def uniform_pick(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("Cannot pick from an empty set of options.")
        return options[int(self._rng.integers(len(options)))]


class RandomNoteGenerator:
    """
    Produces random reference notes for note questions.

    Algorithm overview
    ------------------
    1. **Letter** – uniform over A-G.
    2. **Accidental** – uniform over the supported accidental tokens.
    3. **Register** – uniform over the registers in which the chosen letter
       is notatable on the clef (see ``clefs.valid_registers``). The register
       draw is conditioned on clef and letter, so a treble-clef C is only
       ever C4, C5 or C6.

    Randomness comes from the injected ``RandomChoiceService``; this class
    only supplies the candidate sets.
    """

    def __init__(self, chooser: RandomChoiceService | None = None) -> None:
        self.chooser = chooser if chooser is not None else NumpyRandomChoice()

    def choose_clef(self, allowed: Sequence[str]) -> str:
        """
        Pick one clef from the allowed set.

        Raises:
            ValueError: If ``allowed`` is empty or names an unknown clef.
        """
        for name in allowed:
            get_clef(name)
        return self.chooser.uniform_pick(list(allowed))

    def generate(self, clef: str) -> Note:
        """Draw a note with register that is notatable on ``clef``."""
        letter = self.chooser.uniform_pick(LETTERS)
        accidental = self.chooser.uniform_pick(ACCIDENTALS)
        register = self.chooser.uniform_pick(valid_registers(clef, letter))

        note = Note(letter, accidental, register)
        logger.debug("Generated %s for %s clef", note, clef)
        return note
