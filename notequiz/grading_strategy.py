"""GradingStrategy: Strategy pattern for scoring a response against the answer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from notequiz.note_validator import REGISTER_FIELD

logger = logging.getLogger(__name__)


class QuestionState(Enum):
    """Graded state label reported back to the host."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    PARTIALLY_CORRECT = "partially correct"


def state_for_fraction(fraction: float) -> QuestionState:
    """Map a grade fraction in [0, 1] to its state label."""
    if fraction >= 1:
        return QuestionState.CORRECT
    if fraction <= 0:
        return QuestionState.INCORRECT
    return QuestionState.PARTIALLY_CORRECT


@dataclass(frozen=True)
class GradeResult:
    """
    A graded response.

    Attributes:
        fraction: Credit awarded, 0 or 1 for all-or-nothing grading.
        state:    Label derived from the fraction.
    """

    fraction: float
    state: QuestionState


# ── Abstract base ────────────────────────────────────────────────────────────

class GradingStrategy(ABC):
    """
    Abstract Strategy for grading a response against the correct response.

    Both arguments map field names to submitted values, e.g.
    ``{"answer": "C#4"}`` or ``{"answer_ltr": "C", "answer_acc": "#"}``.
    """

    @abstractmethod
    def grade(
        self,
        response: Mapping[str, Any],
        correct_response: Mapping[str, Any],
        consider_register: bool,
    ) -> GradeResult:
        """
        Score ``response`` against ``correct_response``.

        Args:
            response:          The submitted fields.
            correct_response:  The reference fields.
            consider_register: Whether the register participates in the match.

        Returns:
            GradeResult with fraction and state label.
        """


# ── Concrete strategies ──────────────────────────────────────────────────────

class NoteAllOrNothingStrategy(GradingStrategy):
    """
    All-or-nothing grading for note questions.

    Every field of the correct response must match the submitted field; one
    mismatch zeroes the whole response. No partial credit is given for a
    right letter with a wrong accidental.

    Register handling
    -----------------
    With register considered, values are compared in full.

    Without register, the discrete register field is skipped and every other
    value is cut to its first two characters, so ``"C#4"`` and ``"C#"`` both
    become ``"C#"``. The cut also turns ``"Cbb"`` into ``"Cb"``: double flats
    and flats on the same letter are not told apart in this mode.
    """

    COMPARED_PREFIX = 2  # letter + one accidental character

    def _comparable(self, value: Any, consider_register: bool) -> str:
        text = "" if value is None else str(value)
        return text if consider_register else text[: self.COMPARED_PREFIX]

    def grade(
        self,
        response: Mapping[str, Any],
        correct_response: Mapping[str, Any],
        consider_register: bool,
    ) -> GradeResult:
        fraction = 1
        for key, expected in correct_response.items():
            if not consider_register and key == REGISTER_FIELD:
                continue
            submitted = self._comparable(response.get(key), consider_register)
            if submitted != self._comparable(expected, consider_register):
                fraction = 0

        result = GradeResult(fraction=fraction, state=state_for_fraction(fraction))
        logger.debug("Graded %r against %r: %s", dict(response), dict(correct_response),
                     result.state.value)
        return result
