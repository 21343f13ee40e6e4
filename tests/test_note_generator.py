"""Unit tests for clef ranges and the random note generator."""

from collections.abc import Sequence
from typing import TypeVar

import pytest

from notequiz.clefs import CLEFS, get_clef, staff_position, valid_registers
from notequiz.note_generator import NumpyRandomChoice, RandomChoiceService, RandomNoteGenerator
from notequiz.note_model import ACCIDENTALS, LETTERS, Note

T = TypeVar("T")


class LastChoice:
    """Deterministic chooser that always takes the final option."""

    def __init__(self) -> None:
        self.seen: list[list[object]] = []

    def uniform_pick(self, options: Sequence[T]) -> T:
        self.seen.append(list(options))
        return options[-1]


def test_fake_chooser_satisfies_protocol() -> None:
    assert isinstance(LastChoice(), RandomChoiceService)
    assert isinstance(NumpyRandomChoice(0), RandomChoiceService)


def test_treble_range_spans_two_ledger_lines() -> None:
    treble = get_clef("treble")
    assert treble.contains(Note("A", "n", 3))
    assert treble.contains(Note("C", "n", 6))
    assert not treble.contains(Note("G", "n", 3))
    assert not treble.contains(Note("D", "n", 6))


def test_valid_registers_treble_c() -> None:
    assert valid_registers("treble", "C") == [4, 5, 6]


def test_valid_registers_bass_e() -> None:
    assert valid_registers("bass", "E") == [2, 3, 4]


def test_valid_registers_alto_b() -> None:
    assert valid_registers("alto", "B") == [2, 3, 4]


def test_every_letter_notatable_on_every_clef() -> None:
    for clef in CLEFS:
        for letter in LETTERS:
            assert valid_registers(clef, letter), (clef, letter)


def test_unknown_clef_raises() -> None:
    with pytest.raises(ValueError, match="Unknown clef"):
        valid_registers("soprano", "C")


def test_staff_position_treble() -> None:
    assert staff_position("treble", Note("E", "n", 4)) == "line 1"
    assert staff_position("treble", Note("F", "#", 4)) == "space 1"
    assert staff_position("treble", Note("F", "n", 5)) == "line 5"
    assert staff_position("treble", Note("D", "n", 4)) == "below the staff"
    assert staff_position("treble", Note("C", "n", 4)) == "1 ledger line below"
    assert staff_position("treble", Note("B", "n", 3)) == "below 1 ledger line"
    assert staff_position("treble", Note("A", "n", 3)) == "2 ledger lines below"
    assert staff_position("treble", Note("G", "n", 5)) == "above the staff"
    assert staff_position("treble", Note("A", "n", 5)) == "1 ledger line above"


def test_staff_position_bass_middle_c() -> None:
    assert staff_position("bass", Note("C", "n", 4)) == "1 ledger line above"


def test_generate_uses_supplied_candidate_sets() -> None:
    chooser = LastChoice()
    note = RandomNoteGenerator(chooser).generate("treble")

    assert chooser.seen[0] == list(LETTERS)
    assert chooser.seen[1] == list(ACCIDENTALS)
    assert chooser.seen[2] == valid_registers("treble", "G")
    assert note == Note("G", "bb", 5)


@pytest.mark.parametrize("clef", sorted(CLEFS))
def test_generated_register_always_valid(clef: str) -> None:
    generator = RandomNoteGenerator(NumpyRandomChoice(seed=1234))
    for _ in range(300):
        note = generator.generate(clef)
        assert note.register in valid_registers(clef, note.letter)


def test_seeded_generators_agree() -> None:
    first = RandomNoteGenerator(NumpyRandomChoice(seed=7))
    second = RandomNoteGenerator(NumpyRandomChoice(seed=7))
    assert [first.generate("bass") for _ in range(20)] == [
        second.generate("bass") for _ in range(20)
    ]


def test_choose_clef_from_allowed() -> None:
    generator = RandomNoteGenerator(LastChoice())
    assert generator.choose_clef(["treble", "alto"]) == "alto"


def test_choose_clef_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        RandomNoteGenerator(LastChoice()).choose_clef(["treble", "mezzo"])


def test_numpy_choice_rejects_empty_options() -> None:
    with pytest.raises(ValueError, match="empty"):
        NumpyRandomChoice(0).uniform_pick([])
