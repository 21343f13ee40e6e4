"""Unit tests for Note parsing, serialization and staff arithmetic."""

import pytest

from notequiz.note_model import (
    ACCIDENTALS,
    LETTERS,
    MAX_REGISTER,
    MIN_REGISTER,
    ErrorKind,
    Note,
    NoteSyntaxError,
    classify_token,
)


def test_serialize_with_register() -> None:
    assert Note("C", "#", 4).serialize() == "C#4"


def test_serialize_without_register() -> None:
    assert Note("B", "n").serialize() == "Bn"


def test_serialize_double_flat() -> None:
    assert Note("E", "bb", 2).serialize() == "Ebb2"


@pytest.mark.parametrize("letter", LETTERS)
@pytest.mark.parametrize("accidental", ACCIDENTALS)
@pytest.mark.parametrize("register", range(MIN_REGISTER, MAX_REGISTER + 1))
def test_parse_serialize_round_trip_with_register(
    letter: str, accidental: str, register: int
) -> None:
    note = Note(letter, accidental, register)
    assert Note.parse(note.serialize(), consider_register=True) == note


@pytest.mark.parametrize("letter", LETTERS)
@pytest.mark.parametrize("accidental", ACCIDENTALS)
def test_parse_serialize_round_trip_without_register(letter: str, accidental: str) -> None:
    note = Note(letter, accidental)
    assert note.serialize() == letter + accidental
    assert Note.parse(note.serialize(), consider_register=False) == note


def test_parse_without_register_mode_has_no_register() -> None:
    assert Note.parse("Gx", consider_register=False) == Note("G", "x")


def test_parse_without_register_mode_drops_present_digit() -> None:
    assert Note.parse("Gx5", consider_register=False) == Note("G", "x")


def test_parse_double_flat_with_register() -> None:
    assert Note.parse("Bbb5", consider_register=True) == Note("B", "bb", 5)


def test_parse_rejects_missing_register_in_register_mode() -> None:
    with pytest.raises(NoteSyntaxError) as info:
        Note.parse("C#", consider_register=True)
    assert info.value.kind is ErrorKind.INVALID_SYNTAX


def test_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        Note.parse("", consider_register=False)


def test_parse_unset_token_raises_syntax_error() -> None:
    with pytest.raises(NoteSyntaxError) as info:
        Note.parse(None, consider_register=True)
    assert info.value.kind is ErrorKind.EMPTY_ANSWER


def test_constructor_rejects_unknown_letter() -> None:
    with pytest.raises(ValueError, match="letter"):
        Note("H", "n", 4)


def test_constructor_rejects_register_out_of_range() -> None:
    with pytest.raises(ValueError, match="Register"):
        Note("C", "n", 7)


def test_classify_token_priority() -> None:
    assert classify_token(None, True) is ErrorKind.EMPTY_ANSWER
    assert classify_token("", True) is ErrorKind.EMPTY_ANSWER
    assert classify_token("C #4", True) is ErrorKind.CONTAINS_WHITESPACE
    assert classify_token("H#4", True) is ErrorKind.INVALID_SYNTAX
    assert classify_token("C#4", True) is ErrorKind.OK


def test_diatonic_index_orders_across_octaves() -> None:
    assert Note("B", "n", 3).diatonic_index() + 1 == Note("C", "n", 4).diatonic_index()


def test_diatonic_index_requires_register() -> None:
    with pytest.raises(ValueError, match="no register"):
        Note("C", "n").diatonic_index()
