"""Unit tests for token validation and structured-field completeness."""

from notequiz.note_model import ErrorKind
from notequiz.note_validator import (
    ACCIDENTAL_FIELD,
    LETTER_FIELD,
    REGISTER_FIELD,
    check_fields,
    structured_fields,
    validate,
)


def test_validate_empty_answer() -> None:
    result = validate("", consider_register=True)
    assert not result.valid
    assert result.error_kind is ErrorKind.EMPTY_ANSWER


def test_validate_unset_answer_is_empty() -> None:
    assert validate(None, consider_register=False).error_kind is ErrorKind.EMPTY_ANSWER


def test_validate_whitespace_reported_before_syntax() -> None:
    assert validate("C #4", consider_register=True).error_kind is ErrorKind.CONTAINS_WHITESPACE


def test_validate_trailing_newline_is_whitespace() -> None:
    assert validate("C#4\n", consider_register=True).error_kind is ErrorKind.CONTAINS_WHITESPACE


def test_validate_unknown_letter_is_syntax_error() -> None:
    assert validate("H#4", consider_register=True).error_kind is ErrorKind.INVALID_SYNTAX


def test_validate_register_out_of_range() -> None:
    assert validate("C#7", consider_register=True).error_kind is ErrorKind.INVALID_SYNTAX


def test_validate_lowercase_letter_rejected() -> None:
    assert validate("c#4", consider_register=True).error_kind is ErrorKind.INVALID_SYNTAX


def test_validate_ok_with_register() -> None:
    result = validate("C#4", consider_register=True)
    assert result.valid
    assert result.error_kind is ErrorKind.OK


def test_validate_register_required_in_register_mode() -> None:
    assert validate("C#", consider_register=True).error_kind is ErrorKind.INVALID_SYNTAX


def test_validate_register_optional_without_register_mode() -> None:
    assert validate("C#", consider_register=False).valid
    assert validate("C#4", consider_register=False).valid


def test_validate_double_accidentals() -> None:
    assert validate("Abb3", consider_register=True).valid
    assert validate("Fx5", consider_register=True).valid


def test_validate_missing_accidental() -> None:
    assert validate("C4", consider_register=True).error_kind is ErrorKind.INVALID_SYNTAX


def test_structured_fields_depend_on_register_mode() -> None:
    assert structured_fields(True) == (LETTER_FIELD, ACCIDENTAL_FIELD, REGISTER_FIELD)
    assert structured_fields(False) == (LETTER_FIELD, ACCIDENTAL_FIELD)


def test_check_fields_complete() -> None:
    response = {LETTER_FIELD: "C", ACCIDENTAL_FIELD: "#", REGISTER_FIELD: "4"}
    assert check_fields(response, consider_register=True).valid


def test_check_fields_missing_register() -> None:
    result = check_fields({LETTER_FIELD: "C", ACCIDENTAL_FIELD: "#"}, consider_register=True)
    assert not result.valid
    assert result.error_kind is ErrorKind.INCOMPLETE_RESPONSE


def test_check_fields_register_not_needed_without_register_mode() -> None:
    assert check_fields({LETTER_FIELD: "C", ACCIDENTAL_FIELD: "#"}, consider_register=False).valid


def test_check_fields_blank_letter_is_incomplete() -> None:
    response = {LETTER_FIELD: "", ACCIDENTAL_FIELD: "n"}
    assert check_fields(response, consider_register=False).error_kind is ErrorKind.INCOMPLETE_RESPONSE
