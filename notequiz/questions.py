"""Note question subtypes: writing and identification.

Each host hook is a pure function of the frozen ``AttemptState`` and the
submitted response, dispatched on ``AttemptState.kind``. ``NoteQuestion``
bundles them with the injected string and grading services.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from notequiz.attempt import AttemptState, AttemptStateStore, QuestionConfig, QuestionKind
from notequiz.grading_strategy import GradeResult, GradingStrategy, NoteAllOrNothingStrategy
from notequiz.note_generator import RandomNoteGenerator
from notequiz.note_model import DEFAULT_REGISTER, ErrorKind, Note, classify_token
from notequiz.note_validator import (
    ACCIDENTAL_FIELD,
    ANSWER_FIELD,
    LETTER_FIELD,
    REGISTER_FIELD,
    check_fields,
    structured_fields,
)
from notequiz.strings import StringLookup

logger = logging.getLogger(__name__)

# Attempt store keys
VAR_KIND = "_var_kind"
VAR_CLEF = "_var_clef"
VAR_CONSIDER_REGISTER = "_var_considerregister"
VAR_LETTER = "_var_givennoteletter"
VAR_ACCIDENTAL = "_var_givennoteaccidental"
VAR_REGISTER = "_var_givennoteregister"
VAR_QUESTION_TEXT = "_var_questiontext"

_WRITE_ERROR_STRINGS = {
    ErrorKind.EMPTY_ANSWER: "validationerror_empty",
    ErrorKind.CONTAINS_WHITESPACE: "validationerror_whitespace",
    ErrorKind.INVALID_SYNTAX: "validationerror_invalidsyntax",
}


def _blank(value: Any) -> str:
    return "" if value is None else str(value)


def _accidental_key(accidental: str) -> str:
    return "acc_" + accidental.replace("#", "sharp")


# ── Question text ───────────────────────────────────────────────────────────

def question_text(
    kind: QuestionKind,
    note: Note,
    consider_register: bool,
    strings: StringLookup,
) -> str:
    """Resolve the prompt shown to the student."""
    if kind is QuestionKind.NOTE_IDENTIFY:
        return strings.lookup("questiontext_note_identify") + ":"

    # A natural sign is not spelled out in the prompt.
    acc = "" if note.accidental == "n" else strings.lookup(_accidental_key(note.accidental))
    text = strings.lookup(f"note{note.letter}") + acc
    if consider_register and note.register is not None:
        text += str(note.register)
    return f"{strings.lookup('questiontext_note_write')}: {text}"


# ── Host hooks ──────────────────────────────────────────────────────────────

def expected_fields(state: AttemptState) -> dict[str, type]:
    """Field names (and types) the host should collect for this attempt."""
    if state.kind is QuestionKind.NOTE_WRITE:
        return {ANSWER_FIELD: str}
    return {name: str for name in structured_fields(state.consider_register)}


def correct_response(state: AttemptState) -> dict[str, str]:
    """
    The reference answer in response form.

    A register-less written answer is padded with ``DEFAULT_REGISTER`` so it
    is itself a valid token.
    """
    note = state.reference_note
    if state.kind is QuestionKind.NOTE_WRITE:
        register = DEFAULT_REGISTER if note.register is None else note.register
        return {ANSWER_FIELD: f"{note.letter}{note.accidental}{register}"}

    response = {LETTER_FIELD: note.letter, ACCIDENTAL_FIELD: note.accidental}
    if state.consider_register:
        response[REGISTER_FIELD] = str(note.register)
    return response


def is_complete(state: AttemptState, response: Mapping[str, Any]) -> bool:
    """Whether the response can be graded."""
    if state.kind is QuestionKind.NOTE_WRITE:
        answer = response.get(ANSWER_FIELD)
        return classify_token(answer, state.consider_register) is ErrorKind.OK
    return check_fields(response, state.consider_register).valid


def is_same_response(
    state: AttemptState,
    prev: Mapping[str, Any],
    new: Mapping[str, Any],
) -> bool:
    """Field-wise equality over the expected fields; missing counts as blank."""
    return all(
        _blank(prev.get(name)) == _blank(new.get(name))
        for name in expected_fields(state)
    )


def summarise(
    state: AttemptState,
    response: Mapping[str, Any],
    strings: StringLookup,
) -> str | None:
    """
    Compact rendering of a response for review pages.

    Note writing returns None when no answer was given; identification
    returns "" for an incomplete response.
    """
    if state.kind is QuestionKind.NOTE_WRITE:
        if ANSWER_FIELD not in response:
            return None
        answer = re.sub(r"\s", "", _blank(response[ANSWER_FIELD]))
        if not state.consider_register and answer[-1:].isdigit():
            answer = answer[:-1]
        return answer

    if not check_fields(response, state.consider_register).valid:
        return ""
    summary = strings.lookup(f"note{response[LETTER_FIELD]}")
    summary += strings.lookup(_accidental_key(str(response[ACCIDENTAL_FIELD])))
    if state.consider_register:
        summary += str(response[REGISTER_FIELD])
    return summary


def validation_error(
    state: AttemptState,
    response: Mapping[str, Any],
    strings: StringLookup,
) -> str:
    """Message explaining why the response cannot be graded, or ""."""
    if state.kind is QuestionKind.NOTE_WRITE:
        kind = classify_token(response.get(ANSWER_FIELD), state.consider_register)
        if kind is ErrorKind.OK:
            return ""
        return strings.lookup(_WRITE_ERROR_STRINGS[kind])

    if check_fields(response, state.consider_register).valid:
        return ""
    if state.consider_register:
        return strings.lookup("validationerror_note_identify")
    return strings.lookup("validationerror_note_identify_no_reg")


def grade(
    state: AttemptState,
    response: Mapping[str, Any],
    strategy: GradingStrategy,
) -> GradeResult:
    return strategy.grade(response, correct_response(state), state.consider_register)


# ── Attempt lifecycle ───────────────────────────────────────────────────────

def start_attempt(
    config: QuestionConfig,
    store: AttemptStateStore,
    strings: StringLookup,
    generator: RandomNoteGenerator | None = None,
) -> AttemptState:
    """
    Build the attempt state once and write it to the store.

    A config with a fixed ``given_note`` uses its first clef; otherwise the
    clef and note are drawn at random.
    """
    if config.given_note is not None:
        clef = config.clefs[0]
        note = config.parse_given_note()
    else:
        generator = generator if generator is not None else RandomNoteGenerator()
        clef = generator.choose_clef(config.clefs)
        note = generator.generate(clef)

    state = AttemptState(
        kind=config.kind,
        clef=clef,
        consider_register=config.consider_register,
        given_note=note,
        question_text=question_text(config.kind, note, config.consider_register, strings),
    )

    store.set_var(VAR_KIND, state.kind.value)
    store.set_var(VAR_CLEF, state.clef)
    store.set_var(VAR_CONSIDER_REGISTER, "1" if state.consider_register else "0")
    store.set_var(VAR_LETTER, note.letter)
    store.set_var(VAR_ACCIDENTAL, note.accidental)
    store.set_var(VAR_REGISTER, "" if note.register is None else str(note.register))
    store.set_var(VAR_QUESTION_TEXT, state.question_text)

    logger.debug("Started %s attempt: %s on %s clef", state.kind.value, note, clef)
    return state


def load_attempt(store: AttemptStateStore) -> AttemptState:
    """
    Rebuild a frozen attempt from the store; never regenerates.

    Raises:
        KeyError: If the attempt was never started in this store.
    """
    register = _blank(store.get_var(VAR_REGISTER))
    state = AttemptState(
        kind=QuestionKind(store.get_var(VAR_KIND)),
        clef=str(store.get_var(VAR_CLEF)),
        consider_register=_blank(store.get_var(VAR_CONSIDER_REGISTER)) in ("1", "True", "true"),
        given_note=Note(
            letter=str(store.get_var(VAR_LETTER)),
            accidental=str(store.get_var(VAR_ACCIDENTAL)),
            register=int(register) if register else None,
        ),
        question_text=_blank(store.get_var(VAR_QUESTION_TEXT)),
    )
    logger.debug("Loaded %s attempt: %s", state.kind.value, state.given_note)
    return state


class NoteQuestion:
    """
    A note question bound to one attempt.

    Usage:

        question = NoteQuestion.start(config, store, EnglishStrings())
        ...
        question = NoteQuestion.from_store(store, EnglishStrings())
        result = question.grade({"answer": "C#4"})
    """

    def __init__(
        self,
        state: AttemptState,
        strings: StringLookup,
        strategy: GradingStrategy | None = None,
    ) -> None:
        self.state = state
        self.strings = strings
        self.strategy = strategy if strategy is not None else NoteAllOrNothingStrategy()

    @classmethod
    def start(
        cls,
        config: QuestionConfig,
        store: AttemptStateStore,
        strings: StringLookup,
        generator: RandomNoteGenerator | None = None,
    ) -> NoteQuestion:
        return cls(start_attempt(config, store, strings, generator), strings)

    @classmethod
    def from_store(cls, store: AttemptStateStore, strings: StringLookup) -> NoteQuestion:
        return cls(load_attempt(store), strings)

    @property
    def question_text(self) -> str:
        return self.state.question_text

    def expected_fields(self) -> dict[str, type]:
        return expected_fields(self.state)

    def is_complete(self, response: Mapping[str, Any]) -> bool:
        return is_complete(self.state, response)

    def is_same_response(self, prev: Mapping[str, Any], new: Mapping[str, Any]) -> bool:
        return is_same_response(self.state, prev, new)

    def grade(self, response: Mapping[str, Any]) -> GradeResult:
        return grade(self.state, response, self.strategy)

    def correct_response(self) -> dict[str, str]:
        return correct_response(self.state)

    def summarise(self, response: Mapping[str, Any]) -> str | None:
        return summarise(self.state, response, self.strings)

    def validation_error(self, response: Mapping[str, Any]) -> str:
        return validation_error(self.state, response, self.strings)
