"""Question configuration, frozen attempt state, and the attempt store."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from notequiz.clefs import DEFAULT_CLEFS, get_clef
from notequiz.note_model import Note


class QuestionKind(Enum):
    """Supported question subtypes."""

    NOTE_WRITE = "note_write"
    NOTE_IDENTIFY = "note_identify"


@runtime_checkable
class AttemptStateStore(Protocol):
    """Per-attempt key/value store owned by the host."""

    def set_var(self, key: str, value: Any) -> None: ...

    def get_var(self, key: str) -> Any: ...


class InMemoryAttemptStore:
    """Dict-backed AttemptStateStore. ``get_var`` raises KeyError when unset."""

    def __init__(self) -> None:
        self.vars: dict[str, Any] = {}

    def set_var(self, key: str, value: Any) -> None:
        self.vars[key] = value

    def get_var(self, key: str) -> Any:
        return self.vars[key]


@dataclass(frozen=True)
class QuestionConfig:
    """
    Authored settings of one question.

    Attributes:
        kind:              Question subtype.
        consider_register: Whether register is part of the answer.
        clefs:             Clefs one of which is chosen per attempt.
        given_note:        Fixed note token; None to generate one per attempt.
                           Identification needs the register to place the
                           note on the staff, so it is required there even
                           when register is not graded.
    """

    kind: QuestionKind = QuestionKind.NOTE_WRITE
    consider_register: bool = True
    clefs: tuple[str, ...] = field(default=DEFAULT_CLEFS)
    given_note: str | None = None

    def __post_init__(self) -> None:
        if not self.clefs:
            raise ValueError("At least one clef is required.")
        for name in self.clefs:
            get_clef(name)
        if self.given_note is not None:
            self.parse_given_note()

    @property
    def given_note_needs_register(self) -> bool:
        return self.consider_register or self.kind is QuestionKind.NOTE_IDENTIFY

    def parse_given_note(self) -> Note:
        """
        Parse ``given_note``; identification notes always keep their register.

        Raises:
            ValueError: If there is no given note or it is not a valid token.
        """
        if self.given_note is None:
            raise ValueError("No given note configured.")
        return Note.parse(self.given_note, self.given_note_needs_register)

    def save(self, path: Path) -> None:
        data = asdict(self)
        data["kind"] = self.kind.value
        data["clefs"] = list(self.clefs)
        with open(path, "w", encoding="utf-8") as fp:
            json.dump(data, fp, indent=2)

    @classmethod
    def load(cls, path: Path) -> QuestionConfig:
        """
        Read a config written by ``save``. Missing keys take their defaults.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the JSON or any value in it is invalid.
        """
        with open(path, "r", encoding="utf-8") as fp:
            obj = json.load(fp)
        if not isinstance(obj, dict):
            raise ValueError(f"Expected a JSON object in '{path}'.")

        kwargs: dict[str, Any] = {}
        if "kind" in obj:
            kwargs["kind"] = QuestionKind(obj["kind"])
        if "consider_register" in obj:
            if not isinstance(obj["consider_register"], bool):
                raise ValueError("'consider_register' must be true or false.")
            kwargs["consider_register"] = obj["consider_register"]
        if "clefs" in obj:
            clefs = obj["clefs"]
            if not isinstance(clefs, list) or not all(isinstance(c, str) for c in clefs):
                raise ValueError("'clefs' must be a list of clef names.")
            kwargs["clefs"] = tuple(clefs)
        if obj.get("given_note") is not None:
            if not isinstance(obj["given_note"], str):
                raise ValueError("'given_note' must be a note token.")
            kwargs["given_note"] = obj["given_note"]
        return cls(**kwargs)


@dataclass(frozen=True)
class AttemptState:
    """
    Everything needed to replay one attempt, frozen when it starts.

    Attributes:
        kind:              Question subtype.
        clef:              Clef chosen for this attempt.
        consider_register: Whether register is part of the answer.
        given_note:        The note shown to the student. Generated notes
                           always carry a register (it fixes the staff
                           position) even when it is not graded.
        question_text:     Resolved question text.
    """

    kind: QuestionKind
    clef: str
    consider_register: bool
    given_note: Note
    question_text: str = ""

    @property
    def reference_note(self) -> Note:
        """The note answers are graded against, register dropped if ignored."""
        if self.consider_register:
            return self.given_note
        return self.given_note.without_register()
