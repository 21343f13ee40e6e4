"""notequiz: note writing and identification questions with all-or-nothing grading."""

from notequiz.attempt import AttemptState, InMemoryAttemptStore, QuestionConfig, QuestionKind
from notequiz.grading_strategy import GradeResult, NoteAllOrNothingStrategy, QuestionState
from notequiz.note_generator import NumpyRandomChoice, RandomNoteGenerator
from notequiz.note_model import ErrorKind, Note, NoteSyntaxError
from notequiz.note_validator import ValidationResult, check_fields, validate
from notequiz.questions import NoteQuestion, load_attempt, start_attempt
from notequiz.strings import EnglishStrings

__version__ = "0.1.0"

__all__ = [
    "AttemptState",
    "EnglishStrings",
    "ErrorKind",
    "GradeResult",
    "InMemoryAttemptStore",
    "Note",
    "NoteAllOrNothingStrategy",
    "NoteQuestion",
    "NoteSyntaxError",
    "NumpyRandomChoice",
    "QuestionConfig",
    "QuestionKind",
    "QuestionState",
    "RandomNoteGenerator",
    "ValidationResult",
    "check_fields",
    "load_attempt",
    "start_attempt",
    "validate",
]
