"""Estado da sessão em memória."""

from .ids import (
    RegistrationNumberGenerator,
    SequentialIdGenerator,
    UuidIdGenerator,
)
from .store import (
    AppState,
    ClassNotFoundError,
    DiaryOverwriteError,
    LessonNotFoundError,
    PendingDeletion,
    Store,
    StudentNotFoundError,
    SuggestionInProgressError,
    UnknownConfirmationError,
)

__all__ = [
    "AppState",
    "ClassNotFoundError",
    "DiaryOverwriteError",
    "LessonNotFoundError",
    "PendingDeletion",
    "RegistrationNumberGenerator",
    "SequentialIdGenerator",
    "Store",
    "StudentNotFoundError",
    "SuggestionInProgressError",
    "UnknownConfirmationError",
    "UuidIdGenerator",
]
