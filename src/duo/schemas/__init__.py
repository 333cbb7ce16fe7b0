"""Pydantic schemas for the Duolingo API payloads."""

from .languages import LanguagePair
from .sessions import (
    CHALLENGE_TYPES,
    Session,
    SessionCompletion,
    SessionRequest,
    SessionResult,
)

__all__ = [
    "CHALLENGE_TYPES",
    "LanguagePair",
    "Session",
    "SessionCompletion",
    "SessionRequest",
    "SessionResult",
]
