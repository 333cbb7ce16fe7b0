"""Configuration settings for the practice runner."""

import re
from datetime import date
from functools import lru_cache
from typing import Optional, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from duo.exceptions import MissingCredential

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DUO_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    # Credentials and run size keep their historical, unprefixed names
    duolingo_jwt: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DUOLINGO_JWT", "duolingo_jwt"),
    )
    lessons: int = Field(
        default=1,
        validation_alias=AliasChoices("LESSONS", "lessons"),
    )

    # Remote API
    api_base: str = "https://www.duolingo.com"
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: Optional[float] = 30.0  # seconds, None disables

    # Pacing between session calls
    lesson_delay: float = Field(default=0.01, gt=0, lt=1)  # seconds

    log_level: str = "WARNING"

    @field_validator("lessons", mode="before")
    @classmethod
    def parse_lessons(cls, value):
        return parse_lesson_count(value)

    @field_validator("request_timeout", mode="before")
    @classmethod
    def zero_timeout_disables(cls, value):
        if value is None or value == "":
            return None
        timeout = float(value)
        return timeout if timeout > 0 else None


class RunConfig(BaseModel):
    """Resolved inputs for a single run."""

    model_config = ConfigDict(frozen=True)

    token: str
    lesson_count: int
    api_date: str


def parse_lesson_count(value, default: int = 1) -> int:
    """Read a lesson count the way an integer-prefix parser would.

    ``"3"`` and ``"3 lessons"`` both give 3; anything without leading digits
    falls back to ``default``.
    """
    if value is None:
        return default
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def format_api_date(day: date) -> str:
    """Format a calendar date as the ``YYYY-MM-DD`` path segment."""
    return day.strftime("%Y-%m-%d")


def resolve_run_config(
    argv: Sequence[str],
    settings: Settings,
    today: Optional[date] = None,
) -> RunConfig:
    """Resolve the token, lesson count and API date for this run.

    The environment token wins over the first positional argument.
    """
    token = settings.duolingo_jwt or (argv[0] if argv else None)
    if token:
        token = token.strip()
    if not token:
        raise MissingCredential(
            "Provide your Duolingo JWT through the DUOLINGO_JWT environment "
            "variable or as the first command-line argument."
        )

    return RunConfig(
        token=token,
        lesson_count=max(settings.lessons, 0),
        api_date=format_api_date(today or date.today()),
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
