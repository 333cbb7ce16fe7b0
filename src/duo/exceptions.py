"""Error types raised by the practice runner.

Every error here is fatal for a run; nothing is retried.
"""

from typing import Any, Dict, Optional


class DuoError(Exception):
    """Base class for all runner errors."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({details})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class MissingCredential(DuoError):
    """No token was supplied through the environment or the command line."""


class MalformedToken(DuoError):
    """The token payload could not be decoded into a subject identifier."""


class HttpError(DuoError):
    """The API answered with a non-2xx status."""

    def __init__(self, status: int, body: str, *, url: Optional[str] = None):
        self.status = status
        self.body = body
        self.url = url
        details: Dict[str, Any] = {"status": status}
        if url:
            details["url"] = url
        super().__init__(f"Request failed with HTTP {status}", details=details)

    @property
    def unauthorized(self) -> bool:
        return self.status == 401


class ProtocolError(DuoError):
    """The API answered 2xx but the body was not the JSON we expect."""

    def __init__(self, message: str, raw_body: str):
        self.raw_body = raw_body
        super().__init__(message)


class IncompleteProfile(DuoError):
    """The user profile lacks the language pair."""


class RequestTimeout(DuoError):
    """A request did not complete within the configured timeout."""

    def __init__(self, url: str, timeout: Optional[float]):
        self.url = url
        self.timeout = timeout
        super().__init__("Request timed out", details={"url": url, "timeout": timeout})
