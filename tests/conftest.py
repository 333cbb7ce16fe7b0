"""
Pytest configuration and shared fixtures for the practice runner test suite.
"""

import json
import os
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import httpx
import jwt
import pytest

# Keep the developer's real credentials out of the test run
os.environ.pop("DUOLINGO_JWT", None)
os.environ.pop("LESSONS", None)
os.environ["DUO_API_BASE"] = "https://duolingo.test"

from duo.config import RunConfig, Settings, get_settings  # noqa: E402

TEST_SECRET = "duo-test-secret-key-for-hs256-signing"
API_DATE = "2025-03-07"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_user_id():
    """Subject carried by the test token."""
    return "987654321"


@pytest.fixture
def make_token():
    """Build signed tokens with an arbitrary payload."""

    def _make(payload: Dict[str, Any]) -> str:
        return jwt.encode(payload, TEST_SECRET, algorithm="HS256")

    return _make


@pytest.fixture
def test_jwt_token(make_token, test_user_id):
    """Create a test JWT token."""
    return make_token(
        {
            "sub": test_user_id,
            "exp": datetime.utcnow() + timedelta(hours=1),
            "iat": datetime.utcnow(),
        }
    )


@pytest.fixture
def settings():
    """Settings for tests against the fake host."""
    return Settings(
        duolingo_jwt=None,
        lessons=1,
        api_base="https://duolingo.test",
        lesson_delay=0.01,
        request_timeout=5.0,
    )


@pytest.fixture
def run_config(test_jwt_token):
    def _make(lesson_count: int = 1) -> RunConfig:
        return RunConfig(token=test_jwt_token, lesson_count=lesson_count, api_date=API_DATE)

    return _make


class FakeDuolingoAPI:
    """In-memory stand-in for the three Duolingo endpoints.

    Records every request it sees. ``xp_gains`` gives the completion response
    for each lesson in order; ``None`` leaves ``xpGain`` out of the response.
    """

    def __init__(
        self,
        profile: Optional[Dict[str, Any]] = None,
        xp_gains: Optional[List[Optional[int]]] = None,
        create_status: int = 200,
        complete_status: int = 200,
    ):
        self.profile = (
            profile
            if profile is not None
            else {"fromLanguage": "en", "learningLanguage": "es"}
        )
        self.xp_gains = list(xp_gains or [])
        self.create_status = create_status
        self.complete_status = complete_status
        self.requests: List[httpx.Request] = []
        self.created = 0

    @property
    def methods(self) -> List[str]:
        return [request.method for request in self.requests]

    @property
    def session_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method in ("POST", "PUT")]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.method == "GET":
            return httpx.Response(200, json=self.profile)

        if request.method == "POST":
            if self.create_status >= 300:
                return httpx.Response(self.create_status, text="Forbidden")
            self.created += 1
            return httpx.Response(
                200,
                json={
                    "id": f"session-{self.created}",
                    "challenges": [{"type": "translate"}],
                    "metadata": {"experiment": True},
                },
            )

        if request.method == "PUT":
            if self.complete_status >= 300:
                return httpx.Response(self.complete_status, text="Server error")
            body = json.loads(request.content)
            xp = self.xp_gains.pop(0) if self.xp_gains else 0
            result: Dict[str, Any] = {"id": body["id"], "failed": body["failed"]}
            if xp is not None:
                result["xpGain"] = xp
            return httpx.Response(200, json=result)

        return httpx.Response(405)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_api():
    """Factory for a fake API and its transport."""
    return FakeDuolingoAPI


@pytest.fixture
def recorded_delays():
    """A no-op delay that remembers every pause it was asked for."""
    pauses: List[float] = []

    async def _delay(seconds: float) -> None:
        pauses.append(seconds)

    _delay.pauses = pauses
    return _delay


@pytest.fixture
def echo_lines():
    lines: List[str] = []

    def _echo(line: str) -> None:
        lines.append(line)

    _echo.lines = lines
    return _echo
