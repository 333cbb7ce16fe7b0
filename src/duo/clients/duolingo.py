"""Duolingo web API client."""

import json
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from duo.config import Settings, get_settings
from duo.exceptions import HttpError, IncompleteProfile, ProtocolError, RequestTimeout
from duo.schemas.languages import LanguagePair
from duo.schemas.sessions import Session, SessionCompletion, SessionRequest, SessionResult

logger = logging.getLogger(__name__)

PROFILE_FIELDS = "fromLanguage,learningLanguage"


class DuolingoClient:
    """Client for the user profile and practice session endpoints."""

    def __init__(
        self,
        token: str,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.token = token
        self.base_url = self.settings.api_base.rstrip("/")
        self.timeout = httpx.Timeout(self.settings.request_timeout)
        self.transport = transport

    async def get_languages(self, api_date: str, subject: str) -> LanguagePair:
        """Get the user's language pair."""
        data = await self._request(
            "GET", f"/{api_date}/users/{subject}?fields={PROFILE_FIELDS}"
        )
        try:
            return LanguagePair.model_validate(data)
        except ValidationError as exc:
            raise IncompleteProfile(
                "Could not read the language pair from the user profile; "
                "check that the JWT belongs to an active account."
            ) from exc

    async def create_session(self, api_date: str, request: SessionRequest) -> Session:
        """Create a new practice session."""
        data = await self._request(
            "POST", f"/{api_date}/sessions", body=request.to_body()
        )
        try:
            return Session.model_validate(data)
        except ValidationError as exc:
            raise ProtocolError(
                "Session response has no session ID", json.dumps(data)
            ) from exc

    async def complete_session(
        self,
        api_date: str,
        session: Session,
        completion: SessionCompletion,
    ) -> SessionResult:
        """Submit a session as finished."""
        data = await self._request(
            "PUT",
            f"/{api_date}/sessions/{session.path_id}",
            body=completion.apply_to(session),
        )
        try:
            return SessionResult.model_validate(data)
        except ValidationError as exc:
            raise ProtocolError(
                "Unexpected session completion response", json.dumps(data)
            ) from exc

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    json=body,
                    headers=self._get_headers(),
                )
            except httpx.TimeoutException as exc:
                raise RequestTimeout(url, self.settings.request_timeout) from exc

        text = response.text
        logger.debug("%s %s -> %s", method, url, response.status_code)
        if not response.is_success:
            logger.warning(
                "Request failed with status %s. Response: %s",
                response.status_code,
                text,
            )
            raise HttpError(response.status_code, text, url=url)

        try:
            data = json.loads(text)
        except ValueError as exc:
            logger.warning("Failed to parse JSON response: %s", text)
            raise ProtocolError("Response body is not valid JSON", text) from exc
        if not isinstance(data, dict):
            raise ProtocolError("Response body is not a JSON object", text)
        return data

    def _get_headers(self) -> Dict[str, str]:
        """Get headers for API calls."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
            "User-Agent": self.settings.user_agent,
        }
