"""Bearer token introspection."""

import json

from jwt.utils import base64url_decode

from duo.exceptions import MalformedToken


def extract_subject(token: str) -> str:
    """Extract the user ID (``sub``) from the token payload.

    Only the middle segment is read. Header and signature are left to the
    API, which does its own validation.
    """
    if not token or token.count(".") != 2:
        raise MalformedToken("Token must have three dot-separated segments")

    try:
        payload = json.loads(base64url_decode(token.split(".")[1]))
    except ValueError as exc:
        raise MalformedToken(f"Invalid token: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedToken("Invalid token: payload must be a JSON object")

    subject = payload.get("sub")
    if subject is None or subject == "":
        raise MalformedToken("Invalid token: missing user ID")
    return str(subject)
