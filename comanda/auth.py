"""Bearer-token checks and detection of workflows that read standard input."""

from __future__ import annotations

import logging
from http import HTTPStatus

import yaml

_log = logging.getLogger(__name__)

_VARIABLE_MARKER = " as $"


class AuthError(Exception):
    """Raised when a request fails authorisation."""

    status = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def check_authorization(enabled: bool, bearer_token: str, header: str | None) -> None:
    """Check an Authorization header against the expected bearer token.

    Nothing is checked when authorisation is disabled.
    """
    if not enabled:
        _log.debug("Auth check skipped: server auth is disabled")
        return
    if not header:
        _log.debug("Auth failed: no Authorization header present in request")
        raise AuthError("Authorization header required")
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        _log.debug("Auth failed: malformed Authorization header")
        raise AuthError("Invalid authorization header format")
    if parts[1] != bearer_token:
        _log.debug("Auth failed: invalid bearer token provided")
        raise AuthError("Invalid bearer token")
    _log.debug("Auth successful: valid bearer token")


def contains_stdin(text: str) -> bool:
    """Tell whether an input value names STDIN, ignoring any ``as $var``."""
    return text.split(_VARIABLE_MARKER)[0].strip().lower() == "stdin"


def _has_stdin_input_fallback(content: str) -> bool:
    for line in content.split("\n"):
        line = line.split("#", 1)[0].strip().lower()
        if line.startswith("input:"):
            if line[len("input:"):].strip().startswith("stdin"):
                _log.debug("Found STDIN input using fallback parser")
                return True
    return False


def has_stdin_input(content: str | bytes) -> bool:
    """Tell whether any step of a YAML workflow takes STDIN as input."""
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        _log.debug("YAML parse error: %s", exc)
        return _has_stdin_input_fallback(content)
    if document is None:
        return False
    if not isinstance(document, dict):
        return _has_stdin_input_fallback(content)

    for step_name, step in document.items():
        _log.debug("Checking step: %s", step_name)
        if not isinstance(step, dict) or "input" not in step:
            continue
        value = step["input"]
        if isinstance(value, str):
            if contains_stdin(value):
                return True
        elif isinstance(value, list):
            if any(isinstance(item, str) and contains_stdin(item) for item in value):
                return True
    return False