"""
claudeai-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1: validation, not-found, parse errors."""

    exit_code = 1


class SetupError(CliError):
    """Exit code 2: session key missing, no config."""

    exit_code = 2


class ValidationError(CliError):
    """Bad caller input: wrong type, out-of-range index, empty required string."""


class EmptyResultWarning(CliError):
    """No chats exist. Non-fatal, so the CLI exits 0."""

    exit_code = 0


class MalformedChunkError(CliError):
    """A streaming completion body does not match the ``data: {...}`` shape."""


class UnexpectedResponseShape(CliError):
    """A JSON response is missing fields or has the wrong types."""


class HTTPError(Exception):
    """Raised by _http_request for non-2xx responses. Propagates to callers as-is."""

    def __init__(self, code, reason, body, headers=None):
        super().__init__(f"HTTP {code}: {reason}")
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
