"""
HTTP request layer, endpoint records, and response-shape guards for claudeai-cli.
"""

import json
import logging
import re
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid
from dataclasses import dataclass

from claudeai_cli import config
from claudeai_cli.exceptions import CliError, HTTPError, UnexpectedResponseShape

logger = logging.getLogger("claudeai_cli.api")

# ---------------------------------------------------------------------------
# Endpoint records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Endpoint:
    """Base URL plus a path template such as ``/organizations/{org}``."""

    base_url: str
    path: str

    def url(self, **params):
        quoted = {k: urllib.parse.quote(str(v), safe="") for k, v in params.items()}
        try:
            return self.base_url.rstrip("/") + self.path.format(**quoted)
        except KeyError as e:
            raise CliError(f"[ERROR] Missing path parameter {e} for {self.path}") from None


ACCOUNT = "account"
ALL_CHATS = "all_chats"
SINGLE_CHAT = "single_chat"
SEND_MESSAGE = "send_message"
GENERATE_CHAT_TITLE = "generate_chat_title"
CURRENT_ACCOUNT = "current_account"
LOGOUT = "logout"

_PATHS = {
    ACCOUNT: "/account",
    ALL_CHATS: "/organizations/{org}/chat_conversations",
    SINGLE_CHAT: "/organizations/{org}/chat_conversations/{chat}",
    SEND_MESSAGE: "/append_message",
    GENERATE_CHAT_TITLE: "/generate_chat_title",
    CURRENT_ACCOUNT: "/auth/current_account",
    LOGOUT: "/auth/logout",
}


def build_endpoints(base_url=None):
    """Build the endpoint table for one base URL."""
    base = base_url or config.BASE_URL
    return {name: Endpoint(base, path) for name, path in _PATHS.items()}


# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def _safe_headers_for_log(headers):
    """Copy request headers with the session cookie masked."""
    safe = {}
    for key, value in (headers or {}).items():
        if key.lower() == "cookie":
            name, _, secret = value.partition("=")
            safe[key] = f"{name}={_mask_token(secret)}"
        else:
            safe[key] = value
    return safe


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _log_http_event(log, **fields):
    """Emit one structured HTTP event at debug level when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    log.debug("[HTTP] %s", json.dumps(fields, ensure_ascii=False, sort_keys=True))


def _http_request(url, data=None, headers=None, method="GET", timeout=None, log=None):
    """Make one HTTP request and return the decoded response text.

    Raises HTTPError for non-2xx responses. Connection failures and timeouts
    propagate unchanged from urllib. No retries.
    """
    log = log or logger
    body = json.dumps(data).encode("utf-8") if data is not None else None
    request_id = str(uuid.uuid4())
    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    _log_http_event(
        log,
        phase="request",
        method=method,
        url=url,
        headers=_safe_headers_for_log(headers),
        request_id=request_id,
        timeout_seconds=timeout,
    )
    start = time.perf_counter()
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
                raise CliError(
                    "[ERROR] Response too large from claude.ai API "
                    f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
                )
            _log_http_event(
                log,
                phase="response",
                method=method,
                url=url,
                status=getattr(resp, "status", 200),
                content_type=resp.headers.get("Content-Type", ""),
                bytes=len(raw),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
            return raw.decode("utf-8", errors="replace")
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        _log_http_event(
            log,
            phase="response",
            method=method,
            url=url,
            status=e.code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
            request_id=request_id,
        )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e


def session_headers(session_key=None):
    """Standard headers for every claude.ai request."""
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    if session_key:
        headers["Cookie"] = f"{config.SESSION_COOKIE_NAME}={session_key}"
    return headers


def session_request(url, *, session_key=None, data=None, method="GET", timeout=None, log=None):
    """Make a request with the session cookie and return the raw body text."""
    return _http_request(
        url,
        data=data,
        headers=session_headers(session_key),
        method=method,
        timeout=timeout,
        log=log,
    )


def session_json(url, *, session_key=None, data=None, method="GET", timeout=None, log=None):
    """Like session_request, but parse the body as JSON. Empty bodies give None."""
    text = session_request(
        url, session_key=session_key, data=data, method=method, timeout=timeout, log=log
    )
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        raise UnexpectedResponseShape(
            f"[ERROR] Unexpected response from {method} {url} (not valid JSON)."
        ) from None


# ---------------------------------------------------------------------------
# Response-shape guards
# ---------------------------------------------------------------------------


def _expect_object_response(result, operation):
    """Ensure a JSON response is an object (dict)."""
    if isinstance(result, dict):
        return result
    raise UnexpectedResponseShape(
        f"[ERROR] Unexpected {operation} response shape: "
        f"expected JSON object, got {type(result).__name__}."
    )


def _expect_list_response(result, operation):
    """Ensure a JSON response is an array (list)."""
    if isinstance(result, list):
        return result
    raise UnexpectedResponseShape(
        f"[ERROR] Unexpected {operation} response shape: "
        f"expected JSON array, got {type(result).__name__}."
    )
