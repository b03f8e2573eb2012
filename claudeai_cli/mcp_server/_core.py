"""Core helpers: client caching, _call dispatcher, response contract."""

from __future__ import annotations

import http.client

from claudeai_cli.client import ClaudeClient
from claudeai_cli.config import CONTRACT_SCHEMA_VERSION, MCP_RESPONSE_MODE
from claudeai_cli.exceptions import CliError, EmptyResultWarning, HTTPError
from claudeai_cli.formatters._core import _jsonable

_client: ClaudeClient | None = None


def _get_client() -> ClaudeClient:
    """Return a cached ClaudeClient, creating one on first use."""
    global _client
    if _client is None:
        _client = ClaudeClient()
    return _client


def _contract_error(message: str, error_type: str = "error") -> dict:
    """Return a stable MCP error envelope with legacy compatibility fields."""
    return {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "type": error_type,  # legacy
        "error": message,  # legacy
        "error_detail": {
            "type": error_type,
            "message": message,
        },
    }


def _ensure_contract_dict(payload: dict) -> dict:
    """Add stable contract metadata to dict responses."""
    out = dict(payload)
    out.setdefault("schema_version", CONTRACT_SCHEMA_VERSION)
    if out.get("ok") is False:
        error_type = str(out.get("type", "error"))
        error_message = out.get("error", "Unknown error")
        if not isinstance(error_message, str):
            error_message = str(error_message)
            out["error"] = error_message
        out.setdefault("error_detail", {"type": error_type, "message": error_message})
        return out
    out.setdefault("ok", True)
    return out


def _finalize_tool_result(result):
    """Finalize tool response based on configured MCP response mode.

    Modes:
        - legacy (default): preserve top-level shapes; dicts gain
          contract metadata (ok/schema_version).
        - envelope: always return {"ok", "schema_version", "data"} for success.
    """
    if isinstance(result, dict):
        normalized = _ensure_contract_dict(result)
        if normalized.get("ok") is False:
            return normalized
        if MCP_RESPONSE_MODE == "envelope":
            data = dict(normalized)
            data.pop("ok", None)
            data.pop("schema_version", None)
            return {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": data}
        return normalized
    if MCP_RESPONSE_MODE == "envelope":
        return {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": result}
    return result


_ALLOWED_METHODS = {
    "get_account",
    "list_chats",
    "get_chat",
    "create_chat",
    "rename_chat",
    "delete_chat",
    "delete_all_chats",
    "send_message",
    "generate_chat_title",
}


def _call(method_name: str, **kwargs):
    """Call a ClaudeClient method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        return _jsonable(getattr(client, method_name)(**kwargs))
    except EmptyResultWarning as e:
        return {"ok": True, "warning": str(e), "empty": True}
    except CliError as e:
        return _contract_error(str(e), "error")
    except HTTPError as e:
        error_type = "session_expired" if e.code in (401, 403) else "http"
        return _contract_error(f"HTTP {e.code}: {e.reason}", error_type)
    except (OSError, http.client.HTTPException) as e:
        return _contract_error(f"Connection failed: {getattr(e, 'reason', e)}", "network")
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")


def _validate_input(value: str, field: str, max_len: int = 50_000) -> str:
    """Reject non-string or oversized tool input."""
    if not isinstance(value, str):
        raise CliError(f"[ERROR] {field} must be a string.")
    if len(value) > max_len:
        raise CliError(f"[ERROR] {field} exceeds {max_len} characters.")
    return value
