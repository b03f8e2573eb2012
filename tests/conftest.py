"""
Shared test fixtures for claudeai-cli tests.
Patches config module to avoid loading a real .env and making API calls.
"""

import json
import os
import sys

import pytest

# Add project root to path so imports work without installing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

BASE = "https://claude.ai/api"
ORG = "11111111-1111-1111-1111-111111111111"
CHAT_A = "aaaaaaaa-0000-0000-0000-000000000001"
CHAT_B = "bbbbbbbb-0000-0000-0000-000000000002"

ACCOUNT_JSON = {
    "uuid": "user-1",
    "email_address": "ada@example.com",
    "full_name": "Ada Lovelace",
    "display_name": "Ada",
    "memberships": [{"organization": {"uuid": ORG, "name": "Personal"}}],
}

CHATS_JSON = [
    {"uuid": CHAT_A, "name": "First", "updated_at": "2024-01-02T10:00:00Z"},
    {"uuid": CHAT_B, "name": "Second", "updated_at": "2024-01-01T10:00:00Z"},
]


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state.
    Prevents tests from reading the real .env or the host timezone."""
    from claudeai_cli import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "SESSION_KEY", "fake-session-key")
    monkeypatch.setattr(config, "BASE_URL", BASE)
    monkeypatch.setattr(config, "MODEL", "claude-2.1")
    monkeypatch.setattr(config, "TIMEZONE", "Europe/Berlin")
    monkeypatch.setattr(config, "HTTP_TIMEOUT_SECONDS", None)
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "MCP_RESPONSE_MODE", "legacy")
    monkeypatch.setattr(config, "RUNTIME_DRY_RUN", False)
    monkeypatch.setattr(config, "RUNTIME_QUIET", False)
    monkeypatch.setattr(config, "RUNTIME_VERBOSE", False)


class FakeApi:
    """Stand-in for api.session_request, routed by (method, path).

    Route values may be a JSON-able object, a raw string, or an exception
    to raise.
    """

    def __init__(self, routes=None):
        self.routes = {
            ("GET", "/account"): ACCOUNT_JSON,
            ("GET", f"/organizations/{ORG}/chat_conversations"): CHATS_JSON,
        }
        self.routes.update(routes or {})
        self.calls = []

    def __call__(self, url, *, session_key=None, data=None, method="GET", timeout=None, log=None):
        path = url[len(BASE) :]
        self.calls.append((method, path, data))
        try:
            resp = self.routes[(method, path)]
        except KeyError:
            raise AssertionError(f"unexpected request {method} {path}") from None
        if isinstance(resp, Exception):
            raise resp
        if isinstance(resp, str):
            return resp
        return json.dumps(resp)

    def paths(self, method=None):
        return [p for m, p, _ in self.calls if method is None or m == method]


@pytest.fixture
def fake_api(monkeypatch):
    fake = FakeApi()
    monkeypatch.setattr("claudeai_cli.api.session_request", fake)
    return fake
