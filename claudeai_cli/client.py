"""
ClaudeClient: public Python API for a claude.ai web session.

One client per authenticated context. It holds the session cookie, the
endpoint table, and the organization id (looked up lazily on first use).
Methods return typed records from claudeai_cli.models and raise
CliError subclasses on bad input or bad responses. Transport errors
(HTTPError, urllib.error.URLError) propagate unchanged.
"""

from __future__ import annotations

import dataclasses
import http.client
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from claudeai_cli import api, config
from claudeai_cli.exceptions import (
    CliError,
    EmptyResultWarning,
    HTTPError,
    UnexpectedResponseShape,
    ValidationError,
)
from claudeai_cli.log import get_logger
from claudeai_cli.models import Account, Attachment, BulkDeleteResult, ChatDetail, ChatSummary
from claudeai_cli.stream import iter_completion_chunks, join_completion_chunks

# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


def _validate_chat_index(chat_index):
    """Reject anything that is not a plain int (bools included)."""
    if isinstance(chat_index, bool) or not isinstance(chat_index, int):
        raise ValidationError(
            f"[ERROR] Chat index must be an integer, got {type(chat_index).__name__}."
        )
    return chat_index


def _validate_text(value, field):
    """Require a non-blank string."""
    if value is None or value == "":
        raise ValidationError(f"[ERROR] {field} is required.")
    if not isinstance(value, str):
        raise ValidationError(f"[ERROR] {field} must be a string, got {type(value).__name__}.")
    if not value.strip():
        raise ValidationError(f"[ERROR] {field} must not be empty.")
    return value


def _validate_name(value, field):
    """Names may be empty, but must be strings."""
    if not isinstance(value, str):
        raise ValidationError(f"[ERROR] {field} must be a string, got {type(value).__name__}.")
    return value


def _select_chat(chats, chat_index):
    """Pick a chat by position in a freshly fetched list."""
    if not chats:
        raise EmptyResultWarning("[WARN] No chats found.")
    if chat_index < 0 or chat_index >= len(chats):
        raise ValidationError(
            f"[ERROR] Chat index {chat_index} is out of bounds (0-{len(chats) - 1})."
        )
    return chats[chat_index]


def _validate_attachments(attachments):
    items = list(attachments or ())
    for item in items:
        if not isinstance(item, Attachment):
            raise ValidationError(
                f"[ERROR] Attachments must be Attachment records, got {type(item).__name__}."
            )
    return items


# ---------------------------------------------------------------------------
# ClaudeClient
# ---------------------------------------------------------------------------


class ClaudeClient:
    """Session object for the claude.ai web API.

    All chat-selecting methods take a zero-based index into the chat list
    as it is at call time; the list is re-fetched on every such call.
    """

    def __init__(
        self,
        session_key: str | None = None,
        *,
        base_url: str | None = None,
        model: str | None = None,
        timezone: str | None = None,
        timeout: float | None = None,
        logger=None,
    ):
        """Initialize the client.

        Args:
            session_key: Value of the ``sessionKey`` cookie. Defaults to
                CLAUDEAI_SESSION_KEY.
            base_url: API root. Defaults to CLAUDEAI_BASE_URL.
            model: Completion model for send_message.
            timezone: IANA timezone sent with completions.
            timeout: Transport timeout in seconds; None blocks until the
                request resolves or fails.
            logger: A logging.Logger; defaults to the package logger.
        """
        self.session_key = config.SESSION_KEY if session_key is None else session_key
        self.model = model or config.MODEL
        self.timezone = timezone or config.TIMEZONE
        self.timeout = config.HTTP_TIMEOUT_SECONDS if timeout is None else timeout
        self.log = logger or get_logger()
        self.endpoints = api.build_endpoints(base_url)
        self._org_uuid: str | None = None
        self._org_lock = threading.Lock()

    # -------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------

    def _request(self, endpoint, *, data=None, method="GET", **params):
        url = self.endpoints[endpoint].url(**params)
        return api.session_request(
            url,
            session_key=self.session_key,
            data=data,
            method=method,
            timeout=self.timeout,
            log=self.log,
        )

    def _request_json(self, endpoint, *, data=None, method="GET", **params):
        url = self.endpoints[endpoint].url(**params)
        return api.session_json(
            url,
            session_key=self.session_key,
            data=data,
            method=method,
            timeout=self.timeout,
            log=self.log,
        )

    @property
    def organization_uuid(self) -> str:
        """Organization id, fetched from the account on first access."""
        org = self._org_uuid
        if org is None:
            org = self.get_account().organization_uuid
        return org

    def resolve_chat(self, chat_index: int) -> ChatSummary:
        """Return the chat currently at *chat_index* in the chat list."""
        _validate_chat_index(chat_index)
        return _select_chat(self.list_chats(), chat_index)

    # -------------------------------------------------------------------
    # Account
    # -------------------------------------------------------------------

    def get_account(self) -> Account:
        """Get the logged-in account and cache its organization id."""
        account = Account.from_value(
            api._expect_object_response(self._request_json(api.ACCOUNT), "account")
        )
        with self._org_lock:
            if self._org_uuid is None:
                self._org_uuid = account.organization_uuid
                self.log.debug("Using organization %s", account.organization_uuid)
        return account

    def update_account(self, *, display_name: str, full_name: str) -> dict[str, Any]:
        """Change the account's display name and full name."""
        _validate_text(display_name, "Display name")
        _validate_text(full_name, "Full name")
        result = self._request_json(
            api.CURRENT_ACCOUNT,
            data={"display_name": display_name, "full_name": full_name},
            method="PUT",
        )
        if result is None:
            result = {}
        self.log.info("Account updated")
        return api._expect_object_response(result, "update account")

    def logout(self) -> None:
        """End the web session and forget the cached organization id."""
        self._request(api.LOGOUT, method="POST")
        with self._org_lock:
            self._org_uuid = None
        self.log.info("Logged out")

    # -------------------------------------------------------------------
    # Chats
    # -------------------------------------------------------------------

    def list_chats(self) -> list[ChatSummary]:
        """List every chat in the organization, in server order."""
        result = self._request_json(api.ALL_CHATS, org=self.organization_uuid)
        return [
            ChatSummary.from_value(item)
            for item in api._expect_list_response(result, "chat list")
        ]

    def get_chat(self, chat_index: int) -> ChatDetail:
        """Get one chat with its messages."""
        chat = self.resolve_chat(chat_index)
        result = self._request_json(api.SINGLE_CHAT, org=self.organization_uuid, chat=chat.uuid)
        return ChatDetail.from_value(api._expect_object_response(result, "chat"))

    def create_chat(self, name: str = "") -> ChatSummary:
        """Create an empty chat. The uuid is generated client-side."""
        _validate_name(name, "Chat name")
        result = self._request_json(
            api.ALL_CHATS,
            data={"uuid": str(uuid.uuid4()), "name": name},
            method="POST",
            org=self.organization_uuid,
        )
        chat = ChatSummary.from_value(api._expect_object_response(result, "create chat"))
        self.log.info("Chat created with UUID %s", chat.uuid)
        return chat

    def rename_chat(self, chat_index: int, new_name: str = "") -> ChatSummary:
        """Set a chat's title by hand."""
        _validate_chat_index(chat_index)
        _validate_name(new_name, "Chat name")
        chat = _select_chat(self.list_chats(), chat_index)
        self._request(
            api.SINGLE_CHAT,
            data={"name": new_name},
            method="PUT",
            org=self.organization_uuid,
            chat=chat.uuid,
        )
        self.log.info("Chat %s renamed", chat.uuid)
        return dataclasses.replace(chat, name=new_name)

    def delete_chat(self, chat_index: int) -> ChatSummary:
        """Delete one chat; returns the summary of the chat removed."""
        chat = self.resolve_chat(chat_index)
        self._request(
            api.SINGLE_CHAT, method="DELETE", org=self.organization_uuid, chat=chat.uuid
        )
        self.log.info("Chat %s deleted", chat.uuid)
        return chat

    def delete_all_chats(self) -> BulkDeleteResult:
        """Delete every chat concurrently, one request per chat.

        There is no ordering between the requests and no cap on how many
        run at once. A failed deletion does not stop the others; check
        ``result.ok`` and ``result.failed``.
        """
        chats = self.list_chats()
        if not chats:
            raise EmptyResultWarning("[WARN] No chats found.")
        org = self.organization_uuid

        def _delete(chat_uuid):
            self._request(api.SINGLE_CHAT, method="DELETE", org=org, chat=chat_uuid)

        deleted = []
        failed = []
        with ThreadPoolExecutor(max_workers=len(chats)) as pool:
            futures = [(chat.uuid, pool.submit(_delete, chat.uuid)) for chat in chats]
            for chat_uuid, future in futures:
                try:
                    future.result()
                except (CliError, HTTPError, OSError, http.client.HTTPException) as e:
                    self.log.error("Failed to delete chat %s: %s", chat_uuid, e)
                    failed.append({"uuid": chat_uuid, "error": str(e)})
                else:
                    deleted.append(chat_uuid)

        if failed:
            self.log.warning("Deleted %d of %d chats", len(deleted), len(chats))
        else:
            self.log.info("Deleted all %d chats", len(deleted))
        return BulkDeleteResult(deleted=deleted, failed=failed)

    # -------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------

    def send_message(
        self,
        chat_index: int,
        message: str,
        *,
        attachments: list[Attachment] | tuple[Attachment, ...] = (),
    ) -> str:
        """Send a message to a chat and return the full decoded reply."""
        _validate_chat_index(chat_index)
        _validate_text(message, "Message")
        items = _validate_attachments(attachments)
        chat = _select_chat(self.list_chats(), chat_index)
        body = self._request(
            api.SEND_MESSAGE,
            data={
                "completion": {
                    "prompt": message,
                    "timezone": self.timezone,
                    "model": self.model,
                },
                "organization_uuid": self.organization_uuid,
                "conversation_uuid": chat.uuid,
                "text": message,
                "attachments": [a.to_payload() for a in items],
            },
            method="POST",
        )
        chunks = list(iter_completion_chunks(body))
        if chunks:
            self.log.debug("Completion stop reason: %s", chunks[-1].get("stop_reason"))
        return join_completion_chunks(chunks)

    def generate_chat_title(self, chat_index: int, message_hint: str) -> str:
        """Have the server title a chat from a hint. The title is applied server-side."""
        _validate_chat_index(chat_index)
        _validate_text(message_hint, "Message hint")
        chat = _select_chat(self.list_chats(), chat_index)
        result = api._expect_object_response(
            self._request_json(
                api.GENERATE_CHAT_TITLE,
                data={
                    "organization_uuid": self.organization_uuid,
                    "conversation_uuid": chat.uuid,
                    "message_content": message_hint,
                    "recent_titles": [],
                },
                method="POST",
            ),
            "generate title",
        )
        title = result.get("title")
        if not isinstance(title, str):
            raise UnexpectedResponseShape(
                "[ERROR] Unexpected generate title shape: missing string field 'title'."
            )
        return title
