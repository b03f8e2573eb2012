"""
Typed response schemas and request payloads for the claude.ai web API.

Each ``from_value`` classmethod validates a decoded JSON value and raises
UnexpectedResponseShape on missing or mistyped fields.
"""

import mimetypes
import os
from dataclasses import asdict, dataclass, field

from claudeai_cli.exceptions import UnexpectedResponseShape, ValidationError


def _require_dict(value, context):
    if not isinstance(value, dict):
        raise UnexpectedResponseShape(
            f"[ERROR] Unexpected {context} shape: expected JSON object, "
            f"got {type(value).__name__}."
        )
    return value


def _require_str(data, key, context):
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise UnexpectedResponseShape(
            f"[ERROR] Unexpected {context} shape: missing string field '{key}'."
        )
    return value


def _optional_str(data, key, context, default=None):
    value = data.get(key, default)
    if value is None or isinstance(value, str):
        return value
    raise UnexpectedResponseShape(
        f"[ERROR] Unexpected {context} shape: field '{key}' must be a string, "
        f"got {type(value).__name__}."
    )


@dataclass(frozen=True)
class Account:
    """The logged-in account and its first organization."""

    uuid: str
    organization_uuid: str
    email_address: str | None = None
    full_name: str | None = None
    display_name: str | None = None
    organization_name: str | None = None

    @classmethod
    def from_value(cls, value):
        data = _require_dict(value, "account")
        memberships = data.get("memberships")
        if not isinstance(memberships, list) or not memberships:
            raise UnexpectedResponseShape(
                "[ERROR] Unexpected account shape: no organization memberships."
            )
        membership = _require_dict(memberships[0], "account membership")
        org = _require_dict(membership.get("organization"), "account organization")
        return cls(
            uuid=_require_str(data, "uuid", "account"),
            organization_uuid=_require_str(org, "uuid", "account organization"),
            email_address=_optional_str(data, "email_address", "account"),
            full_name=_optional_str(data, "full_name", "account"),
            display_name=_optional_str(data, "display_name", "account"),
            organization_name=_optional_str(org, "name", "account organization"),
        )

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class ChatSummary:
    """One entry of the chat list."""

    uuid: str
    name: str = ""
    summary: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_value(cls, value):
        data = _require_dict(value, "chat")
        return cls(
            uuid=_require_str(data, "uuid", "chat"),
            name=_optional_str(data, "name", "chat", "") or "",
            summary=_optional_str(data, "summary", "chat"),
            created_at=_optional_str(data, "created_at", "chat"),
            updated_at=_optional_str(data, "updated_at", "chat"),
        )

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class ChatMessage:
    uuid: str | None
    text: str
    sender: str
    index: int | None = None
    created_at: str | None = None

    @classmethod
    def from_value(cls, value):
        data = _require_dict(value, "chat message")
        index = data.get("index")
        if index is not None and (isinstance(index, bool) or not isinstance(index, int)):
            raise UnexpectedResponseShape(
                "[ERROR] Unexpected chat message shape: field 'index' must be an integer."
            )
        return cls(
            uuid=_optional_str(data, "uuid", "chat message"),
            text=_optional_str(data, "text", "chat message", "") or "",
            sender=_optional_str(data, "sender", "chat message", "") or "",
            index=index,
            created_at=_optional_str(data, "created_at", "chat message"),
        )


@dataclass(frozen=True)
class ChatDetail:
    """A chat with its full message history."""

    uuid: str
    name: str = ""
    summary: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    messages: list[ChatMessage] = field(default_factory=list)

    @classmethod
    def from_value(cls, value):
        summary = ChatSummary.from_value(value)
        raw_messages = value.get("chat_messages", [])
        if raw_messages is None:
            raw_messages = []
        if not isinstance(raw_messages, list):
            raise UnexpectedResponseShape(
                "[ERROR] Unexpected chat shape: 'chat_messages' must be an array."
            )
        return cls(
            uuid=summary.uuid,
            name=summary.name,
            summary=summary.summary,
            created_at=summary.created_at,
            updated_at=summary.updated_at,
            messages=[ChatMessage.from_value(m) for m in raw_messages],
        )

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Attachment:
    """Text-extracted file payload sent alongside a message."""

    file_name: str
    file_size: int
    file_type: str
    extracted_content: str

    @classmethod
    def from_file(cls, path):
        """Read a local text file into an attachment."""
        try:
            with open(path, encoding="utf-8") as f:
                content = f.read()
            file_size = os.path.getsize(path)
        except FileNotFoundError:
            raise ValidationError(f"[ERROR] Attachment not found: {path}") from None
        except UnicodeDecodeError:
            raise ValidationError(
                f"[ERROR] Attachment is not UTF-8 text: {path}"
            ) from None
        except OSError as e:
            raise ValidationError(
                f"[ERROR] Cannot read attachment {path}: {e.strerror or e}"
            ) from None
        file_type = mimetypes.guess_type(path)[0] or "text/plain"
        return cls(
            file_name=os.path.basename(path),
            file_size=file_size,
            file_type=file_type,
            extracted_content=content,
        )

    def to_payload(self):
        return asdict(self)


@dataclass(frozen=True)
class BulkDeleteResult:
    """Per-chat outcomes of delete_all_chats."""

    deleted: list[str]
    failed: list[dict]

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self):
        return {
            "ok": self.ok,
            "deleted": list(self.deleted),
            "failed": [dict(f) for f in self.failed],
            "deleted_count": len(self.deleted),
            "failed_count": len(self.failed),
        }
