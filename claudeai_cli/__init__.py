"""claudeai-cli: client library and CLI for claude.ai chats and account."""

from claudeai_cli.client import ClaudeClient
from claudeai_cli.config import VERSION
from claudeai_cli.exceptions import (
    CliError,
    EmptyResultWarning,
    HTTPError,
    MalformedChunkError,
    SetupError,
    UnexpectedResponseShape,
    ValidationError,
)
from claudeai_cli.models import (
    Account,
    Attachment,
    BulkDeleteResult,
    ChatDetail,
    ChatMessage,
    ChatSummary,
)
from claudeai_cli.stream import decode_completion_stream

__all__ = [
    "VERSION",
    "Account",
    "Attachment",
    "BulkDeleteResult",
    "ChatDetail",
    "ChatMessage",
    "ChatSummary",
    "ClaudeClient",
    "CliError",
    "EmptyResultWarning",
    "HTTPError",
    "MalformedChunkError",
    "SetupError",
    "UnexpectedResponseShape",
    "ValidationError",
    "decode_completion_stream",
]
