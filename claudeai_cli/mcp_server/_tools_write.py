"""Write tools: chat mutations and messaging (6 tools)."""

from __future__ import annotations

from claudeai_cli.exceptions import CliError
from claudeai_cli.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _validate_input,
)


def create_chat(name: str = "") -> dict:
    """Create a new empty chat.

    Returns:
        Dict with uuid and name of the created chat.
    """
    try:
        name = _validate_input(name, "name", max_len=500)
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_call("create_chat", name=name))


def rename_chat(index: int, name: str = "") -> dict:
    """Rename a chat. An empty name clears it."""
    try:
        name = _validate_input(name, "name", max_len=500)
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_call("rename_chat", chat_index=index, new_name=name))


def delete_chat(index: int) -> dict:
    """Permanently delete one chat. Cannot be undone.

    Returns:
        Dict with the deleted chat's uuid and name.
    """
    return _finalize_tool_result(_call("delete_chat", chat_index=index))


def delete_all_chats(confirm: bool = False) -> dict:
    """Permanently delete EVERY chat. Requires confirm=True.

    Returns:
        Dict with ok, deleted (uuids), failed ({uuid, error}), and counts.
        ok is False when any single deletion failed.
    """
    if not confirm:
        return _finalize_tool_result(
            _contract_error("delete_all_chats requires confirm=True.", "error")
        )
    result = _call("delete_all_chats")
    if isinstance(result, dict) and result.get("ok") is False and "failed" in result:
        result = dict(
            result,
            type="partial_failure",
            error=f"{result['failed_count']} of "
            f"{result['failed_count'] + result['deleted_count']} chat deletions failed.",
        )
    return _finalize_tool_result(result)


def send_message(index: int, message: str) -> dict:
    """Send a message to a chat and wait for the full reply.

    Returns:
        Dict with chat_index and reply.
    """
    try:
        message = _validate_input(message, "message")
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    result = _call("send_message", chat_index=index, message=message)
    if isinstance(result, str):
        return _finalize_tool_result({"chat_index": index, "reply": result})
    return _finalize_tool_result(result)


def generate_chat_title(index: int, message_hint: str) -> dict:
    """Have claude.ai title a chat from a hint. The title is applied to the chat.

    Returns:
        Dict with chat_index and title.
    """
    try:
        message_hint = _validate_input(message_hint, "message_hint", max_len=5_000)
    except CliError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    result = _call("generate_chat_title", chat_index=index, message_hint=message_hint)
    if isinstance(result, str):
        return _finalize_tool_result({"chat_index": index, "title": result})
    return _finalize_tool_result(result)


def register(mcp):
    """Register all write tools with the FastMCP instance."""
    mcp.tool()(create_chat)
    mcp.tool()(rename_chat)
    mcp.tool()(delete_chat)
    mcp.tool()(delete_all_chats)
    mcp.tool()(send_message)
    mcp.tool()(generate_chat_title)
