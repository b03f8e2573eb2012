"""Read tools: account and chats (3 tools)."""

from __future__ import annotations

from claudeai_cli.mcp_server._core import _call, _finalize_tool_result


def get_account() -> dict:
    """Get the logged-in claude.ai account.

    Returns:
        Dict with uuid, email_address, full_name, display_name,
        organization_uuid, organization_name.
    """
    return _finalize_tool_result(_call("get_account"))


def list_chats() -> dict:
    """List all chats. A chat's position in the list is its ``index`` for other tools.

    Indexes shift after create/delete, so list again before reusing one.

    Returns:
        Dict with chats (list of {index, uuid, name, created_at, updated_at}) and total_count.
    """
    result = _call("list_chats")
    if isinstance(result, list):
        chats = [dict(chat, index=i) for i, chat in enumerate(result)]
        return _finalize_tool_result({"chats": chats, "total_count": len(chats)})
    return _finalize_tool_result(result)


def get_chat(index: int) -> dict:
    """Get one chat with its message history.

    Args:
        index: Zero-based position from list_chats.
    """
    return _finalize_tool_result(_call("get_chat", chat_index=index))


def register(mcp):
    """Register all read tools with the FastMCP instance."""
    mcp.tool()(get_account)
    mcp.tool()(list_chats)
    mcp.tool()(get_chat)
