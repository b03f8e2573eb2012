"""MCP server exposing ClaudeClient methods as tools.

Package structure:
  __init__.py       - FastMCP init, register() calls, re-exports
  __main__.py       - ``python -m claudeai_cli.mcp_server`` entry point
  _core.py          - Client caching, _call dispatcher, response contract
  _tools_read.py    - 3 account/chat read tools
  _tools_write.py   - 6 chat mutation and messaging tools

Run: python -m claudeai_cli.mcp_server
Requires: pip install .[mcp]
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from claudeai_cli.log import setup_logging
from claudeai_cli.mcp_server import _tools_read, _tools_write

mcp = FastMCP(
    "claudeai",
    instructions=(
        "claude.ai chat tools. "
        "Chats are addressed by zero-based index into list_chats; indexes "
        "shift after create/delete, so list again before reusing one. "
        "delete_chat and delete_all_chats are permanent. "
        "If a result has 'warning', no chats exist."
    ),
)

for _mod in [_tools_read, _tools_write]:
    _mod.register(mcp)

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

from claudeai_cli.mcp_server._core import (  # noqa: E402, F401
    MCP_RESPONSE_MODE,
    _call,
    _contract_error,
    _ensure_contract_dict,
    _finalize_tool_result,
    _get_client,
)
from claudeai_cli.mcp_server._tools_read import (  # noqa: E402, F401
    get_account,
    get_chat,
    list_chats,
)
from claudeai_cli.mcp_server._tools_write import (  # noqa: E402, F401
    create_chat,
    delete_all_chats,
    delete_chat,
    generate_chat_title,
    rename_chat,
    send_message,
)


def main():
    """Run the MCP server (stdio transport)."""
    setup_logging()
    mcp.run()
