"""Run the claude.ai MCP server in streamable-http mode."""

import os

from claudeai_cli.log import setup_logging
from claudeai_cli.mcp_server import mcp

if __name__ == "__main__":
    setup_logging()
    mcp.settings.host = os.environ.get("MCP_HTTP_HOST", "127.0.0.1")
    mcp.settings.port = int(os.environ.get("MCP_HTTP_PORT", "8808"))
    mcp.run(transport="streamable-http")
