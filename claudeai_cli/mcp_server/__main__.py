from claudeai_cli.mcp_server import main

main()
