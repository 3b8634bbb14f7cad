"""MCP adapter — exposes the discovery actions as tools (requires stackscout[mcp])."""
