"""MCP server entry point for podsync."""
