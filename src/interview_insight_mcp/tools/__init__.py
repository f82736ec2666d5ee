"""MCP tools and the interview analysis pipeline."""
