"""Tarif Calc MCP server."""
