"""MCP server exposing the inFakt invoicing API as tools."""

__version__ = "1.0.0"
