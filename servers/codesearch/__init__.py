"""Zoekt code search MCP server."""

from .config import ServerConfig

__all__ = ["ServerConfig"]
