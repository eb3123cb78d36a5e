"""mdproxy: MCP stdio server for Markdown content-proxy tools."""

from __future__ import annotations

__version__ = "0.1.0"
