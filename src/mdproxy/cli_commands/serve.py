"""``mdproxy serve``: run the MCP stdio server."""

from __future__ import annotations

import asyncio

import click

from mdproxy.config import ServiceProfile


@click.command()
@click.pass_obj
def serve(profile: ServiceProfile) -> None:
    """Serve MCP tools over stdin/stdout until stdin closes."""
    from mdproxy.app import build_dispatcher, serve_stdio

    dispatcher = build_dispatcher(profile)
    asyncio.run(serve_stdio(dispatcher))
