"""Wiring: build the invoker/dispatcher stack for a profile and serve it."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from mdproxy import __version__
from mdproxy.config import resolve_credentials
from mdproxy.fetch import FetchClient
from mdproxy.rpc.dispatcher import RpcDispatcher
from mdproxy.rpc.transport import StdioServer, connect_stdin
from mdproxy.tools.invoker import ToolInvoker
from mdproxy.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from mdproxy.config import ProxyCredentials, ServiceProfile

logger = logging.getLogger(__name__)


def build_invoker(
    profile: ServiceProfile,
    credentials: ProxyCredentials | None = None,
    *,
    fetch_client: FetchClient | None = None,
) -> ToolInvoker:
    """Create a :class:`ToolInvoker`; credentials default to the environment."""
    return ToolInvoker(
        profile,
        credentials or resolve_credentials(profile),
        ToolRegistry.for_profile(profile),
        fetch_client or FetchClient(),
    )


def build_dispatcher(
    profile: ServiceProfile,
    credentials: ProxyCredentials | None = None,
    *,
    fetch_client: FetchClient | None = None,
) -> RpcDispatcher:
    invoker = build_invoker(profile, credentials, fetch_client=fetch_client)
    return RpcDispatcher(invoker, server_name=profile.server_name, version=__version__)


async def serve_stdio(dispatcher: RpcDispatcher) -> None:
    """Serve JSON-RPC over the process's stdin/stdout until stdin closes."""
    reader = await connect_stdin()
    logger.info("Serving MCP over stdio")
    await StdioServer(dispatcher, reader, sys.stdout).serve()
