"""RpcDispatcher: routes decoded JSON-RPC messages to MCP handlers."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from mdproxy.errors import ProxyError
from mdproxy.rpc.models import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
    text_content,
)
from mdproxy.utils.telemetry import ATTR_RPC_METHOD, get_tracer

if TYPE_CHECKING:
    from mdproxy.tools.invoker import ToolInvoker

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

Handler = Callable[[JsonRpcRequest], Awaitable[dict[str, Any] | None]]


class RpcDispatcher:
    """Maps method names to handlers and decides whether a response is owed.

    Each call to :meth:`dispatch` is independent; concurrent calls may
    finish in any order.

    Usage::

        dispatcher = RpcDispatcher(invoker, server_name="@deshell/mcp", version="0.1.0")
        response = await dispatcher.dispatch({"jsonrpc": "2.0", "id": 1, "method": "ping"})
    """

    def __init__(self, invoker: ToolInvoker, *, server_name: str, version: str) -> None:
        self._invoker = invoker
        self._server_info = ServerInfo(name=server_name, version=version)
        self._handlers: dict[str, Handler] = {
            "initialize": self._initialize,
            "initialized": self._notification,
            "notifications/initialized": self._notification,
            "ping": self._ping,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
        }

    @property
    def methods(self) -> list[str]:
        return list(self._handlers)

    async def dispatch(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """Handle one decoded message; return the wire response or ``None``."""
        request = JsonRpcRequest.from_message(message)
        response = await self.handle(request)
        return response.to_wire() if response is not None else None

    async def handle(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        handler = self._handlers.get(request.method)
        if handler is None:
            if request.is_notification:
                logger.debug("Ignoring unknown notification %r", request.method)
                return None
            return JsonRpcResponse.failure(
                request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}"
            )

        with _tracer.start_as_current_span("mdproxy.rpc.dispatch") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            try:
                result = await handler(request)
            except ProxyError as exc:
                logger.info("%s failed: %s", request.method, exc)
                return self._error(request, str(exc))
            except Exception as exc:
                logger.exception("Unexpected error handling %s", request.method)
                return self._error(request, str(exc) or type(exc).__name__)

        if result is None or request.is_notification:
            return None
        return JsonRpcResponse.success(request.id, result)

    @staticmethod
    def _error(request: JsonRpcRequest, message: str) -> JsonRpcResponse | None:
        if request.is_notification:
            return None
        return JsonRpcResponse.failure(request.id, INTERNAL_ERROR, message)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _initialize(self, request: JsonRpcRequest) -> dict[str, Any]:
        return InitializeResult(server_info=self._server_info).to_wire()

    async def _notification(self, request: JsonRpcRequest) -> None:
        return None

    async def _ping(self, request: JsonRpcRequest) -> dict[str, Any]:
        return {}

    async def _tools_list(self, request: JsonRpcRequest) -> dict[str, Any]:
        return {"tools": [d.to_wire() for d in self._invoker.registry.descriptors()]}

    async def _tools_call(self, request: JsonRpcRequest) -> dict[str, Any]:
        params = request.params or {}
        arguments = params.get("arguments")
        if not isinstance(arguments, dict):
            arguments = {}
        text = await self._invoker.invoke(params.get("name"), arguments)
        return text_content(text)
