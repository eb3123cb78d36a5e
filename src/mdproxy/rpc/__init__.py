"""JSON-RPC layer: message models, method dispatch, and stdio framing."""

from mdproxy.rpc.dispatcher import RpcDispatcher
from mdproxy.rpc.models import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PROTOCOL_VERSION,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
)
from mdproxy.rpc.transport import StdioFramer, StdioServer

__all__ = [
    "INTERNAL_ERROR",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "PROTOCOL_VERSION",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "RpcDispatcher",
    "StdioFramer",
    "StdioServer",
]
