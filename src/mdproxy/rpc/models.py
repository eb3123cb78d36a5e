"""JSON-RPC 2.0 messages as used over the MCP stdio transport."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603

RequestId = int | float | str | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """An incoming request or notification (``id is None``)."""

    jsonrpc: str = "2.0"
    method: str = ""
    id: RequestId = None
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        return self.id is None

    @classmethod
    def from_message(cls, message: dict[str, Any]) -> JsonRpcRequest:
        """Lenient decode: wrong-typed fields become empty instead of failing."""
        raw_id = message.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int | float | str):
            raw_id = None
        method = message.get("method")
        params = message.get("params")
        return cls(
            method=method if isinstance(method, str) else "",
            id=raw_id,
            params=params if isinstance(params, dict) else None,
        )


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response; exactly one of ``result``/``error`` is set."""

    jsonrpc: str = "2.0"
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: RequestId, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, code: int, message: str) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message))

    def to_wire(self) -> dict[str, Any]:
        """Serialize with ``id`` always present and only one of result/error."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump()
        else:
            data["result"] = self.result if self.result is not None else {}
        return data


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    """Result of the ``initialize`` handshake."""

    protocol_version: str = PROTOCOL_VERSION
    capabilities: dict[str, Any] = {"tools": {}}
    server_info: ServerInfo

    def to_wire(self) -> dict[str, Any]:
        return {
            "protocolVersion": self.protocol_version,
            "capabilities": self.capabilities,
            "serverInfo": self.server_info.model_dump(),
        }


def text_content(text: str) -> dict[str, Any]:
    """Wrap *text* as a ``tools/call`` result with one text content block."""
    return {"content": [{"type": "text", "text": text}]}
