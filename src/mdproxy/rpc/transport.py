"""Stdio transport: newline-delimited JSON-RPC framing and the serve loop.

:class:`StdioFramer` turns arbitrary text chunks into complete lines;
:class:`StdioServer` parses each line, hands it to the dispatcher as an
independent task, and writes responses back one JSON object per line.
"""

from __future__ import annotations

import asyncio
import codecs
import json
import logging
import os
import stat
import sys
from typing import TYPE_CHECKING, Any, BinaryIO, TextIO

from mdproxy.rpc.models import PARSE_ERROR, JsonRpcResponse

if TYPE_CHECKING:
    from mdproxy.rpc.dispatcher import RpcDispatcher

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024

_background: set[asyncio.Task[None]] = set()


def _reject_constant(name: str) -> Any:
    msg = f"{name} is not valid JSON"
    raise ValueError(msg)


def decode_frame(frame: str) -> Any:
    """Parse one frame as strict JSON.

    ``NaN``/``Infinity`` are rejected. Any failure, including nesting too
    deep for the parser, raises :class:`ValueError`.
    """
    try:
        return json.loads(frame, parse_constant=_reject_constant)
    except RecursionError as exc:
        msg = "JSON nesting too deep"
        raise ValueError(msg) from exc


class StdioFramer:
    """Splits a text stream into newline-terminated frames.

    The last, possibly incomplete, segment stays buffered until more data
    arrives. Blank lines are dropped.
    """

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, chunk: str) -> list[str]:
        self._buffer += chunk
        *lines, self._buffer = self._buffer.split("\n")
        return [line for line in lines if line.strip()]


class StdioServer:
    """Reads frames from *reader* and writes responses to *output*.

    Frames are dispatched as separate tasks so a slow ``tools/call`` never
    blocks the frames behind it. Every task runs up to its first I/O wait
    before the next read, so calls that need no network are answered even
    when EOF is already buffered. At end of input the partial trailing
    line is discarded and calls still waiting on the network are cancelled.
    """

    def __init__(
        self,
        dispatcher: RpcDispatcher,
        reader: asyncio.StreamReader,
        output: TextIO,
    ) -> None:
        self._dispatcher = dispatcher
        self._reader = reader
        self._output = output
        self._framer = StdioFramer()
        self._tasks: set[asyncio.Task[None]] = set()

    async def serve(self) -> None:
        """Run until EOF on the reader."""
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            data = await self._reader.read(READ_CHUNK_SIZE)
            if not data:
                break
            for frame in self._framer.feed(decoder.decode(data)):
                self._process_frame(frame)
            await asyncio.sleep(0)

        if self._framer.pending.strip():
            logger.debug("Discarding unterminated input at EOF")
        if self._tasks:
            logger.debug("stdin closed, abandoning %d in-flight call(s)", len(self._tasks))
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    def _process_frame(self, frame: str) -> None:
        try:
            message = decode_frame(frame)
        except ValueError:
            logger.warning("Malformed JSON frame: %.200s", frame)
            self.write(JsonRpcResponse.failure(None, PARSE_ERROR, "Parse error").to_wire())
            return

        if not isinstance(message, dict):
            logger.warning("Ignoring non-object JSON-RPC frame: %.200s", frame)
            return

        task = asyncio.get_running_loop().create_task(self._dispatch(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _dispatch(self, message: dict[str, Any]) -> None:
        response = await self._dispatcher.dispatch(message)
        if response is not None:
            self.write(response)

    def write(self, payload: dict[str, Any]) -> None:
        self._output.write(json.dumps(payload, allow_nan=False) + "\n")
        self._output.flush()


async def connect_stdin() -> asyncio.StreamReader:
    """Wrap the process's stdin in an :class:`asyncio.StreamReader`.

    Pipes, sockets and terminals are watched by the event loop. Anything
    else (a redirected file, ``/dev/null``) is read in a worker thread.
    """
    reader = asyncio.StreamReader(limit=READ_CHUNK_SIZE * 16)
    if _is_pollable(sys.stdin.fileno()):
        loop = asyncio.get_running_loop()
        protocol = asyncio.StreamReaderProtocol(reader)
        await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    else:
        task = asyncio.create_task(pump_stream(sys.stdin.buffer, reader))
        _background.add(task)
        task.add_done_callback(_background.discard)
    return reader


def _is_pollable(fd: int) -> bool:
    mode = os.fstat(fd).st_mode
    return stat.S_ISFIFO(mode) or stat.S_ISSOCK(mode) or os.isatty(fd)


async def pump_stream(stream: BinaryIO, reader: asyncio.StreamReader) -> None:
    """Copy *stream* into *reader* from a worker thread until EOF."""
    loop = asyncio.get_running_loop()
    read = getattr(stream, "read1", stream.read)
    while True:
        try:
            chunk = await loop.run_in_executor(None, read, READ_CHUNK_SIZE)
        except OSError as exc:
            reader.set_exception(exc)
            return
        if not chunk:
            break
        reader.feed_data(chunk)
    reader.feed_eof()
