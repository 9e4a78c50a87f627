"""Newline-delimited JSON-RPC over stdin/stdout or any pair of line streams."""

import asyncio
import json
import sys
from typing import Any, BinaryIO, Optional, Set, TextIO, Union

from ..core.logger import get_logger
from .dispatcher import RequestDispatcher

logger = get_logger(__name__)

ENCODING = "utf-8"


class LineTransport:
    """
    Reads one JSON-RPC message (or batch) per line and writes one response per line.

    Blocking reads run in a worker thread so the event loop keeps serving calls
    in flight. Byte input is decoded as UTF-8 with invalid sequences replaced,
    so an undecodable line is answered as a parse error instead of stopping
    the server. Every line is handled in its own task; responses are written in
    completion order, one whole line at a time.
    """

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        reader: Optional[Union[BinaryIO, TextIO]] = None,
        writer: Optional[TextIO] = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.reader: Union[BinaryIO, TextIO] = reader or sys.stdin.buffer
        self.writer = writer or sys.stdout
        self._write_lock = asyncio.Lock()
        self._tasks: Set["asyncio.Task[None]"] = set()

    async def serve(self) -> None:
        """Serve until the reader reaches end of file, then wait for pending calls."""
        logger.info("Serving JSON-RPC on line transport.")
        while True:
            raw = await asyncio.to_thread(self.reader.readline)
            if not raw:
                break
            line = raw.decode(ENCODING, errors="replace") if isinstance(raw, bytes) else raw
            if not line.strip():
                continue
            task = asyncio.create_task(self._handle(line))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        if self._tasks:
            await asyncio.gather(*self._tasks)
        logger.info("Input closed; transport stopped.")

    async def _handle(self, line: str) -> None:
        response = await self.dispatcher.handle_line(line)
        if response is not None:
            await self.send(response)

    async def send(self, response: Any) -> None:
        """Write one response as a single line."""
        payload = json.dumps(response, ensure_ascii=False)
        async with self._write_lock:
            self.writer.write(payload + "\n")
            self.writer.flush()
