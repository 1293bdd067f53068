"""Ship loguru records to the host's log through ``logMessage`` commands.

The sink only queues; :func:`forward_logs` drains the queue into a socket from
its own task, so logging never waits on the network::

    sink = HostLogSink()
    install_host_log_sink(sink, level="INFO")
    asyncio.create_task(forward_logs(sender, sink))
"""

from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger

from deckbridge.errors import TransportError
from deckbridge.protocol.commands import LogMessage
from deckbridge.protocol.types import LogMessagePayload

SHORT_LEVELS = {
    "CRITICAL": "CRIT",
    "ERROR": "ERRO",
    "WARNING": "WARN",
    "SUCCESS": "INFO",
    "INFO": "INFO",
    "DEBUG": "DEBG",
    "TRACE": "TRCE",
}


def format_record(record: dict[str, Any]) -> str:
    """Render ``"<LVL> <message>, key: value, ..."`` with the record's bound extras."""
    name = record["level"].name
    parts = [f"{SHORT_LEVELS.get(name, name[:4])} {record['message']}"]
    parts.extend(f"{key}: {value}" for key, value in record["extra"].items())
    return ", ".join(parts)


class HostLogSink:
    """Loguru sink that turns every record into a queued :class:`LogMessage`.

    Must be created on the event loop that runs :func:`forward_logs`; records
    logged from other threads are handed over thread-safely. Records are
    dropped once the queue holds ``maxsize`` commands or after :meth:`stop`.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None, maxsize: int = 1000):
        self._loop = loop or asyncio.get_running_loop()
        self.queue: asyncio.Queue[LogMessage] = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0
        self.stopped = False

    def stop(self) -> None:
        """Stop queuing; later records are discarded."""
        self.stopped = True

    def _put(self, command: LogMessage) -> None:
        if self.stopped:
            return
        try:
            self.queue.put_nowait(command)
        except asyncio.QueueFull:
            self.dropped += 1

    def __call__(self, message: Any) -> None:
        if self.stopped:
            return
        command = LogMessage(payload=LogMessagePayload(message=format_record(message.record)))
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._put(command)
        else:
            self._loop.call_soon_threadsafe(self._put, command)


def install_host_log_sink(sink: HostLogSink, level: str = "INFO") -> int:
    """Register the sink with loguru and return the handler id for ``logger.remove``."""
    return logger.add(sink, level=level, format="{message}", backtrace=False, diagnose=False)


async def forward_logs(sender: Any, sink: HostLogSink) -> None:
    """Send queued log commands until the socket fails or the task is cancelled.

    The sink is stopped and its queue emptied when the socket fails.
    """
    while True:
        command = await sink.queue.get()
        try:
            await sender.send(command)
        except TransportError:
            sink.stop()
            while not sink.queue.empty():
                sink.queue.get_nowait()
            return
