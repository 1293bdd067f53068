"""Tests for deckbridge.log_forwarding."""

import asyncio
from types import SimpleNamespace

import pytest
from loguru import logger

from deckbridge.errors import TransportError
from deckbridge.log_forwarding import HostLogSink, format_record, forward_logs, install_host_log_sink
from deckbridge.protocol.commands import LogMessage
from deckbridge.protocol.types import LogMessagePayload


def _record(level: str, message: str, **extra):
    return {"level": SimpleNamespace(name=level), "message": message, "extra": extra}


@pytest.mark.parametrize(
    ("level", "short"),
    [
        ("CRITICAL", "CRIT"),
        ("ERROR", "ERRO"),
        ("WARNING", "WARN"),
        ("INFO", "INFO"),
        ("SUCCESS", "INFO"),
        ("DEBUG", "DEBG"),
        ("TRACE", "TRCE"),
        ("AUDIT", "AUDI"),
    ],
)
def test_short_levels(level: str, short: str) -> None:
    assert format_record(_record(level, "msg")) == f"{short} msg"


def test_extras_are_appended() -> None:
    text = format_record(_record("INFO", "pressed", context="ctx1", count=3))
    assert text == "INFO pressed, context: ctx1, count: 3"


@pytest.mark.asyncio
async def test_sink_queues_log_messages() -> None:
    sink = HostLogSink()
    handler_id = install_host_log_sink(sink, level="DEBUG")
    try:
        logger.bind(context="ctx1").warning("key stuck")
        logger.debug("tick")
        logger.trace("below the level")
    finally:
        logger.remove(handler_id)
    first = sink.queue.get_nowait()
    second = sink.queue.get_nowait()
    assert isinstance(first, LogMessage)
    assert first.payload.message == "WARN key stuck, context: ctx1"
    assert second.payload.message == "DEBG tick"
    assert sink.queue.empty()


@pytest.mark.asyncio
async def test_sink_accepts_records_from_other_threads() -> None:
    sink = HostLogSink()
    handler_id = install_host_log_sink(sink)
    try:
        await asyncio.to_thread(logger.info, "from a worker")
        command = await asyncio.wait_for(sink.queue.get(), 5)
    finally:
        logger.remove(handler_id)
    assert command.payload.message == "INFO from a worker"


class _Sender:
    def __init__(self, fail_after=None):
        self.sent = []
        self.fail_after = fail_after

    async def send(self, command):
        if self.fail_after is not None and len(self.sent) >= self.fail_after:
            raise TransportError("gone")
        self.sent.append(command)


@pytest.mark.asyncio
async def test_forward_logs_drains_queue() -> None:
    sink = HostLogSink()
    sender = _Sender()
    for text in ("INFO a", "INFO b"):
        sink.queue.put_nowait(LogMessage(payload=LogMessagePayload(message=text)))
    task = asyncio.create_task(forward_logs(sender, sink))
    for _ in range(100):
        if len(sender.sent) == 2:
            break
        await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert [command.payload.message for command in sender.sent] == ["INFO a", "INFO b"]


@pytest.mark.asyncio
async def test_forward_logs_stops_on_transport_error() -> None:
    sink = HostLogSink()
    sender = _Sender(fail_after=1)
    for text in ("INFO a", "INFO b", "INFO c"):
        sink.queue.put_nowait(LogMessage(payload=LogMessagePayload(message=text)))
    await asyncio.wait_for(forward_logs(sender, sink), 5)
    assert len(sender.sent) == 1


@pytest.mark.asyncio
async def test_sink_stops_queuing_after_socket_failure() -> None:
    sink = HostLogSink()
    handler_id = install_host_log_sink(sink)
    try:
        logger.info("before")
        await asyncio.wait_for(forward_logs(_Sender(fail_after=0), sink), 5)
        assert sink.stopped
        logger.info("after")
    finally:
        logger.remove(handler_id)
    assert sink.queue.empty()


@pytest.mark.asyncio
async def test_full_queue_drops_records() -> None:
    sink = HostLogSink(maxsize=2)
    handler_id = install_host_log_sink(sink)
    try:
        for n in range(5):
            logger.info(f"record {n}")
    finally:
        logger.remove(handler_id)
    assert sink.queue.qsize() == 2
    assert sink.dropped == 3
