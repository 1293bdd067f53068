"""End-to-end tests against a real websockets server on the loopback interface."""

import asyncio
import contextlib
import json

import pytest
from pydantic import BaseModel
from websockets.asyncio.server import serve

from deckbridge.config.schema import TransportConfig
from deckbridge.protocol import KeyDown, MessageCodec, SystemDidWakeUp
from deckbridge.transport.connect import ConnectState, Connector, connect

pytestmark = pytest.mark.e2e

LOOPBACK = TransportConfig(loopback_host="127.0.0.1")
WAKE = '{"event":"systemDidWakeUp"}'
KEY_DOWN = (
    '{"event":"keyDown","action":"com.example.a","context":"ctx1","device":"dev1",'
    '"payload":{"settings":{"count":4},"coordinates":{"column":0,"row":0}}}'
)


class _Host:
    """Records what the plugin sends and replays a script after registration."""

    def __init__(self, script=(), hold_open=False):
        self.script = list(script)
        self.hold_open = hold_open
        self.received = []
        self.done = asyncio.Event()

    async def handler(self, ws):
        try:
            self.received.append(await ws.recv())
            for frame in self.script:
                await ws.send(frame)
            if self.hold_open:
                async for frame in ws:
                    self.received.append(frame)
        finally:
            self.done.set()


@contextlib.asynccontextmanager
async def _serving(host: _Host):
    async with serve(host.handler, "127.0.0.1", 0) as server:
        yield next(iter(server.sockets)).getsockname()[1]


@pytest.mark.asyncio
async def test_registration_is_the_first_frame() -> None:
    host = _Host()
    async with _serving(host) as port:
        socket = await connect(port, "registerPlugin", "abc-123", config=LOOPBACK)
        assert await socket.receive() is None
        await asyncio.wait_for(host.done.wait(), 5)
    assert host.received == ['{"event":"registerPlugin","uuid":"abc-123"}']
    assert socket.endpoint.port == port


@pytest.mark.asyncio
async def test_events_arrive_in_order_and_binary_is_skipped() -> None:
    class Settings(BaseModel):
        count: int

    host = _Host(script=[WAKE, b"\x00\x01", KEY_DOWN])
    async with _serving(host) as port:
        socket = await connect(port, "registerPlugin", "abc-123", codec=MessageCodec(settings=Settings), config=LOOPBACK)
        messages = [message async for message in socket]
    assert isinstance(messages[0], SystemDidWakeUp)
    assert isinstance(messages[1], KeyDown)
    assert messages[1].payload.settings == Settings(count=4)
    assert len(messages) == 2


@pytest.mark.asyncio
async def test_commands_reach_the_host() -> None:
    host = _Host(hold_open=True)
    async with _serving(host) as port:
        async with await connect(port, "registerPlugin", "abc-123", config=LOOPBACK) as socket:
            await socket.show_alert("ctx1")
            await socket.log_message("héllo")
        await asyncio.wait_for(host.done.wait(), 5)
    assert host.received[0] == '{"event":"registerPlugin","uuid":"abc-123"}'
    assert host.received[1] == '{"event":"showAlert","context":"ctx1"}'
    assert json.loads(host.received[2]) == {"event": "logMessage", "payload": {"message": "héllo"}}


@pytest.mark.asyncio
async def test_explicit_url_and_connector_state() -> None:
    host = _Host(script=[WAKE])
    async with _serving(host) as port:
        connector = Connector(f"ws://127.0.0.1:{port}/", "registerPropertyInspector", "pi-1")
        assert connector.state is ConnectState.CREATED
        socket = await connector.establish()
        assert connector.state is ConnectState.READY
        assert isinstance(await socket.receive(), SystemDidWakeUp)
        await socket.close()
        with pytest.raises(RuntimeError):
            await connector.establish()
    assert host.received == ['{"event":"registerPropertyInspector","uuid":"pi-1"}']
