"""Connect to the host, upgrade to a web socket and register.

Establishment runs three steps in order: open a TCP connection, perform the
WebSocket opening handshake over it, then send the registration frame. Each
step has its own error type and nothing is retried.
"""

from __future__ import annotations

import asyncio
import socket
from enum import Enum
from typing import Any, Generic

import websockets
from loguru import logger
from websockets.exceptions import WebSocketException

from deckbridge.config.schema import TransportConfig
from deckbridge.errors import ConnectionError, ProtocolError, SendError
from deckbridge.protocol.codec import MessageCodec
from deckbridge.protocol.types import G, M, S
from deckbridge.transport.address import Endpoint, resolve
from deckbridge.transport.socket import DeckSocket


class ConnectState(str, Enum):
    CREATED = "created"
    CONNECTING = "connecting"
    NEGOTIATING = "negotiating"
    REGISTERING = "registering"
    READY = "ready"
    FAILED = "failed"


async def open_tcp_socket(endpoint: Endpoint) -> socket.socket:
    """Open a non-blocking TCP socket to the first reachable address of the endpoint."""
    loop = asyncio.get_running_loop()
    infos = await loop.getaddrinfo(endpoint.host, endpoint.port, type=socket.SOCK_STREAM)
    last_exc: OSError | None = None
    for family, sock_type, proto, _, address in infos:
        sock = socket.socket(family, sock_type, proto)
        try:
            sock.setblocking(False)
            await loop.sock_connect(sock, address)
        except OSError as exc:
            sock.close()
            last_exc = exc
            continue
        except BaseException:
            sock.close()
            raise
        return sock
    raise last_exc or OSError(f"no addresses found for {endpoint.host}")


def _set_nodelay(sock: socket.socket) -> None:
    try:
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
    except OSError as exc:
        logger.debug(f"Could not disable send coalescing: {exc}")


def _discard(connection: Any) -> None:
    transport = getattr(connection, "transport", None)
    if transport is not None:
        transport.abort()


class Connector(Generic[G, S, M]):
    """One attempt to connect to and register with the host.

    The address is resolved on construction, so address errors surface before
    any I/O. ``state`` tracks progress for diagnostics.
    """

    def __init__(
        self,
        address: int | str | Endpoint,
        event: str,
        uuid: str,
        *,
        codec: MessageCodec[G, S, M] | None = None,
        config: TransportConfig | None = None,
    ):
        self.config = config or TransportConfig()
        self.endpoint = resolve(address, loopback_host=self.config.loopback_host)
        self.event = event
        self.uuid = uuid
        self.codec: MessageCodec[G, S, M] = codec or MessageCodec()
        self.state = ConnectState.CREATED

    def _enter(self, state: ConnectState) -> None:
        logger.debug(f"Connector {self.endpoint}: {self.state.value} -> {state.value}")
        self.state = state

    async def establish(self) -> DeckSocket[G, S, M]:
        """Run the three steps and return the registered socket."""
        if self.state is not ConnectState.CREATED:
            raise RuntimeError(f"connector already used (state: {self.state.value})")
        try:
            sock = await self._connect()
            connection = await self._negotiate(sock)
            await self._register(connection)
        except BaseException:
            self._enter(ConnectState.FAILED)
            raise
        self._enter(ConnectState.READY)
        logger.info(f"Registered with host at {self.endpoint} as {self.uuid}")
        return DeckSocket(connection, self.codec, endpoint=self.endpoint)

    async def _connect(self) -> socket.socket:
        self._enter(ConnectState.CONNECTING)
        try:
            sock = await open_tcp_socket(self.endpoint)
        except OSError as exc:
            logger.error(f"Connection to {self.endpoint} failed: {exc}")
            raise ConnectionError(f"Connection error: {exc}", endpoint=str(self.endpoint)) from exc
        _set_nodelay(sock)
        return sock

    async def _negotiate(self, sock: socket.socket) -> Any:
        self._enter(ConnectState.NEGOTIATING)
        try:
            return await websockets.connect(
                self.endpoint.url,
                sock=sock,
                open_timeout=None,
                ping_interval=self.config.ping_interval,
                max_size=self.config.max_size,
            )
        except (WebSocketException, OSError, EOFError) as exc:
            sock.close()
            logger.error(f"Websocket handshake with {self.endpoint} failed: {exc}")
            raise ProtocolError(f"Websocket protocol error: {exc}", endpoint=str(self.endpoint)) from exc
        except BaseException:
            sock.close()
            raise

    async def _register(self, connection: Any) -> None:
        self._enter(ConnectState.REGISTERING)
        frame = self.codec.encode_registration(self.event, self.uuid)
        try:
            await connection.send(frame)
        except (WebSocketException, OSError) as exc:
            _discard(connection)
            logger.error(f"Registration with {self.endpoint} failed: {exc}")
            raise SendError(f"Send error: {exc}", endpoint=str(self.endpoint)) from exc
        except BaseException:
            _discard(connection)
            raise


async def connect(
    address: int | str | Endpoint,
    event: str,
    uuid: str,
    *,
    codec: MessageCodec[G, S, M] | None = None,
    config: TransportConfig | None = None,
) -> DeckSocket[G, S, M]:
    """
    Connect to the host, register, and return the ready socket.

    Args:
        address: Port number on the loopback host, or a ``ws://`` URL.
        event: Registration event name handed over by the host (``-registerEvent``).
        uuid: Instance uuid handed over by the host (``-pluginUUID``).
        codec: Codec bound to the plugin's settings types; untyped by default.
        config: Transport settings; defaults apply when omitted.

    Raises:
        AddressError: before any I/O, for an unusable address.
        ConnectionError, ProtocolError, SendError: for the step that failed.
    """
    return await Connector(address, event, uuid, codec=codec, config=config).establish()
