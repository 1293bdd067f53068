"""Typed duplex socket over a websockets client connection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Generic

from loguru import logger
from websockets.exceptions import ConnectionClosedOK, WebSocketException

from deckbridge.errors import BadMessage, SocketError, TransportError
from deckbridge.protocol.codec import MessageCodec
from deckbridge.protocol.commands import (
    GetGlobalSettings,
    GetSettings,
    LogMessage,
    OpenUrl,
    SendToPropertyInspector,
    SetFeedback,
    SetFeedbackLayout,
    SetGlobalSettings,
    SetImage,
    SetSettings,
    SetState,
    SetTitle,
    SetTriggerDescription,
    ShowAlert,
    ShowOk,
    SwitchToProfile,
)
from deckbridge.protocol.events import InboundEvent
from deckbridge.protocol.types import (
    G,
    ImagePayload,
    LogMessagePayload,
    M,
    ProfilePayload,
    S,
    SetFeedbackLayoutPayload,
    SetTriggerDescriptionPayload,
    StatePayload,
    Target,
    TitlePayload,
    UrlPayload,
)
from deckbridge.transport.address import Endpoint

_TRANSPORT_FAILURES = (WebSocketException, OSError)


class CommandSender(ABC):
    """Shortcuts that build a plugin command and pass it to ``send``."""

    @abstractmethod
    async def send(self, command: Any) -> None:
        ...

    async def set_title(
        self, context: str, title: str | None, *, target: Target = Target.BOTH, state: int | None = None
    ) -> None:
        await self.send(SetTitle(context=context, payload=TitlePayload(title=title, target=target, state=state)))

    async def set_image(
        self, context: str, image: str | None, *, target: Target = Target.BOTH, state: int | None = None
    ) -> None:
        await self.send(SetImage(context=context, payload=ImagePayload(image=image, target=target, state=state)))

    async def show_alert(self, context: str) -> None:
        await self.send(ShowAlert(context=context))

    async def show_ok(self, context: str) -> None:
        await self.send(ShowOk(context=context))

    async def get_settings(self, context: str) -> None:
        await self.send(GetSettings(context=context))

    async def set_settings(self, context: str, settings: Any) -> None:
        await self.send(SetSettings(context=context, payload=settings))

    async def set_state(self, context: str, state: int) -> None:
        await self.send(SetState(context=context, payload=StatePayload(state=state)))

    async def send_to_property_inspector(self, action: str, context: str, payload: Any) -> None:
        await self.send(SendToPropertyInspector(action=action, context=context, payload=payload))

    async def switch_to_profile(self, context: str, device: str, profile: str) -> None:
        await self.send(SwitchToProfile(context=context, device=device, payload=ProfilePayload(profile=profile)))

    async def open_url(self, url: str) -> None:
        await self.send(OpenUrl(payload=UrlPayload(url=url)))

    async def get_global_settings(self, context: str) -> None:
        await self.send(GetGlobalSettings(context=context))

    async def set_global_settings(self, context: str, settings: Any) -> None:
        await self.send(SetGlobalSettings(context=context, payload=settings))

    async def log_message(self, message: str) -> None:
        await self.send(LogMessage(payload=LogMessagePayload(message=message)))

    async def set_feedback(self, context: str, payload: dict[str, Any]) -> None:
        await self.send(SetFeedback(context=context, payload=payload))

    async def set_feedback_layout(self, context: str, layout: str) -> None:
        await self.send(SetFeedbackLayout(context=context, payload=SetFeedbackLayoutPayload(layout=layout)))

    async def set_trigger_description(
        self,
        context: str,
        *,
        long_touch: str | None = None,
        push: str | None = None,
        rotate: str | None = None,
        touch: str | None = None,
    ) -> None:
        payload = SetTriggerDescriptionPayload(long_touch=long_touch, push=push, rotate=rotate, touch=touch)
        await self.send(SetTriggerDescription(context=context, payload=payload))


class DeckSocket(CommandSender, Generic[G, S, M]):
    """A registered connection to the host.

    Iterating yields decoded events until the host closes the socket. A frame
    that fails to decode raises :class:`BadMessage` from that one step; the
    socket stays usable and iteration may be resumed. A transport failure
    raises :class:`TransportError` and leaves the socket unusable.

    The read half and the write half may be driven by two different tasks
    (see :meth:`split`); neither half may be shared between tasks.
    """

    def __init__(
        self,
        connection: Any,
        codec: MessageCodec[G, S, M] | None = None,
        *,
        endpoint: Endpoint | None = None,
    ):
        self._connection = connection
        self.codec: MessageCodec[G, S, M] = codec or MessageCodec()
        self.endpoint = endpoint
        self._closed = False
        self._eof = False
        self._peer_closed = False
        self._failure: TransportError | None = None

    @property
    def closed(self) -> bool:
        return self._closed or self._eof or self._peer_closed or self._failure is not None

    def _fail(self, exc: BaseException) -> TransportError:
        if self._failure is None:
            logger.error(f"Socket transport failure ({self.endpoint}): {exc}")
            self._failure = TransportError(f"WebSocket error: {exc}")
        return self._failure

    def _check_usable(self) -> None:
        if self._failure is not None:
            raise TransportError("socket is unusable after a transport failure") from self._failure

    async def receive(self) -> InboundEvent | None:
        """Return the next event, or None once the host has closed the socket."""
        self._check_usable()
        if self._closed or self._eof:
            return None
        while True:
            try:
                frame = await self._connection.recv()
            except ConnectionClosedOK:
                logger.debug(f"Socket closed by peer ({self.endpoint})")
                self._eof = True
                return None
            except _TRANSPORT_FAILURES as exc:
                raise self._fail(exc) from exc
            if not isinstance(frame, str):
                continue
            return self.codec.decode(frame)

    def __aiter__(self) -> DeckSocket[G, S, M]:
        return self

    async def __anext__(self) -> InboundEvent:
        message = await self.receive()
        if message is None:
            raise StopAsyncIteration
        return message

    async def results(self) -> AsyncIterator[InboundEvent | SocketError]:
        """Yield events and per-frame errors as values.

        Ends when the host closes the socket, or right after yielding a
        :class:`TransportError`.
        """
        while True:
            try:
                message = await self.receive()
            except BadMessage as exc:
                logger.warning(f"Dropping bad frame: {exc.message}")
                yield exc
                continue
            except TransportError as exc:
                yield exc
                return
            if message is None:
                return
            yield message

    async def send(self, command: Any) -> None:
        """Encode one command into one text frame and hand it to the transport.

        Waits while the transport's write buffer is above its high-water mark.
        Encoding errors raise :class:`BadMessage` before anything is written.
        """
        self._check_usable()
        if self.closed:
            raise TransportError("socket is closed")
        frame = self.codec.encode(command)
        try:
            await self._connection.send(frame)
        except ConnectionClosedOK as exc:
            # Normal close by the host; the read half still drains what was received.
            logger.debug(f"Send after peer closed the socket ({self.endpoint})")
            self._peer_closed = True
            raise TransportError("socket is closed") from exc
        except _TRANSPORT_FAILURES as exc:
            raise self._fail(exc) from exc

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            await self._connection.close()
        except _TRANSPORT_FAILURES as exc:
            logger.debug(f"Error while closing socket: {exc}")

    async def __aenter__(self) -> DeckSocket[G, S, M]:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def split(self) -> tuple[DeckReceiver[G, S, M], DeckSender[G, S, M]]:
        """Return separate read and write halves for two concurrent tasks."""
        return DeckReceiver(self), DeckSender(self)


class DeckReceiver(Generic[G, S, M]):
    """Read half of a :class:`DeckSocket`."""

    def __init__(self, socket: DeckSocket[G, S, M]):
        self._socket = socket

    async def receive(self) -> InboundEvent | None:
        return await self._socket.receive()

    def results(self) -> AsyncIterator[InboundEvent | SocketError]:
        return self._socket.results()

    def __aiter__(self) -> DeckSocket[G, S, M]:
        return self._socket


class DeckSender(CommandSender, Generic[G, S, M]):
    """Write half of a :class:`DeckSocket`."""

    def __init__(self, socket: DeckSocket[G, S, M]):
        self._socket = socket

    async def send(self, command: Any) -> None:
        await self._socket.send(command)
