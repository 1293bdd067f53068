"""JSON codec for socket frames.

Every frame is one JSON object whose ``event`` string selects the model.
Unrecognized tags decode to :class:`UnknownEvent`; recognized tags with
malformed fields raise :class:`BadMessage`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable

from loguru import logger
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from deckbridge.errors import BadMessage
from deckbridge.protocol.commands import PLUGIN_COMMANDS, OutboundCommand
from deckbridge.protocol.events import PLUGIN_EVENTS, InboundEvent, UnknownEvent
from deckbridge.protocol.types import G, M, S, WireModel


def event_tag(model: type[BaseModel]) -> str:
    """Return the ``event`` tag a model class is registered under."""
    info = model.model_fields.get("event")
    if info is None or not isinstance(info.default, str):
        raise TypeError(f"{model.__name__} has no default event tag")
    return info.default


def _index(models: Iterable[type[BaseModel]]) -> dict[str, type[BaseModel]]:
    return {event_tag(model): model for model in models}


@dataclass(frozen=True, slots=True)
class Catalogue:
    """The set of recognized inbound and outbound messages for one endpoint type."""

    name: str
    inbound: dict[str, type[BaseModel]] = field(default_factory=dict)
    outbound: dict[str, type[BaseModel]] = field(default_factory=dict)

    @classmethod
    def of(
        cls,
        name: str,
        *,
        inbound: Iterable[type[BaseModel]] = (),
        outbound: Iterable[type[BaseModel]] = (),
    ) -> Catalogue:
        return cls(name=name, inbound=_index(inbound), outbound=_index(outbound))

    def extend(
        self,
        *,
        inbound: Iterable[type[BaseModel]] = (),
        outbound: Iterable[type[BaseModel]] = (),
    ) -> Catalogue:
        """Return a copy with extra (or replacement) models for newer protocol revisions."""
        return Catalogue(
            name=self.name,
            inbound={**self.inbound, **_index(inbound)},
            outbound={**self.outbound, **_index(outbound)},
        )


PLUGIN_CATALOGUE = Catalogue.of("plugin", inbound=PLUGIN_EVENTS, outbound=PLUGIN_COMMANDS)


class RegistrationFrame(WireModel):
    """The one-time frame identifying the connecting instance to the host."""

    event: str
    uuid: str


def _bind(model: type[BaseModel], bindings: dict[str, Any]) -> type[BaseModel]:
    params = model.__pydantic_generic_metadata__["parameters"]
    if not params:
        return model
    return model[tuple(bindings.get(param.__name__, Any) for param in params)]


def _dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


class MessageCodec(Generic[G, S, M]):
    """Encode commands and decode events for one catalogue.

    The settings and inspector-message types are never inspected here; they are
    handed to pydantic by binding the generic models to them once, at
    construction.
    """

    def __init__(
        self,
        *,
        global_settings: Any = Any,
        settings: Any = Any,
        inspector_message: Any = Any,
        catalogue: Catalogue = PLUGIN_CATALOGUE,
    ):
        self.catalogue = catalogue
        bindings = {G.__name__: global_settings, S.__name__: settings, M.__name__: inspector_message}
        self._inbound = {tag: _bind(model, bindings) for tag, model in catalogue.inbound.items()}
        self._outbound = {tag: _bind(model, bindings) for tag, model in catalogue.outbound.items()}

    def inbound_model(self, tag: str) -> type[BaseModel] | None:
        return self._inbound.get(tag)

    def outbound_model(self, tag: str) -> type[BaseModel] | None:
        return self._outbound.get(tag)

    # --- decoding ---

    def decode(self, frame: str) -> InboundEvent:
        """Decode one text frame received from the host."""
        return self._decode(frame, self._inbound)

    def decode_command(self, frame: str) -> OutboundCommand | UnknownEvent:
        """Decode one text frame as a command (the host's side of the link)."""
        return self._decode(frame, self._outbound)

    def _decode(self, frame: str, table: dict[str, type[BaseModel]]) -> Any:
        try:
            data = json.loads(frame)
        except (TypeError, json.JSONDecodeError) as exc:
            raise BadMessage(f"invalid JSON: {exc}", frame=str(frame)) from exc
        if not isinstance(data, dict):
            raise BadMessage("expected a JSON object", frame=frame)
        tag = data.get("event")
        if not isinstance(tag, str):
            raise BadMessage("missing or non-string event tag", frame=frame)
        model = table.get(tag)
        if model is None:
            logger.debug(f"Unrecognized {self.catalogue.name} event tag: {tag}")
            return UnknownEvent(event=tag, data=data)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise BadMessage(f"malformed {tag} message: {exc}", event=tag, frame=frame) from exc

    # --- encoding ---

    def encode(self, message: Any) -> str:
        """Encode one command as a text frame."""
        return self._encode(message, self._outbound, "command")

    def encode_event(self, message: Any) -> str:
        """Encode one event as a text frame (the host's side of the link)."""
        return self._encode(message, self._inbound, "event")

    def encode_registration(self, event: str, uuid: str) -> str:
        return self._encode_model(RegistrationFrame(event=event, uuid=uuid))

    def _encode(self, message: Any, table: dict[str, type[BaseModel]], kind: str) -> str:
        if isinstance(message, UnknownEvent):
            return self._dumps({**message.data, "event": message.event}, message.event)
        tag = getattr(message, "event", None)
        if not isinstance(message, WireModel) or tag not in table:
            raise BadMessage(f"{type(message).__name__} is not a {self.catalogue.name} {kind}", event=tag)
        return self._encode_model(message)

    def _encode_model(self, message: WireModel) -> str:
        tag = getattr(message, "event", None)
        try:
            data = message.model_dump(mode="json", by_alias=True)
        except (PydanticSerializationError, ValueError) as exc:
            raise BadMessage(f"cannot serialize {tag} message: {exc}", event=tag) from exc
        return self._dumps(data, tag)

    @staticmethod
    def _dumps(data: Any, tag: str | None) -> str:
        try:
            text = _dumps(data)
            # Frames go out as UTF-8; lone surrogates would only fail inside the transport.
            text.encode("utf-8")
            return text
        except (TypeError, ValueError) as exc:
            raise BadMessage(f"cannot serialize {tag} message: {exc}", event=tag) from exc
