"""Messages for the property inspector side of the host.

A property inspector registers over the same kind of socket as a plugin but
sees a smaller catalogue. ``sendToPropertyInspector`` arrives here and
``sendToPlugin`` goes out, mirroring the plugin catalogue.
"""

from __future__ import annotations

from typing import Generic, Literal

from deckbridge.protocol.codec import Catalogue
from deckbridge.protocol.commands import (
    GetGlobalSettings,
    GetSettings,
    LogMessage,
    OpenUrl,
    OutboundCommand,
    SetGlobalSettings,
    SetSettings,
)
from deckbridge.protocol.events import DidReceiveGlobalSettings, DidReceiveSettings, InboundEvent
from deckbridge.protocol.types import Coordinates, M, S, WireModel


class SendToPropertyInspector(InboundEvent, Generic[M]):
    """The plugin has sent data to the property inspector."""

    event: Literal["sendToPropertyInspector"] = "sendToPropertyInspector"
    action: str
    context: str
    payload: M


class SendToPlugin(OutboundCommand, Generic[M]):
    """Send data to the plugin."""

    event: Literal["sendToPlugin"] = "sendToPlugin"
    action: str
    context: str
    payload: M


class RegistrationActionInfoPayload(WireModel, Generic[S]):
    settings: S
    coordinates: Coordinates


class RegistrationActionInfo(WireModel, Generic[S]):
    """The action the property inspector is editing (its ``inActionInfo`` parameter)."""

    action: str
    context: str
    device: str
    payload: RegistrationActionInfoPayload[S]


INSPECTOR_CATALOGUE = Catalogue.of(
    "property inspector",
    inbound=(DidReceiveSettings, DidReceiveGlobalSettings, SendToPropertyInspector),
    outbound=(GetSettings, SetSettings, OpenUrl, GetGlobalSettings, SetGlobalSettings, LogMessage, SendToPlugin),
)
