"""Events received from the host.

Each event is a pydantic model tagged by its ``event`` field. Events that carry
plugin-defined data are generic over ``G`` (global settings), ``S`` (action
settings) or ``M`` (property inspector messages); the codec binds them to the
caller's types.
"""

from __future__ import annotations

from typing import Any, Generic, Literal

from pydantic import Field

from deckbridge.protocol.types import (
    ApplicationPayload,
    DeviceInfo,
    DialDownPayload,
    DialRotatePayload,
    DialUpPayload,
    G,
    GlobalSettingsPayload,
    KeyPayload,
    M,
    S,
    TitleParametersPayload,
    TouchTapPayload,
    VisibilityPayload,
    WireModel,
)


class InboundEvent(WireModel):
    """Base for everything the socket yields."""


class KeyDown(InboundEvent, Generic[S]):
    """A key has been pressed."""

    event: Literal["keyDown"] = "keyDown"
    action: str
    context: str
    device: str
    payload: KeyPayload[S]


class KeyUp(InboundEvent, Generic[S]):
    """A key has been released."""

    event: Literal["keyUp"] = "keyUp"
    action: str
    context: str
    device: str
    payload: KeyPayload[S]


class WillAppear(InboundEvent, Generic[S]):
    """An instance of the action has been added to the display."""

    event: Literal["willAppear"] = "willAppear"
    action: str
    context: str
    device: str | None = None
    payload: VisibilityPayload[S]


class WillDisappear(InboundEvent, Generic[S]):
    """An instance of the action has been removed from the display."""

    event: Literal["willDisappear"] = "willDisappear"
    action: str
    context: str
    device: str | None = None
    payload: VisibilityPayload[S]


class TitleParametersDidChange(InboundEvent, Generic[S]):
    """The title or title parameters have changed."""

    event: Literal["titleParametersDidChange"] = "titleParametersDidChange"
    action: str
    context: str
    device: str | None = None
    payload: TitleParametersPayload[S]


class DeviceDidConnect(InboundEvent):
    event: Literal["deviceDidConnect"] = "deviceDidConnect"
    device: str
    device_info: DeviceInfo


class DeviceDidDisconnect(InboundEvent):
    event: Literal["deviceDidDisconnect"] = "deviceDidDisconnect"
    device: str


class ApplicationDidLaunch(InboundEvent):
    """An application monitored by the manifest has launched."""

    event: Literal["applicationDidLaunch"] = "applicationDidLaunch"
    payload: ApplicationPayload


class ApplicationDidTerminate(InboundEvent):
    """An application monitored by the manifest has terminated."""

    event: Literal["applicationDidTerminate"] = "applicationDidTerminate"
    payload: ApplicationPayload


class SendToPlugin(InboundEvent, Generic[M]):
    """The property inspector has sent data to the plugin."""

    event: Literal["sendToPlugin"] = "sendToPlugin"
    action: str
    context: str
    payload: M


class DidReceiveSettings(InboundEvent, Generic[S]):
    """The host has sent settings for an action.

    Sent in response to ``getSettings`` and after the property inspector
    changes the settings.
    """

    event: Literal["didReceiveSettings"] = "didReceiveSettings"
    action: str
    context: str
    device: str
    payload: KeyPayload[S]


class PropertyInspectorDidAppear(InboundEvent):
    event: Literal["propertyInspectorDidAppear"] = "propertyInspectorDidAppear"
    action: str
    context: str
    device: str


class PropertyInspectorDidDisappear(InboundEvent):
    event: Literal["propertyInspectorDidDisappear"] = "propertyInspectorDidDisappear"
    action: str
    context: str
    device: str


class DidReceiveGlobalSettings(InboundEvent, Generic[G]):
    """The host has sent the plugin's global settings."""

    event: Literal["didReceiveGlobalSettings"] = "didReceiveGlobalSettings"
    payload: GlobalSettingsPayload[G]


class SystemDidWakeUp(InboundEvent):
    """The computer has woken from sleep."""

    event: Literal["systemDidWakeUp"] = "systemDidWakeUp"


class TouchTap(InboundEvent, Generic[S]):
    """The touch strip of an encoder device has been tapped."""

    event: Literal["touchTap"] = "touchTap"
    action: str
    context: str
    device: str
    payload: TouchTapPayload[S]


class DialDown(InboundEvent, Generic[S]):
    """An encoder has been pressed."""

    event: Literal["dialDown"] = "dialDown"
    action: str
    context: str
    device: str
    payload: DialDownPayload[S]


class DialUp(InboundEvent, Generic[S]):
    """An encoder has been released."""

    event: Literal["dialUp"] = "dialUp"
    action: str
    context: str
    device: str
    payload: DialUpPayload[S]


class DialRotate(InboundEvent, Generic[S]):
    """An encoder has been rotated."""

    event: Literal["dialRotate"] = "dialRotate"
    action: str
    context: str
    device: str
    payload: DialRotatePayload[S]


class UnknownEvent(InboundEvent):
    """An event whose tag is not in the catalogue.

    Newer hosts add events over time; they decode to this value instead of
    failing. ``data`` holds the whole decoded frame.
    """

    event: str
    data: dict[str, Any] = Field(default_factory=dict, exclude=True)


PLUGIN_EVENTS: tuple[type[InboundEvent], ...] = (
    KeyDown,
    KeyUp,
    WillAppear,
    WillDisappear,
    TitleParametersDidChange,
    DeviceDidConnect,
    DeviceDidDisconnect,
    ApplicationDidLaunch,
    ApplicationDidTerminate,
    SendToPlugin,
    DidReceiveSettings,
    PropertyInspectorDidAppear,
    PropertyInspectorDidDisappear,
    DidReceiveGlobalSettings,
    SystemDidWakeUp,
    TouchTap,
    DialDown,
    DialUp,
    DialRotate,
)
