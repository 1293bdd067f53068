"""Typed messages and the JSON codec for the host socket."""

from deckbridge.protocol.codec import PLUGIN_CATALOGUE, Catalogue, MessageCodec, RegistrationFrame, event_tag
from deckbridge.protocol.commands import (
    PLUGIN_COMMANDS,
    GetGlobalSettings,
    GetSettings,
    LogMessage,
    OpenUrl,
    OutboundCommand,
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
from deckbridge.protocol.events import (
    PLUGIN_EVENTS,
    ApplicationDidLaunch,
    ApplicationDidTerminate,
    DeviceDidConnect,
    DeviceDidDisconnect,
    DialDown,
    DialRotate,
    DialUp,
    DidReceiveGlobalSettings,
    DidReceiveSettings,
    InboundEvent,
    KeyDown,
    KeyUp,
    PropertyInspectorDidAppear,
    PropertyInspectorDidDisappear,
    SendToPlugin,
    SystemDidWakeUp,
    TitleParametersDidChange,
    TouchTap,
    UnknownEvent,
    WillAppear,
    WillDisappear,
)
from deckbridge.protocol.property_inspector import INSPECTOR_CATALOGUE, RegistrationActionInfo
from deckbridge.protocol.types import (
    Alignment,
    ApplicationPayload,
    Color,
    Coordinates,
    DeviceInfo,
    DeviceSize,
    DeviceType,
    ImagePayload,
    LogMessagePayload,
    ProfilePayload,
    SetFeedbackLayoutPayload,
    SetTriggerDescriptionPayload,
    StatePayload,
    Target,
    TitleParameters,
    TitlePayload,
    UrlPayload,
    WireModel,
)

__all__ = [
    "Alignment",
    "ApplicationDidLaunch",
    "ApplicationDidTerminate",
    "ApplicationPayload",
    "Catalogue",
    "Color",
    "Coordinates",
    "DeviceDidConnect",
    "DeviceDidDisconnect",
    "DeviceInfo",
    "DeviceSize",
    "DeviceType",
    "DialDown",
    "DialRotate",
    "DialUp",
    "DidReceiveGlobalSettings",
    "DidReceiveSettings",
    "GetGlobalSettings",
    "GetSettings",
    "ImagePayload",
    "InboundEvent",
    "INSPECTOR_CATALOGUE",
    "KeyDown",
    "KeyUp",
    "LogMessage",
    "LogMessagePayload",
    "MessageCodec",
    "OpenUrl",
    "OutboundCommand",
    "PLUGIN_CATALOGUE",
    "PLUGIN_COMMANDS",
    "PLUGIN_EVENTS",
    "ProfilePayload",
    "PropertyInspectorDidAppear",
    "PropertyInspectorDidDisappear",
    "RegistrationActionInfo",
    "RegistrationFrame",
    "SendToPlugin",
    "SendToPropertyInspector",
    "SetFeedback",
    "SetFeedbackLayout",
    "SetFeedbackLayoutPayload",
    "SetGlobalSettings",
    "SetImage",
    "SetSettings",
    "SetState",
    "SetTitle",
    "SetTriggerDescription",
    "SetTriggerDescriptionPayload",
    "ShowAlert",
    "ShowOk",
    "StatePayload",
    "SwitchToProfile",
    "SystemDidWakeUp",
    "Target",
    "TitleParameters",
    "TitleParametersDidChange",
    "TitlePayload",
    "TouchTap",
    "UnknownEvent",
    "UrlPayload",
    "WillAppear",
    "WillDisappear",
    "WireModel",
    "event_tag",
]
