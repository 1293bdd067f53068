"""Commands sent to the host."""

from __future__ import annotations

from typing import Any, Generic, Literal

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
    TitlePayload,
    UrlPayload,
    WireModel,
)


class OutboundCommand(WireModel):
    """Base for everything the socket accepts."""


class SetTitle(OutboundCommand):
    """Dynamically change the title of an action instance."""

    event: Literal["setTitle"] = "setTitle"
    context: str
    payload: TitlePayload


class SetImage(OutboundCommand):
    """Dynamically change the image of an action instance."""

    event: Literal["setImage"] = "setImage"
    context: str
    payload: ImagePayload


class ShowAlert(OutboundCommand):
    """Temporarily show an alert icon on the key."""

    event: Literal["showAlert"] = "showAlert"
    context: str


class ShowOk(OutboundCommand):
    """Temporarily show an OK checkmark on the key."""

    event: Literal["showOk"] = "showOk"
    context: str


class GetSettings(OutboundCommand):
    """Ask for the action settings; answered by ``didReceiveSettings``."""

    event: Literal["getSettings"] = "getSettings"
    context: str


class SetSettings(OutboundCommand, Generic[S]):
    """Persist settings for an action instance."""

    event: Literal["setSettings"] = "setSettings"
    context: str
    payload: S


class SetState(OutboundCommand):
    """Change the state of an action that supports multiple states."""

    event: Literal["setState"] = "setState"
    context: str
    payload: StatePayload


class SendToPropertyInspector(OutboundCommand, Generic[M]):
    """Send data to the property inspector."""

    event: Literal["sendToPropertyInspector"] = "sendToPropertyInspector"
    action: str
    context: str
    payload: M


class SwitchToProfile(OutboundCommand):
    """Switch to one of the preconfigured read-only profiles."""

    event: Literal["switchToProfile"] = "switchToProfile"
    context: str
    device: str
    payload: ProfilePayload


class OpenUrl(OutboundCommand):
    """Open a URL in the default browser."""

    event: Literal["openUrl"] = "openUrl"
    payload: UrlPayload


class GetGlobalSettings(OutboundCommand):
    """Ask for the plugin settings; answered by ``didReceiveGlobalSettings``."""

    event: Literal["getGlobalSettings"] = "getGlobalSettings"
    context: str


class SetGlobalSettings(OutboundCommand, Generic[G]):
    """Persist plugin-wide settings."""

    event: Literal["setGlobalSettings"] = "setGlobalSettings"
    context: str
    payload: G


class LogMessage(OutboundCommand):
    """Write to the host's log file."""

    event: Literal["logMessage"] = "logMessage"
    payload: LogMessagePayload


class SetFeedback(OutboundCommand):
    """Update the touch display layout items of an encoder action."""

    event: Literal["setFeedback"] = "setFeedback"
    context: str
    payload: dict[str, Any]


class SetFeedbackLayout(OutboundCommand):
    """Change the touch display layout of an encoder action."""

    event: Literal["setFeedbackLayout"] = "setFeedbackLayout"
    context: str
    payload: SetFeedbackLayoutPayload


class SetTriggerDescription(OutboundCommand):
    """Describe what the encoder interactions do."""

    event: Literal["setTriggerDescription"] = "setTriggerDescription"
    context: str
    payload: SetTriggerDescriptionPayload


PLUGIN_COMMANDS: tuple[type[OutboundCommand], ...] = (
    SetTitle,
    SetImage,
    ShowAlert,
    ShowOk,
    GetSettings,
    SetSettings,
    SetState,
    SendToPropertyInspector,
    SwitchToProfile,
    OpenUrl,
    GetGlobalSettings,
    SetGlobalSettings,
    LogMessage,
    SetFeedback,
    SetFeedbackLayout,
    SetTriggerDescription,
)
