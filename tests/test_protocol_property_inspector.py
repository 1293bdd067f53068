"""Tests for the property inspector catalogue."""

import json

from pydantic import BaseModel

from deckbridge.protocol import INSPECTOR_CATALOGUE, MessageCodec, UnknownEvent
from deckbridge.protocol.codec import event_tag
from deckbridge.protocol.commands import GetSettings
from deckbridge.protocol.property_inspector import RegistrationActionInfo, SendToPlugin, SendToPropertyInspector


class Settings(BaseModel):
    color: str = "red"


def test_catalogue_tags() -> None:
    assert set(INSPECTOR_CATALOGUE.inbound) == {
        "didReceiveSettings",
        "didReceiveGlobalSettings",
        "sendToPropertyInspector",
    }
    assert set(INSPECTOR_CATALOGUE.outbound) == {
        "getSettings",
        "setSettings",
        "openUrl",
        "getGlobalSettings",
        "setGlobalSettings",
        "logMessage",
        "sendToPlugin",
    }
    assert event_tag(SendToPlugin) == "sendToPlugin"


def test_inspector_receives_plugin_messages() -> None:
    codec = MessageCodec(inspector_message=dict, catalogue=INSPECTOR_CATALOGUE)
    message = codec.decode('{"event":"sendToPropertyInspector","action":"a","context":"c","payload":{"ok":true}}')
    assert isinstance(message, SendToPropertyInspector)
    assert message.payload == {"ok": True}
    # plugin-only events are not part of this catalogue
    assert isinstance(codec.decode('{"event":"keyDown"}'), UnknownEvent)


def test_inspector_sends_to_plugin() -> None:
    codec = MessageCodec(catalogue=INSPECTOR_CATALOGUE)
    text = codec.encode(SendToPlugin(action="a", context="c", payload={"refresh": True}))
    assert json.loads(text) == {"event": "sendToPlugin", "action": "a", "context": "c", "payload": {"refresh": True}}
    assert codec.encode(GetSettings(context="c")) == '{"event":"getSettings","context":"c"}'


def test_registration_action_info() -> None:
    info = RegistrationActionInfo[Settings].model_validate_json(
        '{"action":"com.example.a","context":"ctx","device":"dev",'
        '"payload":{"settings":{"color":"blue"},"coordinates":{"column":1,"row":2}}}'
    )
    assert info.payload.settings == Settings(color="blue")
    assert info.payload.coordinates.row == 2
