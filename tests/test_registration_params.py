"""Tests for deckbridge.registration."""

import json

import pytest

from deckbridge.errors import ErrorCategory, RegistrationParamsError
from deckbridge.protocol.types import Color, DeviceType
from deckbridge.registration import Language, Platform, RegistrationInfo, RegistrationParams

INFO = {
    "application": {"language": "en", "platform": "mac", "version": "6.4.0"},
    "plugin": {"uuid": "com.example.counter", "version": "1.0"},
    "devicePixelRatio": 2,
    "devices": [
        {"id": "ABC", "name": "Desk", "size": {"columns": 5, "rows": 3}, "type": 0},
        {"id": "DEF", "size": {"columns": 4, "rows": 2}, "type": 99},
    ],
    "colors": {
        "buttonPressedBackgroundColor": "#303030FF",
        "buttonPressedBorderColor": "#646464FF",
        "buttonPressedTextColor": "#969696FF",
        "disabledColor": "#007AFF59",
        "highlightColor": "#007AFFFF",
        "mouseDownColor": "#2EA8FFFF",
    },
}


def _args(**overrides):
    values = {
        "-port": "28196",
        "-pluginUUID": "abc-123",
        "-registerEvent": "registerPlugin",
        "-info": json.dumps(INFO),
    }
    values.update(overrides)
    args = ["./plugin"]
    for flag, value in values.items():
        if value is not None:
            args += [flag, value]
    return args


def test_from_args() -> None:
    params = RegistrationParams.from_args(_args())
    assert params.port == 28196
    assert params.uuid == "abc-123"
    assert params.event == "registerPlugin"
    assert params.info.application.language is Language.ENGLISH
    assert params.info.application.platform is Platform.MAC
    assert params.info.plugin.uuid == "com.example.counter"
    assert params.info.device_pixel_ratio == 2
    assert params.info.devices[0].device_type is DeviceType.STREAM_DECK
    assert params.info.devices[1].device_type == 99
    assert params.info.devices[1].name is None
    assert params.info.colors.highlight_color == Color(0x00, 0x7A, 0xFF, 0xFF)


def test_unknown_arguments_are_ignored() -> None:
    args = ["-verbose", *_args()[1:], "-extra", "1"]
    assert RegistrationParams.from_args(args).port == 28196


def test_unlisted_language_and_platform_are_kept() -> None:
    info = dict(INFO, application={"language": "ko", "platform": "linux", "version": "6"})
    parsed = RegistrationInfo.model_validate(info)
    assert parsed.application.language == "ko"
    assert parsed.application.platform == "linux"
    assert parsed.model_dump(mode="json", by_alias=True)["application"] == info["application"]
    assert RegistrationInfo.model_validate(dict(INFO, application={"language": "zh_cn", "platform": "windows", "version": "6"})).application.language is Language.CHINESE_CHINA


def test_colors_are_optional() -> None:
    info = {key: value for key, value in INFO.items() if key != "colors"}
    parsed = RegistrationInfo.model_validate(info)
    assert parsed.colors.mouse_down_color is None
    partial = RegistrationInfo.model_validate(dict(INFO, colors={"highlightColor": "#ffffff"}))
    assert partial.colors.highlight_color.to_hex() == "#ffffff"
    assert partial.colors.disabled_color is None


@pytest.mark.parametrize(
    ("overrides", "code"),
    [
        ({"-port": None}, "NO_PORT"),
        ({"-port": "abc"}, "BAD_PORT"),
        ({"-port": "70000"}, "BAD_PORT"),
        ({"-port": "-1"}, "BAD_PORT"),
        ({"-port": "²"}, "BAD_PORT"),
        ({"-port": "١٢٣"}, "BAD_PORT"),
        ({"-pluginUUID": None}, "NO_UUID"),
        ({"-registerEvent": None}, "NO_EVENT"),
        ({"-info": None}, "NO_INFO"),
        ({"-info": "{not json"}, "BAD_INFO"),
        ({"-info": '{"application": {}}'}, "BAD_INFO"),
    ],
)
def test_missing_or_bad_parameters(overrides: dict, code: str) -> None:
    with pytest.raises(RegistrationParamsError) as exc_info:
        RegistrationParams.from_args(_args(**overrides))
    assert exc_info.value.code == code
    assert exc_info.value.category is ErrorCategory.VALIDATION


def test_errors_reported_in_order() -> None:
    with pytest.raises(RegistrationParamsError) as exc_info:
        RegistrationParams.from_args(["-info", "{}"])
    assert exc_info.value.code == "NO_PORT"


def test_flag_without_value_counts_as_missing() -> None:
    with pytest.raises(RegistrationParamsError) as exc_info:
        RegistrationParams.from_args(_args()[:-1])
    assert exc_info.value.code == "NO_INFO"
