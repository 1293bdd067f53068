"""Startup parameters the host hands to a plugin on its command line.

The host launches a plugin as::

    plugin -port 28196 -pluginUUID <uuid> -registerEvent registerPlugin -info '<json>'

:meth:`RegistrationParams.from_args` pulls these out; the port, event and uuid
feed straight into :func:`deckbridge.transport.connect`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Iterable

from pydantic import Field, ValidationError

from deckbridge.errors import RegistrationParamsError
from deckbridge.protocol.types import U8, Color, DeviceSize, DeviceType, WireModel


class Language(str, Enum):
    """Language the host software runs in. Unlisted codes are kept as plain strings."""

    ENGLISH = "en"
    FRENCH = "fr"
    GERMAN = "de"
    SPANISH = "es"
    JAPANESE = "ja"
    CHINESE_CHINA = "zh_cn"


class Platform(str, Enum):
    """Operating system the host runs on. Unlisted values are kept as plain strings."""

    MAC = "mac"
    WINDOWS = "windows"


class RegistrationInfoApplication(WireModel):
    language: Annotated[Language | str, Field(union_mode="left_to_right")]
    platform: Annotated[Platform | str, Field(union_mode="left_to_right")]
    version: str


class RegistrationInfoPlugin(WireModel):
    version: str
    uuid: str


class RegistrationInfoDevice(WireModel):
    """A device connected when the plugin was launched."""

    id: str
    name: str | None = None
    size: DeviceSize
    device_type: Annotated[DeviceType | int | None, Field(alias="type", union_mode="left_to_right")] = None


class UserColors(WireModel):
    """The user's preferred colors; any of them may be absent."""

    button_pressed_background_color: Color | None = None
    button_pressed_border_color: Color | None = None
    button_pressed_text_color: Color | None = None
    disabled_color: Color | None = None
    highlight_color: Color | None = None
    mouse_down_color: Color | None = None


class RegistrationInfo(WireModel):
    """The ``-info`` parameter: the environment the plugin is loaded into."""

    application: RegistrationInfoApplication
    plugin: RegistrationInfoPlugin
    device_pixel_ratio: U8
    devices: list[RegistrationInfoDevice]
    colors: UserColors = Field(default_factory=UserColors)


_FLAGS = {
    "-port": "port",
    "-pluginUUID": "uuid",
    "-registerEvent": "event",
    "-info": "info",
}


def _parse_port(text: str) -> int:
    if not (text.isascii() and text.isdecimal()) or int(text) > 65535:
        raise RegistrationParamsError("BAD_PORT", f"port could not be parsed: {text!r}")
    return int(text)


@dataclass(slots=True)
class RegistrationParams:
    port: int
    uuid: str
    event: str
    info: RegistrationInfo

    @classmethod
    def from_args(cls, args: Iterable[str]) -> RegistrationParams:
        """
        Pull the registration parameters out of a command line.

        Unrecognized arguments are skipped; a flag given twice keeps its last
        value. Missing values are reported in the order port, uuid, event, info.

        Raises:
            RegistrationParamsError: with code NO_PORT, BAD_PORT, NO_UUID,
                NO_EVENT, NO_INFO or BAD_INFO.
        """
        found: dict[str, str] = {}
        it = iter(args)
        for arg in it:
            key = _FLAGS.get(arg)
            if key is None:
                continue
            value = next(it, None)
            if value is None:
                break
            found[key] = value

        if "port" not in found:
            raise RegistrationParamsError("NO_PORT", "port not provided")
        port = _parse_port(found["port"])
        if "uuid" not in found:
            raise RegistrationParamsError("NO_UUID", "uuid not provided")
        if "event" not in found:
            raise RegistrationParamsError("NO_EVENT", "event not provided")
        if "info" not in found:
            raise RegistrationParamsError("NO_INFO", "info not provided")
        try:
            info = RegistrationInfo.model_validate_json(found["info"])
        except ValidationError as exc:
            raise RegistrationParamsError("BAD_INFO", f"info could not be parsed: {exc}") from exc

        return cls(port=port, uuid=found["uuid"], event=found["event"], info=info)
