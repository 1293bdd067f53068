"""Value types and payload models shared by events and commands.

Wire names are lowerCamelCase; attributes are snake_case. Models accept either
form on construction.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Annotated, Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema

G = TypeVar("G")
"""Global settings persisted by the host for the plugin."""
S = TypeVar("S")
"""Settings persisted by the host for one action instance."""
M = TypeVar("M")
"""Messages exchanged with the property inspector."""

U8 = Annotated[int, Field(ge=0, le=255)]
"""An unsigned byte, the width the host uses for states, positions and sizes."""


class WireModel(BaseModel):
    """Base for every model that travels on the socket."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Optional fields dropped from the wire when unset (other optionals are sent as null).
    omit_when_none: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _drop_unset_optionals(self, handler: SerializerFunctionWrapHandler) -> Any:
        data = handler(self)
        if not self.omit_when_none or not isinstance(data, dict):
            return data
        fields = type(self).model_fields
        for name in self.omit_when_none:
            for key in (name, fields[name].alias):
                if key in data and data[key] is None:
                    del data[key]
        return data


class Target(IntEnum):
    """Where a visual command applies."""

    BOTH = 0
    HARDWARE = 1
    SOFTWARE = 2


class Alignment(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class DeviceType(IntEnum):
    """Known device models. Unrecognized codes are kept as plain ints."""

    STREAM_DECK = 0
    STREAM_DECK_MINI = 1
    STREAM_DECK_XL = 2
    STREAM_DECK_MOBILE = 3
    CORSAIR_G_KEYS = 4
    STREAM_DECK_PEDAL = 5
    CORSAIR_VOYAGER = 6
    STREAM_DECK_PLUS = 7


_HEX_PAIR = re.compile(r"[0-9a-fA-F]{2}")


def _component(text: str) -> int:
    if not _HEX_PAIR.fullmatch(text):
        raise ValueError(f"invalid color component {text!r}")
    return int(text, 16)


@dataclass(frozen=True, slots=True)
class Color:
    """An HTML hex color, with or without an alpha channel.

    ``#rrggbb`` parses to a color without alpha, ``#rrggbbaa`` to one with
    alpha; :meth:`to_hex` writes back whichever form was parsed.
    """

    r: int
    g: int
    b: int
    a: int | None = None

    @property
    def has_alpha(self) -> bool:
        return self.a is not None

    @classmethod
    def parse(cls, value: str) -> Color:
        if not isinstance(value, str):
            raise ValueError("expected a hex color string")
        if len(value) not in (7, 9):
            raise ValueError(f"invalid length {len(value)}, expected a hex color")
        if value[0] != "#":
            raise ValueError("expected string to begin with '#'")
        r, g, b = (_component(value[i : i + 2]) for i in (1, 3, 5))
        if len(value) == 9:
            return cls(r, g, b, _component(value[7:9]))
        return cls(r, g, b)

    def to_hex(self) -> str:
        if self.a is None:
            return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"

    def __str__(self) -> str:
        return self.to_hex()

    @classmethod
    def _validate(cls, value: Any) -> Color:
        if isinstance(value, Color):
            return value
        return cls.parse(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda color: color.to_hex()),
        )


class Coordinates(WireModel):
    column: U8
    row: U8


class DeviceSize(WireModel):
    columns: U8
    rows: U8


class DeviceInfo(WireModel):
    """Information about a connected device."""

    name: str | None = None
    size: DeviceSize
    device_type: Annotated[DeviceType | int | None, Field(alias="type", union_mode="left_to_right")] = None


class TitleParameters(WireModel):
    font_family: str
    font_size: U8
    font_style: str
    font_underline: bool
    show_title: bool
    title_alignment: Alignment
    title_color: str


# --- payloads received from the host ---


class KeyPayload(WireModel, Generic[S]):
    """Additional information about a key press or a settings delivery."""

    settings: S
    coordinates: Coordinates | None = None
    state: U8 | None = None
    user_desired_state: U8 | None = None
    is_in_multi_action: bool | None = None


class VisibilityPayload(WireModel, Generic[S]):
    settings: S
    coordinates: Coordinates | None = None
    state: U8 | None = None
    is_in_multi_action: bool | None = None


class TitleParametersPayload(WireModel, Generic[S]):
    settings: S
    coordinates: Coordinates
    state: U8 | None = None
    title: str
    title_parameters: TitleParameters


class GlobalSettingsPayload(WireModel, Generic[G]):
    settings: G


class ApplicationPayload(WireModel):
    application: str


class TouchTapPayload(WireModel, Generic[S]):
    settings: S
    coordinates: Coordinates | None = None
    tap_pos: tuple[U8, U8]
    hold: bool


class DialDownPayload(WireModel, Generic[S]):
    settings: S
    coordinates: Coordinates | None = None


class DialUpPayload(WireModel, Generic[S]):
    settings: S
    coordinates: Coordinates | None = None


class DialRotatePayload(WireModel, Generic[S]):
    settings: S
    coordinates: Coordinates | None = None
    ticks: int
    pressed: bool


# --- payloads sent to the host ---


class TitlePayload(WireModel):
    """Title for a key; ``state`` is only sent when targeting one state."""

    omit_when_none: ClassVar[frozenset[str]] = frozenset({"state"})

    title: str | None = None
    target: Target = Target.BOTH
    state: U8 | None = None


class ImagePayload(WireModel):
    """Image for a key as a data URL (base64 or SVG)."""

    omit_when_none: ClassVar[frozenset[str]] = frozenset({"state"})

    image: str | None = None
    target: Target = Target.BOTH
    state: U8 | None = None


class StatePayload(WireModel):
    state: U8


class ProfilePayload(WireModel):
    profile: str


class UrlPayload(WireModel):
    url: str


class LogMessagePayload(WireModel):
    message: str


class SetFeedbackLayoutPayload(WireModel):
    layout: str


class SetTriggerDescriptionPayload(WireModel):
    long_touch: str | None = None
    push: str | None = None
    rotate: str | None = None
    touch: str | None = None
