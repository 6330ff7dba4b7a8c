"""TOML configuration for the retrofont command-line tools."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import tomllib

from .outline import OUTLINE_STYLE_COUNT
from .tdf import TdfFontType

VALID_OUTLINE_RANGE = range(0, OUTLINE_STYLE_COUNT)
VALID_COLOR_RANGE = range(0, 16)


class RenderConfigError(ValueError):
    """Raised when a retrofont configuration file fails validation."""


@dataclass(frozen=True)
class RenderSettings:
    """Defaults applied by ``retrofont render``."""

    outline_style: int = 0
    edit: bool = False
    font_number: int = 1
    fg: int | None = None
    bg: int | None = None


@dataclass(frozen=True)
class ConvertSettings:
    """Defaults applied by ``retrofont convert``."""

    font_type: TdfFontType = TdfFontType.COLOR


@dataclass(frozen=True)
class RetrofontConfig:
    render: RenderSettings = field(default_factory=RenderSettings)
    convert: ConvertSettings = field(default_factory=ConvertSettings)


def load_config(config_path: Path) -> RetrofontConfig:
    """Parse and validate the configuration at ``config_path``."""

    try:
        with config_path.open("rb") as stream:
            raw_data = tomllib.load(stream)
    except tomllib.TOMLDecodeError as exc:
        raise RenderConfigError(f"{config_path}: {exc}") from exc

    return RetrofontConfig(
        render=_parse_render_section(_section(raw_data, "render")),
        convert=_parse_convert_section(_section(raw_data, "convert")),
    )


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, Mapping):
        raise RenderConfigError(f"[{name}] section must be a mapping")
    return section


def _parse_render_section(section: Mapping[str, Any]) -> RenderSettings:
    defaults = RenderSettings()
    outline_style = _coerce_int(
        section.get("outline_style", defaults.outline_style), "render.outline_style", VALID_OUTLINE_RANGE
    )
    font_number = _coerce_int(section.get("font_number", defaults.font_number), "render.font_number")
    if font_number < 1:
        raise RenderConfigError("render.font_number must be 1 or greater (1-based index)")

    edit = section.get("edit", defaults.edit)
    if not isinstance(edit, bool):
        raise RenderConfigError("render.edit must be a boolean")

    fg = section.get("fg")
    bg = section.get("bg")
    return RenderSettings(
        outline_style=outline_style,
        edit=edit,
        font_number=font_number,
        fg=None if fg is None else _coerce_int(fg, "render.fg", VALID_COLOR_RANGE),
        bg=None if bg is None else _coerce_int(bg, "render.bg", VALID_COLOR_RANGE),
    )


def _parse_convert_section(section: Mapping[str, Any]) -> ConvertSettings:
    raw_type = section.get("type")
    if raw_type is None:
        return ConvertSettings()
    if not isinstance(raw_type, str):
        raise RenderConfigError("convert.type must be a string")
    try:
        return ConvertSettings(font_type=parse_font_type(raw_type))
    except ValueError as exc:
        raise RenderConfigError(str(exc)) from exc


def parse_font_type(raw_type: str) -> TdfFontType:
    """Map ``outline``/``block``/``color`` (any case) to a :class:`TdfFontType`."""

    normalised = raw_type.strip().upper()
    if normalised == "COLOUR":
        normalised = "COLOR"
    try:
        return TdfFontType[normalised]
    except KeyError:
        choices = ", ".join(member.name.lower() for member in TdfFontType)
        raise ValueError(f"unknown font type {raw_type!r} (expected one of {choices})") from None


def _coerce_int(raw_value: Any, name: str, valid: range | None = None) -> int:
    if isinstance(raw_value, bool):
        raise RenderConfigError(f"{name} must be an integer")
    if isinstance(raw_value, int):
        value = raw_value
    elif isinstance(raw_value, str):
        try:
            value = int(raw_value.strip(), base=10)
        except ValueError as exc:
            raise RenderConfigError(f"invalid {name}: {raw_value!r}") from exc
    else:
        raise RenderConfigError(f"{name} must be an integer")

    if valid is not None and value not in valid:
        raise RenderConfigError(f"{name} {value} outside supported range {valid.start}-{valid.stop - 1}")
    return value


__all__ = [
    "ConvertSettings",
    "RenderConfigError",
    "RenderSettings",
    "RetrofontConfig",
    "load_config",
    "parse_font_type",
]
