"""Canonical color model: the one shape every parser produces and every installer reads."""

import math
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any

from shellshade.errors import FormatError

HEX_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")

ANSI_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")
CORE_FIELDS = ("background", "foreground", "cursor", "cursor_text", "selection", "selection_text")
EXTENDED_FIELDS = ("link", "badge", "tab")
CURSOR_STYLES = ("block", "beam", "underline")

# Neutral gray used when a format has no selection color
FALLBACK_SELECTION = "#373b41"


def is_valid_hex_color(value: Any) -> bool:
    """True iff value is '#' followed by exactly six hex digits."""
    return isinstance(value, str) and HEX_COLOR_RE.fullmatch(value) is not None


def normalize_hex(value: Any) -> str:
    """Return the lower-cased color, or raise FormatError if it is not #rrggbb."""
    if not is_valid_hex_color(value):
        raise FormatError(f"invalid hex color: {value!r}")
    return value.lower()


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    value = normalize_hex(value)
    return int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def component_to_byte(component: float) -> int:
    """Map a float color component in [0, 1] to a byte, rounding half up and clamping."""
    value = float(component)
    if math.isnan(value):
        raise ValueError("color component is NaN")
    if math.isinf(value):
        return 255 if value > 0 else 0
    return max(0, min(255, math.floor(value * 255 + 0.5)))


def byte_to_component(value: int) -> float:
    return value / 255


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _normalize_fields(obj: Any, names: tuple[str, ...], optional: bool = False) -> None:
    for name in names:
        value = getattr(obj, name)
        if value is None and optional:
            continue
        object.__setattr__(obj, name, normalize_hex(value))


@dataclass(frozen=True)
class AnsiColors:
    """The 16-color palette, declared in ANSI index order (0=black ... 15=bright white)."""

    black: str
    red: str
    green: str
    yellow: str
    blue: str
    magenta: str
    cyan: str
    white: str
    bright_black: str
    bright_red: str
    bright_green: str
    bright_yellow: str
    bright_blue: str
    bright_magenta: str
    bright_cyan: str
    bright_white: str

    def __post_init__(self) -> None:
        _normalize_fields(self, ANSI_FIELDS)

    def as_list(self) -> list[str]:
        return [getattr(self, name) for name in ANSI_FIELDS]

    @property
    def normal(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in ANSI_NAMES}

    @property
    def bright(self) -> dict[str, str]:
        return {name: getattr(self, f"bright_{name}") for name in ANSI_NAMES}

    @classmethod
    def from_list(cls, values: list[str]) -> "AnsiColors":
        if len(values) != 16:
            raise FormatError(f"expected 16 ANSI colors, got {len(values)}")
        return cls(*values)

    def to_dict(self) -> dict[str, str]:
        return {_camel(name): getattr(self, name) for name in ANSI_FIELDS}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnsiColors":
        return cls(**{name: data[_camel(name)] for name in ANSI_FIELDS})


ANSI_FIELDS = tuple(f.name for f in fields(AnsiColors))


@dataclass(frozen=True)
class ThemeColors:
    """Six core colors, the ANSI palette, and the optional extended slots."""

    background: str
    foreground: str
    cursor: str
    cursor_text: str
    selection: str
    selection_text: str
    ansi: AnsiColors
    link: str | None = None
    badge: str | None = None
    tab: str | None = None

    def __post_init__(self) -> None:
        _normalize_fields(self, CORE_FIELDS)
        _normalize_fields(self, EXTENDED_FIELDS, optional=True)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {_camel(name): getattr(self, name) for name in CORE_FIELDS}
        data["ansi"] = self.ansi.to_dict()
        for name in EXTENDED_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ThemeColors":
        core = {name: data[_camel(name)] for name in CORE_FIELDS}
        extended = {name: data.get(name) for name in EXTENDED_FIELDS}
        return cls(ansi=AnsiColors.from_dict(data["ansi"]), **core, **extended)

    def slot(self, name: str) -> str | None:
        """Look up any canonical field by name, ANSI slots included."""
        if name in ANSI_FIELDS:
            return getattr(self.ansi, name)
        return getattr(self, name)


@dataclass(frozen=True)
class ThemeSettings:
    """Font and cursor preferences stored alongside a theme."""

    font_family: str = "SF Mono"
    font_size: int = 13
    line_height: float = 1.2
    cursor_style: str = "block"
    cursor_blink: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.font_family, str):
            raise ValueError(f"font family must be a string, got {self.font_family!r}")
        # bool is an int subclass
        if isinstance(self.font_size, bool) or not isinstance(self.font_size, int):
            raise ValueError(f"font size must be an integer, got {self.font_size!r}")
        if isinstance(self.line_height, bool) or not isinstance(self.line_height, (int, float)):
            raise ValueError(f"line height must be a number, got {self.line_height!r}")
        if not isinstance(self.cursor_blink, bool):
            raise ValueError(f"cursor blink must be true or false, got {self.cursor_blink!r}")
        if self.cursor_style not in CURSOR_STYLES:
            raise ValueError(f"unknown cursor style: {self.cursor_style!r}")

    def to_dict(self) -> dict[str, Any]:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ThemeSettings":
        known = {f.name for f in fields(cls)}
        return cls(**{name: data[_camel(name)] for name in known if _camel(name) in data})


@dataclass(frozen=True)
class CanonicalTheme:
    """A format-independent terminal color scheme."""

    name: str
    colors: ThemeColors
    settings: ThemeSettings = field(default_factory=ThemeSettings)
    id: str | None = None
    author: str | None = None
    description: str | None = None

    def with_id(self, theme_id: str) -> "CanonicalTheme":
        return replace(self, id=theme_id)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        for key in ("id", "author", "description"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        data["colors"] = self.colors.to_dict()
        data["settings"] = self.settings.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CanonicalTheme":
        return cls(
            name=data["name"],
            colors=ThemeColors.from_dict(data["colors"]),
            settings=ThemeSettings.from_dict(data.get("settings") or {}),
            id=data.get("id"),
            author=data.get("author"),
            description=data.get("description"),
        )


# Tomorrow Night; fills any slot a lenient parser could not find
FALLBACK_COLORS = ThemeColors(
    background="#1d1f21",
    foreground="#c5c8c6",
    cursor="#c5c8c6",
    cursor_text="#1d1f21",
    selection=FALLBACK_SELECTION,
    selection_text="#c5c8c6",
    ansi=AnsiColors(
        black="#1d1f21",
        red="#cc6666",
        green="#b5bd68",
        yellow="#f0c674",
        blue="#81a2be",
        magenta="#b294bb",
        cyan="#8abeb7",
        white="#c5c8c6",
        bright_black="#969896",
        bright_red="#de935f",
        bright_green="#b5bd68",
        bright_yellow="#f0c674",
        bright_blue="#81a2be",
        bright_magenta="#b294bb",
        bright_cyan="#8abeb7",
        bright_white="#ffffff",
    ),
)
