"""Read JSON themes in the native canonical shape or as iTerm2 profile exports."""

import json
from pathlib import Path
from typing import Any

from shellshade.colors import FALLBACK_SELECTION, CanonicalTheme, ThemeColors, ThemeSettings
from shellshade.errors import FormatError, ParseError, ParseErrorKind
from shellshade.parsers.common import read_text
from shellshade.parsers.itermcolors import decode_iterm_colors


def serialize_canonical_json(theme: CanonicalTheme) -> str:
    """Render a theme in the native JSON shape read back by parse_canonical_json."""
    return json.dumps(theme.to_dict(), indent=2) + "\n"


def _fill_core_defaults(colors: dict[str, Any]) -> dict[str, Any]:
    colors = dict(colors)
    if "background" in colors and "foreground" in colors:
        colors.setdefault("cursor", colors["foreground"])
        colors.setdefault("cursorText", colors["background"])
        colors.setdefault("selection", FALLBACK_SELECTION)
        colors.setdefault("selectionText", colors["foreground"])
    return colors


def _text(source: dict[str, Any], key: str) -> str | None:
    value = source.get(key)
    if value is not None and not isinstance(value, str):
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"'{key}' must be a string, got {value!r}")
    return value


def from_canonical(data: dict[str, Any], default_name: str) -> CanonicalTheme:
    colors = data["colors"]
    try:
        theme_colors = ThemeColors.from_dict(_fill_core_defaults(colors))
    except KeyError as e:
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"theme is missing color {e.args[0]!r}") from None
    except (FormatError, TypeError) as e:
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, str(e)) from e
    try:
        settings = ThemeSettings.from_dict(data.get("settings") or {})
    except (TypeError, ValueError) as e:
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"invalid settings: {e}") from e
    return CanonicalTheme(
        name=_text(data, "name") or default_name,
        colors=theme_colors,
        settings=settings,
        id=_text(data, "id"),
        author=_text(data, "author"),
        description=_text(data, "description"),
    )


def from_profiles(data: dict[str, Any], default_name: str) -> CanonicalTheme:
    profile = data["Profiles"][0]
    if not isinstance(profile, dict):
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, "first profile is not an object")
    return CanonicalTheme(
        name=_text(profile, "Name") or default_name,
        colors=decode_iterm_colors(profile),
        id=_text(profile, "Guid"),
    )


def parse_canonical_json(text: str, default_name: str = "Untitled") -> CanonicalTheme:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"invalid JSON: {e}") from e

    if isinstance(data, dict):
        colors = data.get("colors")
        if isinstance(colors, dict) and isinstance(colors.get("ansi"), dict):
            return from_canonical(data, default_name)
        profiles = data.get("Profiles")
        if isinstance(profiles, list) and profiles:
            return from_profiles(data, default_name)

    raise ParseError(
        ParseErrorKind.UNRECOGNIZED_SHAPE,
        "expected a theme with colors.ansi or an iTerm2 document with a Profiles array",
    )


def parse(path: Path) -> CanonicalTheme:
    return parse_canonical_json(read_text(path), default_name=path.stem)
