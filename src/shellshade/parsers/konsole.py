"""Konsole .colorscheme parser: INI sections holding `Color=r,g,b`."""

import configparser
from pathlib import Path

from shellshade.colors import ANSI_NAMES, CanonicalTheme, rgb_to_hex
from shellshade.errors import ParseError, ParseErrorKind
from shellshade.parsers.common import fill_colors, read_text

# Konsole section -> canonical field
KONSOLE_SECTIONS: dict[str, str] = {
    "Background": "background",
    "Foreground": "foreground",
    **{f"Color{index}": name for index, name in enumerate(ANSI_NAMES)},
    **{f"Color{index}Intense": f"bright_{name}" for index, name in enumerate(ANSI_NAMES)},
}


def decode_rgb(value: str) -> str | None:
    """'40,42,54' -> '#282a36'; None when the value is not three bytes."""
    parts = [part.strip() for part in value.split(",")]
    if len(parts) < 3:
        return None
    try:
        r, g, b = (int(part) for part in parts[:3])
    except ValueError:
        return None
    if not all(0 <= c <= 255 for c in (r, g, b)):
        return None
    return rgb_to_hex(r, g, b)


def parse(path: Path) -> CanonicalTheme:
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str
    try:
        parser.read_string(read_text(path), source=str(path))
    except configparser.Error as e:
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"{path.name} is not a valid color scheme: {e}") from e

    found: dict[str, str] = {}
    for section, name in KONSOLE_SECTIONS.items():
        if parser.has_option(section, "Color"):
            color = decode_rgb(parser.get(section, "Color"))
            if color:
                found[name] = color

    name = parser.get("General", "Description", fallback="") or path.stem
    return CanonicalTheme(name=name, colors=fill_colors(found))
