"""Parse iTerm2 .itermcolors property lists of per-component color dicts."""

import logging
import plistlib
from pathlib import Path
from typing import Any
from xml.parsers.expat import ExpatError

from shellshade.colors import ANSI_FIELDS, CanonicalTheme, ThemeColors, component_to_byte, rgb_to_hex
from shellshade.errors import ParseError, ParseErrorKind
from shellshade.parsers.common import fill_colors, read_bytes

log = logging.getLogger(__name__)

# Canonical field -> iTerm2 color key (shared with the iTerm2 installer)
ITERM_COLOR_KEYS: dict[str, str] = {
    "background": "Background Color",
    "foreground": "Foreground Color",
    "cursor": "Cursor Color",
    "cursor_text": "Cursor Text Color",
    "selection": "Selection Color",
    "selection_text": "Selected Text Color",
    **{name: f"Ansi {index} Color" for index, name in enumerate(ANSI_FIELDS)},
    "link": "Link Color",
    "badge": "Badge Color",
    "tab": "Tab Color",
}

COMPONENT_KEYS = ("Red Component", "Green Component", "Blue Component")


def decode_color(entry: Any, key: str) -> str:
    """Turn {'Red Component': 0.5, ...} into '#rrggbb'."""
    if not isinstance(entry, dict):
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"'{key}' is not a color dictionary")
    try:
        r, g, b = (component_to_byte(entry.get(component, 0)) for component in COMPONENT_KEYS)
    except (TypeError, ValueError) as e:
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"'{key}' has a non-numeric component: {e}") from e
    return rgb_to_hex(r, g, b)


def decode_iterm_colors(document: dict[str, Any]) -> ThemeColors:
    """Decode every known color key present in an iTerm2 document or profile."""
    found = {
        name: decode_color(document[key], key)
        for name, key in ITERM_COLOR_KEYS.items()
        if key in document
    }
    missing = [key for name, key in ITERM_COLOR_KEYS.items() if name not in found]
    if missing:
        log.debug("iTerm2 document lacks %d color keys, using defaults: %s", len(missing), missing)
    return fill_colors(found)


def parse(path: Path) -> CanonicalTheme:
    raw = read_bytes(path)
    try:
        document = plistlib.loads(raw)
    except (plistlib.InvalidFileException, ExpatError, ValueError) as e:
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"{path.name} is not a valid property list: {e}") from e
    if not isinstance(document, dict):
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"{path.name} does not contain a color dictionary")
    return CanonicalTheme(name=path.stem, colors=decode_iterm_colors(document))
