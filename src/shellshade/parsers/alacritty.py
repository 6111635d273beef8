"""Alacritty theme parsers for the legacy YAML layout and the current TOML layout.

The YAML reader is a deliberately small line scanner, not a YAML implementation:
it tracks the ``colors:`` block and ``<section>:`` headers inside it and picks up
``<key>: <color>`` lines. Anchors, flow mappings and multi-document files are not
understood; such lines are logged and the affected slots fall back to defaults.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from shellshade.colors import ANSI_NAMES, CanonicalTheme
from shellshade.errors import ParseError, ParseErrorKind
from shellshade.parsers.common import fill_colors, read_text

log = logging.getLogger(__name__)

VALUE_RE = re.compile(r"""^(\w+):\s*['"]?(#?[0-9a-fA-F]{6}|0x[0-9a-fA-F]{6})['"]?(?:\s|$)""")
UNSUPPORTED_RE = re.compile(r"""(^|[\s:])[&*][\w-]+|:\s*[{\[]|^(---|\.\.\.)\s*$""")

# "<section>.<key>" -> canonical field
ALACRITTY_KEYS: dict[str, str] = {
    "primary.background": "background",
    "primary.foreground": "foreground",
    "cursor.cursor": "cursor",
    "cursor.text": "cursor_text",
    "selection.background": "selection",
    "selection.text": "selection_text",
    "selection.foreground": "selection_text",
    **{f"normal.{name}": name for name in ANSI_NAMES},
    **{f"bright.{name}": f"bright_{name}" for name in ANSI_NAMES},
}


def normalize_value(value: str) -> str:
    """Accept '#rrggbb', '0xrrggbb' or bare 'rrggbb' and return '#rrggbb'."""
    value = value.strip().strip("'\"")
    if value[:2].lower() == "0x":
        value = value[2:]
    if not value.startswith("#"):
        value = "#" + value
    return value.lower()


def scan_yaml(text: str) -> dict[str, str]:
    """Flatten the colors block of an Alacritty YAML file into 'section.key' -> '#hex'."""
    entries: dict[str, str] = {}
    section = ""
    in_colors = False
    seen_content = False

    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if UNSUPPORTED_RE.search(stripped) and (seen_content or not stripped.startswith("---")):
            log.warning("line %d uses YAML syntax this reader does not support: %r", lineno, stripped)
        seen_content = True

        if stripped == "colors:":
            in_colors = True
            continue
        if not in_colors:
            continue

        if stripped.endswith(":") and "'" not in stripped and '"' not in stripped:
            section = stripped[:-1].strip()
            continue

        match = VALUE_RE.match(stripped)
        if match:
            key = f"{section}.{match.group(1)}" if section else match.group(1)
            entries[key] = normalize_value(match.group(2))

    return entries


def _to_canonical(entries: dict[str, str]) -> dict[str, str]:
    found: dict[str, str] = {}
    for key, value in entries.items():
        name = ALACRITTY_KEYS.get(key)
        if name and name not in found:
            found[name] = value
    return found


def parse_yaml(path: Path) -> CanonicalTheme:
    entries = scan_yaml(read_text(path))
    if not entries:
        log.warning("no colors found in %s, theme is entirely default-filled", path.name)
    return CanonicalTheme(name=path.stem, colors=fill_colors(_to_canonical(entries)))


def _flatten_toml(colors: dict[str, Any]) -> dict[str, str]:
    entries: dict[str, str] = {}
    for section, table in colors.items():
        if not isinstance(table, dict):
            continue
        for key, value in table.items():
            if isinstance(value, str) and re.fullmatch(r"(#|0x)?[0-9a-fA-F]{6}", value.strip()):
                entries[f"{section}.{key}"] = normalize_value(value)
    return entries


def parse_toml(path: Path) -> CanonicalTheme:
    text = read_text(path)
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"{path.name} is not valid TOML: {e}") from e
    colors = document.get("colors")
    entries = _flatten_toml(colors) if isinstance(colors, dict) else {}
    return CanonicalTheme(name=path.stem, colors=fill_colors(_to_canonical(entries)))
