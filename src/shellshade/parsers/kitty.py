"""Kitty .conf parser. Reads `<token> <#hex>` lines and ignores other directives."""

import re
from pathlib import Path

from shellshade.colors import ANSI_FIELDS, CanonicalTheme
from shellshade.parsers.common import fill_colors, read_text

LINE_RE = re.compile(r"^(\w+)\s+(#[0-9a-fA-F]{6})\b")

# Kitty token -> canonical field
KITTY_KEYS: dict[str, str] = {
    "background": "background",
    "foreground": "foreground",
    "cursor": "cursor",
    "cursor_text_color": "cursor_text",
    "selection_background": "selection",
    "selection_foreground": "selection_text",
    **{f"color{index}": name for index, name in enumerate(ANSI_FIELDS)},
}


def parse_entries(text: str) -> dict[str, str]:
    """Collect token -> color for every recognised line; later lines win."""
    entries: dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        match = LINE_RE.match(stripped)
        if match:
            entries[match.group(1)] = match.group(2).lower()
    return entries


def parse(path: Path) -> CanonicalTheme:
    entries = parse_entries(read_text(path))
    found = {KITTY_KEYS[token]: value for token, value in entries.items() if token in KITTY_KEYS}
    return CanonicalTheme(name=path.stem, colors=fill_colors(found))
