"""Helpers shared by the format parsers: file reading and default filling."""

from pathlib import Path

from shellshade.colors import (
    ANSI_FIELDS,
    FALLBACK_COLORS,
    FALLBACK_SELECTION,
    AnsiColors,
    ThemeColors,
)
from shellshade.errors import ParseError, ParseErrorKind


def read_bytes(path: Path) -> bytes:
    """Read a theme file, mapping filesystem failures to ParseError(NotFound)."""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise ParseError(ParseErrorKind.NOT_FOUND, f"file not found: {path}") from None
    except OSError as e:
        raise ParseError(ParseErrorKind.NOT_FOUND, f"cannot read {path}: {e}") from e


def read_text(path: Path) -> str:
    raw = read_bytes(path)
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(ParseErrorKind.MALFORMED_DOCUMENT, f"{path} is not UTF-8 text: {e}") from e


def fill_colors(found: dict[str, str], fallback: ThemeColors = FALLBACK_COLORS) -> ThemeColors:
    """Build ThemeColors from the slots a parser found, defaulting the rest.

    ``found`` is keyed by canonical field name (``cursor_text``, ``bright_red``, ...).
    Cursor follows the foreground, cursor text the background, selection text the
    foreground; selection falls back to a neutral gray and everything else to the
    fallback palette.
    """
    background = found.get("background", fallback.background)
    foreground = found.get("foreground", fallback.foreground)
    ansi = AnsiColors(**{name: found.get(name, getattr(fallback.ansi, name)) for name in ANSI_FIELDS})
    return ThemeColors(
        background=background,
        foreground=foreground,
        cursor=found.get("cursor", foreground),
        cursor_text=found.get("cursor_text", background),
        selection=found.get("selection", FALLBACK_SELECTION),
        selection_text=found.get("selection_text", foreground),
        ansi=ansi,
        link=found.get("link"),
        badge=found.get("badge"),
        tab=found.get("tab"),
    )
