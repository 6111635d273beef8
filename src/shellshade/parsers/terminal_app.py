"""Terminal.app .terminal files are recognised but cannot be imported."""

from pathlib import Path

from shellshade.colors import CanonicalTheme
from shellshade.errors import ParseError, ParseErrorKind


def parse(path: Path) -> CanonicalTheme:
    # Colors in .terminal files are NSKeyedArchiver blobs; the file is never read.
    raise ParseError(
        ParseErrorKind.UNSUPPORTED_FORMAT,
        f"{path.name}: Terminal.app profiles require native archive decoding. "
        "Export the theme from iTerm2 as .itermcolors, or use a JSON, Alacritty or Kitty theme instead.",
    )
