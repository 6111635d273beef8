"""Exception types shared by parsers, installers and the CLI."""

from enum import Enum


class ShellShadeError(Exception):
    """Base class for all ShellShade errors."""


class FormatError(ShellShadeError, ValueError):
    """A color value is not a valid #rrggbb hex string."""


class ParseErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    MALFORMED_DOCUMENT = "MalformedDocument"
    UNRECOGNIZED_SHAPE = "UnrecognizedShape"
    UNSUPPORTED_EXTENSION = "UnsupportedExtension"
    UNSUPPORTED_FORMAT = "UnsupportedFormat"


class ParseError(ShellShadeError):
    """A theme file could not be turned into a CanonicalTheme."""

    def __init__(self, kind: ParseErrorKind, detail: str) -> None:
        super().__init__(f"{kind.value}: {detail}")
        self.kind = kind
        self.detail = detail
