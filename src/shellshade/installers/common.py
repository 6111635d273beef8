"""Result type and filesystem helpers shared by every installer."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class LiveApply(str, Enum):
    APPLIED = "applied"  # artifact written and the running terminal picked it up
    SAVED_ONLY = "saved_only"  # artifact written, live apply failed or was skipped
    NOT_SUPPORTED = "not_supported"  # target has no live apply mechanism


@dataclass
class InstallResult:
    success: bool
    path: Path | None = None
    instructions: str | None = None
    error: str | None = None
    live_apply: LiveApply = LiveApply.NOT_SUPPORTED
    timed_out: bool = False

    def __post_init__(self) -> None:
        if not self.success and not self.error:
            raise ValueError("a failed InstallResult needs an error message")


def write_file(path: Path, content: str | bytes, mode: int | None = None) -> None:
    """Write an artifact, creating parent directories first. Raises OSError."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    if mode is not None:
        path.chmod(mode)


def quote_applescript(text: str) -> str:
    """Escape text for use inside an AppleScript double-quoted string."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def one_line(text: str) -> str:
    """Collapse a theme name for use in single-line comments."""
    return " ".join(text.split())
