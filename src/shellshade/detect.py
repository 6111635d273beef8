"""Guess which terminal application the user is running."""

import os
import sys
from collections.abc import Mapping

from shellshade.dispatch import Terminal

PLATFORM_NAMES = {"macos": "macOS", "windows": "Windows", "linux": "Linux"}

PLATFORM_TERMINALS: dict[str, list[Terminal]] = {
    "macos": [Terminal.TERMINAL_APP, Terminal.ITERM2, Terminal.WARP, Terminal.ALACRITTY, Terminal.KITTY],
    "windows": [Terminal.WINDOWS_TERMINAL, Terminal.POWERSHELL, Terminal.ALACRITTY, Terminal.KITTY],
    "linux": [Terminal.GNOME_TERMINAL, Terminal.KONSOLE, Terminal.ALACRITTY, Terminal.KITTY],
}


def current_platform() -> str:
    if sys.platform == "darwin":
        return "macos"
    if sys.platform == "win32":
        return "windows"
    return "linux"


def detect_terminal(environ: Mapping[str, str] | None = None, platform: str | None = None) -> Terminal:
    """Pick the most likely terminal from environment variables, falling back per platform."""
    env = os.environ if environ is None else environ
    platform = platform or current_platform()
    term = env.get("TERM_PROGRAM", "").lower()
    term_id = env.get("LC_TERMINAL", "").lower()

    if platform == "windows":
        if env.get("WT_SESSION"):
            return Terminal.WINDOWS_TERMINAL
        if env.get("PSModulePath"):
            return Terminal.POWERSHELL
        if "alacritty" in term:
            return Terminal.ALACRITTY
        if env.get("KITTY_WINDOW_ID"):
            return Terminal.KITTY
        return Terminal.WINDOWS_TERMINAL

    if platform == "linux":
        if env.get("GNOME_TERMINAL_SCREEN"):
            return Terminal.GNOME_TERMINAL
        if env.get("KONSOLE_VERSION"):
            return Terminal.KONSOLE
        if "alacritty" in term:
            return Terminal.ALACRITTY
        if env.get("KITTY_WINDOW_ID"):
            return Terminal.KITTY
        return Terminal.GNOME_TERMINAL

    if "iterm" in term or "iterm" in term_id:
        return Terminal.ITERM2
    if "warp" in term or env.get("WARP_IS_LOCAL_SHELL_SESSION"):
        return Terminal.WARP
    if "alacritty" in term:
        return Terminal.ALACRITTY
    if "kitty" in term or env.get("KITTY_WINDOW_ID"):
        return Terminal.KITTY
    return Terminal.TERMINAL_APP
