"""iTerm2 dynamic profile JSON, plus a best-effort AppleScript live apply."""

import json
import logging
import plistlib
import uuid
from pathlib import Path
from typing import Any

from shellshade.colors import CanonicalTheme, byte_to_component, hex_to_rgb
from shellshade.installers.common import InstallResult, LiveApply, quote_applescript, write_file
from shellshade.parsers.itermcolors import ITERM_COLOR_KEYS
from shellshade.scripting import ScriptRunner
from shellshade.slug import slugify

log = logging.getLogger(__name__)

PROFILE_NAMESPACE = uuid.UUID("5d3c5f0e-8a4b-4e53-9f3e-2b7a61c0d4a1")
COLOR_SPACE = "sRGB"


def default_dir() -> Path:
    return Path.home() / "Library" / "Application Support" / "iTerm2" / "DynamicProfiles"


def encode_color(value: str) -> dict[str, Any]:
    r, g, b = hex_to_rgb(value)
    return {
        "Red Component": byte_to_component(r),
        "Green Component": byte_to_component(g),
        "Blue Component": byte_to_component(b),
        "Alpha Component": 1.0,
        "Color Space": COLOR_SPACE,
    }


def encode_colors(theme: CanonicalTheme) -> dict[str, dict[str, Any]]:
    """Every populated canonical slot as an iTerm2 color dictionary."""
    encoded = {}
    for name, key in ITERM_COLOR_KEYS.items():
        value = theme.colors.slot(name)
        if value is not None:
            encoded[key] = encode_color(value)
    return encoded


def profile_guid(theme: CanonicalTheme) -> str:
    """The theme id, or a UUID derived from the name so reinstalls replace the profile."""
    return theme.id or str(uuid.uuid5(PROFILE_NAMESPACE, slugify(theme.name)))


def build_profile(theme: CanonicalTheme) -> dict[str, Any]:
    return {"Name": theme.name, "Guid": profile_guid(theme), **encode_colors(theme)}


def render_profile(theme: CanonicalTheme) -> str:
    return json.dumps({"Profiles": [build_profile(theme)]}, indent=2) + "\n"


def render_itermcolors(theme: CanonicalTheme) -> bytes:
    """The theme as a standalone .itermcolors property list."""
    return plistlib.dumps(encode_colors(theme))


def apply_script(theme: CanonicalTheme) -> str:
    name = quote_applescript(theme.name)
    return f"""
tell application "iTerm"
  repeat with w in windows
    repeat with t in tabs of w
      repeat with s in sessions of t
        tell s to set profile to "{name}"
      end repeat
    end repeat
  end repeat
end tell
"""


def install(
    theme: CanonicalTheme,
    destination: Path | None = None,
    runner: ScriptRunner | None = None,
) -> InstallResult:
    path = (destination or default_dir()) / f"shellshade-{slugify(theme.name)}.json"
    try:
        write_file(path, render_profile(theme))
    except OSError as e:
        return InstallResult(success=False, path=path, error=f"Failed to write profile: {e}")

    runner = runner or ScriptRunner()
    result = runner.osascript(apply_script(theme))
    if result.ok:
        return InstallResult(
            success=True,
            path=path,
            instructions=f'Theme "{theme.name}" applied to all iTerm2 sessions.',
            live_apply=LiveApply.APPLIED,
        )

    log.warning("iTerm2 live apply failed: %s", result.error)
    return InstallResult(
        success=True,
        path=path,
        instructions=(
            f'Theme "{theme.name}" installed. Open iTerm2 and select it from the Profiles menu, '
            "or restart iTerm2."
        ),
        live_apply=LiveApply.SAVED_ONLY,
        timed_out=result.timed_out,
    )
