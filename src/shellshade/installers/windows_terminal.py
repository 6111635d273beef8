"""Merge a color scheme into Windows Terminal settings.json and make it the default."""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from shellshade.colors import ANSI_NAMES, CanonicalTheme
from shellshade.installers.common import InstallResult, write_file
from shellshade.scripting import ScriptRunner

log = logging.getLogger(__name__)

# Strings are matched first so '//' inside a URL value survives
_COMMENT_RE = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)

# Windows Terminal calls ANSI magenta "purple"
_SCHEME_NAMES = {name: "purple" if name == "magenta" else name for name in ANSI_NAMES}


def strip_json_comments(text: str) -> str:
    """Remove // and /* */ comments that sit outside string literals."""
    return _COMMENT_RE.sub(lambda m: m.group(1) or "", text)


def _local_app_data() -> Path:
    return Path(os.environ.get("LOCALAPPDATA") or Path.home() / "AppData" / "Local")


def settings_candidates() -> list[Path]:
    base = _local_app_data()
    return [
        base / "Packages" / "Microsoft.WindowsTerminal_8wekyb3d8bbwe" / "LocalState" / "settings.json",
        base / "Microsoft" / "Windows Terminal" / "settings.json",
    ]


def default_settings_path() -> Path:
    candidates = settings_candidates()
    for path in candidates:
        if path.exists():
            return path
    return candidates[-1]


def build_scheme(theme: CanonicalTheme) -> dict[str, str]:
    colors = theme.colors
    scheme = {
        "name": theme.name,
        "background": colors.background,
        "foreground": colors.foreground,
        "cursorColor": colors.cursor,
        "selectionBackground": colors.selection,
    }
    for name in ANSI_NAMES:
        scheme[_SCHEME_NAMES[name]] = colors.ansi.normal[name]
    for name in ANSI_NAMES:
        scheme[f"bright{_SCHEME_NAMES[name].title()}"] = colors.ansi.bright[name]
    return scheme


def render_scheme(theme: CanonicalTheme) -> str:
    return json.dumps(build_scheme(theme), indent=4) + "\n"


def _empty_settings() -> dict[str, Any]:
    return {"schemes": [], "profiles": {"defaults": {}}}


def load_settings(text: str) -> dict[str, Any] | None:
    """Parse a JSON-with-comments settings document; None when it is unusable."""
    try:
        settings = json.loads(strip_json_comments(text))
    except json.JSONDecodeError as e:
        log.warning("existing Windows Terminal settings are not valid JSON, starting fresh: %s", e)
        return None
    return settings if isinstance(settings, dict) else None


def merge_scheme(settings: dict[str, Any], scheme: dict[str, str]) -> dict[str, Any]:
    """Replace any scheme with the same name and point the default profile at it."""
    schemes = settings.get("schemes")
    if not isinstance(schemes, list):
        schemes = []
    schemes = [s for s in schemes if not (isinstance(s, dict) and s.get("name") == scheme["name"])]
    schemes.append(scheme)
    settings["schemes"] = schemes

    profiles = settings.get("profiles")
    if isinstance(profiles, list):
        # Older settings files keep profiles as a bare list
        profiles = {"defaults": {}, "list": profiles}
    elif not isinstance(profiles, dict):
        profiles = {}
    if not isinstance(profiles.get("defaults"), dict):
        profiles["defaults"] = {}
    profiles["defaults"]["colorScheme"] = scheme["name"]
    settings["profiles"] = profiles
    return settings


def install(
    theme: CanonicalTheme,
    destination: Path | None = None,
    runner: ScriptRunner | None = None,
) -> InstallResult:
    path = destination or default_settings_path()
    settings = _empty_settings()

    try:
        if path.exists():
            text = path.read_text(encoding="utf-8-sig")
            loaded = load_settings(text) if text.strip() else None
            if loaded is not None:
                settings = loaded
            elif text.strip():
                # Keep the unreadable original next to the rewritten file
                path.with_name(path.name + ".bak").write_text(text, encoding="utf-8")
        merged = merge_scheme(settings, build_scheme(theme))
        write_file(path, json.dumps(merged, indent=4) + "\n")
    except (OSError, UnicodeDecodeError) as e:
        return InstallResult(success=False, path=path, error=f"Failed to update Windows Terminal settings: {e}")

    return InstallResult(
        success=True,
        path=path,
        instructions="Theme added to Windows Terminal and set as default.\nRestart Windows Terminal to see changes.",
    )
