"""Terminal.app: create or update a settings set through AppleScript. No file is written."""

import logging
from pathlib import Path

from shellshade.colors import CanonicalTheme, hex_to_rgb
from shellshade.installers.common import InstallResult, LiveApply, quote_applescript
from shellshade.scripting import ScriptRunner

log = logging.getLogger(__name__)


def to_applescript_color(value: str) -> str:
    """'#ff8000' -> '{65535, 32896, 0}' (16 bits per channel)."""
    r, g, b = hex_to_rgb(value)
    return f"{{{r * 257}, {g * 257}, {b * 257}}}"


def profile_script(theme: CanonicalTheme) -> str:
    """Create-or-update the settings set and make it the default and startup profile."""
    name = quote_applescript(theme.name)
    colors = theme.colors
    return f"""
tell application "Terminal"
  if not (exists settings set "{name}") then
    make new settings set with properties {{name:"{name}"}}
  end if

  set targetSettings to settings set "{name}"
  set background color of targetSettings to {to_applescript_color(colors.background)}
  set normal text color of targetSettings to {to_applescript_color(colors.foreground)}
  set cursor color of targetSettings to {to_applescript_color(colors.cursor)}

  set default settings to targetSettings
  set startup settings to targetSettings
end tell
"""


def apply_script(theme: CanonicalTheme) -> str:
    name = quote_applescript(theme.name)
    return f"""
tell application "Terminal"
  set targetSettings to settings set "{name}"
  if (count of windows) > 0 then
    repeat with w in windows
      try
        set current settings of selected tab of w to targetSettings
      end try
    end repeat
  end if
end tell
"""


def install(
    theme: CanonicalTheme,
    destination: Path | None = None,
    runner: ScriptRunner | None = None,
) -> InstallResult:
    runner = runner or ScriptRunner()

    created = runner.osascript(profile_script(theme))
    if not created.ok:
        if created.timed_out:
            error = f"Terminal.app did not respond: {created.error}"
        else:
            error = f"Failed to create Terminal profile. Make sure Terminal.app is running. ({created.error})"
        return InstallResult(success=False, error=error, timed_out=created.timed_out)

    applied = runner.osascript(apply_script(theme))
    if applied.ok:
        return InstallResult(
            success=True,
            instructions=f'Theme "{theme.name}" applied! Profile saved in Terminal > Settings > Profiles.',
            live_apply=LiveApply.APPLIED,
        )

    log.warning("could not apply to open Terminal.app windows: %s", applied.error)
    return InstallResult(
        success=True,
        instructions=(
            f'Theme "{theme.name}" saved to Terminal profiles and set as default. Select it in '
            "Terminal > Settings > Profiles, or close and reopen Terminal windows."
        ),
        live_apply=LiveApply.SAVED_ONLY,
        timed_out=applied.timed_out,
    )
