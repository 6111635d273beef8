"""Create a GNOME Terminal dconf profile via a generated shell script.

The script is run immediately; when that fails it is saved so the user can run it.
"""

import logging
import shlex
import uuid
from pathlib import Path

from shellshade.colors import CanonicalTheme
from shellshade.installers.common import InstallResult, LiveApply, one_line, write_file
from shellshade.scripting import ScriptRunner
from shellshade.slug import slugify

log = logging.getLogger(__name__)

PROFILE_NAMESPACE = uuid.UUID("9b1c04d2-6f0e-4c55-8d8e-3a54f2b7c1e9")
PROFILES_PATH = "/org/gnome/terminal/legacy/profiles:"


def default_dir() -> Path:
    return Path.home() / ".config" / "shellshade"


def profile_id(theme: CanonicalTheme) -> str:
    """GNOME Terminal keys profiles by UUID; derive one from the name so reruns update it."""
    return str(uuid.uuid5(PROFILE_NAMESPACE, slugify(theme.name)))


def _gvariant_string(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def build_script(theme: CanonicalTheme) -> str:
    colors = theme.colors
    palette = "[" + ", ".join(f"'{c}'" for c in colors.ansi.as_list()) + "]"
    properties = {
        "visible-name": _gvariant_string(theme.name),
        "use-theme-colors": "false",
        "use-theme-transparency": "false",
        "background-color": f"'{colors.background}'",
        "foreground-color": f"'{colors.foreground}'",
        "cursor-colors-set": "true",
        "cursor-background-color": f"'{colors.cursor}'",
        "cursor-foreground-color": f"'{colors.cursor_text}'",
        "highlight-colors-set": "true",
        "highlight-background-color": f"'{colors.selection}'",
        "highlight-foreground-color": f"'{colors.selection_text}'",
        "palette": palette,
    }
    writes = "\n".join(
        f'dconf write "$PROFILE_PATH/{key}" {shlex.quote(value)}' for key, value in properties.items()
    )
    return (
        "#!/bin/bash\n"
        f"# ShellShade Theme: {one_line(theme.name)}\n"
        "set -e\n"
        "\n"
        f'PROFILE_ID="{profile_id(theme)}"\n'
        f'BASE="{PROFILES_PATH}"\n'
        'PROFILE_PATH="$BASE/:$PROFILE_ID"\n'
        "\n"
        "# Register the profile in the profile list once\n"
        'LIST=$(dconf read "$BASE/list" || true)\n'
        'case "$LIST" in\n'
        '  *"$PROFILE_ID"*) ;;\n'
        '  ""|"@as []"|"[]") dconf write "$BASE/list" "[\'$PROFILE_ID\']" ;;\n'
        '  *) dconf write "$BASE/list" "${LIST%]*}, \'$PROFILE_ID\']" ;;\n'
        "esac\n"
        "\n"
        f"{writes}\n"
        "\n"
        'dconf write "$BASE/default" "\'$PROFILE_ID\'"\n'
        f"echo {shlex.quote(f'Theme {one_line(theme.name)} applied to GNOME Terminal!')}\n"
    )


def install(
    theme: CanonicalTheme,
    destination: Path | None = None,
    runner: ScriptRunner | None = None,
) -> InstallResult:
    script = build_script(theme)
    runner = runner or ScriptRunner()

    result = runner.shell(script)
    if result.ok:
        return InstallResult(
            success=True,
            instructions=f'Theme "{theme.name}" applied to GNOME Terminal and set as the default profile.',
            live_apply=LiveApply.APPLIED,
        )

    log.warning("GNOME Terminal profile script failed: %s", result.error)
    path = (destination or default_dir()) / f"gnome-{slugify(theme.name)}.sh"
    try:
        write_file(path, script, mode=0o755)
    except OSError as e:
        return InstallResult(success=False, path=path, error=f"Failed to save profile script: {e}")
    return InstallResult(
        success=True,
        path=path,
        instructions=f'Script saved to {path}\nRun it manually: bash "{path}"',
        live_apply=LiveApply.SAVED_ONLY,
        timed_out=result.timed_out,
    )
