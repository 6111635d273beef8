"""Inject a PSReadLine color block into the PowerShell profile script.

The injected block is bounded by BLOCK_BEGIN / BLOCK_END. Every install strips all
existing blocks before appending the new one, so reinstalling never duplicates it.
"""

import os
import re
from pathlib import Path

from shellshade.colors import CanonicalTheme
from shellshade.installers.common import InstallResult, one_line, write_file
from shellshade.scripting import ScriptRunner

BLOCK_BEGIN = "# >>> shellshade theme >>>"
BLOCK_END = "# <<< shellshade theme <<<"

# A block runs to its end marker, or to end of file when the marker was lost
_BLOCK_RE = re.compile(
    rf"^{re.escape(BLOCK_BEGIN)}.*?(?:^{re.escape(BLOCK_END)}[^\n]*(?:\n|\Z)|\Z)",
    re.MULTILINE | re.DOTALL,
)


def default_profile_path() -> Path:
    home = Path(os.environ.get("USERPROFILE") or Path.home())
    return home / "Documents" / "PowerShell" / "Microsoft.PowerShell_profile.ps1"


def strip_known_block(text: str) -> str:
    """Remove every shellshade block from a profile script."""
    return _BLOCK_RE.sub("", text)


def token_colors(theme: CanonicalTheme) -> dict[str, str]:
    """PSReadLine token category -> color."""
    colors = theme.colors
    ansi = colors.ansi
    return {
        "Command": ansi.yellow,
        "Parameter": ansi.cyan,
        "String": ansi.green,
        "Comment": ansi.bright_black,
        "Keyword": ansi.magenta,
        "Variable": ansi.blue,
        "Operator": colors.foreground,
        "Number": ansi.red,
        "Type": ansi.cyan,
        "Member": ansi.yellow,
        "Error": ansi.bright_red,
        "Selection": colors.selection,
    }


def render_block(theme: CanonicalTheme) -> str:
    entries = "\n".join(f"        {token:<18} = '{color}'" for token, color in token_colors(theme).items())
    return (
        f"{BLOCK_BEGIN}\n"
        f"# ShellShade Theme: {one_line(theme.name)}\n"
        "if (Get-Module -ListAvailable -Name PSReadLine) {\n"
        "    Set-PSReadLineOption -Colors @{\n"
        f"{entries}\n"
        "    }\n"
        "}\n"
        f"{BLOCK_END}\n"
    )


def inject_block(existing: str, theme: CanonicalTheme) -> str:
    kept = strip_known_block(existing).rstrip()
    block = render_block(theme)
    return f"{kept}\n\n{block}" if kept else block


def install(
    theme: CanonicalTheme,
    destination: Path | None = None,
    runner: ScriptRunner | None = None,
) -> InstallResult:
    path = destination or default_profile_path()
    try:
        existing = path.read_text(encoding="utf-8-sig") if path.exists() else ""
        write_file(path, inject_block(existing, theme))
    except (OSError, UnicodeDecodeError) as e:
        return InstallResult(success=False, path=path, error=f"Failed to update PowerShell profile: {e}")

    return InstallResult(
        success=True,
        path=path,
        instructions=(
            "Theme applied to the PowerShell profile.\n"
            "Restart PowerShell to see changes. For full 24-bit color, use Windows Terminal."
        ),
    )
