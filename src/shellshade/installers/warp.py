"""Write Warp YAML themes into ~/.warp/themes."""

from pathlib import Path
from typing import Any

import yaml

from shellshade.colors import CanonicalTheme
from shellshade.installers.common import InstallResult, write_file
from shellshade.scripting import ScriptRunner
from shellshade.slug import slugify


def default_dir() -> Path:
    return Path.home() / ".warp" / "themes"


def build_theme(theme: CanonicalTheme) -> dict[str, Any]:
    colors = theme.colors
    return {
        "name": theme.name,
        "accent": colors.ansi.blue,
        "background": colors.background,
        "foreground": colors.foreground,
        "details": "darker",
        "terminal_colors": {
            "normal": colors.ansi.normal,
            "bright": colors.ansi.bright,
        },
    }


def render_yaml(theme: CanonicalTheme) -> str:
    return yaml.safe_dump(build_theme(theme), sort_keys=False, allow_unicode=True)


def install(
    theme: CanonicalTheme,
    destination: Path | None = None,
    runner: ScriptRunner | None = None,
) -> InstallResult:
    path = (destination or default_dir()) / f"{slugify(theme.name, '_')}.yaml"
    try:
        write_file(path, render_yaml(theme))
    except OSError as e:
        return InstallResult(success=False, path=path, error=f"Failed to write theme file: {e}")
    return InstallResult(
        success=True,
        path=path,
        instructions=f"Theme saved to {path}\nSelect it in Warp > Settings > Appearance > Themes.",
    )
