"""Kitty theme conf files."""

from pathlib import Path

from shellshade.colors import ANSI_FIELDS, CanonicalTheme
from shellshade.installers.common import InstallResult, one_line, write_file
from shellshade.scripting import ScriptRunner
from shellshade.slug import slugify


def default_dir() -> Path:
    return Path.home() / ".config" / "kitty" / "themes"


def render_conf(theme: CanonicalTheme) -> str:
    colors = theme.colors
    lines = [
        f"# {one_line(theme.name)} - Generated by ShellShade",
        "",
        f"foreground {colors.foreground}",
        f"background {colors.background}",
        f"cursor {colors.cursor}",
        f"cursor_text_color {colors.cursor_text}",
        f"selection_foreground {colors.selection_text}",
        f"selection_background {colors.selection}",
    ]
    palette = colors.ansi.as_list()
    lines += ["", "# Normal colors"]
    lines += [f"color{index} {palette[index]}" for index in range(8)]
    lines += ["", "# Bright colors"]
    lines += [f"color{index} {palette[index]}" for index in range(8, len(ANSI_FIELDS))]
    return "\n".join(lines) + "\n"


def install(
    theme: CanonicalTheme,
    destination: Path | None = None,
    runner: ScriptRunner | None = None,
) -> InstallResult:
    path = (destination or default_dir()) / f"{slugify(theme.name, '_')}.conf"
    try:
        write_file(path, render_conf(theme))
    except OSError as e:
        return InstallResult(success=False, path=path, error=f"Failed to write theme file: {e}")
    return InstallResult(
        success=True,
        path=path,
        instructions=f'Theme saved to {path}\nApply with: kitty +kitten themes --reload-in=all "{theme.name}"',
    )
