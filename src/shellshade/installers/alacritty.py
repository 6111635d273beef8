"""Alacritty TOML theme files, pulled in through the import list in alacritty.toml."""

from pathlib import Path

from shellshade.colors import ANSI_NAMES, CanonicalTheme
from shellshade.installers.common import InstallResult, one_line, write_file
from shellshade.scripting import ScriptRunner
from shellshade.slug import slugify


def default_dir() -> Path:
    return Path.home() / ".config" / "alacritty" / "themes"


def _table(name: str, entries: dict[str, str]) -> str:
    lines = [f"[{name}]"]
    lines.extend(f'{key} = "{value}"' for key, value in entries.items())
    return "\n".join(lines)


def render_toml(theme: CanonicalTheme) -> str:
    colors = theme.colors
    tables = [
        _table("colors.primary", {"background": colors.background, "foreground": colors.foreground}),
        _table("colors.cursor", {"text": colors.cursor_text, "cursor": colors.cursor}),
        _table("colors.selection", {"text": colors.selection_text, "background": colors.selection}),
        _table("colors.normal", {name: colors.ansi.normal[name] for name in ANSI_NAMES}),
        _table("colors.bright", {name: colors.ansi.bright[name] for name in ANSI_NAMES}),
    ]
    header = f"# {one_line(theme.name)} - Generated by ShellShade\n"
    return header + "\n\n".join(tables) + "\n"


def install(
    theme: CanonicalTheme,
    destination: Path | None = None,
    runner: ScriptRunner | None = None,
) -> InstallResult:
    path = (destination or default_dir()) / f"{slugify(theme.name, '_')}.toml"
    try:
        write_file(path, render_toml(theme))
    except OSError as e:
        return InstallResult(success=False, path=path, error=f"Failed to write theme file: {e}")
    return InstallResult(
        success=True,
        path=path,
        instructions=(
            f"Theme saved to {path}\n"
            f'Import it in alacritty.toml with:\n[general]\nimport = ["{path}"]'
        ),
    )
