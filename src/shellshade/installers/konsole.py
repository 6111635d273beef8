"""Konsole .colorscheme files."""

import configparser
import io
from pathlib import Path

from shellshade.colors import ANSI_NAMES, CanonicalTheme, hex_to_rgb
from shellshade.installers.common import InstallResult, one_line, write_file
from shellshade.scripting import ScriptRunner
from shellshade.slug import slugify

GENERAL = {
    "Anchor": "0.5,0.5",
    "Blur": "false",
    "ColorRandomization": "false",
    "FillStyle": "Tile",
    "Opacity": "1",
    "Wallpaper": "",
    "WallpaperFlipType": "NoFlip",
    "WallpaperOpacity": "1",
}


def default_dir() -> Path:
    return Path.home() / ".local" / "share" / "konsole"


def to_konsole_rgb(value: str) -> str:
    return ",".join(str(c) for c in hex_to_rgb(value))


def render_colorscheme(theme: CanonicalTheme) -> str:
    colors = theme.colors
    scheme = configparser.ConfigParser(interpolation=None)
    scheme.optionxform = str

    def add(section: str, value: str) -> None:
        scheme[section] = {"Color": to_konsole_rgb(value)}

    for variant in ("", "Faint", "Intense"):
        add(f"Background{variant}", colors.background)
    for index, name in enumerate(ANSI_NAMES):
        add(f"Color{index}", colors.ansi.normal[name])
        add(f"Color{index}Faint", colors.ansi.normal[name])
        add(f"Color{index}Intense", colors.ansi.bright[name])
    for variant in ("", "Faint", "Intense"):
        add(f"Foreground{variant}", colors.foreground)
    scheme["General"] = {"Description": one_line(theme.name), **GENERAL}

    out = io.StringIO()
    scheme.write(out, space_around_delimiters=False)
    return out.getvalue()


def install(
    theme: CanonicalTheme,
    destination: Path | None = None,
    runner: ScriptRunner | None = None,
) -> InstallResult:
    path = (destination or default_dir()) / f"{slugify(theme.name, '_')}.colorscheme"
    try:
        write_file(path, render_colorscheme(theme))
    except OSError as e:
        return InstallResult(success=False, path=path, error=f"Failed to write colorscheme file: {e}")
    return InstallResult(
        success=True,
        path=path,
        instructions=f"Theme saved to {path}\nSelect it in Konsole > Settings > Edit Current Profile > Appearance.",
    )
