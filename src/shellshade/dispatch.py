"""Route files to parsers by extension and themes to installers by target terminal."""

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from shellshade.colors import CanonicalTheme
from shellshade.errors import ParseError, ParseErrorKind
from shellshade.installers import (
    alacritty,
    gnome_terminal,
    iterm2,
    kitty,
    konsole,
    powershell,
    terminal_app,
    warp,
    windows_terminal,
)
from shellshade.installers.common import InstallResult
from shellshade.parsers import alacritty as alacritty_parser
from shellshade.parsers import itermcolors, json_theme
from shellshade.parsers import kitty as kitty_parser
from shellshade.parsers import konsole as konsole_parser
from shellshade.parsers import terminal_app as terminal_app_parser
from shellshade.scripting import ScriptRunner

log = logging.getLogger(__name__)


class SourceFormat(str, Enum):
    ITERMCOLORS = "itermcolors"
    TERMINAL_APP = "terminal"
    ALACRITTY_YAML = "alacritty-yaml"
    ALACRITTY_TOML = "alacritty-toml"
    JSON = "json"
    KITTY = "kitty"
    KONSOLE = "konsole"


class Terminal(str, Enum):
    TERMINAL_APP = "terminal"
    ITERM2 = "iterm2"
    WARP = "warp"
    ALACRITTY = "alacritty"
    KITTY = "kitty"
    WINDOWS_TERMINAL = "windows-terminal"
    POWERSHELL = "powershell"
    GNOME_TERMINAL = "gnome-terminal"
    KONSOLE = "konsole"


class ExportFormat(str, Enum):
    JSON = "json"
    ITERMCOLORS = "itermcolors"
    ITERM2_JSON = "iterm2-json"
    ALACRITTY = "alacritty"
    KITTY = "kitty"
    WARP = "warp"
    KONSOLE = "konsole"
    WINDOWS_TERMINAL = "windows-terminal"


Parser = Callable[[Path], CanonicalTheme]
Installer = Callable[..., InstallResult]
Exporter = Callable[[CanonicalTheme], str | bytes]

EXTENSIONS: dict[str, SourceFormat] = {
    ".itermcolors": SourceFormat.ITERMCOLORS,
    ".terminal": SourceFormat.TERMINAL_APP,
    ".yaml": SourceFormat.ALACRITTY_YAML,
    ".yml": SourceFormat.ALACRITTY_YAML,
    ".toml": SourceFormat.ALACRITTY_TOML,
    ".json": SourceFormat.JSON,
    ".conf": SourceFormat.KITTY,
    ".colorscheme": SourceFormat.KONSOLE,
}

PARSERS: dict[SourceFormat, Parser] = {
    SourceFormat.ITERMCOLORS: itermcolors.parse,
    SourceFormat.TERMINAL_APP: terminal_app_parser.parse,
    SourceFormat.ALACRITTY_YAML: alacritty_parser.parse_yaml,
    SourceFormat.ALACRITTY_TOML: alacritty_parser.parse_toml,
    SourceFormat.JSON: json_theme.parse,
    SourceFormat.KITTY: kitty_parser.parse,
    SourceFormat.KONSOLE: konsole_parser.parse,
}

INSTALLERS: dict[Terminal, Installer] = {
    Terminal.TERMINAL_APP: terminal_app.install,
    Terminal.ITERM2: iterm2.install,
    Terminal.WARP: warp.install,
    Terminal.ALACRITTY: alacritty.install,
    Terminal.KITTY: kitty.install,
    Terminal.WINDOWS_TERMINAL: windows_terminal.install,
    Terminal.POWERSHELL: powershell.install,
    Terminal.GNOME_TERMINAL: gnome_terminal.install,
    Terminal.KONSOLE: konsole.install,
}

EXPORTERS: dict[ExportFormat, Exporter] = {
    ExportFormat.JSON: json_theme.serialize_canonical_json,
    ExportFormat.ITERMCOLORS: iterm2.render_itermcolors,
    ExportFormat.ITERM2_JSON: iterm2.render_profile,
    ExportFormat.ALACRITTY: alacritty.render_toml,
    ExportFormat.KITTY: kitty.render_conf,
    ExportFormat.WARP: warp.render_yaml,
    ExportFormat.KONSOLE: konsole.render_colorscheme,
    ExportFormat.WINDOWS_TERMINAL: windows_terminal.render_scheme,
}

EXPORT_EXTENSIONS: dict[ExportFormat, str] = {
    ExportFormat.JSON: ".json",
    ExportFormat.ITERMCOLORS: ".itermcolors",
    ExportFormat.ITERM2_JSON: ".json",
    ExportFormat.ALACRITTY: ".toml",
    ExportFormat.KITTY: ".conf",
    ExportFormat.WARP: ".yaml",
    ExportFormat.KONSOLE: ".colorscheme",
    ExportFormat.WINDOWS_TERMINAL: ".json",
}

TERMINAL_NAMES: dict[Terminal, str] = {
    Terminal.TERMINAL_APP: "Terminal.app",
    Terminal.ITERM2: "iTerm2",
    Terminal.WARP: "Warp",
    Terminal.ALACRITTY: "Alacritty",
    Terminal.KITTY: "Kitty",
    Terminal.WINDOWS_TERMINAL: "Windows Terminal",
    Terminal.POWERSHELL: "PowerShell",
    Terminal.GNOME_TERMINAL: "GNOME Terminal",
    Terminal.KONSOLE: "Konsole",
}


def format_for_path(path: Path) -> SourceFormat:
    ext = path.suffix.lower()
    fmt = EXTENSIONS.get(ext)
    if fmt is None:
        supported = ", ".join(sorted(EXTENSIONS))
        raise ParseError(
            ParseErrorKind.UNSUPPORTED_EXTENSION,
            f"unsupported file extension {ext or '(none)'!r}; expected one of {supported}",
        )
    return fmt


def dispatch_parse(path: Path) -> CanonicalTheme:
    """Parse a theme file with the parser its extension selects."""
    path = Path(path)
    fmt = format_for_path(path)
    log.debug("parsing %s as %s", path, fmt.value)
    return PARSERS[fmt](path)


def dispatch_install(
    theme: CanonicalTheme,
    target: Terminal | str,
    destination: Path | None = None,
    runner: ScriptRunner | None = None,
) -> InstallResult:
    """Install a theme for one terminal application."""
    target = Terminal(target)
    installer = INSTALLERS.get(target)
    if installer is None:
        raise ValueError(f"no installer registered for {target.value}")
    log.debug("installing %r for %s", theme.name, target.value)
    return installer(theme, destination=destination, runner=runner)


def dispatch_export(theme: CanonicalTheme, fmt: ExportFormat | str) -> str | bytes:
    """Render a theme in a file format without writing anything."""
    fmt = ExportFormat(fmt)
    exporter = EXPORTERS.get(fmt)
    if exporter is None:
        raise ValueError(f"no exporter registered for {fmt.value}")
    return exporter(theme)
