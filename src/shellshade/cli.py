"""Entry point — click CLI, config resolution, logging setup."""

import asyncio
import logging
from pathlib import Path

import click
from rich.logging import RichHandler
from rich.table import Table

from shellshade.colors import CanonicalTheme
from shellshade.config import DEFAULTS, load_config, resolve
from shellshade.detect import PLATFORM_NAMES, PLATFORM_TERMINALS, current_platform, detect_terminal
from shellshade.dispatch import (
    EXPORT_EXTENSIONS,
    EXTENSIONS,
    TERMINAL_NAMES,
    ExportFormat,
    Terminal,
    dispatch_export,
    dispatch_install,
    dispatch_parse,
    format_for_path,
)
from shellshade.errors import ShellShadeError
from shellshade.remote import fetch_theme, filename_for_url, is_url
from shellshade.render import console, render_error, render_install_result, render_theme, render_theme_table
from shellshade.scripting import ScriptRunner
from shellshade.slug import slugify
from shellshade.storage import ThemeStore

log = logging.getLogger(__name__)

TERMINAL_CHOICES = [t.value for t in Terminal]
EXPORT_CHOICES = [f.value for f in ExportFormat]


class AppContext:
    """Resolved settings shared by every subcommand."""

    def __init__(self, cfg: dict, db_path: Path | None) -> None:
        self.cfg = cfg
        db = resolve(db_path, cfg.get("db_path"), DEFAULTS["db_path"])
        self.db_path = Path(db).expanduser() if db else None
        self.script_timeout = resolve(None, cfg.get("script_timeout"), DEFAULTS["script_timeout"])
        self._store: ThemeStore | None = None

    @property
    def store(self) -> ThemeStore:
        if self._store is None:
            self._store = ThemeStore(self.db_path)
            self._store.seed_builtins()
        return self._store

    def runner(self) -> ScriptRunner:
        return ScriptRunner(timeout=self.script_timeout)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None


def _fail(msg: str) -> None:
    render_error(msg)
    raise SystemExit(1)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO/DEBUG
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _lookup(app: AppContext, ref: str) -> CanonicalTheme:
    """A stored theme by id, slug or name, or a theme file on disk."""
    theme = app.store.find_theme(ref)
    if theme is not None:
        return theme
    path = Path(ref).expanduser()
    if path.is_file() and path.suffix.lower() in EXTENSIONS:
        return dispatch_parse(path)
    _fail(f"Theme '{ref}' not found. Run 'shellshade list' to see available themes.")


@click.group()
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Path to config file (default: ~/.config/shellshade/config.toml).")
@click.option("--db", "db_path", default=None, type=click.Path(path_type=Path), help="Path to the theme database.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, db_path: Path | None, verbose: bool) -> None:
    """ShellShade: manage and apply terminal color themes."""
    _setup_logging(verbose)
    try:
        cfg = load_config(config_path)
    except ShellShadeError as e:
        _fail(str(e))
    app = AppContext(cfg, db_path)
    ctx.obj = app
    ctx.call_on_close(app.close)


@main.command("list")
@click.option("--favorites", is_flag=True, help="Only show favorite themes.")
@click.pass_obj
def list_cmd(app: AppContext, favorites: bool) -> None:
    """List stored themes."""
    themes = app.store.list_themes(favorites_only=favorites)
    if not themes:
        console.print("[dim]No favorite themes yet.[/dim]" if favorites else "[dim]No themes yet.[/dim]")
        return
    render_theme_table(themes, title="Favorites" if favorites else "Themes")


@main.command()
@click.argument("theme_ref", metavar="THEME")
@click.pass_obj
def show(app: AppContext, theme_ref: str) -> None:
    """Preview a theme's colors."""
    try:
        theme = _lookup(app, theme_ref)
    except ShellShadeError as e:
        _fail(str(e))
    render_theme(theme)


@main.command("import")
@click.argument("source", metavar="FILE_OR_URL")
@click.pass_obj
def import_cmd(app: AppContext, source: str) -> None:
    """Import a theme file or URL into the library."""
    try:
        if is_url(source):
            theme = asyncio.run(fetch_theme(source))
            fmt = format_for_path(Path(filename_for_url(source)))
            stored = app.store.import_theme(theme, source, source_format=fmt.value, source_url=source)
        else:
            path = Path(source).expanduser()
            theme = dispatch_parse(path)
            fmt = format_for_path(path)
            stored = app.store.import_theme(theme, path.name, source_format=fmt.value)
    except ShellShadeError as e:
        _fail(str(e))

    console.print(f"[bold green]Imported[/bold green] {stored.name} [dim]({app.store.slug_for(stored.id)})[/dim]")


@main.command()
@click.argument("theme_ref", metavar="THEME")
@click.option("-t", "--terminal", default=None, type=click.Choice(TERMINAL_CHOICES, case_sensitive=False), help="Target terminal (default: detected).")
@click.option("--dest", default=None, type=click.Path(path_type=Path), help="Override where the theme file is written.")
@click.pass_obj
def apply(app: AppContext, theme_ref: str, terminal: str | None, dest: Path | None) -> None:
    """Install a theme into a terminal application."""
    choice = resolve(terminal, app.cfg.get("terminal"), DEFAULTS["terminal"])
    if choice is not None and str(choice).lower() not in TERMINAL_CHOICES:
        _fail(f"Unknown terminal '{choice}'. Options: {', '.join(TERMINAL_CHOICES)}")
    target = Terminal(str(choice).lower()) if choice else detect_terminal()
    log.debug("target terminal: %s", target.value)
    try:
        theme = _lookup(app, theme_ref)
    except ShellShadeError as e:
        _fail(str(e))

    name = TERMINAL_NAMES[target]
    with console.status(f"Applying {theme.name} to {name}..."):
        result = dispatch_install(theme, target, destination=dest, runner=app.runner())

    render_install_result(result, name)
    if not result.success:
        raise SystemExit(1)
    if theme.id and result.path and app.store.get_theme(theme.id) is not None:
        app.store.record_export(theme.id, target.value, str(result.path))


@main.command()
@click.argument("theme_ref", metavar="THEME")
@click.option("-f", "--format", "fmt", required=True, type=click.Choice(EXPORT_CHOICES, case_sensitive=False), help="Output format.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file or directory (default: stdout).")
@click.pass_obj
def export(app: AppContext, theme_ref: str, fmt: str, output: Path | None) -> None:
    """Render a theme in another terminal's file format."""
    try:
        theme = _lookup(app, theme_ref)
    except ShellShadeError as e:
        _fail(str(e))

    export_format = ExportFormat(fmt)
    content = dispatch_export(theme, export_format)
    if output is None:
        click.echo(content, nl=False)
        return

    if output.is_dir():
        output = output / f"{slugify(theme.name)}{EXPORT_EXTENSIONS[export_format]}"
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            output.write_bytes(content)
        else:
            output.write_text(content, encoding="utf-8")
    except OSError as e:
        _fail(f"Could not write {output}: {e}")

    if theme.id and app.store.get_theme(theme.id) is not None:
        app.store.record_export(theme.id, export_format.value, str(output))
    console.print(f"[bold green]Exported[/bold green] {theme.name} to {output}")


@main.command()
@click.argument("theme_ref", metavar="THEME")
@click.pass_obj
def favorite(app: AppContext, theme_ref: str) -> None:
    """Toggle a theme's favorite flag."""
    theme = app.store.find_theme(theme_ref)
    if theme is None:
        _fail(f"Theme '{theme_ref}' not found.")
    if app.store.toggle_favorite(theme.id):
        console.print(f"[yellow]*[/yellow] {theme.name} added to favorites")
    else:
        console.print(f"{theme.name} removed from favorites")


@main.command()
@click.argument("theme_ref", metavar="THEME")
@click.argument("new_name", required=False)
@click.pass_obj
def duplicate(app: AppContext, theme_ref: str, new_name: str | None) -> None:
    """Copy a theme under a new name."""
    theme = app.store.find_theme(theme_ref)
    if theme is None:
        _fail(f"Theme '{theme_ref}' not found.")
    copy = app.store.duplicate_theme(theme.id, new_name)
    console.print(f"[bold green]Created[/bold green] {copy.name} [dim]({app.store.slug_for(copy.id)})[/dim]")


@main.command()
@click.argument("theme_ref", metavar="THEME")
@click.option("-y", "--yes", is_flag=True, help="Don't ask for confirmation.")
@click.pass_obj
def delete(app: AppContext, theme_ref: str, yes: bool) -> None:
    """Remove a theme from the library."""
    theme = app.store.find_theme(theme_ref)
    if theme is None:
        _fail(f"Theme '{theme_ref}' not found.")
    if not yes:
        click.confirm(f"Delete {theme.name}?", abort=True)
    app.store.delete_theme(theme.id)
    console.print(f"Deleted {theme.name}")


@main.command()
@click.pass_obj
def terminals(app: AppContext) -> None:
    """Show the terminals supported on this platform."""
    platform = current_platform()
    detected = detect_terminal(platform=platform)
    preferred = resolve(None, app.cfg.get("terminal"), None)

    table = Table(title=f"Terminals on {PLATFORM_NAMES[platform]}", border_style="dim")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("", style="dim")
    for target in PLATFORM_TERMINALS[platform]:
        notes = []
        if target is detected:
            notes.append("detected")
        if preferred == target.value:
            notes.append("configured")
        table.add_row(target.value, TERMINAL_NAMES[target], ", ".join(notes))
    console.print(table)


if __name__ == "__main__":
    main()
