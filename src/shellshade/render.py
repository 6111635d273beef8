"""Rich-based rendering for theme previews, listings, and install results."""

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shellshade.colors import ANSI_FIELDS, CanonicalTheme
from shellshade.installers.common import InstallResult, LiveApply

console = Console()

SWATCH = "  "


def swatch(hex_value: str) -> Text:
    return Text(SWATCH, style=f"on {hex_value}")


def palette_rows(theme: CanonicalTheme) -> Text:
    """Two rows of swatches: normal colors then bright colors."""
    colors = theme.colors.ansi.as_list()
    text = Text()
    for row in (colors[:8], colors[8:]):
        for value in row:
            text.append_text(swatch(value))
        text.append("\n")
    text.rstrip()
    return text


def sample_prompt(theme: CanonicalTheme) -> Text:
    """A fake shell session drawn in the theme's own colors."""
    c = theme.colors
    base = f"on {c.background}"
    text = Text(style=f"{c.foreground} {base}")
    text.append("user", style=f"bold {c.ansi.green} {base}")
    text.append("@", style=f"{c.foreground} {base}")
    text.append("host", style=f"bold {c.ansi.blue} {base}")
    text.append(" ~/projects ", style=f"{c.ansi.cyan} {base}")
    text.append("(main) ", style=f"{c.ansi.magenta} {base}")
    text.append("$ ", style=f"{c.foreground} {base}")
    text.append("ls -la", style=f"{c.foreground} {base}")
    text.append(" ", style=f"{c.cursor_text} on {c.cursor}")
    text.append("\n")
    text.append("drwxr-xr-x ", style=f"{c.ansi.bright_black} {base}")
    text.append("src/", style=f"bold {c.ansi.blue} {base}")
    text.append("  ", style=base)
    text.append("README.md", style=f"{c.foreground} {base}")
    text.append("  ", style=base)
    text.append("build.sh", style=f"{c.ansi.green} {base}")
    text.append("\n")
    text.append("error: ", style=f"bold {c.ansi.red} {base}")
    text.append("file not found", style=f"{c.ansi.yellow} {base}")
    text.append("  ", style=base)
    text.append("selected text", style=f"{c.selection_text} on {c.selection}")
    return text


def render_theme(theme: CanonicalTheme) -> None:
    """Print a preview panel with the core colors and the ANSI palette."""
    c = theme.colors
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="dim")
    table.add_column()
    table.add_column()
    for label, value in (
        ("background", c.background),
        ("foreground", c.foreground),
        ("cursor", c.cursor),
        ("cursor text", c.cursor_text),
        ("selection", c.selection),
        ("selection text", c.selection_text),
    ):
        table.add_row(label, swatch(value), value)
    for name, value in zip(ANSI_FIELDS, c.ansi.as_list()):
        table.add_row(name.replace("_", " "), swatch(value), value)

    subtitle = f"by {theme.author}" if theme.author else None
    console.print(Panel(table, title=theme.name, subtitle=subtitle, border_style="dim", title_align="left"))
    console.print(Panel(sample_prompt(theme), border_style="dim", title="Preview", title_align="left"))
    console.print(palette_rows(theme))
    if theme.description:
        console.print(f"[dim]{theme.description}[/dim]")


def render_theme_table(themes: list[dict[str, Any]], title: str = "Themes") -> None:
    table = Table(title=title, border_style="dim")
    table.add_column("", width=2)
    table.add_column("Name", style="bold")
    table.add_column("Slug", style="dim")
    table.add_column("Author")
    table.add_column("Colors")

    for t in themes:
        colors = Text()
        if t["background"]:
            colors.append_text(swatch(t["background"]))
        if t["foreground"]:
            colors.append_text(swatch(t["foreground"]))
        star = "[yellow]*[/yellow]" if t["is_favorite"] else ""
        table.add_row(star, t["name"], t["slug"], t["author"] or "", colors)

    console.print(table)


def render_install_result(result: InstallResult, terminal_name: str) -> None:
    if not result.success:
        render_error(result.error or f"Failed to apply theme to {terminal_name}")
        return

    if result.live_apply is LiveApply.APPLIED:
        console.print(f"[bold green]Applied[/bold green] to {terminal_name}.")
    elif result.live_apply is LiveApply.SAVED_ONLY:
        note = " (timed out)" if result.timed_out else ""
        console.print(f"[bold yellow]Saved[/bold yellow] for {terminal_name}; live apply failed{note}.")
    else:
        console.print(f"[bold green]Saved[/bold green] for {terminal_name}.")

    if result.path:
        console.print(f"[dim]File:[/dim] {result.path}")
    if result.instructions:
        console.print(Panel(result.instructions, border_style="dim", title="Next steps", title_align="left"))


def render_error(msg: str) -> None:
    """Render an error message in red."""
    console.print(f"[bold red]Error:[/bold red] {msg}")
