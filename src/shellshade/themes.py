"""Built-in color themes seeded into a fresh theme store."""

from shellshade.colors import AnsiColors, CanonicalTheme, ThemeColors
from shellshade.slug import slugify


def _theme(
    name: str,
    author: str,
    background: str,
    foreground: str,
    cursor: str,
    selection: str,
    palette: list[str],
    cursor_text: str | None = None,
    selection_text: str | None = None,
) -> CanonicalTheme:
    return CanonicalTheme(
        id=f"builtin-{slugify(name)}",
        name=name,
        author=author,
        colors=ThemeColors(
            background=background,
            foreground=foreground,
            cursor=cursor,
            cursor_text=cursor_text or background,
            selection=selection,
            selection_text=selection_text or foreground,
            ansi=AnsiColors.from_list(palette),
        ),
    )


BUILTIN_THEMES: dict[str, CanonicalTheme] = {
    "dracula": _theme(
        "Dracula", "Zeno Rocha",
        background="#282a36", foreground="#f8f8f2", cursor="#f8f8f2", selection="#44475a",
        palette=[
            "#21222c", "#ff5555", "#50fa7b", "#f1fa8c", "#bd93f9", "#ff79c6", "#8be9fd", "#f8f8f2",
            "#6272a4", "#ff6e6e", "#69ff94", "#ffffa5", "#d6acff", "#ff92df", "#a4ffff", "#ffffff",
        ],
    ),
    "solarized-dark": _theme(
        "Solarized Dark", "Ethan Schoonover",
        background="#002b36", foreground="#839496", cursor="#93a1a1", selection="#073642",
        palette=[
            "#073642", "#dc322f", "#859900", "#b58900", "#268bd2", "#d33682", "#2aa198", "#eee8d5",
            "#002b36", "#cb4b16", "#586e75", "#657b83", "#839496", "#6c71c4", "#93a1a1", "#fdf6e3",
        ],
    ),
    "catppuccin-mocha": _theme(
        "Catppuccin Mocha", "Catppuccin",
        background="#1e1e2e", foreground="#cdd6f4", cursor="#f5e0dc", selection="#585b70",
        palette=[
            "#45475a", "#f38ba8", "#a6e3a1", "#f9e2af", "#89b4fa", "#f5c2e7", "#94e2d5", "#bac2de",
            "#585b70", "#f38ba8", "#a6e3a1", "#f9e2af", "#89b4fa", "#f5c2e7", "#94e2d5", "#a6adc8",
        ],
    ),
    "tokyo-night": _theme(
        "Tokyo Night", "enkia",
        background="#1a1b26", foreground="#c0caf5", cursor="#c0caf5", selection="#283457",
        palette=[
            "#15161e", "#f7768e", "#9ece6a", "#e0af68", "#7aa2f7", "#bb9af7", "#7dcfff", "#a9b1d6",
            "#414868", "#f7768e", "#9ece6a", "#e0af68", "#7aa2f7", "#bb9af7", "#7dcfff", "#c0caf5",
        ],
    ),
    "nord": _theme(
        "Nord", "Arctic Ice Studio",
        background="#2e3440", foreground="#d8dee9", cursor="#d8dee9", selection="#434c5e",
        palette=[
            "#3b4252", "#bf616a", "#a3be8c", "#ebcb8b", "#81a1c1", "#b48ead", "#88c0d0", "#e5e9f0",
            "#4c566a", "#bf616a", "#a3be8c", "#ebcb8b", "#81a1c1", "#b48ead", "#8fbcbb", "#eceff4",
        ],
    ),
    "gruvbox-dark": _theme(
        "Gruvbox Dark", "morhetz",
        background="#282828", foreground="#ebdbb2", cursor="#ebdbb2", selection="#504945",
        palette=[
            "#282828", "#cc241d", "#98971a", "#d79921", "#458588", "#b16286", "#689d6a", "#a89984",
            "#928374", "#fb4934", "#b8bb26", "#fabd2f", "#83a598", "#d3869b", "#8ec07c", "#ebdbb2",
        ],
    ),
}

BUILTIN_NAMES = sorted(BUILTIN_THEMES.keys())
