"""SQLite-backed theme store."""

import os
import sqlite3
import sys
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from shellshade.colors import (
    ANSI_FIELDS,
    FALLBACK_COLORS,
    CanonicalTheme,
    ThemeColors,
    ThemeSettings,
    _camel,
)
from shellshade.slug import slugify
from shellshade.themes import BUILTIN_THEMES

IMPORTED_AUTHOR = "Imported"


def default_db_path() -> Path:
    """Platform-specific location of themes.db."""
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "shellshade" / "themes.db"
    if sys.platform == "win32":
        return Path(os.environ.get("APPDATA") or Path.home()) / "shellshade" / "themes.db"
    return Path.home() / ".config" / "shellshade" / "themes.db"


class ThemeStore:
    """Stores themes with their colors and settings in SQLite."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or default_db_path()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path))
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._init_db()

    def _init_db(self) -> None:
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS themes (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                slug TEXT UNIQUE NOT NULL,
                description TEXT,
                author TEXT,
                source_url TEXT,
                source_format TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                is_favorite INTEGER DEFAULT 0,
                is_builtin INTEGER DEFAULT 0,
                UNIQUE(name, author)
            );
            CREATE TABLE IF NOT EXISTS theme_colors (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                theme_id TEXT NOT NULL REFERENCES themes(id) ON DELETE CASCADE,
                color_key TEXT NOT NULL,
                hex_value TEXT NOT NULL,
                UNIQUE(theme_id, color_key)
            );
            CREATE TABLE IF NOT EXISTS theme_settings (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                theme_id TEXT NOT NULL REFERENCES themes(id) ON DELETE CASCADE,
                setting_key TEXT NOT NULL,
                setting_value TEXT NOT NULL,
                UNIQUE(theme_id, setting_key)
            );
            CREATE TABLE IF NOT EXISTS export_history (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                theme_id TEXT NOT NULL REFERENCES themes(id) ON DELETE CASCADE,
                format TEXT NOT NULL,
                export_path TEXT NOT NULL,
                exported_at TEXT NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_themes_favorite ON themes(is_favorite);
            CREATE INDEX IF NOT EXISTS idx_theme_colors_theme ON theme_colors(theme_id);
        """)

    def put_theme(
        self,
        theme: CanonicalTheme,
        *,
        is_builtin: bool = False,
        source_url: str | None = None,
        source_format: str | None = None,
    ) -> CanonicalTheme:
        """Insert or replace a theme; returns it with its id set."""
        theme_id = theme.id or str(uuid.uuid4())
        now = _now()
        exists = self._conn.execute("SELECT 1 FROM themes WHERE id = ?", (theme_id,)).fetchone()

        if exists:
            self._conn.execute(
                "UPDATE themes SET name = ?, author = ?, description = ?, updated_at = ? WHERE id = ?",
                (theme.name, theme.author, theme.description, now, theme_id),
            )
        else:
            self._conn.execute(
                "INSERT INTO themes (id, name, slug, description, author, source_url, source_format, "
                "created_at, updated_at, is_favorite, is_builtin) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, 0, ?)",
                (
                    theme_id, theme.name, self._unique_slug(theme.name), theme.description,
                    theme.author, source_url, source_format, now, now, int(is_builtin),
                ),
            )

        self._conn.execute("DELETE FROM theme_colors WHERE theme_id = ?", (theme_id,))
        self._conn.executemany(
            "INSERT INTO theme_colors (theme_id, color_key, hex_value) VALUES (?, ?, ?)",
            [(theme_id, key, value) for key, value in _color_rows(theme.colors)],
        )
        self._conn.execute("DELETE FROM theme_settings WHERE theme_id = ?", (theme_id,))
        self._conn.executemany(
            "INSERT INTO theme_settings (theme_id, setting_key, setting_value) VALUES (?, ?, ?)",
            [(theme_id, key, _encode_setting(value)) for key, value in theme.settings.to_dict().items()],
        )
        self._conn.commit()
        return theme.with_id(theme_id)

    def import_theme(
        self,
        theme: CanonicalTheme,
        source: str,
        source_format: str | None = None,
        source_url: str | None = None,
    ) -> CanonicalTheme:
        """Store a freshly parsed theme under a new id, renaming it if the name is taken."""
        author = theme.author or IMPORTED_AUTHOR
        imported = CanonicalTheme(
            name=self._unique_name(theme.name, author),
            colors=theme.colors,
            settings=theme.settings,
            id=str(uuid.uuid4()),
            author=author,
            description=theme.description or f"Imported from {source}",
        )
        return self.put_theme(imported, source_url=source_url, source_format=source_format)

    def duplicate_theme(self, theme_id: str, new_name: str | None = None) -> CanonicalTheme | None:
        """Copy a theme under a new id; the copy is never a favorite or built-in."""
        row = self._conn.execute(
            "SELECT source_url, source_format FROM themes WHERE id = ?", (theme_id,)
        ).fetchone()
        original = self.get_theme(theme_id)
        if original is None:
            return None
        copy = replace(
            original,
            id=str(uuid.uuid4()),
            name=self._unique_name(new_name or f"{original.name} Copy", original.author),
        )
        return self.put_theme(copy, source_url=row["source_url"], source_format=row["source_format"])

    def get_theme(self, theme_id: str) -> CanonicalTheme | None:
        row = self._conn.execute("SELECT * FROM themes WHERE id = ?", (theme_id,)).fetchone()
        if row is None:
            return None

        colors = self._conn.execute(
            "SELECT color_key, hex_value FROM theme_colors WHERE theme_id = ?", (theme_id,)
        ).fetchall()
        settings = self._conn.execute(
            "SELECT setting_key, setting_value FROM theme_settings WHERE theme_id = ?", (theme_id,)
        ).fetchall()

        return CanonicalTheme(
            id=row["id"],
            name=row["name"],
            author=row["author"],
            description=row["description"],
            colors=_colors_from_rows({r["color_key"]: r["hex_value"] for r in colors}),
            settings=_settings_from_rows({r["setting_key"]: r["setting_value"] for r in settings}),
        )

    def slug_for(self, theme_id: str) -> str | None:
        row = self._conn.execute("SELECT slug FROM themes WHERE id = ?", (theme_id,)).fetchone()
        return row["slug"] if row else None

    def find_theme(self, ref: str) -> CanonicalTheme | None:
        """Look a theme up by id, slug, or case-insensitive name."""
        row = self._conn.execute(
            "SELECT id FROM themes WHERE id = ? OR slug = ? OR lower(name) = lower(?) "
            "ORDER BY (id = ?) DESC, (slug = ?) DESC LIMIT 1",
            (ref, ref, ref, ref, ref),
        ).fetchone()
        return self.get_theme(row["id"]) if row else None

    def list_themes(self, favorites_only: bool = False) -> list[dict[str, Any]]:
        """Theme summaries, dark themes first, then by name."""
        where = "WHERE t.is_favorite = 1" if favorites_only else ""
        rows = self._conn.execute(
            "SELECT t.id, t.name, t.slug, t.author, t.is_favorite, t.is_builtin, t.updated_at, "
            "  (SELECT hex_value FROM theme_colors c WHERE c.theme_id = t.id AND c.color_key = 'background') AS background, "
            "  (SELECT hex_value FROM theme_colors c WHERE c.theme_id = t.id AND c.color_key = 'foreground') AS foreground, "
            "  CASE WHEN t.name LIKE '%Light%' OR t.name LIKE '%Latte%' OR t.name LIKE '%Dawn%' THEN 1 ELSE 0 END AS is_light "
            f"FROM themes t {where} "
            "ORDER BY is_light ASC, t.name COLLATE NOCASE ASC"
        ).fetchall()

        return [
            {
                "id": r["id"],
                "name": r["name"],
                "slug": r["slug"],
                "author": r["author"],
                "is_favorite": bool(r["is_favorite"]),
                "is_builtin": bool(r["is_builtin"]),
                "updated_at": r["updated_at"],
                "background": r["background"],
                "foreground": r["foreground"],
            }
            for r in rows
        ]

    def toggle_favorite(self, theme_id: str) -> bool:
        """Flip the favorite flag and return the new value."""
        self._conn.execute(
            "UPDATE themes SET is_favorite = 1 - is_favorite, updated_at = ? WHERE id = ?",
            (_now(), theme_id),
        )
        self._conn.commit()
        row = self._conn.execute("SELECT is_favorite FROM themes WHERE id = ?", (theme_id,)).fetchone()
        return bool(row["is_favorite"]) if row else False

    def delete_theme(self, theme_id: str) -> bool:
        cur = self._conn.execute("DELETE FROM themes WHERE id = ?", (theme_id,))
        self._conn.commit()
        return cur.rowcount > 0

    def record_export(self, theme_id: str, fmt: str, export_path: str) -> None:
        self._conn.execute(
            "INSERT INTO export_history (theme_id, format, export_path, exported_at) VALUES (?, ?, ?, ?)",
            (theme_id, fmt, export_path, _now()),
        )
        self._conn.commit()

    def export_history(self, theme_id: str) -> list[dict[str, str]]:
        rows = self._conn.execute(
            "SELECT format, export_path, exported_at FROM export_history WHERE theme_id = ? ORDER BY id",
            (theme_id,),
        ).fetchall()
        return [dict(r) for r in rows]

    def seed_builtins(self) -> int:
        """Insert the built-in themes into an empty store; returns how many were added.

        Seeding happens once, so a built-in the user deleted stays deleted.
        """
        row = self._conn.execute("SELECT COUNT(*) AS n FROM themes WHERE is_builtin = 1").fetchone()
        if row["n"] > 0:
            return 0
        for theme in BUILTIN_THEMES.values():
            self.put_theme(theme, is_builtin=True)
        return len(BUILTIN_THEMES)

    def _unique_slug(self, name: str) -> str:
        base = slugify(name)
        slug = base
        counter = 1
        while self._conn.execute("SELECT 1 FROM themes WHERE slug = ?", (slug,)).fetchone():
            slug = f"{base}-{counter}"
            counter += 1
        return slug

    def _unique_name(self, name: str, author: str) -> str:
        candidate = name
        counter = 1
        while self._conn.execute(
            "SELECT 1 FROM themes WHERE name = ? AND author = ?", (candidate, author)
        ).fetchone():
            candidate = f"{name} ({counter})"
            counter += 1
        return candidate

    def close(self) -> None:
        self._conn.close()


def _color_rows(colors: ThemeColors) -> list[tuple[str, str]]:
    data = colors.to_dict()
    ansi = data.pop("ansi")
    rows = list(data.items())
    rows.extend((f"ansi_{key}", value) for key, value in ansi.items())
    return rows


def _colors_from_rows(rows: dict[str, str]) -> ThemeColors:
    # Rows missing from a damaged database fall back rather than failing the load
    data = FALLBACK_COLORS.to_dict()
    for key in list(data):
        if key != "ansi" and key in rows:
            data[key] = rows[key]
    for name in ANSI_FIELDS:
        key = _camel(name)
        if f"ansi_{key}" in rows:
            data["ansi"][key] = rows[f"ansi_{key}"]
    for name in ("link", "badge", "tab"):
        if name in rows:
            data[name] = rows[name]
    return ThemeColors.from_dict(data)


def _encode_setting(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _settings_from_rows(rows: dict[str, str]) -> ThemeSettings:
    data: dict[str, Any] = {}
    if "fontFamily" in rows:
        data["fontFamily"] = rows["fontFamily"]
    if "fontSize" in rows:
        data["fontSize"] = int(rows["fontSize"])
    if "lineHeight" in rows:
        data["lineHeight"] = float(rows["lineHeight"])
    if "cursorStyle" in rows:
        data["cursorStyle"] = rows["cursorStyle"]
    if "cursorBlink" in rows:
        data["cursorBlink"] = rows["cursorBlink"] == "true"
    return ThemeSettings.from_dict(data)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
