"""Tests for the click command line."""

import json
import sys

import pytest
from click.testing import CliRunner

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from shellshade.cli import main
from shellshade.storage import ThemeStore


@pytest.fixture
def db(tmp_path):
    return tmp_path / "themes.db"


@pytest.fixture
def run(db):
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(main, ["--db", str(db), *args])

    return invoke


class TestList:
    def test_builtins_are_listed(self, run):
        result = run("list")
        assert result.exit_code == 0
        assert "Dracula" in result.output
        assert "Gruvbox Dark" in result.output

    def test_no_favorites(self, run):
        result = run("list", "--favorites")
        assert result.exit_code == 0
        assert "No favorite themes yet" in result.output


class TestShow:
    def test_preview(self, run):
        result = run("show", "dracula")
        assert result.exit_code == 0
        assert "#282a36" in result.output
        assert "Zeno Rocha" in result.output

    def test_unknown_theme(self, run):
        result = run("show", "no-such-theme")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_theme_file_on_disk(self, run, tmp_path):
        path = tmp_path / "snazzy.conf"
        path.write_text("background #282a36\ncolor1 #ff5c57\n")
        result = run("show", str(path))
        assert result.exit_code == 0
        assert "#ff5c57" in result.output


class TestImport:
    def test_import_file(self, run, db, tmp_path):
        path = tmp_path / "Snazzy.conf"
        path.write_text("background #282a36\nforeground #eff0eb\n")
        result = run("import", str(path))
        assert result.exit_code == 0
        assert "Imported" in result.output

        store = ThemeStore(db)
        theme = store.find_theme("snazzy")
        store.close()
        assert theme is not None
        assert theme.author == "Imported"
        assert theme.colors.foreground == "#eff0eb"

    def test_unsupported_extension(self, run, tmp_path):
        path = tmp_path / "theme.txt"
        path.write_text("whatever")
        result = run("import", str(path))
        assert result.exit_code == 1
        assert "UnsupportedExtension" in result.output

    def test_non_string_name_is_reported(self, run, tmp_path, tokyo_night):
        data = tokyo_night.to_dict()
        data["name"] = 42
        path = tmp_path / "t.json"
        path.write_text(json.dumps(data))
        result = run("import", str(path))
        assert result.exit_code == 1
        assert "MalformedDocument" in result.output

    def test_terminal_file(self, run, tmp_path):
        path = tmp_path / "Basic.terminal"
        path.write_text("")
        result = run("import", str(path))
        assert result.exit_code == 1
        assert "UnsupportedFormat" in result.output


class TestApply:
    def test_apply_to_kitty(self, run, db, tmp_path):
        dest = tmp_path / "kitty"
        result = run("apply", "dracula", "--terminal", "kitty", "--dest", str(dest))
        assert result.exit_code == 0
        assert (dest / "dracula.conf").exists()

        store = ThemeStore(db)
        history = store.export_history("builtin-dracula")
        store.close()
        assert history[0]["format"] == "kitty"

    def test_configured_terminal(self, db, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('terminal = "alacritty"\n')
        dest = tmp_path / "alacritty"
        result = CliRunner().invoke(
            main, ["--db", str(db), "--config", str(config), "apply", "nord", "--dest", str(dest)]
        )
        assert result.exit_code == 0
        document = tomllib.loads((dest / "nord.toml").read_text())
        assert document["colors"]["primary"]["background"] == "#2e3440"

    def test_unknown_configured_terminal(self, db, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('terminal = "xterm"\n')
        result = CliRunner().invoke(main, ["--db", str(db), "--config", str(config), "apply", "nord"])
        assert result.exit_code == 1
        assert "Unknown terminal" in result.output

    def test_unknown_theme(self, run, tmp_path):
        result = run("apply", "nope", "--terminal", "kitty", "--dest", str(tmp_path))
        assert result.exit_code == 1


class TestExport:
    def test_to_stdout(self, run):
        result = run("export", "tokyo-night", "--format", "alacritty")
        assert result.exit_code == 0
        assert "[colors.normal]" in result.output
        assert 'red = "#f7768e"' in result.output

    def test_to_directory(self, run, tmp_path):
        result = run("export", "nord", "--format", "kitty", "-o", str(tmp_path))
        assert result.exit_code == 0
        assert (tmp_path / "nord.conf").read_text().startswith("# Nord")

    def test_binary_format_to_file(self, run, tmp_path):
        out = tmp_path / "gruvbox.itermcolors"
        result = run("export", "gruvbox-dark", "--format", "itermcolors", "-o", str(out))
        assert result.exit_code == 0
        assert out.read_bytes().startswith(b"<?xml")


class TestFavoriteAndDelete:
    def test_favorite_toggle(self, run):
        result = run("favorite", "dracula")
        assert result.exit_code == 0
        assert "added to favorites" in result.output
        assert "Dracula" in run("list", "--favorites").output
        assert "removed from favorites" in run("favorite", "dracula").output

    def test_delete(self, run):
        result = run("delete", "nord", "--yes")
        assert result.exit_code == 0
        assert run("show", "nord").exit_code == 1

    def test_duplicate(self, run):
        result = run("duplicate", "dracula", "Dracula Dim")
        assert result.exit_code == 0
        assert "dracula-dim" in result.output
        assert run("show", "dracula-dim").exit_code == 0

    def test_duplicate_unknown(self, run):
        assert run("duplicate", "nope").exit_code == 1

    def test_delete_unknown(self, run):
        assert run("delete", "nope", "--yes").exit_code == 1


class TestTerminals:
    def test_lists_platform_terminals(self, run):
        result = run("terminals")
        assert result.exit_code == 0
        assert "Alacritty" in result.output
        assert "Kitty" in result.output
