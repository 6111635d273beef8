"""Tests for config loading and resolution."""

import pytest

from shellshade.config import DEFAULTS, load_config, resolve
from shellshade.errors import ShellShadeError


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "config.toml") == {}

    def test_reads_keys(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('terminal = "kitty"\nscript_timeout = 5\n')
        cfg = load_config(path)
        assert cfg["terminal"] == "kitty"
        assert cfg["script_timeout"] == 5

    def test_unknown_keys_dropped(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text('terminal = "warp"\ncolour = "blue"\n')
        assert load_config(path) == {"terminal": "warp"}
        assert "colour" in caplog.text

    @pytest.mark.parametrize("body", ["script_timeout = 0", 'script_timeout = "5"', "terminal = 3"])
    def test_bad_values(self, tmp_path, body):
        path = tmp_path / "config.toml"
        path.write_text(body + "\n")
        with pytest.raises(ShellShadeError):
            load_config(path)

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("terminal = ")
        with pytest.raises(ShellShadeError):
            load_config(path)


class TestResolve:
    def test_cli_wins(self):
        assert resolve("kitty", "warp", None) == "kitty"

    def test_config_over_default(self):
        assert resolve(None, 5, DEFAULTS["script_timeout"]) == 5

    def test_default(self):
        assert resolve(None, None, DEFAULTS["script_timeout"]) == 15
