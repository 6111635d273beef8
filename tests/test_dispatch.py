"""Tests for format and terminal routing."""

import json
from pathlib import Path

import pytest

from conftest import FakeRunner
from shellshade.dispatch import (
    EXPORT_EXTENSIONS,
    EXPORTERS,
    EXTENSIONS,
    INSTALLERS,
    PARSERS,
    TERMINAL_NAMES,
    ExportFormat,
    SourceFormat,
    Terminal,
    dispatch_export,
    dispatch_install,
    dispatch_parse,
    format_for_path,
)
from shellshade.errors import ParseError, ParseErrorKind
from shellshade.installers.common import LiveApply


class TestMappingsAreTotal:
    def test_every_source_format_has_a_parser(self):
        assert set(PARSERS) == set(SourceFormat)

    def test_every_extension_maps_to_a_parser(self):
        assert set(EXTENSIONS.values()) <= set(PARSERS)

    def test_every_terminal_has_an_installer(self):
        assert set(INSTALLERS) == set(Terminal)
        assert set(TERMINAL_NAMES) == set(Terminal)

    def test_every_export_format_has_an_exporter(self):
        assert set(EXPORTERS) == set(ExportFormat)
        assert set(EXPORT_EXTENSIONS) == set(ExportFormat)


class TestFormatForPath:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("a.itermcolors", SourceFormat.ITERMCOLORS),
            ("a.ITERMCOLORS", SourceFormat.ITERMCOLORS),
            ("a.terminal", SourceFormat.TERMINAL_APP),
            ("a.yml", SourceFormat.ALACRITTY_YAML),
            ("a.yaml", SourceFormat.ALACRITTY_YAML),
            ("a.toml", SourceFormat.ALACRITTY_TOML),
            ("a.json", SourceFormat.JSON),
            ("a.conf", SourceFormat.KITTY),
            ("a.colorscheme", SourceFormat.KONSOLE),
        ],
    )
    def test_known_extensions(self, name, expected):
        assert format_for_path(Path(name)) is expected

    @pytest.mark.parametrize("name", ["theme.txt", "theme", "theme.itermcolors.bak"])
    def test_unknown_extension(self, name):
        with pytest.raises(ParseError) as exc:
            format_for_path(Path(name))
        assert exc.value.kind is ParseErrorKind.UNSUPPORTED_EXTENSION


class TestDispatchParse:
    def test_routes_by_extension(self, tmp_path):
        path = tmp_path / "night.conf"
        path.write_text("background #101010\n")
        assert dispatch_parse(path).colors.background == "#101010"

    def test_terminal_file_is_unsupported(self, tmp_path):
        path = tmp_path / "Pro.terminal"
        path.write_text("<plist/>")
        with pytest.raises(ParseError) as exc:
            dispatch_parse(path)
        assert exc.value.kind is ParseErrorKind.UNSUPPORTED_FORMAT

    def test_unsupported_extension_checked_before_reading(self, tmp_path):
        with pytest.raises(ParseError) as exc:
            dispatch_parse(tmp_path / "missing.txt")
        assert exc.value.kind is ParseErrorKind.UNSUPPORTED_EXTENSION

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseError) as exc:
            dispatch_parse(tmp_path / "missing.json")
        assert exc.value.kind is ParseErrorKind.NOT_FOUND


class TestDispatchInstall:
    def test_accepts_string_target(self, tmp_path, tokyo_night):
        result = dispatch_install(tokyo_night, "kitty", destination=tmp_path)
        assert result.success
        assert result.path == tmp_path / "tokyo_night.conf"

    def test_passes_runner_through(self, tmp_path, tokyo_night):
        runner = FakeRunner()
        result = dispatch_install(tokyo_night, Terminal.ITERM2, destination=tmp_path, runner=runner)
        assert result.live_apply is LiveApply.APPLIED
        assert runner.calls

    def test_unknown_target(self, tokyo_night):
        with pytest.raises(ValueError):
            dispatch_install(tokyo_night, "xterm")


class TestDispatchExport:
    def test_every_format_renders(self, tokyo_night):
        for fmt in ExportFormat:
            content = dispatch_export(tokyo_night, fmt)
            assert content

    def test_itermcolors_is_bytes(self, tokyo_night):
        assert isinstance(dispatch_export(tokyo_night, "itermcolors"), bytes)

    def test_json_export_round_trips(self, tmp_path, tokyo_night):
        path = tmp_path / "tokyo.json"
        path.write_text(dispatch_export(tokyo_night, ExportFormat.JSON))
        assert dispatch_parse(path) == tokyo_night

    def test_windows_terminal_scheme(self, tokyo_night):
        scheme = json.loads(dispatch_export(tokyo_night, ExportFormat.WINDOWS_TERMINAL))
        assert scheme["name"] == "Tokyo Night"
