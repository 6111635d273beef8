"""Tests for importing themes over HTTP."""

import httpx
import pytest

from shellshade.errors import ParseError, ParseErrorKind
from shellshade.remote import fetch_theme, filename_for_url, is_url

KITTY_THEME = "background #1a1b26\nforeground #c0caf5\ncolor1 #f7768e\n"


def _transport(status=200, body=KITTY_THEME):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


class TestHelpers:
    def test_is_url(self):
        assert is_url("https://example.com/a.conf")
        assert not is_url("/home/me/a.conf")

    def test_filename_for_url(self):
        assert filename_for_url("https://example.com/themes/Tokyo%20Night.conf?raw=1") == "Tokyo Night.conf"


class TestFetchTheme:
    async def test_parses_by_extension(self):
        theme = await fetch_theme("https://example.com/themes/tokyo_night.conf", transport=_transport())
        assert theme.name == "tokyo_night"
        assert theme.colors.background == "#1a1b26"
        assert theme.colors.ansi.red == "#f7768e"

    async def test_http_error_is_not_found(self):
        with pytest.raises(ParseError) as exc:
            await fetch_theme("https://example.com/missing.conf", transport=_transport(status=404))
        assert exc.value.kind is ParseErrorKind.NOT_FOUND
        assert "404" in str(exc.value)

    async def test_connection_error_is_not_found(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ParseError) as exc:
            await fetch_theme("https://example.com/a.conf", transport=httpx.MockTransport(handler))
        assert exc.value.kind is ParseErrorKind.NOT_FOUND

    async def test_unsupported_extension_skips_request(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, text="")

        with pytest.raises(ParseError) as exc:
            await fetch_theme("https://example.com/readme.txt", transport=httpx.MockTransport(handler))
        assert exc.value.kind is ParseErrorKind.UNSUPPORTED_EXTENSION
        assert calls == []
