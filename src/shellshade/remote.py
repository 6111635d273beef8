"""Download theme files over HTTP and parse them."""

import logging
import tempfile
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlparse

import httpx

from shellshade.colors import CanonicalTheme
from shellshade.dispatch import dispatch_parse, format_for_path
from shellshade.errors import ParseError, ParseErrorKind

log = logging.getLogger(__name__)

FETCH_TIMEOUT = 10.0  # seconds


def is_url(ref: str) -> bool:
    return urlparse(ref).scheme in ("http", "https")


def filename_for_url(url: str) -> str:
    """The last path segment of a URL, used to choose a parser and a default name."""
    name = PurePosixPath(unquote(urlparse(url).path)).name
    return name or "theme"


async def fetch_theme(
    url: str,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = FETCH_TIMEOUT,
) -> CanonicalTheme:
    """Download a theme file and parse it according to the URL's extension."""
    filename = filename_for_url(url)
    # Reject unknown extensions before touching the network
    format_for_path(Path(filename))

    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport) as client:
        try:
            resp = await client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ParseError(
                ParseErrorKind.NOT_FOUND, f"{url} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ParseError(ParseErrorKind.NOT_FOUND, f"could not fetch {url}: {e}") from e

    log.debug("fetched %d bytes from %s", len(resp.content), url)
    with tempfile.TemporaryDirectory(prefix="shellshade-") as tmp:
        path = Path(tmp) / filename
        path.write_bytes(resp.content)
        return dispatch_parse(path)
