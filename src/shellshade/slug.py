"""Filesystem- and identifier-safe names derived from theme names."""

import re


def slugify(name: str, sep: str = "-") -> str:
    """'Tokyo Night' -> 'tokyo-night'; runs of non-alphanumerics collapse to one sep."""
    slug = re.sub(r"[^a-z0-9]+", sep, name.lower()).strip(sep)
    return slug or "theme"
