"""Config file loading and resolution."""

import logging
import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from shellshade.errors import ShellShadeError
from shellshade.scripting import DEFAULT_TIMEOUT

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "shellshade" / "config.toml"

DEFAULTS: dict[str, Any] = {
    "terminal": None,
    "db_path": None,
    "script_timeout": DEFAULT_TIMEOUT,
}


def validate(cfg: dict[str, Any], source: Path) -> dict[str, Any]:
    """Drop unknown keys with a warning; reject values of the wrong type."""
    for key in sorted(set(cfg) - set(DEFAULTS)):
        log.warning("ignoring unknown key %r in %s", key, source)
    known = {key: value for key, value in cfg.items() if key in DEFAULTS}

    for key in ("terminal", "db_path"):
        if key in known and not isinstance(known[key], str):
            raise ShellShadeError(f"{source}: '{key}' must be a string")
    timeout = known.get("script_timeout")
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0):
        raise ShellShadeError(f"{source}: 'script_timeout' must be a positive number of seconds")
    return known


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Read the TOML config; a missing file means no overrides."""
    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ShellShadeError(f"invalid config file {config_path}: {e}") from e
    return validate(raw, config_path)


def resolve(cli_value: Any, config_value: Any, default: Any) -> Any:
    """First non-None of CLI flag, config file value, default."""
    for value in (cli_value, config_value):
        if value is not None:
            return value
    return default
