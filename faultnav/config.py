"""Persistent JSON config helpers.

Stores the data location, root source id, breadcrumb separator and theme.
Malformed or missing config values load as defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .data_source import ROOT_SOURCE_ID
from .data_source.http_source import DEFAULT_TIMEOUT_SECONDS
from .navigator.path_resolver import BREADCRUMB_SEPARATOR

logger = logging.getLogger(__name__)

APP_NAME = "faultnav"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_DATA_DIR = Path("data")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    location never breaks navigation.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _load_string(key: str) -> str | None:
    """Read a non-blank string value, stripped."""
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _save_value(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_data_dir() -> Path:
    """Return the configured local data directory, ``./data`` by default."""
    value = _load_string("data_dir")
    return Path(value).expanduser() if value else DEFAULT_DATA_DIR


def save_data_dir(path: Path) -> None:
    """Persist the local data directory; it replaces any saved base URL."""
    config = load_config()
    config["data_dir"] = str(path)
    config.pop("base_url", None)
    save_config(config)


def load_base_url() -> str | None:
    """Return the configured HTTP base URL; only http(s) URLs are accepted."""
    value = _load_string("base_url")
    if value is None or not value.startswith(("http://", "https://")):
        return None
    return value


def save_base_url(base_url: str) -> None:
    """Persist the HTTP base URL; it takes precedence over ``data_dir``."""
    _save_value("base_url", base_url.strip())


def load_root_source() -> str:
    return _load_string("root_source") or ROOT_SOURCE_ID


def load_breadcrumb_separator() -> str:
    """Return the breadcrumb separator; surrounding spaces are preserved."""
    value = load_config().get("breadcrumb_separator")
    if isinstance(value, str) and value.strip():
        return value
    return BREADCRUMB_SEPARATOR


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    _save_value("theme", stripped)


def load_fetch_timeout() -> float:
    """Return the HTTP timeout in seconds.

    Booleans, non-numbers and non-positive values fall back to the default.
    """
    value = load_config().get("fetch_timeout_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_TIMEOUT_SECONDS
    return float(value)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_DATA_DIR",
    "load_config",
    "save_config",
    "load_data_dir",
    "save_data_dir",
    "load_base_url",
    "save_base_url",
    "load_root_source",
    "load_breadcrumb_separator",
    "load_theme_name",
    "save_theme_name",
    "load_fetch_timeout",
]
