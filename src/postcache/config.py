"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for postcache:

* **Directory layout** -- ``$XDG_CONFIG_HOME/postcache`` for the settings
  file and ``$XDG_CACHE_HOME/postcache`` for the disk store, with the usual
  ``~/.config`` and ``~/.cache`` defaults. See :func:`get_config_dir` and
  :func:`get_cache_dir`.
* **Settings file** -- A single :class:`~postcache.models.Settings` JSON
  file storing the cache and remote backend configuration.
* **Precedence resolution** -- :func:`resolve_settings` merges explicit
  overrides, environment variables, and the settings file into the final
  effective configuration.

Settings are written with :func:`_atomic_write`, so a crash mid-save never
leaves a truncated file behind.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from postcache.exceptions import ConfigError
from postcache.models import CacheBackend, Settings

_APP_NAME = "postcache"
_CONFIG_FILENAME = "config.json"
_TRUTHY = {"1", "true", "yes", "on"}


# --- Directories ---


def _app_dir(env_var: str, home_default: str) -> Path:
    """``$<env_var>/postcache``, or ``~/<home_default>/postcache`` when unset; created on demand."""
    root = os.environ.get(env_var) or str(Path.home() / home_default)
    path = Path(root) / _APP_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json`` (default ``~/.config/postcache/``)."""
    return _app_dir("XDG_CONFIG_HOME", ".config")


def get_cache_dir() -> Path:
    """Directory holding the disk-backed post store (default ``~/.cache/postcache/``).

    Everything under it is derived data and may be deleted at any time.
    """
    return _app_dir("XDG_CACHE_HOME", ".cache")


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* via a synced sibling temp file and ``os.replace``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


# --- Settings file ---


def settings_path() -> Path:
    """Path to the settings file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_settings() -> Settings:
    """Load the settings file from the config directory.

    Returns:
        The deserialised :class:`~postcache.models.Settings`, or a default
        instance when the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = settings_path()
    if not path.is_file():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Settings.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid settings at {path}: {exc}") from exc


def save_settings(settings: Settings) -> None:
    """Persist *settings* atomically to disk."""
    data = settings.model_dump(mode="json")
    _atomic_write(settings_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_settings(
    base_url: Optional[str] = None,
    cache_backend: Optional[str] = None,
    log_level: Optional[str] = None,
    offline: Optional[bool] = None,
) -> Settings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. Explicit arguments
        2. Environment variables (``POSTCACHE_BASE_URL``,
           ``POSTCACHE_CACHE_BACKEND``, ``POSTCACHE_LOG_LEVEL``,
           ``POSTCACHE_OFFLINE``)
        3. Settings file (``~/.config/postcache/config.json``)
        4. Defaults

    Raises:
        ConfigError: If the settings file is invalid or a cache backend name
            is unknown.
    """
    settings = load_settings()

    resolved_base_url = base_url or os.environ.get("POSTCACHE_BASE_URL")
    if resolved_base_url:
        settings.remote.base_url = resolved_base_url

    resolved_backend = cache_backend or os.environ.get("POSTCACHE_CACHE_BACKEND")
    if resolved_backend:
        try:
            settings.cache.backend = CacheBackend(resolved_backend.lower())
        except ValueError as exc:
            raise ConfigError(
                f"Unknown cache backend '{resolved_backend}' "
                f"(expected one of: {', '.join(b.value for b in CacheBackend)})"
            ) from exc

    resolved_level = log_level or os.environ.get("POSTCACHE_LOG_LEVEL")
    if resolved_level:
        settings.log_level = resolved_level.upper()

    if offline is not None:
        settings.remote.offline = offline
    elif "POSTCACHE_OFFLINE" in os.environ:
        settings.remote.offline = os.environ["POSTCACHE_OFFLINE"].strip().lower() in _TRUTHY

    return settings
