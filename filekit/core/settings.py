"""Centralised configuration abstraction for filekit.

This module exposes :class:`ApplicationSettings` which consolidates every
configuration lookup used by the MIME resolver and the path builder.  Values
are read from the active Flask application's ``config`` when an application
context exists, falling back to the process environment (or any mapping
provided).  A ``.env`` file in the working directory is loaded on import.

The global :data:`settings` instance should be used for production code, while
tests can instantiate their own :class:`ApplicationSettings` with a dedicated
mapping to validate behaviour in isolation.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Optional, cast

from dotenv import load_dotenv
from flask import current_app, has_app_context

if TYPE_CHECKING:  # pragma: no cover
    from flask import Flask

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MIME_TABLE = "default"
DEFAULT_DIRECTORY_MODE = 0o755

_BOOL_TRUE = {"1", "true", "yes", "on"}
_BOOL_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class _EnvironmentFacade:
    """Thin wrapper that provides ``Mapping`` compatible access to env vars."""

    source: Mapping[str, str]

    @classmethod
    def from_environ(cls, env: Optional[Mapping[str, str]] = None) -> "_EnvironmentFacade":
        return cls(source=os.environ if env is None else env)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.source.get(key, default)


class ApplicationSettings:
    """Domain level representation of configuration values.

    The class favours explicit properties instead of generic ``get`` access so
    that callers operate on intent-revealing names and default values live in
    a single location.
    """

    _LEGACY_KEYS: ClassVar[dict[str, tuple[str, ...]]] = {
        "FILEKIT_MIME_TABLE": ("MIME_MAGIC_FILE",),
        "FILEKIT_BASE_URL": ("PUBLIC_BASE_URL",),
    }

    def __init__(self, env: Optional[Mapping[str, str]] = None) -> None:
        self._env = _EnvironmentFacade.from_environ(env)

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------
    def _get(self, key: str, default: Optional[Any] = None) -> Any:
        app_config = None
        if has_app_context():
            app = cast("Flask", current_app)
            app_config = app.config
            if key in app_config:
                return app_config.get(key)

        value = self._env.get(key)
        if value is not None:
            return value

        for legacy in self._LEGACY_KEYS.get(key, ()):
            if app_config and legacy in app_config:
                return app_config.get(legacy)
            legacy_value = self._env.get(legacy)
            if legacy_value is not None:
                return legacy_value

        return default

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._get(key, default)

    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return a non-empty string configuration value."""

        value = self._get(key)
        if value is None:
            return default
        value = str(value).strip()
        return value or default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return a boolean configuration value."""

        value = self._get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            normalised = value.strip().lower()
            if normalised in _BOOL_TRUE:
                return True
            if normalised in _BOOL_FALSE:
                return False
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        """Return an integer configuration value."""

        value = self._get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def get_octal(self, key: str, default: int) -> int:
        """Return a permission mode written in octal (``"0755"`` or ``0o755``)."""

        value = self._get(key)
        if value is None:
            return default
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return int(str(value).strip(), 8)
        except ValueError:
            logger.warning(
                f"Invalid octal value for {key}: {value!r}; using {default:o}"
            )
            return default

    # ------------------------------------------------------------------
    # MIME resolution
    # ------------------------------------------------------------------
    @property
    def mime_table(self) -> str:
        """Identifier of the extension table used when callers give none."""

        return self.get_str("FILEKIT_MIME_TABLE", DEFAULT_MIME_TABLE) or DEFAULT_MIME_TABLE

    @property
    def mime_sniffing_enabled(self) -> bool:
        return self.get_bool("FILEKIT_MIME_SNIFFING", True)

    @property
    def magic_file(self) -> Optional[str]:
        return self.get_str("FILEKIT_MAGIC_FILE")

    # ------------------------------------------------------------------
    # Path building
    # ------------------------------------------------------------------
    @property
    def base_path(self) -> str:
        return self.get_str("FILEKIT_BASE_PATH", "") or ""

    @property
    def base_url(self) -> Optional[str]:
        return self.get_str("FILEKIT_BASE_URL")

    @property
    def directory_mode(self) -> int:
        return self.get_octal("FILEKIT_DIRECTORY_MODE", DEFAULT_DIRECTORY_MODE)

    @property
    def placeholder_timezone(self) -> str:
        return (self.get_str("FILEKIT_PLACEHOLDER_TIMEZONE", "local") or "local").lower()

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    @property
    def log_level(self) -> str:
        return (self.get_str("FILEKIT_LOG_LEVEL", "INFO") or "INFO").upper()


settings = ApplicationSettings()

__all__ = [
    "ApplicationSettings",
    "DEFAULT_DIRECTORY_MODE",
    "DEFAULT_MIME_TABLE",
    "settings",
]
