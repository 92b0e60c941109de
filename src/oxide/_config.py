"""Package configuration read from the environment once, at import."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from oxide._logging import configure_logging

__all__ = [
    'SETTINGS',
    'Settings',
    'apply_settings',
    'load_settings',
]

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
_TRUTHY = ('1', 'true', 'yes', 'on')
_FALSY = ('0', 'false', 'no', 'off')


@dataclass(frozen=True)
class Settings:
    """Configuration for oxide.

    Attributes:
        log_level: If set, oxide configures structlog at this level on import.
            None = leave logging to the application.
        json_logs: Render JSON (True) or colored console output (False).
        log_captured: Emit a debug event for every exception captured by safe.
    """

    log_level: str | None = None
    json_logs: bool = True
    log_captured: bool = True


def _parse_level(raw: str) -> str | None:
    if not raw:
        return None
    level = raw.upper()
    if level not in _LOG_LEVELS:
        logging.warning("Unknown OXIDE_LOG_LEVEL value '%s', leaving logging unconfigured", raw)
        return None
    return level


def _parse_format(raw: str) -> bool:
    value = raw.lower()
    if value in ('', 'json'):
        return True
    if value == 'console':
        return False
    logging.warning("Unknown OXIDE_LOG_FORMAT value '%s', defaulting to json", raw)
    return True


def _parse_flag(name: str, raw: str, default: bool) -> bool:
    value = raw.lower()
    if not value:
        return default
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    logging.warning("Unknown %s value '%s', defaulting to %s", name, raw, default)
    return default


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Variables:
        OXIDE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL.
        OXIDE_LOG_FORMAT: "json" (default) or "console".
        OXIDE_LOG_CAPTURED: true/false, whether to log captured exceptions.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        The parsed Settings. Unknown values fall back to defaults with a warning.

    Example:
        ```python
        load_settings({'OXIDE_LOG_LEVEL': 'debug'})
        # Settings(log_level='DEBUG', json_logs=True, log_captured=True)
        ```
    """
    env = os.environ if environ is None else environ
    return Settings(
        log_level=_parse_level(env.get('OXIDE_LOG_LEVEL', '').strip()),
        json_logs=_parse_format(env.get('OXIDE_LOG_FORMAT', '').strip()),
        log_captured=_parse_flag(
            'OXIDE_LOG_CAPTURED', env.get('OXIDE_LOG_CAPTURED', '').strip(), Settings.log_captured
        ),
    )


def apply_settings(settings: Settings) -> None:
    """Configure the `oxide` logger if the settings ask for it.

    Only the `oxide` stdlib logger gets a handler; root handlers are left
    untouched.
    """
    if settings.log_level is not None:
        configure_logging(settings.log_level, json_output=settings.json_logs, logger_name='oxide')


SETTINGS: Final[Settings] = load_settings()
