"""
ECG Configuration

Reads the ``ECG`` Django setting and merges it over the defaults. The mount
paths can also be set through the environment (``ECG_AT``, ``ECG_PING_AT``).
"""

from typing import Any, Dict, Optional

from decouple import config as env_config
from django.conf import settings
from django.utils.module_loading import import_string

from .exceptions import ConfigurationError

DEFAULT_AT = '/__healthcheck'
DEFAULT_PING_AT = '/__ping'
DEFAULT_FAILURE_STATUS = 500

KNOWN_OPTIONS = {'at', 'ping_at', 'failure_status', 'hook', 'checks'}


def get_defaults() -> Dict[str, Any]:
    """Default configuration, with environment overrides for the paths"""
    return {
        'at': env_config('ECG_AT', default=DEFAULT_AT),
        'ping_at': env_config('ECG_PING_AT', default=DEFAULT_PING_AT),
        'failure_status': DEFAULT_FAILURE_STATUS,
        'hook': None,
        'checks': {},
    }


def get_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Build the validated configuration.

    Args:
        overrides: Explicit configuration; ``settings.ECG`` is used when omitted

    Raises:
        ConfigurationError: If any option is malformed
    """
    user_config = overrides if overrides is not None else getattr(settings, 'ECG', {})
    if user_config is None:
        user_config = {}
    if not isinstance(user_config, dict):
        raise ConfigurationError("ECG setting must be a dict")

    unknown = set(user_config) - KNOWN_OPTIONS
    if unknown:
        raise ConfigurationError(f"Unknown ECG options: {', '.join(sorted(unknown))}")

    merged = {**get_defaults(), **user_config}

    if not _is_path(merged['at']):
        raise ConfigurationError(f"ECG 'at' must be a path starting with '/', got {merged['at']!r}")

    if merged['ping_at'] is not None and not _is_path(merged['ping_at']):
        raise ConfigurationError(f"ECG 'ping_at' must be a path or None, got {merged['ping_at']!r}")

    if merged['ping_at'] == merged['at']:
        raise ConfigurationError("ECG 'ping_at' must differ from 'at'")

    status = merged['failure_status']
    if isinstance(status, bool) or not isinstance(status, int) or not 400 <= status <= 599:
        raise ConfigurationError(f"ECG 'failure_status' must be an HTTP error status, got {status!r}")

    merged['hook'] = _load_hook(merged['hook'])

    if merged['checks'] is None:
        merged['checks'] = {}
    if not isinstance(merged['checks'], dict):
        raise ConfigurationError("ECG 'checks' must be a dict")

    return merged


def _is_path(value) -> bool:
    return isinstance(value, str) and value.startswith('/')


def _load_hook(hook):
    if hook is None or callable(hook):
        return hook
    if isinstance(hook, str):
        try:
            return import_string(hook)
        except ImportError as e:
            raise ConfigurationError(f"Could not import ECG hook {hook!r}: {e}") from e
    raise ConfigurationError(f"ECG 'hook' must be a callable or dotted path, got {hook!r}")
