from __future__ import annotations

from typing import Any, Dict

from .settings import settings

# Default logging configuration
default = settings.LOG_CHANNEL

channels: Dict[str, Dict[str, Any]] = {
    'stderr': {
        'driver': 'stderr',
        'level': settings.LOG_LEVEL,
        'formatter': 'laravel',
    },

    'single': {
        'driver': 'single',
        'path': 'storage/logs/apiresource.log',
        'level': settings.LOG_LEVEL,
    },

    'json': {
        'driver': 'stderr',
        'level': settings.LOG_LEVEL,
        'formatter': 'json',
    },

    'null': {
        'driver': 'null',
    },
}
