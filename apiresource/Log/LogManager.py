from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

# Every module logs through logging.getLogger(__name__) below this root
ROOT_LOGGER = 'apiresource'


class LogChannel:
    """Named handler attached to the package logger."""

    def __init__(self, name: str, handler: logging.Handler, level: Union[str, int] = logging.WARNING) -> None:
        self.name = name
        self.handler = handler
        self.level = self._level(level)
        self.handler.setLevel(self.level)

    def attach(self, logger: logging.Logger) -> None:
        """Route the logger's records through this channel."""
        if self.handler not in logger.handlers:
            logger.addHandler(self.handler)
        if logger.level == logging.NOTSET or logger.level > self.level:
            logger.setLevel(self.level)

    def detach(self, logger: logging.Logger) -> None:
        logger.removeHandler(self.handler)
        self.handler.close()

    def log(self, level: Union[str, int], message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log a message to this channel only."""
        record = logging.LogRecord(
            f"{ROOT_LOGGER}.{self.name}", self._level(level), __file__, 0, message, None, None
        )
        record.context = context or {}
        if record.levelno >= self.level:
            self.handler.handle(record)

    @staticmethod
    def _level(level: Union[str, int]) -> int:
        if isinstance(level, str):
            return int(getattr(logging, level.upper()))
        return level


class LaravelFormatter(logging.Formatter):
    """Laravel-style log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        log_line = f"[{timestamp}] {record.name}.{record.levelname}: {record.getMessage()}"

        context = getattr(record, 'context', {})
        if context:
            log_line += f" {json.dumps(context, default=str)}"

        if record.exc_info:
            log_line += f"\n{self.formatException(record.exc_info)}"

        return log_line


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'channel': record.name,
            'message': record.getMessage(),
            'context': getattr(record, 'context', {}),
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class LogManager:
    """
    Laravel-style log manager for the package logger.

    Channels are built from a config mapping shaped like
    ``apiresource.config.logging`` and attached to the ``apiresource`` logger.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self._config = config or {}
        self._channels: Dict[str, LogChannel] = {}
        self._default_channel: str = self._config.get('default', 'stderr')
        self._drivers: Dict[str, Callable[[str, Dict[str, Any]], logging.Handler]] = {
            'stderr': self._create_stderr_handler,
            'single': self._create_single_handler,
            'null': self._create_null_handler,
        }

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(ROOT_LOGGER)

    def channel(self, name: Optional[str] = None) -> LogChannel:
        """Get a log channel, creating and attaching it on first use."""
        if name is None:
            name = self._default_channel

        if name not in self._channels:
            self._channels[name] = self._create_channel(name)
            self._channels[name].attach(self.logger)

        return self._channels[name]

    def stack(self, channels: List[str]) -> List[LogChannel]:
        """Attach several channels at once."""
        return [self.channel(name) for name in channels]

    def _create_channel(self, name: str) -> LogChannel:
        config = self._config.get('channels', {}).get(name, {'driver': name})
        driver = config.get('driver', 'stderr')

        factory = self._drivers.get(driver)
        if factory is None:
            raise ValueError(f"Log driver [{driver}] is not supported.")

        handler = factory(name, config)
        if not isinstance(handler, logging.NullHandler):
            handler.setFormatter(self._get_formatter(config))

        return LogChannel(name, handler, config.get('level', 'warning'))

    def _create_stderr_handler(self, name: str, config: Dict[str, Any]) -> logging.Handler:
        return logging.StreamHandler(sys.stderr)

    def _create_single_handler(self, name: str, config: Dict[str, Any]) -> logging.Handler:
        path = config.get('path', f'storage/logs/{name}.log')
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(path)

    def _create_null_handler(self, name: str, config: Dict[str, Any]) -> logging.Handler:
        return logging.NullHandler()

    def _get_formatter(self, config: Dict[str, Any]) -> logging.Formatter:
        if config.get('formatter', 'laravel') == 'json':
            return JsonFormatter()
        return LaravelFormatter()

    def extend(self, driver: str, factory: Callable[[str, Dict[str, Any]], logging.Handler]) -> None:
        """Register a custom driver building a handler from a channel config."""
        self._drivers[driver] = factory

    def get_default_driver(self) -> str:
        return self._default_channel

    def set_default_driver(self, name: str) -> None:
        self._default_channel = name

    def get_channels(self) -> Dict[str, LogChannel]:
        return dict(self._channels)

    def forget_channel(self, name: str) -> None:
        """Detach and remove a channel."""
        channel = self._channels.pop(name, None)
        if channel is not None:
            channel.detach(self.logger)

    def flush(self) -> None:
        """Detach every channel."""
        for name in list(self._channels):
            self.forget_channel(name)

    # Proxy methods to default channel
    def debug(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.channel().log(logging.DEBUG, message, context)

    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.channel().log(logging.INFO, message, context)

    def warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.channel().log(logging.WARNING, message, context)

    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.channel().log(logging.ERROR, message, context)


# Global log manager instance
log_manager_instance: Optional[LogManager] = None


def get_log_manager() -> LogManager:
    """Get the global log manager configured from apiresource.config.logging."""
    global log_manager_instance
    if log_manager_instance is None:
        from apiresource.config import logging as logging_config

        log_manager_instance = LogManager({
            'default': logging_config.default,
            'channels': logging_config.channels,
        })
    return log_manager_instance


def configure_logging(channel: Optional[str] = None) -> LogChannel:
    """Attach the default (or given) channel to the package logger."""
    return get_log_manager().channel(channel)
