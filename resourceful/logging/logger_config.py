"""
Logging Configuration
Structured JSON or plain-text output for the routing loggers
"""
import logging
import json
import os
import sys
from typing import Any, Dict, Iterable, Optional, TextIO
from datetime import datetime

from resourceful.defaults import DEFAULT_LOG_ENV_VAR, DEFAULT_LOG_FORMAT

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

ENVIRONMENT_LEVELS = {
    'production': logging.WARNING,
    'staging': logging.INFO,
    'development': logging.DEBUG,
    'testing': logging.ERROR,
}

# Everything a bare LogRecord carries; what is left over came from extra={...}
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {'message', 'asctime'}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record

    Values passed through extra= (uri, controller, action, ...) become
    top-level keys next to the standard fields.
    """

    def __init__(self, include_fields: Optional[Iterable[str]] = None):
        """
        Args:
            include_fields: Record attributes to always emit, even standard ones
        """
        super().__init__()
        self.include_fields = list(include_fields or [])

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            payload['stack'] = record.stack_info

        for field in self.include_fields:
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        payload.update(
            (key, value) for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        )

        return json.dumps(payload, default=str)


class LoggerConfig:
    """
    Attaches a single stream handler to a logger

    Usage:
        LoggerConfig.setup_logger('resourceful')  # JSON, level from RESOURCEFUL_ENV
        LoggerConfig.setup_logger('resourceful', format_type='text', level=logging.DEBUG)
    """

    @staticmethod
    def setup_logger(
        name: str,
        format_type: str = DEFAULT_LOG_FORMAT,
        level: Optional[int] = None,
        stream: Optional[TextIO] = None
    ) -> logging.Logger:
        """
        Args:
            name: Logger name; configuring 'resourceful' covers every module logger
            format_type: 'json' or 'text'
            level: Explicit level (default: derived from RESOURCEFUL_ENV)
            stream: Output stream (default: stderr)
        """
        if level is None:
            level = LoggerConfig.get_level_by_environment(os.environ.get(DEFAULT_LOG_ENV_VAR, 'local'))

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(JSONFormatter() if format_type == 'json' else logging.Formatter(TEXT_FORMAT))

        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False

        return logger

    @staticmethod
    def get_level_by_environment(environment: str) -> int:
        """Level for an environment name; unknown names log at INFO"""
        return ENVIRONMENT_LEVELS.get(environment.lower(), logging.INFO)
