"""
Logging System for Storefront E2E
Format: YYYY-MM-DD HH:MM:SS - LEVEL - [COMPONENT] - [SOURCE] - Description
"""

import logging
import sys
from datetime import datetime
from typing import Optional


ROOT_LOGGER_NAME = 'storefront_e2e'


class StorefrontFormatter(logging.Formatter):
    """Custom formatter with component and source context"""

    colors = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m'  # Magenta
    }
    reset = '\033[0m'

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record):
        component = getattr(record, 'component', 'SYSTEM')
        source = getattr(record, 'source', record.name.rsplit('.', 1)[-1])

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        formatted = f"{timestamp} - {record.levelname} - [{component}] - [{source}] - {record.getMessage()}"

        if record.exc_info:
            formatted = f"{formatted}\n{self.formatException(record.exc_info)}"

        if not self.use_color:
            return formatted

        color = self.colors.get(record.levelname, '')
        return f"{color}{formatted}{self.reset}"


def setup_logger(level: str = 'INFO', name: str = ROOT_LOGGER_NAME, use_color: Optional[bool] = None) -> logging.Logger:
    """Setup the package logger with custom formatting"""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    if use_color is None:
        use_color = sys.stderr.isatty()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(StorefrontFormatter(use_color=use_color))

    logger.addHandler(console_handler)
    logger.propagate = False

    return logger


class ComponentLogger(logging.LoggerAdapter):
    """Logger adapter that stamps every record with the emitting component"""

    def process(self, msg, kwargs):
        extra = dict(self.extra)
        extra.update(kwargs.get('extra') or {})
        kwargs['extra'] = extra
        return msg, kwargs


def component_logger(component: str, logger: Optional[logging.Logger] = None, source: Optional[str] = None) -> ComponentLogger:
    """
    Build the logging boundary injected into each component.

    Args:
        component: Upper-case component tag, e.g. 'SCANNER'
        logger: Underlying logger (defaults to the package root logger)
        source: Optional source tag; defaults to the logger's last name segment
    """
    if isinstance(logger, ComponentLogger):
        return logger

    extra = {'component': component}
    if source:
        extra['source'] = source
    return ComponentLogger(logger or logging.getLogger(ROOT_LOGGER_NAME), extra)
