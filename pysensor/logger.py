# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging configuration for pysensor

Modules log through ``logging.getLogger(__name__)``, so every logger in the
package is a child of the ``pysensor`` root logger and inherits its
handlers. A ``TRACE`` level below ``DEBUG`` is registered for per-sample
messages.
"""

import logging
import sys
from enum import Enum
from typing import Optional

ROOT_LOGGER = "pysensor"


class LogLevel(Enum):
    """Log levels for the library"""
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, level) -> int:
        """Numeric level from a name or number"""
        if isinstance(level, cls):
            return level.value
        if isinstance(level, int):
            return level
        try:
            return cls[str(level).upper()].value
        except KeyError as e:
            raise ValueError(f"Unknown log level: {level!r}") from e


logging.addLevelName(LogLevel.TRACE.value, "TRACE")


def trace(self, message, *args, **kwargs):
    """Log at TRACE level"""
    if self.isEnabledFor(LogLevel.TRACE.value):
        self._log(LogLevel.TRACE.value, message, args, **kwargs)


logging.Logger.trace = trace


class ColoredFormatter(logging.Formatter):
    """Formatter adding ANSI colors to the level name"""

    COLORS = {
        'TRACE': '\033[36m',     # Cyan
        'DEBUG': '\033[34m',     # Blue
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # Work on a copy so file handlers sharing the record stay uncolored
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logger(name: str = ROOT_LOGGER,
                 level: str = "WARNING",
                 log_file: Optional[str] = None,
                 console: bool = True) -> logging.Logger:
    """
    Setup logger with specified configuration

    Parameters
    ----------
    name : str
        Logger name, ``pysensor`` configures the whole package
    level : str
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_file : Optional[str]
        Log file path (if None, no file logging)
    console : bool
        Enable console output on stderr

    Returns
    -------
    logging.Logger
        Configured logger
    """
    numeric_level = LogLevel.parse(level)
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        ))
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    # Child loggers propagate here; stop at the package root
    if name == ROOT_LOGGER:
        logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger below the package root, e.g. ``get_logger('attitude')``"""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class LogContext:
    """Context manager for temporary log level change"""

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = LogLevel.parse(level)
        self.old_level = None

    def __enter__(self):
        self.old_level = self.logger.level
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.old_level)


class LoggerConfig:
    """Logger configuration with module-specific log levels"""

    KEYS = ('default_level', 'log_file', 'console', 'module_levels')

    def __init__(self):
        self.module_levels: dict[str, str] = {}
        self.default_level = "WARNING"
        self.log_file: Optional[str] = None
        self.console = True

    def set_module_level(self, module_name: str, level: str):
        """Set log level for a module, e.g. ``'pysensor.geomagnetic'``"""
        LogLevel.parse(level)
        self.module_levels[module_name] = level
        logger = logging.getLogger(module_name)
        if logger.handlers:
            logger.setLevel(LogLevel.parse(level))
            for handler in logger.handlers:
                handler.setLevel(LogLevel.parse(level))

    def set_default_level(self, level: str):
        LogLevel.parse(level)
        self.default_level = level

    def get_level_for_module(self, module_name: str) -> str:
        """Most specific configured level for a dotted module name"""
        parts = module_name.split('.')
        for i in range(len(parts), 0, -1):
            prefix = '.'.join(parts[:i])
            if prefix in self.module_levels:
                return self.module_levels[prefix]
        return self.default_level

    def configure_from_dict(self, config: dict):
        """Configure from dictionary, rejecting unknown keys"""
        unknown = set(config) - set(self.KEYS)
        if unknown:
            raise ValueError(f"Unknown logging config keys: {sorted(unknown)}")
        if 'default_level' in config:
            self.set_default_level(config['default_level'])
        if 'log_file' in config:
            self.log_file = config['log_file']
        if 'console' in config:
            self.console = bool(config['console'])
        for module, level in config.get('module_levels', {}).items():
            self.set_module_level(module, level)

    def to_dict(self) -> dict:
        return {
            'default_level': self.default_level,
            'log_file': self.log_file,
            'console': self.console,
            'module_levels': dict(self.module_levels),
        }

    def setup_all_loggers(self):
        """Setup the package root and every module-specific logger"""
        root = setup_logger(ROOT_LOGGER, self.default_level, self.log_file, self.console)
        lowest = min([LogLevel.parse(self.default_level)]
                     + [LogLevel.parse(level) for level in self.module_levels.values()])
        for handler in root.handlers:
            handler.setLevel(lowest)

        for module, level in self.module_levels.items():
            # Module loggers filter by level and reuse the root handlers
            logger = logging.getLogger(module)
            logger.setLevel(LogLevel.parse(level))
            if not module.startswith(ROOT_LOGGER):
                setup_logger(module, level, self.log_file, self.console)


# Global logger configuration
logger_config = LoggerConfig()


def setup_logger_from_config(config: dict):
    """Setup loggers from configuration dictionary

    Example config:
    {
        'default_level': 'INFO',
        'log_file': 'sensor.log',
        'console': True,
        'module_levels': {
            'pysensor.geomagnetic': 'DEBUG',
            'pysensor.sensors.events': 'TRACE',
        }
    }
    """
    logger_config.configure_from_dict(config)
    logger_config.setup_all_loggers()
