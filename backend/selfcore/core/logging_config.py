"""
Unified logging configuration with structured JSON logging, context support, and multiple handlers
"""
import json
import logging
import re
import sys
from contextvars import ContextVar
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

from selfcore.core.config import get_settings

PACKAGE_LOGGER = "selfcore"

# Silent until the host or SelfCore calls LoggingConfig.configure()
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())

# Context variables for the current login/session
request_context: ContextVar[Dict[str, Any]] = ContextVar('request_context', default={})

_RESERVED_RECORD_KEYS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname', 'process',
    'processName', 'relativeCreated', 'thread', 'threadName', 'exc_info',
    'exc_text', 'stack_info', 'taskName',
}


class SensitiveDataFilter(logging.Filter):
    """Filter to mask access tokens and credentials in log messages"""

    SENSITIVE_PATTERNS = [
        (r'access[_-]?token["\']?\s*[:=]\s*["\']?([^"\'\s&,}]+)', r'access_token": "***"'),
        (r'(?<![\w-])token["\']?\s*[:=]\s*["\']?([^"\'\s&,}]+)', r'token": "***"'),
        (r'password["\']?\s*[:=]\s*["\']?([^"\'\s&,}]+)', r'password": "***"'),
        (r'secret["\']?\s*[:=]\s*["\']?([^"\'\s&,}]+)', r'secret": "***"'),
        (r'Authorization:\s*(token|Bearer)\s+([^\s"]+)', r'Authorization: \1 ***'),
        (r'Bearer\s+([^\s"*]+)', r'Bearer ***'),
    ]

    def __init__(self, enabled: bool = True):
        super().__init__()
        self.enabled = enabled

    def _mask(self, text: str) -> str:
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and mask sensitive data"""
        if not self.enabled:
            return True

        if isinstance(record.msg, str):
            record.msg = self._mask(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self._mask(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        return True


class ContextualFormatter(logging.Formatter):
    """JSON formatter with context support"""

    def __init__(self, *args, **kwargs):
        # Format string is not used for JSON output
        kwargs.pop('fmt', None)
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_dict = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'message': record.getMessage(),
        }

        ctx = request_context.get({})
        if ctx:
            log_dict.update(ctx)

        if record.exc_info:
            log_dict['exception'] = self.formatException(record.exc_info)

        # Extra fields passed with extra=
        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_KEYS or key in log_dict:
                continue
            try:
                json.dumps(value, default=str)
                log_dict[key] = value
            except (TypeError, ValueError):
                log_dict[key] = str(value)

        return json.dumps(log_dict, ensure_ascii=False, default=str)


class LoggingConfig:
    """
    Centralized logging configuration with structured logging support

    Only the "selfcore" logger tree is touched: handlers go on that logger,
    which stops propagating to the host's root logger once configured.
    Nothing is configured on import.
    """

    _configured = False
    _handlers: List[logging.Handler] = []
    _module_levels: Dict[str, str] = {}
    _log_metrics: Dict[str, int] = {
        'DEBUG': 0,
        'INFO': 0,
        'WARNING': 0,
        'ERROR': 0,
        'CRITICAL': 0,
    }

    @classmethod
    def configure(cls, module_levels: Optional[Dict[str, str]] = None):
        """Attach console/file handlers and levels to the selfcore loggers"""
        if cls._configured:
            return

        settings = get_settings()

        default_levels = {
            "httpx": "WARNING",
            "httpcore": "WARNING",
            PACKAGE_LOGGER: settings.log_level,
        }

        if settings.log_module_levels:
            try:
                custom_levels = json.loads(settings.log_module_levels)
                default_levels.update(custom_levels)
            except (json.JSONDecodeError, TypeError):
                pass

        if module_levels:
            default_levels.update(module_levels)

        cls._module_levels = default_levels

        if settings.log_format.lower() == "json":
            formatter = ContextualFormatter(datefmt='%Y-%m-%d %H:%M:%S')
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        handlers = []

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(SensitiveDataFilter(enabled=not settings.log_sensitive_data))
        handlers.append(console_handler)

        if settings.log_file_enabled:
            log_path = Path(settings.log_file_path)
            # Resolve relative to project root
            if not log_path.is_absolute():
                _project_root = Path(__file__).resolve().parent.parent.parent.parent
                log_path = _project_root / log_path
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = TimedRotatingFileHandler(
                filename=str(log_path),
                when='midnight',
                interval=1,
                backupCount=settings.log_file_retention,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            file_handler.addFilter(SensitiveDataFilter(enabled=not settings.log_sensitive_data))
            handlers.append(file_handler)

        metrics_handler = cls._MetricsHandler()
        metrics_handler.setLevel(logging.DEBUG)
        handlers.append(metrics_handler)

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in handlers:
            package_logger.addHandler(handler)
        package_logger.propagate = False

        for module, level in default_levels.items():
            logging.getLogger(module).setLevel(getattr(logging, level.upper()))

        cls._handlers = handlers
        cls._configured = True

    @classmethod
    def reset(cls):
        """Remove the handlers added by configure() and give logging back to the host"""
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in cls._handlers:
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.propagate = True
        cls._handlers = []
        cls._configured = False

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger for a module; configuration is left to configure()"""
        return logging.getLogger(name)

    @classmethod
    def set_module_level(cls, module: str, level: str):
        """Set logging level for a specific module"""
        logging.getLogger(module).setLevel(getattr(logging, level.upper()))
        cls._module_levels[module] = level

    @classmethod
    def get_module_level(cls, module: str) -> str:
        """Get logging level for a specific module"""
        return logging.getLevelName(logging.getLogger(module).level)

    @classmethod
    def set_context(cls, **kwargs):
        """Set context variables for logging"""
        ctx = request_context.get({}).copy()
        ctx.update(kwargs)
        request_context.set(ctx)

    @classmethod
    def clear_context(cls):
        """Clear context variables"""
        request_context.set({})

    @classmethod
    def get_metrics(cls) -> Dict[str, int]:
        """Get logging metrics"""
        return cls._log_metrics.copy()

    @classmethod
    def reset_metrics(cls):
        """Reset logging metrics"""
        cls._log_metrics = {level: 0 for level in cls._log_metrics}

    class _MetricsHandler(logging.Handler):
        """Handler to track log metrics"""

        def emit(self, record: logging.LogRecord):
            """Count logs by level"""
            level = record.levelname
            if level in LoggingConfig._log_metrics:
                LoggingConfig._log_metrics[level] += 1
