"""
Structured logging configuration.

structlog is configured on top of the standard library: events are routed to
stdlib handlers and, with ``LOG_FORMAT=json``, rendered by python-json-logger
so structlog key/value pairs become JSON fields. ``LOG_FORMAT=console`` uses
structlog's console renderer.

Form echoes carry passwords, so every event passes through
``filter_sensitive_data`` before rendering.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
from pythonjsonlogger import jsonlogger
from structlog.types import EventDict, WrappedLogger

from config.settings import get_config

SENSITIVE_FIELDS = (
    'password', 'passwd', 'pwd', 'secret', 'token', 'credential', 'api_key'
)

VERBOSE_LOGGERS = ('werkzeug', 'urllib3.connectionpool')


class LoggingConfigurationError(Exception):
    """Custom exception for logging configuration validation errors."""
    pass


class FormsJSONFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding the application name and stdlib level to every record."""

    def __init__(self, *args, app_name: str = 'formbinding', **kwargs):
        super().__init__(*args, **kwargs)
        self.app_name = app_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault('level', record.levelname.lower())
        log_record.setdefault('logger', record.name)
        log_record['app'] = self.app_name


def filter_sensitive_data(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Mask values of sensitive keys, including keys nested in dicts.

    Args:
        logger: Wrapped logger instance
        method_name: Logging method name
        event_dict: Event dictionary to filter

    Returns:
        Filtered event dictionary
    """
    def is_sensitive(key: Any) -> bool:
        key_lower = str(key).lower()
        return any(sensitive in key_lower for sensitive in SENSITIVE_FIELDS)

    def filter_value(key: Any, value: Any) -> Any:
        if is_sensitive(key):
            return "***"
        if isinstance(value, dict):
            return {k: filter_value(k, v) for k, v in value.items()}
        return value

    return {key: filter_value(key, value) for key, value in event_dict.items()}


class LoggingConfiguration:
    """Configures stdlib logging and structlog from application settings."""

    def __init__(self, config: Optional[Any] = None):
        """
        Args:
            config: Configuration object or None to load from settings
        """
        self.config = config or get_config()
        self.is_configured = False
        self._validate_configuration()

    def _validate_configuration(self) -> None:
        """
        Raises:
            LoggingConfigurationError: When configuration is invalid
        """
        required_attrs = ['LOG_LEVEL', 'LOG_FORMAT']
        missing_attrs = [attr for attr in required_attrs if not hasattr(self.config, attr)]

        if missing_attrs:
            raise LoggingConfigurationError(
                f"Missing required logging configuration: {', '.join(missing_attrs)}"
            )

        if not isinstance(logging.getLevelName(self.config.LOG_LEVEL.upper()), int):
            raise LoggingConfigurationError(f"Unknown log level '{self.config.LOG_LEVEL}'")

    @property
    def json_output(self) -> bool:
        return self.config.LOG_FORMAT.lower() == 'json'

    def configure_structured_logging(self) -> None:
        self._configure_stdlib_logging()

        processors = [
            structlog.contextvars.merge_contextvars,
            filter_sensitive_data,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if self.json_output:
            processors.append(structlog.stdlib.render_to_log_kwargs)
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=not getattr(self.config, 'TESTING', False),
        )

        self.is_configured = True

    def _configure_stdlib_logging(self) -> None:
        log_file = getattr(self.config, 'LOG_FILE', None)
        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        logging.basicConfig(
            level=getattr(logging, self.config.LOG_LEVEL.upper()),
            handlers=self._create_log_handlers(),
            force=True
        )

        for logger_name in VERBOSE_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    def _create_log_handlers(self) -> List[logging.Handler]:
        handlers = []

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(self._create_formatter())
        handlers.append(console_handler)

        log_file = getattr(self.config, 'LOG_FILE', None)
        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(self._create_formatter())
            handlers.append(file_handler)

        return handlers

    def _create_formatter(self) -> logging.Formatter:
        if self.json_output:
            return FormsJSONFormatter(
                '%(message)s',
                app_name=getattr(self.config, 'APP_NAME', 'formbinding')
            )
        return logging.Formatter('%(message)s')


_logging_config: Optional[LoggingConfiguration] = None


def configure_application_logging(app_config: Optional[Any] = None, force: bool = False) -> LoggingConfiguration:
    """
    Configure application logging once per process.

    Args:
        app_config: Configuration object, loaded from settings when omitted
        force: Reconfigure even if logging was already configured

    Returns:
        Configured LoggingConfiguration instance
    """
    global _logging_config

    if _logging_config is None or force:
        _logging_config = LoggingConfiguration(app_config)
        _logging_config.configure_structured_logging()

    return _logging_config


def get_logger(name: str) -> Any:
    """Get a structlog logger, configuring logging on first use."""
    if _logging_config is None:
        configure_application_logging()

    return structlog.get_logger(name)
