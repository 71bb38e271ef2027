"""
Application configuration for formbinding.

Environment variables are loaded from a ``.env`` file with python-dotenv and
read through ``EnvironmentManager``'s typed getters. ``get_config`` returns the
configuration class matching ``FLASK_ENV``.
"""

import logging
import os
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
VALID_LOG_FORMATS = ('json', 'console')


class ConfigurationError(Exception):
    """Custom exception for configuration validation errors."""
    pass


class EnvironmentManager:
    """Environment variable loading and typed access."""

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize environment manager.

        Args:
            env_file: Optional path to .env file, defaults to auto-discovery;
                an empty string skips loading
        """
        self.env_file = find_dotenv(usecwd=True) if env_file is None else env_file
        self.logger = logging.getLogger(f"{__name__}.EnvironmentManager")
        self._load_environment_variables()

    def _load_environment_variables(self) -> None:
        """
        Load environment variables from the .env file, keeping existing values.

        Raises:
            ConfigurationError: When environment loading fails
        """
        if not self.env_file:
            return
        try:
            load_dotenv(self.env_file, override=False)
            self.logger.debug("Environment variables loaded from %s", self.env_file)
        except OSError as e:
            error_msg = f"Failed to load environment variables: {str(e)}"
            self.logger.error(error_msg)
            raise ConfigurationError(error_msg)

    @staticmethod
    def _convert(value: str, var_type: type) -> Any:
        if var_type == bool:
            return value.lower() in ('true', '1', 'yes', 'on')
        elif var_type == int:
            return int(value)
        return var_type(value)

    def get_required_env(self, key: str, var_type: type = str) -> Any:
        """
        Get required environment variable with type validation.

        Raises:
            ConfigurationError: When required variable is missing or invalid
        """
        value = os.getenv(key)
        if value is None:
            raise ConfigurationError(f"Required environment variable '{key}' not found")

        try:
            return self._convert(value, var_type)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Environment variable '{key}' has invalid type: {str(e)}")

    def get_optional_env(self, key: str, default: Any = None, var_type: type = str) -> Any:
        """
        Get optional environment variable with default value and type validation.

        Args:
            key: Environment variable name
            default: Default value if variable is not set
            var_type: Expected variable type for validation

        Returns:
            Environment variable value or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return self._convert(value, var_type)
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid type for '{key}', using default: {default}")
            return default


class BaseConfig:
    """Settings shared by every environment."""

    def __init__(self, env_manager: Optional[EnvironmentManager] = None):
        self.env_manager = env_manager or EnvironmentManager()
        self._configure_base_settings()
        self._configure_logging_settings()
        self._configure_form_settings()
        self._validate_configuration()

    def _configure_base_settings(self) -> None:
        self.APP_NAME = self.env_manager.get_optional_env('APP_NAME', 'formbinding')
        self.FLASK_ENV = self.env_manager.get_optional_env('FLASK_ENV', 'production')
        self.DEBUG = self.env_manager.get_optional_env('FLASK_DEBUG', False, bool)
        self.TESTING = self.env_manager.get_optional_env('FLASK_TESTING', False, bool)

    def _configure_logging_settings(self) -> None:
        self.LOG_LEVEL = self.env_manager.get_optional_env('LOG_LEVEL', 'INFO').upper()
        self.LOG_FORMAT = self.env_manager.get_optional_env('LOG_FORMAT', 'json').lower()
        self.LOG_FILE = self.env_manager.get_optional_env('LOG_FILE')

    def _configure_form_settings(self) -> None:
        # Attribute of flask.g holding the request's rendering context
        self.FORMS_TEMPLATE_DATA_ATTR = self.env_manager.get_optional_env(
            'FORMS_TEMPLATE_DATA_ATTR', 'template_data'
        )
        self.FORMS_INJECT_TEMPLATE_DATA = self.env_manager.get_optional_env(
            'FORMS_INJECT_TEMPLATE_DATA', True, bool
        )
        self.FORMS_METRICS_ENABLED = self.env_manager.get_optional_env(
            'FORMS_METRICS_ENABLED', True, bool
        )

    def _validate_configuration(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: When a setting has an unsupported value
        """
        if self.LOG_LEVEL not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, got '{self.LOG_LEVEL}'"
            )
        if self.LOG_FORMAT not in VALID_LOG_FORMATS:
            raise ConfigurationError(
                f"LOG_FORMAT must be one of {', '.join(VALID_LOG_FORMATS)}, got '{self.LOG_FORMAT}'"
            )
        if not self.FORMS_TEMPLATE_DATA_ATTR.isidentifier():
            raise ConfigurationError(
                f"FORMS_TEMPLATE_DATA_ATTR must be a valid attribute name, got '{self.FORMS_TEMPLATE_DATA_ATTR}'"
            )


class DevelopmentConfig(BaseConfig):
    """Development environment configuration with console logging."""

    def __init__(self, env_manager: Optional[EnvironmentManager] = None):
        super().__init__(env_manager)
        self.DEBUG = True
        self.LOG_LEVEL = self.env_manager.get_optional_env('LOG_LEVEL', 'DEBUG').upper()
        self.LOG_FORMAT = self.env_manager.get_optional_env('LOG_FORMAT', 'console').lower()
        self._validate_configuration()


class ProductionConfig(BaseConfig):
    """Production environment configuration."""

    def __init__(self, env_manager: Optional[EnvironmentManager] = None):
        super().__init__(env_manager)
        self.DEBUG = False
        self.TESTING = False


class TestingConfig(BaseConfig):
    """Testing configuration with metrics disabled and console logging."""

    def __init__(self, env_manager: Optional[EnvironmentManager] = None):
        super().__init__(env_manager)
        self.TESTING = True
        self.DEBUG = True
        self.LOG_LEVEL = 'DEBUG'
        self.LOG_FORMAT = 'console'
        self.LOG_FILE = None
        self.FORMS_METRICS_ENABLED = False


CONFIG_CLASSES = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config(config_name: Optional[str] = None) -> BaseConfig:
    """
    Configuration factory returning the settings for an environment.

    Args:
        config_name: Optional configuration name, defaults to ``FLASK_ENV``

    Returns:
        Environment-specific configuration instance

    Raises:
        ConfigurationError: When an unknown configuration name is provided
    """
    config_name = (config_name or os.getenv('FLASK_ENV', 'production')).lower()
    config_class = CONFIG_CLASSES.get(config_name)
    if config_class is None:
        raise ConfigurationError(
            f"Invalid configuration name '{config_name}'. "
            f"Valid options: {', '.join(CONFIG_CLASSES)}"
        )
    logger.debug("Loading %s configuration", config_name)
    return config_class()
