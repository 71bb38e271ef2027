"""
Configuration package: environment-specific settings and logging setup.

Usage:
    from config import get_config, configure_application_logging

    config = get_config('development')
    configure_application_logging(config)
"""

from config.logging import (
    LoggingConfiguration,
    LoggingConfigurationError,
    configure_application_logging,
    filter_sensitive_data,
    get_logger,
)
from config.settings import (
    BaseConfig,
    ConfigurationError,
    DevelopmentConfig,
    EnvironmentManager,
    ProductionConfig,
    TestingConfig,
    get_config,
)

__all__ = [
    'BaseConfig',
    'ConfigurationError',
    'DevelopmentConfig',
    'EnvironmentManager',
    'LoggingConfiguration',
    'LoggingConfigurationError',
    'ProductionConfig',
    'TestingConfig',
    'configure_application_logging',
    'filter_sensitive_data',
    'get_config',
    'get_logger',
]
