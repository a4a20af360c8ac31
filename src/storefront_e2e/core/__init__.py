# Core package: configuration, logging, exceptions
from .config import StorefrontConfig
from .logger_config import component_logger, setup_logger

__all__ = ['StorefrontConfig', 'component_logger', 'setup_logger']
