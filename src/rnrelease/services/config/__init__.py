"""
Configuration Services
Packaged release configuration, its validation and script template rendering
"""

from .configuration_service import ConfigurationService, get_config_service
from .config_validator import ConfigValidator, ValidationResult, get_validator, validate_configs_on_startup
from .template_service import TemplateService, get_template_service

__all__ = [
    "ConfigurationService",
    "get_config_service",
    "ConfigValidator",
    "ValidationResult",
    "get_validator",
    "validate_configs_on_startup",
    "TemplateService",
    "get_template_service",
]
