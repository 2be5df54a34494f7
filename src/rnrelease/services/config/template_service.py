"""
Template Service
Renders the sync script template with the collected platform file locations
"""

import logging
import shlex
from typing import Optional

from rnrelease.errors import ScriptTemplateError
from .configuration_service import get_config_service

logger = logging.getLogger(__name__)


class TemplateService:
    """
    Service for rendering script templates

    Templates use {variable} placeholders; literal braces are doubled.
    """

    def __init__(self, config_service=None):
        """
        Initialize TemplateService

        Args:
            config_service: ConfigurationService instance (uses global if None)
        """
        self.config_service = config_service or get_config_service()

    def render_template(self, template: str, **variables) -> str:
        """
        Render template with variable substitution

        Args:
            template: Template string with {variable} placeholders
            **variables: Variable values for substitution

        Returns:
            Rendered string

        Raises:
            ScriptTemplateError: If a placeholder has no value or the template is malformed
        """
        try:
            return template.format(**variables)
        except KeyError as e:
            logger.error(f"Missing variable in template: {e}")
            logger.error(f"Variables provided: {list(variables.keys())}")
            raise ScriptTemplateError(f"Missing variable in script template: {e}") from e
        except (ValueError, IndexError) as e:
            logger.error(f"Template rendering failed: {e}")
            raise ScriptTemplateError(f"Script template is malformed: {e}") from e

    def render_sync_script(self, info_plist_location: str, build_gradle_location: str) -> str:
        """
        Render the platform sync script

        Args:
            info_plist_location: Path of the iOS Info.plist
            build_gradle_location: Path of the Android app build.gradle

        Both locations are shell-quoted, so the template must not quote them again.

        Returns:
            Shell script text
        """
        template_name = self.config_service.get_script_template_name()
        try:
            template = self.config_service.load_template(template_name)
        except OSError as e:
            raise ScriptTemplateError(f"Cannot load script template {template_name}: {e}") from e

        return self.render_template(
            template,
            info_plist_location=shlex.quote(info_plist_location),
            build_gradle_location=shlex.quote(build_gradle_location),
        )


# Global singleton instance
_template_service: Optional[TemplateService] = None


def get_template_service() -> TemplateService:
    """
    Get global TemplateService singleton instance

    Returns:
        TemplateService instance
    """
    global _template_service
    if _template_service is None:
        _template_service = TemplateService()
    return _template_service
