"""
Configuration Service
Loads the packaged release configuration and script templates with caching
"""

import json
from functools import lru_cache
from typing import Dict, List, Any, Optional
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ConfigurationService:
    """
    Centralized service for loading and caching packaged configuration

    Loads JSON configs and script templates from the config directory with:
    - LRU caching
    - Error logging before re-raising
    - Typed accessors for the release settings
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize ConfigurationService

        Args:
            config_dir: Path to configuration directory. If None, uses rnrelease/config
        """
        if config_dir is None:
            self.config_dir = Path(__file__).parent.parent.parent / "config"
        else:
            self.config_dir = Path(config_dir)

        logger.debug(f"ConfigurationService initialized with config_dir: {self.config_dir}")

    @lru_cache(maxsize=32)
    def load_config(self, config_name: str) -> Dict[str, Any]:
        """
        Load configuration from JSON file with caching

        Args:
            config_name: Name of config file (without .json extension)

        Returns:
            Dict containing configuration data

        Raises:
            FileNotFoundError: If config file not found
            json.JSONDecodeError: If config file is invalid JSON
        """
        try:
            config_path = self.config_dir / f"{config_name}.json"

            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")

            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)

            logger.debug(f"Loaded config: {config_name} (version: {config.get('version', 'N/A')})")
            return config

        except FileNotFoundError:
            logger.error(f"Config file not found: {config_name}.json")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {config_name}.json: {e}")
            raise

    @lru_cache(maxsize=8)
    def load_template(self, template_name: str) -> str:
        """
        Load a script template from the templates directory

        Raises:
            FileNotFoundError: If the template does not exist
        """
        template_path = self.config_dir / "templates" / template_name
        if not template_path.exists():
            logger.error(f"Template not found: {template_path}")
            raise FileNotFoundError(f"Template not found: {template_path}")

        return template_path.read_text(encoding="utf-8")

    def get_release_config(self) -> Dict[str, Any]:
        """Get the release flow configuration"""
        return self.load_config("release_config")

    def get_config_folder(self) -> str:
        return self.get_release_config().get("config_folder", ".rnrelease")

    def get_script_file_name(self) -> str:
        return self.get_release_config().get("script_file_name", "sync_version.sh")

    def get_script_template_name(self) -> str:
        return self.get_release_config().get("script_template", "sync_version.sh.tmpl")

    def get_versioning_files(self) -> List[str]:
        """Manifest file names recognized, in lookup order"""
        return list(self.get_release_config().get("versioning_files", ["package.json"]))

    def get_increment_kinds(self) -> List[str]:
        return list(self.get_release_config().get("increment_kinds", []))

    def get_bump_command(self) -> List[str]:
        """Command prefix; the selected increment kind is appended as the sole argument"""
        return list(self.get_release_config().get("bump_command", ["npm", "version"]))

    def get_step_pause_seconds(self) -> float:
        return float(self.get_release_config().get("step_pause_seconds", 2.0))

    def get_primary_color(self) -> str:
        return self.get_release_config().get("primary_color", "#D19A66")


_config_service: Optional[ConfigurationService] = None


def get_config_service() -> ConfigurationService:
    """
    Get global ConfigurationService singleton instance

    Returns:
        ConfigurationService instance
    """
    global _config_service
    if _config_service is None:
        _config_service = ConfigurationService()
    return _config_service
