"""
Configuration Validator Service
Validates the packaged release configuration against its JSON schema and
checks that the files it refers to are shipped alongside it
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import SchemaError, ValidationError, validate

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check"""
    config_name: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, error: str):
        self.errors.append(error)

    def add_warning(self, warning: str):
        self.warnings.append(warning)


class ConfigValidator:
    """
    Configuration validator with JSON schema validation and consistency checks
    """

    def __init__(self, config_dir: Optional[Path] = None, schema_dir: Optional[Path] = None):
        """
        Initialize validator

        Args:
            config_dir: Path to config directory (defaults to rnrelease/config)
            schema_dir: Path to schema directory (defaults to <config_dir>/schemas)
        """
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"
        if schema_dir is None:
            schema_dir = Path(config_dir) / "schemas"

        self.config_dir = Path(config_dir)
        self.schema_dir = Path(schema_dir)

        self._schema_cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load JSON schema from the schemas directory

        Raises:
            FileNotFoundError: If schema file doesn't exist
            json.JSONDecodeError: If schema is invalid JSON
        """
        if schema_name in self._schema_cache:
            return self._schema_cache[schema_name]

        schema_path = self.schema_dir / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema file not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        self._schema_cache[schema_name] = schema
        return schema

    def load_config(self, config_name: str) -> Dict[str, Any]:
        config_path = self.config_dir / f"{config_name}.json"
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def validate_config_schema(self, config_name: str, schema_name: Optional[str] = None) -> ValidationResult:
        """
        Validate config file against its JSON schema

        Args:
            config_name: Name of config file to validate
            schema_name: Name of schema (defaults to config_name)
        """
        result = ValidationResult(config_name=config_name)

        try:
            config = self.load_config(config_name)
            schema = self.load_schema(schema_name or config_name)
            validate(instance=config, schema=schema)
            logger.debug(f"Config '{config_name}' passed schema validation")

        except FileNotFoundError as e:
            result.add_error(f"File not found: {e}")
        except json.JSONDecodeError as e:
            result.add_error(f"Invalid JSON: {e}")
        except ValidationError as e:
            result.add_error(f"Schema validation failed: {e.message}")
            if e.path:
                result.add_error(f"  Path: {'.'.join(str(p) for p in e.path)}")
        except SchemaError as e:
            result.add_error(f"Invalid schema: {e.message}")

        return result

    def validate_release_files(self) -> ValidationResult:
        """
        Check the release config against the files shipped next to it

        Checks:
        - The script template named by script_template exists
        - The template exposes both platform path placeholders
        """
        result = ValidationResult(config_name="release_files")

        try:
            config = self.load_config("release_config")
        except (FileNotFoundError, json.JSONDecodeError) as e:
            result.add_error(f"Cannot load release_config: {e}")
            return result

        template_name = config.get("script_template", "sync_version.sh.tmpl")
        template_path = self.config_dir / "templates" / template_name
        if not template_path.exists():
            result.add_error(f"Script template not found: {template_path}")
            return result

        template = template_path.read_text(encoding="utf-8")
        for placeholder in ("{info_plist_location}", "{build_gradle_location}"):
            if placeholder not in template:
                result.add_warning(f"Script template {template_name} does not use {placeholder}")

        return result

    def validate_all(self) -> List[ValidationResult]:
        results = [
            self.validate_config_schema("release_config"),
            self.validate_release_files(),
        ]

        error_count = sum(len(r.errors) for r in results)
        if error_count:
            logger.error(f"Configuration validation failed with {error_count} errors")
        for result in results:
            for warning in result.warnings:
                logger.warning(f"{result.config_name}: {warning}")

        return results


# Singleton instance
_validator: Optional[ConfigValidator] = None


def get_validator() -> ConfigValidator:
    """Get singleton validator instance"""
    global _validator
    if _validator is None:
        _validator = ConfigValidator()
    return _validator


def validate_configs_on_startup() -> List[str]:
    """
    Validate the packaged configuration before the flow starts

    Returns:
        Error messages; empty when the configuration is usable
    """
    results = get_validator().validate_all()
    return [f"{r.config_name}: {error}" for r in results for error in r.errors]
