"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, fields

from ..logging_config import get_logger
from .parser import IDENTIFIER_PATTERN
from .schema import SHORT_CODES

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class GeneratorConfig:
    """Base configuration for DTO generators."""

    # Code style settings
    indent_size: int = 4
    add_comments: bool = True

    # Type resolution
    type_aliases: Dict[str, str] = field(default_factory=dict)
    sort_properties: bool = False

    # Artifacts
    generate_tests: bool = True
    flat: bool = True

    # Import resolution
    presence_helper_file: Optional[str] = None
    test_helpers_file: Optional[str] = None
    search_depth: Optional[int] = None

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent(self) -> str:
        return " " * self.indent_size


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["typescript"] = {
            "indent_size": 4,
            "flat": False,
            "presence_helper_file": "has-value.ts",
            "test_helpers_file": "setup-jest-esm.ts",
        }

        self._configs["python"] = {
            "indent_size": 4,
            "flat": True,
            "presence_helper_file": "has_value.py",
        }

    def get_config(self, language: Optional[str] = None,
                   custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = dict(self._configs.get(language, {})) if language else {}

        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def defaults_for(self, language: str) -> Dict[str, Any]:
        """Language defaults, used to fill fields left unset by a caller."""
        return dict(self._configs.get(language, {}))

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get('custom', {}))
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        return GeneratorConfig(**config_args)

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        for code, type_name in config.type_aliases.items():
            if code in SHORT_CODES:
                warnings.append(f"Alias '{code}' shadows a built-in type code and is ignored")
            if not IDENTIFIER_PATTERN.match(str(type_name)):
                warnings.append(f"Alias '{code}' maps to invalid type name: {type_name!r}")

        if config.search_depth is not None and config.search_depth < 0:
            warnings.append(f"Invalid search_depth: {config.search_depth}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(language: Optional[str] = None,
                custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
