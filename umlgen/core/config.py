"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_dir: Optional[str] = None

    # Code style settings
    indent_size: int = 4
    use_tabs: bool = False
    line_ending: str = "\n"

    # Documentation
    doc_comments: bool = True
    author: Optional[str] = None

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent_string(self) -> str:
        """Text used for one level of indentation."""
        if self.use_tabs:
            return "\t"
        return " " * self.indent_size

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Look up a setting by field name, preference key or custom key.

        Args:
            key: Field name (``indent_size``), preference key
                (``gosu.gen.indentSpaces``) or custom setting name
            default: Value returned when the key is unknown
        """
        key = PREFERENCE_KEYS.get(key, key)
        if key in _field_names():
            return getattr(self, key)
        return self.custom.get(key, default)


# Keys used by the preferences panel of the modelling tool
PREFERENCE_KEYS = {
    "gosu.gen.gosuDoc": "doc_comments",
    "gosu.gen.useTab": "use_tabs",
    "gosu.gen.indentSpaces": "indent_size",
    # Option names accepted by generate()
    "generateDocComments": "doc_comments",
    "useTabIndentation": "use_tabs",
    "indentWidth": "indent_size",
}


def _field_names() -> set:
    return {f.name for f in fields(GeneratorConfig)}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["gosu"] = {
            "indent_size": 4,
            "use_tabs": False,
            "doc_comments": True,
            "custom": {
                "source_extension": ".gs",
                "enhancement_extension": ".gsx",
                "uses": ["java.util.*"],
                "stub_statement": "// TODO implement here",
            },
        }

    def get_config(
        self,
        language: str = "gosu",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        # Start with defaults
        base_config = self._copy_defaults(language)

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        # Apply custom overrides
        if custom_config:
            self._merge(base_config, custom_config)

        # Create GeneratorConfig instance
        return self._dict_to_config(base_config)

    def get_option(self, language: str, key: str, default: Any = None) -> Any:
        """Read a single option from the default configuration of a language."""
        return self.get_config(language).get_option(key, default)

    def _copy_defaults(self, language: str) -> Dict[str, Any]:
        defaults = self._configs.get(language.lower(), {})
        copied = dict(defaults)
        copied["custom"] = dict(defaults.get("custom", {}))
        return copied

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]):
        """Merge overrides into base, translating preference keys."""
        for key, value in overrides.items():
            key = PREFERENCE_KEYS.get(key, key)
            if key == "custom" and isinstance(value, dict):
                base.setdefault("custom", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        # Extract known fields
        known_fields = _field_names()

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Add custom fields to the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = {
            "output_dir": config.output_dir,
            "indent_size": config.indent_size,
            "use_tabs": config.use_tabs,
            "line_ending": config.line_ending,
            "doc_comments": config.doc_comments,
            "author": config.author,
        }

        # Add custom settings
        config_dict.update(config.custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def list_languages(self) -> list[str]:
        """Get list of supported languages."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str = "gosu") -> list[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings/errors
        """
        warnings = []

        if not isinstance(config.indent_size, int) or config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.line_ending not in {"\n", "\r\n"}:
            warnings.append(f"Invalid line_ending: {config.line_ending!r}")

        # Language-specific validations
        if language == "gosu":
            for key in ("source_extension", "enhancement_extension"):
                extension = config.custom.get(key)
                if extension is not None and not str(extension).startswith("."):
                    warnings.append(f"Invalid {key}: {extension}")

            uses = config.custom.get("uses", [])
            if not isinstance(uses, list):
                warnings.append(f"Invalid uses: {uses}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "gosu",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
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
