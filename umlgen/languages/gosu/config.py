"""
Gosu-specific configuration and preferences.

Extends the base configuration system with Gosu-specific settings and
describes the preference panel exposed by the ``configure`` command.
"""

from dataclasses import asdict
from typing import Any, Dict, List

from ...core.config import GeneratorConfig

ANNOTATION_TYPE_STEREOTYPE = "annotationType"
ENHANCEMENT_STEREOTYPE = "Enhancement"

# Preference panel: key -> description, bound to GeneratorConfig fields
GOSU_PREFERENCES: Dict[str, Dict[str, Any]] = {
    "gosu.gen.gosuDoc": {
        "text": "GosuDoc",
        "description": "Generate GosuDoc comments.",
        "type": "Check",
        "default": True,
        "field": "doc_comments",
    },
    "gosu.gen.useTab": {
        "text": "Use Tab",
        "description": "Use Tab for indentation instead of spaces.",
        "type": "Check",
        "default": False,
        "field": "use_tabs",
    },
    "gosu.gen.indentSpaces": {
        "text": "Indent Spaces",
        "description": "Number of spaces for indentation.",
        "type": "Number",
        "default": 4,
        "field": "indent_size",
    },
}


class GosuConfig(GeneratorConfig):
    """Gosu-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Gosu configuration with defaults."""
        super().__init__(**kwargs)

        # Gosu-specific defaults
        if not self.custom:
            self.custom = {}

        self.custom.setdefault("source_extension", ".gs")
        self.custom.setdefault("enhancement_extension", ".gsx")
        self.custom.setdefault("uses", ["java.util.*"])
        self.custom.setdefault("stub_statement", "// TODO implement here")

        # Validate Gosu-specific settings
        self._validate_gosu_settings()

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "GosuConfig":
        """Wrap a generic configuration, filling in Gosu defaults."""
        if isinstance(config, cls):
            return config
        values = asdict(config)
        values["custom"] = dict(config.custom)
        return cls(**values)

    def _validate_gosu_settings(self):
        """Validate Gosu-specific configuration."""
        for key in ("source_extension", "enhancement_extension"):
            extension = self.custom.get(key)
            if not isinstance(extension, str) or not extension.startswith("."):
                raise ValueError(f"Invalid {key}: {extension}")

        if isinstance(self.indent_size, bool) or not isinstance(self.indent_size, int):
            raise ValueError(f"Invalid indent_size: {self.indent_size}")
        if self.indent_size < 0:
            raise ValueError(f"Invalid indent_size: {self.indent_size}")

        if not isinstance(self.custom.get("uses"), list):
            raise ValueError(f"Invalid uses: {self.custom.get('uses')}")

    @property
    def source_extension(self) -> str:
        return self.custom["source_extension"]

    @property
    def enhancement_extension(self) -> str:
        return self.custom["enhancement_extension"]

    @property
    def uses(self) -> List[str]:
        return list(self.custom["uses"])

    @property
    def stub_statement(self) -> str:
        return self.custom["stub_statement"]


def preference_values(config: GeneratorConfig) -> Dict[str, Any]:
    """Current value of every Gosu preference key."""
    return {key: config.get_option(key) for key in GOSU_PREFERENCES}
