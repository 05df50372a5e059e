"""
Language registry for umlgen.

Maps a target language name, or one of its aliases, to the generator class
that writes it, and builds configured generator instances.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path

from .core.config import GeneratorConfig, load_config
from .core.filesystem import FileSystem
from .core.generator import CodeGenerator
from .core.model import ModelRepository


class RegistryError(Exception):
    """Raised for unknown languages or generators that cannot be built."""

    pass


class GeneratorRegistry:
    """Language names and aliases mapped to generator classes."""

    def __init__(self):
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
    ):
        """
        Add a generator class under a language name and its aliases.

        Names are case-insensitive.

        Raises:
            RegistryError: If ``generator_class`` is not a CodeGenerator
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, CodeGenerator
        ):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        language_key = language.lower()
        self._generators[language_key] = generator_class
        for alias in aliases or []:
            self._aliases[alias.lower()] = language_key

    def resolve_language(self, language: str) -> str:
        """Primary language name for a name or alias."""
        language_key = language.lower()
        if language_key in self._generators:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]

        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def create_generator(
        self,
        language: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
        repository: Optional[ModelRepository] = None,
        filesystem: Optional[FileSystem] = None,
    ) -> CodeGenerator:
        """
        Build a generator for ``language``.

        Args:
            language: Language name or alias
            config: GeneratorConfig, dict of option overrides or path to a
                JSON configuration file
            repository: Relationship queries for the model
            filesystem: Destination for generated output

        Raises:
            RegistryError: If the language is unknown or the generator
                cannot be configured
        """
        language_key = self.resolve_language(language)
        generator_class = self._generators[language_key]

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(language_key, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(language_key, custom_config=config)
            elif config is None:
                final_config = load_config(language_key)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")

            return generator_class(final_config, repository, filesystem)

        except Exception as e:
            raise RegistryError(f"Failed to create {language} generator: {e}") from e

    def list_languages(self) -> List[str]:
        return sorted(self._generators)

    def get_aliases_for_language(self, language: str) -> List[str]:
        language_key = language.lower()
        return sorted(
            alias for alias, target in self._aliases.items() if target == language_key
        )

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """Name, generator class, file extension and aliases of a language."""
        language_key = self.resolve_language(language)
        generator_class = self._generators[language_key]
        generator = generator_class(load_config(language_key))

        return {
            "name": generator.language_name,
            "class": generator_class.__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_language(language_key),
            "module": generator_class.__module__,
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Shared registry with the bundled generators registered."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _register_bundled_generators(_global_registry)
    return _global_registry


def _register_bundled_generators(registry: GeneratorRegistry):
    from .languages.gosu import GosuGenerator

    registry.register("gosu", GosuGenerator, aliases=["gs"])


def get_generator(
    language: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    repository: Optional[ModelRepository] = None,
    filesystem: Optional[FileSystem] = None,
) -> CodeGenerator:
    """Build a generator from the shared registry."""
    return get_registry().create_generator(language, config, repository, filesystem)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Language info for every registered language, keyed by name."""
    return {
        language: get_language_info(language)
        for language in list_supported_languages()
    }
