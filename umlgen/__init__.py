"""
umlgen - Gosu source generation from design models.

Walks packages, classes, interfaces, enumerations and annotation types of an
object-oriented design model and writes Gosu source files that mirror the
model structure.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.errors import DestinationError, GeneratorError, UserCancelled
from .core.config import ConfigError, GeneratorConfig, ConfigManager, load_config
from .core.filesystem import FileSystem, LocalFileSystem, MemoryFileSystem
from .core.loader import LoadedModel, ModelLoadError, build_model, load_model
from .core.model import Element, InMemoryRepository, ModelRepository

# Version info
__version__ = "0.1.0"


def generate(
    root: Element,
    output_path: Union[str, Path],
    options: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
    repository: Optional[ModelRepository] = None,
    filesystem: Optional[FileSystem] = None,
    language: str = "gosu",
) -> GenerationResult:
    """
    Generate source code for a model element.

    Args:
        root: Package or type declaration to generate
        output_path: Existing directory the output is placed in
        options: GeneratorConfig or dict of option overrides
        repository: Relationship queries for the model
        filesystem: Destination for generated output (defaults to local disk)
        language: Target language name or alias

    Returns:
        GenerationResult with the written files, or the first error
    """
    generator = get_generator(language, options, repository, filesystem)
    return generate_code(generator, root, output_path)


def generate_from_file(
    model_path: Union[str, Path],
    output_path: Union[str, Path],
    options: Optional[Dict[str, Any]] = None,
    filesystem: Optional[FileSystem] = None,
    language: str = "gosu",
) -> GenerationResult:
    """
    Load a JSON model and generate code for its root.

    The model's ``author`` fills in the author option unless one is given.
    """
    model = load_model(model_path)
    merged = dict(options or {})
    if model.author and not merged.get("author"):
        merged["author"] = model.author
    return generate(
        model.root, output_path, merged, model.repository, filesystem, language
    )


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "DestinationError",
    "UserCancelled",
    "ConfigError",
    "GeneratorConfig",
    "ConfigManager",
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    "LoadedModel",
    "ModelLoadError",
    "InMemoryRepository",
    "ModelRepository",
    "build_model",
    "load_model",
    "load_config",
    "generate",
    "generate_code",
    "generate_from_file",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
]
