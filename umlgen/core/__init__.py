"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .errors import DestinationError, GeneratorError, UserCancelled
from .generator import CodeGenerator, GenerationResult, generate_code
from .model import (
    AnnotationType,
    Association,
    AssociationEnd,
    Attribute,
    Class,
    Classifier,
    Element,
    ElementKind,
    Enumeration,
    EnumerationLiteral,
    Generalization,
    InMemoryRepository,
    Interface,
    InterfaceRealization,
    ModelRepository,
    Operation,
    Package,
    Parameter,
    ParameterDirection,
    Visibility,
)
from .loader import LoadedModel, ModelLoadError, build_model, load_model
from .filesystem import FileSystem, LocalFileSystem, MemoryFileSystem
from .writer import CodeWriter
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "DestinationError",
    "UserCancelled",
    "GenerationResult",
    "generate_code",
    # Model - read-only input to generators
    "Element",
    "ElementKind",
    "Visibility",
    "Package",
    "Classifier",
    "Class",
    "Interface",
    "Enumeration",
    "EnumerationLiteral",
    "AnnotationType",
    "Attribute",
    "Operation",
    "Parameter",
    "ParameterDirection",
    "Generalization",
    "InterfaceRealization",
    "Association",
    "AssociationEnd",
    "ModelRepository",
    "InMemoryRepository",
    # Model loading
    "LoadedModel",
    "ModelLoadError",
    "build_model",
    "load_model",
    # Output
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    "CodeWriter",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
