"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement and the
error-handling wrapper that turns a generation run into a result.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, Union
from pathlib import Path

from .config import GeneratorConfig, load_config
from .errors import GeneratorError
from .filesystem import FileSystem, LocalFileSystem
from .model import Element, InMemoryRepository, ModelRepository
from .templates import TemplateEngine, create_template_engine
from .writer import CodeWriter
from ..logging_config import get_logger

logger = get_logger(__name__)


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(
        self,
        config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
        repository: Optional[ModelRepository] = None,
        filesystem: Optional[FileSystem] = None,
    ):
        """
        Initialize generator.

        Args:
            config: GeneratorConfig or dict of overrides for the language defaults
            repository: Relationship queries over the model being generated
            filesystem: Destination for directories and files
        """
        if isinstance(config, GeneratorConfig):
            self.config = config
        else:
            self.config = load_config(self.language_name, custom_config=config)
        self.repository = repository or InMemoryRepository()
        self.filesystem = filesystem or LocalFileSystem()
        self.root: Optional[Element] = None

        # State tracking
        self.written_files: List[Path] = []
        self.created_directories: List[Path] = []

        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'gosu')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.gs')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, element: Element, path: Path):
        """
        Generate code for an element into a directory.

        Packages become directories, type declarations become files.
        The first failure propagates and stops the walk.

        Args:
            element: Model element to generate
            path: Directory the element's output is placed in

        Raises:
            GeneratorError: If a directory or file cannot be created
        """
        pass

    @abstractmethod
    def render_declaration(self, element: Element) -> Optional[str]:
        """
        Render the complete file content for a single type declaration.

        Returns:
            File content, or None when the element produces no file
        """
        pass

    def new_writer(self) -> CodeWriter:
        return CodeWriter(self.config.indent_string)

    def reset(self, root: Optional[Element] = None):
        """Forget state from a previous run."""
        self.root = root
        self.written_files = []
        self.created_directories = []

    def create_directory(self, path: Path) -> Path:
        logger.debug("Creating directory %s", path)
        created = self.filesystem.create_directory(path)
        self.created_directories.append(created)
        return created

    def write_file(self, path: Path, content: str) -> Path:
        logger.debug("Writing %s", path)
        written = self.filesystem.write_text_file(path, content)
        self.written_files.append(written)
        return written

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: List[Path] = None,
        directories: List[Path] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Files written, in write order
            directories: Directories created, in creation order
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files or []
        self.directories = directories or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.cancelled = False
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(
        cls,
        message: str,
        exception: Exception = None,
        files: List[Path] = None,
        directories: List[Path] = None,
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(files=files, directories=directories)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    @classmethod
    def cancel(cls, message: str = "Generation cancelled") -> "GenerationResult":
        """Create a result for a run the user dismissed before it started."""
        result = cls()
        result.success = False
        result.cancelled = True
        result.error_message = message
        return result


def generate_code(
    generator: CodeGenerator, root: Element, output_path: Union[str, Path]
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        root: Model element to generate
        output_path: Existing directory the output is placed in

    Returns:
        GenerationResult with written files and metadata; on failure the
        result carries the first error and the files written before it
    """
    output_path = Path(output_path)
    generator.reset(root)

    try:
        generator.generate(root, output_path)
    except GeneratorError as e:
        logger.debug("Generation aborted: %s", e)
        return GenerationResult.error(
            str(e),
            exception=e,
            files=list(generator.written_files),
            directories=list(generator.created_directories),
        )
    except Exception as e:
        logger.debug("Generation failed unexpectedly", exc_info=True)
        return GenerationResult.error(
            f"Code generation failed: {str(e)}",
            exception=e,
            files=list(generator.written_files),
            directories=list(generator.created_directories),
        )

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "root": root.name,
        "output_path": str(output_path),
        "file_count": len(generator.written_files),
        "directory_count": len(generator.created_directories),
    }

    return GenerationResult(
        files=list(generator.written_files),
        directories=list(generator.created_directories),
        metadata=metadata,
    )
