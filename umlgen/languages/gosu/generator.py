"""
Gosu code generator implementation.

Walks a design model and writes one Gosu source file per top-level class,
interface, enumeration, annotation type or enhancement, with one directory
per package.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ...core.config import GeneratorConfig
from ...core.filesystem import FileSystem
from ...core.generator import CodeGenerator
from ...core.model import (
    Classifier,
    Element,
    ElementKind,
    ModelRepository,
    Operation,
    get_associations,
    get_super_classes,
    get_super_interfaces,
    package_path,
)
from ...core.writer import CodeWriter
from ...logging_config import get_logger
from .config import ANNOTATION_TYPE_STEREOTYPE, ENHANCEMENT_STEREOTYPE, GosuConfig
from .modifiers import (
    ABSTRACT,
    classifier_modifiers,
    method_modifiers,
    modifier_list,
    visibility_token,
)
from .naming import field_name, property_alias
from .types import GosuTypeMapper

logger = get_logger(__name__)

SOURCE_FILE_TEMPLATE = "source_file.gs.j2"

DeclarationWriter = Callable[[CodeWriter, Element], None]


class GosuGenerator(CodeGenerator):
    """Code generator for Gosu classes, interfaces, enums and enhancements."""

    def __init__(
        self,
        config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
        repository: Optional[ModelRepository] = None,
        filesystem: Optional[FileSystem] = None,
    ):
        """Initialize Gosu generator with configuration."""
        super().__init__(config, repository, filesystem)
        self.config = GosuConfig.from_config(self.config)
        self.type_mapper = GosuTypeMapper()

    def get_template_directory(self) -> Optional[Path]:
        """Return the Gosu templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "gosu"

    @property
    def file_extension(self) -> str:
        """Return Gosu source file extension."""
        return self.config.source_extension

    # Tree walk

    def generate(self, element: Element, path: Union[str, Path]):
        """
        Generate a package directory or a declaration file under ``path``.

        The first element generated after ``reset`` becomes the root that
        package names are computed from.
        """
        if self.root is None:
            self.root = element
        path = Path(path)
        if not element.name:
            logger.debug("Skipping unnamed %s", element.kind.value)
            return

        if element.kind is ElementKind.PACKAGE:
            self._generate_package(element, path)
            return

        content = self.render_declaration(element)
        if content is None:
            logger.debug("Nothing to generate for %s", element.name)
            return
        self.write_file(path / self.file_name(element), content)

    def _generate_package(self, package: Element, path: Path):
        directory = self.create_directory(path / package.name)
        # Children run one at a time; the first failure propagates
        for child in package.owned_elements:
            self.generate(child, directory)

    def declaration_writer(self, element: Element) -> Optional[DeclarationWriter]:
        """Pick the writer for an element kind, or None when it emits nothing."""
        kind = element.kind
        if kind is ElementKind.CLASS:
            if element.stereotype == ANNOTATION_TYPE_STEREOTYPE:
                return self.write_annotation_type
            if element.stereotype == ENHANCEMENT_STEREOTYPE:
                return self.write_enhancement
            return self.write_class
        elif kind is ElementKind.ANNOTATION_TYPE:
            return self.write_annotation_type
        elif kind is ElementKind.INTERFACE:
            return self.write_interface
        elif kind is ElementKind.ENUMERATION:
            return self.write_enum
        return None

    def file_name(self, element: Element) -> str:
        if getattr(element, "stereotype", None) == ENHANCEMENT_STEREOTYPE:
            return element.name + self.config.enhancement_extension
        return element.name + self.config.source_extension

    def render_declaration(self, element: Element) -> Optional[str]:
        """Render the complete source file for a single declaration."""
        write = self.declaration_writer(element)
        if write is None or not element.name:
            return None

        code_writer = self.new_writer()
        write(code_writer, element)

        uses = [] if element.kind is ElementKind.ENUMERATION else self.config.uses
        content = self._render_source_file(
            ".".join(package_path(element, self.root)), uses, code_writer.get_data()
        )
        if self.config.line_ending != "\n":
            content = content.replace("\n", self.config.line_ending)
        return content

    def _render_source_file(self, package_name: str, uses: List[str], body: str) -> str:
        context = {"package_name": package_name, "uses": uses, "body": body}
        if self.template_exists(SOURCE_FILE_TEMPLATE):
            return self.render_template(SOURCE_FILE_TEMPLATE, context)

        # Fallback if the template is missing
        lines = []
        if package_name:
            lines.append(f"package {package_name}")
        lines.append("")
        if uses:
            lines.extend(f"uses {module};" for module in uses)
            lines.append("")
        lines.append(body)
        return "\n".join(lines)

    # Documentation

    def write_doc(self, writer: CodeWriter, text: Optional[str]):
        """Write a ``/** ... */`` block when doc comments are enabled."""
        if not self.config.doc_comments or not isinstance(text, str) or text == "":
            return
        writer.write_line("/**")
        for line in text.strip().split("\n"):
            writer.write_line(" * " + line)
        writer.write_line(" */")

    def _documentation_with_author(self, element: Element) -> str:
        doc = element.documentation.strip()
        if self.config.author:
            doc += "\n@author " + self.config.author
        return doc

    # Declaration writers

    def write_class(self, writer: CodeWriter, element: Classifier):
        terms = []
        self.write_doc(writer, self._documentation_with_author(element))

        modifiers = classifier_modifiers(element)
        if modifiers:
            terms.append(" ".join(modifiers))
        terms.extend(["class", element.name])

        super_classes = get_super_classes(self.repository, element)
        if super_classes:
            terms.append("extends " + super_classes[0].name)

        interfaces = get_super_interfaces(self.repository, element)
        if interfaces:
            terms.append("implements " + ", ".join(i.name for i in interfaces))

        writer.write_line(" ".join(terms) + " {")
        writer.write_line()
        writer.indent()

        self.write_constructor(writer, element)
        writer.write_line()

        self._write_members(writer, element)
        self._write_operations(writer, element)

        # Stubs for abstract operations of the first superclass
        if super_classes:
            self._write_inherited_stubs(writer, super_classes[0])

        # Stubs for every operation of every implemented interface
        for interface in interfaces:
            for operation in getattr(interface, "operations", []):
                self.write_method(writer, operation)
                writer.write_line()

        self._write_nested(writer, element)

        writer.outdent()
        writer.write_line("}")

    def write_enhancement(self, writer: CodeWriter, element: Classifier):
        terms = []
        self.write_doc(writer, self._documentation_with_author(element))

        modifiers = modifier_list(element)
        if modifiers:
            terms.append(" ".join(modifiers))
        terms.extend(["enhancement", element.name])

        super_classes = get_super_classes(self.repository, element)
        if super_classes:
            terms.append(": " + super_classes[0].name)

        writer.write_line(" ".join(terms) + " {")
        writer.write_line()
        writer.indent()

        self._write_members(writer, element)
        self._write_operations(writer, element)
        self._write_nested(writer, element)

        writer.outdent()
        writer.write_line("}")

    def write_interface(self, writer: CodeWriter, element: Classifier):
        terms = []
        self.write_doc(writer, element.documentation)

        visibility = visibility_token(element)
        if visibility:
            terms.append(visibility)
        terms.extend(["interface", element.name])

        super_classes = get_super_classes(self.repository, element)
        if super_classes:
            terms.append("extends " + ", ".join(s.name for s in super_classes))

        writer.write_line(" ".join(terms) + " {")
        writer.write_line()
        writer.indent()

        self._write_members(writer, element)
        for operation in element.operations:
            self.write_method(writer, operation, skip_body=True)
            writer.write_line()
        self._write_nested(writer, element)

        writer.outdent()
        writer.write_line("}")

    def write_enum(self, writer: CodeWriter, element: Classifier):
        self.write_doc(writer, element.documentation)
        writer.write_line(f"enum {element.name} {{")
        writer.indent()

        literals = getattr(element, "literals", [])
        for index, literal in enumerate(literals):
            separator = "," if index < len(literals) - 1 else ""
            writer.write_line(literal.name + separator)

        writer.outdent()
        writer.write_line("}")

    def write_annotation_type(self, writer: CodeWriter, element: Classifier):
        terms = []
        self.write_doc(writer, self._documentation_with_author(element))

        modifiers = classifier_modifiers(element)
        if modifiers:
            terms.append(" ".join(modifiers))
        terms.extend(["annotation", element.name])

        writer.write_line(" ".join(terms) + " {")
        writer.write_line()
        writer.indent()

        # Attributes only; associations do not become annotation members
        self._write_members(writer, element, include_associations=False)

        for operation in element.operations:
            self.write_method(writer, operation, skip_body=True, skip_params=True)
            writer.write_line()

        super_classes = get_super_classes(self.repository, element)
        if super_classes:
            self._write_inherited_stubs(writer, super_classes[0])

        self._write_nested(writer, element)

        writer.outdent()
        writer.write_line("}")

    def write_constructor(self, writer: CodeWriter, element: Element):
        if not element.name:
            return
        terms = []
        self.write_doc(writer, "Default constructor")
        visibility = visibility_token(element)
        if visibility:
            terms.append(visibility)
        terms.append("construct()")
        writer.write_line(" ".join(terms) + " {")
        writer.write_line("}")

    def write_member_variable(self, writer: CodeWriter, element: Element):
        """Write ``var`` for an attribute or association end."""
        if not element.name:
            return
        terms = []
        self.write_doc(writer, element.documentation)

        modifiers = modifier_list(element)
        if modifiers:
            terms.append(" ".join(modifiers))

        terms.extend(["var", field_name(element.name), ":"])
        terms.append(self.type_mapper.type_expression(element))

        alias = property_alias(element.name)
        if alias:
            terms.append("as")
            if element.is_read_only:
                terms.append("readonly")
            terms.append(alias)

        default_value = getattr(element, "default_value", "")
        if default_value:
            terms.append("= " + default_value)

        writer.write_line(" ".join(terms))

    def write_method(
        self,
        writer: CodeWriter,
        operation: Operation,
        skip_body: bool = False,
        skip_params: bool = False,
    ):
        """
        Write a ``function`` declaration.

        Args:
            writer: Output buffer
            operation: Operation to write
            skip_body: Write the signature only (abstract, interface and
                annotation methods)
            skip_params: Leave the parameter list empty (annotation methods)
        """
        if not operation.name:
            return
        params = operation.non_return_parameters()
        return_param = operation.return_parameter()

        self.write_doc(writer, self._method_documentation(operation))

        terms = method_modifiers(operation, skip_body)
        terms.append("function")

        param_terms = []
        if not skip_params:
            param_terms = [
                f"{p.name}:{self.type_mapper.type_expression(p)}" for p in params
            ]
        terms.append(f"{operation.name}({', '.join(param_terms)})")

        if return_param:
            terms.extend([":", self.type_mapper.type_expression(return_param)])

        if skip_body:
            writer.write_line(" ".join(terms))
            return

        writer.write_line(" ".join(terms) + " {")
        writer.indent()
        writer.write_line(self.config.stub_statement)
        if return_param:
            return_type = self.type_mapper.type_expression(return_param)
            value = self.type_mapper.default_return_value(return_type)
            if value is not None:
                writer.write_line(f"return {value}")
        writer.outdent()
        writer.write_line("}")

    def _method_documentation(self, operation: Operation) -> str:
        """Operation doc with ``@param``/``@return`` lines regenerated."""
        lines = operation.documentation.strip().split("\n")
        doc = "".join(
            "\n" + line
            for line in lines
            if not line.startswith("@param") and not line.startswith("@return")
        )
        for param in operation.non_return_parameters():
            doc += f"\n@param {param.name} {param.documentation}"
        return_param = operation.return_parameter()
        if return_param:
            doc += f"\n@return {return_param.documentation}"
        return doc

    # Body sections shared by the class-like writers

    def _write_members(
        self, writer: CodeWriter, element: Classifier, include_associations: bool = True
    ):
        for attribute in element.attributes:
            self.write_member_variable(writer, attribute)
            writer.write_line()

        if not include_associations:
            return

        for association in get_associations(self.repository, element):
            if association.end1.reference is element and association.end2.navigable:
                self.write_member_variable(writer, association.end2)
                writer.write_line()
            if association.end2.reference is element and association.end1.navigable:
                self.write_member_variable(writer, association.end1)
                writer.write_line()

    def _write_operations(self, writer: CodeWriter, element: Classifier):
        for operation in element.operations:
            is_abstract = ABSTRACT in modifier_list(operation)
            self.write_method(writer, operation, skip_body=is_abstract)
            writer.write_line()

    def _write_inherited_stubs(self, writer: CodeWriter, super_class: Element):
        for operation in getattr(super_class, "operations", []):
            if ABSTRACT in modifier_list(operation):
                self.write_method(writer, operation)
                writer.write_line()

    def _write_nested(self, writer: CodeWriter, element: Classifier):
        for nested in element.owned_elements:
            write = self.declaration_writer(nested)
            if write is None or not nested.name:
                continue
            write(writer, nested)
            writer.write_line()


def create_gosu_generator(
    config: Optional[Dict[str, Any]] = None,
    repository: Optional[ModelRepository] = None,
    filesystem: Optional[FileSystem] = None,
) -> GosuGenerator:
    """Create a Gosu generator with default configuration."""
    default_config = {
        "doc_comments": True,
        "use_tabs": False,
        "indent_size": 4,
    }

    merged_config = default_config.copy()
    if config:
        merged_config.update(config)

    return GosuGenerator(merged_config, repository, filesystem)
