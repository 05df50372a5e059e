"""Tests for the Gosu generator."""

from pathlib import Path

import pytest

from umlgen import generate
from umlgen.core.errors import DestinationError
from umlgen.core.filesystem import LocalFileSystem, MemoryFileSystem
from umlgen.core.generator import GenerationResult, generate_code
from umlgen.core.model import (
    AnnotationType,
    Association,
    AssociationEnd,
    Attribute,
    Class,
    Element,
    Enumeration,
    EnumerationLiteral,
    Generalization,
    InMemoryRepository,
    Interface,
    InterfaceRealization,
    Package,
    Visibility,
)
from umlgen.languages.gosu import GosuGenerator, create_gosu_generator

OUT = Path("out")

ROUND_TRIP_A = """package P

uses java.util.*;

public abstract class A {

    /**
     * Default constructor
     */
    public construct() {
    }

    public var _name : String

    /**
     * @return
     */
    public abstract function doIt() : void

}"""

ROUND_TRIP_B = """package P

uses java.util.*;

public class B extends A {

    /**
     * Default constructor
     */
    public construct() {
    }

    /**
     * @return
     */
    public function doIt() : void {
        // TODO implement here
    }

}"""


class FailingFileSystem(MemoryFileSystem):
    """Memory file system that fails for one directory or file name."""

    def __init__(self, fail_on: str):
        super().__init__()
        self.fail_on = fail_on

    def create_directory(self, path):
        if Path(path).name == self.fail_on:
            raise DestinationError(
                path, "create_directory", PermissionError("Permission denied")
            )
        return super().create_directory(path)

    def write_text_file(self, path, content):
        if Path(path).name == self.fail_on:
            raise DestinationError(path, "write_file", OSError("Disk full"))
        return super().write_text_file(path, content)


def render(generator: GosuGenerator, element: Element, root: Element = None) -> str:
    generator.reset(root)
    return generator.render_declaration(element)


class TestRoundTrip:
    """Package P with abstract class A and subclass B."""

    def test_files_and_directories(self, make_generator, memory_fs, round_trip_model) -> None:
        package, repository = round_trip_model
        result = generate_code(make_generator(repository), package, OUT)

        assert result.success
        assert result.directories == [OUT / "P"]
        assert result.files == [OUT / "P" / "A.gs", OUT / "P" / "B.gs"]
        assert memory_fs.directories == [OUT / "P"]

    def test_abstract_class_content(self, make_generator, memory_fs, round_trip_model) -> None:
        package, repository = round_trip_model
        generate_code(make_generator(repository), package, OUT)
        assert memory_fs.read_text(OUT / "P" / "A.gs") == ROUND_TRIP_A

    def test_subclass_stubs_inherited_abstract_operation(
        self, make_generator, memory_fs, round_trip_model
    ) -> None:
        """B gets a concrete stub for doIt with no return statement."""
        package, repository = round_trip_model
        generate_code(make_generator(repository), package, OUT)
        assert memory_fs.read_text(OUT / "P" / "B.gs") == ROUND_TRIP_B

    def test_metadata(self, make_generator, round_trip_model) -> None:
        package, repository = round_trip_model
        result = generate_code(make_generator(repository), package, OUT)
        assert result.metadata["language"] == "gosu"
        assert result.metadata["file_count"] == 2
        assert result.metadata["directory_count"] == 1
        assert result.metadata["root"] == "P"

    def test_idempotent_output(self, tmp_path: Path, round_trip_model) -> None:
        """Two runs into fresh folders produce byte-identical files."""
        package, repository = round_trip_model
        first, second = tmp_path / "first", tmp_path / "second"
        first.mkdir()
        second.mkdir()

        for destination in (first, second):
            generator = GosuGenerator(None, repository, LocalFileSystem())
            assert generate_code(generator, package, destination).success

        for name in ("A.gs", "B.gs"):
            assert (first / "P" / name).read_bytes() == (
                second / "P" / name
            ).read_bytes()


class TestTreeWalk:
    """Tests for package recursion and file placement."""

    def test_empty_named_classifier_skipped(self, make_generator, memory_fs) -> None:
        package = Package(name="P")
        package.add(Class(name=""))
        package.add(Class(name="B"))
        result = generate_code(make_generator(), package, OUT)

        assert result.success
        assert list(memory_fs.files) == [OUT / "P" / "B.gs"]

    def test_empty_named_package_skipped(self, make_generator, memory_fs) -> None:
        root = Package(name="root")
        unnamed = root.add(Package(name=""))
        unnamed.add(Class(name="Hidden"))
        generate_code(make_generator(), root, OUT)

        assert memory_fs.directories == [OUT / "root"]
        assert memory_fs.files == {}

    def test_nested_packages_mirror_directories(self, make_generator, memory_fs) -> None:
        root = Package(name="Model")
        acme = root.add(Package(name="com")).add(Package(name="acme"))
        acme.add(Class(name="A"))
        generate_code(make_generator(), root, OUT)

        assert memory_fs.directories == [
            OUT / "Model",
            OUT / "Model" / "com",
            OUT / "Model" / "com" / "acme",
        ]
        content = memory_fs.read_text(OUT / "Model" / "com" / "acme" / "A.gs")
        assert content.startswith("package Model.com.acme\n\nuses java.util.*;\n\n")

    def test_class_as_root_has_no_package_line(self, make_generator, memory_fs) -> None:
        generate_code(make_generator(), Class(name="A"), OUT)
        content = memory_fs.read_text(OUT / "A.gs")
        assert content.startswith("\nuses java.util.*;\n\npublic class A {")

    def test_unhandled_kind_emits_nothing(self, make_generator, memory_fs) -> None:
        package = Package(name="P")
        package.add(Element(name="Note"))
        assert generate_code(make_generator(), package, OUT).success
        assert memory_fs.files == {}

    def test_nested_classifier_written_inline(self, make_generator, memory_fs) -> None:
        package = Package(name="P")
        outer = package.add(Class(name="Outer"))
        outer.add(Class(name="Inner"))
        generate_code(make_generator(doc_comments=False), package, OUT)

        assert list(memory_fs.files) == [OUT / "P" / "Outer.gs"]
        content = memory_fs.read_text(OUT / "P" / "Outer.gs")
        assert "    public class Inner {" in content
        assert "        public construct() {" in content

    def test_direct_generate_uses_first_element_as_root(
        self, make_generator, memory_fs
    ) -> None:
        model = Package(name="Model")
        package = model.add(Package(name="P"))
        package.add(Class(name="A"))
        make_generator().generate(package, OUT)

        content = memory_fs.read_text(OUT / "P" / "A.gs")
        assert content.startswith("package P\n")

    @pytest.mark.parametrize(
        "outer, file_name",
        [
            (lambda: Class(name="Outer"), "Outer.gs"),
            (lambda: Interface(name="Outer"), "Outer.gs"),
            (lambda: AnnotationType(name="Outer"), "Outer.gs"),
            (lambda: Class(name="Outer", stereotype="annotationType"), "Outer.gs"),
            (lambda: Class(name="Outer", stereotype="Enhancement"), "Outer.gsx"),
        ],
        ids=["class", "interface", "annotation", "annotation-stereotype", "enhancement"],
    )
    @pytest.mark.parametrize(
        "inner, header",
        [
            (lambda: Class(name="X"), "public class X {"),
            (lambda: Interface(name="X"), "public interface X {"),
            (lambda: Enumeration(name="X"), "enum X {"),
            (lambda: AnnotationType(name="X"), "public annotation X {"),
            (lambda: Class(name="X", stereotype="annotationType"), "public annotation X {"),
            (lambda: Class(name="X", stereotype="Enhancement"), "public enhancement X {"),
        ],
        ids=[
            "class",
            "interface",
            "enum",
            "annotation",
            "annotation-stereotype",
            "enhancement",
        ],
    )
    def test_nested_declaration_dispatch(
        self, make_generator, memory_fs, outer, file_name, inner, header
    ) -> None:
        package = Package(name="P")
        package.add(outer()).add(inner())
        generate_code(make_generator(doc_comments=False), package, OUT)

        assert list(memory_fs.files) == [OUT / "P" / file_name]
        content = memory_fs.read_text(OUT / "P" / file_name)
        assert f"\n    {header}\n" in content

    def test_children_processed_in_model_order(self, make_generator, memory_fs) -> None:
        package = Package(name="P")
        for name in ("Zeta", "Alpha", "Mid"):
            package.add(Class(name=name))
        result = generate_code(make_generator(), package, OUT)
        assert [p.name for p in result.files] == ["Zeta.gs", "Alpha.gs", "Mid.gs"]


class TestFailFast:
    """Tests for sequential fail-fast behaviour."""

    def test_failed_directory_stops_siblings(self) -> None:
        package = Package(name="P")
        x = package.add(Package(name="X"))
        x.add(Class(name="InsideX"))
        package.add(Class(name="Y"))
        filesystem = FailingFileSystem("X")

        result = generate_code(GosuGenerator(None, None, filesystem), package, OUT)

        assert not result.success
        assert isinstance(result.exception, DestinationError)
        assert result.exception.path == OUT / "P" / "X"
        assert result.exception.operation == "create_directory"
        assert str(OUT / "P" / "X") in result.error_message
        assert filesystem.files == {}

    def test_failed_write_keeps_earlier_files(self) -> None:
        package = Package(name="P")
        package.add(Class(name="First"))
        package.add(Class(name="Broken"))
        package.add(Class(name="Last"))
        filesystem = FailingFileSystem("Broken.gs")

        result = generate_code(GosuGenerator(None, None, filesystem), package, OUT)

        assert not result.success
        assert result.exception.operation == "write_file"
        assert result.files == [OUT / "P" / "First.gs"]
        assert list(filesystem.files) == [OUT / "P" / "First.gs"]

    def test_local_directory_clash_reports_cause(self, tmp_path: Path) -> None:
        """An existing file where a package folder goes fails the run."""
        (tmp_path / "P").write_text("not a folder")
        package = Package(name="P")
        package.add(Class(name="A"))

        result = generate_code(GosuGenerator(), package, tmp_path)

        assert not result.success
        assert result.exception.path == tmp_path / "P"
        assert isinstance(result.exception.__cause__, FileExistsError)

    def test_unexpected_error_becomes_result(self, make_generator, monkeypatch) -> None:
        generator = make_generator()

        def explode(element):
            raise RuntimeError("boom")

        monkeypatch.setattr(generator, "render_declaration", explode)
        result = generate_code(generator, Class(name="A"), OUT)

        assert not result.success
        assert "boom" in result.error_message
        assert isinstance(result.exception, RuntimeError)


class TestClassWriter:
    """Tests for class declarations."""

    def test_member_with_alias(self, make_generator) -> None:
        cls = Class(name="A")
        cls.add(Attribute(name="Foo", type="String"))
        content = render(make_generator(), cls)
        assert "    public var _foo : String as Foo" in content

    def test_all_uppercase_member_has_no_alias(self, make_generator) -> None:
        cls = Class(name="A")
        cls.add(Attribute(name="URL", type="String"))
        content = render(make_generator(), cls)
        assert "    public var URL : String\n" in content
        assert " as URL" not in content

    def test_read_only_default_and_static(self, make_generator) -> None:
        cls = Class(name="A")
        cls.add(
            Attribute(
                name="Limit",
                type="int",
                is_static=True,
                is_read_only=True,
                default_value="10",
            )
        )
        content = render(make_generator(), cls)
        assert "    public static var _limit : int as readonly Limit = 10" in content

    def test_member_documentation(self, make_generator) -> None:
        cls = Class(name="A")
        cls.add(Attribute(name="count", type="int", documentation="How many."))
        content = render(make_generator(), cls)
        assert "    /**\n     * How many.\n     */\n    public var _count : int" in content

    def test_extends_first_superclass_and_interfaces(self, make_generator) -> None:
        base, other = Class(name="Base"), Class(name="Other")
        first, second = Interface(name="I1"), Interface(name="I2")
        cls = Class(name="A")
        repository = InMemoryRepository(
            [
                Generalization(source=cls, target=base),
                Generalization(source=cls, target=other),
                InterfaceRealization(source=cls, target=first),
                InterfaceRealization(source=cls, target=second),
            ]
        )
        content = render(make_generator(repository), cls)
        assert "public class A extends Base implements I1, I2 {" in content

    def test_interface_operations_get_stubs(self, make_generator, make_op) -> None:
        shape = Interface(name="Shape")
        shape.add(make_op("area", return_type="double"))
        circle = Class(name="Circle")
        repository = InMemoryRepository(
            [InterfaceRealization(source=circle, target=shape)]
        )
        content = render(make_generator(repository, doc_comments=False), circle)
        assert (
            "    public function area() : double {\n"
            "        // TODO implement here\n"
            "        return 0.0d\n"
            "    }"
        ) in content

    def test_concrete_operation_stub(self, make_generator, make_op) -> None:
        cls = Class(name="A")
        cls.add(make_op("find", return_type="Item", params=[("id", "int"), ("q", "String")]))
        content = render(make_generator(doc_comments=False), cls)
        assert "    public function find(id:int, q:String) : Item {" in content
        assert "        return null" in content

    def test_operation_without_return(self, make_generator, make_op) -> None:
        cls = Class(name="A")
        cls.add(make_op("run"))
        content = render(make_generator(doc_comments=False), cls)
        assert (
            "    public function run() {\n        // TODO implement here\n    }"
            in content
        )

    def test_method_doc_rebuilds_tags(self, make_generator, make_op) -> None:
        cls = Class(name="A")
        operation = cls.add(
            make_op("total", return_type="int", params=[("qty", "int")])
        )
        operation.documentation = "Sum it up.\n@param old stale\n@return stale"
        operation.parameters[0].documentation = "quantity"
        operation.parameters[1].documentation = "the sum"
        content = render(make_generator(), cls)
        assert (
            "    /**\n"
            "     * Sum it up.\n"
            "     * @param qty quantity\n"
            "     * @return the sum\n"
            "     */\n"
        ) in content
        assert "stale" not in content

    def test_navigable_association_end_becomes_member(self, make_generator) -> None:
        order, item = Class(name="Order"), Class(name="Item")
        association = Association(
            end1=AssociationEnd(reference=order, navigable=False),
            end2=AssociationEnd(
                name="items",
                reference=item,
                navigable=True,
                multiplicity="0..*",
                is_ordered=True,
            ),
        )
        repository = InMemoryRepository([association])
        generator = make_generator(repository)

        assert "    public var _items : List<Item>" in render(generator, order)
        assert "var " not in render(generator, item)

    def test_author_and_class_doc(self, make_generator) -> None:
        cls = Class(name="A", documentation="  The A.  ")
        content = render(make_generator(author="Jane"), cls)
        assert content.startswith(
            "\nuses java.util.*;\n\n/**\n * The A.\n * @author Jane\n */\npublic class A {"
        )

    def test_doc_comments_disabled(self, make_generator) -> None:
        cls = Class(name="A", documentation="The A.")
        content = render(make_generator(doc_comments=False), cls)
        assert "/**" not in content

    def test_package_visibility_and_final(self, make_generator) -> None:
        cls = Class(name="A", visibility=Visibility.PACKAGE, is_leaf=True)
        content = render(make_generator(doc_comments=False), cls)
        assert "final class A {" in content
        assert "    construct() {" in content

    def test_tab_indentation(self, make_generator) -> None:
        content = render(make_generator(use_tabs=True), Class(name="A"))
        assert "\n\tpublic construct() {\n\t}" in content

    def test_indent_size(self, make_generator) -> None:
        content = render(make_generator(indent_size=2), Class(name="A"))
        assert "\n  public construct() {" in content

    def test_crlf_line_endings(self, make_generator) -> None:
        content = render(make_generator(line_ending="\r\n"), Class(name="A"))
        assert "\r\n" in content
        assert "\n" not in content.replace("\r\n", "")


class TestOtherDeclarations:
    """Tests for enum, interface, enhancement and annotation writers."""

    def test_enumeration(self, make_generator) -> None:
        package = Package(name="P")
        enum = package.add(Enumeration(name="Color"))
        for name in ("RED", "GREEN", "BLUE"):
            enum.add(EnumerationLiteral(name=name))
        content = render(make_generator(), enum, package)
        assert content == "package P\n\nenum Color {\n    RED,\n    GREEN,\n    BLUE\n}"

    def test_interface(self, make_generator, make_op) -> None:
        base = Interface(name="Base")
        other = Interface(name="Other")
        shape = Interface(name="Shape")
        shape.add(make_op("area", return_type="double"))
        repository = InMemoryRepository(
            [
                Generalization(source=shape, target=base),
                Generalization(source=shape, target=other),
            ]
        )
        content = render(make_generator(repository, doc_comments=False), shape)
        assert content.endswith(
            "public interface Shape extends Base, Other {\n"
            "\n"
            "    public function area() : double\n"
            "\n"
            "}"
        )

    def test_enhancement(self, make_generator, memory_fs, make_op) -> None:
        package = Package(name="P")
        target = package.add(Class(name="Order"))
        enhancement = package.add(Class(name="OrderEnhancement", stereotype="Enhancement"))
        enhancement.add(make_op("describe", return_type="String"))
        repository = InMemoryRepository(
            [
                Generalization(source=enhancement, target=target),
                InterfaceRealization(source=enhancement, target=Interface(name="I")),
            ]
        )
        generator = make_generator(repository, doc_comments=False)
        result = generate_code(generator, package, OUT)

        assert OUT / "P" / "OrderEnhancement.gsx" in result.files
        content = memory_fs.read_text(OUT / "P" / "OrderEnhancement.gsx")
        assert "public enhancement OrderEnhancement : Order {" in content
        assert "construct()" not in content
        assert "implements" not in content
        assert "        return \"\"" in content

    def test_annotation_type(self, make_generator, make_op) -> None:
        annotation = AnnotationType(name="Marker")
        annotation.add(Attribute(name="level", type="int"))
        annotation.add(make_op("value", return_type="String", params=[("x", "int")]))
        other = Class(name="Other")
        repository = InMemoryRepository(
            [
                Association(
                    end1=AssociationEnd(reference=annotation),
                    end2=AssociationEnd(name="other", reference=other, navigable=True),
                )
            ]
        )
        content = render(make_generator(repository, doc_comments=False), annotation)
        assert "public annotation Marker {" in content
        assert "    public var _level : int" in content
        assert "    public function value() : String\n" in content
        assert "_other" not in content

    def test_annotation_stereotype_on_class(self, make_generator) -> None:
        cls = Class(name="Tag", stereotype="annotationType")
        content = render(make_generator(doc_comments=False), cls)
        assert "public annotation Tag {" in content

    def test_annotation_stubs_abstract_superclass_operations(
        self, make_generator, make_op
    ) -> None:
        base = Class(name="Base")
        base.add(make_op("check", return_type="boolean", is_abstract=True))
        annotation = AnnotationType(name="Marker")
        repository = InMemoryRepository([Generalization(source=annotation, target=base)])
        content = render(make_generator(repository, doc_comments=False), annotation)
        assert "    public function check() : boolean {" in content
        assert "        return false" in content


class TestGenerateEntryPoint:
    """Tests for the package-level generate function."""

    def test_generate_with_options(self, memory_fs, round_trip_model) -> None:
        package, repository = round_trip_model
        result = generate(
            package,
            OUT,
            options={"gosu.gen.useTab": True},
            repository=repository,
            filesystem=memory_fs,
        )
        assert isinstance(result, GenerationResult)
        assert result.success
        assert "\tpublic var _name : String" in memory_fs.read_text(OUT / "P" / "A.gs")

    def test_alias_language(self, memory_fs) -> None:
        result = generate(Class(name="A"), OUT, filesystem=memory_fs, language="gs")
        assert result.files == [OUT / "A.gs"]

    def test_factory_defaults(self) -> None:
        generator = create_gosu_generator({"indent_size": 3})
        assert generator.config.indent_string == "   "
        assert generator.config.doc_comments is True
        assert generator.file_extension == ".gs"

    def test_custom_extensions_and_uses(self, memory_fs) -> None:
        generator = GosuGenerator(
            {"source_extension": ".gosu", "uses": ["java.util.*", "gw.lang.*"]},
            None,
            memory_fs,
        )
        generate_code(generator, Class(name="A"), OUT)
        content = memory_fs.read_text(OUT / "A.gosu")
        assert content.startswith("\nuses java.util.*;\nuses gw.lang.*;\n\n")

    def test_invalid_extension_rejected(self) -> None:
        with pytest.raises(ValueError):
            GosuGenerator({"source_extension": "gs"})

    def test_generate_option_names(self, memory_fs) -> None:
        cls = Class(name="A", documentation="Doc")
        generate(
            cls,
            OUT,
            {"generateDocComments": False, "indentWidth": 2},
            filesystem=memory_fs,
        )
        content = memory_fs.read_text(OUT / "A.gs")
        assert "/**" not in content
        assert "\n  public construct() {" in content
