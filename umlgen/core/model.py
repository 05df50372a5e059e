"""
Design model representation for code generation.

Defines the read-only object model the generators walk: packages,
classifiers, typed members, operations and the relationships between them.
Relationships are not traversed as object pointers; generators ask a
ModelRepository for the relationships incident to an element.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Iterable, List, Optional, Union


class Visibility(Enum):
    """Visibility of a model element."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    PACKAGE = "package"


class ElementKind(Enum):
    """Closed set of element kinds the generators dispatch on."""

    PACKAGE = "package"
    CLASS = "class"
    INTERFACE = "interface"
    ENUMERATION = "enumeration"
    ANNOTATION_TYPE = "annotationType"
    OTHER = "other"


class ParameterDirection(Enum):
    """Direction of an operation parameter."""

    IN = "in"
    OUT = "out"
    INOUT = "inout"
    RETURN = "return"


@dataclass(eq=False)
class Element:
    """Base class for every named model element.

    Elements compare by identity. ``parent`` is a back-reference used only to
    compute package paths; the parent owns the child, never the reverse.
    """

    kind: ClassVar[ElementKind] = ElementKind.OTHER

    name: str = ""
    documentation: str = ""
    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    is_abstract: bool = False
    is_leaf: bool = False
    is_final_specialization: bool = False
    is_read_only: bool = False
    parent: Optional["Element"] = field(default=None, repr=False, compare=False)

    def ancestors(self) -> List["Element"]:
        """Return the chain of parents, nearest first."""
        chain = []
        current = self.parent
        while current is not None:
            chain.append(current)
            current = current.parent
        return chain


TypeReference = Union[Element, str, None]


@dataclass(eq=False)
class Attribute(Element):
    """Typed field of a classifier."""

    type: TypeReference = None
    multiplicity: str = ""
    is_ordered: bool = False
    default_value: str = ""


@dataclass(eq=False)
class Parameter(Element):
    """Operation parameter; the return value is a parameter too."""

    type: TypeReference = None
    multiplicity: str = ""
    is_ordered: bool = False
    default_value: str = ""
    direction: ParameterDirection = ParameterDirection.IN


@dataclass(eq=False)
class Operation(Element):
    """Method of a classifier."""

    parameters: List[Parameter] = field(default_factory=list)

    def non_return_parameters(self) -> List[Parameter]:
        return [
            p for p in self.parameters if p.direction != ParameterDirection.RETURN
        ]

    def return_parameter(self) -> Optional[Parameter]:
        for param in self.parameters:
            if param.direction == ParameterDirection.RETURN:
                return param
        return None


@dataclass(eq=False)
class EnumerationLiteral(Element):
    """Single literal of an enumeration."""


@dataclass(eq=False)
class Package(Element):
    """Namespace owning an ordered list of child elements."""

    kind: ClassVar[ElementKind] = ElementKind.PACKAGE

    owned_elements: List[Element] = field(default_factory=list)

    def add(self, child: Element) -> Element:
        """Append a child element and link it back to this package."""
        child.parent = self
        self.owned_elements.append(child)
        return child


@dataclass(eq=False)
class Classifier(Element):
    """Named type declaration owning members, operations and nested types."""

    attributes: List[Attribute] = field(default_factory=list)
    operations: List[Operation] = field(default_factory=list)
    owned_elements: List[Element] = field(default_factory=list)
    stereotype: Optional[str] = None

    def add(self, child: Element) -> Element:
        """Attach a member, operation or nested element to this classifier."""
        child.parent = self
        if isinstance(child, Attribute):
            self.attributes.append(child)
        elif isinstance(child, Operation):
            self.operations.append(child)
        else:
            self.owned_elements.append(child)
        return child


@dataclass(eq=False)
class Class(Classifier):
    kind: ClassVar[ElementKind] = ElementKind.CLASS


@dataclass(eq=False)
class Interface(Classifier):
    kind: ClassVar[ElementKind] = ElementKind.INTERFACE


@dataclass(eq=False)
class Enumeration(Classifier):
    kind: ClassVar[ElementKind] = ElementKind.ENUMERATION

    literals: List[EnumerationLiteral] = field(default_factory=list)

    def add(self, child: Element) -> Element:
        if isinstance(child, EnumerationLiteral):
            child.parent = self
            self.literals.append(child)
            return child
        return super().add(child)


@dataclass(eq=False)
class AnnotationType(Classifier):
    kind: ClassVar[ElementKind] = ElementKind.ANNOTATION_TYPE


# Relationships


@dataclass(eq=False)
class Relationship:
    """Base class for relationships stored in a repository."""

    name: str = ""

    def involves(self, element: Element) -> bool:
        return False


@dataclass(eq=False)
class DirectedRelationship(Relationship):
    source: Optional[Element] = None
    target: Optional[Element] = None

    def involves(self, element: Element) -> bool:
        return self.source is element or self.target is element


@dataclass(eq=False)
class Generalization(DirectedRelationship):
    """``source`` extends ``target``."""


@dataclass(eq=False)
class InterfaceRealization(DirectedRelationship):
    """``source`` implements ``target``."""


@dataclass(eq=False)
class AssociationEnd(Element):
    """One end of an association, shaped like an attribute."""

    reference: Optional[Element] = None
    navigable: bool = False
    multiplicity: str = ""
    is_ordered: bool = False
    default_value: str = ""


@dataclass(eq=False)
class Association(Relationship):
    end1: AssociationEnd = field(default_factory=AssociationEnd)
    end2: AssociationEnd = field(default_factory=AssociationEnd)

    def involves(self, element: Element) -> bool:
        return self.end1.reference is element or self.end2.reference is element


RelationshipPredicate = Callable[[Relationship], bool]


class ModelRepository(ABC):
    """Read-only query interface over the relationships of a model."""

    @abstractmethod
    def get_relationships_of(
        self, element: Element, predicate: Optional[RelationshipPredicate] = None
    ) -> List[Relationship]:
        """
        Get relationships incident to an element.

        Args:
            element: Element the relationships must involve
            predicate: Optional filter applied to each relationship

        Returns:
            Matching relationships in repository order
        """
        pass


class InMemoryRepository(ModelRepository):
    """Repository backed by an ordered list of relationships."""

    def __init__(self, relationships: Optional[Iterable[Relationship]] = None):
        self._relationships: List[Relationship] = list(relationships or [])

    def add(self, relationship: Relationship) -> Relationship:
        self._relationships.append(relationship)
        return relationship

    @property
    def relationships(self) -> List[Relationship]:
        return list(self._relationships)

    def get_relationships_of(
        self, element: Element, predicate: Optional[RelationshipPredicate] = None
    ) -> List[Relationship]:
        return [
            rel
            for rel in self._relationships
            if rel.involves(element) and (predicate is None or predicate(rel))
        ]


# Relationship queries


def get_super_classes(repository: ModelRepository, element: Element) -> List[Element]:
    """Targets of generalizations whose source is ``element``."""
    generalizations = repository.get_relationships_of(
        element,
        lambda rel: isinstance(rel, Generalization) and rel.source is element,
    )
    return [rel.target for rel in generalizations]


def get_super_interfaces(
    repository: ModelRepository, element: Element
) -> List[Element]:
    """Targets of interface realizations whose source is ``element``."""
    realizations = repository.get_relationships_of(
        element,
        lambda rel: isinstance(rel, InterfaceRealization) and rel.source is element,
    )
    return [rel.target for rel in realizations]


def get_associations(repository: ModelRepository, element: Element) -> List[Association]:
    return repository.get_relationships_of(
        element, lambda rel: isinstance(rel, Association)
    )


def package_path(element: Element, root: Optional[Element]) -> List[str]:
    """
    Names of the enclosing elements of ``element`` up to ``root``.

    The walk starts at the parent of ``element`` and stops after ``root``;
    it never goes beyond it.

    Returns:
        Names ordered outermost first (empty when ``element`` is ``root``)
    """
    if element is root:
        return []

    names = []
    current = element.parent
    while current is not None:
        names.insert(0, current.name)
        if current is root:
            break
        current = current.parent
    return names


def iter_elements(root: Element) -> Iterable[Element]:
    """Depth-first walk over ``root`` and every owned element."""
    yield root
    for child in getattr(root, "owned_elements", []):
        yield from iter_elements(child)
