"""
Load a design model from a JSON document.

Converts a JSON description of packages, classifiers and relationships into
the internal model representation plus a repository that answers
relationship queries.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .model import (
    AnnotationType,
    Association,
    AssociationEnd,
    Attribute,
    Class,
    Classifier,
    Element,
    Enumeration,
    EnumerationLiteral,
    Generalization,
    InMemoryRepository,
    Interface,
    InterfaceRealization,
    Operation,
    Package,
    Parameter,
    ParameterDirection,
    Visibility,
    iter_elements,
)
from ..logging_config import get_logger

logger = get_logger(__name__)

ELEMENT_TYPES = {
    "package": Package,
    "model": Package,
    "class": Class,
    "interface": Interface,
    "enumeration": Enumeration,
    "enum": Enumeration,
    "annotationType": AnnotationType,
    "annotation": AnnotationType,
}

RELATIONSHIP_TYPES = {
    "generalization": Generalization,
    "realization": InterfaceRealization,
    "interfaceRealization": InterfaceRealization,
}

# JSON key -> Element attribute shared by every element
ELEMENT_FLAGS = {
    "isStatic": "is_static",
    "isAbstract": "is_abstract",
    "isLeaf": "is_leaf",
    "isFinalSpecialization": "is_final_specialization",
    "isReadOnly": "is_read_only",
}


class ModelLoadError(Exception):
    """Exception raised when a model document cannot be loaded."""

    pass


@dataclass
class LoadedModel:
    """A loaded model: its root element, relationships and project author."""

    root: Element
    repository: InMemoryRepository
    author: Optional[str] = None
    ids: Dict[str, Element] = field(default_factory=dict, repr=False)

    def find(self, reference: str) -> Optional[Element]:
        """Find an element by id, qualified name or unique simple name."""
        return _ReferenceIndex(self.root, self.ids).lookup(reference)


class _ReferenceIndex:
    """Resolves string references to elements."""

    def __init__(self, root: Element, ids: Dict[str, Element]):
        self.ids = ids
        self.qualified: Dict[str, Element] = {}
        self.simple: Dict[str, List[Element]] = {}
        for element in iter_elements(root):
            qualified_name = ".".join(
                [a.name for a in reversed(element.ancestors())] + [element.name]
            )
            self.qualified.setdefault(qualified_name, element)
            self.simple.setdefault(element.name, []).append(element)

    def lookup(self, reference: str) -> Optional[Element]:
        if reference in self.ids:
            return self.ids[reference]
        if reference in self.qualified:
            return self.qualified[reference]
        candidates = self.simple.get(reference, [])
        if len(candidates) == 1:
            return candidates[0]
        return None

    def resolve(self, reference: str, context: str) -> Element:
        element = self.lookup(reference)
        if element is None:
            raise ModelLoadError(f"Unresolved reference '{reference}' in {context}")
        return element


class ModelBuilder:
    """Builds model objects from a parsed JSON document."""

    def __init__(self):
        self._ids: Dict[str, Element] = {}
        # Typed elements whose type is a {"$ref": ...} to resolve later
        self._pending_types: List[tuple] = []

    def build(self, document: Dict[str, Any]) -> LoadedModel:
        if not isinstance(document, dict):
            raise ModelLoadError("Model document must be a JSON object")

        root = self._build_element(document, parent=None)
        index = _ReferenceIndex(root, self._ids)

        for element, reference in self._pending_types:
            element.type = index.resolve(reference, f"type of '{element.name}'")

        repository = InMemoryRepository()
        for data in document.get("relationships", []):
            repository.add(self._build_relationship(data, index))

        author = document.get("author") or None
        logger.debug(
            "Loaded model '%s' with %d relationships",
            root.name,
            len(repository.relationships),
        )
        return LoadedModel(
            root=root, repository=repository, author=author, ids=dict(self._ids)
        )

    def _build_element(self, data: Dict[str, Any], parent: Optional[Element]) -> Element:
        kind = data.get("kind", "package" if parent is None else "class")
        element_type = ELEMENT_TYPES.get(kind, Element)
        element = element_type()
        self._apply_common(element, data)
        element.parent = parent
        self._register(element, data)

        if isinstance(element, Classifier):
            element.stereotype = data.get("stereotype") or None
            for item in data.get("attributes", []):
                element.attributes.append(self._build_attribute(item, element))
            for item in data.get("operations", []):
                element.operations.append(self._build_operation(item, element))
        if isinstance(element, Enumeration):
            for item in data.get("literals", []):
                literal = EnumerationLiteral()
                if isinstance(item, str):
                    literal.name = item
                else:
                    self._apply_common(literal, item)
                literal.parent = element
                element.literals.append(literal)

        if isinstance(element, (Package, Classifier)):
            for item in data.get("elements", []):
                element.owned_elements.append(self._build_element(item, element))

        return element

    def _apply_common(self, element: Element, data: Dict[str, Any]):
        element.name = data.get("name", "") or ""
        element.documentation = data.get("documentation", "") or ""
        visibility = data.get("visibility", "public")
        try:
            element.visibility = Visibility(visibility)
        except ValueError:
            raise ModelLoadError(
                f"Invalid visibility '{visibility}' on '{element.name}'"
            )
        for key, attribute in ELEMENT_FLAGS.items():
            setattr(element, attribute, bool(data.get(key, False)))

    def _apply_typed(self, element: Element, data: Dict[str, Any]):
        type_ref = data.get("type")
        if isinstance(type_ref, dict):
            if "$ref" not in type_ref:
                raise ModelLoadError(f"Type of '{element.name}' must use '$ref'")
            self._pending_types.append((element, type_ref["$ref"]))
        else:
            element.type = type_ref
        element.multiplicity = str(data.get("multiplicity", "") or "")
        element.is_ordered = bool(data.get("isOrdered", False))
        element.default_value = str(data.get("defaultValue", "") or "")

    def _build_attribute(self, data: Dict[str, Any], owner: Element) -> Attribute:
        attribute = Attribute()
        self._apply_common(attribute, data)
        self._apply_typed(attribute, data)
        attribute.parent = owner
        return attribute

    def _build_operation(self, data: Dict[str, Any], owner: Element) -> Operation:
        operation = Operation()
        self._apply_common(operation, data)
        operation.parent = owner
        for item in data.get("parameters", []):
            parameter = Parameter()
            self._apply_common(parameter, item)
            self._apply_typed(parameter, item)
            direction = item.get("direction", "in")
            try:
                parameter.direction = ParameterDirection(direction)
            except ValueError:
                raise ModelLoadError(
                    f"Invalid direction '{direction}' on parameter '{parameter.name}'"
                )
            parameter.parent = operation
            operation.parameters.append(parameter)
        return operation

    def _register(self, element: Element, data: Dict[str, Any]):
        element_id = data.get("id")
        if element_id is None:
            return
        if element_id in self._ids:
            raise ModelLoadError(f"Duplicate element id '{element_id}'")
        self._ids[element_id] = element

    def _build_relationship(self, data: Dict[str, Any], index: _ReferenceIndex):
        kind = data.get("kind")
        if kind == "association":
            return Association(
                name=data.get("name", ""),
                end1=self._build_end(data.get("end1", {}), index),
                end2=self._build_end(data.get("end2", {}), index),
            )

        relationship_type = RELATIONSHIP_TYPES.get(kind)
        if relationship_type is None:
            raise ModelLoadError(f"Unknown relationship kind '{kind}'")
        try:
            source, target = data["source"], data["target"]
        except KeyError as e:
            raise ModelLoadError(f"{kind} is missing {e}")
        return relationship_type(
            name=data.get("name", ""),
            source=index.resolve(source, kind),
            target=index.resolve(target, kind),
        )

    def _build_end(self, data: Dict[str, Any], index: _ReferenceIndex) -> AssociationEnd:
        end = AssociationEnd()
        self._apply_common(end, data)
        if "reference" not in data:
            raise ModelLoadError("Association end is missing 'reference'")
        end.reference = index.resolve(data["reference"], "association end")
        end.navigable = bool(data.get("navigable", False))
        end.multiplicity = str(data.get("multiplicity", "") or "")
        end.is_ordered = bool(data.get("isOrdered", False))
        end.default_value = str(data.get("defaultValue", "") or "")
        return end


def build_model(document: Dict[str, Any]) -> LoadedModel:
    """Build a model from an already parsed JSON document."""
    return ModelBuilder().build(document)


def load_model(path: Union[str, Path]) -> LoadedModel:
    """
    Load a model from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ModelLoadError: If the file is not a valid model document
    """
    path = Path(path)
    logger.debug("Loading model from %s", path)

    if not path.exists():
        raise FileNotFoundError(f"Model file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ModelLoadError(f"Invalid JSON in model file {path}: {e}") from e
    except OSError as e:
        raise ModelLoadError(f"Error reading model file {path}: {e}") from e

    return build_model(document)
