"""Shared fixtures for umlgen tests."""

import json
from pathlib import Path

import pytest

from umlgen.core.filesystem import MemoryFileSystem
from umlgen.core.model import (
    Attribute,
    Class,
    Generalization,
    InMemoryRepository,
    Operation,
    Package,
    Parameter,
    ParameterDirection,
)
from umlgen.languages.gosu import GosuGenerator


def make_operation(name, return_type=None, params=(), **flags):
    """Operation with ``(name, type)`` parameters and an optional return type."""
    operation = Operation(name=name, **flags)
    for param_name, param_type in params:
        parameter = Parameter(name=param_name, type=param_type)
        parameter.parent = operation
        operation.parameters.append(parameter)
    if return_type is not None:
        result = Parameter(type=return_type, direction=ParameterDirection.RETURN)
        result.parent = operation
        operation.parameters.append(result)
    return operation


@pytest.fixture
def make_op():
    return make_operation


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture
def make_generator(memory_fs):
    """Factory for Gosu generators writing into ``memory_fs``."""

    def factory(repository=None, **options) -> GosuGenerator:
        return GosuGenerator(options or None, repository, memory_fs)

    return factory


@pytest.fixture
def round_trip_model():
    """Package P with abstract class A and class B extends A."""
    package = Package(name="P")
    a = package.add(Class(name="A"))
    a.add(Attribute(name="name", type="String"))
    a.add(make_operation("doIt", return_type="void", is_abstract=True))
    b = package.add(Class(name="B"))
    repository = InMemoryRepository([Generalization(source=b, target=a)])
    return package, repository


MODEL_DOCUMENT = {
    "name": "Model",
    "kind": "package",
    "author": "Jane",
    "elements": [
        {
            "id": "pkg",
            "kind": "package",
            "name": "shop",
            "elements": [
                {
                    "id": "Item",
                    "kind": "class",
                    "name": "Item",
                    "documentation": "A line item.",
                    "attributes": [
                        {"name": "Price", "type": "double"},
                        {"name": "tags", "type": "String", "multiplicity": "*"},
                    ],
                    "operations": [
                        {
                            "name": "total",
                            "parameters": [
                                {"name": "qty", "type": "int"},
                                {"type": "double", "direction": "return"},
                            ],
                        }
                    ],
                },
                {
                    "id": "Order",
                    "kind": "class",
                    "name": "Order",
                    "attributes": [{"name": "first", "type": {"$ref": "Item"}}],
                },
                {"id": "Priced", "kind": "interface", "name": "Priced"},
                {
                    "kind": "enumeration",
                    "name": "Status",
                    "literals": ["OPEN", {"name": "CLOSED"}],
                },
            ],
        }
    ],
    "relationships": [
        {"kind": "realization", "source": "Item", "target": "Priced"},
        {
            "kind": "association",
            "end1": {"reference": "Order", "navigable": False},
            "end2": {
                "reference": "Item",
                "name": "items",
                "navigable": True,
                "multiplicity": "0..*",
                "isOrdered": True,
            },
        },
    ],
}


@pytest.fixture
def model_document() -> dict:
    return json.loads(json.dumps(MODEL_DOCUMENT))


@pytest.fixture
def model_file(tmp_path: Path, model_document) -> Path:
    path = tmp_path / "model.json"
    path.write_text(json.dumps(model_document), encoding="utf-8")
    return path
