"""
Gosu type mapping for generated code.

Resolves the displayed type of attributes, parameters and association ends,
applies multiplicity, and picks default return values for method stubs.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from ...core.model import AssociationEnd, Element

COLLECTION_MULTIPLICITIES = frozenset({"0..*", "1..*", "*"})
FIXED_SIZE_PATTERN = re.compile(r"[0-9]+")

DEFAULT_RETURN_VALUES = {
    "boolean": "false",
    "int": "0",
    "long": "0",
    "short": "0",
    "byte": "0",
    "float": "0.0f",
    "double": "0.0d",
    "char": "'0'",
    "String": '""',
}


@dataclass
class GosuTypeConfig:
    """Configuration for Gosu type mapping behavior."""

    # Type used when nothing else is known
    void_type: str = "void"

    # Collection wrappers for multi-valued members
    ordered_collection: str = "List"
    unordered_collection: str = "Set"
    array_suffix: str = "[]"

    # Literal returned by stubs whose type has no entry in default_returns
    fallback_return: str = "null"
    default_returns: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_RETURN_VALUES)
    )


class GosuTypeMapper:
    """Maps typed model elements to Gosu type expressions."""

    def __init__(self, config: Optional[GosuTypeConfig] = None):
        """Initialize with type configuration."""
        self.config = config or GosuTypeConfig()

    def base_type_name(self, element: Element) -> str:
        """Type name before multiplicity is applied."""
        if isinstance(element, AssociationEnd):
            reference = element.reference
            if isinstance(reference, Element) and reference.name:
                return reference.name
            return self.config.void_type

        type_ref = getattr(element, "type", None)
        if isinstance(type_ref, Element) and type_ref.name:
            return type_ref.name
        if isinstance(type_ref, str) and type_ref:
            return type_ref
        return self.config.void_type

    def type_expression(self, element: Element) -> str:
        """
        Full type expression for an attribute, parameter or association end.

        ``0..*``, ``1..*`` and ``*`` wrap the type in List (ordered) or Set;
        a numeric multiplicity other than ``1`` makes it an array.
        """
        type_name = self.base_type_name(element)
        multiplicity = getattr(element, "multiplicity", "") or ""

        if multiplicity:
            if multiplicity.strip() in COLLECTION_MULTIPLICITIES:
                if getattr(element, "is_ordered", False):
                    collection = self.config.ordered_collection
                else:
                    collection = self.config.unordered_collection
                type_name = f"{collection}<{type_name}>"
            elif multiplicity != "1" and FIXED_SIZE_PATTERN.fullmatch(multiplicity):
                type_name += self.config.array_suffix

        return type_name

    def is_void(self, type_name: str) -> bool:
        return type_name == self.config.void_type

    def default_return_value(self, type_name: str) -> Optional[str]:
        """
        Literal returned by a stub body.

        Returns:
            The literal, or None for void (no return statement)
        """
        if self.is_void(type_name):
            return None
        return self.config.default_returns.get(type_name, self.config.fallback_return)
