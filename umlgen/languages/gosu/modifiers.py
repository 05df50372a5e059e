"""
Visibility and modifier keywords for Gosu declarations.
"""

from typing import List, Optional

from ...core.model import Element, Visibility

VISIBILITY_TOKENS = {
    Visibility.PUBLIC: "public",
    Visibility.PROTECTED: "protected",
    Visibility.PRIVATE: "private",
}

ABSTRACT = "abstract"


def visibility_token(element: Element) -> Optional[str]:
    """Visibility keyword, or None for package visibility (keyword omitted)."""
    return VISIBILITY_TOKENS.get(element.visibility)


def modifier_list(element: Element) -> List[str]:
    """
    Modifiers in declaration order: visibility, static, abstract, final.
    """
    modifiers = []
    visibility = visibility_token(element)
    if visibility:
        modifiers.append(visibility)
    if element.is_static:
        modifiers.append("static")
    if element.is_abstract:
        modifiers.append(ABSTRACT)
    if element.is_leaf or element.is_final_specialization:
        modifiers.append("final")
    return modifiers


def classifier_modifiers(classifier) -> List[str]:
    """Modifiers of a class-like declaration.

    ``abstract`` is appended when any operation is abstract and the
    classifier is not already declared abstract.
    """
    modifiers = modifier_list(classifier)
    if ABSTRACT not in modifiers and any(
        op.is_abstract for op in classifier.operations
    ):
        modifiers.append(ABSTRACT)
    return modifiers


def method_modifiers(operation: Element, skip_body: bool) -> List[str]:
    """Modifiers of a method; a method with a stub body cannot be abstract."""
    modifiers = modifier_list(operation)
    if not skip_body:
        modifiers = [m for m in modifiers if m != ABSTRACT]
    return modifiers
