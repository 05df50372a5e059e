"""
Naming helpers shared by the language generators.

Small, language-agnostic predicates and case conversions on identifiers.
"""


def is_all_uppercase(name: str) -> bool:
    """True when upper-casing the name leaves it unchanged (e.g. ``URL``)."""
    return name == name.upper()


def starts_with_uppercase(name: str) -> bool:
    """True when the first character is an uppercase letter."""
    return bool(name) and name[0].isupper()


def lower_first(name: str) -> str:
    """Lowercase the first character only: ``FooBar`` -> ``fooBar``."""
    if not name:
        return name
    return name[0].lower() + name[1:]
