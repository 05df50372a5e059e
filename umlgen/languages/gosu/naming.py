"""
Gosu-specific naming conventions for generated members.

Fields are emitted as underscore-prefixed, lower-camel locals; a capitalized
model name additionally gets a property alias (``var _foo : T as Foo``).
All-uppercase names are treated as constants and kept verbatim, whatever
their length.
"""

from ...core.naming import is_all_uppercase, lower_first, starts_with_uppercase

FIELD_PREFIX = "_"


def field_name(name: str) -> str:
    """
    Local field name for a model attribute name.

    ``Foo`` -> ``_foo``, ``foo`` -> ``_foo``, ``_foo`` -> ``_foo``,
    ``URL`` -> ``URL``.
    """
    if is_all_uppercase(name):
        return name
    prefix = "" if name.startswith(FIELD_PREFIX) else FIELD_PREFIX
    return prefix + lower_first(name)


def property_alias(name: str) -> str | None:
    """
    Property name exposed with ``as``, or None when no alias is declared.

    Only capitalized names that were renamed by ``field_name`` get one.
    """
    if starts_with_uppercase(name) and not is_all_uppercase(name):
        return name
    return None
