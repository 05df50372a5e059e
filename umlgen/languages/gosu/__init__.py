"""
Gosu code generator module.

Generates Gosu classes, interfaces, enums, annotation types and
enhancements from a design model.
"""

from .generator import GosuGenerator, create_gosu_generator
from .config import (
    ANNOTATION_TYPE_STEREOTYPE,
    ENHANCEMENT_STEREOTYPE,
    GOSU_PREFERENCES,
    GosuConfig,
)
from .modifiers import modifier_list, visibility_token
from .naming import field_name, property_alias
from .types import GosuTypeConfig, GosuTypeMapper

__all__ = [
    "GosuGenerator",
    "GosuConfig",
    "GosuTypeConfig",
    "GosuTypeMapper",
    "GOSU_PREFERENCES",
    "ANNOTATION_TYPE_STEREOTYPE",
    "ENHANCEMENT_STEREOTYPE",
    "create_gosu_generator",
    "modifier_list",
    "visibility_token",
    "field_name",
    "property_alias",
]
