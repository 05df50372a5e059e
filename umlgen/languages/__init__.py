"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .gosu import GosuGenerator, create_gosu_generator

__all__ = ["GosuGenerator", "create_gosu_generator"]
