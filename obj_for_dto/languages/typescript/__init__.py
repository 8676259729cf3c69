"""
TypeScript code generator module.

Generates interface, partial DTO type, validating class factory and Jest
spec skeleton from a property specification.
"""

from .generator import TypeScriptGenerator, create_typescript_generator
from .fragments import TypeScriptFragmentBuilder
from .naming import TYPESCRIPT_RESERVED_WORDS, create_typescript_sanitizer

__all__ = [
    # Generator
    "TypeScriptGenerator",
    "create_typescript_generator",
    "TypeScriptFragmentBuilder",
    # Naming
    "TYPESCRIPT_RESERVED_WORDS",
    "create_typescript_sanitizer",
]
