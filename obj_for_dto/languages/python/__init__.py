"""
Python code generator module.

Generates TypedDict shapes, a frozen dataclass with a validating factory and
a pytest module from a property specification.
"""

from .generator import PythonGenerator, create_python_generator
from .fragments import PythonFragmentBuilder
from .naming import PYTHON_RESERVED_WORDS, create_local_sanitizer, create_python_sanitizer

__all__ = [
    # Generator
    "PythonGenerator",
    "create_python_generator",
    "PythonFragmentBuilder",
    # Naming
    "PYTHON_RESERVED_WORDS",
    "create_local_sanitizer",
    "create_python_sanitizer",
]
