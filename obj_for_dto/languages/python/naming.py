"""
Python-specific naming utilities and sanitization.

Handles Python reserved words and the builtins and module level names the
generated code relies on.
"""

from ...core.naming import NameSanitizer


# Python reserved keywords
PYTHON_RESERVED_WORDS = {
    "False",
    "None",
    "True",
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
}

# Builtins called from generated function bodies
PYTHON_BUILTIN_NAMES = {
    "bool",
    "dict",
    "float",
    "int",
    "isinstance",
    "len",
    "list",
    "map",
    "str",
}

# Names the generated modules bind themselves
GENERATED_NAMES = {
    "cls",
    "data",
    "item",
    "has_value",
    "math",
    "random",
    "datetime",
    "timezone",
    "uuid4",
}


def create_python_sanitizer() -> NameSanitizer:
    """Sanitizer for dataclass field names: only keywords are renamed."""
    return NameSanitizer(PYTHON_RESERVED_WORDS)


def create_local_sanitizer() -> NameSanitizer:
    """Sanitizer for local variables inside generated functions."""
    return NameSanitizer(PYTHON_RESERVED_WORDS | PYTHON_BUILTIN_NAMES | GENERATED_NAMES)

