"""
TypeScript-specific naming utilities and sanitization.

Handles TypeScript reserved words and the identifiers the generated factory
and spec files declare themselves.
"""

from ...core.naming import NameSanitizer


# Reserved words that cannot name a variable or parameter
TYPESCRIPT_RESERVED_WORDS = {
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "new",
    "null",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
    # Strict mode
    "implements",
    "interface",
    "let",
    "package",
    "private",
    "protected",
    "public",
    "static",
    "yield",
}

# Names the generated code binds itself
GENERATED_NAMES = {
    "json",
    "hasValue",
    "undefined",
    # Jest globals used by the spec file
    "describe",
    "it",
    "expect",
    "v4",
    "getRandomInt",
    "getRandomBoolean",
    "getRandomDate",
}


def create_typescript_sanitizer() -> NameSanitizer:
    """Create sanitizer for local variable names in generated TypeScript."""
    return NameSanitizer(TYPESCRIPT_RESERVED_WORDS | GENERATED_NAMES)


def is_reserved_word(name: str) -> bool:
    """True when ``name`` cannot be used as a constructor parameter."""
    return name in TYPESCRIPT_RESERVED_WORDS


__all__ = [
    "TYPESCRIPT_RESERVED_WORDS",
    "GENERATED_NAMES",
    "create_typescript_sanitizer",
    "is_reserved_word",
]
