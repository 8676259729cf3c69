"""
Naming utilities for safe code generation.

Handles case conversions for class, variable and file names, and keyword
conflicts in the target languages.
"""

import re
from typing import Dict, Iterable, Optional, Set
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    KEBAB_CASE = "kebab"      # user-name


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Optional[Set[str]] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
        """
        self.reserved_words = reserved_words or set()
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(self, name: str, target_case: Optional[NamingCase] = None,
                      suffix_on_conflict: str = "_") -> str:
        """
        Sanitize a name for safe use in target language.

        Args:
            name: Identifier to sanitize
            target_case: Desired case style, None keeps the name as is
            suffix_on_conflict: Suffix added to reserved words

        Returns:
            Sanitized name safe for use
        """
        case_key = target_case.value if target_case else "keep"
        cache_key = f"{name}_{case_key}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        converted = self._convert_case(name, target_case) if target_case else name

        if converted in self.reserved_words:
            converted = f"{converted}{suffix_on_conflict}"

        self._name_cache[cache_key] = converted
        return converted

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words

    def extended(self, extra_words: Iterable[str]) -> "NameSanitizer":
        """New sanitizer with ``extra_words`` also reserved and an empty cache."""
        return NameSanitizer(self.reserved_words | set(extra_words))

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.SNAKE_CASE:
            return to_snake_case(name)
        elif target_case == NamingCase.CAMEL_CASE:
            return to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return to_pascal_case(name)
        elif target_case == NamingCase.KEBAB_CASE:
            return to_kebab_case(name)
        else:
            return name


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    name = name.replace('-', '_')

    # Insert underscore before uppercase letters
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)

    name = name.lower()
    name = re.sub(r'_+', '_', name)

    return name.strip('_')


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    parts = to_snake_case(name).split('_')

    if not parts:
        return name

    return parts[0].lower() + ''.join(part.capitalize() for part in parts[1:])


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    parts = to_snake_case(name).split('_')
    return ''.join(part.capitalize() for part in parts if part)


def to_kebab_case(name: str) -> str:
    """Convert to kebab-case."""
    return to_snake_case(name).replace('_', '-')


# Shorthands matching the usual schematic string helpers
def classify(name: str) -> str:
    """``employee-record`` -> ``EmployeeRecord``."""
    return to_pascal_case(re.sub(r'[^a-zA-Z0-9_-]', '_', name))


def dasherize(name: str) -> str:
    """``EmployeeRecord`` -> ``employee-record``."""
    return to_kebab_case(re.sub(r'[^a-zA-Z0-9_-]', '_', name))


def underscore(name: str) -> str:
    """``EmployeeRecord`` -> ``employee_record``."""
    return to_snake_case(re.sub(r'[^a-zA-Z0-9_-]', '_', name))
