"""
Core property model for DTO generation.

Resolves short type codes into property types and builds the immutable
Property descriptors that every generator works from.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

from ..logging_config import get_logger
from .errors import DuplicatePropertyName
from .parser import PropertyToken

logger = get_logger(__name__)


class PrimitiveKind(Enum):
    """Built-in property kinds."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


@dataclass(frozen=True)
class PrimitiveType:
    """A built-in type."""

    kind: PrimitiveKind

    def __str__(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class CustomType:
    """Another generated DTO type, decoded through its own factory."""

    type_name: str

    def __str__(self) -> str:
        return self.type_name


PropertyType = Union[PrimitiveType, CustomType]

STRING = PrimitiveType(PrimitiveKind.STRING)
NUMBER = PrimitiveType(PrimitiveKind.NUMBER)
BOOLEAN = PrimitiveType(PrimitiveKind.BOOLEAN)
DATE = PrimitiveType(PrimitiveKind.DATE)

SHORT_CODES: Dict[str, PrimitiveType] = {
    "": STRING,
    "s": STRING,
    "n": NUMBER,
    "b": BOOLEAN,
    "d": DATE,
}


def resolve_type(code: str, aliases: Optional[Dict[str, str]] = None) -> PropertyType:
    """
    Map a short type code to a property type.

    Built-in codes win over aliases. Anything else is a custom type named
    by the alias target, or by the code itself. Never fails.
    """
    if code in SHORT_CODES:
        return SHORT_CODES[code]
    if aliases and code in aliases:
        return CustomType(aliases[code])
    return CustomType(code)


@dataclass(frozen=True)
class Property:
    """A single resolved property of the generated DTO."""

    name: str
    type: PropertyType
    is_optional: bool = False
    is_array: bool = False

    @property
    def is_custom(self) -> bool:
        return isinstance(self.type, CustomType)

    @property
    def kind(self) -> Optional[PrimitiveKind]:
        """Primitive kind, or None for custom types."""
        if isinstance(self.type, PrimitiveType):
            return self.type.kind
        return None

    @property
    def type_name(self) -> str:
        return str(self.type)

    @property
    def is_date(self) -> bool:
        return self.kind == PrimitiveKind.DATE

    @property
    def needs_presence_guard(self) -> bool:
        """
        True where a truthiness check would reject valid values.

        Numbers and booleans have falsy valid values (0, False). Arrays of
        custom objects filter failed nested decodes with the same helper.
        """
        if self.kind in (PrimitiveKind.NUMBER, PrimitiveKind.BOOLEAN):
            return True
        return self.is_custom and self.is_array

    def describe(self) -> str:
        """Short human readable form, e.g. ``tags: string[]?``."""
        suffix = "[]" if self.is_array else ""
        if self.is_optional:
            suffix += "?"
        return f"{self.name}: {self.type_name}{suffix}"


def build_property(
    token: PropertyToken, aliases: Optional[Dict[str, str]] = None
) -> Property:
    """Build a Property from a parsed token."""
    return Property(
        name=token.raw_name,
        type=resolve_type(token.raw_type, aliases),
        is_optional=token.is_optional,
        is_array=token.is_array,
    )


def build_properties(
    tokens: List[PropertyToken],
    aliases: Optional[Dict[str, str]] = None,
    sort: bool = False,
) -> List[Property]:
    """
    Build the property list for one generation run.

    Args:
        tokens: Parsed tokens in declaration order
        aliases: Extra short-code to custom type name table
        sort: Order properties by name instead of declaration order

    Raises:
        DuplicatePropertyName: a name occurs twice
    """
    properties = []
    seen = set()

    for token in tokens:
        if token.raw_name in seen:
            raise DuplicatePropertyName(token.raw_name)
        seen.add(token.raw_name)

        prop = build_property(token, aliases)
        logger.debug("Resolved property %s", prop.describe())
        properties.append(prop)

    if sort:
        properties.sort(key=lambda p: p.name)

    return properties


def custom_type_names(properties: List[Property]) -> List[str]:
    """Custom type names in first-use order, without duplicates."""
    names = []
    for prop in properties:
        if prop.is_custom and prop.type_name not in names:
            names.append(prop.type_name)
    return names
