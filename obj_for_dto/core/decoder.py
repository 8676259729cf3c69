"""
Language neutral decoding rules.

For every property the guard and the extraction strategy depend only on
(type, optional, array). Language generators render a DecodePlan into
source text; they never re-derive these decisions.

Failure policy of the generated code:
    * required guards are ANDed and checked before any extraction
    * dates and primitive arrays are all-or-nothing
    * a required custom object that fails to decode fails the whole decode,
      an optional one becomes null
    * arrays of custom objects silently drop elements that fail to decode
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .schema import PrimitiveKind, Property


class GuardKind(Enum):
    """Top-level presence/validity check for a required property."""

    NONE = "none"
    TRUTHY = "truthy"
    IS_DEFINED = "is_defined"
    IS_ARRAY = "is_array"


class ExtractionKind(Enum):
    """How a property value is taken out of the raw JSON."""

    RAW = "raw"
    STRING_OR_NULL = "string_or_null"
    DEFINED_OR_NULL = "defined_or_null"
    DATE = "date"
    PRIMITIVE_ARRAY = "primitive_array"
    DATE_ARRAY = "date_array"
    CUSTOM = "custom"
    CUSTOM_ARRAY = "custom_array"


class ElementCheck(Enum):
    """Validity predicate applied to primitive array elements."""

    FINITE = "finite"
    PRESENT = "present"


@dataclass(frozen=True)
class DecodePlan:
    """Everything a renderer needs to know to decode one property."""

    guard: GuardKind
    extraction: ExtractionKind
    element_check: Optional[ElementCheck] = None

    @property
    def has_block(self) -> bool:
        """True when extraction needs statements before the constructor call."""
        return self.extraction not in (
            ExtractionKind.RAW,
            ExtractionKind.STRING_OR_NULL,
            ExtractionKind.DEFINED_OR_NULL,
        )


def guard_for(prop: Property) -> GuardKind:
    """Pick the guard for a property. Optional properties are never guarded."""
    if prop.is_optional:
        return GuardKind.NONE

    if prop.is_array:
        return GuardKind.IS_ARRAY

    if prop.is_custom:
        return GuardKind.NONE

    kind = prop.kind
    if kind == PrimitiveKind.STRING:
        return GuardKind.TRUTHY
    elif kind in (PrimitiveKind.NUMBER, PrimitiveKind.BOOLEAN):
        return GuardKind.IS_DEFINED
    elif kind == PrimitiveKind.DATE:
        return GuardKind.NONE

    raise ValueError(f"Unhandled property type: {prop.type!r}")


def extraction_for(prop: Property) -> ExtractionKind:
    """Pick the extraction strategy for a property."""
    if prop.is_custom:
        return ExtractionKind.CUSTOM_ARRAY if prop.is_array else ExtractionKind.CUSTOM

    kind = prop.kind
    if kind == PrimitiveKind.DATE:
        return ExtractionKind.DATE_ARRAY if prop.is_array else ExtractionKind.DATE

    if prop.is_array:
        return ExtractionKind.PRIMITIVE_ARRAY

    if not prop.is_optional:
        return ExtractionKind.RAW
    if kind == PrimitiveKind.STRING:
        return ExtractionKind.STRING_OR_NULL
    elif kind in (PrimitiveKind.NUMBER, PrimitiveKind.BOOLEAN):
        return ExtractionKind.DEFINED_OR_NULL

    raise ValueError(f"Unhandled property type: {prop.type!r}")


def element_check_for(prop: Property) -> Optional[ElementCheck]:
    """Element predicate for arrays of strings, numbers and booleans."""
    if not prop.is_array or prop.is_custom or prop.is_date:
        return None
    if prop.kind == PrimitiveKind.NUMBER:
        return ElementCheck.FINITE
    return ElementCheck.PRESENT


def plan_decode(prop: Property) -> DecodePlan:
    """Build the decode plan for a property."""
    return DecodePlan(
        guard=guard_for(prop),
        extraction=extraction_for(prop),
        element_check=element_check_for(prop),
    )


def needs_presence_helper(plan: DecodePlan) -> bool:
    """True when rendered code for this property calls the presence helper."""
    return (
        plan.guard == GuardKind.IS_DEFINED
        or plan.extraction
        in (ExtractionKind.DEFINED_OR_NULL, ExtractionKind.CUSTOM_ARRAY)
        or plan.element_check == ElementCheck.PRESENT
    )
