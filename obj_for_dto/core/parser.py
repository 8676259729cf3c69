"""
Property specification parser.

Turns a compact specification such as ``name,age:n,active:b?,tags:s[]``
into an ordered list of raw property tokens. Type codes are not resolved
here; see ``schema.resolve_type``.
"""

import re
from dataclasses import dataclass
from typing import List

from ..logging_config import get_logger
from .errors import (
    EmptySpecification,
    InvalidPropertyName,
    InvalidTypeCode,
    MalformedTypeSuffix,
    MissingSpecification,
)

logger = get_logger(__name__)

DEFAULT_TYPE_CODE = "s"
OPTIONAL_SUFFIX = "?"
ARRAY_SUFFIX = "[]"

SEPARATOR_PATTERN = re.compile(r"[\s,]+")
TOKEN_PATTERN = re.compile(r"(?P<name>[^:]+):(?P<type>.*)")
IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Characters that may only appear as suffixes, never inside a type code
_SUFFIX_CHARS = set("?[]")


@dataclass(frozen=True)
class PropertyToken:
    """One raw ``name[:type]`` entry of a specification string."""

    raw_name: str
    raw_type: str = DEFAULT_TYPE_CODE
    is_optional: bool = False
    is_array: bool = False


def split_specification(spec: str) -> List[str]:
    """Split a specification on commas and whitespace, dropping empty pieces."""
    return [piece for piece in SEPARATOR_PATTERN.split(spec.strip()) if piece]


def parse_token(token: str) -> PropertyToken:
    """
    Parse a single ``name`` or ``name:type`` token.

    The optional marker is stripped before the array marker, so ``code[]?``
    is an optional array. Any other arrangement of suffixes is rejected.

    Raises:
        InvalidPropertyName: name is not an identifier
        MalformedTypeSuffix: suffixes in the wrong order or repeated
    """
    match = TOKEN_PATTERN.fullmatch(token)
    if match:
        name = match.group("name")
        raw_type = match.group("type")
    else:
        name = token
        raw_type = DEFAULT_TYPE_CODE

    if not IDENTIFIER_PATTERN.match(name):
        raise InvalidPropertyName(token, name)

    code = raw_type
    is_optional = False
    if code.endswith(OPTIONAL_SUFFIX):
        code = code[: -len(OPTIONAL_SUFFIX)]
        is_optional = True

    is_array = False
    if code.endswith(ARRAY_SUFFIX):
        code = code[: -len(ARRAY_SUFFIX)]
        is_array = True

    if _SUFFIX_CHARS.intersection(code):
        raise MalformedTypeSuffix(token, raw_type)

    if code and not IDENTIFIER_PATTERN.match(code):
        raise InvalidTypeCode(token, code)

    return PropertyToken(
        raw_name=name,
        raw_type=code or DEFAULT_TYPE_CODE,
        is_optional=is_optional,
        is_array=is_array,
    )


def parse_specification(spec: str) -> List[PropertyToken]:
    """
    Parse a full specification string into tokens, in declaration order.

    Raises:
        MissingSpecification: spec is None or empty
        EmptySpecification: spec holds only separators
    """
    if not spec:
        raise MissingSpecification()

    pieces = split_specification(spec)
    if not pieces:
        raise EmptySpecification(spec)

    tokens = [parse_token(piece) for piece in pieces]
    logger.debug("Parsed %d property tokens from %r", len(tokens), spec)
    return tokens
