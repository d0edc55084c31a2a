"""
Typed header coercion.

A string header value of the form {typename}:literal is converted to the
named scalar type. Values that do not match that form are left untouched;
values that match but do not parse raise HeaderTypeCoercionError.
"""

import logging
import math
import re
import struct
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from ..exceptions import HeaderTypeCoercionError


logger = logging.getLogger(__name__)


class HeaderType(str, Enum):
    """Type names accepted inside a header value tag."""
    STRING = "string"
    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"


INTEGER_PATTERN = re.compile(r'^[+-]?\d+$')
DECIMAL_PATTERN = re.compile(
    r'^[+-]?(NaN|Infinity|(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?)[fFdD]?$'
)


def _integer_parser(bits: int) -> Callable[[str], int]:
    low = -(1 << (bits - 1))
    high = (1 << (bits - 1)) - 1

    def parse(literal: str) -> int:
        if not INTEGER_PATTERN.match(literal):
            raise ValueError(f"not a decimal integer: {literal!r}")
        value = int(literal)
        if not low <= value <= high:
            raise ValueError(f"{value} outside {bits}-bit range [{low}, {high}]")
        return value

    return parse


def _parse_double(literal: str) -> float:
    if not DECIMAL_PATTERN.match(literal):
        raise ValueError(f"not a decimal number: {literal!r}")
    if literal[-1] in 'fFdD' and not literal.endswith('Infinity'):
        literal = literal[:-1]
    return float(literal)


def _parse_float(literal: str) -> float:
    value = _parse_double(literal)
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack('<f', struct.pack('<f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _parse_boolean(literal: str) -> bool:
    lowered = literal.lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    raise ValueError(f"not a boolean: {literal!r}")


PARSERS: Dict[HeaderType, Callable[[str], Any]] = {
    HeaderType.STRING: lambda literal: literal,
    HeaderType.BOOLEAN: lambda literal: _parse_boolean(literal.strip()),
    HeaderType.BYTE: lambda literal: _integer_parser(8)(literal.strip()),
    HeaderType.SHORT: lambda literal: _integer_parser(16)(literal.strip()),
    HeaderType.INT: lambda literal: _integer_parser(32)(literal.strip()),
    HeaderType.INTEGER: lambda literal: _integer_parser(32)(literal.strip()),
    HeaderType.LONG: lambda literal: _integer_parser(64)(literal.strip()),
    HeaderType.FLOAT: lambda literal: _parse_float(literal.strip()),
    HeaderType.DOUBLE: lambda literal: _parse_double(literal.strip()),
}

# Only known type names form a tag; anything else stays a plain string
TAG_PATTERN = re.compile(
    r'^\{(' + '|'.join(t.value for t in HeaderType) + r')\}:(.*)$',
    re.DOTALL
)


def parse_tag(value: Any) -> Optional[Tuple[HeaderType, str]]:
    """
    Split a tagged header value into its type and literal.

    Returns:
        (HeaderType, literal) or None if value is not a tagged string
    """
    if not isinstance(value, str):
        return None
    match = TAG_PATTERN.match(value)
    if not match:
        return None
    return HeaderType(match.group(1)), match.group(2)


def coerce_header(name: str, value: Any) -> Any:
    """
    Convert a raw header value to its declared type.

    Args:
        name: Header name, used in error reports
        value: Raw header value (already substituted)

    Returns:
        The typed value, or value unchanged when it carries no tag

    Raises:
        HeaderTypeCoercionError: If the tagged literal does not parse
    """
    tag = parse_tag(value)
    if tag is None:
        return value

    header_type, literal = tag
    try:
        result = PARSERS[header_type](literal)
    except ValueError as e:
        raise HeaderTypeCoercionError(name, header_type.value, literal) from e

    logger.debug(f"Coerced header {name} to {header_type.value}: {result!r}")
    return result
