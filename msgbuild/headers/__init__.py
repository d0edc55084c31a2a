"""Header value handling."""

from .coercion import HeaderType, coerce_header, parse_tag

__all__ = ['HeaderType', 'coerce_header', 'parse_tag']
