"""
Template source definitions.

Each templated field has exactly one source: inline text, a resource
locator, or nothing at all.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Literal:
    """Inline template text."""
    text: str


@dataclass(frozen=True)
class Resource:
    """
    Template text stored in an external resource.

    Attributes:
        locator: classpath: or filesystem locator
        encoding: Encoding override (None uses the loader default)
    """
    locator: str
    encoding: Optional[str] = None


@dataclass(frozen=True)
class Unset:
    """No source configured."""


UNSET = Unset()

Source = Union[Literal, Resource, Unset]


def describe(source: Source) -> str:
    """Short human-readable form of a source for log messages."""
    if isinstance(source, Resource):
        return f"resource {source.locator}"
    if isinstance(source, Literal):
        return f"literal ({len(source.text)} chars)"
    return "unset"
