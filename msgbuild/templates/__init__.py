"""Template sources and their resolution."""

from .source import Literal, Resource, Unset, UNSET, Source
from .resolver import TemplateResolver

__all__ = ['Literal', 'Resource', 'Unset', 'UNSET', 'Source', 'TemplateResolver']
