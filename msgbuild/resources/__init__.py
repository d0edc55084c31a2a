"""Template resource loading."""

from .loader import ResourceLoader, CLASSPATH_PREFIX, FILE_PREFIX

__all__ = ['ResourceLoader', 'CLASSPATH_PREFIX', 'FILE_PREFIX']
