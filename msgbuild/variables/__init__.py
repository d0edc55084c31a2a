"""
Variable module.
Implements the variable store and ${name} substitution.
"""

from .store import VariableStore
from .substitution import VariableSubstitutor

__all__ = ['VariableStore', 'VariableSubstitutor']
