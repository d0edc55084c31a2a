"""
Templated message construction.

Builds test messages from payload/header templates, template resources and
a variable store, then runs them through an ordered interceptor chain.
"""

from .builder import PayloadTemplateMessageBuilder
from .exceptions import (
    MessageBuildError,
    UnresolvedVariable,
    TemplateResourceUnreadable,
    MissingPayloadTemplate,
    HeaderTypeCoercionError,
    InterceptorTransformError,
    DefinitionValidationError,
)
from .message import Message, MessageHeaders, MessageType, DEFAULT_MESSAGE_TYPE
from .variables import VariableStore, VariableSubstitutor
from .loader import DefinitionLoader, load_definition, load_variables


__all__ = [
    "PayloadTemplateMessageBuilder",
    "MessageBuildError",
    "UnresolvedVariable",
    "TemplateResourceUnreadable",
    "MissingPayloadTemplate",
    "HeaderTypeCoercionError",
    "InterceptorTransformError",
    "DefinitionValidationError",
    "Message",
    "MessageHeaders",
    "MessageType",
    "DEFAULT_MESSAGE_TYPE",
    "VariableStore",
    "VariableSubstitutor",
    "DefinitionLoader",
    "load_definition",
    "load_variables",
]
