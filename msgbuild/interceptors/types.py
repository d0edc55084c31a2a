"""
Interceptor interface definitions.

An interceptor declares which message types it applies to and rewrites a
constructed message.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional

from ..message import Message


class MessageConstructionInterceptor(ABC):
    """
    Base class for message construction interceptors.

    Attributes:
        message_types: Message types this interceptor applies to
            (empty means every type; matching ignores case)
    """

    def __init__(self, message_types: Iterable[str] = ()):
        self.message_types = frozenset(str(t).upper() for t in message_types)

    @property
    def name(self) -> str:
        return type(self).__name__

    def applies(self, message_type: str) -> bool:
        if not self.message_types:
            return True
        return str(message_type).upper() in self.message_types

    @abstractmethod
    def transform(self, message: Message, message_type: str, variables: Any) -> Message:
        """
        Rewrite the message.

        Args:
            message: Working message (may be modified in place)
            message_type: Requested message type
            variables: Variable store of the current build

        Returns:
            The message to hand to the next interceptor
        """

    def __repr__(self) -> str:
        types = sorted(self.message_types) or ['*']
        return f"{self.name}(message_types={types})"


class FunctionInterceptor(MessageConstructionInterceptor):
    """Adapts a plain callable to the interceptor interface."""

    def __init__(
        self,
        func: Callable[[Message, str, Any], Message],
        message_types: Iterable[str] = (),
        name: Optional[str] = None
    ):
        super().__init__(message_types)
        self.func = func
        self._name = name or getattr(func, '__name__', 'function')

    @property
    def name(self) -> str:
        return self._name

    def transform(self, message: Message, message_type: str, variables: Any) -> Message:
        return self.func(message, message_type, variables)
