"""Ordered interceptor chain applied after base message construction."""

import logging
from typing import Any, List, Tuple

from ..exceptions import InterceptorTransformError
from ..message import Message
from .types import MessageConstructionInterceptor


logger = logging.getLogger(__name__)


class InterceptorChain:
    """
    Append-only sequence of interceptors.

    Interceptors run in registration order. Errors raised by a transform
    propagate unchanged and abort the remaining interceptors.
    """

    def __init__(self):
        self._interceptors: List[MessageConstructionInterceptor] = []

    def add(self, interceptor: MessageConstructionInterceptor) -> 'InterceptorChain':
        self._interceptors.append(interceptor)
        logger.debug(f"Registered interceptor: {interceptor!r}")
        return self

    @property
    def interceptors(self) -> Tuple[MessageConstructionInterceptor, ...]:
        return tuple(self._interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)

    def apply(self, message: Message, message_type: str, variables: Any) -> Message:
        """
        Run every applicable interceptor over the message.

        Args:
            message: Base message
            message_type: Requested message type
            variables: Variable store of the current build

        Returns:
            Message returned by the last applicable interceptor, or the base
            message when none applies
        """
        for interceptor in self._interceptors:
            if not interceptor.applies(message_type):
                logger.debug(f"Skipping interceptor {interceptor.name} for type {message_type}")
                continue

            result = interceptor.transform(message, message_type, variables)
            if result is None:
                raise InterceptorTransformError(interceptor.name, "transform returned no message")

            logger.debug(f"Applied interceptor {interceptor.name} for type {message_type}")
            message = result

        return message
