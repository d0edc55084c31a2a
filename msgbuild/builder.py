"""
Payload template message builder.

Composes template resolution, header coercion and the interceptor chain
into a single build() call.
"""

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .headers.coercion import coerce_header
from .interceptors.chain import InterceptorChain
from .interceptors.types import MessageConstructionInterceptor
from .message import DEFAULT_MESSAGE_TYPE, Message
from .resources.loader import ResourceLoader
from .templates.resolver import TemplateResolver
from .templates.source import UNSET, Literal, Resource, Source
from .variables.substitution import VariableSubstitutor


logger = logging.getLogger(__name__)


class PayloadTemplateMessageBuilder:
    """
    Builds messages from payload/header templates and a variable store.

    Configuration is done once through the fluent setters; build() may then
    be called any number of times, from any number of threads, against a
    changing variable store.
    """

    def __init__(
        self,
        loader: Optional[ResourceLoader] = None,
        substitutor: Optional[VariableSubstitutor] = None
    ):
        self.substitutor = substitutor or VariableSubstitutor()
        self.resolver = TemplateResolver(loader, self.substitutor)
        self._payload: Source = UNSET
        self._headers: Dict[str, Any] = {}
        self._header_data: List[Source] = []
        self._chain = InterceptorChain()

    # Payload

    def set_payload_data(self, text: str) -> 'PayloadTemplateMessageBuilder':
        self._payload = Literal(text)
        return self

    def set_payload_resource(
        self,
        locator: str,
        encoding: Optional[str] = None
    ) -> 'PayloadTemplateMessageBuilder':
        self._payload = Resource(locator, encoding)
        return self

    # Headers

    def set_headers(self, headers: Mapping[str, Any]) -> 'PayloadTemplateMessageBuilder':
        """Replace all configured header entries."""
        self._headers = dict(headers)
        return self

    def add_header(self, name: str, value: Any) -> 'PayloadTemplateMessageBuilder':
        self._headers[name] = value
        return self

    def add_header_data(self, text: str) -> 'PayloadTemplateMessageBuilder':
        self._header_data.append(Literal(text))
        return self

    def add_header_resource(
        self,
        locator: str,
        encoding: Optional[str] = None
    ) -> 'PayloadTemplateMessageBuilder':
        self._header_data.append(Resource(locator, encoding))
        return self

    # Interceptors

    def add(self, interceptor: MessageConstructionInterceptor) -> 'PayloadTemplateMessageBuilder':
        self._chain.add(interceptor)
        return self

    @property
    def payload_source(self) -> Source:
        return self._payload

    @property
    def headers(self) -> Dict[str, Any]:
        return dict(self._headers)

    @property
    def header_data_sources(self) -> Tuple[Source, ...]:
        return tuple(self._header_data)

    @property
    def interceptors(self) -> Tuple[MessageConstructionInterceptor, ...]:
        return self._chain.interceptors

    def build(self, variables: Any, message_type: str = DEFAULT_MESSAGE_TYPE) -> Message:
        """
        Build a message.

        Args:
            variables: Variable store (or mapping) used for substitution
            message_type: Message type handed to the interceptor chain

        Returns:
            The constructed message after interception

        Raises:
            MessageBuildError: If any step fails; no message is produced
        """
        payload = self.resolver.resolve_payload(self._payload, variables)
        message = Message(payload=payload)

        for block in self.resolver.resolve_header_data(self._header_data, variables):
            message.add_header_data(block)

        for name, value in self._headers.items():
            if isinstance(value, str):
                value = self.substitutor.substitute(value, variables)
            else:
                # Interceptors may mutate header values in place
                value = copy.deepcopy(value)
            message.set_header(name, coerce_header(name, value))

        logger.debug(
            f"Built base message: {len(message.headers)} headers, "
            f"{len(message.header_data)} header data blocks"
        )
        return self._chain.apply(message, message_type, variables)
