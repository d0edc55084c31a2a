"""
Built-in message construction interceptors.

- HeaderInterceptor: sets (typed) headers
- JsonPathInterceptor: overwrites values inside a JSON payload
- PayloadReplaceInterceptor: plain text replacement in the payload
"""

import json
import re
from typing import Any, Dict, Iterable, List, Mapping, Union

from ..exceptions import InterceptorTransformError
from ..headers.coercion import coerce_header
from ..message import Message, MessageType
from ..variables.substitution import VariableSubstitutor
from .types import MessageConstructionInterceptor


class HeaderInterceptor(MessageConstructionInterceptor):
    """Sets headers on the message; string values are substituted and coerced."""

    def __init__(self, headers: Mapping[str, Any], message_types: Iterable[str] = ()):
        super().__init__(message_types)
        self.headers = dict(headers)
        self.substitutor = VariableSubstitutor()

    def transform(self, message: Message, message_type: str, variables: Any) -> Message:
        for name, value in self.headers.items():
            value = self.substitutor.substitute(value, variables) if isinstance(value, str) else value
            message.set_header(name, coerce_header(name, value))
        return message


class JsonPathInterceptor(MessageConstructionInterceptor):
    """
    Overwrites values in a JSON payload.

    Paths use dots for object keys and [n] for list indices, with an
    optional leading '$', e.g. '$.order.items[0].sku'. Every path must
    already exist in the payload.
    """

    TOKEN_PATTERN = re.compile(r'([^.\[\]]+)|\[(\d+)\]')

    def __init__(
        self,
        expressions: Mapping[str, Any],
        message_types: Iterable[str] = (MessageType.JSON.value,)
    ):
        super().__init__(message_types)
        self.expressions = dict(expressions)
        self.substitutor = VariableSubstitutor()

    def transform(self, message: Message, message_type: str, variables: Any) -> Message:
        try:
            document = json.loads(message.payload)
        except (TypeError, ValueError) as e:
            raise InterceptorTransformError(self.name, f"payload is not valid JSON: {e}") from e

        for path, value in self.expressions.items():
            self._set_value(document, path, self.substitutor.substitute(value, variables))

        message.payload = json.dumps(document)
        return message

    def _parse_path(self, path: str) -> List[Union[str, int]]:
        expression = path[1:] if path.startswith('$') else path
        tokens: List[Union[str, int]] = []
        position = 0
        while position < len(expression):
            if expression[position] == '.':
                position += 1
                continue
            match = self.TOKEN_PATTERN.match(expression, position)
            if not match:
                raise InterceptorTransformError(self.name, f"invalid path expression: {path}")
            key, index = match.groups()
            tokens.append(int(index) if index is not None else key)
            position = match.end()

        if not tokens:
            raise InterceptorTransformError(self.name, f"empty path expression: {path}")
        return tokens

    def _set_value(self, document: Any, path: str, value: Any) -> None:
        tokens = self._parse_path(path)
        current = document
        for token in tokens[:-1]:
            current = self._step(current, token, path)

        last = tokens[-1]
        self._step(current, last, path)
        current[last] = value

    def _step(self, current: Any, token: Union[str, int], path: str) -> Any:
        if isinstance(token, int):
            if not isinstance(current, list) or token >= len(current):
                raise InterceptorTransformError(self.name, f"path '{path}' not found - no index {token}")
            return current[token]
        if not isinstance(current, dict) or token not in current:
            raise InterceptorTransformError(self.name, f"path '{path}' not found - missing key '{token}'")
        return current[token]


class PayloadReplaceInterceptor(MessageConstructionInterceptor):
    """Replaces literal text in a string payload, in mapping order."""

    def __init__(self, replacements: Mapping[str, str], message_types: Iterable[str] = ()):
        super().__init__(message_types)
        self.replacements: Dict[str, str] = dict(replacements)
        self.substitutor = VariableSubstitutor()

    def transform(self, message: Message, message_type: str, variables: Any) -> Message:
        if not isinstance(message.payload, str):
            raise InterceptorTransformError(
                self.name, f"payload must be text, got {type(message.payload).__name__}"
            )

        payload = message.payload
        for old, new in self.replacements.items():
            payload = payload.replace(old, self.substitutor.substitute(str(new), variables))
        message.payload = payload
        return message
