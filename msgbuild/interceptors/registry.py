"""
Interceptor registry.

Maps interceptor type names used in message definitions to factories.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping

from ..message import MessageType
from .builtin import HeaderInterceptor, JsonPathInterceptor, PayloadReplaceInterceptor
from .types import MessageConstructionInterceptor


logger = logging.getLogger(__name__)

InterceptorFactory = Callable[[Mapping[str, Any]], MessageConstructionInterceptor]

# Keys every interceptor entry may carry, plus the ones each built-in reads
COMMON_KEYS = frozenset({"type", "message_types"})
BUILTIN_KEYS = {
    "headers": frozenset({"headers"}),
    "json_path": frozenset({"expressions"}),
    "replace": frozenset({"replacements"}),
}


def _required_mapping(config: Mapping[str, Any], key: str, type_name: str) -> Dict[str, Any]:
    value = config.get(key)
    if not isinstance(value, dict) or not value:
        raise ValueError(f"Interceptor '{type_name}' requires a non-empty '{key}' mapping")
    return value


def _message_types(config: Mapping[str, Any], default=()) -> List[str]:
    types = config.get('message_types', list(default))
    if isinstance(types, str):
        types = [types]
    if not isinstance(types, list) or not all(isinstance(t, str) for t in types):
        raise ValueError("'message_types' must be a string or a list of strings")
    return types


class InterceptorRegistry:
    """
    Registry of interceptor factories.

    Ships the built-in interceptors; definitions may reference additional
    types registered by the caller.
    """

    def __init__(self):
        """Initialize registry with the built-in factories."""
        self._factories: Dict[str, InterceptorFactory] = {}
        self._builtin_factories = self._load_builtin_factories()

    def _load_builtin_factories(self) -> Dict[str, InterceptorFactory]:
        return {
            "headers": lambda config: HeaderInterceptor(
                _required_mapping(config, 'headers', 'headers'),
                _message_types(config)
            ),
            "json_path": lambda config: JsonPathInterceptor(
                _required_mapping(config, 'expressions', 'json_path'),
                _message_types(config, default=(MessageType.JSON.value,))
            ),
            "replace": lambda config: PayloadReplaceInterceptor(
                _required_mapping(config, 'replacements', 'replace'),
                _message_types(config)
            ),
        }

    def register(self, name: str, factory: InterceptorFactory) -> None:
        """
        Register an interceptor factory.

        Args:
            name: Type name used in definitions
            factory: Callable building an interceptor from its config mapping
        """
        if not callable(factory):
            raise ValueError(f"Factory for interceptor type '{name}' is not callable")
        self._factories[name] = factory
        logger.debug(f"Registered interceptor type: {name}")

    def exists(self, name: str) -> bool:
        return name in self._factories or name in self._builtin_factories

    def list_types(self) -> List[str]:
        return sorted(set(self._factories) | set(self._builtin_factories))

    def create(self, name: str, config: Mapping[str, Any]) -> MessageConstructionInterceptor:
        """
        Build an interceptor from its definition.

        Raises:
            ValueError: If the type is unknown or the config is invalid
        """
        # Caller-registered types shadow built-ins and validate their own config
        if name in self._factories:
            return self._factories[name](config)

        factory = self._builtin_factories.get(name)
        if factory is None:
            raise ValueError(f"Unknown interceptor type '{name}'. Available: {self.list_types()}")

        unknown = sorted(set(config) - COMMON_KEYS - BUILTIN_KEYS[name])
        if unknown:
            raise ValueError(f"Unknown field(s) {unknown} for interceptor '{name}'")
        return factory(config)
