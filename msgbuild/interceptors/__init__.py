"""
Message construction interceptors.

Provides the interceptor interface, the ordered chain, built-in
interceptors and the registry used by message definitions.
"""

from .types import MessageConstructionInterceptor, FunctionInterceptor
from .chain import InterceptorChain
from .builtin import HeaderInterceptor, JsonPathInterceptor, PayloadReplaceInterceptor
from .registry import InterceptorRegistry


__all__ = [
    "MessageConstructionInterceptor",
    "FunctionInterceptor",
    "InterceptorChain",
    "HeaderInterceptor",
    "JsonPathInterceptor",
    "PayloadReplaceInterceptor",
    "InterceptorRegistry",
]
