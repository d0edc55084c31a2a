"""
Message data model.

Defines the constructed message, its reserved header keys and the
well-known message type identifiers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class MessageType(str, Enum):
    """Well-known message type identifiers used to scope interceptors."""
    XML = "XML"
    XHTML = "XHTML"
    CSV = "CSV"
    JSON = "JSON"
    PLAINTEXT = "PLAINTEXT"
    BINARY = "BINARY"
    GZIP = "GZIP"


DEFAULT_MESSAGE_TYPE = MessageType.XML.value


class MessageHeaders:
    """Reserved header names."""
    PREFIX = "msgbuild"
    HEADER_CONTENT = PREFIX + "_header_content"


@dataclass
class Message:
    """
    A constructed test message.

    Attributes:
        payload: Templated payload content (a string once built)
        headers: Header name to typed value (str, int, float or bool)
        header_data: Header-data blocks in configuration order
    """
    payload: Any
    headers: Dict[str, Any] = field(default_factory=dict)
    header_data: List[str] = field(default_factory=list)

    def set_header(self, name: str, value: Any) -> 'Message':
        self.headers[name] = value
        return self

    def add_header_data(self, content: str) -> 'Message':
        """Append a header-data block and expose it under the reserved key."""
        self.header_data.append(content)
        self.headers[MessageHeaders.HEADER_CONTENT] = content
        return self
