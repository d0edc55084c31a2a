"""Message construction exceptions."""

from typing import List, Optional
from dataclasses import dataclass


class MessageBuildError(Exception):
    """Base class for every failure raised while building a message."""


class UnresolvedVariable(MessageBuildError):
    """Raised when a template references variables missing from the store."""

    def __init__(self, names: List[str]):
        self.names = sorted(set(names))
        super().__init__(f"Undefined variables: {self.names}")


class TemplateResourceUnreadable(MessageBuildError):
    """Raised when a resource locator cannot be loaded."""

    def __init__(self, locator: str, field: str = "payload"):
        self.locator = locator
        self.field = field
        super().__init__(f"Failed to read {field} template resource '{locator}'")


class MissingPayloadTemplate(MessageBuildError):
    """Raised when neither payload data nor a payload resource is configured."""

    def __init__(self):
        super().__init__("No payload template configured: set payload data or a payload resource")


class HeaderTypeCoercionError(MessageBuildError):
    """Raised when a tagged header literal does not parse as its declared type."""

    def __init__(self, header: str, type_name: str, literal: str):
        self.header = header
        self.type_name = type_name
        self.literal = literal
        super().__init__(
            f"Header '{header}': cannot convert '{literal}' to type '{type_name}'"
        )


class InterceptorTransformError(MessageBuildError):
    """Raised by an interceptor that cannot transform the message."""

    def __init__(self, interceptor: str, message: str):
        self.interceptor = interceptor
        super().__init__(f"Interceptor '{interceptor}' failed: {message}")


@dataclass
class ValidationError:
    """Single validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class DefinitionValidationError(Exception):
    """Raised when a message definition fails validation.

    The loader collects every problem it finds and raises once, so callers
    can report all of them together.
    """

    def __init__(self, errors: List[ValidationError], source: Optional[str] = None):
        self.errors = errors
        self.source = source
        self.exit_code = 2

        messages = []
        for error in errors:
            location = f" at '{error.path}'" if error.path else ""
            messages.append(f"Validation error{location}: {error.message}")

        super().__init__("\n".join(messages))
