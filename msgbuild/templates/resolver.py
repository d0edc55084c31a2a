"""
Payload and header-data template resolution.

Loads resource-backed templates and applies variable substitution to the
result. Nothing is cached: every call reads the source and the variable
store again.
"""

import logging
from typing import Any, List, Optional, Sequence

from ..exceptions import MissingPayloadTemplate, TemplateResourceUnreadable
from ..resources.loader import ResourceLoader
from ..variables.substitution import VariableSubstitutor
from .source import Literal, Resource, Source, Unset, describe


logger = logging.getLogger(__name__)


class TemplateResolver:
    """Turns template sources into final text."""

    def __init__(
        self,
        loader: Optional[ResourceLoader] = None,
        substitutor: Optional[VariableSubstitutor] = None
    ):
        self.loader = loader or ResourceLoader()
        self.substitutor = substitutor or VariableSubstitutor()

    def resolve(self, source: Source, variables: Any, field: str = "payload") -> Optional[str]:
        """
        Resolve a single source.

        Args:
            source: Literal, Resource or Unset
            variables: Variable store used for substitution
            field: Field name, used in error reports

        Returns:
            Substituted text, or None for an unset source

        Raises:
            TemplateResourceUnreadable: If a resource cannot be loaded
            UnresolvedVariable: If the template references unknown variables
        """
        if isinstance(source, Unset):
            return None

        if isinstance(source, Resource):
            try:
                template = self.loader.load(source.locator, encoding=source.encoding)
            except (OSError, UnicodeDecodeError, LookupError) as e:
                raise TemplateResourceUnreadable(source.locator, field) from e
        elif isinstance(source, Literal):
            template = source.text
        else:
            raise TypeError(f"Unsupported template source for {field}: {source!r}")

        logger.debug(f"Resolving {field} from {describe(source)}")
        return self.substitutor.substitute(template, variables)

    def resolve_payload(self, source: Source, variables: Any) -> str:
        """
        Resolve the mandatory payload template.

        Raises:
            MissingPayloadTemplate: If no payload source is configured
        """
        if isinstance(source, Unset):
            raise MissingPayloadTemplate()
        return self.resolve(source, variables, field="payload")

    def resolve_header_data(self, sources: Sequence[Source], variables: Any) -> List[str]:
        """Resolve header-data blocks in order; unset blocks contribute nothing."""
        blocks = []
        for index, source in enumerate(sources):
            content = self.resolve(source, variables, field=f"header_data[{index}]")
            if content is not None:
                blocks.append(content)
        return blocks
