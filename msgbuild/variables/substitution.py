"""
Variable substitution implementation.
Handles ${name} resolution against a variable store.
"""

import json
import re
from typing import Any, Dict, List, Set, Union

from ..exceptions import UnresolvedVariable


class VariableSubstitutor:
    """
    Handles variable substitution in strings and data structures.

    Every ${identifier} is replaced with the store's current value in one
    left-to-right pass; text produced by a substitution is never scanned
    again. An identifier is any run of characters other than '}'.
    """

    VAR_PATTERN = re.compile(r'\$\{([^}]*)\}')

    def substitute(
        self,
        value: Union[str, List, Dict, Any],
        variables: Any
    ) -> Union[str, List, Dict, Any]:
        """
        Substitute variables in a value (string, list, or dict).

        Args:
            value: The value to substitute variables in
            variables: Variable store or any mapping exposing get()

        Returns:
            Value with variables substituted

        Raises:
            UnresolvedVariable: If any referenced variable is missing
        """
        undefined: Set[str] = set()
        result = self._substitute_value(value, variables, undefined)
        if undefined:
            raise UnresolvedVariable(sorted(undefined))
        return result

    def _substitute_value(self, value: Any, variables: Any, undefined: Set[str]) -> Any:
        if isinstance(value, str):
            return self._substitute_string(value, variables, undefined)
        elif isinstance(value, list):
            return [self._substitute_value(item, variables, undefined) for item in value]
        elif isinstance(value, dict):
            return {k: self._substitute_value(v, variables, undefined) for k, v in value.items()}
        else:
            # Non-string/list/dict values pass through unchanged
            return value

    def _substitute_string(self, text: str, variables: Any, undefined: Set[str]) -> str:
        def replace_var(match):
            name = match.group(1)
            value = variables.get(name)

            if value is None:
                undefined.add(name)
                return match.group(0)

            return self._to_text(value)

        return self.VAR_PATTERN.sub(replace_var, text)

    @staticmethod
    def _to_text(value: Any) -> str:
        if isinstance(value, bool):
            return 'true' if value else 'false'
        elif isinstance(value, (int, float)):
            return str(value)
        elif isinstance(value, str):
            return value
        else:
            # Complex types get JSON representation
            return json.dumps(value)
