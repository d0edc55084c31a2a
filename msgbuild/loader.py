"""Message definition loader and strict validation."""

import codecs
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
import yaml

from .builder import PayloadTemplateMessageBuilder
from .config import get_settings
from .exceptions import DefinitionValidationError, ValidationError
from .interceptors.registry import InterceptorRegistry
from .resources.loader import ResourceLoader
from .variables.store import VariableStore


logger = logging.getLogger(__name__)


class PreservingLoader(yaml.SafeLoader):
    """YAML loader that keeps yes/no/on/off as strings; only true/false are booleans."""
    pass


BOOL_PATTERN = re.compile(r'^(?:true|True|TRUE|false|False|FALSE)$')

PreservingLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != 'tag:yaml.org,2002:bool']
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
PreservingLoader.add_implicit_resolver('tag:yaml.org,2002:bool', BOOL_PATTERN, list('tTfF'))


class MessageDefinition:
    """A validated message definition: the configured builder plus its message type."""

    def __init__(self, builder: PayloadTemplateMessageBuilder, message_type: str, name: str = ""):
        self.builder = builder
        self.message_type = message_type
        self.name = name

    def build(self, variables: Any):
        """Build one message for this definition's message type."""
        return self.builder.build(variables, self.message_type)


class DefinitionLoader:
    """Loads and validates message definition YAML."""

    SUPPORTED_VERSIONS = {"1"}
    KNOWN_FIELDS = {
        'version', 'name', 'message_type', 'payload', 'payload_resource',
        'encoding', 'headers', 'header_data', 'interceptors'
    }

    def __init__(
        self,
        workspace: Path,
        registry: Optional[InterceptorRegistry] = None,
        search_paths: Optional[List[Union[str, Path]]] = None
    ):
        """
        Initialize loader.

        Args:
            workspace: Root for relative resource locators
            registry: Interceptor registry (defaults to the built-ins)
            search_paths: Roots for classpath: locators (defaults to workspace)
        """
        self.workspace = Path(workspace).resolve()
        self.registry = registry or InterceptorRegistry()
        self.resource_loader = ResourceLoader(
            search_paths=search_paths or [self.workspace],
            base_dir=self.workspace
        )
        self.errors: List[ValidationError] = []

    def load(self, definition_path: Path) -> MessageDefinition:
        """Load and validate a definition file."""
        self.errors = []
        logger.info(f"Loading message definition: {definition_path}")
        try:
            with open(definition_path, 'r') as f:
                data = yaml.load(f, Loader=PreservingLoader)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load definition: {e}")
            self._raise_validation_errors(str(definition_path))

        return self.parse(data, source=str(definition_path))

    def parse(self, data: Any, source: Optional[str] = None) -> MessageDefinition:
        """Validate an in-memory definition and configure a builder from it."""
        self.errors = []

        if data is None or not isinstance(data, dict):
            self._add_error("Definition must be a YAML object/dictionary")
            self._raise_validation_errors(source)

        self._validate_top_level(data)
        payload = self._validate_payload(data)
        encoding = self._validate_encoding(data)
        message_type = self._validate_optional_string(data, 'message_type')
        headers = self._validate_headers(data.get('headers', {}))
        header_data = self._validate_header_data(data.get('header_data', []))
        interceptors = self._build_interceptors(data.get('interceptors', []))

        if self.errors:
            self._raise_validation_errors(source)

        builder = PayloadTemplateMessageBuilder(loader=self.resource_loader)

        kind, value = payload
        if kind == 'resource':
            builder.set_payload_resource(value, encoding)
        else:
            builder.set_payload_data(value)

        builder.set_headers(headers)

        for kind, value in header_data:
            if kind == 'resource':
                builder.add_header_resource(value, encoding)
            else:
                builder.add_header_data(value)

        for interceptor in interceptors:
            builder.add(interceptor)

        message_type = (message_type or get_settings().default_message_type).upper()
        logger.info(
            f"Loaded message definition '{data.get('name', '')}' "
            f"(type {message_type}, {len(headers)} headers, {len(interceptors)} interceptors)"
        )
        return MessageDefinition(builder, message_type, data.get('name', ''))

    def _validate_top_level(self, data: Dict[str, Any]):
        """Validate version and reject unknown fields."""
        version = data.get('version')
        if version is None:
            self._add_error("'version' field is required")
        elif not isinstance(version, str):
            self._add_error(f"'version' field must be a string, got {type(version).__name__}")
        elif version not in self.SUPPORTED_VERSIONS:
            self._add_error(f"Unsupported version '{version}'. Supported: {sorted(self.SUPPORTED_VERSIONS)}")

        for key in data.keys():
            if key not in self.KNOWN_FIELDS:
                self._add_error(f"Unknown field '{key}'")

        if 'name' in data and not isinstance(data['name'], str):
            self._add_error("'name' must be a string")

    def _validate_payload(self, data: Dict[str, Any]) -> Tuple[str, str]:
        """Exactly one of payload and payload_resource must be present."""
        has_payload = 'payload' in data
        has_resource = 'payload_resource' in data

        if has_payload and has_resource:
            self._add_error("'payload' and 'payload_resource' are mutually exclusive")
        elif not has_payload and not has_resource:
            self._add_error("One of 'payload' or 'payload_resource' is required")

        if has_resource:
            if not isinstance(data['payload_resource'], str) or not data['payload_resource']:
                self._add_error("'payload_resource' must be a non-empty string", 'payload_resource')
            return 'resource', data['payload_resource']

        if has_payload and not isinstance(data['payload'], str):
            self._add_error(
                f"'payload' must be a string, got {type(data['payload']).__name__}", 'payload'
            )
        return 'literal', data.get('payload', '')

    def _validate_optional_string(self, data: Dict[str, Any], key: str) -> Optional[str]:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            self._add_error(f"'{key}' must be a string", key)
            return None
        return value

    def _validate_encoding(self, data: Dict[str, Any]) -> Optional[str]:
        encoding = self._validate_optional_string(data, 'encoding')
        if encoding is None:
            return None
        try:
            codecs.lookup(encoding)
        except LookupError:
            self._add_error(f"Unknown encoding '{encoding}'", 'encoding')
            return None
        return encoding

    def _validate_headers(self, headers: Any) -> Dict[str, Any]:
        if not isinstance(headers, dict):
            self._add_error("'headers' must be a dictionary", 'headers')
            return {}

        valid = {}
        for name, value in headers.items():
            if not isinstance(name, str):
                self._add_error(f"Header name {name!r} must be a string", 'headers')
            elif isinstance(value, (dict, list)) or value is None:
                self._add_error(f"Header '{name}' must be a scalar value", f"headers.{name}")
            else:
                valid[name] = value
        return valid

    def _validate_header_data(self, blocks: Any) -> List[Tuple[str, str]]:
        """Each block is a literal string or a {resource: locator} mapping."""
        if isinstance(blocks, str):
            blocks = [blocks]
        if not isinstance(blocks, list):
            self._add_error("'header_data' must be a string or a list", 'header_data')
            return []

        result = []
        for i, block in enumerate(blocks):
            path = f"header_data[{i}]"
            if isinstance(block, str):
                result.append(('literal', block))
            elif isinstance(block, dict) and set(block.keys()) == {'resource'}:
                if isinstance(block['resource'], str) and block['resource']:
                    result.append(('resource', block['resource']))
                else:
                    self._add_error("'resource' must be a non-empty string", path)
            else:
                self._add_error("Header data block must be a string or {resource: <locator>}", path)
        return result

    def _build_interceptors(self, entries: Any) -> List[Any]:
        if not isinstance(entries, list):
            self._add_error("'interceptors' must be a list", 'interceptors')
            return []

        interceptors = []
        for i, entry in enumerate(entries):
            path = f"interceptors[{i}]"
            if not isinstance(entry, dict) or not isinstance(entry.get('type'), str):
                self._add_error("Interceptor must be a dictionary with a 'type' string", path)
                continue
            try:
                interceptors.append(self.registry.create(entry['type'], entry))
            except ValueError as e:
                self._add_error(str(e), path)
        return interceptors

    def _add_error(self, message: str, path: str = ""):
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self, source: Optional[str] = None):
        raise DefinitionValidationError(self.errors, source)


def load_variables(path: Union[str, Path]) -> VariableStore:
    """
    Read a YAML or JSON mapping of variables into a store.

    Values are stored as strings: booleans become 'true'/'false', lists and
    mappings their JSON text. Null values are rejected.
    """
    with open(path, 'r') as f:
        data = yaml.load(f, Loader=PreservingLoader)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Variables file must contain a mapping, got {type(data).__name__}")

    store = VariableStore()
    for key, value in data.items():
        if value is None:
            raise ValueError(f"Variable '{key}' has no value")
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        elif isinstance(value, (list, dict)):
            value = json.dumps(value)
        store.set(str(key), str(value))
    return store


def load_definition(
    path: Union[str, Path],
    workspace: Optional[Union[str, Path]] = None
) -> MessageDefinition:
    """
    Load a message definition file.

    Args:
        path: Definition YAML file
        workspace: Root for relative resource locators (defaults to the
            directory holding the definition)

    Raises:
        DefinitionValidationError: If the definition is invalid
    """
    path = Path(path)
    if workspace is None:
        workspace = path.resolve().parent
    return DefinitionLoader(Path(workspace)).load(path)
