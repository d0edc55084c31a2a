"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .message import DEFAULT_MESSAGE_TYPE


ENV_FILE_ENCODING = "MSGBUILD_FILE_ENCODING"
ENV_RESOURCE_PATH = "MSGBUILD_RESOURCE_PATH"
ENV_DEFAULT_MESSAGE_TYPE = "MSGBUILD_DEFAULT_MESSAGE_TYPE"


@dataclass
class Settings:
    """
    Process-wide defaults.

    Attributes:
        file_encoding: Encoding used for template resources without an explicit one
        resource_path: Roots searched for classpath: locators, in order
        default_message_type: Message type used when a definition names none
    """
    file_encoding: str = "utf-8"
    resource_path: List[str] = field(default_factory=list)
    default_message_type: str = DEFAULT_MESSAGE_TYPE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        if environ is None:
            environ = os.environ

        resource_path = []
        raw_path = environ.get(ENV_RESOURCE_PATH, "")
        if raw_path:
            resource_path = [entry for entry in raw_path.split(os.pathsep) if entry]

        return cls(
            file_encoding=environ.get(ENV_FILE_ENCODING) or "utf-8",
            resource_path=resource_path,
            default_message_type=(
                environ.get(ENV_DEFAULT_MESSAGE_TYPE) or DEFAULT_MESSAGE_TYPE
            ).upper()
        )


def get_settings() -> Settings:
    """Build settings from the current process environment."""
    return Settings.from_env()
