"""Data models for config-schemes."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from typing import Any
from typing import Protocol
from typing import runtime_checkable

if TYPE_CHECKING:
    from .entity import Entity

BASE_ENVIRONMENT = "global"
ENTITY_SUFFIX = "config"
ENTITY_PATTERN = "*config.py"


class RegistryState(Enum):
    """Lifecycle state of a SchemeRegistry.

    There is a single transition, UNINITIALIZED -> INITIALIZED, made by
    SchemeRegistry.initialize().
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


@runtime_checkable
class Configurable(Protocol):
    """Capability of objects that know how to configure themselves.

    When a target object implements this method, a scheme hands it the
    matched entity instead of assigning the entity's parameters itself.
    """

    def configure_with(self, entity: "Entity", params: dict[str, Any] | None = None) -> None: ...


@dataclass(frozen=True)
class SchemeSettings:
    """Naming conventions used to discover entity configurations.

    Attributes:
        base_environment: Name of the global fallback environment
        entity_suffix: Token stripped from class names to derive identifiers
        entity_pattern: Glob matched (case-insensitively) against file names
            inside a scheme directory to find entity configuration files
    """

    base_environment: str = BASE_ENVIRONMENT
    entity_suffix: str = ENTITY_SUFFIX
    entity_pattern: str = ENTITY_PATTERN
