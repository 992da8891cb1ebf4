"""config-schemes: Environment-scoped entity configuration for modular applications.

This library resolves per-module configuration from a directory tree:
- The base directory holds the global scheme
- Each immediate subdirectory holds the scheme of one environment (dev, deploy, ...)
- Each ``*config.py`` file declares Entity subclasses, bound to the objects
  they configure by class name (``TestModuleConfig`` configures ``TestModule``)

Objects are configured with the active environment's entity, or with the
global one when the active environment has none.

Public API:
    SchemeRegistry: Owns schemes, switches environments, applies configuration
    Scheme: Entity configurations of one environment
    Entity: Base class for entity configurations
    Configurable: Protocol for objects that configure themselves
    EntityLoader: Loads configuration files and lists declared entities
    EventBus, EventType: Host notification bus
    SchemeSettings, load_settings: Naming conventions and their YAML loader
    identifier: Class name to entity identifier conversion
    ConfigError and subclasses: Exception types

Example:
    ```python
    from pathlib import Path
    from config_schemes import SchemeRegistry

    registry = SchemeRegistry()
    registry.initialize(Path("app/config"))

    registry.switch_environment("dev")
    registry.apply_configuration(module)  # dev entity, or global fallback
    ```
"""

from .entity import Entity
from .events import Event
from .events import EventBus
from .events import EventType
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import EntityLoadError
from .exceptions import RegistryNotInitializedError
from .exceptions import SchemeNotFoundError
from .loader import EntityLoader
from .models import BASE_ENVIRONMENT
from .models import Configurable
from .models import RegistryState
from .models import SchemeSettings
from .registry import SchemeRegistry
from .scheme import Scheme
from .utils import identifier
from .utils import load_settings

__version__ = "0.1.0"

__all__ = [
    "SchemeRegistry",
    "Scheme",
    "Entity",
    "Configurable",
    "EntityLoader",
    "Event",
    "EventBus",
    "EventType",
    "SchemeSettings",
    "RegistryState",
    "BASE_ENVIRONMENT",
    "load_settings",
    "identifier",
    "ConfigError",
    "ConfigFileError",
    "EntityLoadError",
    "RegistryNotInitializedError",
    "SchemeNotFoundError",
]
