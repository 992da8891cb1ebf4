"""Scheme registry: environment switching and global fallback."""

import logging
from pathlib import Path
from typing import Any

from .events import EventBus
from .events import EventType
from .exceptions import RegistryNotInitializedError
from .exceptions import SchemeNotFoundError
from .loader import EntityLoader
from .models import RegistryState
from .models import SchemeSettings
from .scheme import Scheme
from .utils import load_settings

logger = logging.getLogger(__name__)

SUBSCRIBER_ID = "config_schemes.registry"


class SchemeRegistry:
    """Owns the configuration schemes and the currently active one.

    The base directory holds the global scheme; each immediate
    subdirectory is a scheme for the environment named after it. Objects
    are configured with the active scheme, and with the global scheme when
    the active one has no matching entity. Fallback is exactly one level
    deep and happens only here.

    Args:
        loader: Loader used to execute configuration files
        settings: Naming conventions (defaults to SchemeSettings())
        bus: Event bus for diagnostics and inbound notifications
    """

    def __init__(
        self,
        loader: EntityLoader | None = None,
        settings: SchemeSettings | None = None,
        bus: EventBus | None = None,
    ):
        self.settings = settings or SchemeSettings()
        self.loader = loader or EntityLoader(self.settings.entity_pattern)
        self.schemes: dict[str, Scheme] = {}
        self.state = RegistryState.UNINITIALIZED
        self.bus: EventBus | None = None
        self._active: Scheme | None = None

        if bus is not None:
            self.bind(bus)

    @classmethod
    def from_settings_file(cls, path: Path, bus: EventBus | None = None) -> "SchemeRegistry":
        """Create a registry using settings read from a YAML file.

        Raises:
            ConfigFileError: If the settings file is invalid
        """
        return cls(settings=load_settings(path), bus=bus)

    # ===== Scheme Management =====

    def initialize(self, base_path: Path) -> None:
        """Create the global scheme and one scheme per environment directory.

        Directories whose names start with "." or "_" are skipped. Safe to
        call again: schemes that already exist are left untouched.

        Args:
            base_path: Configuration base directory
        """
        base_path = Path(base_path)
        base = self.settings.base_environment

        if base not in self.schemes:
            self.create_scheme(base_path, base)
            self._active = self.schemes[base]

        if base_path.is_dir():
            # Hidden and private directories (e.g. __pycache__) are not environments
            for path in sorted(base_path.iterdir()):
                if path.is_dir() and not path.name.startswith((".", "_")):
                    self.create_scheme(path)

        self.state = RegistryState.INITIALIZED
        logger.info(f"Initialized configuration schemes from {base_path}: {', '.join(self.environments)}")
        self._publish(EventType.SCHEMES_INITIALIZED, environments=self.environments)

    def create_scheme(self, path: Path, environment: str | None = None) -> Scheme:
        """Create a configuration scheme unless its environment already has one.

        Args:
            path: Scheme directory
            environment: Environment identifier (default: directory name)

        Returns:
            The scheme registered for the environment
        """
        path = Path(path)
        environment = environment if environment is not None else path.name

        scheme = self.schemes.get(environment)
        if scheme is None:
            scheme = Scheme(path, environment, loader=self.loader, suffix=self.settings.entity_suffix)
            self.schemes[environment] = scheme
            logger.info(f"Created configuration scheme '{environment}' with {len(scheme)} entities")
        return scheme

    def scheme(self, environment: str) -> Scheme | None:
        """Get the scheme for an environment, or None."""
        return self.schemes.get(environment)

    def get_scheme(self, environment: str) -> Scheme:
        """Get the scheme for an environment.

        Raises:
            SchemeNotFoundError: If no scheme is registered for it
        """
        scheme = self.schemes.get(environment)
        if scheme is None:
            raise SchemeNotFoundError(environment)
        return scheme

    @property
    def environments(self) -> list[str]:
        return sorted(self.schemes)

    @property
    def active(self) -> Scheme | None:
        """Currently active scheme; None until initialize() is called."""
        return self._active

    @property
    def global_scheme(self) -> Scheme | None:
        return self.schemes.get(self.settings.base_environment)

    # ===== Environment Switching =====

    def switch_environment(self, environment: str | None = None) -> bool:
        """Make the scheme of an environment the active one.

        Unknown environments are reported and the previous active scheme
        stays in place.

        Args:
            environment: Environment identifier (default: global)

        Returns:
            True if switched, False if no scheme exists for the environment
        """
        if environment is None:
            environment = self.settings.base_environment

        scheme = self.schemes.get(environment)
        if scheme is None:
            current = self._active.environment if self._active else None
            self._report(
                f"Cannot switch to unknown configuration environment '{environment}', "
                f"keeping '{current}'",
                environment=environment,
            )
            return False

        self._active = scheme
        logger.info(f"Switched configuration environment to '{environment}'")
        self._publish(EventType.ENVIRONMENT_SWITCHED, environment=environment)
        return True

    # ===== Configuration =====

    def apply_configuration(
        self,
        obj: Any,
        identifier: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> bool:
        """Configure an object with the active scheme, falling back to global.

        Args:
            obj: Object to configure
            identifier: Entity identifier (default: derived from the object's class)
            params: Explicit parameters, overriding the entity's own values

        Returns:
            True if an entity was applied, False if neither the active nor the
            global scheme has one (the object is left untouched)

        Raises:
            RegistryNotInitializedError: If initialize() hasn't been called
        """
        active = self._active
        if active is None:
            message = "SchemeRegistry.initialize() must be called before configuring objects"
            self._report(message, identifier=identifier, environment=None)
            raise RegistryNotInitializedError(message)

        if active.configure(obj, identifier, params):
            return True

        base = self.global_scheme
        if base is not None and base is not active and base.configure(obj, identifier, params):
            logger.debug(f"Configured {type(obj).__name__} from '{base.environment}' fallback")
            return True

        name = identifier if identifier is not None else active.identifier(type(obj).__name__)
        self._report(
            f"No configuration entity '{name}' for {type(obj).__name__} in "
            f"'{active.environment}' or '{self.settings.base_environment}' scheme",
            identifier=name,
            environment=active.environment,
        )
        return False

    # ===== Notifications =====

    def bind(self, bus: EventBus) -> None:
        """Subscribe to host notifications and publish diagnostics on a bus.

        Handled events:
            CORE_CONFIGURE(base_path): initialize()
            ENVIRONMENT_CHANGE(environment): switch_environment()
            MODULE_CONFIGURE(obj, identifier, params): apply_configuration()
        """
        self.bus = bus
        bus.subscribe(EventType.CORE_CONFIGURE, SUBSCRIBER_ID, self.initialize)
        bus.subscribe(EventType.ENVIRONMENT_CHANGE, SUBSCRIBER_ID, self.switch_environment)
        bus.subscribe(EventType.MODULE_CONFIGURE, SUBSCRIBER_ID, self.apply_configuration)

    def _report(self, message: str, **payload: Any) -> None:
        logger.error(message)
        self._publish(EventType.CONFIGURATION_ERROR, message=message, **payload)

    def _publish(self, event_type: EventType, **payload: Any) -> None:
        if self.bus is not None:
            self.bus.publish(event_type, SUBSCRIBER_ID, payload)
