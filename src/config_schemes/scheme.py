"""Configuration scheme: the entity configurations of one environment."""

import logging
from pathlib import Path
from typing import Any

from .entity import Entity
from .loader import EntityLoader
from .models import ENTITY_SUFFIX
from .models import Configurable
from .utils import identifier as derive_identifier

logger = logging.getLogger(__name__)


class Scheme:
    """Entity configurations scoped to one environment.

    Entities are discovered by where they are declared: every Entity
    subclass whose source file sits directly inside one of the scheme's
    paths belongs to it. Dropping a new ``*config.py`` file into an
    environment directory is enough to activate it.

    A scheme never falls back to another scheme; see
    SchemeRegistry.apply_configuration for global fallback.

    Args:
        path: Scheme directory; a missing directory gives an empty scheme
        environment: Environment identifier
        loader: Loader used to execute configuration files
        suffix: Token stripped from class names to derive identifiers
    """

    def __init__(
        self,
        path: Path,
        environment: str,
        loader: EntityLoader | None = None,
        suffix: str = ENTITY_SUFFIX,
    ):
        self.environment = environment
        self.paths: list[Path] = []
        self.entities: dict[str, Entity] = {}
        self.loader = loader or EntityLoader()
        self.suffix = suffix

        path = Path(path)
        if path.exists():
            self.load(path)
        else:
            logger.debug(f"Scheme '{environment}' path {path} does not exist, scheme is empty")

    def load(self, path: Path) -> None:
        """Load entity configurations declared in a directory.

        May be called again with other directories; their entities are added
        to the ones already loaded.

        Args:
            path: Directory holding entity configuration files
        """
        root = Path(path).resolve()
        if root not in self.paths:
            self.paths.append(root)

        self.loader.load_directory(root)

        for cls, source in self.loader.declared_entities():
            if source.parent not in self.paths:
                continue

            key = self.identifier(cls.__name__)
            existing = self.entities.get(key)
            if existing is not None:
                if type(existing) is not cls:
                    logger.warning(
                        f"Scheme '{self.environment}': {cls.__qualname__} from {source} ignored, "
                        f"'{key}' is already configured by {type(existing).__qualname__}"
                    )
                continue

            try:
                self.entities[key] = cls()
            except Exception as e:
                logger.warning(
                    f"Scheme '{self.environment}': cannot create {cls.__qualname__} from {source}, skipped: {e}"
                )
                continue
            logger.debug(f"Scheme '{self.environment}': loaded entity '{key}' from {source}")

    def identifier(self, class_name: str) -> str:
        """Convert an entity configuration or object class name to an identifier."""
        return derive_identifier(class_name, self.suffix)

    def entity(self, identifier: str) -> Entity | None:
        """Get the entity configuration stored under an identifier."""
        return self.entities.get(identifier)

    def configure(
        self,
        obj: Any,
        identifier: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> bool:
        """Configure an object with this scheme's entity parameters.

        If no identifier is passed it is derived from the object's class
        name. Objects implementing Configurable receive the entity and
        configure themselves; all others get the entity's parameters
        assigned as attributes.

        Args:
            obj: Object to configure
            identifier: Entity identifier
            params: Explicit parameters, overriding the entity's own values

        Returns:
            True if this scheme has a matching entity, False otherwise (the
            object is left untouched)
        """
        if identifier is None:
            identifier = self.identifier(type(obj).__name__)

        entity = self.entity(identifier)
        if entity is None:
            return False

        if isinstance(obj, Configurable):
            obj.configure_with(entity, params)
        else:
            entity.apply(obj, params)

        logger.debug(f"Configured {type(obj).__name__} with '{identifier}' from scheme '{self.environment}'")
        return True

    def __contains__(self, identifier: str) -> bool:
        return identifier in self.entities

    def __len__(self) -> int:
        return len(self.entities)

    def __repr__(self) -> str:
        return f"Scheme(environment={self.environment!r}, entities={sorted(self.entities)!r})"
