"""Loading of entity configuration files and discovery of declared entities."""

import fnmatch
import hashlib
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

from .entity import Entity
from .exceptions import EntityLoadError
from .models import ENTITY_PATTERN

logger = logging.getLogger(__name__)

MODULE_PREFIX = "_config_schemes_"


class EntityLoader:
    """Executes entity configuration files and reports declared entities.

    Every file is executed at most once per process: the module is kept in
    sys.modules under a name derived from its resolved path, so loading the
    same directory again never declares the same classes twice.

    Args:
        pattern: Glob matched case-insensitively against file names
    """

    def __init__(self, pattern: str = ENTITY_PATTERN):
        self.pattern = pattern

    def load_directory(self, path: Path) -> list[ModuleType]:
        """Load every entity configuration file directly inside a directory.

        Files that fail to execute are logged and skipped.

        Args:
            path: Scheme directory

        Returns:
            Loaded modules in file name order
        """
        if not path.is_dir():
            return []

        modules = []
        for file in sorted(path.iterdir()):
            if not file.is_file() or not fnmatch.fnmatch(file.name.lower(), self.pattern.lower()):
                continue
            try:
                modules.append(self.load_file(file))
            except EntityLoadError as e:
                logger.warning(str(e))
        return modules

    def load_file(self, path: Path) -> ModuleType:
        """Load a single entity configuration file.

        Configuration files may call this themselves to extend an entity
        declared in another environment's file.

        Args:
            path: Python file to execute

        Returns:
            The loaded module (cached after the first call)

        Raises:
            EntityLoadError: If the file can't be executed
        """
        path = Path(path).resolve()
        name = module_name(path)

        if name in sys.modules:
            return sys.modules[name]

        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise EntityLoadError(f"Cannot create module spec for configuration file {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            del sys.modules[name]
            raise EntityLoadError(f"Failed to load configuration file {path}: {e}") from e

        logger.debug(f"Loaded configuration file {path} as {name}")
        return module

    def declared_entities(self) -> list[tuple[type[Entity], Path]]:
        """List every declared Entity subclass with its source file.

        Returns:
            (class, resolved source file) pairs, sorted by source file and
            then by declaration order
        """
        declared = []
        seen: set[type] = set()
        pending = list(Entity.__subclasses__())

        while pending:
            cls = pending.pop(0)
            if cls in seen:
                continue
            seen.add(cls)
            pending.extend(cls.__subclasses__())

            source = _source_file(cls)
            if source is not None:
                declared.append((cls, source))

        return sorted(declared, key=lambda item: str(item[1]))


def module_name(path: Path) -> str:
    """Synthetic sys.modules name for a configuration file."""
    digest = hashlib.sha1(str(path).encode()).hexdigest()[:12]
    return f"{MODULE_PREFIX}{path.stem}_{digest}"


def _source_file(cls: type) -> Path | None:
    try:
        return Path(inspect.getfile(cls)).resolve()
    except (TypeError, OSError):
        return None
