"""Entity configuration base class."""

import copy
import logging
from typing import Any

logger = logging.getLogger(__name__)


class Entity:
    """Named bundle of parameter values for one module or object type.

    Subclasses declare parameters as public class attributes. The class
    name, minus its "Config" suffix, binds the entity to the objects it
    configures:

        class TestModuleConfig(Entity):
            parameter_int = 1
            parameter_string = "1"

    Entities for other environments extend each other with plain
    inheritance; attributes a subclass leaves alone keep the base class
    values.
    """

    def parameters(self) -> dict[str, Any]:
        """Collect parameter values declared by this entity.

        Class attributes are read from the most distant Entity subclass down
        to the concrete one, then public instance attributes are layered on
        top.

        Returns:
            New dictionary of parameter name -> value
        """
        params: dict[str, Any] = {}

        for klass in reversed(type(self).__mro__):
            if klass is Entity or not issubclass(klass, Entity):
                continue
            for name, value in vars(klass).items():
                if _is_parameter(name, value):
                    params[name] = value

        for name, value in vars(self).items():
            if _is_parameter(name, value):
                params[name] = value

        return {name: _copy_value(value) for name, value in params.items()}

    def apply(self, target: Any, params: dict[str, Any] | None = None) -> None:
        """Set parameters on a target object.

        Args:
            target: Object to configure
            params: Explicit values; they win over stored parameters for
                every overlapping key
        """
        values = self.parameters()
        if params:
            values.update({name: _copy_value(value) for name, value in params.items()})

        for name, value in values.items():
            try:
                setattr(target, name, value)
            except AttributeError as e:
                logger.warning(f"Cannot set '{name}' on {type(target).__name__}: {e}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.parameters()!r})"


def _is_parameter(name: str, value: Any) -> bool:
    if name.startswith("_"):
        return False
    if isinstance(value, (classmethod, staticmethod, property)):
        return False
    return not callable(value)


def _copy_value(value: Any) -> Any:
    # Containers are copied per target; other objects (services, locks) are shared
    if not isinstance(value, (dict, list, set)):
        return value
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error):
        return copy.copy(value)
