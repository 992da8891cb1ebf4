"""Exceptions for config-schemes."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error reading the registry settings file."""

    pass


class EntityLoadError(ConfigError):
    """Error executing an entity configuration file."""

    pass


class SchemeNotFoundError(ConfigError):
    """No scheme is registered for the requested environment."""

    def __init__(self, environment: str):
        super().__init__(f"No configuration scheme registered for environment '{environment}'")
        self.environment = environment


class RegistryNotInitializedError(ConfigError):
    """Registry was used before initialize() was called."""

    pass
