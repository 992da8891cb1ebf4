"""Shared fixtures: a configuration tree with global, dev, inherit and deploy schemes."""

from pathlib import Path
from textwrap import dedent

import pytest

GLOBAL_ENTITY = """
from config_schemes import Entity


class TestModuleConfig(Entity):
    parameter_int = 1
    parameter_string = "1"
    parameter_array = {"global": "global value"}
"""

DEV_ENTITY = """
from config_schemes import Entity


class TestModuleConfig(Entity):
    parameter_int = 2
    parameter_string = "2"
    parameter_array = {"dev": "dev value"}
"""

# Extends the dev entity: unset fields carry dev's values
INHERIT_ENTITY = """
from pathlib import Path

from config_schemes import EntityLoader

dev = EntityLoader().load_file(Path(__file__).parent.parent / "dev" / "testmodule_config.py")


class TestModuleConfig(dev.TestModuleConfig):
    parameter_int = 3
    parameter_array = {"inherit": "inherit value"}
"""

DEPLOY_ENTITY = """
from config_schemes import Entity


class OtherModuleConfig(Entity):
    enabled = True
"""

NOT_A_CONFIG = """
raise RuntimeError("helpers.py must not be loaded as a configuration file")
"""


class TestModule:
    """Target object configured by the fixture entities."""

    __test__ = False

    def __init__(self):
        self.parameter_int = 0
        self.parameter_string = ""
        self.parameter_array = {}


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(content))
    return path


@pytest.fixture
def config_dir(tmp_path):
    """Create a configuration base directory with four environments."""
    base = tmp_path / "config"
    write_file(base / "testmodule_config.py", GLOBAL_ENTITY)
    write_file(base / "helpers.py", NOT_A_CONFIG)
    write_file(base / "dev" / "testmodule_config.py", DEV_ENTITY)
    write_file(base / "inherit" / "testmodule_config.py", INHERIT_ENTITY)
    write_file(base / "deploy" / "othermodule_config.py", DEPLOY_ENTITY)
    return base


@pytest.fixture
def module():
    """Fresh, unconfigured target object."""
    return TestModule()


@pytest.fixture
def write_config():
    """Helper writing a configuration file, creating parent directories."""
    return write_file


@pytest.fixture
def module_class():
    """Target class, for tests needing several fresh objects."""
    return TestModule
