import pytest

from drawlang.core import CommandProcessor, build_default_registries


@pytest.fixture(scope="session")
def registries():
    return build_default_registries()


@pytest.fixture
def processor(registries):
    return CommandProcessor(registries)
