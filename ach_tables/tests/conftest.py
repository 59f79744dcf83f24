"""
ACH Tables - Pytest Configuration and Fixtures
"""

import pytest

from ach_tables.core.config import Config, Environment, set_config
from ach_tables.tests.factories import (
    make_full_standard_file,
    make_mixed_file,
    make_single_entry_file,
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "iat: tests covering IAT batches")


@pytest.fixture(autouse=True)
def test_config():
    """Install a fresh test configuration for every test."""
    config = Config(environment=Environment.TESTING)
    set_config(config)
    yield config
    set_config(Config(environment=Environment.TESTING))


@pytest.fixture
def single_entry_file():
    """One batch, one entry, one 05 addenda."""
    return make_single_entry_file()


@pytest.fixture
def full_standard_file():
    """Entry carrying every standard addenda variant."""
    return make_full_standard_file()


@pytest.fixture
def mixed_file():
    """Standard and IAT batches with every addenda variant."""
    return make_mixed_file()
