from unittest.mock import Mock

import pytest

from secure_route import Router


@pytest.fixture
def funct():
    """Mock function for testing purposes."""
    return Mock(__name__="Mock")


@pytest.fixture
def router():
    """Router that leaves logging alone."""
    return Router(configure_logs=False)
