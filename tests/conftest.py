import logging
from collections.abc import Iterator

import pytest

from cpow import setup_logger
from cpow.backends import ArbitraryPrecisionBackend, NativeBackend, NumericBackend
from cpow.config import get_settings, set_settings


@pytest.fixture(autouse=True)
def run_around_tests() -> Iterator:
    # Use cpow logger with default format
    setup_logger(level=logging.DEBUG, force_reconfigure=True)
    # Save the active settings and restore them after each test
    original = get_settings()
    yield
    set_settings(original)


@pytest.fixture(params=["native", "arbitrary"])
def backend(request: pytest.FixtureRequest) -> NumericBackend:
    """Each test using this fixture runs once per numeric backend."""
    if request.param == "native":
        return NativeBackend()
    return ArbitraryPrecisionBackend(dps=50)
