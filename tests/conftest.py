import pytest

from tests.fakes import FakeClock, FakeLogger
from tests.settings import get_test_settings


@pytest.fixture
def logger():
    return FakeLogger()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def test_settings():
    return get_test_settings()
