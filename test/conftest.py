import pytest

from helpers import PUSH_URL, FakeExpo
from push_relay.config import Settings


@pytest.fixture
def settings():
    return Settings(expo_push_url=PUSH_URL, request_timeout_seconds=5.0)


@pytest.fixture
def fake_expo():
    return FakeExpo()
