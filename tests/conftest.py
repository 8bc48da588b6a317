"""Pytest fixtures for message center tests."""

import pytest

from messagecenter.lib.events import NotificationBus
from messagecenter.lib.message_center import MessageCenter
from messagecenter.lib.settings import Settings


class Recorder:
    """Callable that remembers every payload it was called with."""

    def __init__(self):
        self.calls = []

    def __call__(self, data=None):
        self.calls.append(data)


@pytest.fixture
def bus():
    """A fresh, isolated bus per test."""
    return NotificationBus("test")


@pytest.fixture
def center(bus):
    """A MessageCenter on the isolated bus."""
    mc = MessageCenter(bus=bus, scope="test")
    yield mc
    mc.remove()


@pytest.fixture
def strict_settings():
    settings = Settings()
    settings.set("strict_names", True)
    return settings


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_recorder():
    return Recorder
