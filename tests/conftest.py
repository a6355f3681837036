"""Pytest configuration and shared fixtures."""

import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

from jungle_platformer.physics import PhysicsWorld
from jungle_platformer.config import GameConfig
from jungle_platformer.controls import InputSnapshot
from jungle_platformer.events import EventEmitter


@pytest.fixture
def physics():
    """Fresh physics world for each test."""
    return PhysicsWorld()


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def events():
    return EventEmitter()


@pytest.fixture
def idle():
    """No keys held."""
    return InputSnapshot()


class EventRecorder:
    """Collects emitted signals as (name, args) tuples."""

    def __init__(self, emitter, *names):
        self.calls = []
        for name in names:
            emitter.on(name, lambda *args, _name=name: self.calls.append((_name, args)))

    def named(self, name):
        return [args for n, args in self.calls if n == name]


@pytest.fixture
def recorder():
    return EventRecorder
