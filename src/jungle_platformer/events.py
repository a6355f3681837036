"""Minimal synchronous signal dispatch.

Controllers raise named signals (hearts changed, player died, ...) and the
simulation or presentation layer subscribes. Handlers run immediately, in
subscription order.
"""

from collections import defaultdict
from typing import Callable, Dict, List


PICKUP_COUNT_CHANGED = "pickup-count-changed"
HEARTS_CHANGED = "hearts-changed"
PLAYER_DIED = "player-died"
CAMERA_SHAKE = "camera-shake"
LEVEL_COMPLETE = "level-complete"


class EventEmitter:
    """Named signals with plain-callable handlers."""

    def __init__(self):
        self._handlers: Dict[str, List[Callable]] = defaultdict(list)

    def on(self, name: str, handler: Callable) -> None:
        self._handlers[name].append(handler)

    def off(self, name: str, handler: Callable) -> None:
        handlers = self._handlers.get(name)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, name: str, *args) -> None:
        # Copy so handlers may unsubscribe while being dispatched
        for handler in list(self._handlers.get(name, ())):
            handler(*args)

    def clear(self) -> None:
        self._handlers.clear()
