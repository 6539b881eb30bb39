"""Drop results of superseded generation requests.

A caller that regenerates on every settings change may have several
generations in flight; only the most recently started one may publish.

    guard = GenerationGuard()
    token = guard.begin()
    assets = generate_raster_assets(image, settings)
    guard.commit(token, assets, show)
"""

from __future__ import annotations

import itertools
import threading
from typing import Callable, TypeVar

T = TypeVar("T")


class GenerationGuard:
    def __init__(self):
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    @property
    def latest(self) -> int:
        return self._latest

    def begin(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest

    def commit(self, token: int, result: T, sink: Callable[[T], object]) -> bool:
        """Hand ``result`` to ``sink`` if ``token`` is still the latest request.

        ``sink`` runs outside the lock, so it may call back into the guard.
        """
        with self._lock:
            current = token == self._latest
        if not current:
            return False
        sink(result)
        return True
