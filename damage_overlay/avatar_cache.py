"""Thread-safe avatar image cache keyed by player name."""
from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional


class AvatarCache:
    """Name -> pre-scaled avatar store shared between the render path and event threads.

    Lookups read the current dict without locking; inserts and clears are
    serialised. ``clear`` swaps in a fresh dict so readers never observe a
    half-emptied mapping, and bumps a generation so images built before the
    clear are not stored afterwards.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[str, Any] = {}
        self._generation = 0

    def get(self, name: str) -> Optional[Any]:
        return self._entries.get(name)

    def put(self, name: str, image: Any) -> None:
        with self._lock:
            self._entries[name] = image

    def get_or_create(self, name: str, factory: Callable[[], Any]) -> Any:
        cached = self._entries.get(name)
        if cached is not None:
            return cached
        generation = self._generation
        image = factory()
        if image is None:
            return None
        with self._lock:
            if generation != self._generation:
                return image
            # Another thread may have populated the entry while the factory ran.
            existing = self._entries.get(name)
            if existing is not None:
                return existing
            self._entries[name] = image
        return image

    def clear(self) -> None:
        with self._lock:
            self._entries = {}
            self._generation += 1

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
