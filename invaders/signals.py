"""SignalBus - the game's event catalogue, queued during a tick and flushed after it."""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Mapping

from invaders.types import SIGNAL_FIELDS, SignalError

Handler = Callable[[str, dict[str, Any]], None]


class SignalBus:
    """Queues game signals and delivers them on ``flush()``.

    Only names from the catalogue (``SIGNAL_FIELDS`` by default) may be
    subscribed to or published, and every publish must carry exactly the
    payload fields its signal declares. Signals published by a handler during
    a flush are delivered on the next flush. Delivered signals are tallied
    per name until ``clear()``, which gives a running account of the current
    game (shots fired, enemies destroyed, reversals).
    """

    def __init__(self, catalogue: Mapping[str, frozenset[str]] = SIGNAL_FIELDS) -> None:
        self._catalogue = dict(catalogue)
        self._handlers: dict[str, list[Handler]] = {name: [] for name in self._catalogue}
        self._queue: list[tuple[str, dict[str, Any]]] = []
        self._tally: Counter[str] = Counter()

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._catalogue)

    def _check_name(self, name: str) -> None:
        if name not in self._catalogue:
            raise SignalError(f"Unknown signal {name!r}")

    def subscribe(self, name: str, handler: Handler) -> None:
        self._check_name(name)
        self._handlers[name].append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        self._check_name(name)
        if handler in self._handlers[name]:
            self._handlers[name].remove(handler)

    def publish(self, name: str, **data: Any) -> None:
        self._check_name(name)
        expected = self._catalogue[name]
        if set(data) != expected:
            missing = sorted(expected - set(data))
            extra = sorted(set(data) - expected)
            raise SignalError(f"{name} payload mismatch: missing {missing}, unexpected {extra}")
        self._queue.append((name, data))

    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> int:
        """Deliver queued signals in publish order. Returns how many were delivered."""
        batch, self._queue = self._queue, []
        for name, data in batch:
            self._tally[name] += 1
            for handler in list(self._handlers[name]):
                handler(name, data)
        return len(batch)

    def delivered(self, name: str) -> int:
        """How many ``name`` signals were flushed since the last ``clear()``."""
        self._check_name(name)
        return self._tally[name]

    def clear(self) -> None:
        """Drop pending signals and the delivery tally. Subscriptions stay."""
        self._queue.clear()
        self._tally.clear()
