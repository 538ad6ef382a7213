"""Projectile manager - bounded list of in-flight shots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from invaders.collision import CollisionResolver, Hit


@dataclass
class Projectile:
    """A shot anchored at its bottom-centre. Velocity is per tick, not per second."""

    x: float
    y: float
    velocity: float


class ProjectileManager:
    def __init__(self, capacity: int, forward_bound: float) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._forward_bound = forward_bound
        self._projectiles: list[Projectile] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._projectiles)

    def can_fire(self) -> bool:
        return len(self._projectiles) < self._capacity

    def fire(self, x: float, y: float, velocity: float) -> bool:
        """Append a projectile. Returns False without change when at capacity."""
        if not self.can_fire():
            return False
        self._projectiles.append(Projectile(x, y, velocity))
        return True

    def advance(self, resolver: CollisionResolver) -> list[Hit]:
        """Resolve, retire or move every live projectile once.

        A projectile that hits is removed before it moves; one already past
        the forward bound is removed without scoring.
        """
        hits: list[Hit] = []
        survivors: list[Projectile] = []
        for projectile in self._projectiles:
            hit = resolver.resolve(projectile)
            if hit is not None:
                hits.append(hit)
                continue
            if projectile.y > self._forward_bound:
                continue
            projectile.y += projectile.velocity
            survivors.append(projectile)
        self._projectiles = survivors
        return hits

    def visible(self) -> Iterator[Projectile]:
        """Live projectiles, never more than the capacity."""
        return iter(self._projectiles[: self._capacity])

    def clear(self) -> None:
        self._projectiles.clear()
