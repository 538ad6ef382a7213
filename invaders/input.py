"""Input sampling: the intent the core reads once per tick."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class Key(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    FIRE = "fire"


@dataclass(frozen=True, slots=True)
class InputState:
    left: bool = False
    right: bool = False
    fire: bool = False


IDLE_INPUT = InputState()


class InputSampler(Protocol):
    def sample(self) -> InputState: ...

    def clear(self) -> None:
        """Forget held and latched input. Called when a game starts or resets."""
        ...


class KeyState:
    """In-memory sampler fed by a frontend's key events.

    Left and right are mutually exclusive: pressing one releases the other.
    Fire is latched on press and consumed by the next ``sample()``, so holding
    the key fires once.
    """

    def __init__(self) -> None:
        self._left = False
        self._right = False
        self._fire_latched = False

    def press(self, key: Key) -> None:
        if key is Key.LEFT:
            self._left = True
            self._right = False
        elif key is Key.RIGHT:
            self._right = True
            self._left = False
        elif key is Key.FIRE:
            self._fire_latched = True

    def release(self, key: Key) -> None:
        if key is Key.LEFT:
            self._left = False
        elif key is Key.RIGHT:
            self._right = False

    def sample(self) -> InputState:
        fire = self._fire_latched
        self._fire_latched = False
        return InputState(left=self._left, right=self._right, fire=fire)

    def clear(self) -> None:
        self._left = False
        self._right = False
        self._fire_latched = False
