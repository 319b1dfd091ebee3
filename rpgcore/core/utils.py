"""
Utilities module for the rules core.

Provides the singleton metaclass and the random helpers every probability
check goes through.
"""

from __future__ import annotations

import random
from typing import Any, Generic

from typing_extensions import TypeVar


# ---- Singleton Metaclass ----


_T = TypeVar("_T")


class Singleton(type, Generic[_T]):
    """
    Metaclass that returns the same instance every time.

    Calling the class again with arguments re-runs the initializer on the
    existing instance.
    """

    _instances: dict[Singleton[_T], _T] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> _T:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        elif args or kwargs:
            cls._instances[cls].__init__(*args, **kwargs)
        return cls._instances[cls]


# ---- Randomness ----


def get_rng(rng: random.Random | None = None) -> Any:
    """
    Returns the random source to draw from.

    Args:
        rng (random.Random | None): An injected generator, if any.

    Returns:
        Any: The injected generator, or the `random` module itself.

    """
    return random if rng is None else rng


def roll_chance(chance: float, rng: random.Random | None = None) -> bool:
    """
    Draws one uniform sample in [0, 1) and compares it against `chance`.

    A chance of 0 never succeeds and a chance of 1 or more always does.

    Args:
        chance (float): Probability of success.
        rng (random.Random | None): Optional injected generator.

    Returns:
        bool: True if the roll succeeded.

    """
    return get_rng(rng).random() < chance


def random_range(low: float, high: float, rng: random.Random | None = None) -> float:
    """
    Draws a uniform sample in [low, high).

    Args:
        low (float): Lower bound.
        high (float): Upper bound.
        rng (random.Random | None): Optional injected generator.

    Returns:
        float: The sampled value.

    """
    return low + get_rng(rng).random() * (high - low)
