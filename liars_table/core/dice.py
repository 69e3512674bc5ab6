
"""
dice.py
Defines the randomness capability the engine consumes and the dice rolling utilities built on it.
Related modules:
- engine.py: Uses roll_hand to deal each player a fresh hand at round start.
"""

import random
from typing import Dict, Optional, Protocol

from .bid import FACES

Hand = Dict[int, int]


class RandomSource(Protocol):
    """
    Anything that can return a uniformly distributed index in [0, bound).
    """

    def next_index(self, bound: int) -> int:
        ...


class SeededRandom:
    """
    RandomSource backed by a random.Random instance.
    Args:
        seed (int|None): Seed for deterministic games; None seeds from the OS.
        rng (random.Random|None): Existing generator to wrap instead of creating one.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random(seed)

    def next_index(self, bound: int) -> int:
        return self.rng.randrange(bound)


def empty_hand() -> Hand:
    return {face: 0 for face in range(1, FACES + 1)}


def roll_die(source: RandomSource) -> int:
    """
    Roll a single six-sided die using the provided randomness source.
    Args:
        source (RandomSource): Randomness capability.
    Returns:
        int: Die face (1-6).
    """
    return source.next_index(FACES) + 1


def roll_hand(n: int, source: RandomSource) -> Hand:
    """
    Roll n six-sided dice and record them as per-face counts.
    Args:
        n (int): Number of dice to roll.
        source (RandomSource): Randomness capability.
    Returns:
        dict[int, int]: Count of dice showing each face 1-6; counts sum to n.
    """
    hand = empty_hand()
    for _ in range(n):
        hand[roll_die(source)] += 1
    return hand


def hand_faces(hand: Hand):
    """Expand a per-face hand into a sorted list of faces, e.g. {2: 1, 5: 2} -> [2, 5, 5]."""
    return [face for face in sorted(hand) for _ in range(hand[face])]
