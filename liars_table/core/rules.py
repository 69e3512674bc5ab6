
"""
rules.py
Defines helper functions for Liar's Dice rules: which faces count toward a bid and
how many dice across all hands match.
Related modules:
- engine.py: Uses counted_faces and count_matches to resolve Liar calls.
- config.py: Supplies the wild faces.
"""

from typing import Dict, FrozenSet, Iterable, Mapping


def counted_faces(face: int, wilds: Iterable[int]) -> FrozenSet[int]:
    """
    Faces that count toward a bid on `face`: the face itself plus every wild face.
    A bid on a wild face counts that face once.
    """
    return frozenset(wilds) | {face}


def count_matches(hands: Mapping[str, Dict[int, int]], faces: Iterable[int]) -> int:
    """
    Count the dice across all hands showing any of the given faces.
    Args:
        hands (dict): Mapping of player id to per-face counts.
        faces (iterable): Faces to count.
    Returns:
        int: Total count of matching dice.
    """
    faces = frozenset(faces)
    count = 0
    for hand in hands.values():
        count += sum(n for face, n in hand.items() if face in faces)
    return count
