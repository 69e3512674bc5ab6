
"""
bid.py
Defines the bid codec for Liar's Dice: a (quantity, face) pair is packed into a single
integer that is monotonically increasing in both components, so "strictly higher bid"
is plain integer comparison.
Related modules:
- engine.py: Stores the current bid as a code and compares proposed bids against it.
- actions.py: Uses Bid in BidAction.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

FACES = 6


def encode(quantity: int, face: int) -> int:
    """
    Map a two-component bid to its monotonic code.
    No validation is done here; callers range-check face to [0, 6] first.
    Args:
        quantity (int): Number of dice claimed.
        face (int): Face claimed.
    Returns:
        int: quantity * 6 + face
    """
    return quantity * FACES + face


def decode(code: int) -> Tuple[int, int]:
    """
    Map a bid code back to (quantity, face). Exact inverse of encode for face < 6.
    """
    return divmod(code, FACES)



@dataclass(frozen=True)
class Bid:
    """
    Represents a bid in Liar's Dice: a claim about the quantity and face value of dice.
    Args:
        quantity (int): Number of dice claimed.
        face (int): Face value claimed (1-6, 0 meaning none).
    """
    quantity: int
    face: int

    @property
    def code(self) -> int:
        return encode(self.quantity, self.face)

    @classmethod
    def from_code(cls, code: int) -> 'Bid':
        """
        Build the bid a code stands for.
        encode(q, 6) and encode(q + 1, 0) share a code; the face-6 reading is returned,
        since that is the face a player can actually name.
        Args:
            code (int): Encoded bid (0 means no bid).
        Returns:
            Bid: Decoded bid.
        """
        quantity, face = decode(code)
        if face == 0 and quantity > 0:
            return cls(quantity - 1, FACES)
        return cls(quantity, face)

    def is_higher_than(self, other: Optional['Bid']) -> bool:
        """
        Checks if this bid is strictly higher than another bid.
        Args:
            other (Bid): The previous bid to compare against (or None).
        Returns:
            bool: True if this bid is higher, False otherwise.
        """
        if other is None:
            return True
        return self.code > other.code

    def __str__(self) -> str:
        return f"{self.quantity}x{self.face}"
