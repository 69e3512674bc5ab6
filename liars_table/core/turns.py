
"""
turns.py
Turn order helper: finds the next seat that may bid, skipping eliminated players.
Related modules:
- roster.py: Provides the seating order and dice counts.
- engine.py: Advances the bidder after each bid and picks starting bidders after a loss.
"""

from .errors import NoBidderError
from .roster import Roster


def next_bidder(roster: Roster, current: int) -> int:
    """
    Scan forward from the seat after `current`, wrapping around, for a player with dice.
    The current seat itself is never returned, even if it still holds dice.
    Args:
        roster (Roster): Seated players.
        current (int): Seat index of the current bidder.
    Returns:
        int: Seat index of the next bidder.
    Raises:
        NoBidderError: If every other player is eliminated.
    """
    n = len(roster)
    for step in range(1, n):
        seat = (current + step) % n
        if roster.dice_at(seat) > 0:
            return seat
    raise NoBidderError()
