
"""
roster.py
Defines the Roster: seating order of player ids with each player's remaining dice and hand.
Players are never removed; a player at 0 dice is eliminated but keeps their seat.
Related modules:
- engine.py: Owns a Roster per session.
- turns.py: Walks the seating order to find the next bidder.
"""

from typing import Dict, Iterator, List

from .dice import Hand, empty_hand
from .errors import AlreadyExistsError, NotExistError
from .state import Player


class Roster:
    def __init__(self, starting_dice: int):
        self.starting_dice = starting_dice
        self.order: List[str] = []
        self.cups: Dict[str, int] = {}
        self.hands: Dict[str, Hand] = {}

    def __len__(self) -> int:
        return len(self.order)

    def __iter__(self) -> Iterator[str]:
        return iter(self.order)

    def __contains__(self, player_id) -> bool:
        return self.exists(player_id)

    def exists(self, player_id: str) -> bool:
        return player_id in self.cups

    def add(self, player_id: str) -> int:
        """
        Seat a new player at the end of the order with the starting dice.
        Args:
            player_id (str): Player identifier.
        Returns:
            int: The new player's seat index.
        Raises:
            AlreadyExistsError: If the id is already seated.
        """
        if self.exists(player_id):
            raise AlreadyExistsError(player_id)
        self.order.append(player_id)
        self.cups[player_id] = self.starting_dice
        self.hands[player_id] = empty_hand()
        return len(self.order) - 1

    def get(self, player_id: str) -> Player:
        """
        Return a copy of the player's state.
        Raises:
            NotExistError: If the id is not seated.
        """
        if not self.exists(player_id):
            raise NotExistError(player_id)
        return Player(player_id=player_id, dice=self.cups[player_id], hand=dict(self.hands[player_id]))

    def index_of(self, player_id: str) -> int:
        if not self.exists(player_id):
            raise NotExistError(player_id)
        return self.order.index(player_id)

    def at(self, index: int) -> str:
        return self.order[index]

    def dice_at(self, index: int) -> int:
        return self.cups[self.order[index]]

    def alive(self) -> List[str]:
        """Ids of players still holding dice, in seating order."""
        return [p for p in self.order if self.cups[p] > 0]

    def total_dice(self) -> int:
        return sum(self.cups.values())

    def remove_die(self, player_id: str) -> int:
        """Take one die from a player, never going below zero. Returns the dice left."""
        self.cups[player_id] = max(0, self.cups[player_id] - 1)
        return self.cups[player_id]

    def clear(self, player_id: str) -> None:
        """Drop a player to zero dice and empty their hand."""
        self.cups[player_id] = 0
        self.hands[player_id] = empty_hand()
