from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from ..core.bid import FACES, Bid
from ..core.rules import counted_faces


class Agent(ABC):
    """
    Abstract base class for all Liar's Dice agents.
    Agents must implement choose_action(view), which receives a player-specific view of the
    game state (see GameEngine.get_view) and returns an Action.
    Common agent utilities live here for reuse.
    """

    @abstractmethod
    def choose_action(self, view: Any):
        """
        Given a player-specific view, return the next Action to take.
        Args:
            view (dict): Player view with keys 'public', 'my_hand', 'total_dice' and 'rules'.
        Returns:
            Action: The action to take (BidAction or CallLiarAction).
        """
        raise NotImplementedError

    def my_count_of_face(self, my_hand: Dict[int, int], face: int, wilds: Iterable[int] = ()) -> int:
        """
        Count how many of the agent's dice count toward a bid on `face`, wild faces included.
        Args:
            my_hand (dict): The agent's per-face counts.
            face (int): The face value to count.
            wilds (iterable): Wild faces from the rules.
        Returns:
            int: Number of own dice matching the bid face.
        """
        return sum(my_hand.get(f, 0) for f in counted_faces(face, wilds))

    def call_liar_deterministic(self, my_hand, last_bid: Optional[Bid], total_dice: int, wilds=()) -> bool:
        """
        Returns True if even with every opponent die matching, the last bid cannot be true.
        """
        if last_bid is None:
            return False
        opponent_max = max(0, total_dice - sum(my_hand.values()))
        return self.my_count_of_face(my_hand, last_bid.face, wilds) + opponent_max < last_bid.quantity

    def min_raise(self, last_bid: Optional[Bid], total_dice: int) -> Optional[Bid]:
        """
        The lowest legal bid above last_bid, or None if every legal quantity is used up.
        """
        if last_bid is None:
            return Bid(1, 1)
        if last_bid.face < FACES:
            return Bid(last_bid.quantity, last_bid.face + 1)
        if last_bid.quantity + 1 <= total_dice:
            return Bid(last_bid.quantity + 1, 1)
        return None
