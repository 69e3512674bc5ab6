
"""
actions.py
Defines the base Action type and concrete action classes for the Liar's Dice game engine.
Actions represent moves that players can make (bidding, calling liar or forfeiting).
Related modules:
- bid.py: Defines the Bid model used in BidAction.
- engine.py: Consumes Action objects in apply_action.
"""

from dataclasses import dataclass
from .bid import Bid



class Action:
    """
    Base class for all game actions.
    """
    pass



@dataclass(frozen=True)
class BidAction(Action):
    """
    A player claims there are at least 'quantity' dice showing 'face'.
    Args:
        bid (Bid): The bid being placed.
    """
    bid: Bid



@dataclass(frozen=True)
class CallLiarAction(Action):
    """
    Calling 'liar' on the standing bid; triggers a reveal and resolution in the engine.
    """
    pass



@dataclass(frozen=True)
class ForfeitAction(Action):
    """
    Giving up: the player drops to zero dice and a new round starts without them.
    """
    pass
