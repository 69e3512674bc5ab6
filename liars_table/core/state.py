
"""
state.py
Defines the game state dataclasses for Liar's Dice: Player, PublicState and LiarResult,
plus the session phase names.
Related modules:
- engine.py: Mutates and reads PublicState during play.
- roster.py: Builds Player records.
- bid.py: Used in bid history and last_bid.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .bid import Bid

# Session lifecycle. LIAR_CALLED is only observable inside a Liar resolution.
PENDING = "PENDING"
ROUND_START = "ROUND_START"
BIDDING = "BIDDING"
LIAR_CALLED = "LIAR_CALLED"
OVER = "OVER"


@dataclass
class Player:
    """
    Read-only copy of a single player's state.
    Fields:
        player_id (str): Opaque player identifier.
        dice (int): Dice remaining; 0 means eliminated.
        hand (dict[int, int]): Count of dice showing each face 1-6 (hidden from opponents).
    """
    player_id: str
    dice: int
    hand: Dict[int, int] = field(default_factory=dict)

    @property
    def eliminated(self) -> bool:
        return self.dice == 0


@dataclass
class PublicState:
    """
    Stores public state visible to all players and agents.
    Fields:
        round_index (int): Current round number (0 before the first round).
        turn_index (int): Bids made in the current round.
        bidder (int): Seat index of the player whose turn it is.
        prev (int|None): Seat index of the player who made the standing bid.
        bid (int): Standing bid code, 0 when nobody has bid this round.
        bid_history (list[Bid]): All bids this round.
        phase (str): PENDING, ROUND_START, BIDDING, LIAR_CALLED or OVER.
        winner (str|None): Id of the last player holding dice once the game is over.
    """
    round_index: int = 0
    turn_index: int = 0
    bidder: int = 0
    prev: Optional[int] = None
    bid: int = 0
    bid_history: List[Bid] = field(default_factory=list)
    phase: str = PENDING
    winner: Optional[str] = None

    @property
    def last_bid(self) -> Optional[Bid]:
        if self.bid == 0:
            return None
        return Bid.from_code(self.bid)


@dataclass(frozen=True)
class LiarResult:
    """
    Outcome of a Liar call.
    Fields:
        lying (bool): True if the called bid was not covered by the dice.
        accuser_id (str): Player who called Liar.
        accused_id (str): Player who made the called bid.
        loser_id (str): Player who lost a die.
        quantity (int): Quantity of the called bid.
        face (int): Face of the called bid.
        matched (int): Dice actually showing the face or a wild face.
        game_over (bool): True if the lost die ended the game.
    """
    lying: bool
    accuser_id: str
    accused_id: str
    loser_id: str
    quantity: int
    face: int
    matched: int
    game_over: bool = False
