
"""
engine.py
Implements the GameEngine class, which manages a single Liar's Dice session from seating to
the last player holding dice: dealing rounds, validating and committing bids, resolving Liar
calls and forfeits, and emitting events.
Related modules:
- config.py: Rules configure the engine.
- roster.py: Seating order, dice counts and hands.
- turns.py: Next-bidder search that skips eliminated players.
- bid.py: Bid codec and ordering.
- rules.py: Counting matches with wild faces.
- state.py: PublicState, Player and LiarResult.
- errors.py: Exceptions raised for rejected operations.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from .actions import Action, BidAction, CallLiarAction, ForfeitAction
from .bid import FACES, Bid, encode
from .config import Rules
from .dice import RandomSource, SeededRandom, roll_hand, empty_hand
from .errors import (
    AlreadyLostError,
    BidTooLowError,
    IllegalMoveError,
    InvalidFaceError,
    InvalidQuantityError,
    NoBidderError,
    NoStandingBidError,
    NotEnoughPlayersError,
    NotExistError,
    OutOfTurnError,
    PhaseError,
)
from .roster import Roster
from .rules import count_matches, counted_faces
from .state import BIDDING, LIAR_CALLED, OVER, PENDING, ROUND_START, LiarResult, Player, PublicState
from .turns import next_bidder
from ..persistence.events import GameEvent

logger = logging.getLogger(__name__)


class GameEngine:
    """
    State machine for one Liar's Dice session. Every public operation either raises before
    touching any state or applies all of its effects.
    Agents interact with it via get_view and apply_action; other callers use add, start,
    bid, liar and forfeit directly.
    """
    def __init__(self, rules: Optional[Rules] = None, rng: Optional[RandomSource] = None,
                 recorder=None, game_id: Optional[str] = None):
        """
        Initialize a new, pending session.
        Args:
            rules (Rules|None): Game rules; defaults to Rules().
            rng (RandomSource|None): Randomness used to roll hands; defaults to an OS-seeded SeededRandom.
            recorder: Optional recorder receiving a GameEvent for every emitted event.
            game_id (str|None): Identifier stamped on recorded events.
        """
        self._rules = rules or Rules()
        self.rng = rng or SeededRandom()
        self.recorder = recorder
        self.game_id = game_id or uuid.uuid4().hex[:16]
        self.roster = Roster(self._rules.dice)
        self.public = PublicState()
        self._events: List[Dict[str, Any]] = []
        # turn_log contains per-operation snapshots that can be serialized to JSON
        self.turn_log: List[Dict[str, Any]] = []

    # Events are simple dicts
    def _emit(self, event: Dict[str, Any]):
        self._events.append(event)
        if self.recorder is not None:
            payload = {k: v for k, v in event.items() if k != "type"}
            self.recorder.record(GameEvent(game_id=self.game_id, event_type=event["type"],
                                           payload=payload, player_id=event.get("player")))

    def pop_events(self) -> List[Dict[str, Any]]:
        """
        Return and clear all emitted events since last call.
        """
        ev = list(self._events)
        self._events.clear()
        return ev

    def get_events(self) -> List[Dict[str, Any]]:
        """Return all events not yet popped (does not clear)."""
        return list(self._events)

    def _snapshot(self, actor: Optional[str] = None, action: Optional[Dict] = None):
        """
        Internal: Record a snapshot of the current state for logging/replay.
        Args:
            actor (str|None): Player who made the action.
            action (dict|None): Action that produced this state.
        """
        players_snapshot = []
        for player_id in self.roster:
            players_snapshot.append({
                "player_id": player_id,
                "dice": self.roster.cups[player_id],
                "hand": dict(self.roster.hands[player_id]),
            })
        last_bid = self.public.last_bid
        public_snapshot = {
            "round_index": self.public.round_index,
            "turn_index": self.public.turn_index,
            "bidder": self._seat_id(self.public.bidder),
            "prev": self._seat_id(self.public.prev),
            "last_bid": None if last_bid is None else (last_bid.quantity, last_bid.face),
            "bid_history": [(b.quantity, b.face) for b in self.public.bid_history],
            "phase": self.public.phase,
            "winner": self.public.winner,
        }
        snap = {
            "actor": actor,
            "action": action,
            "public": public_snapshot,
            "players": players_snapshot,
        }
        self.turn_log.append(snap)
        return snap

    def _seat_id(self, seat: Optional[int]) -> Optional[str]:
        if seat is None or seat >= len(self.roster):
            return None
        return self.roster.at(seat)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def rules(self) -> Rules:
        return self._rules

    def player(self, player_id: str) -> Player:
        """
        Look up a player by id.
        Raises:
            NotExistError: If the player is not seated.
        """
        return self.roster.get(player_id)

    def players(self) -> List[Player]:
        return [self.roster.get(p) for p in self.roster]

    def alive(self) -> List[str]:
        return self.roster.alive()

    def total_dice(self) -> int:
        return self.roster.total_dice()

    @property
    def phase(self) -> str:
        return self.public.phase

    @property
    def winner(self) -> Optional[str]:
        return self.public.winner

    def current_bidder(self) -> Optional[str]:
        if self.public.phase == PENDING:
            return None
        return self.roster.at(self.public.bidder)

    def is_over(self) -> bool:
        return self.public.phase == OVER

    def get_view(self, player_id: str) -> Dict[str, Any]:
        """
        Get a player-specific view of the game state (public info + own hand).
        Args:
            player_id (str): Player id.
        Returns:
            dict: Player view for agent decision-making.
        """
        p = self.roster.get(player_id)
        return {
            "player_id": player_id,
            "public": self.public,
            "my_hand": dict(p.hand),
            "dice_counts": dict(self.roster.cups),
            "total_dice": self.roster.total_dice(),
            "rules": self._rules,
        }

    # ------------------------------------------------------------------
    # Setup and rounds
    # ------------------------------------------------------------------
    def add(self, player_id: str) -> None:
        """
        Seat a player with the starting dice.
        Raises:
            PhaseError: If the game has already started.
            AlreadyExistsError: If the id is already seated.
        """
        if self.public.phase != PENDING:
            raise PhaseError("players cannot join a game in progress")
        seat = self.roster.add(player_id)
        logger.debug("Player %s seated at %d", player_id, seat)
        self._emit({"type": "PlayerJoined", "player": player_id, "seat": seat})

    def start(self, bidder: int = 0) -> None:
        """
        Start a pending game: deal the first round with the given seat to bid first.
        Args:
            bidder (int): Seat index of the starting bidder.
        Raises:
            PhaseError: If the game was already started.
            NotEnoughPlayersError: If fewer than two players hold dice.
            NotExistError: If the seat index is outside the seating order.
        """
        if self.public.phase != PENDING:
            raise PhaseError("game already started")
        if len(self.roster.alive()) < 2:
            raise NotEnoughPlayersError()
        if not 0 <= bidder < len(self.roster):
            raise NotExistError()
        if self.roster.dice_at(bidder) == 0:
            # the seat forfeited before the start
            bidder = next_bidder(self.roster, bidder)
        self._deal(bidder)
        self._snapshot(actor=None, action={"type": "Start"})

    def _deal(self, bidder: int) -> None:
        """
        Internal: roll a fresh hand for every player with dice and reset the bid.
        """
        for player_id in self.roster:
            dice = self.roster.cups[player_id]
            self.roster.hands[player_id] = roll_hand(dice, self.rng) if dice > 0 else empty_hand()
        self.public.round_index += 1
        self.public.turn_index = 0
        self.public.bidder = bidder
        self.public.prev = None
        self.public.bid = 0
        self.public.bid_history = []
        self.public.phase = ROUND_START
        starter = self.roster.at(bidder)
        logger.info("Round %d started with %d dice in play; %s bids first",
                    self.public.round_index, self.roster.total_dice(), starter)
        logger.debug("Hands: %s", self.roster.hands)
        self._emit({"type": "RoundStarted", "round": self.public.round_index, "bidder": starter})
        self._emit({"type": "DiceRolled",
                    "hands": {p: dict(h) for p, h in self.roster.hands.items()}})

    def _next_round(self, seat: int) -> bool:
        """
        Internal: start the next round at `seat`, or at the next player after it if that seat
        is out of dice. Ends the game instead when fewer than two players hold dice.
        Returns:
            bool: True if a round was dealt, False if the game is over.
        """
        alive = self.roster.alive()
        if len(alive) < 2:
            self._finish(alive)
            return False
        if self.roster.dice_at(seat) == 0:
            seat = next_bidder(self.roster, seat)
        self._deal(seat)
        return True

    def _finish(self, alive: List[str]) -> None:
        winner = alive[0] if alive else None
        self.public.phase = OVER
        self.public.winner = winner
        self.public.prev = None
        self.public.bid = 0
        self.public.bid_history = []
        if winner is not None:
            self.public.bidder = self.roster.index_of(winner)
        logger.info("Game over after %d rounds; winner: %s", self.public.round_index, winner)
        self._emit({"type": "GameOver", "winner": winner, "rounds": self.public.round_index})

    # ------------------------------------------------------------------
    # Turn operations
    # ------------------------------------------------------------------
    def _check_turn(self, player_id: str) -> None:
        if not self.roster.exists(player_id):
            raise NotExistError(player_id)
        if self.public.phase == PENDING:
            raise PhaseError("game has not started")
        if self.public.phase == OVER:
            raise NoBidderError("game is over")
        if player_id != self.roster.at(self.public.bidder):
            raise OutOfTurnError(player_id)

    def bid(self, player_id: str, quantity: int, face: int) -> None:
        """
        Raise the standing bid to `quantity` dice showing `face` and pass the turn on.
        Args:
            player_id (str): Bidding player; must be the current bidder.
            quantity (int): Dice claimed, between 0 and the dice left in the game.
            face (int): Face claimed, between 0 and 6.
        Raises:
            NotExistError, OutOfTurnError, InvalidFaceError, InvalidQuantityError,
            BidTooLowError: The bid was rejected; nothing changed.
            NoBidderError: Nobody else holds dice; the game has ended.
        """
        self._check_turn(player_id)
        if not 0 <= face <= FACES:
            raise InvalidFaceError(face)
        total = self.roster.total_dice()
        if not 0 <= quantity <= total:
            raise InvalidQuantityError(quantity, total)
        code = encode(quantity, face)
        if code <= self.public.bid:
            current = Bid.from_code(self.public.bid)
            raise BidTooLowError(current.quantity, current.face)

        n = next_bidder(self.roster, self.public.bidder)

        self.public.prev = self.public.bidder
        self.public.bid = code
        self.public.bidder = n
        self.public.bid_history.append(Bid.from_code(code))
        self.public.turn_index += 1
        self.public.phase = BIDDING
        logger.debug("%s bid %dx%d; %s to act", player_id, quantity, face, self.roster.at(n))
        self._emit({"type": "BidPlaced", "player": player_id, "bid": (quantity, face)})
        self._snapshot(actor=player_id, action={"type": "Bid", "bid": (quantity, face)})

    def liar(self, player_id: str) -> LiarResult:
        """
        Call Liar on the standing bid. The bid is a lie when fewer dice than claimed show
        the bid face or a wild face. The previous bidder loses a die for a lie, otherwise
        the caller does, and a new round starts with the loser (or, if the loser is out,
        the next player after them).
        Args:
            player_id (str): Calling player; must be the current bidder.
        Returns:
            LiarResult: Outcome of the call.
        Raises:
            NotExistError, OutOfTurnError, NoStandingBidError: The call was rejected.
            NoBidderError: The game had already ended.
        """
        self._check_turn(player_id)
        if self.public.bid == 0 or self.public.prev is None:
            raise NoStandingBidError()

        called = Bid.from_code(self.public.bid)
        matched = count_matches(self.roster.hands, counted_faces(called.face, self._rules.wilds))
        lying = matched < called.quantity

        accuser_seat = self.public.bidder
        accused_seat = self.public.prev
        loser_seat = accused_seat if lying else accuser_seat
        accused = self.roster.at(accused_seat)
        loser = self.roster.at(loser_seat)

        self.public.phase = LIAR_CALLED
        self._emit({"type": "LiarCalled", "player": player_id, "accused": accused,
                    "bid": (called.quantity, called.face)})
        self._emit({"type": "DiceRevealed",
                    "hands": {p: dict(h) for p, h in self.roster.hands.items()},
                    "matched": matched, "lying": lying})

        left = self.roster.remove_die(loser)
        logger.info("%s called Liar on %s (%s, %d matching): %s loses a die, %d left",
                    player_id, accused, called, matched, loser, left)
        self._emit({"type": "DieLost", "player": loser, "dice": left})
        if left == 0:
            self.roster.clear(loser)
            logger.info("%s eliminated", loser)
            self._emit({"type": "PlayerEliminated", "player": loser})

        dealt = self._next_round(loser_seat)
        result = LiarResult(
            lying=lying,
            accuser_id=player_id,
            accused_id=accused,
            loser_id=loser,
            quantity=called.quantity,
            face=called.face,
            matched=matched,
            game_over=not dealt,
        )
        self._snapshot(actor=player_id, action={"type": "CallLiar", "lying": lying, "loser": loser})
        return result

    def forfeit(self, player_id: str) -> None:
        """
        Drop a player to zero dice. Once play has begun a new round starts with the next
        eligible player after the current bidder.
        Raises:
            NotExistError: If the player is not seated.
            AlreadyLostError: If the player has no dice left.
            NoBidderError: If the game had already ended.
        """
        if not self.roster.exists(player_id):
            raise NotExistError(player_id)
        if self.roster.cups[player_id] == 0:
            raise AlreadyLostError(player_id)
        if self.public.phase == OVER:
            raise NoBidderError("game is over")

        self.roster.clear(player_id)
        logger.info("%s forfeited", player_id)
        self._emit({"type": "PlayerForfeited", "player": player_id})
        if self.public.phase != PENDING:
            alive = self.roster.alive()
            if len(alive) < 2:
                self._finish(alive)
            else:
                self._deal(next_bidder(self.roster, self.public.bidder))
        self._snapshot(actor=player_id, action={"type": "Forfeit"})

    def apply_action(self, player_id: str, action: Action) -> Optional[LiarResult]:
        """
        Apply an agent's action for the given player.
        Args:
            player_id (str): Acting player.
            action (Action): BidAction, CallLiarAction or ForfeitAction.
        Returns:
            LiarResult|None: The Liar outcome for CallLiarAction, otherwise None.
        Raises:
            GameError: If the action is rejected.
        """
        if isinstance(action, BidAction):
            self.bid(player_id, action.bid.quantity, action.bid.face)
            return None
        if isinstance(action, CallLiarAction):
            return self.liar(player_id)
        if isinstance(action, ForfeitAction):
            self.forfeit(player_id)
            return None
        raise IllegalMoveError("Unknown action")
