
"""
service.py
Defines SharedTable, a thin wrapper that lets several threads (e.g. request handlers) drive
one GameEngine. Each call holds the table lock for exactly one engine operation, so the
roster, hands, bid and turn are never observed mid-transition.
Related modules:
- engine.py: The wrapped session.
"""

import threading
from typing import List, Optional

from .config import Rules
from .dice import RandomSource
from .engine import GameEngine
from .state import LiarResult, Player


class SharedTable:
    def __init__(self, engine: Optional[GameEngine] = None, rules: Optional[Rules] = None,
                 rng: Optional[RandomSource] = None):
        self.engine = engine or GameEngine(rules, rng=rng)
        self._lock = threading.Lock()

    def add(self, player_id: str) -> None:
        with self._lock:
            self.engine.add(player_id)

    def start(self, bidder: int = 0) -> None:
        with self._lock:
            self.engine.start(bidder)

    def bid(self, player_id: str, quantity: int, face: int) -> None:
        with self._lock:
            self.engine.bid(player_id, quantity, face)

    def liar(self, player_id: str) -> LiarResult:
        with self._lock:
            return self.engine.liar(player_id)

    def forfeit(self, player_id: str) -> None:
        with self._lock:
            self.engine.forfeit(player_id)

    def player(self, player_id: str) -> Player:
        with self._lock:
            return self.engine.player(player_id)

    def players(self) -> List[Player]:
        with self._lock:
            return self.engine.players()

    def rules(self) -> Rules:
        return self.engine.rules()
