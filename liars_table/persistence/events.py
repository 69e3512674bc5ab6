
"""
events.py
Defines the GameEvent dataclass for event-sourced recording of game actions and state changes.
Used by engine.py to hand every emitted event to a recorder for replay, analysis, or persistence.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class GameEvent:
    """
    Represents a single event in the game (e.g., dice rolled, bid placed, die lost).
    Fields:
        game_id (str): Unique game identifier.
        event_type (str): Type of event (e.g., 'BidPlaced').
        payload (dict): Event-specific data.
        player_id (str|None): Player the event concerns, when there is one.
    """
    game_id: str
    event_type: str
    payload: Dict[str, Any]
    player_id: Optional[str] = None
