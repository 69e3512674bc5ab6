
"""
recorder.py
Implements event recording for Liar's Dice games. Recorders receive a stream of GameEvent
objects from the engine for replay, analysis, or persistence.
InMemoryRecorder is used for tests and in-memory analysis; JsonLinesRecorder appends one
JSON document per event to a file.
Related modules:
- events.py: Defines GameEvent type.
- serializer.py: Used to encode events for JsonLinesRecorder.
"""

from typing import List
from .events import GameEvent
from . import serializer


class InMemoryRecorder:
    """
    Records GameEvent objects in memory for later retrieval.
    Methods:
        record(event): Add a new event.
        events(): Get all recorded events.
        flush(): No-op for in-memory; used in file recorders.
    """
    def __init__(self):
        self._events: List[GameEvent] = []

    def record(self, event: GameEvent) -> None:
        """Add a new event to the recorder."""
        self._events.append(event)

    def events(self):
        """Return all recorded events as a list."""
        return list(self._events)

    def flush(self):
        """No-op for in-memory recorder."""
        pass


class JsonLinesRecorder(InMemoryRecorder):
    """
    Buffers events in memory and appends them to `path` as JSON lines on flush().
    """
    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self._written = 0

    def flush(self):
        pending = self._events[self._written:]
        if not pending:
            return
        with open(self.path, "a", encoding="utf-8") as f:
            for event in pending:
                f.write(serializer.dumps(event) + "\n")
        self._written = len(self._events)
