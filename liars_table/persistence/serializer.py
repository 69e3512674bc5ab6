
"""
serializer.py
Provides utility functions for serializing and deserializing game events and state to/from JSON.
Used by recorder.py and the match scripts to save/load data for analysis or replay.
"""

import dataclasses
import json
from typing import Any


def _default(o: Any):
    if dataclasses.is_dataclass(o) and not isinstance(o, type):
        return dataclasses.asdict(o)
    if isinstance(o, (set, frozenset)):
        return sorted(o)
    return getattr(o, '__dict__', str(o))


def dumps(obj: Any) -> str:
    """
    Serialize a Python object (including dataclasses and sets) to a JSON string.
    Args:
        obj: Object to serialize.
    Returns:
        str: JSON string.
    """
    return json.dumps(obj, default=_default)


def loads(s: str):
    """
    Deserialize a JSON string to a Python object (dict/list).
    Args:
        s (str): JSON string.
    Returns:
        object: Deserialized Python object.
    """
    return json.loads(s)
