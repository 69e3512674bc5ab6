
"""
config.py
Defines the Rules dataclass, which holds the rule options a session is created with.
Rules are immutable for the lifetime of a session.
Related modules:
- engine.py: Uses Rules to seed dice counts and to resolve Liar calls.
- rules.py: Reads the wild faces when counting matches.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

ALL_FACES = frozenset(range(1, 7))


@dataclass(frozen=True)
class Rules:
    """
    Rule options for a Liar's Dice session.
    Fields:
        dice (int): Number of dice each player starts with.
        wilds (frozenset[int]): Faces that count toward every bid's face at resolution.
    """
    dice: int = 5
    wilds: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self):
        if not isinstance(self.dice, int) or self.dice < 1:
            raise ValueError("dice must be a positive integer")
        # accept any iterable of faces but always store a frozenset
        object.__setattr__(self, "wilds", frozenset(self.wilds))
        if not self.wilds <= ALL_FACES:
            raise ValueError("wild faces must be between 1 and 6")

    def is_wild(self, face: int) -> bool:
        return face in self.wilds

    @classmethod
    def from_options(cls, dice: Optional[int] = None, wilds: Optional[Iterable[int]] = None) -> "Rules":
        """
        Build Rules from loosely typed options (e.g. parsed CLI arguments), falling back to defaults.
        Args:
            dice (int|None): Starting dice per player.
            wilds (iterable|None): Wild faces.
        Returns:
            Rules: Validated rules.
        Raises:
            ValueError: If an option is out of range.
        """
        kwargs = {}
        if dice is not None:
            kwargs["dice"] = int(dice)
        if wilds is not None:
            kwargs["wilds"] = frozenset(int(w) for w in wilds)
        return cls(**kwargs)
