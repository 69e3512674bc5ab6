import random

from liars_table.agents.base import Agent
from liars_table.agents import register_agent
from liars_table.core.actions import BidAction, CallLiarAction
from liars_table.core.bid import Bid, FACES
from liars_table.core.dice import hand_faces
from liars_table.core.rules import counted_faces


class HeuristicAgent(Agent):
    """
    Base class for heuristic agents: agents that implement some kind of deterministic strategy.
    Provides utility methods for subclasses which in turn will use these to decide on an action.
    Utility methods:
        - get_my_hand(view): Returns the agent's per-face counts.
        - get_last_bid(view): Returns the last bid placed (Bid or None).
        - get_wilds(view): Returns the wild faces from the rules.
        - get_num_dice(view): Returns the total number of dice in play.
    """
    def __init__(self, rng=None):
        super().__init__()
        self.rng = rng or random.Random()

    def get_my_hand(self, view):
        return view["my_hand"]

    def get_last_bid(self, view):
        return view["public"].last_bid

    def get_wilds(self, view):
        return view["rules"].wilds

    def get_num_dice(self, view):
        return view["total_dice"]

    def best_face(self, my_hand, wilds):
        """Face with the most of our own dice counting toward it (highest face on ties)."""
        return max(range(1, FACES + 1), key=lambda f: (self.my_count_of_face(my_hand, f, wilds), f))

    def expected_count(self, my_hand, face, total_dice, wilds):
        """Own matching dice plus the expected matches among the dice we cannot see."""
        unseen = total_dice - sum(my_hand.values())
        p = len(counted_faces(face, wilds)) / FACES
        return self.my_count_of_face(my_hand, face, wilds) + unseen * p


@register_agent("conservative")
class ConservativeAgent(HeuristicAgent):
    """
    ConservativeAgent:
    - If no bid has been made, opens with one die of a face it holds.
    - Calls liar as soon as the last bid is impossible or exceeds what it expects to be on the table.
    - Otherwise makes the smallest legal raise.
    This agent is risk-averse and quick to challenge high bids.
    """
    def choose_action(self, view):
        my_hand = self.get_my_hand(view)
        last_bid = self.get_last_bid(view)
        wilds = self.get_wilds(view)
        total_dice = self.get_num_dice(view)
        if last_bid is None:
            return BidAction(Bid(1, self.rng.choice(hand_faces(my_hand))))
        if self.call_liar_deterministic(my_hand, last_bid, total_dice, wilds):
            return CallLiarAction()
        if last_bid.quantity > self.expected_count(my_hand, last_bid.face, total_dice, wilds):
            return CallLiarAction()
        candidate = self.min_raise(last_bid, total_dice)
        if candidate is None:
            return CallLiarAction()
        return BidAction(candidate)


@register_agent("probability")
class ProbabilityAgent(HeuristicAgent):
    """
    ProbabilityAgent:
    - If no bid has been made, opens with its strongest face at about the expected count.
    - Calls liar if the last bid's quantity is more than one above the expected count.
    - Otherwise bids its strongest face at the lowest quantity that beats the last bid, if that
      stays within the expected count, and falls back to the minimal raise.
    """
    def __init__(self, rng=None, tolerance=1.0):
        super().__init__(rng=rng)
        self.tolerance = tolerance

    def choose_action(self, view):
        my_hand = self.get_my_hand(view)
        last_bid = self.get_last_bid(view)
        wilds = self.get_wilds(view)
        total_dice = self.get_num_dice(view)
        face = self.best_face(my_hand, wilds)
        expected = self.expected_count(my_hand, face, total_dice, wilds)
        if last_bid is None:
            return BidAction(Bid(max(1, min(total_dice, int(expected))), face))
        if self.call_liar_deterministic(my_hand, last_bid, total_dice, wilds):
            return CallLiarAction()
        if last_bid.quantity > self.expected_count(my_hand, last_bid.face, total_dice, wilds) + self.tolerance:
            return CallLiarAction()
        quantity = last_bid.quantity if face > last_bid.face else last_bid.quantity + 1
        if quantity <= min(total_dice, expected + self.tolerance):
            return BidAction(Bid(quantity, face))
        candidate = self.min_raise(last_bid, total_dice)
        if candidate is None:
            return CallLiarAction()
        return BidAction(candidate)
