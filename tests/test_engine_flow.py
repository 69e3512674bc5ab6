import unittest
from liars_table.core.config import Rules
from liars_table.core.dice import SeededRandom
from liars_table.core.engine import GameEngine
from liars_table.core.errors import (
    AlreadyExistsError,
    AlreadyLostError,
    BidTooLowError,
    InvalidFaceError,
    InvalidQuantityError,
    NoBidderError,
    NoStandingBidError,
    NotEnoughPlayersError,
    NotExistError,
    OutOfTurnError,
    PhaseError,
)
from liars_table.core.state import BIDDING, OVER, PENDING, ROUND_START
from fakes import FixedRandom, faces


def make_engine(players, rules=None, queue=(), default=0):
    engine = GameEngine(rules or Rules(), rng=FixedRandom(queue=queue, default=default))
    for pid in players:
        engine.add(pid)
    return engine


class TestStart(unittest.TestCase):
    def test_start_deals_hands_matching_dice(self):
        engine = GameEngine(Rules(dice=5), rng=SeededRandom(seed=7))
        for pid in ("a", "b", "c"):
            engine.add(pid)
        engine.start(1)
        self.assertEqual(engine.phase, ROUND_START)
        self.assertEqual(engine.current_bidder(), "b")
        self.assertIsNone(engine.public.prev)
        self.assertEqual(engine.public.bid, 0)
        for p in engine.players():
            self.assertEqual(sum(p.hand.values()), p.dice)
            self.assertEqual(set(p.hand), {1, 2, 3, 4, 5, 6})

    def test_start_needs_two_players(self):
        engine = make_engine(["a"])
        with self.assertRaises(NotEnoughPlayersError):
            engine.start(0)
        self.assertEqual(engine.phase, PENDING)

    def test_start_counts_only_players_with_dice(self):
        engine = make_engine(["a", "b"])
        engine.forfeit("b")
        with self.assertRaises(NotEnoughPlayersError):
            engine.start(0)

    def test_start_rejects_unknown_seat(self):
        engine = make_engine(["a", "b"])
        with self.assertRaises(NotExistError):
            engine.start(2)

    def test_start_twice_and_late_join_rejected(self):
        engine = make_engine(["a", "b"])
        engine.start(0)
        with self.assertRaises(PhaseError):
            engine.start(0)
        with self.assertRaises(PhaseError):
            engine.add("c")

    def test_add_duplicate(self):
        engine = make_engine(["a"])
        with self.assertRaises(AlreadyExistsError):
            engine.add("a")

    def test_bid_before_start(self):
        engine = make_engine(["a", "b"])
        with self.assertRaises(PhaseError):
            engine.bid("a", 1, 2)


class TestBidding(unittest.TestCase):
    def setUp(self):
        self.engine = make_engine(["p0", "p1", "p2"], Rules(dice=5))
        self.engine.start(0)

    def test_bid_advances_turn(self):
        self.engine.bid("p0", 3, 4)
        self.assertEqual(self.engine.current_bidder(), "p1")
        self.assertEqual(self.engine.public.prev, 0)
        self.assertEqual(self.engine.public.bid, 3 * 6 + 4)
        self.assertEqual(self.engine.phase, BIDDING)
        self.assertEqual(self.engine.public.turn_index, 1)

    def test_turn_wraps_to_first_seat(self):
        self.engine.bid("p0", 1, 2)
        self.engine.bid("p1", 1, 3)
        self.engine.bid("p2", 1, 4)
        self.assertEqual(self.engine.current_bidder(), "p0")

    def test_lower_bid_rejected_higher_accepted(self):
        self.engine.bid("p0", 3, 4)
        with self.assertRaises(BidTooLowError) as ctx:
            self.engine.bid("p1", 3, 2)
        self.assertEqual((ctx.exception.quantity, ctx.exception.face), (3, 4))
        self.engine.bid("p1", 4, 1)
        self.assertEqual(self.engine.current_bidder(), "p2")

    def test_equal_bid_rejected(self):
        self.engine.bid("p0", 2, 2)
        with self.assertRaises(BidTooLowError):
            self.engine.bid("p1", 2, 2)

    def test_face_six_bid_reported_as_six(self):
        self.engine.bid("p0", 3, 6)
        with self.assertRaises(BidTooLowError) as ctx:
            self.engine.bid("p1", 4, 0)
        self.assertEqual((ctx.exception.quantity, ctx.exception.face), (3, 6))
        self.assertEqual(self.engine.public.last_bid.face, 6)

    def test_out_of_turn_and_unknown(self):
        with self.assertRaises(OutOfTurnError):
            self.engine.bid("p1", 1, 1)
        with self.assertRaises(NotExistError):
            self.engine.bid("ghost", 1, 1)

    def test_range_checks(self):
        with self.assertRaises(InvalidFaceError):
            self.engine.bid("p0", 1, 7)
        with self.assertRaises(InvalidFaceError):
            self.engine.bid("p0", 1, -1)
        with self.assertRaises(InvalidQuantityError):
            self.engine.bid("p0", 16, 2)
        with self.assertRaises(InvalidQuantityError):
            self.engine.bid("p0", -1, 2)
        self.engine.bid("p0", 15, 2)

    def test_rejected_bid_changes_nothing(self):
        self.engine.bid("p0", 2, 5)
        before = (self.engine.public.bid, self.engine.public.bidder, self.engine.public.prev,
                  self.engine.public.turn_index, list(self.engine.public.bid_history))
        with self.assertRaises(BidTooLowError):
            self.engine.bid("p1", 2, 4)
        after = (self.engine.public.bid, self.engine.public.bidder, self.engine.public.prev,
                 self.engine.public.turn_index, list(self.engine.public.bid_history))
        self.assertEqual(before, after)

    def test_liar_without_standing_bid(self):
        with self.assertRaises(NoStandingBidError):
            self.engine.liar("p0")

    def test_liar_out_of_turn(self):
        self.engine.bid("p0", 1, 1)
        with self.assertRaises(OutOfTurnError):
            self.engine.liar("p0")


class TestLiar(unittest.TestCase):
    def test_lie_costs_previous_bidder_a_die(self):
        # fives: 2 + 1, ones: 1 -> 4 matching a bid of five fives with ones wild
        engine = make_engine(["a", "b"], Rules(dice=3, wilds={1}),
                             queue=faces(5, 5, 1, 5, 3, 3))
        engine.start(0)
        engine.bid("a", 5, 5)
        result = engine.liar("b")
        self.assertTrue(result.lying)
        self.assertEqual(result.accuser_id, "b")
        self.assertEqual(result.accused_id, "a")
        self.assertEqual(result.loser_id, "a")
        self.assertEqual(result.matched, 4)
        self.assertFalse(result.game_over)
        self.assertEqual(engine.player("a").dice, 2)
        self.assertEqual(engine.player("b").dice, 3)
        # the loser opens the next round with a fresh hand and no bid
        self.assertEqual(engine.current_bidder(), "a")
        self.assertEqual(engine.phase, ROUND_START)
        self.assertEqual(engine.public.bid, 0)
        self.assertEqual(engine.public.round_index, 2)
        self.assertEqual(sum(engine.player("a").hand.values()), 2)

    def test_true_bid_costs_caller_a_die(self):
        engine = make_engine(["a", "b"], Rules(dice=3, wilds={1}),
                             queue=faces(5, 5, 1, 5, 3, 3))
        engine.start(0)
        engine.bid("a", 4, 5)
        result = engine.liar("b")
        self.assertFalse(result.lying)
        self.assertEqual(result.loser_id, "b")
        self.assertEqual(engine.player("b").dice, 2)
        self.assertEqual(engine.current_bidder(), "b")

    def test_wild_face_bid_counted_once(self):
        engine = make_engine(["a", "b"], Rules(dice=2, wilds={1}), queue=faces(1, 1, 1, 3))
        engine.start(0)
        engine.bid("a", 4, 1)
        result = engine.liar("b")
        self.assertEqual(result.matched, 3)
        self.assertTrue(result.lying)

    def test_face_six_bid_resolves_against_sixes(self):
        engine = make_engine(["a", "b"], Rules(dice=2), queue=faces(6, 6, 6, 2))
        engine.start(0)
        engine.bid("a", 3, 6)
        result = engine.liar("b")
        self.assertEqual((result.quantity, result.face), (3, 6))
        self.assertFalse(result.lying)

    def test_eliminated_loser_passes_the_start_on(self):
        engine = make_engine(["p0", "p1", "p2"], Rules(dice=1), queue=faces(1, 2, 3))
        engine.start(0)
        engine.bid("p0", 1, 6)
        result = engine.liar("p1")
        self.assertEqual(result.loser_id, "p0")
        self.assertEqual(engine.player("p0").dice, 0)
        self.assertEqual(engine.player("p0").hand, {f: 0 for f in range(1, 7)})
        self.assertEqual(engine.alive(), ["p1", "p2"])
        self.assertEqual(engine.current_bidder(), "p1")
        self.assertEqual(engine.phase, ROUND_START)

    def test_elimination_in_two_player_game_ends_it(self):
        engine = make_engine(["a", "b"], Rules(dice=1), queue=faces(1, 2))
        engine.start(0)
        engine.bid("a", 2, 6)
        result = engine.liar("b")
        self.assertTrue(result.game_over)
        self.assertEqual(engine.phase, OVER)
        self.assertEqual(engine.winner, "b")
        self.assertTrue(engine.is_over())
        with self.assertRaises(NoBidderError):
            engine.bid("b", 1, 1)
        with self.assertRaises(NoBidderError):
            engine.liar("b")
        with self.assertRaises(NotExistError):
            engine.bid("c", 1, 1)

    def test_dice_in_game_shrink_bid_range(self):
        engine = make_engine(["a", "b"], Rules(dice=2), queue=faces(2, 2, 3, 3))
        engine.start(0)
        engine.bid("a", 4, 6)
        engine.liar("b")
        self.assertEqual(engine.total_dice(), 3)
        with self.assertRaises(InvalidQuantityError):
            engine.bid("a", 4, 1)


class TestForfeit(unittest.TestCase):
    def test_forfeit_restarts_round_after_current_bidder(self):
        engine = make_engine(["p0", "p1", "p2"], Rules(dice=2))
        engine.start(0)
        engine.bid("p0", 1, 3)
        engine.forfeit("p2")
        self.assertEqual(engine.player("p2").dice, 0)
        self.assertEqual(engine.public.round_index, 2)
        self.assertEqual(engine.public.bid, 0)
        # p1 held the turn, so the next eligible player after it starts
        self.assertEqual(engine.current_bidder(), "p0")

    def test_forfeit_errors(self):
        engine = make_engine(["p0", "p1", "p2"])
        engine.start(0)
        with self.assertRaises(NotExistError):
            engine.forfeit("ghost")
        engine.forfeit("p1")
        with self.assertRaises(AlreadyLostError):
            engine.forfeit("p1")

    def test_forfeit_down_to_one_player_ends_game(self):
        engine = make_engine(["a", "b"])
        engine.start(0)
        engine.forfeit("a")
        self.assertEqual(engine.phase, OVER)
        self.assertEqual(engine.winner, "b")
        with self.assertRaises(NoBidderError):
            engine.forfeit("b")
        with self.assertRaises(NoBidderError):
            engine.bid("b", 1, 2)

    def test_forfeit_before_start_skips_seat(self):
        engine = make_engine(["a", "b", "c"])
        engine.forfeit("a")
        self.assertEqual(engine.phase, PENDING)
        engine.start(0)
        self.assertEqual(engine.current_bidder(), "b")


class TestAccessors(unittest.TestCase):
    def test_player_and_rules(self):
        rules = Rules(dice=4, wilds={1})
        engine = make_engine(["a", "b"], rules)
        self.assertIs(engine.rules(), rules)
        self.assertEqual(engine.player("a").dice, 4)
        with self.assertRaises(NotExistError):
            engine.player("z")

    def test_view_hides_other_hands(self):
        engine = make_engine(["a", "b"], Rules(dice=2), queue=faces(4, 4, 2, 3))
        engine.start(0)
        view = engine.get_view("b")
        self.assertEqual(view["my_hand"][2], 1)
        self.assertEqual(view["my_hand"][4], 0)
        self.assertEqual(view["total_dice"], 4)
        self.assertNotIn("hands", view)


if __name__ == '__main__':
    unittest.main()
