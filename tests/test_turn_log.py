import os
import tempfile
import unittest
from liars_table.core.config import Rules
from liars_table.core.engine import GameEngine
from liars_table.core.bid import Bid
from liars_table.core.actions import Action, BidAction, CallLiarAction, ForfeitAction
from liars_table.core.errors import IllegalMoveError
from liars_table.persistence import serializer
from liars_table.persistence.recorder import InMemoryRecorder, JsonLinesRecorder
from fakes import FixedRandom, faces


class TestTurnLog(unittest.TestCase):
    """
    Tests for the per-operation `turn_log` snapshots and events recorded by `GameEngine`:
      - A snapshot is recorded when the game starts.
      - After each action a snapshot is appended containing actor, action, public and players info.
      - Events for a Liar call are emitted in order and forwarded to a recorder.
    """

    def _engine(self, recorder=None):
        engine = GameEngine(Rules(dice=2), rng=FixedRandom(queue=faces(2, 2, 3, 4)),
                            recorder=recorder, game_id="g1")
        engine.add("a")
        engine.add("b")
        engine.start(0)
        return engine

    def test_initial_and_action_snapshots(self):
        engine = self._engine()
        self.assertEqual(len(engine.turn_log), 1)
        initial = engine.turn_log[0]
        self.assertIsNone(initial['actor'])
        self.assertEqual(initial['action']['type'], 'Start')
        self.assertEqual(initial['public']['bidder'], 'a')
        engine.apply_action("a", BidAction(Bid(1, 2)))
        second = engine.turn_log[-1]
        self.assertEqual(second['actor'], 'a')
        self.assertEqual(second['action']['type'], 'Bid')
        self.assertEqual(second['public']['last_bid'], (1, 2))
        self.assertEqual(second['public']['prev'], 'a')
        self.assertEqual(len(second['players']), 2)

    def test_apply_action_call_returns_result(self):
        engine = self._engine()
        engine.apply_action("a", BidAction(Bid(3, 2)))
        result = engine.apply_action("b", CallLiarAction())
        self.assertTrue(result.lying)
        last = engine.turn_log[-1]
        self.assertEqual(last['action']['type'], 'CallLiar')
        self.assertEqual(last['action']['loser'], 'a')

    def test_apply_action_forfeit_and_unknown(self):
        engine = self._engine()
        self.assertIsNone(engine.apply_action("b", ForfeitAction()))
        self.assertEqual(engine.winner, "a")
        with self.assertRaises(IllegalMoveError):
            engine.apply_action("a", Action())

    def test_liar_event_sequence(self):
        engine = self._engine()
        engine.pop_events()
        engine.bid("a", 3, 2)
        engine.liar("b")
        types = [e['type'] for e in engine.pop_events()]
        self.assertEqual(types, ['BidPlaced', 'LiarCalled', 'DiceRevealed', 'DieLost',
                                 'RoundStarted', 'DiceRolled'])
        self.assertEqual(engine.get_events(), [])

    def test_recorder_receives_events(self):
        recorder = InMemoryRecorder()
        engine = self._engine(recorder)
        engine.bid("a", 1, 2)
        recorded = recorder.events()
        self.assertEqual(recorded[0].event_type, 'PlayerJoined')
        self.assertEqual(recorded[0].game_id, 'g1')
        self.assertEqual(recorded[-1].event_type, 'BidPlaced')
        self.assertEqual(recorded[-1].player_id, 'a')
        self.assertEqual(recorded[-1].payload['bid'], (1, 2))

    def test_json_lines_recorder_writes_each_event_once(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'events.jsonl')
            recorder = JsonLinesRecorder(path)
            engine = self._engine(recorder)
            recorder.flush()
            engine.bid("a", 1, 2)
            recorder.flush()
            recorder.flush()
            with open(path, encoding='utf-8') as f:
                lines = [serializer.loads(line) for line in f]
        self.assertEqual(len(lines), len(recorder.events()))
        self.assertEqual(lines[-1]['event_type'], 'BidPlaced')
        self.assertEqual(lines[-1]['payload']['bid'], [1, 2])

    def test_turn_log_serializes(self):
        engine = self._engine()
        engine.bid("a", 1, 2)
        data = serializer.loads(serializer.dumps(engine.turn_log))
        self.assertEqual(data[-1]['public']['phase'], 'BIDDING')

    def test_serializer_handles_rules(self):
        data = serializer.loads(serializer.dumps(Rules(dice=3, wilds={6, 1})))
        self.assertEqual(data, {'dice': 3, 'wilds': [1, 6]})


if __name__ == '__main__':
    unittest.main()
