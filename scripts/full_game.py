"""full_game.py
Simulate full Liar's Dice matches between registered agents. Each match seats one agent per
player, starts everyone with the same number of dice and plays rounds until a single player
holds dice. One summary row per match and one row per engine event are appended to CSV files,
and a bar chart of win percentages per agent is written next to them.

Usage: python scripts/full_game.py --agents random,conservative,probability --matches 20 --data-dir data
"""
import os
import argparse
import datetime
import hashlib
import logging
import random
from collections import defaultdict
from typing import Any, Dict, List, Optional, Tuple

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from liars_table.persistence import csv_io
from liars_table.agents import AGENT_MAP
from liars_table.core.config import Rules
from liars_table.core.dice import SeededRandom
from liars_table.core.engine import GameEngine
from liars_table.core.errors import GameError

logger = logging.getLogger(__name__)


def generate_match_id(agent_keys: List[str], timestamp: str) -> str:
    raw = f"{timestamp}_{'_'.join(agent_keys)}"
    return hashlib.sha256(raw.encode()).hexdigest()[:16]


def run_full_match(agent_keys: List[str], rules: Rules, match_index: int, match_id: str, timestamp: str,
                   seed: Optional[int] = None, max_rounds: int = 1000) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    """Run a full match: rounds until one player holds dice.

    Seat i is played by AGENT_MAP[agent_keys[i]] under the id "p{i}:{key}". The starting
    bidder rotates with match_index.

    Returns a tuple of (match_summary, event_rows) matching the csv_io headers.
    """
    rng = random.Random(seed)
    engine = GameEngine(rules, rng=SeededRandom(rng=rng), game_id=match_id)
    seats = [f"p{i}:{key}" for i, key in enumerate(agent_keys)]
    agents = {pid: AGENT_MAP[key](rng=random.Random(rng.random())) for pid, key in zip(seats, agent_keys)}

    error = None
    end_reason = None
    counts = defaultdict(int)
    event_rows: List[Dict[str, Any]] = []

    try:
        for pid in seats:
            engine.add(pid)
        engine.start(match_index % len(seats))
        while not engine.is_over():
            if engine.public.round_index > max_rounds:
                end_reason = "match_round_limit_reached"
                break
            current = engine.current_bidder()
            action = agents[current].choose_action(engine.get_view(current))
            engine.apply_action(current, action)
            for ev in engine.pop_events():
                t = ev["type"]
                counts[t] += 1
                if t == "DiceRevealed" and ev.get("lying"):
                    counts["bluffs_called"] += 1
                event_rows.append({
                    "game_id": match_id,
                    "round": engine.public.round_index,
                    "event_type": t,
                    "player": ev.get("player"),
                    "payload": str({k: v for k, v in ev.items() if k not in ("type", "player")}),
                    "timestamp": timestamp,
                })
    except GameError as e:
        # a rejected move ends the match and is recorded
        error = str(e)
        end_reason = type(e).__name__
        logger.warning("Match %s aborted: %s", match_id, e)

    if engine.is_over():
        end_reason = end_reason or "last_player_standing"

    summary_row = {
        "game_id": match_id,
        "game_index": match_index,
        "timestamp": timestamp,
        "players": len(seats),
        "agents": ",".join(agent_keys),
        "winner": engine.winner,
        "rounds_played": engine.public.round_index,
        "bids": counts["BidPlaced"],
        "calls": counts["LiarCalled"],
        "bluffs_called": counts["bluffs_called"],
        "forfeits": counts["PlayerForfeited"],
        "starting_dice_per_player": rules.dice,
        "wilds": ",".join(str(w) for w in sorted(rules.wilds)),
        "error": error,
        "end_reason": end_reason,
    }
    return summary_row, event_rows


def aggregate_and_plot(agent_stats: Dict[str, dict], out_path: str):
    agents = sorted(agent_stats.keys())
    wins = [agent_stats[a].get('wins', 0) for a in agents]
    games = [agent_stats[a].get('games', 0) for a in agents]
    win_perc = [(w / g * 100.0) if g > 0 else 0.0 for w, g in zip(wins, games)]

    width = max(6, int(len(agents) * 0.6))
    plt.figure(figsize=(width, 4))
    bars = plt.bar(agents, win_perc, color='C0')
    plt.ylabel('Win percentage (%)')
    plt.ylim(0, 100)
    plt.title('Full matches: win% per agent')
    for rect, val in zip(bars, win_perc):
        plt.text(rect.get_x() + rect.get_width() / 2.0, rect.get_height() + 1.0, f"{val:.1f}%", ha='center', va='bottom', fontsize=8)
    plt.tight_layout()
    plt.savefig(out_path)
    plt.close()


def parse_agent_list(s: str) -> List[str]:
    if s.strip().lower() == 'all':
        return sorted(AGENT_MAP.keys())
    return [x.strip() for x in s.split(',') if x.strip()]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run full Liar's Dice matches between agents.")
    parser.add_argument('--agents', default='random,conservative,probability',
                        help="comma separated agent names (one per seat) or 'all'")
    parser.add_argument('--matches', type=int, default=10)
    parser.add_argument('--dice', type=int, default=5, help='starting dice per player')
    parser.add_argument('--wilds', default='1', help="comma separated wild faces, '' for none")
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--data-dir', default='data')
    parser.add_argument('--log-level', default='INFO')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    agent_keys = parse_agent_list(args.agents)
    unknown = [a for a in agent_keys if a not in AGENT_MAP]
    if unknown or len(agent_keys) < 2:
        raise SystemExit(f"Need at least two known agents. Supported: {sorted(AGENT_MAP.keys())}")
    try:
        rules = Rules.from_options(dice=args.dice, wilds=[w for w in args.wilds.split(',') if w.strip()])
    except ValueError as e:
        raise SystemExit(f"Invalid rules: {e}")

    os.makedirs(args.data_dir, exist_ok=True)
    summary_csv = os.path.join(args.data_dir, 'match_summary.csv')
    events_csv = os.path.join(args.data_dir, 'match_events.csv')
    chart_png = os.path.join(args.data_dir, 'win_percentages.png')

    seeder = random.Random(args.seed)
    agent_stats = defaultdict(lambda: defaultdict(int))
    for i in range(args.matches):
        timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
        match_id = generate_match_id(agent_keys, f"{timestamp}_{i}")
        summary_row, event_rows = run_full_match(agent_keys, rules, i, match_id, timestamp,
                                                 seed=seeder.randrange(2 ** 32))
        csv_io.append_row_to_csv(summary_row, summary_csv, csv_io.get_summary_header())
        csv_io.append_rows_to_csv(event_rows, events_csv, csv_io.get_event_header())

        for key in agent_keys:
            agent_stats[key]['games'] += 1
        winner = summary_row['winner']
        if winner is not None:
            agent_stats[winner.split(':', 1)[1]]['wins'] += 1
        logger.info("Match %d/%d: winner %s after %d rounds", i + 1, args.matches, winner,
                    summary_row['rounds_played'])

    aggregate_and_plot(agent_stats, chart_png)
    logger.info("All matches finished. Data saved to %s", args.data_dir)


if __name__ == "__main__":
    main()
