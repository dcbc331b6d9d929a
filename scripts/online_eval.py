import argparse
import json
import random
from typing import Dict

from rpsnet import Choice, GameSession, SessionConfig, wins_over
from rpsnet.utils import configure_logging


def simulate_session(session: GameSession, n_rounds: int = 200, human_type: str = "random", seed: int = 0) -> Dict:
    rng = random.Random(seed)
    # simple scripted opponents
    def human_move(t: int) -> Choice:
        history = session.history
        if human_type == "cycle":
            return Choice(t % 3)
        if human_type == "sticky":
            return Choice.ROCK if rng.random() < 0.6 else Choice(rng.randrange(3))
        if human_type == "counter" and history:
            return wins_over(history[-1].computer_choice)  # beat the AI's last move
        return Choice(rng.randrange(3))

    for t in range(n_rounds):
        session.play(human_move(t))
    score = session.scoreboard()
    decided = max(1, score.computer_wins + score.player_wins)
    return {
        "rounds": score.rounds,
        "computer_wins": score.computer_wins,
        "player_wins": score.player_wins,
        "draws": score.draws,
        "computer_win_rate": score.computer_wins / decided,
    }


def run(n_rounds: int, layout: str, policy: str, seed: int) -> Dict:
    out = {}
    for human_type in ("cycle", "sticky", "counter", "random"):
        cfg = SessionConfig(layout=layout, policy=policy, seed=seed)
        session = GameSession(cfg).construct()
        out[human_type] = simulate_session(session, n_rounds, human_type, seed)
    return out


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Play scripted humans against the learning opponent")
    ap.add_argument("--rounds", type=int, default=200)
    ap.add_argument("--layout", default="extended", choices=["minimal", "extended"])
    ap.add_argument("--policy", default="greedy", choices=["greedy", "sampling"])
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()
    configure_logging(args.log_level)
    print(json.dumps(run(args.rounds, args.layout, args.policy, args.seed), indent=2))
