import sys

from rpsnet import Choice, GameSession, Outcome, SessionConfig

PROMPT = "Your move [r]ock / [p]aper / [s]cissors, [q]uit: "

RESULT_TEXT = {
    Outcome.PLAYER_WINS: "You win",
    Outcome.COMPUTER_WINS: "Computer wins",
    Outcome.DRAW: "Draw",
}


def format_probs(probs) -> str:
    return "  ".join(f"{c.emoji} {p:.2f}" for c, p in zip(Choice, probs))


def main():
    session = GameSession(SessionConfig.from_env()).construct()
    show_probs = "--probs" in sys.argv[1:]
    while True:
        cmd = input(PROMPT).strip().lower()
        if cmd in ("q", "quit", "exit"):
            break
        try:
            choice = Choice.parse(cmd)
        except ValueError:
            print("Please type r, p or s.")
            continue
        rnd = session.play(choice)
        score = session.scoreboard()
        print(
            f"Round {score.rounds}: {rnd.player_choice.emoji} vs {rnd.computer_choice.emoji} "
            f"-> {RESULT_TEXT[rnd.outcome]}  (you {score.player_wins} / computer {score.computer_wins} / draws {score.draws})"
        )
        if show_probs:
            print("   next:", format_probs(session.probs()))


if __name__ == "__main__":
    try:
        main()
    except (EOFError, KeyboardInterrupt):
        print()
