"""
Battle Royale Viewer

Runs one arena game in the terminal: random players, optionally joined by
trained policies and a keyboard-controlled snake.

Usage:
    python scripts/battle_royale.py --players 6 --size 30 --food 10
    python scripts/battle_royale.py --policy results/policies/best.pt --framerate 0.1
"""

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

import argparse
import logging
import queue
import threading
import time

from arena.game import Game
from arena.players import HumanPlayer, RandomPlayer
from arena.policy import NetworkPlayer, load_policy
from arena.render import render_board


def read_keys(key_queue: queue.Queue):
    """Forward single characters from stdin to the human player"""
    for line in sys.stdin:
        for char in line.strip():
            key_queue.put(char)


def main():
    parser = argparse.ArgumentParser(description='Watch a snake battle royale')
    parser.add_argument('--players', type=int, default=6, help='Number of random players')
    parser.add_argument('--size', type=int, default=30, help='Board height and width')
    parser.add_argument('--food', type=int, default=10, help='Food items on the board')
    parser.add_argument('--rounds', type=int, default=1000, help='Maximum number of rounds')
    parser.add_argument('--framerate', type=float, default=0.1, help='Seconds per round')
    parser.add_argument('--policy', type=str, action='append', default=[],
                        help='Trained policy file (repeatable)')
    parser.add_argument('--human', action='store_true', help='Add a keyboard player (a/w/d + enter)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--verbose', action='store_true', help='Log every move')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    players = []
    if args.human:
        key_queue = queue.Queue()
        threading.Thread(target=read_keys, args=(key_queue,), daemon=True).start()
        players.append(HumanPlayer(key_queue, framerate=args.framerate))

    for path in args.policy:
        network, info = load_policy(path)
        print(f"Loaded {path} (fitness {info.get('fitness', 'n/a')})")
        players.append(NetworkPlayer(network))

    for i in range(args.players):
        seed = None if args.seed is None else args.seed + i
        players.append(RandomPlayer(seed=seed))

    game = Game(args.size, args.size, players, food_count=args.food, seed=args.seed)

    for round_number in range(args.rounds):
        game_over, state = game.play_round()
        print('\n' + render_board(state))
        print(f"Round {round_number + 1} | " + ' '.join(
            f"{sid}:{game.player_len(sid)}" for sid in sorted(game.agents)
        ))
        if game_over:
            print(f"Game over at round {round_number + 1}")
            break
        if not args.human:
            time.sleep(args.framerate)


if __name__ == '__main__':
    main()
