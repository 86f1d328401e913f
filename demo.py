#!/usr/bin/env python3
"""Watch the Logic agent play 3D Minesweeper."""
import time
import os

from cubesweeper.agents import LogicAgent
from cubesweeper.game import CubeSweeperEnv, Difficulty, DIFFICULTIES


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, difficulty: Difficulty = Difficulty.EASY):
    """Run demo games with visualization."""
    config = DIFFICULTIES[difficulty]
    env = CubeSweeperEnv(config=difficulty, render_mode="ansi")
    agent = LogicAgent(config.size)

    density = 100 * config.num_mines / config.total_cells
    print(
        f"Board: {config.size}x{config.size}x{config.size} with "
        f"{config.num_mines} mines ({density:.1f}% density)"
    )
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        obs, _ = env.reset()
        agent.reset()

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            valid_actions = env.get_action_mask()
            action = agent.select_action(obs, valid_actions)
            position = env.action_to_position(action)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: {position}\n")
            print(env.render())

            if done:
                if info.get("game_state") == "WON":
                    wins += 1
                    print("\n*** WIN! ***")
                else:
                    print("\n*** LOST (hit mine) ***")

            time.sleep(delay)

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument(
        "--difficulty",
        choices=[difficulty.name for difficulty in Difficulty],
        default="EASY",
        help="Board preset",
    )
    args = parser.parse_args()

    demo(delay=args.delay, games=args.games, difficulty=Difficulty[args.difficulty])
