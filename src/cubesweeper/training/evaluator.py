"""
Agent evaluation for 3D Minesweeper.

Plays agents through CubeSweeperEnv and aggregates results.
"""
import logging
from typing import Dict, Optional

from ..agents.base_agent import BaseAgent
from ..game.board import ConfigSelector, Difficulty
from ..game.environment import CubeSweeperEnv

logger = logging.getLogger(__name__)


class Evaluator:
    """
    Evaluate and compare multiple agents.

    Provides standardized evaluation across different agent types.
    """

    def __init__(
        self,
        board_config: ConfigSelector = Difficulty.EASY,
        num_episodes: int = 100,
        max_steps: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Difficulty, difficulty name or BoardConfig.
            num_episodes: Number of evaluation episodes.
            max_steps: Maximum steps per episode (default: one per cell).
            seed: Seed for the first episode; later episodes continue
                the same random stream.
        """
        self.board_config = board_config
        self.num_episodes = num_episodes
        self.max_steps = max_steps
        self.seed = seed

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Returns:
            Dictionary with win_rate, avg_reward, avg_steps, avg_revealed.
        """
        env = CubeSweeperEnv(config=self.board_config)
        max_steps = self.max_steps or env.config.total_cells

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0

        for episode in range(self.num_episodes):
            seed = self.seed if episode == 0 else None
            observation, info = env.reset(seed=seed)
            agent.reset()

            for _ in range(max_steps):
                valid_actions = env.get_action_mask()
                action = agent.select_action(observation, valid_actions)

                next_observation, reward, terminated, truncated, info = env.step(
                    action
                )
                agent.update(
                    observation, action, float(reward), next_observation,
                    terminated or truncated,
                )
                observation = next_observation

                total_reward += float(reward)
                total_steps += 1

                if terminated or truncated:
                    break

            if info.get("game_state") == "WON":
                wins += 1
            total_revealed += info.get("revealed", 0)

        logger.debug(
            "%s won %d of %d games", type(agent).__name__, wins, self.num_episodes
        )

        return {
            "win_rate": wins / self.num_episodes,
            "avg_reward": total_reward / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        results = {}
        for name, agent in agents.items():
            logger.info("Evaluating %s", name)
            results[name] = self.evaluate(agent)
        return results
