"""
3D Minesweeper agents module.

Provides agents for playing on the cube:
- RandomAgent: Baseline random selection
- LogicAgent: Constraint propagation, also used as a snapshot advisor
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .logic_agent import Advice, LogicAgent

__all__ = [
    "Advice",
    "BaseAgent",
    "RandomAgent",
    "LogicAgent",
]
