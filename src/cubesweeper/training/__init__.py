"""
Evaluation module for 3D Minesweeper agents.
"""
from .evaluator import Evaluator

__all__ = ["Evaluator"]
