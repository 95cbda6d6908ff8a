"""Puzzle engine for Merlin's Magic Square."""
from magic_square.session import GameSession

__all__ = ["GameSession"]
