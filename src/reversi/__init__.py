"""
Reversi rules engine with a random-move arena.
"""

__version__ = "0.2.0"
