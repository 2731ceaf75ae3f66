"""
Arena module for running matches between move policies.
"""
from .arena import Arena, GameRecord, MatchSummary
from .policy import ConsolePolicy, MovePolicy, RandomPolicy

__all__ = ['Arena', 'ConsolePolicy', 'GameRecord', 'MatchSummary', 'MovePolicy', 'RandomPolicy']
