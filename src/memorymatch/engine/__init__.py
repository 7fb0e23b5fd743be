"""Headless rules engine for MemoryMatch.

IMPORTANT: This package must never import pygame.
"""

from .clock import ManualClock, MonotonicClock, PollingScheduler
from .deck import board_from_layout, generate_board
from .match import MatchEngine
from .types import CardView, GameStatus, InvalidConfiguration, MatchConfig, SelectResult, Snapshot

__all__ = [
    "CardView",
    "GameStatus",
    "InvalidConfiguration",
    "ManualClock",
    "MatchConfig",
    "MatchEngine",
    "MonotonicClock",
    "PollingScheduler",
    "SelectResult",
    "Snapshot",
    "board_from_layout",
    "generate_board",
]
