"""
Lobby Scout engine package.

This package looks up every player of a champion select lobby on OP.GG,
flags boosting and poor recent performance, and scores each player's risk.
"""

from .core import get_global_settings, setup_logging

__version__ = "1.0.0"

__all__ = [
    "get_global_settings",
    "setup_logging",
]
