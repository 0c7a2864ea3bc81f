"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .enums import Tier, Region, AnalysisState, LobbyEventKind, APEX_TIERS
from .logging import setup_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "get_global_settings",
    "Tier",
    "Region",
    "AnalysisState",
    "LobbyEventKind",
    "APEX_TIERS",
    "setup_logging",
    "get_logger",
]
