"""
Flash key position analyzer.

Players almost never move Flash between the D and F keys, so a history where
it keeps switching slots suggests more than one person plays the account.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from lobby_scout.core.opgg.constants import FLASH_SPELL_ID
from .base_analyzer import BaseHeuristicAnalyzer
from ..schemas import MatchRecord

SLOT_D = "D"
SLOT_F = "F"


@dataclass
class FlashPositionResult:
    """Result of flash position tracking."""

    change_count: int
    matches_with_flash: int
    last_position: Optional[str]

    @property
    def changed(self) -> bool:
        return self.change_count > 0


def flash_slot(match: MatchRecord, flash_id: int = FLASH_SPELL_ID) -> Optional[str]:
    """Key holding flash in a match, or None when flash was not taken."""
    if match.summoner_spell_a == flash_id:
        return SLOT_D
    if match.summoner_spell_b == flash_id:
        return SLOT_F
    return None


class FlashPositionAnalyzer(BaseHeuristicAnalyzer[FlashPositionResult]):
    """Counts how often flash switches keys across the history."""

    def __init__(self, flash_id: int = FLASH_SPELL_ID):
        super().__init__("flash_position")
        self.flash_id = flash_id

    def analyze(self, matches: Sequence[MatchRecord]) -> FlashPositionResult:
        """
        Count flash slot changes in the given order.

        A match without flash leaves the last known slot untouched.
        """
        changes = 0
        with_flash = 0
        last_position: Optional[str] = None

        for match in matches:
            position = flash_slot(match, self.flash_id)
            if position is None:
                continue
            with_flash += 1
            if last_position is not None and position != last_position:
                changes += 1
            last_position = position

        result = FlashPositionResult(
            change_count=changes,
            matches_with_flash=with_flash,
            last_position=last_position,
        )
        self._log_analysis_result(
            len(matches), result.changed, {"change_count": changes}
        )
        return result
