"""Builds the lobby roster from the game client's chat participant listing."""

from typing import Any, List, Optional

import structlog
from pydantic import ValidationError

from lobby_scout.features.player_analysis.schemas import PlayerIdentity
from .schemas import ChatParticipants

logger = structlog.get_logger(__name__)

CHAMP_SELECT_MARKER = "champ-select"


def identities_from_participants(
    payload: Any, region: Optional[str] = None
) -> List[PlayerIdentity]:
    """
    Convert a chat participant listing into player identities.

    Only participants of a champion select conversation are kept; the
    participant's own region wins over ``region``. A payload that does not
    look like a participant listing yields an empty roster.
    """
    try:
        listing = ChatParticipants.model_validate(payload)
    except ValidationError as e:
        logger.warning("Error parsing lobby participants", error=str(e))
        return []

    identities = []
    for participant in listing.participants:
        if CHAMP_SELECT_MARKER not in participant.cid:
            continue
        if not participant.game_name or not participant.game_tag:
            logger.debug("Skipping participant without Riot ID", name=participant.name)
            continue
        identities.append(
            PlayerIdentity(
                display_name=participant.game_name,
                tag_line=participant.game_tag,
                region=participant.region or region,
                stable_id=participant.puuid or None,
            )
        )

    logger.info(
        "Found champion select participants",
        total=len(listing.participants),
        champ_select=len(identities),
    )
    return identities
