#!/usr/bin/env python3
"""
Command line entry point for lobby analysis.

Analyzes each player in turn and prints one JSON document per analyzed player.
Progress lines go to stderr as players move through the pipeline.

Usage:
    # Analyze players by Riot ID
    python -m lobby_scout.main kr "Faker#KR1" "Chovy#KR2"

    # Analyze a champion select roster exported from the game client
    python -m lobby_scout.main euw --participants participants.json
"""

import asyncio
import json
import sys
from typing import List

import structlog
from pydantic import ValidationError

from lobby_scout.core import get_global_settings, setup_logging
from lobby_scout.features.lobby import identities_from_participants, lobby_service
from lobby_scout.features.player_analysis import AnalysisResult, PlayerIdentity

logger = structlog.get_logger(__name__)


def print_usage() -> None:
    """Print usage information."""
    print(__doc__)


def parse_riot_id(value: str) -> PlayerIdentity:
    """
    Parse a ``name#tag`` argument.

    :param value: Riot ID as typed on the command line
    :returns: PlayerIdentity for the argument
    :raises SystemExit: If the argument is not a valid Riot ID
    """
    name, separator, tag = value.rpartition("#")
    if not separator:
        print(f"Error: '{value}' is not a Riot ID (expected name#tag)")
        sys.exit(1)
    try:
        return PlayerIdentity(display_name=name, tag_line=tag)
    except ValidationError:
        print(f"Error: '{value}' has an empty name or tag")
        sys.exit(1)


def load_participants(path: str, region: str) -> List[PlayerIdentity]:
    """
    Read champion select participants from a JSON export.

    :raises SystemExit: If the file cannot be read or decoded
    """
    try:
        with open(path, encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read participants file '{path}': {e}")
        sys.exit(1)
    return identities_from_participants(payload, region)


def print_progress(player_key: str, message: str) -> None:
    print(f"{player_key}: {message}", file=sys.stderr)


async def run(region: str, identities: List[PlayerIdentity]) -> List[AnalysisResult]:
    """Analyze the lobby and print each result."""
    async with lobby_service() as service:
        results = await service.analyze_lobby(
            identities, region, on_progress=print_progress
        )

    for result in results:
        print(result.model_dump_json(indent=2))

    print(
        f"\nAnalyzed {len(results)} of {len(identities)} players",
        file=sys.stderr,
    )
    return results


def main() -> None:
    """Main entry point."""
    args = sys.argv[1:]
    if len(args) < 2 or args[0] in ("-h", "--help"):
        print_usage()
        sys.exit(1)

    settings = get_global_settings()
    setup_logging(settings.log_level, json_output=not settings.debug)

    region = args[0]
    if args[1] == "--participants":
        if len(args) != 3:
            print_usage()
            sys.exit(1)
        identities = load_participants(args[2], region)
    else:
        identities = [parse_riot_id(arg) for arg in args[1:]]

    if not identities:
        print("Error: no players to analyze")
        sys.exit(1)

    try:
        asyncio.run(run(region, identities))
    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        sys.exit(1)


if __name__ == "__main__":
    main()
