"""
Standard dependencies - resources the game already ships with.

Known games are recognized by GRO archives in their root folder. Every entry
of their standard archives becomes a known dependency so it's never packed
again.
"""

import logging
from enum import Enum
from typing import Dict, List, Tuple

from ..formats.gro import GroArchive
from .context import ScanContext
from .paths import file_ext

logger = logging.getLogger(__name__)


class GameType(Enum):
    NONE = "none"
    SE1_10 = "se1_10"  # Serious Engine 1.10
    TSE = "tse"        # The Second Encounter
    REV = "rev"        # Serious Sam Revolution
    TFE = "tfe"        # The First Encounter


GAME_TITLES: Dict[GameType, str] = {
    GameType.SE1_10: "Serious Engine 1.10",
    GameType.TSE: "The Second Encounter",
    GameType.REV: "Revolution",
    GameType.TFE: "The First Encounter",
}

# Archives that must all exist for a game to be recognized, in detection order
GAME_MARKERS: List[Tuple[GameType, Tuple[str, ...]]] = [
    (GameType.SE1_10, ("SE1_10.gro",)),
    (GameType.TSE, ("SE1_00.gro",)),
    (GameType.REV, ("All_01.gro", "All_02.gro")),
    (GameType.TFE, ("1_00c.gro",)),
]

GAME_ARCHIVES: Dict[GameType, Tuple[str, ...]] = {
    GameType.SE1_10: ("SE1_10.gro",),
    GameType.TSE: (
        "SE1_00.gro",
        "SE1_00_Extra.gro",
        "SE1_00_ExtraTools.gro",
        "SE1_00_Music.gro",
        "1_04_patch.gro",
        "1_07_tools.gro",
    ),
    GameType.REV: ("All_01.gro", "All_02.gro"),
    GameType.TFE: (
        "1_00_ExtraTools.gro",
        "1_00_music.gro",
        "1_00c.gro",
        "1_00c_scripts.gro",
        "1_04_patch.gro",
    ),
}


def detect_game(ctx: ScanContext) -> GameType:
    """Determine the game by standard archives in the game folder."""
    for game, markers in GAME_MARKERS:
        if all((ctx.root / name).is_file() for name in markers):
            return game
    return GameType.NONE


def ignore_gro(ctx: ScanContext, gro: str) -> int:
    """
    Mark every file inside a GRO as a known dependency.

    Returns:
        Amount of new known dependencies; 0 if the archive doesn't exist.
    """
    path = ctx.root / gro
    if not path.is_file():
        print(f'"{gro}" does not exist!')
        return 0

    archive = GroArchive(str(path))
    added = sum(1 for name in archive.list_files() if ctx.known.insert_path(name))
    logger.debug(archive.summary())
    logger.debug(f"{gro}: {added} of {len(archive)} entries are new dependencies")
    return added


def ignore_game(ctx: ScanContext, game: GameType, set_flags: bool = False) -> int:
    """
    Ignore standard archives of a game.

    With set_flags, games that need special handling turn it on:
    Revolution uses its own directory layout and The First Encounter
    ships OGG music that worlds reference as MP3.
    """
    if game is GameType.NONE:
        return 0

    print(f"\nDetected GRO files from {GAME_TITLES[game]}...")

    if set_flags:
        if game is GameType.REV:
            ctx.flags.alternate_edition = True
        elif game is GameType.TFE:
            ctx.flags.ogg_fallback = True

    return sum(ignore_gro(ctx, gro) for gro in GAME_ARCHIVES[game])


def ignore_dependency(ctx: ScanContext, dependency: str) -> bool:
    """Exclude a single file or every file of a GRO archive."""
    dependency = dependency.replace('\\', '/')

    if file_ext(dependency) == ".gro":
        return ignore_gro(ctx, dependency) > 0

    if not (ctx.root / dependency).is_file():
        print(f'"{dependency}" does not exist!')
        return False

    return ctx.known.insert_path(dependency)
