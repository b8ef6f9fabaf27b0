"""World scanning - dependencies of a single WLD file."""

import logging
from typing import List

from ..formats.wld import WorldFile
from ..utils.binary import FormatError
from .context import ListedFile, ScanContext
from .paths import remove_ext
from .resolver import ResolveResult, resolve

logger = logging.getLogger(__name__)


# Thumbnail names in order of preference, then the visibility data
THUMBNAIL_SUFFIXES = ("Tbn.tex", ".tbn")
VISIBILITY_SUFFIX = ".vis"


def world_sidecars(ctx: ScanContext, world: str) -> List[str]:
    """Files next to the world that belong to it by name only."""
    base = remove_ext(world)
    found = []

    for suffix in THUMBNAIL_SUFFIXES:
        if ctx.locate(base + suffix) is not None:
            found.append(base + suffix)
            break

    if ctx.locate(base + VISIBILITY_SUFFIX) is not None:
        found.append(base + VISIBILITY_SUFFIX)
    return found


def load_world(ctx: ScanContext, world: str) -> WorldFile:
    """Parse a world relative to the game folder."""
    path = ctx.locate(world)
    if path is None:
        raise FormatError(f"World file '{world}' does not exist!")
    return WorldFile.from_file(str(path))


def scan_world(ctx: ScanContext, world: str) -> List[ResolveResult]:
    """
    List extra dependencies of a world.

    The world is parsed completely before anything is added, so a broken
    world leaves the file list untouched. Revolution chunks found inside
    turn on the alternate edition layout for the rest of the run.
    """
    world = world.replace('\\', '/')
    print(f"Extra dependencies for '{world}':")

    parsed = load_world(ctx, world)
    dictionaries = parsed.dictionaries

    if dictionaries.alternate_edition and not ctx.flags.alternate_edition:
        ctx.flags.alternate_edition = True
        logger.info(f"'{world}' is a Revolution world")

    counted_before = ctx.counted

    for extra in world_sidecars(ctx, world):
        listed = ctx.add_file(extra, world)
        if listed is not None:
            print(listed)

    results = [resolve(ctx, name, world) for name in dictionaries.filenames]

    if ctx.counted == counted_before:
        print("No dependencies")
    return results


def world_dependencies(ctx: ScanContext, world: str) -> List[ListedFile]:
    """Files discovered in a world, in discovery order."""
    return ctx.files_from(world.replace('\\', '/'))
