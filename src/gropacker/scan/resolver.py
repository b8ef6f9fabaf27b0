"""
Dependency resolution - decides whether a referenced file needs packing.

A reference is checked against the known dependencies under every spelling
the game would accept for it (OGG instead of MP3, regular directories
instead of Revolution "MP" ones, underscores instead of spaces). Files that
survive are appended to the context's file list in discovery order, and may
pull in sidecar files: INI configs of models and base textures of FX
textures.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Tuple

from ..formats.tex import base_texture_of
from .context import ListedFile, ScanContext
from .paths import (
    collapse_alternate_directory,
    file_ext,
    normalize,
    replace_ext,
    spaces_to_underscores,
)

logger = logging.getLogger(__name__)


class ResolveStatus(Enum):
    """Outcome of resolving one reference."""
    SKIPPED = "skipped"  # Already listed during this run
    KNOWN = "known"      # Already available to the game
    ADDED = "added"      # New file in the list


@dataclass
class ResolveResult:
    status: ResolveStatus
    path: str = ""
    listed: Optional[ListedFile] = None

    @property
    def added(self) -> bool:
        return self.status is ResolveStatus.ADDED


def _strip_mod_prefix(ctx: ScanContext, path: str) -> str:
    prefix = ctx.mod_prefix
    if ctx.flags.erase_mod_prefix and prefix and path.lower().startswith(prefix):
        return path[len(prefix):]
    return path


def is_known(ctx: ScanContext, key: str) -> bool:
    """Check a lowercase key and its accepted aliases against known dependencies."""
    if ctx.known.contains(key):
        return True

    # OGG is present instead of MP3
    if ctx.flags.ogg_fallback and file_ext(key) == ".mp3":
        key = replace_ext(key, ".ogg")
        if ctx.known.contains(key):
            return True

    if ctx.flags.alternate_edition:
        key = collapse_alternate_directory(key)
        if ctx.known.contains(key):
            return True

        key = spaces_to_underscores(key)
        if ctx.known.contains(key):
            return True

    return False


def resolve_one(ctx: ScanContext, raw: str, source: str = "", count: bool = True) -> ResolveResult:
    """Resolve a single reference without following sidecar files."""
    normalized, inferred = normalize(raw)
    for name in ctx.flags.merge(inferred):
        logger.info(f"Enabled '{name}' after reading '{raw}'")

    path = _strip_mod_prefix(ctx, normalized.path)
    if not path:
        return ResolveResult(ResolveStatus.SKIPPED, path)

    if is_known(ctx, path.lower()):
        return ResolveResult(ResolveStatus.KNOWN, path)

    listed = ctx.add_file(path, source, count)
    if listed is None:
        return ResolveResult(ResolveStatus.SKIPPED, path)

    if listed.sequence is not None:
        print(listed)
    return ResolveResult(ResolveStatus.ADDED, path, listed)


def sidecars(ctx: ScanContext, path: str) -> List[str]:
    """Files implied by a newly added file."""
    ext = file_ext(path)

    # INI configs for models
    if ext == ".mdl":
        if ctx.flags.include_ini:
            return [replace_ext(path, ".ini")]

    # Base textures of FX textures
    elif ext == ".tex":
        found = ctx.locate(path)
        if found is not None:
            base = base_texture_of(found)
            if base:
                logger.debug(f"{path}: base texture '{base}'")
                return [base]

    return []


def resolve(ctx: ScanContext, raw: str, source: str = "", count: bool = True) -> ResolveResult:
    """
    Resolve a reference and everything it implies.

    Returns:
        The result for raw itself; sidecars are added to the context.
    """
    first = None
    pending: Deque[Tuple[str, str]] = deque([(raw, source)])

    while pending:
        name, origin = pending.popleft()
        result = resolve_one(ctx, name, origin, count)
        if first is None:
            first = result

        if result.added:
            for extra in sidecars(ctx, result.path):
                pending.append((extra, origin))

    return first


def resolve_all(ctx: ScanContext, names, source: str = "") -> List[ResolveResult]:
    """Resolve references in order."""
    return [resolve(ctx, name, source) for name in names]
