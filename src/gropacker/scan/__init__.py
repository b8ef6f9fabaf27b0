"""Dependency scanning - finds the files a world or asset needs."""

from .context import (
    GameVariantFlags,
    KnownDependencySet,
    ListedFile,
    ScanContext,
    dependency_key,
)
from .paths import (
    NormalizedPath,
    fix_filename,
    normalize,
    collapse_alternate_directory,
    spaces_to_underscores,
    file_ext,
    file_name,
    remove_ext,
    replace_ext,
)
from .resolver import ResolveStatus, ResolveResult, resolve, resolve_all, is_known
from .registry import ScannerRegistry, SourceScanner, scan_source
from .world import scan_world
from .unstructured import scan_file, iter_filenames
from .games import GameType, detect_game, ignore_game, ignore_gro, ignore_dependency

__all__ = [
    'GameVariantFlags', 'KnownDependencySet', 'ListedFile', 'ScanContext', 'dependency_key',
    'NormalizedPath', 'fix_filename', 'normalize', 'collapse_alternate_directory',
    'spaces_to_underscores', 'file_ext', 'file_name', 'remove_ext', 'replace_ext',
    'ResolveStatus', 'ResolveResult', 'resolve', 'resolve_all', 'is_known',
    'ScannerRegistry', 'SourceScanner', 'scan_source',
    'scan_world',
    'scan_file', 'iter_filenames',
    'GameType', 'detect_game', 'ignore_game', 'ignore_gro', 'ignore_dependency',
]
