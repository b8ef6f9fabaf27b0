"""
gropacker - dependency scanner and GRO packer for Serious Engine 1 worlds.

Finds every resource a world (or any other game file) references that isn't
part of the installed game, and packs them into a GRO archive.
"""

__version__ = "1.0.0"

from .utils.binary import FormatError
from .config import ConfigError, PackerConfig
from .scan import (
    GameVariantFlags,
    KnownDependencySet,
    ListedFile,
    ScanContext,
    ResolveStatus,
    resolve,
    scan_source,
)
from .packer import PackResult, pack, check_existence

__all__ = [
    'FormatError', 'ConfigError', 'PackerConfig',
    'GameVariantFlags', 'KnownDependencySet', 'ListedFile', 'ScanContext',
    'ResolveStatus', 'resolve', 'scan_source',
    'PackResult', 'pack', 'check_existence',
]
