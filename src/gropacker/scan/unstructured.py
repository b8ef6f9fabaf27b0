"""
Filename recovery from files without a known layout.

Serious Engine writes resource names with a 4-character prefix wherever they
are serialized or compiled in:

- "DFNM" + 32-bit length + characters    binary data files
- "EFNM" + characters + 0x00              string literals in libraries
- "TFNM" + 1 byte + characters + EOL      text files (scripts, configs)

Any of them can appear anywhere, so the whole file is walked. Matches that
turn out to be garbage are kept; they simply won't be found on disk later.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from ..formats.pe import data_start_offset
from ..utils.binary import IoBuffer, ByteOrder
from .context import ScanContext
from .paths import file_ext
from .resolver import ResolveResult, resolve

logger = logging.getLogger(__name__)


TAG_DATA_FILENAME = b"DFNM"
TAG_EXE_FILENAME = b"EFNM"
TAG_TEXT_FILENAME = b"TFNM"
FILENAME_TAGS = (TAG_DATA_FILENAME, TAG_EXE_FILENAME, TAG_TEXT_FILENAME)

# Longest filename accepted after DFNM and TFNM
MAX_FILENAME_LENGTH = 254

# Extensions of Windows libraries, scanned after their first PE section
LIBRARY_EXTENSIONS = (".dll",)


class _TagCursor:
    """
    Next offset of every filename tag at or after the read position.

    An offset is searched again only once reading has moved past it, so the
    whole file is walked once per tag instead of once per filename.
    """

    def __init__(self, io: IoBuffer):
        self.io = io
        self._next: Dict[bytes, int] = {}

    def _offset(self, tag: bytes) -> int:
        pos = self.io.position
        found = self._next.get(tag)
        if found is None or 0 <= found < pos:
            found = self.io.find(tag, pos)
            self._next[tag] = found
        return found

    def advance(self) -> Optional[bytes]:
        """Move to the closest filename tag. Returns None at the end of data."""
        best = None
        best_pos = -1

        for tag in FILENAME_TAGS:
            found = self._offset(tag)
            if found >= 0 and (best is None or found < best_pos):
                best, best_pos = tag, found

        if best is not None:
            self.io.seek(best_pos)
        return best


def iter_filenames(io: IoBuffer, start: int = 0) -> Iterator[str]:
    """Yield every non-empty filename found after the start offset, in order."""
    io.seek(start)
    cursor = _TagCursor(io)

    while True:
        tag = cursor.advance()
        if tag is None:
            return

        tag_pos = io.position
        io.skip(4)
        filename = ""

        if tag == TAG_DATA_FILENAME:
            if not io.has_bytes(4):
                return
            length = io.read_int32()
            if 0 <= length < MAX_FILENAME_LENGTH and io.has_bytes(length):
                filename = io.read_cstring(length, trim_null=False)
            else:
                # Not an actual filename, retry from the next byte
                io.seek(tag_pos + 1)
                continue

        elif tag == TAG_EXE_FILENAME:
            filename = io.read_until(b"\x00")

        elif tag == TAG_TEXT_FILENAME:
            if not io.has_bytes(1):
                return
            io.skip(1)
            filename = io.read_until(b"\n\r\x00", MAX_FILENAME_LENGTH)

        if filename:
            logger.debug(f"{tag.decode('ascii')} at {tag_pos}: '{filename}'")
            yield filename


def is_library(path: str) -> bool:
    return file_ext(path) in LIBRARY_EXTENSIONS


def scan_filenames(path: Path, library: Optional[bool] = None) -> List[str]:
    """Read every filename from a file. FormatError if it can't be opened."""
    io = IoBuffer.from_file(str(path), ByteOrder.LITTLE_ENDIAN)

    if library is None:
        library = is_library(path.name)

    start = data_start_offset(io) if library else 0
    if start:
        logger.debug(f"{path.name}: skipping {start} bytes of code")

    return list(iter_filenames(io, start))


def scan_file(ctx: ScanContext, relative: str, library: Optional[bool] = None) -> List[ResolveResult]:
    """Resolve every filename found inside a file relative to the game folder."""
    found = ctx.locate(relative)
    path = found if found is not None else ctx.root / relative

    filenames = scan_filenames(path, library)
    return [resolve(ctx, name, relative) for name in filenames]
