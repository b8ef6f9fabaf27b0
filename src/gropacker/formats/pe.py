"""
PE - section table of Windows libraries (.dll)

Only used to skip code when looking for filenames inside a library:
strings live in data sections that follow the first (code) section.

Format:
- "MZ" ... offset of the PE header at 0x3C (4 bytes)
- "PE\\0\\0" + COFF header (20 bytes):
  machine (2), section count (2), ..., optional header size (2 at +16)
- Optional header
- Section table, 40 bytes per section:
  name (8), virtual size (4), virtual address (4),
  raw data size (4), raw data pointer (4), ...
"""

import logging
from dataclasses import dataclass
from typing import List

from ..utils.binary import IoBuffer, FormatError

logger = logging.getLogger(__name__)


DOS_MAGIC = b"MZ"
PE_MAGIC = b"PE\x00\x00"
PE_OFFSET_POS = 0x3C
COFF_HEADER_SIZE = 20
SECTION_HEADER_SIZE = 40


@dataclass
class PeSection:
    name: str
    raw_size: int
    raw_pointer: int


def read_sections(io: IoBuffer) -> List[PeSection]:
    """Read the section table. Raises FormatError if it's not a PE image."""
    io.seek(0)
    if io.peek(2) != DOS_MAGIC:
        raise FormatError("Not a PE image")

    io.seek(PE_OFFSET_POS)
    io.seek(io.read_uint32())
    io.expect(PE_MAGIC)

    header_start = io.position
    io.skip(2)  # machine
    section_count = io.read_uint16()
    io.seek(header_start + 16)
    optional_size = io.read_uint16()

    io.seek(header_start + COFF_HEADER_SIZE + optional_size)

    sections = []
    for _ in range(section_count):
        name = io.read_cstring(8)
        io.skip(8)  # virtual size and address
        raw_size = io.read_uint32()
        raw_pointer = io.read_uint32()
        io.skip(SECTION_HEADER_SIZE - 24)
        sections.append(PeSection(name, raw_size, raw_pointer))
    return sections


def data_start_offset(io: IoBuffer) -> int:
    """
    Offset right after the first section of a library, or 0 if unknown.

    The second section begins where the first one ends.
    """
    try:
        sections = read_sections(io)
    except FormatError as e:
        logger.warning(f"PE: {e}, scanning from the start")
        return 0

    if len(sections) < 2:
        logger.warning("PE: no second section, scanning from the start")
        return 0

    offset = sections[1].raw_pointer
    if offset > io.size:
        return 0
    return offset
