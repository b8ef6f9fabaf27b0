"""
TEX - Serious Engine 1 texture

FX textures (fire, plasma, water) keep the path of their base texture as the
very last string of the file, after a null byte:

- Texture version and data with 6 values, including two chunks (36 bytes)
- "FXDT" at offset 36 if the texture has effect data
- ... effect data ...
- 0x00 + base texture path up to the end of file

The first 56 bytes never belong to the base texture path.
"""

import logging
from pathlib import Path
from typing import Optional

from ..utils.binary import IoBuffer, ByteOrder, FormatError

logger = logging.getLogger(__name__)


TEX_HEADER_SIZE = 36
TAG_FX_DATA = b"FXDT"
BASE_TEXTURE_FLOOR = 56


def read_base_texture(io: IoBuffer) -> Optional[str]:
    """
    Extract the base texture path of an FX texture.

    Returns:
        The raw path, or None for regular textures and when no null byte
        is found above the fixed floor.
    """
    if io.size < TEX_HEADER_SIZE + len(TAG_FX_DATA):
        return None

    io.seek(TEX_HEADER_SIZE)
    if not io.peek_tag(TAG_FX_DATA):
        return None

    # Go backwards from the last byte until the null character
    io.seek(io.size - 1)
    chars = 0
    found = False

    while io.position > BASE_TEXTURE_FLOOR:
        if io.peek(1) == b"\x00":
            io.skip(1)
            found = True
            break
        io.seek(io.position - 1)
        chars += 1

    if not found or chars == 0:
        return None

    return io.read_bytes(chars).decode('latin-1')


def base_texture_of(path: Path) -> Optional[str]:
    """read_base_texture() for a file on disk. Unreadable textures have none."""
    try:
        io = IoBuffer.from_file(str(path), ByteOrder.LITTLE_ENDIAN)
    except FormatError as e:
        logger.warning(f"TEX: {e}")
        return None
    return read_base_texture(io)
