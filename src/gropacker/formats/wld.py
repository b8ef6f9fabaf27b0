"""
WLD - Serious Engine 1 world file

Only the parts needed to find resource dictionaries are understood.

Format:
- "BUIV" + build version (4 bytes)
- "WRLD"
- World info (optional):
  - "WLIF"
  - "DTRS"                          translation marker, optional
  - "LDRB" + string                 leaderboards, Revolution only
  - "Plv0" + 12 bytes               Revolution only
  - name string + spawn flags (4 bytes)
  - "SpGM"                          special gamemode, Revolution only
  - description string
- ... brushes, terrains, entities ...
- "DPOS" + absolute offset of the brush texture dictionary
- At that offset: "DICT" + count + count * ("DFNM" + string) + "DEND"
- "DPOS" + absolute offset of the entity resource dictionary
- At that offset: another DICT..DEND block

Strings are a 32-bit length followed by that many characters.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ..utils.binary import IoBuffer, ByteOrder, FormatError

logger = logging.getLogger(__name__)


TAG_BUILD_VERSION = b"BUIV"
TAG_WORLD = b"WRLD"
TAG_WORLD_INFO = b"WLIF"
TAG_TRANSLATION = b"DTRS"
TAG_LEADERBOARDS = b"LDRB"
TAG_REV_PLV0 = b"Plv0"
TAG_SPECIAL_GAMEMODE = b"SpGM"
TAG_DICT_POS = b"DPOS"
TAG_DICT_START = b"DICT"
TAG_DICT_FILENAME = b"DFNM"
TAG_DICT_END = b"DEND"

# Plv0 tag followed by 12 bytes of data
PLV0_BLOCK_SIZE = 16


@dataclass
class WorldDictionaries:
    """Filenames read from both world dictionaries, in file order."""
    build_version: int = 0
    name: str = ""
    textures: List[str] = field(default_factory=list)   # Brush textures
    resources: List[str] = field(default_factory=list)  # Entity resources
    alternate_edition: bool = False                      # Revolution chunks were seen

    @property
    def filenames(self) -> List[str]:
        return self.textures + self.resources


def verify_world(io: IoBuffer) -> int:
    """Check the world header. Returns the build version."""
    if io.peek(4) != TAG_BUILD_VERSION:
        raise FormatError("Expected a world file from Serious Sam Classics!")
    io.skip(4)

    version = io.read_int32()

    if io.peek(4) != TAG_WORLD:
        raise FormatError("Expected a world file from Serious Sam Classics!")
    io.skip(4)
    return version


class WorldFile:
    """
    Serious Engine world reader.

    Usage:
        world = WorldFile.from_file("Levels/MyLevel.wld")
        for filename in world.dictionaries.filenames:
            ...
    """

    def __init__(self, io: IoBuffer, path: str = ""):
        self.path = path
        self._io = io
        self.dictionaries = WorldDictionaries()
        self._read()

    @classmethod
    def from_file(cls, path: str) -> 'WorldFile':
        return cls(IoBuffer.from_file(path, ByteOrder.LITTLE_ENDIAN), path)

    @classmethod
    def from_bytes(cls, data: bytes, path: str = "") -> 'WorldFile':
        return cls(IoBuffer.from_bytes(data, ByteOrder.LITTLE_ENDIAN), path)

    def _read(self):
        io = self._io
        self.dictionaries.build_version = verify_world(io)

        self._skip_world_info()

        io.seek(self._find_dictionary_pos())
        io.expect(TAG_DICT_START)
        self.dictionaries.textures = self._read_dictionary()

        # Second position comes right after the first dictionary
        io.expect(TAG_DICT_POS)
        io.seek(io.read_int32())
        io.expect(TAG_DICT_START)
        self.dictionaries.resources = self._read_dictionary()

        logger.debug(
            f"WLD {self.path}: {len(self.dictionaries.textures)} textures, "
            f"{len(self.dictionaries.resources)} resources"
        )

    def _mark_revolution(self, tag: bytes):
        if not self.dictionaries.alternate_edition:
            logger.info(f"WLD {self.path}: '{tag.decode('ascii')}' chunk, assuming Revolution layout")
        self.dictionaries.alternate_edition = True

    def _skip_world_info(self):
        io = self._io
        if not io.peek_tag(TAG_WORLD_INFO):
            logger.debug(f"WLD {self.path}: no world info chunk")
            return
        io.skip(4)

        if io.peek_tag(TAG_TRANSLATION):
            io.skip(4)

        if io.peek_tag(TAG_LEADERBOARDS):
            io.skip(4)
            io.read_string()
            self._mark_revolution(TAG_LEADERBOARDS)

        if io.peek_tag(TAG_REV_PLV0):
            io.skip(PLV0_BLOCK_SIZE)
            self._mark_revolution(TAG_REV_PLV0)

        self.dictionaries.name = io.read_string()
        io.skip(4)  # spawn flags

        if io.peek_tag(TAG_SPECIAL_GAMEMODE):
            io.skip(4)
            self._mark_revolution(TAG_SPECIAL_GAMEMODE)

        io.read_string()  # description

    def _find_dictionary_pos(self) -> int:
        """Walk forward until the dictionary position chunk."""
        io = self._io
        if not io.scan_to(TAG_DICT_POS):
            raise FormatError(f"No dictionary position in world '{self.path}'")
        io.skip(4)
        return io.read_int32()

    def _read_dictionary(self) -> List[str]:
        io = self._io
        count = io.read_int32()
        filenames = []

        for _ in range(count):
            io.expect(TAG_DICT_FILENAME)
            filename = io.read_string()
            # Empty slots are valid
            if filename:
                filenames.append(filename)

        io.expect(TAG_DICT_END)
        return filenames
