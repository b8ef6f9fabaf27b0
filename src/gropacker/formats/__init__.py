"""Serious Engine resource formats used for dependency scanning."""
from .wld import WorldFile, WorldDictionaries, verify_world
from .tex import read_base_texture, base_texture_of
from .gro import GroArchive, GroEntry, GroWriter
from .pe import PeSection, read_sections, data_start_offset

__all__ = [
    'WorldFile', 'WorldDictionaries', 'verify_world',
    'read_base_texture', 'base_texture_of',
    'GroArchive', 'GroEntry', 'GroWriter',
    'PeSection', 'read_sections', 'data_start_offset',
]
