"""Shared helpers."""
from .binary import IoBuffer, ByteOrder, FormatError, pack_string

__all__ = ['IoBuffer', 'ByteOrder', 'FormatError', 'pack_string']
