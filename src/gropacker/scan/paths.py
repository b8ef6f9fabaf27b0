"""
Path normalization for resource references.

Filenames inside worlds and libraries come in several spellings: backslashes
from the editor, doubled or leading slashes and "...MP" directories written
by Serious Sam Revolution, spaces where the shipped files use underscores.
Everything here is a pure string transform; evidence of the Revolution
layout is returned to the caller instead of being recorded anywhere.
"""

from dataclasses import dataclass
from typing import Tuple

from .context import GameVariantFlags


# Directories that Revolution ships with an "MP" suffix, and the position of it
ALTERNATE_DIRECTORIES = (
    ("modelsmp", 6),
    ("soundsmp", 6),
    ("musicmp", 5),
    ("datamp", 4),
    ("texturesmp", 8),
    ("animationsmp", 10),
)


@dataclass(frozen=True)
class NormalizedPath:
    """Canonical path plus its lowercase comparison key."""
    path: str
    key: str

    @classmethod
    def of(cls, path: str) -> 'NormalizedPath':
        return cls(path, path.lower())

    def __str__(self) -> str:
        return self.path


def fix_filename(raw: str) -> Tuple[str, GameVariantFlags]:
    """
    Make a filename consistent.

    Backslashes become slashes, doubled slashes are collapsed and a leading
    slash is removed. Both of the latter only happen in Revolution worlds,
    so they are reported back as an inferred alternate edition flag.

    Returns:
        (fixed filename, flags inferred from its spelling)
    """
    inferred = GameVariantFlags()
    path = raw.replace('\\', '/')

    if '//' in path:
        inferred.alternate_edition = True
        while '//' in path:
            path = path.replace('//', '/')

    if path.startswith('/'):
        path = path[1:]
        inferred.alternate_edition = True

    return path, inferred


def normalize(raw: str) -> Tuple[NormalizedPath, GameVariantFlags]:
    """fix_filename() wrapped into a NormalizedPath."""
    path, inferred = fix_filename(raw)
    return NormalizedPath.of(path), inferred


def collapse_alternate_directory(path: str) -> str:
    """Replace Revolution "MP" directories with the regular ones."""
    check = path.lower()
    for prefix, cut in ALTERNATE_DIRECTORIES:
        if check.startswith(prefix):
            return path[:cut] + path[cut + 2:]
    return path


def spaces_to_underscores(path: str) -> str:
    return path.replace(' ', '_')


def _split_ext(path: str) -> Tuple[str, str]:
    # Only the last path component may carry the extension
    slash = path.rfind('/')
    dot = path.rfind('.')
    if dot <= slash:
        return path, ""
    return path[:dot], path[dot:]


def file_ext(path: str) -> str:
    """Lowercase extension with the dot, or an empty string."""
    return _split_ext(path)[1].lower()


def remove_ext(path: str) -> str:
    return _split_ext(path)[0]


def replace_ext(path: str, ext: str) -> str:
    """Swap the extension, keeping everything before it verbatim."""
    if ext and not ext.startswith('.'):
        ext = '.' + ext
    return remove_ext(path) + ext


def file_name(path: str) -> str:
    """Filename without directory and extension."""
    base = remove_ext(path)
    return base[base.rfind('/') + 1:]
