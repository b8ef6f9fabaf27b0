"""Run state shared by the scanners: flags, known dependencies and the file list."""

import hashlib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple


@dataclass
class GameVariantFlags:
    """Behavior toggles. Set from configuration or inferred while parsing."""
    alternate_edition: bool = False  # Serious Sam Revolution layout
    include_ini: bool = False        # INI configs alongside MDL files
    ogg_fallback: bool = False       # OGG files stand in for MP3 files
    erase_mod_prefix: bool = False   # Strip the mod directory from recorded paths

    # Command line names
    NAMES = {
        "ssr": "alternate_edition",
        "ini": "include_ini",
        "ogg": "ogg_fallback",
        "mod": "erase_mod_prefix",
    }

    @classmethod
    def from_names(cls, names: Iterable[str]) -> 'GameVariantFlags':
        """Build flags from command line names, ignoring ones that aren't flags."""
        flags = cls()
        for name in names:
            attr = cls.NAMES.get(name.lower())
            if attr:
                setattr(flags, attr, True)
        return flags

    def merge(self, other: 'GameVariantFlags') -> List[str]:
        """Turn on every flag set in other. Returns names of newly enabled flags."""
        enabled = []
        for f in fields(self):
            if getattr(other, f.name) and not getattr(self, f.name):
                setattr(self, f.name, True)
                enabled.append(f.name)
        return enabled

    def any(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))


def dependency_key(key: str) -> int:
    """Fixed-width hash of a lowercase comparison key."""
    digest = hashlib.blake2b(key.encode('utf-8'), digest_size=8).digest()
    return int.from_bytes(digest, 'little')


class KnownDependencySet:
    """
    Hashes of files that are already available to the game.

    Filled from standard GRO archives and explicit exclusions before scanning.
    Only hashes are stored; equal hashes are treated as the same file.
    """

    def __init__(self):
        self._keys: Set[int] = set()

    def contains(self, key: str) -> bool:
        return dependency_key(key) in self._keys

    def insert(self, key: str) -> bool:
        """Add a comparison key. Returns False if it was already there."""
        h = dependency_key(key)
        if h in self._keys:
            return False
        self._keys.add(h)
        return True

    def contains_path(self, path: str) -> bool:
        return self.contains(path.lower())

    def insert_path(self, path: str) -> bool:
        return self.insert(path.lower())

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return len(self._keys)


@dataclass(frozen=True)
class ListedFile:
    """One file queued for packing."""
    path: str                       # Relative path in its original case
    sequence: Optional[int] = None  # Discovery number, None when not counted
    source: str = ""                # File it was discovered in

    def __str__(self) -> str:
        if self.sequence is None:
            return self.path
        return f"{self.sequence}. {self.path}"


@dataclass
class ScanContext:
    """Everything a run mutates, passed explicitly through the scanners."""
    root: Path = field(default_factory=Path)
    mod: str = ""
    flags: GameVariantFlags = field(default_factory=GameVariantFlags)
    known: KnownDependencySet = field(default_factory=KnownDependencySet)
    files: List[ListedFile] = field(default_factory=list)
    _listed: Dict[str, ListedFile] = field(default_factory=dict, repr=False)
    _counter: int = 0

    def __post_init__(self):
        self.root = Path(self.root)
        if self.mod:
            self.mod = self.mod.replace('\\', '/').strip('/') + '/'

    @property
    def mod_prefix(self) -> str:
        """Lowercase mod directory with a trailing slash, or empty."""
        return self.mod.lower()

    def find(self, path: str) -> Optional[Tuple[Path, str]]:
        """
        Find a listed file on disk.

        Tries the mod directory, then the game folder, then the regular
        directory of a Revolution "MP" one.

        Returns:
            (full path, relative name that matched) or None
        """
        from .paths import collapse_alternate_directory

        candidates = [path]
        if self.flags.alternate_edition:
            collapsed = collapse_alternate_directory(path)
            if collapsed != path:
                candidates.append(collapsed)

        for candidate in candidates:
            for base in self.search_dirs():
                full = base / candidate
                if full.is_file():
                    return full, candidate
        return None

    def locate(self, path: str) -> Optional[Path]:
        found = self.find(path)
        return found[0] if found else None

    def search_dirs(self) -> List[Path]:
        if self.mod:
            return [self.root / self.mod, self.root]
        return [self.root]

    def is_listed(self, path: str) -> bool:
        """Case-insensitive check against the output list."""
        return path.lower() in self._listed

    def add_file(self, path: str, source: str = "", count: bool = True) -> Optional[ListedFile]:
        """Append a file unless it's listed already. Returns the new entry."""
        key = path.lower()
        if key in self._listed:
            return None

        sequence = None
        if count:
            self._counter += 1
            sequence = self._counter

        listed = ListedFile(path, sequence, source)
        self._listed[key] = listed
        self.files.append(listed)
        return listed

    @property
    def counted(self) -> int:
        """Amount of numbered files so far."""
        return self._counter

    def files_from(self, source: str) -> List[ListedFile]:
        return [f for f in self.files if f.source == source]

    def __iter__(self) -> Iterator[ListedFile]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)
