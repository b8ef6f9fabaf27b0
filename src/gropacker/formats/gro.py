"""
GRO Archive - Serious Engine resource package

GRO files are plain zip archives with paths relative to the game folder.
Every GRO next to the executable is mounted over the game directory, so an
entry inside a standard GRO is a resource the game already has.
"""

import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from ..utils.binary import FormatError


@dataclass
class GroEntry:
    """A single file entry in a GRO archive."""
    filename: str = ""
    file_size: int = 0


class GroArchive:
    """
    GRO reader.

    Only the listing is read; resources themselves are never extracted.
    """

    def __init__(self, path: str):
        self.path = path
        self._entries: List[GroEntry] = []
        self._read_listing()

    def _read_listing(self):
        try:
            with zipfile.ZipFile(self.path, 'r') as zf:
                for info in zf.infolist():
                    # Ignore directory entries
                    if info.is_dir():
                        continue
                    self._entries.append(GroEntry(
                        filename=info.filename,
                        file_size=info.file_size,
                    ))
        except zipfile.BadZipFile as e:
            raise FormatError(f"Invalid GRO archive '{self.path}': {e}") from e
        except OSError as e:
            raise FormatError(f"Cannot open '{self.path}': {e.strerror or e}") from e

    @property
    def entries(self) -> List[GroEntry]:
        return self._entries

    def list_files(self) -> List[str]:
        """Get list of all filenames in the archive."""
        return [e.filename for e in self._entries]

    def __iter__(self) -> Iterator[GroEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, filename: str) -> bool:
        check = filename.lower()
        return any(e.filename.lower() == check for e in self._entries)

    def summary(self) -> str:
        total_size = sum(e.file_size for e in self._entries)
        return f"GRO: {self.path}\nFiles: {len(self)}\nTotal size: {total_size:,} bytes"


class GroWriter:
    """
    Writes a new GRO archive, replacing an existing file.

    Usage:
        with GroWriter("MyMap.gro", store=[".ogg"]) as gro:
            gro.add(Path("C:/Game/Levels/MyMap.wld"), "Levels/MyMap.wld")
    """

    def __init__(self, path: str, store: Optional[Iterable[str]] = None):
        self.path = Path(path)
        self.store = {ext.lower() for ext in (store or [])}
        self._zip: Optional[zipfile.ZipFile] = None

    def __enter__(self) -> 'GroWriter':
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._zip = zipfile.ZipFile(self.path, 'w')
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def compression_for(self, arcname: str) -> int:
        """Store files of listed types, compress everything else."""
        ext = Path(arcname).suffix.lower()
        if ext in self.store:
            return zipfile.ZIP_STORED
        return zipfile.ZIP_DEFLATED

    def add(self, source: Path, arcname: str):
        if self._zip is None:
            raise RuntimeError("GRO archive is not open")
        self._zip.write(source, arcname, compress_type=self.compression_for(arcname))

    def close(self):
        if self._zip is not None:
            self._zip.close()
            self._zip = None
