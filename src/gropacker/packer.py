"""
Packing - writes listed files into a GRO archive.

Files that can't be found on disk are reported instead of failing the run;
most of them are filenames the scanners guessed from arbitrary bytes.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .formats.gro import GroWriter
from .scan.context import ScanContext

logger = logging.getLogger(__name__)


@dataclass
class PackResult:
    """What ended up in the archive and what couldn't be found."""
    output: Optional[Path] = None
    written: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.missing


def check_existence(ctx: ScanContext) -> PackResult:
    """Locate every listed file without packing anything."""
    result = PackResult()
    for listed in ctx.files:
        if ctx.locate(listed.path) is None:
            result.missing.append(listed.path)
        else:
            result.written.append(listed.path)
    return result


def pack(ctx: ScanContext, output: Path, store: Optional[Iterable[str]] = None) -> PackResult:
    """
    Write every listed file that exists into a new GRO.

    Args:
        output: archive path, replaced if it exists
        store: extensions (".ogg") written without compression
    """
    result = PackResult(output=Path(output))
    if result.output.exists():
        result.output.unlink()

    with GroWriter(str(result.output), store) as gro:
        for listed in ctx.files:
            found = ctx.find(listed.path)
            if found is None:
                result.missing.append(listed.path)
                continue

            # Revolution files go under the directory they were found in
            source, arcname = found
            gro.add(source, arcname)
            result.written.append(arcname)

    logger.info(f"{result.output}: {len(result.written)} files, {len(result.missing)} missing")
    return result


def display_failed(files: List[str], message: str) -> bool:
    """Print a list of files that cannot be used. Returns False if there are none."""
    if not files:
        return False

    print(message)
    for path in files:
        print(f"- {path}")
    print()
    return True
