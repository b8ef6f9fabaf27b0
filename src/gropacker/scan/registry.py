"""Scanner registry - picks how a source file is read by its extension."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from .context import ScanContext
from .paths import file_ext
from .resolver import ResolveResult


class SourceScanner(ABC):
    """
    Abstract base for scanners that pull filenames out of a source file.

    Each scanner feeds what it finds through the resolver and returns the
    per-reference results in the order they were found.
    """

    @abstractmethod
    def scan(self, ctx: ScanContext, source: str) -> List[ResolveResult]:
        """
        Scan one file relative to the game folder.

        Raises:
            FormatError: the file can't be read or isn't what it claims to be
        """
        pass


class ScannerRegistry:
    """Registry for source scanners by extension, with a fallback scanner."""

    _scanners: Dict[str, Type[SourceScanner]] = {}
    _fallback: Optional[Type[SourceScanner]] = None

    @classmethod
    def register(cls, *extensions: str):
        """Decorator to register a scanner for extensions (".wld")."""
        def decorator(scanner_class: Type[SourceScanner]):
            for ext in extensions:
                cls._scanners[ext.lower()] = scanner_class
            return scanner_class
        return decorator

    @classmethod
    def register_fallback(cls, scanner_class: Type[SourceScanner]):
        """Decorator for the scanner used when no extension matches."""
        cls._fallback = scanner_class
        return scanner_class

    @classmethod
    def get(cls, source: str) -> Optional[Type[SourceScanner]]:
        return cls._scanners.get(file_ext(source), cls._fallback)

    @classmethod
    def get_all(cls) -> Dict[str, Type[SourceScanner]]:
        return cls._scanners.copy()


@ScannerRegistry.register(".wld")
class WorldScanner(SourceScanner):
    """Dictionaries of world files."""

    def scan(self, ctx: ScanContext, source: str) -> List[ResolveResult]:
        from .world import scan_world
        return scan_world(ctx, source)


@ScannerRegistry.register_fallback
class UnstructuredScanner(SourceScanner):
    """Filename tags anywhere in any other file."""

    def scan(self, ctx: ScanContext, source: str) -> List[ResolveResult]:
        from .unstructured import scan_file
        print(f"Extra dependencies for '{source}':")
        before = ctx.counted
        results = scan_file(ctx, source)
        if ctx.counted == before:
            print("No dependencies")
        return results


def scan_source(ctx: ScanContext, source: str) -> List[ResolveResult]:
    """Scan a source with the scanner registered for its extension."""
    source = source.replace('\\', '/')
    scanner_class = ScannerRegistry.get(source)
    return scanner_class().scan(ctx, source)
