"""
PackerConfig - what to scan, what to skip and where to write the GRO.

Built from command line arguments or loaded from a JSON file, so the same
package can be rebuilt later with `gropacker -c mymap.json`.
"""

import json
from dataclasses import dataclass, field, asdict
from pathlib import Path, PurePosixPath
from typing import List, Optional

from .scan.context import GameVariantFlags
from .scan.paths import file_ext, file_name


class ConfigError(ValueError):
    """Invalid packer configuration."""


# Flags that change what the packer does rather than how files are matched
MODE_FLAGS = ("dep", "gro")
KNOWN_FLAGS = tuple(GameVariantFlags.NAMES) + MODE_FLAGS

# Directory that every world lives in, relative to the game folder
LEVELS_DIR = "Levels"


@dataclass
class PackerConfig:
    """Packer configuration."""
    root: str = ""                                       # Game folder
    mod: str = ""                                        # Mod folder inside the game folder
    output: str = ""                                     # GRO file, absolute or relative to root
    sources: List[str] = field(default_factory=list)     # Worlds and other files to scan
    store: List[str] = field(default_factory=list)       # Extensions packed without compression
    depends: List[str] = field(default_factory=list)     # Excluded files and GRO archives
    flags: List[str] = field(default_factory=list)       # ssr, ini, ogg, mod, dep, gro
    pause: bool = False

    @property
    def only_dependencies(self) -> bool:
        return "dep" in self.flags

    @property
    def detect_games(self) -> bool:
        return "gro" in self.flags

    @property
    def root_path(self) -> Path:
        return Path(self.root)

    @property
    def output_path(self) -> Path:
        return Path(self.output)

    def variant_flags(self) -> GameVariantFlags:
        return GameVariantFlags.from_names(self.flags)

    def add_flag(self, flag: str):
        flag = flag.lower()
        if flag not in KNOWN_FLAGS:
            raise ConfigError(f"Unknown flag '{flag}'! Expected one of: {', '.join(KNOWN_FLAGS)}")
        if flag not in self.flags:
            self.flags.append(flag)

    def add_store(self, ext: str):
        """Add an extension to store, with a leading period and in lowercase."""
        ext = ext.lower()
        if not ext.startswith('.'):
            ext = '.' + ext
        if ext not in self.store:
            self.store.append(ext)

    def normalize(self) -> 'PackerConfig':
        """
        Validate settings and make paths usable.

        Raises:
            ConfigError: no game folder, or no output for packing
        """
        if not self.root:
            raise ConfigError("Game folder path has not been set! Please use '-r <game folder path>'!")

        if not self.output and not self.only_dependencies:
            raise ConfigError("Output GRO file has not been set! Please use '-o <GRO file>'!")

        for flag in list(self.flags):
            self.flags.remove(flag)
            self.add_flag(flag)

        for ext in list(self.store):
            self.store.remove(ext)
            self.add_store(ext)

        # Relative output goes into the game folder
        if self.output and not Path(self.output).is_absolute():
            self.output = str(self.root_path / self.output)

        self.sources = [s.replace('\\', '/') for s in self.sources]
        return self

    @classmethod
    def from_world_path(cls, world: str) -> 'PackerConfig':
        """
        Derive the game folder from a world inside its Levels directory.

        Raises:
            ConfigError: the world isn't inside a Levels folder
        """
        path = PurePosixPath(world.replace('\\', '/'))
        parts = path.parts

        levels = None
        for i in range(len(parts) - 1, -1, -1):
            if parts[i].lower() == LEVELS_DIR.lower():
                levels = i
                break

        if levels is None:
            raise ConfigError(
                f"You may only open WLD files that reside within '{LEVELS_DIR}' folder of a game directory!"
            )

        root = str(PurePosixPath(*parts[:levels])) if levels > 0 else "."
        relative = str(PurePosixPath(*parts[levels:]))
        return cls(root=root, sources=[relative])

    def default_output(self) -> str:
        """GRO name used when none is given for a world."""
        world = self.sources[0] if self.sources else "World"
        return f"DreamyGRO_{file_name(world)}.gro"

    def set_output(self, output: str):
        """Set output GRO, appending the extension if it's missing."""
        if file_ext(output) != ".gro":
            output += ".gro"
        self.output = output

    def save(self, config_file: str):
        """Save configuration to JSON."""
        with open(config_file, 'w') as f:
            json.dump(asdict(self), f, indent=2)

    @classmethod
    def load(cls, config_file: str) -> 'PackerConfig':
        """Load configuration from JSON."""
        try:
            with open(config_file, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot load config '{config_file}': {e}") from e

        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    def merge(self, other: Optional['PackerConfig']) -> 'PackerConfig':
        """Fill empty settings from another config; lists are appended."""
        if other is None:
            return self
        self.root = self.root or other.root
        self.mod = self.mod or other.mod
        self.output = self.output or other.output
        self.pause = self.pause or other.pause
        for name in ("sources", "store", "depends", "flags"):
            mine = getattr(self, name)
            for value in getattr(other, name):
                if value not in mine:
                    mine.append(value)
        return self
