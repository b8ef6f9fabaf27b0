#!/usr/bin/env python3
"""
gropacker - pack custom Serious Sam levels with everything they need.

Usage:
    gropacker <game folder>/Levels/MyLevel.wld
    gropacker -r <game folder> -o MyLevel.gro -i Levels/MyLevel.wld [options]

Options:
    -r  Root directory of a classic Serious Sam game (e.g. "-r C:/SeriousSam/")
    -m  Mod folder inside the game folder that files are included from
    -o  Output GRO file, absolute or relative to the game folder
    -i  Scan this file and add everything it references (repeatable)
    -s  Don't compress files of a certain type (e.g. "-s wld" or "-s .ogg")
    -d  Ignore a resource or an entire GRO archive (e.g. "-d MyResources.gro")
    -f  Behavior flag (repeatable):
          ssr - world(s) are from Serious Sam Revolution (detected automatically)
          ini - include INI configs alongside their MDL files
          ogg - check for OGG files if MP3 files aren't found
          mod - record mod files relative to the mod folder
          dep - only list dependencies, don't pack anything
          gro - ignore standard GRO files of the detected game
    -p  Pause before closing
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from .config import ConfigError, PackerConfig
from .packer import check_existence, display_failed, pack
from .scan.context import ScanContext
from .scan.games import GameType, detect_game, ignore_dependency, ignore_game
from .scan.registry import scan_source
from .utils.binary import FormatError

logger = logging.getLogger(__name__)

Ask = Callable[[str, bool], bool]
Prompt = Callable[[str], str]


def ask_yes_no(question: str, default: bool) -> bool:
    """Console yes/no question."""
    hint = "[Y/n]" if default else "[y/N]"
    answer = input(f"{question} {hint} ").strip().lower()
    if not answer:
        return default
    return answer.startswith('y')


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gropacker",
        description="Pack a Serious Sam world with its extra dependencies into a GRO archive",
    )
    parser.add_argument('world', nargs='?', help='World file inside the Levels folder of a game')
    parser.add_argument('-r', dest='root', help='Game folder')
    parser.add_argument('-m', dest='mod', help='Mod folder inside the game folder')
    parser.add_argument('-o', dest='output', help='Output GRO file')
    parser.add_argument('-i', dest='sources', action='append', default=[], help='File to scan')
    parser.add_argument('-s', dest='store', action='append', default=[], help='Extension to store')
    parser.add_argument('-d', dest='depends', action='append', default=[], help='Dependency to ignore')
    parser.add_argument('-f', dest='flags', action='append', default=[], help='Behavior flag')
    parser.add_argument('-p', dest='pause', action='store_true', help='Pause before closing')
    parser.add_argument('-c', '--config', help='Load settings from a JSON file')
    parser.add_argument('--save-config', help='Save resulting settings to a JSON file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> PackerConfig:
    """Command line settings, falling back to a config file."""
    config = PackerConfig(
        root=args.root or "",
        mod=args.mod or "",
        output=args.output or "",
        sources=list(args.sources),
        depends=list(args.depends),
        pause=args.pause,
    )
    for flag in args.flags:
        config.add_flag(flag)
    for ext in args.store:
        config.add_store(ext)

    if args.config:
        config.merge(PackerConfig.load(args.config))
    return config


def config_from_world(world: str, ask: Ask = ask_yes_no, prompt: Prompt = input) -> PackerConfig:
    """Interactive settings for packing a single world."""
    config = PackerConfig.from_world_path(world)

    if ask("Show world dependencies instead of packing?", False):
        config.add_flag("dep")
        return config

    custom = prompt("Enter output GRO file (blank for automatic): ").strip()
    if custom:
        config.set_output(custom)
    else:
        config.output = config.default_output()

    if ask("Pack uncompressed music files?", True):
        config.add_store(".ogg")
        config.add_store(".mp3")

    if ask("Pack uncompressed world file?", False):
        config.add_store(".wld")

    return config


def build_context(config: PackerConfig, from_world: bool = False) -> ScanContext:
    """
    Prepare the run state: flags, standard dependencies and the sources.

    Raises:
        ConfigError: the game can't be determined for a world-only run
        FormatError: a dependency archive is broken
    """
    ctx = ScanContext(root=config.root_path, mod=config.mod, flags=config.variant_flags())

    # Scanned files are packed as well
    for source in config.sources:
        ctx.add_file(source, count=False)

    if from_world or config.detect_games:
        game = detect_game(ctx)
        if game is GameType.NONE:
            message = ("Couldn't automatically determine the game directory! "
                       "(no 'SE1_00.gro', '1_00c.gro', 'All_01.gro' or 'SE1_10.gro')")
            if from_world:
                raise ConfigError(message)
            print(message)
        ignore_game(ctx, game, set_flags=from_world)

    for dependency in config.depends:
        ignore_dependency(ctx, dependency)

    return ctx


def run(config: PackerConfig, from_world: bool = False) -> int:
    """Scan every source and pack or list the results. Returns the exit code."""
    try:
        config.normalize()
        ctx = build_context(config, from_world)

        print(f"\nStandard dependencies: {len(ctx.known)}\n")

        for source in config.sources:
            scan_source(ctx, source)
            print()

    except (ConfigError, FormatError) as e:
        print(f"Error: {e}")
        return 1

    if config.only_dependencies:
        # Keep the list on screen
        config.pause = True
        print("\nChecking for physical existence of files...")
        result = check_existence(ctx)

        if not display_failed(result.missing, "\nFiles that aren't on disk:"):
            print("\nAll files exist!")
        return 0

    print("\nPacking files...")
    try:
        result = pack(ctx, config.output_path, config.store)
    except OSError as e:
        print(f"Error: {e}")
        return 1

    display_failed(result.missing, "\nCouldn't pack these files:")
    print(f'"{config.output}" is ready!')
    return 0


def pause(config: Optional[PackerConfig]):
    if config is not None and config.pause and sys.stdin.isatty():
        input("Press Enter to continue...")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point."""
    print("gropacker - Serious Sam world packer\n")

    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = None
    try:
        if args.world and not args.sources:
            config = config_from_world(args.world)
            config.merge(config_from_args(args))
            from_world = True
        else:
            config = config_from_args(args)
            if args.world:
                config.sources.insert(0, args.world)
            from_world = False
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    if not config.sources:
        print("Please specify path to a world file or use command line arguments (-h for help)")
        return 1

    if args.save_config:
        config.save(args.save_config)
        logger.info(f"Saved settings to {args.save_config}")

    code = run(config, from_world)
    pause(config)
    return code


if __name__ == "__main__":
    sys.exit(main())
