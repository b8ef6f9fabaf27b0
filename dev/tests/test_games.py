"""Standard dependency tests: game detection, GRO archives and exclusions."""

import pytest

from builders import write, write_gro
from gropacker.formats.gro import GroArchive
from gropacker.scan.context import ScanContext
from gropacker.scan.games import (
    GAME_ARCHIVES,
    GameType,
    detect_game,
    ignore_dependency,
    ignore_game,
    ignore_gro,
)
from gropacker.scan.resolver import ResolveStatus, resolve
from gropacker.utils.binary import FormatError


def test_gro_listing(tmp_path):
    path = write_gro(tmp_path, "SE1_00.gro", ["Models/Walker.mdl", "Textures/Wall.tex"])
    archive = GroArchive(str(path))
    assert archive.list_files() == ["Models/Walker.mdl", "Textures/Wall.tex"]
    assert len(archive) == 2
    assert "models/WALKER.mdl" in archive
    assert "Files: 2" in archive.summary()


def test_broken_gro(tmp_path):
    path = write(tmp_path, "Broken.gro", b"not a zip archive")
    with pytest.raises(FormatError):
        GroArchive(str(path))


def test_missing_gro(tmp_path):
    with pytest.raises(FormatError):
        GroArchive(str(tmp_path / "Missing.gro"))


def test_detect_games(tmp_path):
    ctx = ScanContext(root=tmp_path)
    assert detect_game(ctx) is GameType.NONE

    write_gro(tmp_path, "1_00c.gro", [])
    assert detect_game(ctx) is GameType.TFE

    # Revolution needs both archives
    write_gro(tmp_path, "All_01.gro", [])
    assert detect_game(ctx) is GameType.TFE
    write_gro(tmp_path, "All_02.gro", [])
    assert detect_game(ctx) is GameType.REV

    write_gro(tmp_path, "SE1_00.gro", [])
    assert detect_game(ctx) is GameType.TSE

    write_gro(tmp_path, "SE1_10.gro", [])
    assert detect_game(ctx) is GameType.SE1_10


def test_ignore_gro(tmp_path):
    write_gro(tmp_path, "Extra.gro", ["Models/A.mdl", "models/a.mdl", "Sounds/B.wav"])
    ctx = ScanContext(root=tmp_path)

    assert ignore_gro(ctx, "Extra.gro") == 2
    assert ignore_gro(ctx, "Extra.gro") == 0
    assert resolve(ctx, "Models\\A.mdl").status is ResolveStatus.KNOWN
    assert ignore_gro(ctx, "Missing.gro") == 0


def test_ignore_game_archives(tmp_path):
    write_gro(tmp_path, "1_00c.gro", ["Music/Theme.ogg", "Models/A.mdl"])
    write_gro(tmp_path, "1_04_patch.gro", ["Models/B.mdl"])
    ctx = ScanContext(root=tmp_path)

    assert ignore_game(ctx, GameType.TFE, set_flags=True) == 3
    assert ctx.flags.ogg_fallback
    assert resolve(ctx, "Music\\Theme.mp3").status is ResolveStatus.KNOWN
    assert resolve(ctx, "Models\\B.mdl").status is ResolveStatus.KNOWN


def test_ignore_game_keeps_flags(tmp_path):
    write_gro(tmp_path, "All_01.gro", [])
    write_gro(tmp_path, "All_02.gro", [])
    ctx = ScanContext(root=tmp_path)

    ignore_game(ctx, GameType.REV)
    assert not ctx.flags.alternate_edition
    ignore_game(ctx, GameType.REV, set_flags=True)
    assert ctx.flags.alternate_edition


def test_no_game():
    ctx = ScanContext()
    assert ignore_game(ctx, GameType.NONE, set_flags=True) == 0
    assert not ctx.flags.any()


def test_every_game_has_archives():
    for game in GameType:
        if game is not GameType.NONE:
            assert GAME_ARCHIVES[game]


def test_ignore_single_dependency(tmp_path):
    write(tmp_path, "Textures/Shared.tex")
    ctx = ScanContext(root=tmp_path)

    assert ignore_dependency(ctx, "Textures\\Shared.tex")
    assert not ignore_dependency(ctx, "Textures/Missing.tex")
    assert resolve(ctx, "textures/shared.TEX").status is ResolveStatus.KNOWN
    assert resolve(ctx, "Textures/Missing.tex").status is ResolveStatus.ADDED


def test_ignore_dependency_archive(tmp_path):
    write_gro(tmp_path, "Mods/Shared.gro", ["Models/Shared.mdl"])
    ctx = ScanContext(root=tmp_path)

    assert ignore_dependency(ctx, "Mods\\Shared.gro")
    assert ctx.known.contains_path("Models/Shared.mdl")
