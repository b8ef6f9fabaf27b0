"""World reader and world scanning tests."""

import pytest

from builders import world_bytes, write
from gropacker.formats.wld import WorldFile
from gropacker.scan.context import ScanContext
from gropacker.scan.registry import ScannerRegistry, UnstructuredScanner, WorldScanner, scan_source
from gropacker.scan.resolver import ResolveStatus
from gropacker.scan.world import scan_world, world_dependencies
from gropacker.utils.binary import FormatError


def test_reads_both_dictionaries():
    world = WorldFile.from_bytes(world_bytes(
        textures=["Textures\\Wall.tex", "Textures\\Floor.tex"],
        resources=["Models\\Walker.mdl"],
    ))
    d = world.dictionaries
    assert d.build_version == 10000
    assert d.name == "Test World"
    assert d.textures == ["Textures\\Wall.tex", "Textures\\Floor.tex"]
    assert d.resources == ["Models\\Walker.mdl"]
    assert d.filenames == d.textures + d.resources
    assert not d.alternate_edition


def test_empty_entries_are_dropped():
    world = WorldFile.from_bytes(world_bytes(textures=["Textures\\Wall.tex", ""]))
    assert world.dictionaries.textures == ["Textures\\Wall.tex"]
    assert world.dictionaries.resources == []


def test_revolution_chunks():
    world = WorldFile.from_bytes(world_bytes(textures=["A.tex"], revolution=True))
    assert world.dictionaries.alternate_edition
    assert world.dictionaries.textures == ["A.tex"]


def test_world_info_is_optional():
    world = WorldFile.from_bytes(world_bytes(resources=["Sounds\\A.wav"], world_info=False))
    assert world.dictionaries.name == ""
    assert world.dictionaries.resources == ["Sounds\\A.wav"]


def test_dpos_inside_filler_is_found():
    world = WorldFile.from_bytes(world_bytes(textures=["A.tex"], padding=b"\x00" * 300))
    assert world.dictionaries.textures == ["A.tex"]


def test_not_a_world():
    with pytest.raises(FormatError, match="Serious Sam Classics"):
        WorldFile.from_bytes(b"BUIV\x10\x27\x00\x00BRSH")
    with pytest.raises(FormatError, match="Serious Sam Classics"):
        WorldFile.from_bytes(b"PK\x03\x04")


def test_missing_dictionary_position():
    data = world_bytes(textures=["A.tex"])
    with pytest.raises(FormatError):
        WorldFile.from_bytes(data[:data.index(b"DPOS")])


def test_truncated_dictionary():
    data = world_bytes(textures=["Textures\\Wall.tex"])
    with pytest.raises(FormatError):
        WorldFile.from_bytes(data[:data.index(b"DEND")])


def _context(tmp_path, world="Levels/Test.wld", **kwargs):
    write(tmp_path, world, world_bytes(**kwargs))
    ctx = ScanContext(root=tmp_path)
    ctx.add_file(world, count=False)
    return ctx


def test_scan_world_lists_in_order(tmp_path):
    ctx = _context(
        tmp_path,
        textures=["Textures\\Wall.tex", ""],
        resources=["Models\\Walker.mdl", "Sounds\\Step.wav"],
    )
    results = scan_world(ctx, "Levels\\Test.wld")

    assert [r.status for r in results] == [ResolveStatus.ADDED] * 3
    assert [str(f) for f in world_dependencies(ctx, "Levels/Test.wld")] == [
        "1. Textures/Wall.tex",
        "2. Models/Walker.mdl",
        "3. Sounds/Step.wav",
    ]
    # The world itself stays uncounted at the front
    assert ctx.files[0].path == "Levels/Test.wld"
    assert ctx.files[0].sequence is None


def test_single_texture_with_empty_slot(tmp_path):
    ctx = _context(tmp_path, textures=["Textures\\Wall.tex", ""])
    scan_world(ctx, "Levels/Test.wld")
    assert [f.sequence for f in ctx.files_from("Levels/Test.wld")] == [1]


def test_known_dependencies_are_not_listed(tmp_path):
    ctx = _context(tmp_path, textures=["Textures\\Wall.tex"], resources=["Models\\Walker.mdl"])
    ctx.known.insert_path("textures/wall.tex")

    results = scan_world(ctx, "Levels/Test.wld")
    assert results[0].status is ResolveStatus.KNOWN
    assert [f.path for f in ctx.files_from("Levels/Test.wld")] == ["Models/Walker.mdl"]


def test_thumbnail_and_visibility(tmp_path):
    ctx = _context(tmp_path, textures=["Textures\\Wall.tex"])
    write(tmp_path, "Levels/TestTbn.tex")
    write(tmp_path, "Levels/Test.tbn")
    write(tmp_path, "Levels/Test.vis")

    scan_world(ctx, "Levels/Test.wld")
    assert [str(f) for f in ctx.files_from("Levels/Test.wld")] == [
        "1. Levels/TestTbn.tex",
        "2. Levels/Test.vis",
        "3. Textures/Wall.tex",
    ]


def test_revolution_world_sets_flag(tmp_path):
    ctx = _context(tmp_path, textures=["TexturesMP\\Wall.tex"], revolution=True)
    ctx.known.insert_path("Textures/Wall.tex")

    results = scan_world(ctx, "Levels/Test.wld")
    assert ctx.flags.alternate_edition
    assert results[0].status is ResolveStatus.KNOWN


def test_second_world_skips_shared_files(tmp_path):
    ctx = _context(tmp_path, textures=["Textures\\Wall.tex"])
    write(tmp_path, "Levels/Other.wld", world_bytes(textures=["textures\\WALL.tex"]))
    ctx.add_file("Levels/Other.wld", count=False)

    scan_world(ctx, "Levels/Test.wld")
    results = scan_world(ctx, "Levels/Other.wld")

    assert results[0].status is ResolveStatus.SKIPPED
    assert ctx.files_from("Levels/Other.wld") == []
    assert ctx.counted == 1


def test_broken_world_adds_nothing(tmp_path):
    write(tmp_path, "Levels/Broken.wld", b"BUIV\x10\x27\x00\x00WRLDnothing here")
    ctx = ScanContext(root=tmp_path)
    with pytest.raises(FormatError):
        scan_world(ctx, "Levels/Broken.wld")
    assert len(ctx) == 0


def test_missing_world(tmp_path):
    ctx = ScanContext(root=tmp_path)
    with pytest.raises(FormatError, match="does not exist"):
        scan_world(ctx, "Levels/Missing.wld")


def test_scanner_registry():
    assert ScannerRegistry.get("Levels/Test.WLD") is WorldScanner
    assert ScannerRegistry.get("Scripts/Level.lua") is UnstructuredScanner
    assert ".wld" in ScannerRegistry.get_all()


def test_scan_source_picks_world_scanner(tmp_path):
    ctx = _context(tmp_path, resources=["Sounds\\Step.wav"])
    results = scan_source(ctx, "Levels\\Test.wld")
    assert [r.path for r in results] == ["Sounds/Step.wav"]
