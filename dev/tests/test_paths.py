"""Filename normalization tests."""

from gropacker.scan.paths import (
    NormalizedPath,
    collapse_alternate_directory,
    file_ext,
    file_name,
    fix_filename,
    normalize,
    remove_ext,
    replace_ext,
    spaces_to_underscores,
)


SAMPLES = [
    "Textures\\Wall.tex",
    "Textures\\\\Wall.tex",
    "/Models/Enemies/Headman/Headman.mdl",
    "//Models//Enemies///x.mdl",
    "\\\\Sounds\\Steps.wav",
    "Music/Theme.mp3",
    "",
    "/",
    "///",
    "a\\/b",
]


def test_backslashes_are_not_evidence():
    path, flags = fix_filename("Textures\\Wall.tex")
    assert path == "Textures/Wall.tex"
    assert not flags.alternate_edition


def test_doubled_slashes_collapse():
    path, flags = fix_filename("Models\\\\Enemies//Walker.mdl")
    assert path == "Models/Enemies/Walker.mdl"
    assert flags.alternate_edition


def test_leading_slash_is_removed():
    path, flags = fix_filename("/Textures/Wall.tex")
    assert path == "Textures/Wall.tex"
    assert flags.alternate_edition


def test_fix_filename_is_idempotent():
    for sample in SAMPLES:
        once, _ = fix_filename(sample)
        twice, flags = fix_filename(once)
        assert once == twice, sample
        assert not flags.alternate_edition, sample


def test_normalized_path_key_is_lowercase():
    normalized, _ = normalize("Textures\\Wall.TEX")
    assert normalized == NormalizedPath("Textures/Wall.TEX", "textures/wall.tex")
    assert str(normalized) == "Textures/Wall.TEX"


def test_collapse_alternate_directories():
    assert collapse_alternate_directory("ModelsMP/Player/x.mdl") == "Models/Player/x.mdl"
    assert collapse_alternate_directory("soundsmp/a.wav") == "sounds/a.wav"
    assert collapse_alternate_directory("MusicMP/a.ogg") == "Music/a.ogg"
    assert collapse_alternate_directory("DataMP/a.txt") == "Data/a.txt"
    assert collapse_alternate_directory("TexturesMP/a.tex") == "Textures/a.tex"
    assert collapse_alternate_directory("AnimationsMP/a.ani") == "Animations/a.ani"


def test_collapse_leaves_other_paths():
    assert collapse_alternate_directory("Models/Player/x.mdl") == "Models/Player/x.mdl"
    assert collapse_alternate_directory("Levels/ModelsMP.wld") == "Levels/ModelsMP.wld"


def test_spaces_to_underscores():
    assert spaces_to_underscores("Textures/Old Wall 2.tex") == "Textures/Old_Wall_2.tex"


def test_extension_helpers():
    assert file_ext("Models/Walker.MDL") == ".mdl"
    assert file_ext("Models.dir/Walker") == ""
    assert file_ext("Data/archive.tar.gz") == ".gz"
    assert remove_ext("Models/Walker.MDL") == "Models/Walker"
    assert remove_ext("Data/archive.tar.gz") == "Data/archive.tar"
    assert replace_ext("Models/Walker.mdl", ".ini") == "Models/Walker.ini"
    assert replace_ext("Models/Walker.mdl", "ini") == "Models/Walker.ini"
    assert replace_ext("Models/Walker", ".ini") == "Models/Walker.ini"
    assert file_name("Levels/My Level.wld") == "My Level"
