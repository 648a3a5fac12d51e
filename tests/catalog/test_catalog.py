import logging

import pytest

from romnamer.catalog.catalog import (
    Catalog,
    CatalogEntry,
    find_dat_files,
    load_catalog,
    normalize_checksum,
)
from romnamer.catalog.dat_parser import DatParseError, RecordKind


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [
        ("3d2f688c", "3D2F688C"),
        ("3D2F688C", "3D2F688C"),
        (" abcd ", "0000ABCD"),
        ("0x1234ABCD", "1234ABCD"),
        ("xyz", None),
        ("123456789", None),
        ("", None),
    ],
)
def test_normalize_checksum(raw, expected):
    assert normalize_checksum(raw) == expected


@pytest.mark.unit
def test_load_single_dat(make_dat):
    path = make_dat("nes.dat", [("Super Mario Bros.", ["3d2f688c"])])

    result = load_catalog([path])
    entry = result.catalog["3D2F688C"]
    assert entry == CatalogEntry(checksum="3D2F688C", title="Super Mario Bros.", source_name="nes.dat")
    assert result.stats[0].records_seen == 1
    assert result.stats[0].entries_added == 1
    assert result.stats[0].kind == RecordKind.GAME
    assert result.warnings == []


@pytest.mark.unit
def test_first_source_wins_across_files(make_dat):
    first = make_dat("a.dat", [("First Title", ["AAAAAAAA"])])
    second = make_dat("b.dat", [("Second Title", ["aaaaaaaa"])])

    result = load_catalog([first, second])
    assert result.catalog["AAAAAAAA"].title == "First Title"
    assert result.catalog["AAAAAAAA"].source_name == "a.dat"
    assert [s.entries_added for s in result.stats] == [1, 0]

    reversed_result = load_catalog([second, first])
    assert reversed_result.catalog["AAAAAAAA"].title == "Second Title"


@pytest.mark.unit
def test_first_record_wins_within_file(make_dat):
    path = make_dat("dup.dat", [("Original", ["BBBBBBBB"]), ("Duplicate", ["BBBBBBBB"])])

    result = load_catalog([path])
    assert result.catalog["BBBBBBBB"].title == "Original"
    assert result.stats[0].records_seen == 2
    assert result.stats[0].entries_added == 1


@pytest.mark.unit
def test_unsupported_document_is_skipped_with_warning(dat_dir, make_dat, caplog):
    bad = dat_dir / "a_unsupported.xml"
    bad.write_text("<gameList><game_entry/></gameList>")
    good = make_dat("b.dat", [("Game", ["12345678"])])

    with caplog.at_level(logging.WARNING):
        result = load_catalog([bad, good])

    assert len(result.catalog) == 1
    assert [w.source_name for w in result.warnings] == ["a_unsupported.xml"]
    assert [s.source_name for s in result.stats] == ["b.dat"]
    assert "a_unsupported.xml" in caplog.text


@pytest.mark.unit
def test_parse_failure_is_fatal(dat_dir, make_dat):
    good = make_dat("a.dat", [("Game", ["12345678"])])
    broken = dat_dir / "b.dat"
    broken.write_text("<datafile><game")

    with pytest.raises(DatParseError):
        load_catalog([good, broken])


@pytest.mark.unit
def test_roms_without_crc_or_with_invalid_crc_are_ignored(dat_dir):
    path = dat_dir / "mixed.dat"
    path.write_text(
        '<datafile><game name="g">'
        '<rom name="a"/>'
        '<rom name="b" crc="nothex!"/>'
        '<rom name="c" crc="CAFEBABE"/>'
        '</game></datafile>'
    )

    result = load_catalog([path])
    assert list(result.catalog) == ["CAFEBABE"]


@pytest.mark.unit
def test_machine_documents_are_loaded(make_dat):
    path = make_dat("mame.xml", [("galaga", ["9E1FB0D4"])], collection="machine")

    result = load_catalog([path])
    assert result.catalog["9E1FB0D4"].title == "galaga"
    assert result.stats[0].kind == RecordKind.MACHINE


@pytest.mark.unit
def test_catalog_keys_are_uppercase_hex(make_dat):
    path = make_dat("nes.dat", [("a", ["abcdef01"]), ("b", ["1f"])])

    catalog = load_catalog([path]).catalog
    assert sorted(catalog) == ["0000001F", "ABCDEF01"]
    for key in catalog:
        assert len(key) == 8 and key == key.upper()


@pytest.mark.unit
def test_catalog_is_read_only():
    catalog = Catalog({"AAAAAAAA": CatalogEntry("AAAAAAAA", "t", "s")})
    with pytest.raises(TypeError):
        catalog["BBBBBBBB"] = CatalogEntry("BBBBBBBB", "u", "s")
    assert "AAAAAAAA" in catalog
    assert catalog.get("CCCCCCCC") is None
    assert len(catalog) == 1


@pytest.mark.unit
def test_find_dat_files_sorted(dat_dir):
    for name in ["b.dat", "A.xml", "c.txt", ".hidden.dat"]:
        (dat_dir / name).write_text("<datafile/>")

    assert [p.name for p in find_dat_files(dat_dir)] == ["A.xml", "b.dat"]


@pytest.mark.unit
def test_find_dat_files_missing_directory(tmp_path):
    assert find_dat_files(tmp_path / "nope") == []
