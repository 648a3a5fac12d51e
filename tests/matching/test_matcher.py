import pytest

from romnamer.catalog.catalog import Catalog, CatalogEntry
from romnamer.matching.matcher import (
    UNMATCHED,
    Matched,
    MatchMode,
    Unmatched,
    compute_checksums,
    match,
)
from romnamer.scanner.hash_calculator import crc32_hex
from romnamer.scanner.header import strip_header


def _catalog(**titles) -> Catalog:
    return Catalog({
        key: CatalogEntry(checksum=key, title=title, source_name="test.dat")
        for key, title in titles.items()
    })


@pytest.mark.unit
def test_full_file_match(ines_rom):
    key = crc32_hex(ines_rom)
    result = match(ines_rom, _catalog(**{key: "Full"}))

    assert isinstance(result, Matched)
    assert result.mode == MatchMode.HEADERED
    assert result.checksum == key
    assert result.entry.title == "Full"


@pytest.mark.unit
def test_deheadered_match(ines_rom):
    key = crc32_hex(strip_header(ines_rom))
    result = match(ines_rom, _catalog(**{key: "Stripped"}))

    assert isinstance(result, Matched)
    assert result.mode == MatchMode.DEHEADERED
    assert result.checksum == key
    assert result.entry.title == "Stripped"


@pytest.mark.unit
def test_headered_match_wins_when_both_present(ines_rom):
    full = crc32_hex(ines_rom)
    stripped = crc32_hex(strip_header(ines_rom))
    result = match(ines_rom, _catalog(**{full: "Full", stripped: "Stripped"}))

    assert result.mode == MatchMode.HEADERED
    assert result.entry.title == "Full"


@pytest.mark.unit
def test_headerless_file_never_tries_stripped_checksum():
    data = b"\x00" * 16 + bytes(range(64))
    # An entry keyed by the "stripped" checksum must not match a header-less file
    stripped = crc32_hex(data[16:])
    result = match(data, _catalog(**{stripped: "Should not match"}))

    assert result is UNMATCHED
    assert isinstance(result, Unmatched)


@pytest.mark.unit
def test_header_only_file_is_not_stripped():
    data = b"NES\x1a" + bytes(12)
    empty_key = crc32_hex(b"")
    assert match(data, _catalog(**{empty_key: "Empty"})) is UNMATCHED


@pytest.mark.unit
def test_unmatched_when_catalog_empty(ines_rom):
    assert match(ines_rom, Catalog()) is UNMATCHED


@pytest.mark.unit
def test_compute_checksums(ines_rom):
    full, stripped = compute_checksums(ines_rom)
    assert full == crc32_hex(ines_rom)
    assert stripped == crc32_hex(ines_rom[16:])

    assert compute_checksums(b"plain")[1] is None
