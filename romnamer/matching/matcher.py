"""
Two-pass CRC matcher.

A ROM may be distributed with or without the 16-byte iNES header, and DAT
files may have been built from either form. The full file is checked
first; only if that fails and a header is present is the header stripped
and the remainder checked. A full-file match always takes priority.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Tuple, Union

from romnamer.catalog.catalog import CatalogEntry
from romnamer.scanner.hash_calculator import crc32_hex
from romnamer.scanner.header import HEADER_SIZE, has_known_header, strip_header

logger = logging.getLogger(__name__)


class MatchMode(Enum):
    """Which form of the file matched the catalog."""
    HEADERED = "headered"
    DEHEADERED = "deheadered"


@dataclass(frozen=True)
class Matched:
    checksum: str
    mode: MatchMode
    entry: CatalogEntry


@dataclass(frozen=True)
class Unmatched:
    pass


MatchResult = Union[Matched, Unmatched]

UNMATCHED = Unmatched()


def _can_strip(data: bytes) -> bool:
    return has_known_header(data) and len(data) > HEADER_SIZE


def compute_checksums(data: bytes) -> Tuple[str, Optional[str]]:
    """
    Compute full-file and de-headered checksums.

    Returns:
        (full, stripped) where stripped is None if no header is present
    """
    full = crc32_hex(data)
    stripped = crc32_hex(strip_header(data)) if _can_strip(data) else None
    return full, stripped


def match(data: bytes, catalog: Mapping[str, CatalogEntry]) -> MatchResult:
    """
    Look up a ROM's checksum in the catalog.

    Args:
        data: Raw file bytes
        catalog: Checksum catalog

    Returns:
        Matched (with the matching checksum and mode) or UNMATCHED
    """
    checksum_full = crc32_hex(data)
    entry = catalog.get(checksum_full)
    if entry is not None:
        return Matched(checksum=checksum_full, mode=MatchMode.HEADERED, entry=entry)

    if _can_strip(data):
        checksum_stripped = crc32_hex(strip_header(data))
        entry = catalog.get(checksum_stripped)
        if entry is not None:
            return Matched(checksum=checksum_stripped, mode=MatchMode.DEHEADERED, entry=entry)
        logger.debug(f"No match for {checksum_full} or de-headered {checksum_stripped}")
    else:
        logger.debug(f"No match for {checksum_full} (no header)")

    return UNMATCHED
