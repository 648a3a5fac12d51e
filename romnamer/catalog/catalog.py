"""
Checksum catalog built from DAT files.

Maps 8-digit uppercase CRC32 strings to canonical titles. When the same
checksum appears more than once, the first occurrence wins: entries from
earlier documents (or earlier records in the same document) are never
overwritten.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional, Sequence

from .dat_parser import RecordKind, parse_dat

logger = logging.getLogger(__name__)

DAT_EXTENSIONS = ('.dat', '.xml')

_HEX_RE = re.compile(r'^[0-9A-F]{1,8}$')


@dataclass(frozen=True)
class CatalogEntry:
    """Canonical title for a checksum and the DAT file it came from."""
    checksum: str
    title: str
    source_name: str


class Catalog(Mapping):
    """
    Read-only checksum-to-entry lookup table.

    Built once by load_catalog() and shared by the matcher for the whole run.
    """

    def __init__(self, entries: Optional[Dict[str, CatalogEntry]] = None):
        self._entries = MappingProxyType(dict(entries or {}))

    def __getitem__(self, checksum: str) -> CatalogEntry:
        return self._entries[checksum]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Catalog({len(self)} entries)"


@dataclass
class SourceStats:
    """Per-document load counts, for logging."""
    source_name: str
    kind: RecordKind
    records_seen: int = 0
    entries_added: int = 0


@dataclass
class StructuralWarning:
    """A document whose structure is not supported; it was skipped."""
    source_name: str
    message: str


@dataclass
class CatalogLoadResult:
    """Merged catalog plus per-source observability data."""
    catalog: Catalog
    stats: List[SourceStats] = field(default_factory=list)
    warnings: List[StructuralWarning] = field(default_factory=list)


def normalize_checksum(value: str) -> Optional[str]:
    """
    Normalize a DAT checksum to the catalog key form.

    Uppercases and left-pads with zeros to 8 digits.

    Returns:
        Normalized key, or None if value is not a 32-bit hex string
    """
    value = value.strip().upper()
    if value.startswith('0X'):
        value = value[2:]
    if not _HEX_RE.match(value):
        return None
    return value.zfill(8)


def find_dat_files(directory: Path) -> List[Path]:
    """
    List DAT documents in a directory, sorted by name.

    Returns:
        Sorted list of .dat/.xml files (empty if directory is missing)
    """
    if not directory.is_dir():
        logger.info(f"DAT directory not found: {directory}")
        return []

    dats = [
        p for p in directory.iterdir()
        if p.is_file() and not p.name.startswith('.') and p.suffix.lower() in DAT_EXTENSIONS
    ]
    return sorted(dats, key=lambda p: (p.name.lower(), p.name))


def load_catalog(paths: Sequence[Path]) -> CatalogLoadResult:
    """
    Load and merge DAT documents into a single catalog.

    Documents are processed in the given order; callers should sort them
    by name for deterministic results.

    Args:
        paths: DAT document paths

    Returns:
        CatalogLoadResult with the merged catalog

    Raises:
        DatParseError: If any document is malformed. Loading stops at once;
            a partial catalog is never returned.
    """
    entries: Dict[str, CatalogEntry] = {}
    stats: List[SourceStats] = []
    warnings: List[StructuralWarning] = []

    for path in paths:
        document = parse_dat(path)
        source_name = document.source_name

        if document.kind == RecordKind.UNSUPPORTED:
            warning = StructuralWarning(
                source_name=source_name,
                message="no <game> or <machine> records found",
            )
            warnings.append(warning)
            logger.warning(f"Skipping {source_name}: {warning.message}")
            continue

        source_stats = SourceStats(
            source_name=source_name,
            kind=document.kind,
            records_seen=document.records_seen,
        )

        for record in document.records:
            for rom in record.roms:
                if not rom.crc:
                    continue
                key = normalize_checksum(rom.crc)
                if key is None:
                    logger.debug(f"{source_name}: ignoring invalid CRC '{rom.crc}' in {record.name}")
                    continue
                if key in entries:
                    continue
                entries[key] = CatalogEntry(
                    checksum=key,
                    title=record.name,
                    source_name=source_name,
                )
                source_stats.entries_added += 1

        stats.append(source_stats)
        logger.info(
            f"Loaded {source_name}: {source_stats.records_seen} {document.kind.value} records, "
            f"{source_stats.entries_added} new checksums"
        )

    catalog = Catalog(entries)
    logger.info(f"Catalog contains {len(catalog)} checksums from {len(stats)} DAT files")
    return CatalogLoadResult(catalog=catalog, stats=stats, warnings=warnings)
