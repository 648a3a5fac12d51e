"""
Checksum catalog package for romnamer.

Parses DAT files and merges them into a CRC32 lookup table.
"""

from .dat_parser import DatParseError, RecordKind, parse_dat
from .catalog import (
    Catalog,
    CatalogEntry,
    CatalogLoadResult,
    SourceStats,
    StructuralWarning,
    find_dat_files,
    load_catalog,
)

__all__ = [
    'DatParseError',
    'RecordKind',
    'parse_dat',
    'Catalog',
    'CatalogEntry',
    'CatalogLoadResult',
    'SourceStats',
    'StructuralWarning',
    'find_dat_files',
    'load_catalog',
]
