"""CRC32 checksum calculation for ROM files."""

import logging
from typing import Tuple

logger = logging.getLogger(__name__)

# Reflected form of the standard CRC-32 generator polynomial
CRC32_POLYNOMIAL = 0xEDB88320

# Reference vector: CRC-32 of b"123456789"
SELF_TEST_INPUT = b"123456789"
SELF_TEST_EXPECTED = 0xCBF43926


class ChecksumTable:
    """
    Precomputed 256-entry CRC reduction table.

    Built once from the generator polynomial and read-only afterwards.
    The module-level CRC32_TABLE instance is shared by every caller.
    """

    __slots__ = ('_entries', 'polynomial')

    def __init__(self, polynomial: int = CRC32_POLYNOMIAL):
        self.polynomial = polynomial
        self._entries: Tuple[int, ...] = tuple(
            self._reduce(byte, polynomial) for byte in range(256)
        )

    @staticmethod
    def _reduce(value: int, polynomial: int) -> int:
        for _ in range(8):
            if value & 1:
                value = (value >> 1) ^ polynomial
            else:
                value >>= 1
        return value

    @property
    def entries(self) -> Tuple[int, ...]:
        return self._entries

    def __getitem__(self, index: int) -> int:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)


CRC32_TABLE = ChecksumTable()


def crc32(data: bytes, table: ChecksumTable = CRC32_TABLE) -> int:
    """
    Calculate the CRC-32 of a byte sequence.

    Args:
        data: Bytes to checksum
        table: Reduction table (defaults to the shared CRC-32 table)

    Returns:
        Unsigned 32-bit checksum
    """
    entries = table.entries
    crc = 0xFFFFFFFF
    for byte in data:
        crc = entries[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return (crc ^ 0xFFFFFFFF) & 0xFFFFFFFF


def crc32_hex(data: bytes, table: ChecksumTable = CRC32_TABLE) -> str:
    """Calculate CRC-32 and format as 8-digit uppercase hex (catalog key form)."""
    return f"{crc32(data, table):08X}"


def self_test(table: ChecksumTable = CRC32_TABLE) -> bool:
    """
    Verify the checksum engine against the CRC-32 reference vector.

    A mismatch is logged as a warning but never raised; the run continues.

    Returns:
        True if the reference vector is reproduced
    """
    actual = crc32(SELF_TEST_INPUT, table)
    if actual != SELF_TEST_EXPECTED:
        logger.warning(
            f"CRC32 self-test failed: expected {SELF_TEST_EXPECTED:08X}, got {actual:08X}"
        )
        return False

    logger.debug(f"CRC32 self-test passed ({actual:08X})")
    return True


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "750 KB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.2f} GB"
