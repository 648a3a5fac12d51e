"""Detection of the iNES container header on ROM images."""

# "NES" followed by MS-DOS end-of-file
INES_MAGIC = bytes([0x4E, 0x45, 0x53, 0x1A])
HEADER_SIZE = 16


def has_known_header(data: bytes) -> bool:
    """
    Check whether data starts with a 16-byte iNES header.

    Args:
        data: Raw ROM bytes

    Returns:
        True if at least HEADER_SIZE bytes are present and the magic matches
    """
    if len(data) < HEADER_SIZE:
        return False
    return bytes(data[:4]) == INES_MAGIC


def strip_header(data: bytes) -> bytes:
    """Return data without its leading header block."""
    return data[HEADER_SIZE:]


def hex_preview(data: bytes, length: int = HEADER_SIZE) -> str:
    """Format the leading bytes as space-separated uppercase hex."""
    return " ".join(f"{byte:02X}" for byte in data[:length])
