"""ROM directory scanner."""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from romnamer.scanner.rom_types import RomFile

logger = logging.getLogger(__name__)


class ScannerError(Exception):
    """ROM scanning errors."""
    pass


def normalize_extensions(extensions: Iterable[str]) -> List[str]:
    """
    Normalize extensions to lowercase with a leading dot.

    Example:
        >>> normalize_extensions(['NES', '.Fds'])
        ['.nes', '.fds']
    """
    normalized = []
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith('.'):
            ext = f".{ext}"
        if ext not in normalized:
            normalized.append(ext)
    return normalized


def scan_directory(rom_path: Path, extensions: Sequence[str]) -> List[Path]:
    """
    List ROM files in a directory.

    Only regular files directly inside rom_path whose extension matches
    (case-insensitive) are returned. Hidden files are skipped. The result
    is sorted by filename so that plan order is deterministic.

    Args:
        rom_path: Directory containing ROM files
        extensions: Recognized extensions (e.g. ['.nes'])

    Returns:
        Sorted list of ROM file paths

    Raises:
        ScannerError: If the directory does not exist or cannot be read
    """
    if not rom_path.exists():
        raise ScannerError(f"ROM directory not found: {rom_path}")

    if not rom_path.is_dir():
        raise ScannerError(f"ROM path is not a directory: {rom_path}")

    wanted = set(normalize_extensions(extensions))

    try:
        entries = list(rom_path.iterdir())
    except PermissionError:
        raise ScannerError(f"Permission denied accessing ROM directory: {rom_path}")
    except OSError as e:
        raise ScannerError(f"Failed to scan ROM directory: {e}")

    roms = []
    for entry in entries:
        if entry.name.startswith('.'):
            continue
        if not entry.is_file():
            continue
        if entry.suffix.lower() in wanted:
            roms.append(entry)

    roms.sort(key=lambda p: (p.name.lower(), p.name))
    logger.info(
        f"Found {len(roms)} ROM files in {rom_path} "
        f"({len(entries)} entries, extensions: {', '.join(sorted(wanted))})"
    )
    return roms


def load_rom(path: Path) -> RomFile:
    """
    Read a ROM file fully into memory.

    Raises:
        OSError: If the file cannot be read
    """
    return RomFile(
        path=path,
        name=path.name,
        extension=path.suffix,
        raw_bytes=path.read_bytes(),
    )


def iter_roms(paths: Iterable[Path]) -> Iterator[RomFile]:
    """
    Load ROM files one at a time, in the given order.

    Only one file's bytes are held by the generator at any point.
    Unreadable files are logged and skipped.
    """
    for path in paths:
        try:
            rom = load_rom(path)
        except OSError as e:
            logger.error(f"Could not read {path.name}: {e}")
            continue
        yield rom
