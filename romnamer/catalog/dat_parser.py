"""Parser for DAT checksum database files.

Reads Logiqx-style DAT documents (a root element holding ``game`` records)
and MAME-style listings (a root element holding ``machine`` records) into a
uniform list of records.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional
from lxml import etree

logger = logging.getLogger(__name__)


class DatParseError(Exception):
    """A DAT document could not be read or parsed."""
    pass


class RecordKind(Enum):
    """Which top-level collection a document's records came from."""
    GAME = "game"
    MACHINE = "machine"
    UNSUPPORTED = "unsupported"


@dataclass
class DatRom:
    """A ROM entry inside a game or machine record."""
    name: Optional[str] = None
    crc: Optional[str] = None
    size: Optional[int] = None


@dataclass
class DatRecord:
    """A named game or machine with its ROM entries."""
    kind: RecordKind
    name: str
    description: Optional[str] = None
    roms: List[DatRom] = field(default_factory=list)


@dataclass
class DatDocument:
    """Normalized content of a single DAT file."""
    path: Path
    kind: RecordKind
    records: List[DatRecord] = field(default_factory=list)
    records_seen: int = 0

    @property
    def source_name(self) -> str:
        return self.path.name


def parse_dat(dat_path: Path) -> DatDocument:
    """Parse a DAT file.

    Args:
        dat_path: Path to the DAT/XML document

    Returns:
        DatDocument; kind is RecordKind.UNSUPPORTED when the root holds
        neither ``game`` nor ``machine`` records

    Raises:
        DatParseError: If the file cannot be read or is not well-formed XML
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        tree = etree.parse(str(dat_path), parser)
    except etree.XMLSyntaxError as e:
        raise DatParseError(f"Malformed DAT file {dat_path.name}: {e}") from e
    except OSError as e:
        raise DatParseError(f"Could not read DAT file {dat_path}: {e}") from e

    root = tree.getroot()

    elements = root.findall("game")
    kind = RecordKind.GAME
    if not elements:
        elements = root.findall("machine")
        kind = RecordKind.MACHINE
    if not elements:
        logger.debug(f"{dat_path.name}: root <{root.tag}> has no game or machine records")
        return DatDocument(path=dat_path, kind=RecordKind.UNSUPPORTED)

    document = DatDocument(path=dat_path, kind=kind, records_seen=len(elements))
    for element in elements:
        record = _parse_record(element, kind)
        if record is None:
            logger.debug(f"{dat_path.name}: skipping unnamed <{kind.value}> record")
            continue
        document.records.append(record)

    return document


def _parse_record(element, kind: RecordKind) -> Optional[DatRecord]:
    """Parse a single game/machine element, or None if it has no name."""
    name = element.get("name")
    if not name:
        return None

    desc_elem = element.find("description")
    description = desc_elem.text if desc_elem is not None else None

    roms = [_parse_rom(rom_elem) for rom_elem in element.findall("rom")]
    return DatRecord(kind=kind, name=name, description=description, roms=roms)


def _parse_rom(rom_elem) -> DatRom:
    size_str = rom_elem.get("size")
    size = None
    if size_str:
        try:
            size = int(size_str)
        except ValueError:
            logger.debug(f"Invalid ROM size: {size_str}")

    return DatRom(
        name=rom_elem.get("name"),
        crc=rom_elem.get("crc") or None,
        size=size,
    )
