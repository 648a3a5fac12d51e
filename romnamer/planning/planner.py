"""
Rename planning.

Turns match results for a batch of ROM files into an ordered list of
proposed renames. Nothing is touched on disk here.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from romnamer.catalog.catalog import CatalogEntry
from romnamer.matching.matcher import Matched, MatchMode, compute_checksums, match
from romnamer.scanner.hash_calculator import format_file_size
from romnamer.scanner.header import hex_preview
from romnamer.scanner.rom_types import RomFile

logger = logging.getLogger(__name__)

# Characters not allowed in filenames on common filesystems
INVALID_FILENAME_CHARS = set('<>:"/\\|?*') | {chr(c) for c in range(32)}

# "0042 - Title", "1999.Title", "0001_Title"
NUMERIC_PREFIX_RE = re.compile(r"^\d{4}[ \-_.]+([^ \-_.].*)$")


class PlanAction(Enum):
    """Why a file is being renamed."""
    MATCH_HEADERED = "match-headered"
    MATCH_DEHEADERED = "match-deheadered"
    PREFIX_STRIP = "prefix-strip"

    @classmethod
    def for_mode(cls, mode: MatchMode) -> "PlanAction":
        if mode == MatchMode.DEHEADERED:
            return cls.MATCH_DEHEADERED
        return cls.MATCH_HEADERED


@dataclass(frozen=True)
class PlanItem:
    """A single proposed rename."""
    action: PlanAction
    old_path: Path
    old_name: str
    new_name: str
    matched_checksum: str = ""
    source_name: str = ""


@dataclass
class PlannerOptions:
    fallback_prefix_strip: bool = False
    verbose_byte_dump: bool = False


@dataclass
class RenamePlan:
    """Ordered rename items plus reporting side-lists."""
    items: List[PlanItem] = field(default_factory=list)
    unmatched: List[str] = field(default_factory=list)
    already_named: int = 0
    files_scanned: int = 0

    def count(self, action: PlanAction) -> int:
        return sum(1 for item in self.items if item.action == action)

    def __len__(self) -> int:
        return len(self.items)


def sanitize_filename(name: str) -> str:
    """
    Replace characters invalid in filenames with underscores.

    Leading and trailing whitespace is trimmed.

    Example:
        >>> sanitize_filename('Zelda: Link? ')
        'Zelda_ Link_'
    """
    cleaned = ''.join('_' if ch in INVALID_FILENAME_CHARS else ch for ch in name)
    return cleaned.strip()


def strip_numeric_prefix(stem: str) -> str:
    """
    Remove a leading four-digit index from a filename stem.

    Four digits followed by one or more separators (space, hyphen,
    underscore, period) are removed. Anything else is returned unchanged.

    Example:
        >>> strip_numeric_prefix('0042 - Metroid')
        'Metroid'
        >>> strip_numeric_prefix('007 GoldenEye')
        '007 GoldenEye'
    """
    m = NUMERIC_PREFIX_RE.match(stem)
    if m:
        return m.group(1)
    return stem


def plan_file(
    rom: RomFile,
    catalog: Mapping[str, CatalogEntry],
    options: PlannerOptions,
    plan: RenamePlan
) -> Optional[PlanItem]:
    """
    Plan a single file and record the outcome on the plan.

    Returns:
        The PlanItem appended to the plan, or None if no rename is needed
    """
    plan.files_scanned += 1

    if options.verbose_byte_dump:
        full, stripped = compute_checksums(rom.raw_bytes)
        logger.info(
            f"{rom.name} ({format_file_size(rom.file_size)}): {hex_preview(rom.raw_bytes)}"
        )
        logger.info(f"{rom.name}: crc {full}, de-headered {stripped or '-'}")

    result = match(rom.raw_bytes, catalog)

    if isinstance(result, Matched):
        logger.debug(
            f"{rom.name}: {result.mode.value} match {result.checksum} -> "
            f"'{result.entry.title}' ({result.entry.source_name})"
        )
        base = sanitize_filename(result.entry.title)
        if not base:
            logger.warning(f"{rom.name}: title '{result.entry.title}' is empty after sanitizing")
            plan.unmatched.append(rom.name)
            return None

        new_name = f"{base}{rom.extension}"
        if new_name == rom.name:
            plan.already_named += 1
            logger.debug(f"{rom.name}: already correctly named")
            return None

        item = PlanItem(
            action=PlanAction.for_mode(result.mode),
            old_path=rom.path,
            old_name=rom.name,
            new_name=new_name,
            matched_checksum=result.checksum,
            source_name=result.entry.source_name,
        )
    else:
        plan.unmatched.append(rom.name)
        logger.debug(f"{rom.name}: no checksum match")

        if not options.fallback_prefix_strip:
            return None

        stripped = strip_numeric_prefix(rom.stem)
        if stripped == rom.stem:
            return None

        new_name = f"{sanitize_filename(stripped)}{rom.extension}"
        if new_name == rom.name:
            return None

        item = PlanItem(
            action=PlanAction.PREFIX_STRIP,
            old_path=rom.path,
            old_name=rom.name,
            new_name=new_name,
        )

    plan.items.append(item)
    logger.info(f"[{item.action.value}] {item.old_name} -> {item.new_name}")
    return item


def build_plan(
    rom_files: Iterable[RomFile],
    catalog: Mapping[str, CatalogEntry],
    options: Optional[PlannerOptions] = None
) -> RenamePlan:
    """
    Build a rename plan for ROM files in scan order.

    Each file's raw bytes are released once it has been matched.

    Args:
        rom_files: ROM files in scan order (may be a generator)
        catalog: Checksum catalog
        options: Planner options

    Returns:
        RenamePlan in scan order
    """
    options = options or PlannerOptions()
    plan = RenamePlan()

    for rom in rom_files:
        plan_file(rom, catalog, options, plan)
        rom.release()

    logger.info(
        f"Planned {len(plan)} renames for {plan.files_scanned} files "
        f"({len(plan.unmatched)} unmatched, {plan.already_named} already named)"
    )
    return plan
