"""
Plan execution with collision-safe renaming.

Renames are applied in plan order. An existing file is never overwritten:
the new name gets a " (N)" suffix, N = 2, 3, ... until a free name is found.
Execution is not transactional; a failed rename is recorded and the
remaining items still run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .planner import PlanItem

logger = logging.getLogger(__name__)


@dataclass
class RenameFailure:
    """A plan item whose rename raised an error."""
    item: PlanItem
    error: str


@dataclass
class ApplyResult:
    applied: int = 0
    renamed: List[Tuple[PlanItem, Path]] = field(default_factory=list)
    failures: List[RenameFailure] = field(default_factory=list)


def _is_same_file(source: Path, candidate: Path) -> bool:
    # Case-only renames on case-insensitive filesystems
    try:
        return source.samefile(candidate)
    except OSError:
        return False


def resolve_collision(directory: Path, name: str, source: Optional[Path] = None) -> Path:
    """
    Find a free destination path for name in directory.

    Args:
        directory: Destination directory
        name: Desired filename
        source: File being renamed; a destination that is this same file
            does not count as a collision

    Returns:
        directory/name if free, otherwise directory/"stem (N).ext"
    """
    candidate = directory / name
    if not candidate.exists() or (source is not None and _is_same_file(source, candidate)):
        return candidate

    stem = Path(name).stem
    suffix = Path(name).suffix
    n = 2
    # No upper bound: stops at the first name that does not exist
    while True:
        candidate = directory / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


def apply_plan(items: Iterable[PlanItem], target_directory: Optional[Path] = None) -> ApplyResult:
    """
    Apply planned renames to the filesystem.

    Args:
        items: Plan items in plan order
        target_directory: Destination directory (default: each file's own directory)

    Returns:
        ApplyResult with the applied count and per-item failures
    """
    result = ApplyResult()

    for item in items:
        directory = target_directory if target_directory is not None else item.old_path.parent
        try:
            destination = resolve_collision(directory, item.new_name, source=item.old_path)
            if destination.name != item.new_name:
                logger.info(f"{item.new_name} already exists, using {destination.name}")
            item.old_path.rename(destination)
        except OSError as e:
            failure = RenameFailure(item=item, error=str(e))
            result.failures.append(failure)
            logger.error(f"Failed to rename {item.old_name}: {e}")
            continue

        result.applied += 1
        result.renamed.append((item, destination))
        logger.info(f"Renamed {item.old_name} -> {destination.name}")

    logger.info(f"Applied {result.applied} renames, {len(result.failures)} failed")
    return result
