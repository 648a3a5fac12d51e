"""Plan and unmatched-list export."""

import csv
import logging
from pathlib import Path
from typing import Iterable

from .planner import PlanItem

logger = logging.getLogger(__name__)

PLAN_CSV_COLUMNS = ['action', 'oldName', 'newName', 'matchedChecksum', 'sourceName']


def write_plan_csv(items: Iterable[PlanItem], csv_path: Path) -> int:
    """
    Write the rename plan as CSV, one row per item in plan order.

    Returns:
        Number of rows written
    """
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    rows = 0
    with open(csv_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(PLAN_CSV_COLUMNS)
        for item in items:
            writer.writerow([
                item.action.value,
                item.old_name,
                item.new_name,
                item.matched_checksum,
                item.source_name,
            ])
            rows += 1

    logger.info(f"Wrote rename plan ({rows} rows) to {csv_path}")
    return rows


def write_unmatched_list(names: Iterable[str], list_path: Path) -> int:
    """Write unmatched filenames, one per line, in scan order."""
    names = list(names)
    list_path.parent.mkdir(parents=True, exist_ok=True)
    with open(list_path, 'w', encoding='utf-8') as f:
        for name in names:
            f.write(f"{name}\n")

    logger.info(f"Wrote {len(names)} unmatched filenames to {list_path}")
    return len(names)
