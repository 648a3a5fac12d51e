"""
Workflow orchestrator for romnamer runs.

Coordinates the complete rename workflow:
1. Self-test the checksum engine
2. Load DAT files into a catalog
3. Scan and match ROM files
4. Export the plan and unmatched list
5. Confirm and apply renames
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..catalog.catalog import CatalogLoadResult, find_dat_files, load_catalog
from ..config.loader import get_config_value
from ..planning.executor import ApplyResult, apply_plan
from ..planning.export import write_plan_csv, write_unmatched_list
from ..planning.planner import PlanAction, PlannerOptions, RenamePlan, build_plan
from ..scanner.hash_calculator import self_test
from ..scanner.rom_scanner import iter_roms, normalize_extensions, scan_directory
from ..ui.console_ui import ConsoleUI
from ..ui.prompts import ConfirmationProvider, confirm

logger = logging.getLogger(__name__)


class NoInputFound(Exception):
    """No DAT files or no ROM files to work on; nothing was changed."""
    pass


@dataclass
class RunSummary:
    """Counts reported at the end of a run."""
    dat_files: int = 0
    dat_files_skipped: int = 0
    catalog_entries: int = 0
    files_scanned: int = 0
    matched_headered: int = 0
    matched_deheadered: int = 0
    prefix_stripped: int = 0
    unmatched: int = 0
    already_named: int = 0
    planned: int = 0
    applied: int = 0
    failed: int = 0
    confirmed: bool = False
    self_test_passed: bool = True
    warnings: List[str] = field(default_factory=list)

    def as_rows(self) -> List[Tuple[str, int]]:
        return [
            ("DAT files", self.dat_files),
            ("DAT files skipped", self.dat_files_skipped),
            ("Catalog checksums", self.catalog_entries),
            ("Files scanned", self.files_scanned),
            ("Matched (headered)", self.matched_headered),
            ("Matched (de-headered)", self.matched_deheadered),
            ("Prefix stripped", self.prefix_stripped),
            ("Unmatched", self.unmatched),
            ("Already named", self.already_named),
            ("Renames planned", self.planned),
            ("Renames applied", self.applied),
            ("Renames failed", self.failed),
        ]


class RenameWorkflow:
    """
    Runs one load-scan-plan-apply pass.

    The catalog is fully loaded before any ROM is matched and is not
    modified afterwards.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        confirmation: Optional[ConfirmationProvider] = None,
        console_ui: Optional[ConsoleUI] = None
    ):
        """
        Initialize workflow.

        Args:
            config: Validated configuration dictionary
            confirmation: Asked before applying renames (default: terminal prompt)
            console_ui: Console renderer (default: rich console)
        """
        self.config = config
        self.confirmation = confirmation
        self.console_ui = console_ui or ConsoleUI()

        self.dat_directory = Path(get_config_value(config, 'paths.dats', './dats')).expanduser()
        self.rom_directory = Path(get_config_value(config, 'paths.roms', './roms')).expanduser()
        self.plan_csv = self._optional_path('paths.plan_csv')
        self.unmatched_list = self._optional_path('paths.unmatched')
        self.extensions = normalize_extensions(
            get_config_value(config, 'scanning.extensions', ['.nes'])
        )
        self.apply = bool(get_config_value(config, 'renaming.apply', False))
        self.options = PlannerOptions(
            fallback_prefix_strip=bool(get_config_value(config, 'renaming.fallback_prefix_strip', False)),
            verbose_byte_dump=bool(get_config_value(config, 'renaming.verbose_byte_dump', False)),
        )

    def _optional_path(self, key: str) -> Optional[Path]:
        value = get_config_value(self.config, key)
        return Path(value).expanduser() if value else None

    def run(self) -> RunSummary:
        """
        Execute the workflow.

        Returns:
            RunSummary with counts for the run

        Raises:
            NoInputFound: If there are no DAT files or no ROM files
            DatParseError: If a DAT file is malformed
            ScannerError: If the ROM directory cannot be read
        """
        summary = RunSummary()
        self._log_configuration()

        summary.self_test_passed = self_test()
        if not summary.self_test_passed:
            summary.warnings.append("CRC32 self-test mismatch")

        load_result = self.load_catalog()
        summary.dat_files = len(load_result.stats) + len(load_result.warnings)
        summary.dat_files_skipped = len(load_result.warnings)
        summary.catalog_entries = len(load_result.catalog)
        summary.warnings.extend(
            f"{w.source_name}: {w.message}" for w in load_result.warnings
        )

        rom_paths = scan_directory(self.rom_directory, self.extensions)
        if not rom_paths:
            raise NoInputFound(
                f"No ROM files ({', '.join(self.extensions)}) found in {self.rom_directory}"
            )

        plan = build_plan(iter_roms(rom_paths), load_result.catalog, self.options)
        self._fill_plan_counts(summary, plan)
        self.export(plan)

        self.console_ui.show_plan(plan)

        if plan.items:
            result = self.confirm_and_apply(plan)
            if result is not None:
                summary.confirmed = True
                summary.applied = result.applied
                summary.failed = len(result.failures)

        self._log_summary(summary)
        self.console_ui.show_summary(summary)
        return summary

    def load_catalog(self) -> CatalogLoadResult:
        dat_paths = find_dat_files(self.dat_directory)
        if not dat_paths:
            raise NoInputFound(f"No DAT files found in {self.dat_directory}")

        logger.info(f"Loading {len(dat_paths)} DAT files from {self.dat_directory}")
        return load_catalog(dat_paths)

    def export(self, plan: RenamePlan) -> None:
        if self.plan_csv is not None:
            write_plan_csv(plan.items, self.plan_csv)
        if self.unmatched_list is not None:
            write_unmatched_list(plan.unmatched, self.unmatched_list)

    def confirm_and_apply(self, plan: RenamePlan) -> Optional[ApplyResult]:
        """
        Apply the plan in apply mode, otherwise after confirmation.

        Returns:
            ApplyResult, or None if the user declined
        """
        if not self.apply:
            if not confirm(f"Apply {len(plan.items)} renames?", self.confirmation):
                logger.info("Renames not applied (declined)")
                return None
        return apply_plan(plan.items)

    def _fill_plan_counts(self, summary: RunSummary, plan: RenamePlan) -> None:
        summary.files_scanned = plan.files_scanned
        summary.matched_headered = plan.count(PlanAction.MATCH_HEADERED)
        summary.matched_deheadered = plan.count(PlanAction.MATCH_DEHEADERED)
        summary.prefix_stripped = plan.count(PlanAction.PREFIX_STRIP)
        summary.unmatched = len(plan.unmatched)
        summary.already_named = plan.already_named
        summary.planned = len(plan.items)

    def _log_configuration(self) -> None:
        logger.info(f"DAT directory: {self.dat_directory}")
        logger.info(f"ROM directory: {self.rom_directory}")
        logger.info(f"Extensions: {', '.join(self.extensions)}")
        logger.info(
            f"Apply: {self.apply}, prefix strip: {self.options.fallback_prefix_strip}, "
            f"byte dump: {self.options.verbose_byte_dump}"
        )

    def _log_summary(self, summary: RunSummary) -> None:
        for label, value in summary.as_rows():
            logger.info(f"{label}: {value}")
        for warning in summary.warnings:
            logger.warning(f"Warning during run: {warning}")
