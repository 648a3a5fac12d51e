"""Command-line interface for romnamer."""

import sys
import logging
import argparse
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

from romnamer import __version__
from romnamer.catalog.dat_parser import DatParseError
from romnamer.config.loader import load_config, ConfigError
from romnamer.config.validator import validate_config, ValidationError
from romnamer.scanner.rom_scanner import ScannerError, normalize_extensions
from romnamer.workflow.orchestrator import NoInputFound, RenameWorkflow


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='romnamer',
        description='Rename ROM files to their DAT titles by CRC32',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plan renames using ./dats and ./roms, then ask before applying
  romnamer

  # Apply without prompting
  romnamer --apply

  # Strip "0042 - " style prefixes from files with no DAT match
  romnamer --strip-prefix

  # Scan other extensions
  romnamer --extensions .nes .unf

  # Use custom config file
  romnamer --config /path/to/romnamer.yaml
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help='Path to romnamer.yaml (default: ./romnamer.yaml if present)'
    )

    parser.add_argument(
        '--dats',
        type=Path,
        metavar='DIR',
        help='Directory containing DAT files. Overrides config.'
    )

    parser.add_argument(
        '--roms',
        type=Path,
        metavar='DIR',
        help='Directory containing ROM files. Overrides config.'
    )

    parser.add_argument(
        '--apply',
        action='store_true',
        help='Apply renames without asking for confirmation. Overrides config.'
    )

    parser.add_argument(
        '--verbose-bytes',
        action='store_true',
        help='Log a hex preview of the first bytes of each file. Overrides config.'
    )

    parser.add_argument(
        '--strip-prefix',
        action='store_true',
        help='Strip four-digit numeric prefixes from unmatched files. Overrides config.'
    )

    parser.add_argument(
        '--extensions',
        nargs='+',
        metavar='EXT',
        help='ROM file extensions to scan (default: .nes). Overrides config.'
    )

    parser.add_argument(
        '--plan-csv',
        type=Path,
        metavar='PATH',
        help='Where to write the rename plan CSV. Overrides config.'
    )

    parser.add_argument(
        '--unmatched',
        type=Path,
        metavar='PATH',
        help='Where to write the list of unmatched files. Overrides config.'
    )

    parser.add_argument(
        '--log-file',
        type=Path,
        metavar='PATH',
        help='Run log file. Overrides config.'
    )

    return parser


def _setup_logging(config: dict) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
    """
    logging_config = config.get('logging', {})

    level_str = logging_config.get('level', 'INFO').upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    # Run log with timestamps
    log_file = logging_config.get('file')
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(level)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
        except OSError as e:
            print(f"Error: Could not create log file '{log_file}': {e}", file=sys.stderr)
            sys.exit(1)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )


def _section(config: dict, name: str) -> dict:
    section = config.setdefault(name, {})
    if not isinstance(section, dict):
        raise ValidationError(f"{name} must be a mapping")
    return section


def apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    """
    Apply command-line overrides to the loaded config.

    Raises:
        ValidationError: If a section being overridden is not a mapping
    """
    paths = _section(config, 'paths')
    renaming = _section(config, 'renaming')

    if args.dats:
        paths['dats'] = str(args.dats)
    if args.roms:
        paths['roms'] = str(args.roms)
    if args.plan_csv:
        paths['plan_csv'] = str(args.plan_csv)
    if args.unmatched:
        paths['unmatched'] = str(args.unmatched)

    if args.apply:
        renaming['apply'] = True
    if args.verbose_bytes:
        renaming['verbose_byte_dump'] = True
    if args.strip_prefix:
        renaming['fallback_prefix_strip'] = True

    if args.extensions:
        _section(config, 'scanning')['extensions'] = normalize_extensions(args.extensions)

    if args.log_file:
        _section(config, 'logging')['file'] = str(args.log_file)

    return config


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for romnamer CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        apply_overrides(config, args)
        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    _setup_logging(config)
    logger.info(f"romnamer {__version__}")

    try:
        return run_renamer(config)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 130


def run_renamer(config: dict, confirmation=None) -> int:
    """
    Run the rename workflow.

    Args:
        config: Validated configuration
        confirmation: Confirmation provider (default: terminal prompt)

    Returns:
        Exit code
    """
    workflow = RenameWorkflow(config, confirmation=confirmation)

    try:
        summary = workflow.run()
    except NoInputFound as e:
        logger.warning(f"{e}. Nothing to do.")
        return 0
    except DatParseError as e:
        logger.error(f"Aborting: {e}")
        return 1
    except ScannerError as e:
        logger.error(f"Scan failed: {e}")
        return 1

    return 1 if summary.failed else 0


if __name__ == '__main__':
    sys.exit(main())
