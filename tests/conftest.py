"""
Shared pytest fixtures and utilities for the romnamer test suite.
"""

from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Tuple

import pytest
import yaml

from romnamer.scanner.header import INES_MAGIC

# (record name, [crc, ...])
DatGames = Iterable[Tuple[str, Iterable[str]]]


def ines_header(prg_banks: int = 2, chr_banks: int = 1) -> bytes:
    """Build a 16-byte iNES header."""
    return INES_MAGIC + bytes([prg_banks, chr_banks]) + bytes(10)


def render_dat(games: DatGames, collection: str = "game", root: str = "datafile") -> str:
    """Render a minimal Logiqx/MAME style XML document."""
    parts = ['<?xml version="1.0"?>', f"<{root}>", "  <header><name>test</name></header>"]
    for name, crcs in games:
        parts.append(f'  <{collection} name="{name}">')
        parts.append(f"    <description>{name}</description>")
        for index, crc in enumerate(crcs):
            parts.append(f'    <rom name="{name}-{index}.nes" size="16" crc="{crc}"/>')
        parts.append(f"  </{collection}>")
    parts.append(f"</{root}>")
    return "\n".join(parts)


@pytest.fixture
def ines_rom() -> bytes:
    """A small headered ROM image (16-byte header + 64 bytes of PRG data)."""
    return ines_header() + bytes(range(64))


@pytest.fixture
def dat_dir(tmp_path: Path) -> Path:
    path = tmp_path / "dats"
    path.mkdir()
    return path


@pytest.fixture
def rom_dir(tmp_path: Path) -> Path:
    path = tmp_path / "roms"
    path.mkdir()
    return path


@pytest.fixture
def make_dat(dat_dir: Path) -> Callable[..., Path]:
    """
    Write a DAT file into the temp dats directory.

    Usage:
        path = make_dat("nes.dat", [("Super Mario Bros.", ["3D2F688C"])])
    """

    def _builder(filename: str, games: DatGames, collection: str = "game") -> Path:
        path = dat_dir / filename
        path.write_text(render_dat(games, collection=collection), encoding="utf-8")
        return path

    return _builder


@pytest.fixture
def make_rom(rom_dir: Path) -> Callable[[str, bytes], Path]:
    """Write a ROM file into the temp roms directory."""

    def _builder(filename: str, data: bytes) -> Path:
        path = rom_dir / filename
        path.write_bytes(data)
        return path

    return _builder


@pytest.fixture
def make_config(tmp_path: Path, dat_dir: Path, rom_dir: Path) -> Callable[[Optional[Dict]], Dict]:
    """
    Build a config dictionary pointing at the temp directories.

    Usage:
        config = make_config({"renaming": {"apply": True}})
    """

    def _builder(overrides: Optional[Dict] = None) -> Dict:
        base = {
            "paths": {
                "dats": str(dat_dir),
                "roms": str(rom_dir),
                "plan_csv": str(tmp_path / "rename_plan.csv"),
                "unmatched": str(tmp_path / "unmatched.txt"),
            },
            "scanning": {"extensions": [".nes"]},
            "renaming": {
                "apply": False,
                "fallback_prefix_strip": False,
                "verbose_byte_dump": False,
            },
            "logging": {"level": "INFO", "console": False, "file": None},
        }
        if overrides:
            base = merge_dicts(base, overrides)
        return base

    return _builder


@pytest.fixture
def write_config_file(tmp_path: Path) -> Callable[[Dict], Path]:
    """Dump a config dictionary to romnamer.yaml in the temp directory."""

    def _writer(config: Dict) -> Path:
        path = tmp_path / "romnamer.yaml"
        path.write_text(yaml.safe_dump(config))
        return path

    return _writer


def merge_dicts(base: Dict, override: Dict) -> Dict:
    """
    Shallow+deep merge helper for fixture config dictionaries.
    """
    result = dict(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result
