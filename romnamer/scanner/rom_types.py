"""ROM type definitions and data structures."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class RomFile:
    """
    A ROM file read from disk.

    This is the primary data structure passed to the rename planner.
    The raw bytes are only needed until the file has been matched.
    """
    path: Path                      # Absolute path to ROM file
    name: str                       # Filename including extension
    extension: str                  # Extension as found on disk (e.g. '.nes')
    raw_bytes: bytes = field(default=b"", repr=False)

    @property
    def stem(self) -> str:
        """Filename without extension."""
        if self.extension and self.name.endswith(self.extension):
            return self.name[: -len(self.extension)]
        return self.name

    @property
    def file_size(self) -> int:
        return len(self.raw_bytes)

    def release(self) -> None:
        """Drop the raw bytes once matching is done."""
        self.raw_bytes = b""
