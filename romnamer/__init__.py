"""
romnamer - CRC-based ROM renamer

A Python tool to match ROM image files against DAT checksum databases
and rename them to their canonical titles.
"""

__version__ = "0.3.0"
