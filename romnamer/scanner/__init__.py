"""ROM file scanning, checksums and header detection."""
