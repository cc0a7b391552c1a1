"""Mode-specific scanners for the orgstream scanner."""

from orgstream.scanner.scanners.block import BlockScannerMixin
from orgstream.scanner.scanners.raw import RawScannerMixin

__all__ = ["BlockScannerMixin", "RawScannerMixin"]
