"""LibraOpen export adapter."""

from __future__ import annotations

from .scanner import ExportScanError, classify, load_record, scan_exports

__all__ = ["ExportScanError", "classify", "load_record", "scan_exports"]
