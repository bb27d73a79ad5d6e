"""
JSON-file persistence for Spine records.

Provides the record store the dashboard reads snapshots from.
"""

from .store import JsonRecordStore, Result, SnapshotLoadError, resolve_data_path

__all__ = ["JsonRecordStore", "Result", "SnapshotLoadError", "resolve_data_path"]
