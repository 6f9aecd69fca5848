"""
Persistence Adapters - Data Storage

This package contains adapters for persisting the rates snapshot
as a JSON file.
"""

from fxrates.adapters.persistence.file_store import load_snapshot, save_snapshot

__all__ = [
    "load_snapshot",
    "save_snapshot",
]
