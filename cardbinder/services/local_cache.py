"""
Local collection cache.

A single JSON file holding the whole collection state, read and written
as one unit. Used when the collection service is not configured or not
reachable.
"""

import contextlib
import json
import os
from pathlib import Path
from typing import Any

from cardbinder.models.collection import CollectionState


class LocalCacheError(Exception):
    """Raised when the cache file cannot be read or written."""

    pass


def coerce_collection_state(data: Any) -> CollectionState:
    """
    Validate a decoded collection blob.

    Raises:
        ValueError: If the blob is not a mapping of set id to flag mapping
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object of sets, got {type(data).__name__}")

    state: CollectionState = {}
    for set_id, flags in data.items():
        if not isinstance(flags, dict):
            raise ValueError(f"Expected an object of flags for set {set_id!r}")
        state[str(set_id)] = {str(card_id): flag is True for card_id, flag in flags.items()}
    return state


class LocalCache:
    """JSON file store for the full collection state."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> CollectionState:
        """
        Read the cached collection.

        A missing file is an empty collection, not an error.

        Raises:
            LocalCacheError: If the file exists but cannot be read or parsed
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                return coerce_collection_state(json.load(f))
        except (OSError, ValueError) as e:
            raise LocalCacheError(f"Could not read local cache {self.path}: {e}") from e

    def write(self, state: CollectionState) -> None:
        """
        Replace the cached collection with state.

        The blob is written to a sibling temp file and swapped in, so a
        failed write leaves the previous cache intact.

        Raises:
            LocalCacheError: If the file cannot be written
        """
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(state, f, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise LocalCacheError(f"Could not write local cache {self.path}: {e}") from e
