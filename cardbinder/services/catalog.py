"""
Catalog loader.

Reads the static set catalog from the data directory, trying the primary
file first and the fallback file second.
"""

import json
import logging
from pathlib import Path
from typing import Any

from cardbinder.config import FALLBACK_CATALOG_FILENAME, PRIMARY_CATALOG_FILENAME, settings
from cardbinder.models.card import CardSet

logger = logging.getLogger(__name__)


class CatalogLoadError(Exception):
    """Raised when no catalog file could be loaded."""

    pass


def parse_catalog(data: Any) -> list[CardSet]:
    """
    Build sets from decoded catalog JSON.

    Raises:
        ValueError: If the data is not a list of set objects
    """
    if not isinstance(data, list):
        raise ValueError(f"Catalog must be a list of sets, got {type(data).__name__}")

    try:
        return [CardSet.from_dict(item) for item in data]
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed set entry: {e!r}") from e


def read_catalog_file(path: Path) -> list[CardSet]:
    """
    Load one catalog file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't a valid catalog
    """
    with open(path, encoding="utf-8") as f:
        return parse_catalog(json.load(f))


def write_catalog_file(path: Path, sets: list[CardSet]) -> None:
    """Write sets back in catalog JSON form."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([s.to_dict() for s in sets], f, indent=2, ensure_ascii=False)


def catalog_paths(data_dir: Path | None = None) -> list[Path]:
    """Candidate catalog files in the order they are tried."""
    if data_dir is None:
        data_dir = settings.catalog_dir
    return [data_dir / PRIMARY_CATALOG_FILENAME, data_dir / FALLBACK_CATALOG_FILENAME]


def load_catalog(data_dir: Path | None = None) -> list[CardSet]:
    """
    Load the set catalog.

    Args:
        data_dir: Directory holding the catalog files. Defaults to settings.catalog_dir

    Returns:
        Sets in file order.

    Raises:
        CatalogLoadError: If neither catalog file exists and parses
    """
    problems: list[str] = []

    for path in catalog_paths(data_dir):
        try:
            sets = read_catalog_file(path)
        except FileNotFoundError:
            problems.append(f"{path.name}: not found")
            continue
        except (OSError, ValueError) as e:
            logger.warning("Could not load catalog %s: %s", path, e)
            problems.append(f"{path.name}: {e}")
            continue

        logger.info("Loaded %d sets from %s", len(sets), path)
        return sets

    raise CatalogLoadError("Could not load card data (" + "; ".join(problems) + ")")
