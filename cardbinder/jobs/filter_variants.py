"""
Strip ineligible variants from a catalog file.

Removes Energy, Ball and Reverse Holo variants from ex, Trainer and
Energy cards using the shared variant rules, backs up the original file
and writes the filtered catalog in place.
"""

import argparse
import logging
import shutil
import time
from dataclasses import dataclass, field, replace
from pathlib import Path

from cardbinder.config import PRIMARY_CATALOG_FILENAME, settings
from cardbinder.models.card import CardSet
from cardbinder.services.catalog import read_catalog_file, write_catalog_file
from cardbinder.services.variant_rules import card_category, eligible_variants

logger = logging.getLogger(__name__)


@dataclass
class FilterReport:
    """What a filtering run removed."""

    variants_removed: int = 0
    cards_modified: int = 0
    backup_path: Path | None = None
    # "number name" -> category of each modified card
    modified: dict[str, str] = field(default_factory=dict)


def filter_catalog(sets: list[CardSet]) -> tuple[list[CardSet], FilterReport]:
    """Drop ineligible variants from every card. Input sets are not mutated."""
    report = FilterReport()
    filtered_sets: list[CardSet] = []

    for card_set in sets:
        cards = []
        for card in card_set.cards:
            kept = tuple(eligible_variants(card))
            removed = len(card.variants) - len(kept)
            if removed:
                category = card_category(card.name).value
                report.variants_removed += removed
                report.cards_modified += 1
                report.modified[f"{card.number} {card.name}"] = category
                logger.info("Removed %d variant(s) from %s (%s)", removed, card.name, category)
                card = replace(card, variants=kept)
            cards.append(card)
        filtered_sets.append(replace(card_set, cards=cards))

    return filtered_sets, report


def backup_catalog(path: Path) -> Path:
    """Copy a catalog file to sets_backup_<epoch ms>.json beside it."""
    backup_path = path.with_name(f"{path.stem}_backup_{int(time.time() * 1000)}{path.suffix}")
    shutil.copy2(path, backup_path)
    return backup_path


def run_filter(path: Path, backup: bool = True) -> FilterReport:
    """
    Filter a catalog file in place.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        ValueError: If the file isn't a valid catalog
    """
    sets = read_catalog_file(path)
    filtered, report = filter_catalog(sets)

    if backup:
        report.backup_path = backup_catalog(path)
        logger.info("Backup saved to %s", report.backup_path)

    write_catalog_file(path, filtered)
    logger.info(
        "Removed %d variants from %d cards in %s",
        report.variants_removed,
        report.cards_modified,
        path,
    )
    return report


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=settings.catalog_dir / PRIMARY_CATALOG_FILENAME,
        help="Catalog file to filter (default: %(default)s)",
    )
    parser.add_argument("--no-backup", action="store_true", help="Skip the backup copy")
    args = parser.parse_args(argv)

    run_filter(args.path, backup=not args.no_backup)


if __name__ == "__main__":
    main()
