"""
Variant Rules: Which Print Variants a Card Can Have.

Trainer cards, Energy cards and Pokémon ex do not have Energy, Ball or
Reverse Holo variants. Every other variant type is always valid.

INVARIANT: This module is the only place the rule lives. Completion
counts, filter options, the binder session and the variant filtering job
all call is_valid_variant(); none of them re-derive card categories.

Card categories are inferred from the display name alone:
- ex: the name contains " ex" (covers "Mega Charizard X ex" and a
  trailing " ex")
- Trainer: the name is in TRAINER_CARD_NAMES, or matches one of the
  Trainer-noun heuristics below
- Energy: the name contains "energy" (not "reverse")

The known-name list always wins. The substring heuristics are a fallback
for names that are not listed and lean towards exclusion.

Possessive guard: "Ethan's Pinsir" and "Team Rocket's Mewtwo ex" are
Pokémon named after a trainer. Any name carrying "'s" skips the
heuristics, so only listed possessive names (e.g. "Hop's Bag") and PP Up
items ("Iono's PP Up") are treated as Trainer cards.
"""

from enum import Enum

from cardbinder.models.card import Card, Variant, VariantType

# Variant types restricted to regular (non-ex) Pokémon
RESTRICTED_VARIANT_TYPES = frozenset(
    {
        VariantType.ENERGY.value,
        VariantType.BALL.value,
        VariantType.REVERSE_HOLO.value,
    }
)

TRAINER_CARD_NAMES = frozenset(
    {
        # Items and Tools
        "Ultra Ball",
        "Counter Catcher",
        "Glass Trumpet",
        "Canari",
        "Black Belt",
        "Surfer",
        "N's PP Up",
        "Team Rocket's Transceiver",
        "Iris's Fighting Spirit",
        "Energy Recycler",
        "Ignition Energy",
        "Prism Energy",
        "Team Rocket's Energy",
        "Fighting Gong",
        "Premium Power Pro",
        "Hop's Bag",
        "Bug Catcher Set",
        "Mega Signal",
        "Light Ball",
        "Air Balloon",
        "Hop's Choice Band",
        "Acerola's Mischief",
        "Ethan's Adventure",
        "Lillie's Determination",
        "Enhanced Hammer",
        "Sacred Ash",
        "Tool Scrapper",
        "Tera Orb",
        "Buddy-Buddy Poffin",
        "Night Stretcher",
        "Counter Gain",
        "Cynthia's Power Weight",
        "Thick Scales",
        "Brave Bangle",
        # Supporters
        "Hilda",
        "Anthea & Concordia",
        "Team Rocket's Ariana",
        "Team Rocket's Archer",
        "Team Rocket's Giovanni",
        "Team Rocket's Petrel",
        "Team Rocket's Proton",
        # Stadiums
        "N's Castle",
        "Team Rocket's Watchtower",
        "Team Rocket's Factory",
        "Forest of Vitality",
        "Gravity Mountain",
        "Area Zero Underdepths",
        "Levincia",
        "Postwick",
        "Mystery Garden",
        "Mine at Night",
    }
)

# A non-possessive name containing any of these is a Trainer card
TRAINER_KEYWORDS = (
    # Items and Tools
    "Ball",
    "Training",
    "Catcher",
    "Tower",
    "Trumpet",
    "Gong",
    "Signal",
    "Bag",
    "Transceiver",
    "Fighting Spirit",
    "Adventure",
    "Determination",
    "Mischief",
    "Hammer",
    "Scrapper",
    "Orb",
    "Poffin",
    "Stretcher",
    "Gain",
    "Scales",
    "Bangle",
    # Stadiums
    "Castle",
    "Watchtower",
    "Factory",
    "Vitality",
    "Mountain",
    "Underdepths",
    "Levincia",
    "Postwick",
    "Garden",
    "Mine",
    # Special Energy printed as Trainer-style cards
    "Energy",
)

# Both words must appear, even in a possessive name ("N's PP Up")
POSSESSIVE_TRAINER_KEYWORD_PAIRS = (("PP", "Up"),)

# Both words must appear (and the name must not be possessive)
TRAINER_KEYWORD_PAIRS = (
    ("Sacred", "Ash"),
    ("Premium", "Power"),
    ("Bug", "Set"),
    ("Catcher", "Set"),
)

# Supporter markers: duo Supporters ("Anthea & Concordia") and named ones
SUPPORTER_MARKERS = (" & ", "Anthea")


class CardCategory(str, Enum):
    """Card category as far as variant eligibility is concerned."""

    EX = "ex"
    TRAINER = "trainer"
    ENERGY = "energy"
    POKEMON = "pokemon"


def _is_possessive(name: str) -> bool:
    return "'s" in name.replace("’", "'")


def is_ex_card(name: str) -> bool:
    """True for Pokémon ex, including Mega ex ("Mega Gengar ex")."""
    return " ex" in name.lower()


def is_trainer_card(name: str) -> bool:
    """
    True for Trainer cards (Items, Tools, Supporters, Stadiums).

    Trainer Pokémon such as "Ethan's Pinsir" are not Trainer cards.
    """
    if name in TRAINER_CARD_NAMES:
        return True

    if any(
        first in name and second in name for first, second in POSSESSIVE_TRAINER_KEYWORD_PAIRS
    ):
        return True

    if _is_possessive(name):
        return False

    if any(keyword in name for keyword in TRAINER_KEYWORDS):
        return True

    if any(first in name and second in name for first, second in TRAINER_KEYWORD_PAIRS):
        return True

    return any(marker in name for marker in SUPPORTER_MARKERS)


def is_energy_card(name: str) -> bool:
    """True for Energy cards ("Prism Energy", "Basic Fire Energy")."""
    lowered = name.lower()
    return "energy" in lowered and "reverse" not in lowered and not _is_possessive(name)


def card_category(name: str) -> CardCategory:
    """Classify a card name. Checks run in order ex, Energy, Trainer."""
    if is_ex_card(name):
        return CardCategory.EX
    if is_energy_card(name):
        return CardCategory.ENERGY
    if is_trainer_card(name):
        return CardCategory.TRAINER
    return CardCategory.POKEMON


def is_valid_variant_type(name: str, variant_type: str) -> bool:
    """
    Check whether a card with this name can have this variant type.

    Energy, Ball and Reverse Holo are only valid for regular Pokémon.
    Any other type, including unknown ones, is always valid.
    """
    if variant_type not in RESTRICTED_VARIANT_TYPES:
        return True
    return card_category(name) is CardCategory.POKEMON


def is_valid_variant(card: Card, variant: Variant) -> bool:
    """
    Check whether a variant should be counted, shown and be toggleable.

    Ineligible variants are excluded from totals, percentages, filter
    options and rendering.
    """
    return is_valid_variant_type(card.name, variant.type)


def eligible_variants(card: Card) -> list[Variant]:
    """Variants of a card that pass is_valid_variant, in catalog order."""
    return [variant for variant in card.variants if is_valid_variant(card, variant)]
