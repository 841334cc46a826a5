"""
Name Normalizer.

Turns a module asset filename into the key its card is likely stored under
in the data set. Each category is an ordered list of named steps so every
transformation can be tested on its own:

    Pilot-Green_Sq_Pilot.jpg   -> "Green Squadron Pilot"     (display_name)
    Condition_Stressed.jpg     -> "Stressed"                 (short_code)
    Hit-Console_Fire.png       -> "Console Fire"             (display_name)
    Upgrade_Crew_Han_Solo.jpg  -> "Han Solo"                 (short_code)

All functions here are pure and total.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from vmodreskin.models.catalog import AssetFilename, CardCategory


class LookupField(str, Enum):
    """Catalog record field a normalized candidate is compared against."""

    DISPLAY_NAME = "display_name"
    SHORT_CODE = "short_code"


@dataclass(frozen=True, slots=True)
class NormalizationStep:
    """A single named string transformation."""

    name: str
    apply: Callable[[str], str]

    def __call__(self, value: str) -> str:
        return self.apply(value)


@dataclass(frozen=True, slots=True)
class NormalizedName:
    """Result of normalizing one asset filename."""

    candidate: str
    lookup_field: LookupField


DAMAGE_REVISED_SUFFIX = "_revised.png"
CARD_BACK_SUFFIX = "_back.jpg"

# Upgrade slot names that follow the "Upgrade_" prefix in module filenames
UPGRADE_SLOT_TOKENS = (
    "Astromech",
    "Bomb",
    "Cannon",
    "Cargo",
    "Crew",
    "Elite",
    "Hardpoint",
    "Illicit",
    "Missile",
    "Modification",
    "SalvagedAstromech",
    "System",
    "Team",
    "Tech",
    "Title",
    "Torpedo",
    "Turret",
)

_EXTENSION_RE = re.compile(r"\.(?:jpe?g|png)$", re.IGNORECASE)
_PILOT_MARKER_RE = re.compile(r"^Pilot[-_]")
_SQUADRON_RE = re.compile(r" Sq ")
_HYPHEN_RE = re.compile(r"\s*-\s*")
_REVISED_RE = re.compile(r"\s*\brevised$")
_SLOT_RE = re.compile(r"^(?:" + "|".join(UPGRADE_SLOT_TOKENS) + r")_")


def _strip_prefix(prefix: str) -> Callable[[str], str]:
    def strip(value: str) -> str:
        return value[len(prefix) :] if value.startswith(prefix) else value

    return strip


def strip_extension(value: str) -> str:
    return _EXTENSION_RE.sub("", value)


def underscores_to_spaces(value: str) -> str:
    return value.replace("_", " ")


def strip_pilot_marker(value: str) -> str:
    return _PILOT_MARKER_RE.sub("", value, count=1)


def expand_squadron(value: str) -> str:
    # "Green Sq Pilot" -> "Green Squadron Pilot"
    return _SQUADRON_RE.sub(" Squadron ", value, count=1)


def collapse_hyphen(value: str) -> str:
    return _HYPHEN_RE.sub(" ", value, count=1)


def strip_revised_token(value: str) -> str:
    return _REVISED_RE.sub("", value).strip()


def strip_slot_token(value: str) -> str:
    return _SLOT_RE.sub("", value, count=1)


PILOT_STEPS: tuple[NormalizationStep, ...] = (
    NormalizationStep("strip_pilot_marker", strip_pilot_marker),
    NormalizationStep("strip_extension", strip_extension),
    NormalizationStep("underscores_to_spaces", underscores_to_spaces),
    NormalizationStep("expand_squadron", expand_squadron),
    NormalizationStep("collapse_hyphen", collapse_hyphen),
)

CONDITION_STEPS: tuple[NormalizationStep, ...] = (
    NormalizationStep("strip_condition_prefix", _strip_prefix("Condition_")),
    NormalizationStep("strip_extension", strip_extension),
)

DAMAGE_STEPS: tuple[NormalizationStep, ...] = (
    NormalizationStep("strip_damage_prefix", _strip_prefix("Hit-")),
    NormalizationStep("strip_extension", strip_extension),
    NormalizationStep("underscores_to_spaces", underscores_to_spaces),
)

DAMAGE_REVISED_STEPS: tuple[NormalizationStep, ...] = DAMAGE_STEPS + (
    NormalizationStep("strip_revised_token", strip_revised_token),
)

UPGRADE_STEPS: tuple[NormalizationStep, ...] = (
    NormalizationStep("strip_upgrade_prefix", _strip_prefix("Upgrade_")),
    NormalizationStep("strip_slot_token", strip_slot_token),
    NormalizationStep("underscores_to_spaces", underscores_to_spaces),
    NormalizationStep("strip_extension", strip_extension),
)

LOOKUP_FIELDS: dict[CardCategory, LookupField] = {
    CardCategory.PILOT: LookupField.DISPLAY_NAME,
    CardCategory.CONDITION: LookupField.SHORT_CODE,
    CardCategory.DAMAGE: LookupField.DISPLAY_NAME,
    CardCategory.UPGRADE: LookupField.SHORT_CODE,
}


def is_revised_damage(filename: AssetFilename) -> bool:
    """True for damage cards from the revised (The Force Awakens) deck."""
    return filename.endswith(DAMAGE_REVISED_SUFFIX)


def is_card_back(filename: AssetFilename) -> bool:
    """True for upgrade card backs, which have no image in the data set."""
    return filename.endswith(CARD_BACK_SUFFIX)


def steps_for(category: CardCategory, filename: AssetFilename) -> tuple[NormalizationStep, ...]:
    """Ordered normalization steps that apply to a filename."""
    if category == CardCategory.PILOT:
        return PILOT_STEPS
    if category == CardCategory.CONDITION:
        return CONDITION_STEPS
    if category == CardCategory.DAMAGE:
        return DAMAGE_REVISED_STEPS if is_revised_damage(filename) else DAMAGE_STEPS
    return UPGRADE_STEPS


def apply_steps(steps: tuple[NormalizationStep, ...], value: str) -> str:
    for step in steps:
        value = step(value)
    return value


def normalize(category: CardCategory, filename: AssetFilename) -> NormalizedName:
    """
    Normalize a filename into a lookup candidate for its category.

    Args:
        category: Category the filename was partitioned into
        filename: Asset filename from the module's images directory

    Returns:
        NormalizedName with the candidate and the catalog field to match on
    """
    candidate = apply_steps(steps_for(category, filename), filename)
    return NormalizedName(candidate=candidate, lookup_field=LOOKUP_FIELDS[category])
