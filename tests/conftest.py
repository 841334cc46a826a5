import json
from pathlib import Path

import pytest

from vmodreskin.models.catalog import CardCategory, CatalogRecord
from vmodreskin.services.catalog_index import CatalogIndex, CatalogSet
from vmodreskin.services.static_tables import IgnoreSet, OverrideTable, StaticTables


@pytest.fixture
def pilot_records() -> list[CatalogRecord]:
    """Pilot records, including a duplicated name (a known data defect)."""
    return [
        CatalogRecord("1", "lukeskywalker", "Luke Skywalker", "pilots/luke-skywalker.png"),
        CatalogRecord("2", "greensquadronpilot", "Green Squadron Pilot", "pilots/green.png"),
        CatalogRecord("3", "biggsdarklighter", "Biggs Darklighter", "pilots/biggs-1.png"),
        CatalogRecord("4", "biggsdarklighter", "Biggs Darklighter", "pilots/biggs-2.png"),
        CatalogRecord("5", "wedgeantilles", "Wedge Antilles", "pilots/wedge.png"),
        CatalogRecord("6", "darthvader", "Darth Vader", "pilots/vader.png"),
    ]


@pytest.fixture
def condition_records() -> list[CatalogRecord]:
    return [
        CatalogRecord("1", "stressed", "Stressed", "conditions/stressed.png"),
        CatalogRecord("2", "suppressivefire", "Suppressive Fire", "conditions/suppressive.png"),
    ]


@pytest.fixture
def upgrade_records() -> list[CatalogRecord]:
    return [
        CatalogRecord("10", "hansolo", "Han Solo", "upgrades/han-solo.png"),
        CatalogRecord("11", "r2d2", "R2-D2", "upgrades/r2-d2.png"),
        CatalogRecord("12", "protontorpedoes", "Proton Torpedoes", "upgrades/proton.png"),
        CatalogRecord("13", "imageless", "Imageless", None),
    ]


@pytest.fixture
def damage_core_records() -> list[CatalogRecord]:
    return [
        CatalogRecord("consolefire", "consolefire", "Console Fire", "damage/core/console.png"),
        CatalogRecord("directhit", "directhit", "Direct Hit!", "damage/core/direct-hit.png"),
    ]


@pytest.fixture
def damage_revised_records() -> list[CatalogRecord]:
    return [
        CatalogRecord("consolefire", "consolefire", "Console Fire", "damage/tfa/console.png"),
        CatalogRecord("blindedpilot", "blindedpilot", "Blinded Pilot", "damage/tfa/blinded.png"),
        CatalogRecord("loosestabilizer", None, "Loose Stabilizer", "damage/tfa/loose.png"),
    ]


@pytest.fixture
def catalogs(
    pilot_records: list[CatalogRecord],
    condition_records: list[CatalogRecord],
    upgrade_records: list[CatalogRecord],
    damage_core_records: list[CatalogRecord],
    damage_revised_records: list[CatalogRecord],
) -> CatalogSet:
    """Pre-built catalog set."""
    return CatalogSet(
        pilots=CatalogIndex("pilots", pilot_records),
        conditions=CatalogIndex("conditions", condition_records),
        upgrades=CatalogIndex("upgrades", upgrade_records),
        damage_core=CatalogIndex("damage-deck-core", damage_core_records),
        damage_revised=CatalogIndex("damage-deck-core-tfa", damage_revised_records),
    )


@pytest.fixture
def empty_tables() -> StaticTables:
    return StaticTables()


@pytest.fixture
def tables() -> StaticTables:
    """Static tables exercising overrides, ignores and name corrections."""
    return StaticTables(
        overrides={
            CardCategory.PILOT: OverrideTable(
                CardCategory.PILOT,
                {
                    "Pilot-Vader.jpg": "6",
                    "Pilot-Ignored_But_Mapped.jpg": "5",
                    "Pilot-Stale.jpg": "999",
                },
            ),
            CardCategory.CONDITION: OverrideTable(CardCategory.CONDITION, {}),
            CardCategory.DAMAGE: OverrideTable(
                CardCategory.DAMAGE, {"Hit-Fire_In_The_Cockpit.png": "consolefire"}
            ),
            CardCategory.UPGRADE: OverrideTable(
                CardCategory.UPGRADE,
                {
                    "Upgrade_Crew_HanSolo_back.jpg": "10",
                    "Upgrade_Astromech_Artoo.jpg": "11",
                },
            ),
        },
        ignored=IgnoreSet(
            [
                "Pilot-Placeholder.jpg",
                "Pilot-Ignored_But_Mapped.jpg",
                "Condition_Unused.jpg",
                "Hit-Blank.png",
                "Upgrade_Title_Unused.jpg",
            ]
        ),
        damage_name_corrections={"Hit-Direct_Hit.png": "Direct Hit!"},
    )


@pytest.fixture
def tables_dir(tmp_path: Path) -> Path:
    """Directory holding a complete, valid set of table files."""
    directory = tmp_path / "tables"
    directory.mkdir()
    files = {
        "pilot-mappings.json": {"Pilot-Vader.jpg": 6},
        "condition-mappings.json": {},
        "damage-mappings.json": {},
        "upgrade-mappings.json": {"Upgrade_Astromech_Artoo.jpg": "11"},
        "damage-name-corrections.json": {"Hit-Direct_Hit.png": "Direct Hit!"},
        "ignored.json": ["Pilot-Placeholder.jpg"],
    }
    for name, content in files.items():
        (directory / name).write_text(json.dumps(content))
    return directory
