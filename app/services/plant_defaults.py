"""
Plant timing defaults and category lookup.

Hardcoded table of common garden plants with their usual planting method,
frost-relative timing, and display category. Used to fill timing fields that
AI extraction missed and to group seeds into vegetable / flower / herb.
General guidelines only; seed packet data always wins.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class PlantDefault:
    names: tuple[str, ...]
    category: str           # "vegetable", "herb", "flower", "fruit"
    planting_method: str    # "direct_sow", "start_indoors"
    cold_hardy: bool
    weeks_before_last_frost: Optional[int] = None
    weeks_after_last_frost: Optional[int] = None
    weeks_before_last_frost_outdoor: Optional[int] = None
    alternate_method: Optional[str] = None
    days_to_maturity: Optional[tuple[int, int]] = None
    notes: Optional[str] = None


def _indoors(names, category, weeks, cold_hardy, dtm, notes=None, alternate=None) -> PlantDefault:
    return PlantDefault(
        names=tuple(names), category=category, planting_method="start_indoors",
        cold_hardy=cold_hardy, weeks_before_last_frost=weeks,
        alternate_method=alternate, days_to_maturity=dtm, notes=notes,
    )


def _sow_after(names, category, weeks, dtm, notes=None, alternate=None) -> PlantDefault:
    return PlantDefault(
        names=tuple(names), category=category, planting_method="direct_sow",
        cold_hardy=False, weeks_after_last_frost=weeks,
        alternate_method=alternate, days_to_maturity=dtm, notes=notes,
    )


def _sow_before(names, category, weeks, dtm, notes=None, alternate=None) -> PlantDefault:
    return PlantDefault(
        names=tuple(names), category=category, planting_method="direct_sow",
        cold_hardy=True, weeks_before_last_frost_outdoor=weeks,
        alternate_method=alternate, days_to_maturity=dtm, notes=notes,
    )


# ── Defaults table ────────────────────────────────────────────────────────────

PLANT_DEFAULTS: list[PlantDefault] = [
    # ── Herbs ─────────────────────────────────────────────────────────────────
    _indoors(["basil", "sweet basil", "genovese basil", "thai basil"], "herb", 6, False, (60, 90),
             "Very frost sensitive. Wait until soil is warm to transplant."),
    _sow_before(["cilantro", "coriander"], "herb", 2, (45, 70),
                "Prefers cool weather. Bolts quickly in heat."),
    _sow_after(["dill"], "herb", 1, (40, 60), "Does not transplant well."),
    _indoors(["parsley", "flat leaf parsley", "curly parsley", "italian parsley"], "herb", 10, True, (70, 90),
             "Slow to germinate. Can also direct sow in early spring."),
    _indoors(["oregano"], "herb", 8, True, (80, 90)),
    _indoors(["thyme"], "herb", 8, True, (85, 95)),
    _indoors(["sage"], "herb", 8, True, (75, 85)),
    _indoors(["mint", "spearmint", "peppermint"], "herb", 8, True, (90, 120)),
    _indoors(["chives"], "herb", 8, True, (80, 90)),

    # ── Vegetables — warm season ──────────────────────────────────────────────
    _indoors(["tomato", "tomatoes"], "vegetable", 6, False, (60, 85),
             "Start indoors 6-8 weeks before last frost."),
    _indoors(["pepper", "peppers", "bell pepper", "sweet pepper", "hot pepper", "chili pepper"],
             "vegetable", 8, False, (60, 90),
             "Start indoors 8-10 weeks before last frost. Need warm soil."),
    _indoors(["eggplant", "aubergine"], "vegetable", 8, False, (70, 85)),
    _sow_after(["cucumber", "cucumbers"], "vegetable", 2, (50, 70),
               "Can start indoors 3-4 weeks before last frost.", alternate="start_indoors"),
    _sow_after(["squash", "summer squash", "winter squash", "zucchini", "acorn squash",
                "butternut squash", "spaghetti squash", "pumpkin", "pumpkins"],
               "vegetable", 2, (45, 110),
               "Can start indoors 3-4 weeks before last frost. Direct sow preferred.",
               alternate="start_indoors"),
    _indoors(["melon", "watermelon", "cantaloupe", "honeydew"], "fruit", 4, False, (70, 100)),
    _sow_after(["corn", "sweet corn"], "vegetable", 2, (60, 100), "Plant in blocks for good pollination."),
    _sow_after(["bean", "beans", "green bean", "bush bean", "pole bean", "snap bean"], "vegetable", 1, (50, 65),
               "Direct sow after danger of frost has passed."),
    _sow_after(["okra"], "vegetable", 3, (50, 65), "Needs warm soil (65F+)."),

    # ── Vegetables — cool season ──────────────────────────────────────────────
    _sow_before(["lettuce", "leaf lettuce", "romaine", "butterhead", "head lettuce"], "vegetable", 4, (30, 70),
                "Can start indoors 4-6 weeks before last frost. Succession plant every 2 weeks.",
                alternate="start_indoors"),
    _sow_before(["spinach"], "vegetable", 6, (37, 50),
                "Very cold hardy. Plant as soon as soil can be worked."),
    _sow_before(["kale"], "vegetable", 4, (55, 75),
                "Can start indoors 4-6 weeks before last frost. Flavor improves after frost.",
                alternate="start_indoors"),
    _sow_before(["swiss chard", "chard"], "vegetable", 2, (50, 60)),
    _sow_before(["arugula", "rocket"], "vegetable", 4, (35, 50)),
    _sow_before(["pea", "peas", "snap pea", "snow pea", "garden pea", "shelling pea"], "vegetable", 6, (55, 70),
                "Plant as soon as soil can be worked in spring."),
    _indoors(["broccoli"], "vegetable", 6, True, (55, 80)),
    _indoors(["cauliflower"], "vegetable", 6, True, (55, 80)),
    _indoors(["cabbage"], "vegetable", 6, True, (70, 100)),
    _indoors(["brussels sprouts", "brussels sprout"], "vegetable", 6, True, (90, 120)),
    _sow_before(["kohlrabi"], "vegetable", 4, (45, 60)),

    # ── Vegetables — root crops ───────────────────────────────────────────────
    _sow_before(["carrot", "carrots"], "vegetable", 3, (60, 80), "Does not transplant well. Direct sow only."),
    _sow_before(["beet", "beets", "beetroot"], "vegetable", 4, (50, 70)),
    _sow_before(["radish", "radishes"], "vegetable", 4, (22, 30),
                "Fast growing. Succession plant every 2 weeks."),
    _sow_before(["turnip", "turnips"], "vegetable", 4, (45, 60)),
    _sow_before(["parsnip", "parsnips"], "vegetable", 3, (100, 130),
                "Very slow to germinate. Flavor improves after frost."),
    _indoors(["onion", "onions"], "vegetable", 10, True, (90, 120)),
    _indoors(["leek", "leeks"], "vegetable", 10, True, (90, 120)),
    _sow_before(["garlic"], "vegetable", 6, (240, 270), "Best planted in fall for harvest following summer."),
    _sow_before(["potato", "potatoes"], "vegetable", 2, (70, 120), "Plant seed potatoes, not seeds."),
    _indoors(["sweet potato", "sweet potatoes"], "vegetable", 8, False, (90, 120),
             "Start slips indoors or purchase transplants."),

    # ── Flowers — cool season ─────────────────────────────────────────────────
    _indoors(["pansy", "pansies", "viola"], "flower", 8, True, (70, 84)),
    _indoors(["snapdragon", "snapdragons"], "flower", 10, True, (80, 100)),
    _sow_before(["sweet pea", "sweet peas"], "flower", 6, (50, 65),
                "Prefers cool weather. Plant as early as possible."),
    _sow_before(["larkspur"], "flower", 4, (80, 100)),
    _sow_before(["bachelor button", "cornflower", "centaurea"], "flower", 4, (60, 80),
                "Can also be fall sown for earlier spring bloom."),
    _sow_before(["poppy", "poppies", "california poppy"], "flower", 4, (60, 90), "Does not transplant well."),
    _indoors(["stock"], "flower", 8, True, (70, 84)),

    # ── Flowers — warm season ─────────────────────────────────────────────────
    _sow_after(["zinnia", "zinnias"], "flower", 1, (60, 75),
               "Direct sow after frost. Can start indoors 4 weeks before last frost."),
    _sow_after(["marigold", "marigolds"], "flower", 0, (50, 75),
               "Can start indoors 6-8 weeks before last frost.", alternate="start_indoors"),
    _sow_after(["sunflower", "sunflowers"], "flower", 1, (55, 100),
               "Direct sow preferred. Does not transplant well."),
    _sow_after(["cosmos"], "flower", 1, (60, 90), "Easy from direct sow. Can start indoors 4-6 weeks before."),
    _sow_after(["nasturtium", "nasturtiums"], "flower", 1, (50, 65), "Direct sow preferred."),
    _sow_after(["morning glory"], "flower", 1, (60, 90)),
    _indoors(["celosia", "cockscomb"], "flower", 6, False, (90, 120)),
    _indoors(["impatiens"], "flower", 10, False, (70, 90)),
    _indoors(["petunia", "petunias"], "flower", 10, False, (75, 90)),
    _indoors(["aster", "asters", "china aster"], "flower", 7, False, (90, 120)),
    _indoors(["dahlia", "dahlias"], "flower", 6, False, (90, 120)),
    _indoors(["strawflower", "strawflowers", "everlasting"], "flower", 6, False, (75, 90)),

    # ── Shade tolerant / ground covers ────────────────────────────────────────
    _indoors(["coleus"], "flower", 10, False, (70, 90)),
    _indoors(["hosta"], "flower", 10, True, (90, 180)),
    _sow_after(["shade mix", "shade garden mix", "shade flower mix"], "flower", 1, (60, 90),
               "Most shade mixes should be sown after last frost."),
]


# ── Lookup ────────────────────────────────────────────────────────────────────


def find_plant_default(common_name: Optional[str]) -> Optional[PlantDefault]:
    """
    Match a common name against the table, case-insensitively.

    Tries an exact name match, then a name containing the search term, then a
    name contained in the search term ("Cherokee Purple Tomato" → tomato).
    """
    if not common_name:
        return None
    term = common_name.lower().strip()
    if not term:
        return None

    for plant in PLANT_DEFAULTS:
        if any(name == term for name in plant.names):
            return plant
    for plant in PLANT_DEFAULTS:
        if any(term in name for name in plant.names):
            return plant
    for plant in PLANT_DEFAULTS:
        if any(name in term for name in plant.names):
            return plant
    return None


def get_default_timing(common_name: Optional[str]) -> Optional[dict]:
    """Timing fields from the defaults table, for filling gaps in extracted data."""
    plant = find_plant_default(common_name)
    if plant is None:
        return None
    return {
        "planting_method": plant.planting_method,
        "weeks_before_last_frost": plant.weeks_before_last_frost,
        "weeks_after_last_frost": plant.weeks_after_last_frost,
        "weeks_before_last_frost_outdoor": plant.weeks_before_last_frost_outdoor,
        "cold_hardy": plant.cold_hardy,
    }


def get_category(seed: Any) -> str:
    """Display category for a seed. Fruit and unknown plants group with vegetables."""
    plant = find_plant_default(seed.common_name)
    if plant is not None and plant.category in ("herb", "flower"):
        return plant.category
    return "vegetable"
