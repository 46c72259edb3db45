"""Nutrient catalog: display rows, raw-name synonyms and default units."""

from dataclasses import dataclass, field
from enum import Enum


class MacroType(Enum):
    """Primary macronutrients tracked against daily goals."""

    PROTEIN = "protein"
    CARBS = "carbs"
    FAT = "fat"


class Aggregation(Enum):
    """How matches across a synonym list are combined."""

    FIRST = "first"
    SUM = "sum"


class Computation(Enum):
    """Row values derived from other totals."""

    NET_CARBS = "net_carbs"
    CALORIES = "calories"


class Section(Enum):
    """Display sections of the nutrient breakdown."""

    CARBS = "carbs"
    FAT = "fat"
    PROTEIN = "protein"
    VITAMINS = "vitamins"
    MINERALS = "minerals"
    OTHER = "other"


@dataclass(frozen=True)
class MacroSource:
    """Row backed by a macro total."""

    macro: MacroType


@dataclass(frozen=True)
class NutrientSource:
    """Row backed by one or more raw nutrient names."""

    names: tuple[str, ...]
    aggregation: Aggregation = Aggregation.FIRST


@dataclass(frozen=True)
class ComputedSource:
    """Row computed from other totals."""

    computation: Computation


NutrientValueSource = MacroSource | NutrientSource | ComputedSource


@dataclass(frozen=True)
class NutrientRowDescriptor:
    """Describes one nutrient row shown in a plate breakdown."""

    label: str
    slug: str | None
    default_unit: str
    source: NutrientValueSource
    section: Section = Section.OTHER

    @property
    def id(self) -> str:
        """Stable row identifier."""
        return self.slug or self.label


def canonical_key(name: str) -> str:
    """Normalize a raw nutrient name for case-insensitive matching."""
    return name.strip().lower()


@dataclass(frozen=True)
class NutrientCatalog:
    """Immutable table of nutrient rows and macro synonym lists."""

    rows: tuple[NutrientRowDescriptor, ...]
    macro_names: dict[MacroType, tuple[str, ...]]
    calorie_names: tuple[str, ...]
    fiber_names: tuple[str, ...]
    _by_slug: dict[str, NutrientRowDescriptor] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        by_slug = {row.slug: row for row in self.rows if row.slug}
        object.__setattr__(self, "_by_slug", by_slug)

    def descriptor(self, slug: str) -> NutrientRowDescriptor | None:
        """Return the row for a goal slug, if the catalog has one."""
        return self._by_slug.get(slug)

    def rows_in(self, section: Section) -> list[NutrientRowDescriptor]:
        """Return rows of a display section in catalog order."""
        return [row for row in self.rows if row.section is section]

    def names_for(self, macro: MacroType) -> tuple[str, ...]:
        """Return the raw-name synonyms backing a macro."""
        return self.macro_names.get(macro, ())


def _row(  # noqa: PLR0913
    label: str,
    slug: str,
    unit: str,
    names: tuple[str, ...],
    section: Section,
    aggregation: Aggregation = Aggregation.FIRST,
) -> NutrientRowDescriptor:
    return NutrientRowDescriptor(
        label=label,
        slug=slug,
        default_unit=unit,
        source=NutrientSource(names=names, aggregation=aggregation),
        section=section,
    )


_CARB_ROWS = (
    NutrientRowDescriptor(
        "Carbs", "carbs", "g", MacroSource(MacroType.CARBS), Section.CARBS
    ),
    _row(
        "Fiber", "fiber", "g", ("fiber, total dietary", "dietary fiber"), Section.CARBS
    ),
    NutrientRowDescriptor(
        "Net (Non-fiber)",
        "net_carbs",
        "g",
        ComputedSource(Computation.NET_CARBS),
        Section.CARBS,
    ),
    _row(
        "Sugars",
        "sugars",
        "g",
        ("sugars, total including nlea", "sugars, total", "sugar"),
        Section.CARBS,
    ),
    _row(
        "Sugars Added",
        "added_sugars",
        "g",
        ("sugars, added", "added sugars"),
        Section.CARBS,
    ),
)

_FAT_ROWS = (
    NutrientRowDescriptor("Fat", "fat", "g", MacroSource(MacroType.FAT), Section.FAT),
    _row(
        "Monounsaturated",
        "monounsaturated_fat",
        "g",
        ("fatty acids, total monounsaturated",),
        Section.FAT,
    ),
    _row(
        "Polyunsaturated",
        "polyunsaturated_fat",
        "g",
        ("fatty acids, total polyunsaturated",),
        Section.FAT,
    ),
    _row(
        "Omega-3",
        "omega_3_total",
        "g",
        ("fatty acids, total n-3", "omega 3", "omega-3"),
        Section.FAT,
    ),
    _row(
        "Omega-3 ALA",
        "omega_3_ala",
        "g",
        ("18:3 n-3 c,c,c (ala)", "alpha-linolenic acid", "omega-3 ala", "omega 3 ala"),
        Section.FAT,
    ),
    _row(
        "Omega-3 EPA",
        "omega_3_epa_dha",
        "mg",
        (
            "20:5 n-3 (epa)",
            "22:6 n-3 (dha)",
            "epa",
            "dha",
            "eicosapentaenoic acid",
            "docosahexaenoic acid",
            "omega-3 epa + dha",
        ),
        Section.FAT,
        aggregation=Aggregation.SUM,
    ),
    _row(
        "Omega-6",
        "omega_6",
        "g",
        ("fatty acids, total n-6", "omega 6", "omega-6"),
        Section.FAT,
    ),
    _row(
        "Saturated",
        "saturated_fat",
        "g",
        ("fatty acids, total saturated",),
        Section.FAT,
    ),
    _row("Trans Fat", "trans_fat", "g", ("fatty acids, total trans",), Section.FAT),
)

_AMINO_ACIDS = (
    ("Cysteine", "cysteine", ("cysteine", "cystine")),
    ("Histidine", "histidine", ("histidine",)),
    ("Isoleucine", "isoleucine", ("isoleucine",)),
    ("Leucine", "leucine", ("leucine",)),
    ("Lysine", "lysine", ("lysine",)),
    ("Methionine", "methionine", ("methionine",)),
    ("Phenylalanine", "phenylalanine", ("phenylalanine",)),
    ("Threonine", "threonine", ("threonine",)),
    ("Tryptophan", "tryptophan", ("tryptophan",)),
    ("Tyrosine", "tyrosine", ("tyrosine",)),
    ("Valine", "valine", ("valine",)),
)

_PROTEIN_ROWS = (
    NutrientRowDescriptor(
        "Protein", "protein", "g", MacroSource(MacroType.PROTEIN), Section.PROTEIN
    ),
    *(
        _row(label, slug, "mg", names, Section.PROTEIN)
        for label, slug, names in _AMINO_ACIDS
    ),
)

_VITAMINS = (
    ("B1, Thiamine", "vitamin_b1_thiamin", "mg", ("thiamin", "vitamin b-1")),
    ("B2, Riboflavin", "vitamin_b2_riboflavin", "mg", ("riboflavin", "vitamin b-2")),
    ("B3, Niacin", "vitamin_b3_niacin", "mg", ("niacin", "vitamin b-3")),
    (
        "B6, Pyridoxine",
        "vitamin_b6_pyridoxine",
        "mg",
        ("vitamin b-6", "pyridoxine", "vitamin b6"),
    ),
    (
        "B5, Pantothenic Acid",
        "vitamin_b5_pantothenic_acid",
        "mg",
        ("pantothenic acid",),
    ),
    ("B12, Cobalamin", "vitamin_b12_cobalamin", "mcg", ("vitamin b-12", "cobalamin")),
    ("Biotin", "biotin", "mcg", ("biotin",)),
    ("Folate", "folate", "mcg", ("folate, total", "folic acid")),
    ("Vitamin A", "vitamin_a", "mcg", ("vitamin a, rae", "vitamin a")),
    ("Vitamin C", "vitamin_c", "mg", ("vitamin c, total ascorbic acid", "vitamin c")),
    ("Vitamin D", "vitamin_d", "IU", ("vitamin d (d2 + d3)", "vitamin d")),
    ("Vitamin E", "vitamin_e", "mg", ("vitamin e (alpha-tocopherol)", "vitamin e")),
    ("Vitamin K", "vitamin_k", "mcg", ("vitamin k (phylloquinone)", "vitamin k")),
)

_MINERALS = (
    ("Calcium", "calcium", "mg", ("calcium, ca",)),
    ("Copper", "copper", "mcg", ("copper, cu",)),
    ("Iron", "iron", "mg", ("iron, fe",)),
    ("Magnesium", "magnesium", "mg", ("magnesium, mg",)),
    ("Manganese", "manganese", "mg", ("manganese, mn",)),
    ("Phosphorus", "phosphorus", "mg", ("phosphorus, p",)),
    ("Potassium", "potassium", "mg", ("potassium, k",)),
    ("Selenium", "selenium", "mcg", ("selenium, se",)),
    ("Sodium", "sodium", "mg", ("sodium, na",)),
    ("Zinc", "zinc", "mg", ("zinc, zn",)),
)

_OTHER_ROWS = (
    NutrientRowDescriptor(
        "Calories",
        "calories",
        "kcal",
        ComputedSource(Computation.CALORIES),
        Section.OTHER,
    ),
    _row("Alcohol", "alcohol", "g", ("alcohol, ethyl",), Section.OTHER),
    _row("Caffeine", "caffeine", "mg", ("caffeine",), Section.OTHER),
    _row("Cholesterol", "cholesterol", "mg", ("cholesterol",), Section.OTHER),
    _row("Choline", "choline", "mg", ("choline, total",), Section.OTHER),
    _row("Water", "water", "ml", ("water",), Section.OTHER),
)

DEFAULT_ROWS: tuple[NutrientRowDescriptor, ...] = (
    *_CARB_ROWS,
    *_FAT_ROWS,
    *_PROTEIN_ROWS,
    *(
        _row(label, slug, unit, names, Section.VITAMINS)
        for label, slug, unit, names in _VITAMINS
    ),
    *(
        _row(label, slug, unit, names, Section.MINERALS)
        for label, slug, unit, names in _MINERALS
    ),
    *_OTHER_ROWS,
)

DEFAULT_MACRO_NAMES: dict[MacroType, tuple[str, ...]] = {
    MacroType.PROTEIN: ("protein",),
    MacroType.CARBS: ("carbohydrate, by difference", "carbohydrate", "carbs"),
    MacroType.FAT: ("total lipid (fat)", "total fat", "fat"),
}

DEFAULT_CALORIE_NAMES: tuple[str, ...] = ("energy", "calories")

DEFAULT_FIBER_NAMES: tuple[str, ...] = (
    "fiber, total dietary",
    "dietary fiber",
    "fiber",
)


def default_catalog() -> NutrientCatalog:
    """Return the catalog shipped with the app."""
    return NutrientCatalog(
        rows=DEFAULT_ROWS,
        macro_names=dict(DEFAULT_MACRO_NAMES),
        calorie_names=DEFAULT_CALORIE_NAMES,
        fiber_names=DEFAULT_FIBER_NAMES,
    )
