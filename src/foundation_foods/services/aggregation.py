"""Aggregation of repeated lab measurements into per-food profiles."""

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from foundation_foods.domain.foods import (
    ColumnDetail,
    Food,
    FoodCategory,
    FoodProfile,
    Measurement,
    MissingNutrientError,
    NutrientDefinition,
)

KCAL_TO_KJ = 4.184
ENERGY_UNIT = "kJ"
UNKNOWN_CATEGORY = "Unknown"
TEXT_COLUMNS = ("code", "name", "category")

_KCAL_UNITS = {"kcal", "kilocalorie", "kilocalories"}
_WHITESPACE = re.compile(r"\s+")

_logger = logging.getLogger(__name__)


def food_key(description: str) -> str:
    """Return the grouping key of a food, based on its description."""
    return _WHITESPACE.sub(" ", description.lower()).strip()


def is_kilocalorie(unit_name: str) -> bool:
    """Return whether a unit name denotes kilocalories."""
    return unit_name.strip().lower() in _KCAL_UNITS


def energy_factor(unit_name: str) -> float:
    """Return the factor converting an amount in this unit to its stored unit."""
    return KCAL_TO_KJ if is_kilocalorie(unit_name) else 1.0


def normalized_unit(unit_name: str) -> str:
    """Return the unit label of values stored for this source unit."""
    return ENERGY_UNIT if is_kilocalorie(unit_name) else unit_name


def _id_order(fdc_id: str) -> tuple[int, int, str]:
    if fdc_id.isdecimal():
        return (0, int(fdc_id), fdc_id)
    return (1, 0, fdc_id)


def representative_foods(foods: Iterable[Food]) -> dict[str, Food]:
    """Pick the food with the smallest id for each food key."""
    picks: dict[str, Food] = {}
    for food in foods:
        key = food_key(food.description)
        current = picks.get(key)
        if current is None or _id_order(food.fdc_id) < _id_order(current.fdc_id):
            picks[key] = food
    return picks


@dataclass
class _Accumulator:
    food: Food
    category: str
    sums: dict[str, float] = field(default_factory=dict)
    counts: dict[str, int] = field(default_factory=dict)

    def add(self, code: str, amount: float) -> None:
        self.sums[code] = self.sums.get(code, 0.0) + amount
        self.counts[code] = self.counts.get(code, 0) + 1

    def mean(self, code: str) -> float:
        count = self.counts.get(code, 0)
        if count == 0:
            raise MissingNutrientError(self.food.fdc_id, code)
        return self.sums[code] / count

    def profile(self) -> FoodProfile:
        return FoodProfile(
            code=self.food.fdc_id,
            name=self.food.description,
            category=self.category,
            nutrients={code: self.mean(code) for code in self.sums},
        )


@dataclass(frozen=True)
class CompositionTable:
    """Per-food composition table with its nutrient columns."""

    profiles: list[FoodProfile]
    columns: list[str]
    column_details: dict[str, ColumnDetail]

    def header(self, columns: list[str] | None = None) -> list[str]:
        """Return the output header for the given nutrient columns."""
        return [*TEXT_COLUMNS, *(self.columns if columns is None else columns)]

    def rows(
        self, columns: list[str] | None = None
    ) -> Iterator[list[str | float | None]]:
        """Yield output rows.

        With the default columns a value never measured for a food is None.
        Explicitly requested columns must be measured for every food.
        """
        for profile in self.profiles:
            row: list[str | float | None] = [
                profile.code,
                profile.name,
                profile.category,
            ]
            if columns is None:
                row.extend(profile.nutrients.get(code) for code in self.columns)
            else:
                row.extend(profile.nutrient(code) for code in columns)
            yield row


def build_compositions(
    foods: Mapping[str, Food],
    categories: Mapping[str, FoodCategory],
    nutrients: Mapping[str, NutrientDefinition],
    measurements: Iterable[Measurement],
) -> CompositionTable:
    """Merge measurements into one mean profile per food key.

    Energy values in kcal are converted to kJ before averaging. Measurements
    of unknown foods or unresolved nutrients are skipped with a warning.
    """
    representatives = representative_foods(foods.values())
    accumulators: dict[str, _Accumulator] = {}
    columns: dict[str, ColumnDetail] = {}
    skipped = 0
    for measurement in measurements:
        food = foods.get(measurement.fdc_id)
        if food is None:
            _logger.warning("Food %s not found in food map", measurement.fdc_id)
            skipped += 1
            continue
        nutrient = nutrients.get(measurement.nutrient_id)
        if nutrient is None:
            _logger.warning(
                "Nutrient %s not found in nutrient map", measurement.nutrient_id
            )
            skipped += 1
            continue
        key = food_key(food.description)
        accumulator = accumulators.get(key)
        if accumulator is None:
            representative = representatives[key]
            category = categories.get(representative.food_category_id)
            accumulator = _Accumulator(
                food=representative,
                category=category.description if category else UNKNOWN_CATEGORY,
            )
            accumulators[key] = accumulator
        accumulator.add(
            nutrient.code, measurement.amount * energy_factor(nutrient.unit_name)
        )
        if nutrient.code not in columns:
            columns[nutrient.code] = ColumnDetail(
                code=nutrient.code,
                name=nutrient.name,
                alt_name=nutrient.alt_name,
                unit_name=normalized_unit(nutrient.unit_name),
            )
    if skipped:
        _logger.warning("Skipped %s measurements", skipped)
    return CompositionTable(
        profiles=[accumulator.profile() for accumulator in accumulators.values()],
        columns=list(columns),
        column_details=columns,
    )
