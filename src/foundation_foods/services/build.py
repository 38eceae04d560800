"""Offline build of the foundation foods composition table."""

import logging

from foundation_foods.adapters.csv_tables import (
    load_categories,
    load_foods,
    load_measurements,
    load_nutrient_rows,
    write_composition_csv,
)
from foundation_foods.adapters.tagname_lookup import TagnameLookup
from foundation_foods.adapters.text_source import TextSource
from foundation_foods.config import Settings
from foundation_foods.domain.nutrients import NutrientCodeReport
from foundation_foods.services.aggregation import CompositionTable, build_compositions
from foundation_foods.services.nutrients import (
    NutrientLookup,
    nutrient_code_report,
    resolve_nutrients,
)

_logger = logging.getLogger(__name__)


def load_tagnames(settings: Settings, text_source: TextSource) -> TagnameLookup:
    """Load the nutrient tagname lookup."""
    return TagnameLookup.from_text(
        text_source.read_text(settings.asset_location(settings.tagnames_source))
    )


def build_foundation_foods(
    settings: Settings,
    text_source: TextSource,
    lookup: NutrientLookup | None = None,
    columns: list[str] | None = None,
) -> CompositionTable:
    """Aggregate the asset tables and write the composition CSV.

    With explicit columns, every food must have a value for each of them.
    """
    lookup = lookup or load_tagnames(settings, text_source)
    foods = load_foods(text_source.read_text(settings.asset_location(settings.food_csv)))
    categories = load_categories(
        text_source.read_text(settings.asset_location(settings.food_category_csv))
    )
    nutrients = resolve_nutrients(
        load_nutrient_rows(
            text_source.read_text(settings.asset_location(settings.nutrient_csv))
        ),
        lookup,
        exclude_derived=settings.exclude_derived_nutrients,
    )
    measurements = load_measurements(
        text_source.read_text(settings.asset_location(settings.food_nutrient_csv))
    )
    table = build_compositions(foods, categories, nutrients, measurements)
    write_composition_csv(settings.index_csv, table, columns)
    _logger.info(
        "Wrote %s foods with %s nutrients to %s",
        len(table.profiles),
        len(table.columns),
        settings.index_csv,
    )
    return table


def build_nutrient_report(
    settings: Settings,
    text_source: TextSource,
    lookup: NutrientLookup | None = None,
) -> NutrientCodeReport:
    """Audit the nutrient table against the tagname lookup."""
    lookup = lookup or load_tagnames(settings, text_source)
    rows = load_nutrient_rows(
        text_source.read_text(settings.asset_location(settings.nutrient_csv))
    )
    return nutrient_code_report(rows, lookup)
