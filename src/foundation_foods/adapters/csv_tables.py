"""CSV readers and writers for FoodData Central tables."""

import csv
import io
import logging
import math
from pathlib import Path

import pandas as pd

from foundation_foods.domain.foods import (
    Food,
    FoodCategory,
    FoodProfile,
    Measurement,
    NutrientRow,
)
from foundation_foods.services.aggregation import TEXT_COLUMNS, CompositionTable

_logger = logging.getLogger(__name__)


def read_table(text: str) -> list[dict[str, str]]:
    """Parse CSV text with a header row, ignoring lines starting with '#'."""
    lines = [line for line in text.split("\n") if not line.startswith("#")]
    if not any(line.strip() for line in lines):
        return []
    frame = pd.read_csv(
        io.StringIO("\n".join(lines)),
        dtype=str,
        keep_default_na=False,
        skipinitialspace=True,
    )
    return frame.to_dict(orient="records")


def load_foods(text: str) -> dict[str, Food]:
    """Load the interesting parts of food.csv keyed by fdc_id."""
    return {
        row["fdc_id"]: Food(
            fdc_id=row["fdc_id"],
            description=row["description"],
            food_category_id=row.get("food_category_id", ""),
        )
        for row in read_table(text)
    }


def load_categories(text: str) -> dict[str, FoodCategory]:
    """Load food_category.csv keyed by id."""
    return {
        row["id"]: FoodCategory(
            id=row["id"], code=row.get("code", ""), description=row["description"]
        )
        for row in read_table(text)
    }


def load_nutrient_rows(text: str) -> list[NutrientRow]:
    """Load nutrient.csv rows in file order."""
    return [
        NutrientRow(id=row["id"], name=row["name"], unit_name=row["unit_name"])
        for row in read_table(text)
    ]


def load_measurements(text: str) -> list[Measurement]:
    """Load food_nutrient.csv rows, skipping amounts that are not finite numbers."""
    measurements = []
    for row in read_table(text):
        try:
            amount = float(row["amount"])
        except ValueError:
            amount = math.nan
        if not math.isfinite(amount):
            _logger.warning(
                "Invalid amount %r for food %s nutrient %s",
                row["amount"],
                row["fdc_id"],
                row["nutrient_id"],
            )
            continue
        measurements.append(
            Measurement(
                fdc_id=row["fdc_id"], nutrient_id=row["nutrient_id"], amount=amount
            )
        )
    return measurements


def write_composition_csv(
    path: Path, table: CompositionTable, columns: list[str] | None = None
) -> None:
    """Write one row per food, text columns quoted and values unquoted.

    Without explicit columns every observed nutrient is written and values
    never measured are left empty. Rows are built before anything is written,
    so a food missing an explicitly requested nutrient leaves no partial file.
    """
    frame = pd.DataFrame(list(table.rows(columns)), columns=table.header(columns))
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")


def _column_label(header: str) -> str:
    return header[header.rfind(";") + 1 :].strip()


def load_corpus(text: str) -> dict[str, FoodProfile]:
    """Load the composition table as food profiles keyed by food code."""
    corpus: dict[str, FoodProfile] = {}
    for row in read_table(text):
        fields = {_column_label(key): value for key, value in row.items()}
        nutrients = {
            label: float(value)
            for label, value in fields.items()
            if label not in TEXT_COLUMNS and value.strip()
        }
        profile = FoodProfile(
            code=fields["code"],
            name=fields["name"],
            category=fields["category"],
            nutrients=nutrients,
        )
        corpus[profile.code] = profile
    return corpus
