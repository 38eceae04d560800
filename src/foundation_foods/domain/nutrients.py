"""Nutrient tagname domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientTag:
    """Standard nutrient identifier returned by a tagname lookup."""

    code: str
    name: str
    synonyms: tuple[str, ...] = ()


@dataclass(frozen=True)
class NutrientCodeEntry:
    """One source nutrient and the tag it resolved to."""

    name: str
    code: str
    tag_name: str


@dataclass(frozen=True)
class NutrientCodeReport:
    """Summary of how source nutrients map to standard codes."""

    entries: list[NutrientCodeEntry]
    unique_codes: int
    duplicates: int
