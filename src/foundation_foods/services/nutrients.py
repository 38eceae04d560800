"""Resolution of source nutrients to standard tagname codes."""

import logging
import re
from collections.abc import Iterable
from typing import Protocol

from foundation_foods.domain.foods import NutrientDefinition, NutrientRow
from foundation_foods.domain.nutrients import (
    NutrientCodeEntry,
    NutrientCodeReport,
    NutrientTag,
)

_logger = logging.getLogger(__name__)

# Derived, duplicated or unreliable nutrients in the FDC export.
EXCLUDED_NUTRIENT_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"do not use",
        r"atwater",
        r"specific gravity",
        r"non-fat",
        r"solids, soluble",
        r"carbohydrate, other",
        r"lutein\s*[+/]\s*zeaxanthin",
        r"vitamin a, re",
        r"folate, not 5-mthf",
        r"cysteine and methionine",
        r"phenylalanine and tyrosine",
        r"fatty acids, other than",
        r"fatty acids, total.*(nlea|enoic)",
        r"^orac",
        r"^proanthocyanidin",
        r"^proximate",
    )
)


class NutrientLookup(Protocol):
    """Interface for resolving a nutrient name to a standard tag."""

    def lookup(self, name: str) -> NutrientTag | None:
        """Return the best matching tag for a nutrient name, if any."""


def is_excluded_nutrient(name: str) -> bool:
    """Return whether a nutrient name is one of the excluded derived values."""
    return any(pattern.search(name) for pattern in EXCLUDED_NUTRIENT_PATTERNS)


def resolve_nutrients(
    rows: Iterable[NutrientRow],
    lookup: NutrientLookup,
    *,
    exclude_derived: bool = False,
) -> dict[str, NutrientDefinition]:
    """Resolve nutrient rows to definitions keyed by source nutrient id.

    Nutrients without a tag are dropped with a warning. When two different
    nutrient names resolve to the same code, the first one seen keeps the
    code and later ones are dropped. Rows sharing a name (e.g. energy reported
    in both kcal and kJ) all keep the code.
    """
    definitions: dict[str, NutrientDefinition] = {}
    owners: dict[str, str] = {}
    for row in rows:
        if exclude_derived and is_excluded_nutrient(row.name):
            _logger.info("Skipping excluded nutrient %s (%s)", row.id, row.name)
            continue
        tag = lookup.lookup(row.name)
        if tag is None:
            _logger.warning("No tagname found for nutrient %s", row.name)
            continue
        owner = owners.setdefault(tag.code, row.name)
        if owner != row.name:
            _logger.warning(
                "Duplicate nutrient code %s: %s already mapped, dropping %s",
                tag.code,
                owner,
                row.name,
            )
            continue
        definitions[row.id] = NutrientDefinition(
            id=row.id,
            code=tag.code,
            name=row.name,
            alt_name=tag.name,
            unit_name=row.unit_name,
            synonyms=tag.synonyms,
        )
    return definitions


def nutrient_code_report(
    rows: Iterable[NutrientRow], lookup: NutrientLookup
) -> NutrientCodeReport:
    """Audit how non-excluded nutrients map to codes, counting duplicates."""
    entries: list[NutrientCodeEntry] = []
    codes: set[str] = set()
    duplicates = 0
    for row in rows:
        if is_excluded_nutrient(row.name):
            continue
        tag = lookup.lookup(row.name)
        code = tag.code if tag else ""
        if tag is not None and code in codes:
            _logger.warning("Duplicate nutrient code: %s (%s)", code, row.name)
            duplicates += 1
        codes.add(code)
        entries.append(
            NutrientCodeEntry(name=row.name, code=code, tag_name=tag.name if tag else "")
        )
    _logger.info("Found %s unique nutrient codes", len(codes))
    if duplicates:
        _logger.warning("Found %s duplicate nutrient codes", duplicates)
    return NutrientCodeReport(
        entries=entries, unique_codes=len(codes), duplicates=duplicates
    )
