"""Table-backed INFOODS tagname lookup."""

import re
from dataclasses import dataclass

from foundation_foods.adapters.csv_tables import read_table
from foundation_foods.domain.nutrients import NutrientTag
from foundation_foods.services.nutrients import NutrientLookup

_PUNCTUATION = re.compile(r"[^\w+/:-]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    """Normalize a nutrient name for comparison."""
    cleaned = _PUNCTUATION.sub(" ", name.lower())
    return _WHITESPACE.sub(" ", cleaned).strip()


@dataclass
class TagnameLookup(NutrientLookup):
    """Lookup of standard nutrient tags by name or synonym."""

    tags: list[NutrientTag]

    def __post_init__(self) -> None:
        self._by_name: dict[str, list[NutrientTag]] = {}
        for tag in self.tags:
            for alias in (tag.name, *tag.synonyms):
                matches = self._by_name.setdefault(normalize_name(alias), [])
                if tag not in matches:
                    matches.append(tag)

    @classmethod
    def from_text(cls, text: str) -> "TagnameLookup":
        """Build a lookup from a code,name,synonyms table."""
        tags = [
            NutrientTag(
                code=row["code"],
                name=row["name"],
                synonyms=tuple(
                    s.strip() for s in row.get("synonyms", "").split(";") if s.strip()
                ),
            )
            for row in read_table(text)
            if row["code"]
        ]
        return cls(tags=tags)

    def tagnames(self, name: str) -> list[NutrientTag]:
        """Return every tag matching a nutrient name, in table order."""
        return list(self._by_name.get(normalize_name(name), []))

    def lookup(self, name: str) -> NutrientTag | None:
        """Return the first tag matching a nutrient name."""
        matches = self.tagnames(name)
        return matches[0] if matches else None
