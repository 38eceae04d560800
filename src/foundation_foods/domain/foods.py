"""Food composition domain models."""

from dataclasses import dataclass, field


class MissingNutrientError(KeyError):
    """Raised when a nutrient value was never measured for a food."""

    def __init__(self, food_id: str, code: str) -> None:
        super().__init__(f"Missing nutrient {code} in food {food_id}")
        self.food_id = food_id
        self.code = code

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass(frozen=True)
class Food:
    """A row of the food table."""

    fdc_id: str
    description: str
    food_category_id: str


@dataclass(frozen=True)
class FoodCategory:
    """A row of the food category table."""

    id: str
    code: str
    description: str


@dataclass(frozen=True)
class NutrientRow:
    """A row of the nutrient table, before code resolution."""

    id: str
    name: str
    unit_name: str


@dataclass(frozen=True)
class NutrientDefinition:
    """A source nutrient resolved to its canonical code."""

    id: str
    code: str
    name: str
    alt_name: str
    unit_name: str
    synonyms: tuple[str, ...] = ()


@dataclass(frozen=True)
class Measurement:
    """A single lab measurement of a nutrient in a food."""

    fdc_id: str
    nutrient_id: str
    amount: float


@dataclass(frozen=True)
class ColumnDetail:
    """Descriptive metadata for one nutrient column of the output."""

    code: str
    name: str
    alt_name: str
    unit_name: str


@dataclass(frozen=True)
class FoodProfile:
    """Canonical nutrient profile of a food, one per food key."""

    code: str
    name: str
    category: str
    nutrients: dict[str, float] = field(default_factory=dict)

    def nutrient(self, code: str) -> float:
        """Return a nutrient value, failing if it was never measured."""
        if code not in self.nutrients:
            raise MissingNutrientError(self.code, code)
        return self.nutrients[code]

    def has_nutrient(self, code: str) -> bool:
        """Return whether a nutrient value exists for this food."""
        return code in self.nutrients
