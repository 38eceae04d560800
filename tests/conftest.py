"""Shared test fixtures."""

import logging
import threading
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from foundation_foods.adapters.text_source import TextSource
from foundation_foods.config import Settings
from foundation_foods.domain.foods import (
    Food,
    FoodCategory,
    FoodProfile,
    Measurement,
    NutrientDefinition,
)
from foundation_foods.domain.nutrients import NutrientTag
from foundation_foods.services.nutrients import NutrientLookup

FOOD_CSV = """\
# Foundation foods sample
fdc_id,data_type,description,food_category_id,publication_date
100,foundation_food,"Kale, raw",11,2019-04-01
200,foundation_food," kale,   RAW ",11,2020-04-01
300,foundation_food,"Cheese, swiss",99,2020-04-01
"""

FOOD_CATEGORY_CSV = """\
id,code,description
# Vegetables
11,1100,Vegetables and Vegetable Products
"""

NUTRIENT_CSV = """\
id,name,unit_name,nutrient_nbr,rank
1003,Protein,G,203,600
1008,Energy,KCAL,208,300
1062,Energy,kJ,268,400
1004,Total lipid (fat),G,204,800
2047,Energy (Atwater General Factors),KCAL,957,280
"""

FOOD_NUTRIENT_CSV = """\
id,fdc_id,nutrient_id,amount
1,200,1003,3.0
2,100,1003,2.0
3,100,1008,50
4,200,1062,200
5,300,1003,27
6,300,1008,380
7,100,9999,1
"""

TAGNAMES_CSV = """\
code,name,synonyms
procnt,Protein,protein total; proteins
enerc,Energy,energy total
fat,Fat,Total lipid (fat); lipid
"""

INDEX_CSV = """\
"code","name","category","procnt","enerc"
"323505","Kale, raw","Vegetables and Vegetable Products",2.92,146.0
"323506","Kale, frozen, unprepared","Vegetables and Vegetable Products",2.9,150.0
"746767","Cheese, swiss","Dairy and Egg Products",27.0,1648.0
"746766","Cheese, ricotta, whole milk","Dairy and Egg Products",11.0,662.0
"746768","Cheese, cheddar","Dairy and Egg Products",23.3,1710.0
"321358","Hummus, commercial","Legumes and Legume Products",7.35,
"""


@dataclass
class FakeNutrientLookup(NutrientLookup):
    """Dictionary-backed nutrient lookup."""

    tags: dict[str, NutrientTag] = field(
        default_factory=lambda: {
            "Protein": NutrientTag("procnt", "Protein"),
            "Energy": NutrientTag("enerc", "Energy"),
            "Total lipid (fat)": NutrientTag("fat", "Fat"),
        }
    )
    calls: list[str] = field(default_factory=list)

    def lookup(self, name: str) -> NutrientTag | None:
        self.calls.append(name)
        return self.tags.get(name)


@dataclass
class FakeTextSource(TextSource):
    """In-memory text source that counts reads."""

    files: dict[str, str] = field(default_factory=dict)
    delay_seconds: float = 0
    reads: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def read_text(self, location: str) -> str:
        with self._lock:
            self.reads += 1
        if self.delay_seconds:
            time.sleep(self.delay_seconds)
        if location not in self.files:
            raise FileNotFoundError(location)
        return self.files[location]


def sample_profiles() -> list[FoodProfile]:
    return [
        FoodProfile("323505", "Kale, raw", "Vegetables and Vegetable Products"),
        FoodProfile(
            "323506", "Kale, frozen, unprepared", "Vegetables and Vegetable Products"
        ),
        FoodProfile("746767", "Cheese, swiss", "Dairy and Egg Products"),
        FoodProfile("746766", "Cheese, ricotta, whole milk", "Dairy and Egg Products"),
        FoodProfile("746768", "Cheese, cheddar", "Dairy and Egg Products"),
        FoodProfile("321358", "Hummus, commercial", "Legumes and Legume Products"),
    ]


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("foundation_foods")
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture
def foods() -> dict[str, Food]:
    return {
        "100": Food("100", "Kale, raw", "11"),
        "200": Food("200", " kale,   RAW ", "11"),
        "300": Food("300", "Cheese, swiss", "99"),
    }


@pytest.fixture
def categories() -> dict[str, FoodCategory]:
    return {"11": FoodCategory("11", "1100", "Vegetables and Vegetable Products")}


@pytest.fixture
def nutrients() -> dict[str, NutrientDefinition]:
    return {
        "1003": NutrientDefinition("1003", "procnt", "Protein", "Protein", "G"),
        "1008": NutrientDefinition("1008", "enerc", "Energy", "Energy", "KCAL"),
        "1062": NutrientDefinition("1062", "enerc", "Energy", "Energy", "kJ"),
    }


@pytest.fixture
def measurements() -> list[Measurement]:
    return [
        Measurement("200", "1003", 3.0),
        Measurement("100", "1003", 2.0),
        Measurement("100", "1008", 50.0),
        Measurement("200", "1062", 200.0),
        Measurement("300", "1003", 27.0),
        Measurement("100", "9999", 1.0),
        Measurement("555", "1003", 1.0),
    ]


@pytest.fixture
def nutrient_lookup() -> FakeNutrientLookup:
    return FakeNutrientLookup()


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "food.csv").write_text(FOOD_CSV, encoding="utf-8")
    (assets / "food_category.csv").write_text(FOOD_CATEGORY_CSV, encoding="utf-8")
    (assets / "nutrient.csv").write_text(NUTRIENT_CSV, encoding="utf-8")
    (assets / "food_nutrient.csv").write_text(FOOD_NUTRIENT_CSV, encoding="utf-8")
    (assets / "tagnames.csv").write_text(TAGNAMES_CSV, encoding="utf-8")
    return assets


@pytest.fixture
def settings(tmp_path: Path, assets_dir: Path) -> Settings:
    return Settings(assets_dir=assets_dir, index_csv=tmp_path / "out" / "index.csv")
