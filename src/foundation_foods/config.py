"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    assets_dir: Path = Path("assets")
    food_csv: str = "food.csv"
    food_category_csv: str = "food_category.csv"
    nutrient_csv: str = "nutrient.csv"
    food_nutrient_csv: str = "food_nutrient.csv"
    tagnames_source: str = "tagnames.csv"
    index_csv: Path = Path("index.csv")
    corpus_source: str | None = None
    http_timeout_seconds: float = 30
    exclude_derived_nutrients: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def asset_location(self, name: str) -> str:
        """Resolve an asset name against the assets directory, keeping URLs."""
        if name.startswith(("http://", "https://")):
            return name
        return str(self.assets_dir / name)

    def corpus_location(self) -> str:
        """Return where the composition table is loaded from."""
        return self.corpus_source or str(self.index_csv)
