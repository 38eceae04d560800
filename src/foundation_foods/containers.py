"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from foundation_foods.adapters.text_source import HttpxTextSource, TextSource
from foundation_foods.app_logging import configure_logging
from foundation_foods.config import Settings
from foundation_foods.domain.nutrients import NutrientCodeReport
from foundation_foods.services.aggregation import CompositionTable
from foundation_foods.services.build import build_foundation_foods, build_nutrient_report
from foundation_foods.services.foods import FoodSearchService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    text_source: TextSource
    search_service: FoodSearchService
    close_resources: Callable[[], None]

    def build(self) -> CompositionTable:
        """Run the offline aggregation and write the composition table."""
        configure_logging()
        return build_foundation_foods(self.settings, self.text_source)

    def nutrient_report(self) -> NutrientCodeReport:
        """Audit nutrient code assignments."""
        configure_logging()
        return build_nutrient_report(self.settings, self.text_source)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    text_source = HttpxTextSource.create(timeout=resolved_settings.http_timeout_seconds)
    search_service = FoodSearchService(
        source=resolved_settings.corpus_location(),
        text_source=text_source,
    )

    def close_resources() -> None:
        text_source.close()

    return AppContainer(
        settings=resolved_settings,
        text_source=text_source,
        search_service=search_service,
        close_resources=close_resources,
    )
