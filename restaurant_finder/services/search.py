"""Natural-language restaurant search backed by a structured-output LLM agent."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_ai import Agent

from restaurant_finder.agents.model_factory import build_model_spec
from restaurant_finder.config import FinderSettings
from restaurant_finder.domain.models import Restaurant
from restaurant_finder.i18n import LocalizationTable
from restaurant_finder.logging import logger
from restaurant_finder.services.exceptions import ProviderError

SEARCH_INSTRUCTIONS = (
    "You are a local food guide. Given a location, recommend real, currently operating "
    "restaurants close to it. For every restaurant return its name, its cuisine type and "
    "a short, appealing description of one or two sentences. "
    "Never invent places you are not confident exist."
)


@dataclass(slots=True)
class RestaurantSearchService:
    """Finds restaurants near coordinates or a free-text place.

    Either the agent output validates as a list of ``Restaurant`` or the call
    raises ``ProviderError``; callers never see partial records.
    """

    agent: Agent[None, list[Restaurant]]
    localization: LocalizationTable
    max_results: int = 10

    @classmethod
    def build(
        cls,
        settings: FinderSettings,
        localization: LocalizationTable | None = None,
    ) -> RestaurantSearchService:
        agent = Agent[
            None,
            list[Restaurant],
        ](
            model=build_model_spec(settings.llm),
            output_type=list[Restaurant],
            instructions=SEARCH_INSTRUCTIONS,
        )
        return cls(
            agent=agent,
            localization=localization
            or LocalizationTable(default_locale=settings.default_language),
            max_results=settings.max_results,
        )

    async def by_coordinates(
        self, latitude: float, longitude: float, language_code: str
    ) -> list[Restaurant]:
        place = f"latitude {latitude:.6f}, longitude {longitude:.6f}"
        return await self._search(place, language_code, mode="coordinates")

    async def by_query(self, location: str, language_code: str) -> list[Restaurant]:
        return await self._search(location.strip(), language_code, mode="query")

    def build_prompt(self, place: str, language_code: str) -> str:
        language = self.localization.language(language_code)
        return (
            f"Find up to {self.max_results} restaurants near {place}. "
            f"Write the cuisine and description fields in {language.name} "
            f"(language code '{language.code}')."
        )

    async def _search(self, place: str, language_code: str, *, mode: str) -> list[Restaurant]:
        prompt = self.build_prompt(place, language_code)
        logger.info("restaurant_search_request", mode=mode, language=language_code)
        try:
            result = await self.agent.run(prompt)
        except Exception as exc:
            raise ProviderError(f"Restaurant search failed ({mode}): {exc}") from exc
        restaurants = list(result.output)
        logger.info("restaurant_search_response", mode=mode, count=len(restaurants))
        return restaurants


__all__ = ["RestaurantSearchService", "SEARCH_INSTRUCTIONS"]
