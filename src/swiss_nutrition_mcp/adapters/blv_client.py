"""Swiss Food Composition Database (BLV) API client."""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from swiss_nutrition_mcp.domain.errors import NotFoundError, UpstreamError

DEFAULT_BASE_URL = (
    "https://api.webapp.prod.blv.foodcase-services.com"
    "/BLV_WebApp_WS/webresources/BLV-api"
)

_logger = logging.getLogger(__name__)


class NutritionApiClient(Protocol):
    """Interface for Swiss Nutrition Database API interactions."""

    async def get_sets(self, lang: str = "en") -> list[dict[str, object]]:
        """Return the component sets."""

    async def get_food_values(
        self, dbid: int, component_set_id: int, lang: str = "en"
    ) -> list[dict[str, object]]:
        """Return the values of a food for one component set."""

    async def get_top_categories(self, lang: str = "en") -> list[dict[str, object]]:
        """Return the top-level food categories."""

    async def get_subcategories(
        self, category_id: int, lang: str = "en"
    ) -> list[dict[str, object]]:
        """Return the subcategories of a top-level category."""

    async def search_foods(  # noqa: PLR0913
        self,
        search: str | None = None,
        *,
        food_type: bool | None = None,
        category: int | None = None,
        lang: str = "en",
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict[str, object]]:
        """Search foods and return raw API data."""

    async def get_categorized_foods(  # noqa: PLR0913
        self,
        search: str | None = None,
        *,
        food_type: bool | None = None,
        category: int | None = None,
        lang: str = "en",
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict[str, object]]:
        """Return foods grouped by category with match counts."""

    async def get_food_dbid(self, food_id: int) -> int:
        """Translate a public food id into the internal DBID."""

    async def get_food(self, dbid: int, lang: str = "en") -> dict[str, object]:
        """Fetch a food by DBID."""

    async def get_ingredients(
        self, dbid: int, lang: str = "en"
    ) -> list[dict[str, object]]:
        """Return the ingredients of a recipe food."""


@dataclass
class HttpxNutritionApiClient(NutritionApiClient):
    """HTTPX-backed Swiss Nutrition Database client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(
        cls, base_url: str = DEFAULT_BASE_URL, timeout_seconds: float = 10
    ) -> "HttpxNutritionApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                }
            ),
            timeout_seconds=timeout_seconds,
        )

    async def get_sets(self, lang: str = "en") -> list[dict[str, object]]:
        return await self._get("/sets", {"lang": lang})

    async def get_food_values(
        self, dbid: int, component_set_id: int, lang: str = "en"
    ) -> list[dict[str, object]]:
        return await self._get(
            "/values",
            {"DBID": dbid, "componentsetid": component_set_id, "lang": lang},
        )

    async def get_top_categories(self, lang: str = "en") -> list[dict[str, object]]:
        return await self._get("/topcategories", {"lang": lang})

    async def get_subcategories(
        self, category_id: int, lang: str = "en"
    ) -> list[dict[str, object]]:
        return await self._get(f"/subcategories/{category_id}", {"lang": lang})

    async def search_foods(  # noqa: PLR0913
        self,
        search: str | None = None,
        *,
        food_type: bool | None = None,
        category: int | None = None,
        lang: str = "en",
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict[str, object]]:
        return await self._get(
            "/foods",
            _search_params(search, food_type, category, lang, limit, offset),
        )

    async def get_categorized_foods(  # noqa: PLR0913
        self,
        search: str | None = None,
        *,
        food_type: bool | None = None,
        category: int | None = None,
        lang: str = "en",
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict[str, object]]:
        return await self._get(
            "/categorizedfoods",
            _search_params(search, food_type, category, lang, limit, offset),
        )

    async def get_food_dbid(self, food_id: int) -> int:
        payload = await self._get(f"/fooddbid/{food_id}")
        try:
            return int(payload)
        except (TypeError, ValueError) as exc:
            raise UpstreamError(
                f"Swiss Nutrition API error (n/a): unexpected DBID {payload!r}"
            ) from exc

    async def get_food(self, dbid: int, lang: str = "en") -> dict[str, object]:
        return await self._get(f"/food/{dbid}", {"lang": lang})

    async def get_ingredients(
        self, dbid: int, lang: str = "en"
    ) -> list[dict[str, object]]:
        return await self._get("/ingredients", {"DBID": dbid, "lang": lang})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, path: str, params: dict[str, object] | None = None) -> Any:
        """GET a JSON document, raising classified errors on failure."""
        url = f"{self.base_url}{path}"
        try:
            response = await self.http_client.get(
                url,
                params={k: v for k, v in (params or {}).items() if v is not None},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise _status_error(exc) from exc
        except httpx.HTTPError as exc:
            _logger.warning(
                "Swiss Nutrition API request failed: path=%s: %s", path, exc
            )
            raise UpstreamError(f"Swiss Nutrition API error (n/a): {exc}") from exc
        except ValueError as exc:
            raise UpstreamError(
                f"Swiss Nutrition API error (n/a): invalid JSON from {path}"
            ) from exc


def _search_params(  # noqa: PLR0913
    search: str | None,
    food_type: bool | None,
    category: int | None,
    lang: str,
    limit: int,
    offset: int,
) -> dict[str, object]:
    """Build query parameters shared by the food search endpoints."""
    return {
        "search": search,
        "type": None if food_type is None else str(food_type).lower(),
        "category": category,
        "lang": lang,
        "limit": limit,
        "offset": offset,
    }


def _status_error(exc: httpx.HTTPStatusError) -> UpstreamError | NotFoundError:
    """Convert an HTTP status failure into a classified error."""
    status_code = exc.response.status_code
    message = str(exc)
    try:
        body = exc.response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        message = str(body["message"])
    text = f"Swiss Nutrition API error ({status_code}): {message}"
    if status_code == httpx.codes.NOT_FOUND:
        return NotFoundError(text)
    return UpstreamError(text)
