"""Business logic for opinion searches."""

import logging
from typing import Any, Protocol

from caselaw_proxy.exceptions import ValidationError
from caselaw_proxy.models import Pagination, SearchRequest, SearchResponse, UpstreamPage
from caselaw_proxy.normalize import normalize_result

logger = logging.getLogger(__name__)

MISSING_QUERY_MESSAGE = "Missing required 'q' query parameter."

OPINION_TYPE = "o"
ORDER_BY = {
    "relevance": "score desc",
    "date-desc": "dateFiled desc",
    "date-asc": "dateFiled asc",
}


class SearchBackend(Protocol):
    """Anything that can answer a CourtListener-style search."""

    origin: str

    async def search(self, params: dict[str, str]) -> Any: ...


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def build_search_request(
    q: str | None,
    page: str | None = None,
    court: str | None = None,
    year_start: str | None = None,
    year_end: str | None = None,
    sort: str | None = None,
) -> SearchRequest:
    """
    Validate raw query parameters into a SearchRequest.

    Raises:
        ValidationError: When ``q`` is absent or blank
    """
    query = (q or "").strip()
    if not query:
        raise ValidationError(MISSING_QUERY_MESSAGE)

    return SearchRequest(
        query=query,
        page="1" if page is None else page,
        court=_blank_to_none(court),
        year_start=_blank_to_none(year_start),
        year_end=_blank_to_none(year_end),
        sort=sort if sort in ORDER_BY else "relevance",
    )


class OpinionSearchService:
    """Service for searching opinions and shaping results for the UI."""

    def __init__(self, client: SearchBackend):
        self.client = client

    @staticmethod
    def build_params(request: SearchRequest) -> dict[str, str]:
        """Translate a SearchRequest into upstream query parameters."""
        params = {
            "q": request.query,
            "type": OPINION_TYPE,
            "order_by": ORDER_BY[request.sort],
            "page": request.page,
        }
        # Filters are only sent when the caller asked for them
        if request.court:
            params["court"] = request.court
        if request.year_start:
            params["filed_after"] = f"{request.year_start}-01-01"
        if request.year_end:
            params["filed_before"] = f"{request.year_end}-12-31"
        return params

    async def search(self, request: SearchRequest) -> SearchResponse:
        """
        Search opinions and return normalized items with upstream pagination.

        Raises:
            UpstreamError: On non-success upstream responses
            NetworkError: On transport errors
        """
        data = await self.client.search(self.build_params(request))
        page = UpstreamPage.model_validate(data)

        items = [normalize_result(result, self.client.origin) for result in page.results]
        logger.info(f"Search successful: {len(items)} items found for query '{request.query}'")

        return SearchResponse(
            items=items,
            raw=Pagination(count=page.count, next=page.next, previous=page.previous),
        )
