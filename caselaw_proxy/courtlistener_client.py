"""CourtListener search API client."""

import logging
from typing import Any

import httpx

from caselaw_proxy.exceptions import NetworkError, UpstreamError

logger = logging.getLogger(__name__)


class CourtListenerClient:
    """Async client for the CourtListener REST search endpoint.

    The underlying ``httpx.AsyncClient`` is owned by the caller, which opens
    and closes it around the lifetime of the process.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = "https://www.courtlistener.com",
        search_path: str = "/api/rest/v3/search/",
        user_agent: str = "civil-rights-search (opinion search proxy)",
    ):
        self.http_client = http_client
        self.origin = base_url.rstrip("/")
        self.search_url = f"{self.origin}/{search_path.lstrip('/')}"
        self.user_agent = user_agent

    def _headers(self) -> dict[str, str]:
        """Get request headers identifying this client."""
        return {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    async def search(self, params: dict[str, str]) -> Any:
        """
        Run one search against CourtListener.

        Args:
            params: Query parameters, sent verbatim

        Returns:
            Decoded JSON body

        Raises:
            UpstreamError: On a non-success status
            NetworkError: On transport errors
        """
        logger.info(f"CourtListener request: {self.search_url} with params: {params}")

        try:
            response = await self.http_client.get(
                self.search_url, params=params, headers=self._headers()
            )
        except httpx.RequestError as e:
            logger.error(f"Network error connecting to CourtListener: {e}")
            raise NetworkError(str(e)) from e

        logger.debug(f"CourtListener response: {response.status_code}")

        if not response.is_success:
            logger.warning(
                f"CourtListener error {response.status_code}: "
                f"URL={self.search_url}, Params={params}, Response={response.text[:500]}"
            )
            raise UpstreamError(status_code=response.status_code, response_text=response.text)

        return response.json()
