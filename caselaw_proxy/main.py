"""FastAPI application serving the opinion search proxy."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
from fastapi import APIRouter, Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from caselaw_proxy.config import Settings, get_settings
from caselaw_proxy.courtlistener_client import CourtListenerClient
from caselaw_proxy.dependencies import get_app_settings, get_search_service
from caselaw_proxy.exceptions import ConfigurationError, UpstreamError, ValidationError
from caselaw_proxy.middleware.request_logging import RequestLoggingMiddleware
from caselaw_proxy.models import ErrorResponse, SearchResponse
from caselaw_proxy.sample_client import SampleOpinionClient
from caselaw_proxy.services import OpinionSearchService, build_search_request
from caselaw_proxy.utils.logging import setup_logging

logger = logging.getLogger(__name__)

router = APIRouter()


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    """JSON error body; ``details`` is omitted when there are none."""
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@router.get("/api/search", response_model=SearchResponse)
@router.get("/.netlify/functions/search", response_model=SearchResponse, include_in_schema=False)
async def search_opinions(
    q: str | None = Query(default=None, description="Free-text search query"),
    page: str | None = Query(default=None, description="Result page, defaults to 1"),
    court: str | None = Query(default=None, description="CourtListener court id"),
    year_start: str | None = Query(default=None, description="Earliest filing year"),
    year_end: str | None = Query(default=None, description="Latest filing year"),
    sort: str | None = Query(default=None, description="relevance, date-desc or date-asc"),
    service: OpinionSearchService = Depends(get_search_service),
    settings: Settings = Depends(get_app_settings),
) -> Any:
    """Search CourtListener opinions and return UI-ready results."""
    try:
        search_request = build_search_request(q, page, court, year_start, year_end, sort)
        return await service.search(search_request)
    except ValidationError as e:
        logger.warning(f"Rejected search request: {e}")
        return error_response(e.status_code, str(e))
    except UpstreamError as e:
        logger.warning(
            f"CourtListener API error {e.status_code}",
            extra={"upstream_status": e.status_code},
        )
        return error_response(
            e.status_code, "Upstream error", e.response_text[: settings.error_details_limit]
        )
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return error_response(500, "Unexpected error", str(e))


@router.get("/health")
async def health_check(settings: Settings = Depends(get_app_settings)) -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "caselaw-proxy",
        "version": settings.app_version,
        "backend": settings.search_backend,
    }


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use instead of the environment
        transport: Optional httpx transport for the upstream client

    Raises:
        ConfigurationError: When the upstream URL is unusable
    """
    settings = settings or get_settings()
    if not settings.courtlistener_base_url.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"COURTLISTENER_BASE_URL must be an http(s) URL, got {settings.courtlistener_base_url!r}"
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(settings.log_level, settings.log_json, settings.log_file)

        if settings.search_backend == "sample":
            logger.info("Serving built-in sample opinions")
            app.state.search_client = SampleOpinionClient()
            yield
            return

        async with httpx.AsyncClient(
            timeout=settings.upstream_timeout,
            transport=transport,
            follow_redirects=True,
        ) as http_client:
            app.state.search_client = CourtListenerClient(
                http_client,
                base_url=settings.courtlistener_base_url,
                search_path=settings.courtlistener_search_path,
                user_agent=settings.courtlistener_user_agent,
            )
            logger.info(f"Proxying searches to {app.state.search_client.search_url}")
            yield

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        description="Civil-rights opinion search backed by CourtListener",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    """Run the development server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("caselaw_proxy.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
