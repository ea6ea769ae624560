"""FastAPI dependencies."""

from fastapi import Request

from caselaw_proxy.config import Settings
from caselaw_proxy.services import OpinionSearchService


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_search_service(request: Request) -> OpinionSearchService:
    """Get a search service bound to the backend opened by the app lifespan."""
    return OpinionSearchService(request.app.state.search_client)
