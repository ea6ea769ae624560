"""Pydantic models for data structures."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SearchRequest(BaseModel):
    """Validated search request as received from the browser."""

    query: str = Field(min_length=1, description="Free-text query, already trimmed")
    page: str = Field(default="1", description="Upstream page number, forwarded as-is")
    court: str | None = Field(default=None, description="CourtListener court id filter")
    year_start: str | None = Field(default=None, description="Earliest filing year")
    year_end: str | None = Field(default=None, description="Latest filing year")
    sort: Literal["relevance", "date-desc", "date-asc"] = Field(
        default="relevance", description="Result ordering"
    )


class UpstreamResult(BaseModel):
    """One CourtListener search hit; every field is optional and extras are kept."""

    model_config = ConfigDict(extra="allow")

    id: Any = None
    caseName: Any = None
    caseNameShort: Any = None
    caption: Any = None
    citation: Any = None
    citesTo: Any = None
    court_citation: Any = None
    court: Any = None
    court_str: Any = None
    dateFiled: Any = None
    dateArgued: Any = None
    dateModified: Any = None
    absolute_url: Any = None
    snippet: Any = None


class UpstreamPage(BaseModel):
    """A page of CourtListener search results."""

    model_config = ConfigDict(extra="allow")

    count: Any = None
    next: Any = None
    previous: Any = None
    results: list[UpstreamResult] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _non_object_body(cls, data: Any) -> Any:
        # A body that is not a JSON object carries no results
        return data if isinstance(data, dict) else {}

    @field_validator("results", mode="before")
    @classmethod
    def _object_results(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [entry for entry in value if isinstance(entry, dict)]


class NormalizedItem(BaseModel):
    """Search result in the stable shape the UI renders."""

    model_config = ConfigDict(populate_by_name=True)

    id: Any = None
    case_name: str = Field(default="Untitled", alias="caseName")
    citation: str | None = None
    court: str | None = None
    date: str | None = None
    url: str | None = None
    snippet: str | None = None


class Pagination(BaseModel):
    """Upstream pagination metadata, passed through untouched."""

    count: Any = None
    next: Any = None
    previous: Any = None


class SearchResponse(BaseModel):
    """Search response data."""

    items: list[NormalizedItem] = Field(default_factory=list)
    raw: Pagination = Field(default_factory=Pagination)


class ErrorResponse(BaseModel):
    """JSON error body."""

    error: str
    details: str | None = None
