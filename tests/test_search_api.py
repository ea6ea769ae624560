"""Tests for the search endpoint against a mocked CourtListener."""

from unittest.mock import patch

import httpx
import pytest
from fastapi.testclient import TestClient

from caselaw_proxy.config import Settings
from caselaw_proxy.main import create_app
from caselaw_proxy.services import OpinionSearchService

UPSTREAM_PAGE = {
    "count": 2345,
    "next": "https://www.courtlistener.com/api/rest/v3/search/?page=2&q=first+amendment",
    "previous": None,
    "results": [
        {
            "id": 108713,
            "caseName": "Tinker v. Des Moines Independent Community School District",
            "citation": ["393 U.S. 503"],
            "court": "Supreme Court of the United States",
            "court_citation_string": "SCOTUS",
            "dateFiled": "1969-02-24",
            "absolute_url": "/opinion/108713/tinker-v-des-moines-independent-community-school-district/",
            "snippet": "shed their constitutional rights to freedom of speech",
        },
        {
            "id": 2,
            "caseNameShort": "Johnson",
            "citesTo": [{"cite": "491 U.S. 397"}],
            "court_str": "scotus",
            "dateArgued": "1989-03-21",
        },
    ],
}


class FakeUpstream:
    """httpx.MockTransport handler recording every outbound request."""

    def __init__(self, status_code=200, json_body=None, text=None, exc=None):
        self.status_code = status_code
        self.json_body = json_body
        self.text = text
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.json_body is not None:
            return httpx.Response(self.status_code, json=self.json_body)
        return httpx.Response(self.status_code, text=self.text or "")


@pytest.fixture
def settings():
    return Settings(_env_file=None, log_json=False, search_backend="courtlistener")


@pytest.fixture
def upstream():
    return FakeUpstream(json_body=UPSTREAM_PAGE)


@pytest.fixture
def client(settings, upstream):
    """Test client whose upstream calls go to ``upstream``."""
    app = create_app(settings, transport=httpx.MockTransport(upstream))
    with TestClient(app) as c:
        yield c


@pytest.mark.parametrize("query", ["", "?q=", "?q=%20%20%20", "?page=2"])
def test_missing_query_returns_400_without_upstream_call(client, upstream, query):
    r = client.get(f"/api/search{query}")
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required 'q' query parameter."}
    assert r.headers["content-type"] == "application/json"
    assert len(upstream.requests) == 0


def test_search_returns_normalized_items(client):
    r = client.get("/api/search", params={"q": "first amendment"})
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/json"
    data = r.json()

    assert data["items"] == [
        {
            "id": 108713,
            "caseName": "Tinker v. Des Moines Independent Community School District",
            "citation": "393 U.S. 503",
            "court": "Supreme Court of the United States",
            "date": "1969-02-24",
            "url": "https://www.courtlistener.com/opinion/108713/"
            "tinker-v-des-moines-independent-community-school-district/",
            "snippet": "shed their constitutional rights to freedom of speech",
        },
        {
            "id": 2,
            "caseName": "Johnson",
            "citation": "491 U.S. 397",
            "court": "scotus",
            "date": "1989-03-21",
            "url": None,
            "snippet": None,
        },
    ]


def test_pagination_passed_through(client):
    data = client.get("/api/search", params={"q": "first amendment"}).json()
    assert data["raw"] == {
        "count": UPSTREAM_PAGE["count"],
        "next": UPSTREAM_PAGE["next"],
        "previous": UPSTREAM_PAGE["previous"],
    }


def test_outbound_request(client, upstream, settings):
    """Test the fixed parameters and client identifier sent upstream."""
    client.get("/api/search", params={"q": "first amendment"})

    assert len(upstream.requests) == 1
    sent = upstream.requests[0]
    assert sent.method == "GET"
    assert sent.url.host == "www.courtlistener.com"
    assert sent.url.path == "/api/rest/v3/search/"
    assert sent.url.params["q"] == "first amendment"
    assert sent.url.params["type"] == "o"
    assert sent.url.params["order_by"] == "score desc"
    assert sent.url.params["page"] == "1"
    assert sent.headers["user-agent"] == settings.courtlistener_user_agent


def test_query_trimmed_and_page_forwarded_raw(client, upstream):
    client.get("/api/search", params={"q": "  due process ", "page": "not-a-number"})
    sent = upstream.requests[0]
    assert sent.url.params["q"] == "due process"
    assert sent.url.params["page"] == "not-a-number"


def test_filters_forwarded(client, upstream):
    client.get(
        "/api/search",
        params={
            "q": "voting rights",
            "court": "ca5",
            "year_start": "1965",
            "year_end": "1975",
            "sort": "date-desc",
        },
    )
    params = upstream.requests[0].url.params
    assert params["court"] == "ca5"
    assert params["filed_after"] == "1965-01-01"
    assert params["filed_before"] == "1975-12-31"
    assert params["order_by"] == "dateFiled desc"


def test_blank_filters_not_forwarded(client, upstream):
    client.get("/api/search", params={"q": "voting rights", "court": "", "year_end": ""})
    params = upstream.requests[0].url.params
    assert "court" not in params
    assert "filed_before" not in params


def test_same_request_is_idempotent(client):
    first = client.get("/api/search", params={"q": "first amendment", "page": "1"})
    second = client.get("/api/search", params={"q": "first amendment", "page": "1"})
    assert first.content == second.content


def test_upstream_error_status_propagated(client, upstream):
    upstream.status_code = 503
    upstream.json_body = None
    upstream.text = "rate limited"

    r = client.get("/api/search", params={"q": "first amendment"})
    assert r.status_code == 503
    assert r.json() == {"error": "Upstream error", "details": "rate limited"}
    assert r.headers["content-type"] == "application/json"


def test_upstream_error_details_truncated(client, upstream):
    upstream.status_code = 502
    upstream.json_body = None
    upstream.text = "x" * 5000

    r = client.get("/api/search", params={"q": "first amendment"})
    assert r.status_code == 502
    assert r.json()["details"] == "x" * 4000


def test_network_failure_returns_500(client, upstream):
    upstream.exc = httpx.ConnectError("Connection reset by peer")

    r = client.get("/api/search", params={"q": "first amendment"})
    assert r.status_code == 500
    assert r.json() == {"error": "Unexpected error", "details": "Connection reset by peer"}


def test_malformed_json_returns_500(client, upstream):
    upstream.json_body = None
    upstream.text = "<html>not json</html>"

    r = client.get("/api/search", params={"q": "first amendment"})
    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "Unexpected error"
    assert body["details"]
    assert "items" not in body


def test_unexpected_exception_returns_500(client):
    with patch.object(OpinionSearchService, "search", side_effect=RuntimeError("boom")):
        r = client.get("/api/search", params={"q": "first amendment"})
    assert r.status_code == 500
    assert r.json() == {"error": "Unexpected error", "details": "boom"}


def test_null_results_yield_empty_items(client, upstream):
    upstream.json_body = {"count": 0, "next": None, "previous": None, "results": None}

    r = client.get("/api/search", params={"q": "nothing matches"})
    assert r.status_code == 200
    assert r.json() == {"items": [], "raw": {"count": 0, "next": None, "previous": None}}


def test_pagination_values_copied_verbatim(client, upstream):
    """Test that odd upstream pagination values are not coerced or rejected."""
    upstream.json_body = {
        "count": "12",
        "next": 2,
        "previous": {"cursor": "abc"},
        "results": [],
    }

    r = client.get("/api/search", params={"q": "first amendment"})
    assert r.status_code == 200
    assert r.json()["raw"] == {"count": "12", "next": 2, "previous": {"cursor": "abc"}}


def test_array_body_yields_empty_items(client, upstream):
    upstream.json_body = [{"caseName": "Stray"}]

    r = client.get("/api/search", params={"q": "first amendment"})
    assert r.status_code == 200
    assert r.json() == {"items": [], "raw": {"count": None, "next": None, "previous": None}}


def test_non_object_results_skipped(client, upstream):
    upstream.json_body = {
        "count": 3,
        "next": None,
        "previous": None,
        "results": [None, "junk", {"caseNameShort": "Gault"}],
    }

    r = client.get("/api/search", params={"q": "juvenile"})
    assert r.status_code == 200
    assert [item["caseName"] for item in r.json()["items"]] == ["Gault"]
    assert r.json()["raw"]["count"] == 3


def test_netlify_function_path(client):
    r = client.get("/.netlify/functions/search", params={"q": "first amendment"})
    assert r.status_code == 200
    assert len(r.json()["items"]) == 2


def test_request_id_header(client):
    r = client.get("/api/search", params={"q": "first amendment"})
    assert r.headers.get("x-request-id")


def test_cors_headers(client):
    r = client.get(
        "/api/search",
        params={"q": "first amendment"},
        headers={"Origin": "https://civil-rights.example.org"},
    )
    assert r.headers["access-control-allow-origin"] == "*"
