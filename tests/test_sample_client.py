"""Tests for the offline sample backend."""

import pytest
from fastapi.testclient import TestClient

from caselaw_proxy.config import Settings
from caselaw_proxy.exceptions import UpstreamError
from caselaw_proxy.main import create_app
from caselaw_proxy.sample_client import SAMPLE_OPINIONS, SampleOpinionClient


@pytest.fixture
def client():
    app = create_app(Settings(_env_file=None, search_backend="sample", log_json=False))
    with TestClient(app) as c:
        yield c


def case_names(response):
    return [item["caseName"] for item in response.json()["items"]]


def test_query_matches_name_or_snippet(client):
    r = client.get("/api/search", params={"q": "fourteenth amendment"})
    assert r.status_code == 200
    assert case_names(r) == ["Brown v. Board of Education", "Obergefell v. Hodges", "Roe v. Wade"]
    assert r.json()["raw"] == {"count": 3, "next": None, "previous": None}


def test_items_are_normalized(client):
    r = client.get("/api/search", params={"q": "mapp"})
    assert r.json()["items"] == [
        {
            "id": 10,
            "caseName": "Mapp v. Ohio",
            "citation": "367 U.S. 643",
            "court": "Supreme Court of the United States",
            "date": "1961-06-19",
            "url": "https://supreme.justia.com/cases/federal/us/367/643/",
            "snippet": SAMPLE_OPINIONS[9]["snippet"],
        }
    ]


def test_sort_by_date(client):
    r = client.get("/api/search", params={"q": "fourteenth amendment", "sort": "date-desc"})
    assert case_names(r) == ["Obergefell v. Hodges", "Roe v. Wade", "Brown v. Board of Education"]


def test_year_range(client):
    r = client.get(
        "/api/search",
        params={"q": "fourteenth amendment", "year_start": "1960", "year_end": "1979"},
    )
    assert case_names(r) == ["Roe v. Wade"]


def test_court_filter(client):
    assert case_names(client.get("/api/search", params={"q": "v.", "court": "ca9"})) == []
    assert len(case_names(client.get("/api/search", params={"q": "v.", "court": "scotus"}))) == 10


def test_invalid_page_is_upstream_error(client):
    r = client.get("/api/search", params={"q": "speech", "page": "abc"})
    assert r.status_code == 404
    assert r.json()["error"] == "Upstream error"


def test_invalid_year_is_upstream_error(client):
    r = client.get("/api/search", params={"q": "speech", "year_start": "19x5"})
    assert r.status_code == 400
    assert r.json()["error"] == "Upstream error"


def test_missing_query_still_rejected(client):
    r = client.get("/api/search")
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_past_last_page_is_empty():
    data = await SampleOpinionClient().search({"q": "", "page": "2"})
    assert data["count"] == 10
    assert data["results"] == []


@pytest.mark.asyncio
async def test_page_zero_rejected():
    with pytest.raises(UpstreamError):
        await SampleOpinionClient().search({"q": "", "page": "0"})
