"""Offline search backend serving a fixed set of landmark opinions.

Records are kept in CourtListener's result shape so they pass through the
same normalizer as live results.
"""

import logging
from datetime import date
from typing import Any

from caselaw_proxy.exceptions import UpstreamError

logger = logging.getLogger(__name__)

PAGE_SIZE = 20
SCOTUS = "Supreme Court of the United States"

SAMPLE_OPINIONS: list[dict[str, Any]] = [
    {
        "id": 1,
        "caseName": "Brown v. Board of Education",
        "citation": ["347 U.S. 483"],
        "court": SCOTUS,
        "court_id": "scotus",
        "dateFiled": "1954-05-17",
        "snippet": "Separate educational facilities are inherently unequal. Therefore, we hold "
        "that the plaintiffs and others similarly situated for whom the actions have been "
        "brought are, by reason of the segregation complained of, deprived of the equal "
        "protection of the laws guaranteed by the Fourteenth Amendment.",
        "absolute_url": "https://supreme.justia.com/cases/federal/us/347/483/",
    },
    {
        "id": 2,
        "caseName": "Obergefell v. Hodges",
        "citation": ["576 U.S. 644"],
        "court": SCOTUS,
        "court_id": "scotus",
        "dateFiled": "2015-06-26",
        "snippet": "The right to marry is a fundamental right inherent in the liberty of the "
        "person, and under the Due Process and Equal Protection Clauses of the Fourteenth "
        "Amendment couples of the same-sex may not be deprived of that right and that liberty.",
        "absolute_url": "https://supreme.justia.com/cases/federal/us/576/644/",
    },
    {
        "id": 3,
        "caseName": "Miranda v. Arizona",
        "citation": ["384 U.S. 436"],
        "court": SCOTUS,
        "court_id": "scotus",
        "dateFiled": "1966-06-13",
        "snippet": "The person in custody must, prior to interrogation, be clearly informed "
        "that he has the right to remain silent, and that anything he says will be used "
        "against him in court.",
        "absolute_url": "https://supreme.justia.com/cases/federal/us/384/436/",
    },
    {
        "id": 4,
        "caseName": "New York Times Co. v. Sullivan",
        "citation": ["376 U.S. 254"],
        "court": SCOTUS,
        "court_id": "scotus",
        "dateFiled": "1964-03-09",
        "snippet": "The constitutional guarantees require a federal rule that prohibits a "
        "public official from recovering damages for a defamatory falsehood relating to his "
        "official conduct unless he proves that the statement was made with actual malice.",
        "absolute_url": "https://supreme.justia.com/cases/federal/us/376/254/",
    },
    {
        "id": 5,
        "caseName": "Tinker v. Des Moines Independent Community School District",
        "citation": ["393 U.S. 503"],
        "court": SCOTUS,
        "court_id": "scotus",
        "dateFiled": "1969-02-24",
        "snippet": "It can hardly be argued that either students or teachers shed their "
        "constitutional rights to freedom of speech or expression at the schoolhouse gate.",
        "absolute_url": "https://supreme.justia.com/cases/federal/us/393/503/",
    },
    {
        "id": 6,
        "caseName": "Gideon v. Wainwright",
        "citation": ["372 U.S. 335"],
        "court": SCOTUS,
        "court_id": "scotus",
        "dateFiled": "1963-03-18",
        "snippet": "The right of one charged with crime to counsel may not be deemed "
        "fundamental and essential to fair trials in some countries, but it is in ours.",
        "absolute_url": "https://supreme.justia.com/cases/federal/us/372/335/",
    },
    {
        "id": 7,
        "caseName": "Texas v. Johnson",
        "citation": ["491 U.S. 397"],
        "court": SCOTUS,
        "court_id": "scotus",
        "dateFiled": "1989-06-21",
        "snippet": "If there is a bedrock principle underlying the First Amendment, it is that "
        "the government may not prohibit the expression of an idea simply because society "
        "finds the idea itself offensive or disagreeable.",
        "absolute_url": "https://supreme.justia.com/cases/federal/us/491/397/",
    },
    {
        "id": 8,
        "caseName": "Roe v. Wade",
        "citation": ["410 U.S. 113"],
        "court": SCOTUS,
        "court_id": "scotus",
        "dateFiled": "1973-01-22",
        "snippet": "This right of privacy, whether it be founded in the Fourteenth Amendment's "
        "concept of personal liberty and restrictions upon state action, is broad enough to "
        "encompass a woman's decision whether or not to terminate her pregnancy.",
        "absolute_url": "https://supreme.justia.com/cases/federal/us/410/113/",
    },
    {
        "id": 9,
        "caseName": "Loving v. Virginia",
        "citation": ["388 U.S. 1"],
        "court": SCOTUS,
        "court_id": "scotus",
        "dateFiled": "1967-06-12",
        "snippet": "Marriage is one of the basic civil rights of man, fundamental to our very "
        "existence and survival.",
        "absolute_url": "https://supreme.justia.com/cases/federal/us/388/1/",
    },
    {
        "id": 10,
        "caseName": "Mapp v. Ohio",
        "citation": ["367 U.S. 643"],
        "court": SCOTUS,
        "court_id": "scotus",
        "dateFiled": "1961-06-19",
        "snippet": "All evidence obtained by searches and seizures in violation of the "
        "Constitution is, by that same authority, inadmissible in a state court.",
        "absolute_url": "https://supreme.justia.com/cases/federal/us/367/643/",
    },
]


def _relevance(record: dict[str, Any], needle: str) -> int:
    return record["caseName"].lower().count(needle) + record["snippet"].lower().count(needle)


def _filed(record: dict[str, Any]) -> date:
    return date.fromisoformat(record["dateFiled"])


def _date_param(params: dict[str, str], name: str) -> date | None:
    value = params.get(name)
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise UpstreamError(
            status_code=400, response_text=f'{{"{name}":["Enter a valid date."]}}'
        ) from e


class SampleOpinionClient:
    """Drop-in replacement for CourtListenerClient that never touches the network."""

    origin = "https://www.courtlistener.com"

    def __init__(self, opinions: list[dict[str, Any]] | None = None):
        self.opinions = opinions if opinions is not None else SAMPLE_OPINIONS

    async def search(self, params: dict[str, str]) -> dict[str, Any]:
        """Filter, order and page the built-in opinions using upstream parameter names."""
        logger.info(f"Sample search with params: {params}")

        try:
            page = int(params.get("page", "1"))
        except ValueError as e:
            raise UpstreamError(status_code=404, response_text='{"detail":"Invalid page."}') from e
        if page < 1:
            raise UpstreamError(status_code=404, response_text='{"detail":"Invalid page."}')

        needle = params.get("q", "").strip().lower()
        matches = [
            r
            for r in self.opinions
            if needle in r["caseName"].lower() or needle in r["snippet"].lower()
        ]

        court = params.get("court", "").lower()
        if court:
            matches = [r for r in matches if r.get("court_id") == court]

        after = _date_param(params, "filed_after")
        if after:
            matches = [r for r in matches if _filed(r) >= after]
        before = _date_param(params, "filed_before")
        if before:
            matches = [r for r in matches if _filed(r) <= before]

        order_by = params.get("order_by", "score desc")
        if order_by == "dateFiled desc":
            matches.sort(key=_filed, reverse=True)
        elif order_by == "dateFiled asc":
            matches.sort(key=_filed)
        else:
            matches.sort(key=lambda r: _relevance(r, needle), reverse=True)

        start = (page - 1) * PAGE_SIZE
        return {
            "count": len(matches),
            "next": None,
            "previous": None,
            "results": matches[start : start + PAGE_SIZE],
        }
