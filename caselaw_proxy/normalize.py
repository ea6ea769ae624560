"""Normalize CourtListener search hits to the UI result shape.

Each output field is filled from an ordered chain of candidate key paths.
The first candidate holding a value wins; a path that is absent, null or an
empty list counts as missing; for case names a blank string does too. Keeping the chains as data means upstream
schema drift is a one-line change here.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from caselaw_proxy.models import NormalizedItem, UpstreamResult

FieldPath = tuple[str | int, ...]

CASE_NAME_FIELDS: tuple[FieldPath, ...] = (
    ("caseName",),
    ("caseNameShort",),
    ("caption",),
)
CITATION_FIELDS: tuple[FieldPath, ...] = (
    ("citation",),
    ("citesTo", 0, "cite"),
)
COURT_FIELDS: tuple[FieldPath, ...] = (
    ("court_citation",),
    ("court",),
    ("court_str",),
)
DATE_FIELDS: tuple[FieldPath, ...] = (
    ("dateFiled",),
    ("dateArgued",),
    ("dateModified",),
)
URL_FIELD: FieldPath = ("absolute_url",)
SNIPPET_FIELD: FieldPath = ("snippet",)

UNTITLED = "Untitled"


def safe_get(data: Any, *keys: str | int, default: Any = None) -> Any:
    """Walk nested dicts and lists, returning ``default`` at the first gap."""
    cur = data
    for k in keys:
        if isinstance(k, int):
            if isinstance(cur, list) and -len(cur) <= k < len(cur):
                cur = cur[k]
            else:
                return default
        elif isinstance(cur, Mapping) and k in cur:
            cur = cur[k]
        else:
            return default
    return cur


def to_text(value: Any) -> str | None:
    """Coerce an upstream value to a display string, or None when it is missing."""
    if value is None:
        return None
    if isinstance(value, list):
        # CourtListener returns parallel citations as a list
        joined = ", ".join(str(item) for item in value if item not in (None, ""))
        return joined or None
    if isinstance(value, Mapping):
        return to_text(value.get("name"))
    return str(value)


def first_present(
    record: Mapping[str, Any],
    candidates: tuple[FieldPath, ...],
    skip_blank: bool = False,
) -> str | None:
    """Return the first candidate path that yields text.

    With ``skip_blank`` a whitespace-only string also counts as missing.
    """
    for path in candidates:
        text = to_text(safe_get(record, *path))
        if text is None or (skip_blank and not text.strip()):
            continue
        return text
    return None


def absolute_url(path: Any, origin: str) -> str | None:
    """Resolve a canonical path against the upstream origin.

    Full http(s) URLs are kept; every other value, protocol-relative
    paths included, is anchored on ``origin``.
    """
    if not path or not isinstance(path, str):
        return None
    if urlsplit(path).scheme in ("http", "https"):
        return path
    return f"{origin.rstrip('/')}/{path.lstrip('/')}"


def normalize_result(result: UpstreamResult | Mapping[str, Any], origin: str) -> NormalizedItem:
    """Map one upstream hit to a NormalizedItem with every field present."""
    record = result.model_dump() if isinstance(result, UpstreamResult) else dict(result)

    return NormalizedItem(
        id=record.get("id"),
        case_name=first_present(record, CASE_NAME_FIELDS, skip_blank=True) or UNTITLED,
        citation=first_present(record, CITATION_FIELDS),
        court=first_present(record, COURT_FIELDS),
        date=first_present(record, DATE_FIELDS),
        url=absolute_url(safe_get(record, *URL_FIELD), origin),
        snippet=to_text(safe_get(record, *SNIPPET_FIELD)),
    )
