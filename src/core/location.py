"""
Shareable location string mirroring the live query, e.g.
``itunes-search://app/?search=daft%20punk``. Opening the app with such a
location (or restoring the last one) reproduces the same search.
"""
from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import parse_qs, quote, urlsplit

BASE_LOCATION = "itunes-search://app/"
SEARCH_PARAM = "search"


def location_for_query(query: str) -> str:
    if not query:
        return BASE_LOCATION
    return f"{BASE_LOCATION}?{SEARCH_PARAM}={quote(query, safe='')}"


def query_from_location(location: str | None) -> str:
    if not location:
        return ""
    query_string = urlsplit(location).query
    if not query_string and location.startswith("?"):
        query_string = location[1:]
    values = parse_qs(query_string, keep_blank_values=True).get(SEARCH_PARAM)
    return values[0] if values else ""


def has_search_param(location: str) -> bool:
    query_string = urlsplit(location).query or (location[1:] if location.startswith("?") else "")
    return SEARCH_PARAM in parse_qs(query_string, keep_blank_values=True)


def location_from_argv(args: Iterable[str]) -> Optional[str]:
    for arg in args:
        if arg and has_search_param(arg):
            return arg
    return None
