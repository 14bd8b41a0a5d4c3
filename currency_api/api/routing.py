"""
Path parsing for rate lookups.

Accepts ``/<YYYY-MM-DD>`` and ``/<YYYY-MM-DD>/<CCY>`` (one optional trailing
slash). Currency codes are upper-cased so ``/2024-01-15/usd`` finds USD.
"""

import re
from dataclasses import dataclass

DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
CURRENCY_RE = re.compile(r"[A-Za-z]{3}")


@dataclass(frozen=True)
class RouteMatch:
    date: str
    currency: str | None = None


@dataclass(frozen=True)
class MalformedRoute:
    reason: str


def is_valid_date(value: str) -> bool:
    """Shape check only; impossible dates like 2024-02-30 are simply not in the store."""
    return DATE_RE.fullmatch(value) is not None


def is_valid_currency(value: str) -> bool:
    return CURRENCY_RE.fullmatch(value) is not None


def parse_rate_path(path: str) -> RouteMatch | MalformedRoute:
    if not path.startswith("/"):
        return MalformedRoute("path must be absolute")

    segments = path[1:].split("/")
    if len(segments) > 1 and segments[-1] == "":
        segments.pop()

    if not 1 <= len(segments) <= 2:
        return MalformedRoute("expected /<date> or /<date>/<currency>")

    requested_date = segments[0]
    if not is_valid_date(requested_date):
        return MalformedRoute(f"invalid date {requested_date!r}")

    if len(segments) == 1:
        return RouteMatch(date=requested_date)

    currency = segments[1]
    if not is_valid_currency(currency):
        return MalformedRoute(f"invalid currency {currency!r}")
    return RouteMatch(date=requested_date, currency=currency.upper())
