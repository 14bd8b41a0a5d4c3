"""
Rate lookup endpoints.

    GET /<YYYY-MM-DD>        -> {"USD": 1.0945, "JPY": 160.12, ...}
    GET /<YYYY-MM-DD>/<CCY>  -> {"currency": "USD", "rate": 1.0945}

Malformed paths are 400 and unknown dates or currencies are 404, both
with an empty body.
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from currency_api.api.routing import MalformedRoute, parse_rate_path
from currency_api.schemas.rate import CurrencyRateResponse
from currency_api.services.rate_store import RateStore, get_rate_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{path:path}", include_in_schema=False)
def get_rates(path: str, store: RateStore = Depends(get_rate_store)):
    route = parse_rate_path(f"/{path}")
    if isinstance(route, MalformedRoute):
        logger.debug("Rejected /%s: %s", path, route.reason)
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    if route.currency is None:
        rates = store.lookup(route.date)
        if rates is None:
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return JSONResponse({ex.currency: float(ex.rate) for ex in rates})

    # Unknown date and unknown currency are both a 404
    rate = store.lookup_one(route.date, route.currency)
    if rate is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    payload = CurrencyRateResponse(currency=rate.currency, rate=float(rate.rate))
    return JSONResponse(payload.model_dump())
