"""Currency Filter: keep only allowed currencies, in feed order."""

from collections.abc import Collection, Iterable

from currency_api.schemas.rate import ExchangeRate


def filter_exchanges(
    exchanges: Iterable[ExchangeRate],
    allow_set: Collection[str],
) -> list[ExchangeRate]:
    return [ex for ex in exchanges if ex.currency in allow_set]
