"""Offline exchange rates used when no remote source and no cache is available."""

from datetime import datetime

from domain.exceptions.currency import InvalidCurrencyError
from domain.models.currency import STATIC_SOURCE, USD, Rate, RateSet, pair_key

# Units of each currency per 1 USD. Approximate, updated by hand.
STATIC_USD_RATES: dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.95,
    "BRL": 6.0,
    "GBP": 0.79,
    "JPY": 150.0,
}


def build_static_rates(base: str, now: datetime) -> RateSet:
    """Build a RateSet for ``base`` from the USD-anchored table.

    Non-USD bases are crossed through USD: ``(1 / table[base]) * table[target]``.
    """
    if base not in STATIC_USD_RATES:
        raise InvalidCurrencyError(f"Currency {base} is not supported")

    if base == USD:
        cross = dict(STATIC_USD_RATES)
    else:
        base_to_usd = 1 / STATIC_USD_RATES[base]
        cross = {
            target: base_to_usd * usd_rate for target, usd_rate in STATIC_USD_RATES.items()
        }
        cross[USD] = base_to_usd
    cross[base] = 1.0

    return {
        pair_key(base, target): Rate(
            base=base, target=target, rate=rate, observed_at=now, source=STATIC_SOURCE
        )
        for target, rate in cross.items()
    }
