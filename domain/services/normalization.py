import logging
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from domain.exceptions.currency import MalformedResponseError
from domain.models.currency import Rate, RateSet, is_supported, pair_key

logger = logging.getLogger(__name__)


def normalize_rates(payload: Mapping[str, Any], base: str, source: str, now: datetime) -> RateSet:
    """Turn a provider payload of ``{code: rate}`` relative to ``base`` into a RateSet.

    Unsupported codes and unusable values are dropped. The self-rate
    ``base-base`` is always written as exactly 1.0.
    """
    raw_rates = payload.get("rates") if isinstance(payload, Mapping) else None
    if raw_rates is None:
        raise MalformedResponseError(f"{source}: response has no rates field")
    if not isinstance(raw_rates, Mapping):
        raise MalformedResponseError(
            f"{source}: rates field is {type(raw_rates).__name__}, expected an object"
        )

    rates: RateSet = {}
    for target, value in raw_rates.items():
        if not is_supported(target):
            continue
        try:
            rate = float(value)
        except (TypeError, ValueError):
            logger.debug(f"{source}: dropping non-numeric rate {target}={value!r}")
            continue
        if not math.isfinite(rate) or rate <= 0:
            logger.debug(f"{source}: dropping non-positive rate {target}={value!r}")
            continue
        rates[pair_key(base, target)] = Rate(
            base=base, target=target, rate=rate, observed_at=now, source=source
        )

    rates[pair_key(base, base)] = Rate(
        base=base, target=base, rate=1.0, observed_at=now, source=source
    )
    return rates
