from dataclasses import dataclass
from datetime import datetime

USD = "USD"

# Ordered as shown in currency pickers.
SUPPORTED_CURRENCY_CODES: tuple[str, ...] = ("USD", "EUR", "BRL", "GBP", "JPY")

STATIC_SOURCE = "static"


def is_supported(code: str) -> bool:
    return code in SUPPORTED_CURRENCY_CODES


def pair_key(base: str, target: str) -> str:
    return f"{base}-{target}"


@dataclass(frozen=True)
class Rate:
    base: str
    target: str
    rate: float
    observed_at: datetime
    source: str


# "{base}-{target}" -> Rate, covering the supported currencies for one base.
RateSet = dict[str, Rate]


@dataclass(frozen=True)
class CacheEntry:
    rates: RateSet
    fetched_at: datetime
    degraded: bool = False


@dataclass(frozen=True)
class SupportedCurrency:
    code: str
    name: str
    symbol: str


@dataclass(frozen=True)
class ConversionResult:
    converted_amount: float
    rate: float
    is_estimate: bool


@dataclass(frozen=True)
class AcquisitionResult:
    """Outcome of a single acquisition attempt against one rate source."""
    provider_name: str
    was_successful: bool
    rates: RateSet | None = None
    error_message: str | None = None
    response_time_ms: int | None = None
