"""
Shared test configuration and fixtures.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from domain.models.currency import AcquisitionResult
from domain.services.normalization import normalize_rates
from infrastructure.cache.memory_cache import RateCache
from infrastructure.providers.base import ExchangeRateProvider


class FakeClock:
    """Controllable replacement for utc_now."""

    def __init__(self, now: datetime = datetime(2025, 11, 5, 10, 0, tzinfo=UTC)):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return RateCache(clock=clock)


@pytest.fixture
def make_provider(clock):
    """Build a mocked provider.

    ``rates`` maps a base currency to the raw ``{code: rate}`` payload the source
    would return for it; any other base fails. ``error`` makes every call fail.
    """

    def _make(name: str, rates: dict[str, dict] | None = None, error: str | None = None):
        provider = AsyncMock(spec=ExchangeRateProvider)
        provider.name = name

        async def acquire(base: str) -> AcquisitionResult:
            if error is not None or base not in (rates or {}):
                return AcquisitionResult(
                    provider_name=name,
                    was_successful=False,
                    error_message=error or f'no data for {base}',
                )
            return AcquisitionResult(
                provider_name=name,
                was_successful=True,
                rates=normalize_rates({'rates': rates[base]}, base, name, clock()),
                response_time_ms=12,
            )

        provider.acquire.side_effect = acquire
        return provider

    return _make


@pytest.fixture
def failing_providers(make_provider):
    return [
        make_provider('exchangerate-api', error='HTTP 503'),
        make_provider('exchangerate.host', error='request failed: ConnectTimeout'),
        make_provider('fixerio', error='Fixer.io API key is not configured'),
    ]
