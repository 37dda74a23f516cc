import asyncio
import logging

from domain.exceptions.currency import InvalidCurrencyError
from domain.models.currency import AcquisitionResult, Rate, RateSet, is_supported
from domain.services.fallback import build_static_rates
from infrastructure.cache.memory_cache import RateCache
from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)


class RateService:
    """Resolves the RateSet for a base currency.

    Order of resolution:
    1. fresh cache entry
    2. providers, strictly one after another, first success wins
    3. the last cached entry for the base, however old
    4. the offline table
    """

    def __init__(
        self,
        providers: list[ExchangeRateProvider],
        cache: RateCache,
        timeout: float = 8.0,
    ):
        self.providers = providers
        self.cache = cache
        self.timeout = timeout

    async def get_rates(self, base: str) -> RateSet:
        if not is_supported(base):
            raise InvalidCurrencyError(f"Currency {base} is not supported")

        if self.cache.is_fresh(base):
            logger.debug(f"Cache hit for {base} rates")
            return self.cache.get(base).rates

        rates = await self._acquire(base)
        if rates is not None:
            self.cache.put(base, rates)
            return rates

        return self._degrade(base)

    async def refresh(self, base: str) -> RateSet:
        self.cache.invalidate(base)
        return await self.get_rates(base)

    def is_fresh(self, base: str) -> bool:
        return self.cache.is_fresh(base)

    def is_stale(self, rate: Rate) -> bool:
        return self.cache.is_stale(rate.observed_at)

    async def _acquire(self, base: str) -> RateSet | None:
        for attempt, provider in enumerate(self.providers, start=1):
            result = await self._try_provider(provider, base)
            if result.was_successful:
                logger.info(
                    f"Fetched {len(result.rates)} {base} rates from {result.provider_name} "
                    f"(attempt {attempt}/{len(self.providers)}, {result.response_time_ms}ms)"
                )
                return result.rates
            logger.warning(
                f"Provider {result.provider_name} failed for {base} "
                f"(attempt {attempt}/{len(self.providers)}): {result.error_message}"
            )
        return None

    async def _try_provider(self, provider: ExchangeRateProvider, base: str) -> AcquisitionResult:
        try:
            return await asyncio.wait_for(provider.acquire(base), timeout=self.timeout)
        except TimeoutError:
            error_message = f"timed out after {self.timeout}s"
        except Exception as e:
            error_message = f"unexpected error: {e.__class__.__name__}: {e}"
        return AcquisitionResult(
            provider_name=provider.name, was_successful=False, error_message=error_message
        )

    def _degrade(self, base: str) -> RateSet:
        logger.error(f"All providers failed for {base}")

        stale = self.cache.get(base)
        if stale is not None:
            logger.warning(
                f"Serving stale {base} rates fetched at {stale.fetched_at.isoformat()}"
            )
            self.cache.put(base, stale.rates, degraded=True)
            return stale.rates

        logger.warning(f"No cached {base} rates, using offline table")
        rates = build_static_rates(base, self.cache.clock())
        self.cache.put(base, rates, degraded=True)
        return rates
