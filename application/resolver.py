import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from application.services import ConversionService, CurrencyService, RateService
from config.settings import Settings, get_settings
from domain.models.currency import ConversionResult, RateSet, SupportedCurrency
from infrastructure.cache.memory_cache import RateCache, utc_now
from infrastructure.providers import (
    ExchangeRateAPIProvider,
    ExchangeRateHostProvider,
    ExchangeRateProvider,
    FixerIOProvider,
)

logger = logging.getLogger(__name__)


class RateResolver:
    """Entry point used by the rest of the app for rates and conversions.

    Construct one per process with :func:`new_rate_resolver` and pass it to
    whatever needs it.
    """

    def __init__(
        self,
        rate_service: RateService,
        conversion_service: ConversionService,
        currency_service: CurrencyService,
    ):
        self.rate_service = rate_service
        self.conversion_service = conversion_service
        self.currency_service = currency_service

    async def get_exchange_rates(self, base: str) -> RateSet:
        return await self.rate_service.get_rates(base)

    async def convert_currency(
        self, amount: float, from_currency: str, to_currency: str
    ) -> ConversionResult:
        return await self.conversion_service.convert(amount, from_currency, to_currency)

    def get_supported_currencies(self) -> list[SupportedCurrency]:
        return self.currency_service.get_supported_currencies()

    def format_amount(self, amount: float, currency: str) -> str:
        return self.currency_service.format_amount(amount, currency)

    def are_rates_up_to_date(self, base: str) -> bool:
        return self.rate_service.is_fresh(base)

    async def refresh_rates(self, base: str) -> None:
        await self.rate_service.refresh(base)

    def clear_cache(self) -> None:
        self.rate_service.cache.clear()
        logger.info("Exchange rate cache cleared")

    async def close(self) -> None:
        for provider in self.rate_service.providers:
            await provider.close()


def build_providers(
    settings: Settings, clock: Callable[[], datetime] = utc_now
) -> list[ExchangeRateProvider]:
    """Remote sources in priority order."""
    common = {
        "timeout": settings.PROVIDER_TIMEOUT_SECONDS,
        "user_agent": settings.USER_AGENT,
        "clock": clock,
    }
    return [
        ExchangeRateAPIProvider(base_url=settings.EXCHANGERATE_API_URL, **common),
        ExchangeRateHostProvider(
            base_url=settings.EXCHANGERATE_HOST_URL,
            access_key=settings.EXCHANGERATE_HOST_ACCESS_KEY,
            **common,
        ),
        FixerIOProvider(api_key=settings.FIXERIO_API_KEY, base_url=settings.FIXERIO_URL, **common),
    ]


def new_rate_resolver(
    settings: Settings | None = None,
    providers: list[ExchangeRateProvider] | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> RateResolver:
    settings = settings or get_settings()
    if providers is None:
        providers = build_providers(settings, clock)

    cache = RateCache(
        ttl=timedelta(minutes=settings.CACHE_TTL_MINUTES),
        degraded_ttl=timedelta(minutes=settings.DEGRADED_TTL_MINUTES),
        clock=clock,
    )
    rate_service = RateService(
        providers=providers, cache=cache, timeout=settings.PROVIDER_TIMEOUT_SECONDS
    )
    logger.info(
        f"Rate resolver ready with providers: {', '.join(p.name for p in providers)}"
    )
    return RateResolver(
        rate_service=rate_service,
        conversion_service=ConversionService(rate_service),
        currency_service=CurrencyService(),
    )
