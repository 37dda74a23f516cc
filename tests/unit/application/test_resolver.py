import pytest

from application.resolver import RateResolver, build_providers, new_rate_resolver
from config.settings import Settings
from domain.exceptions.currency import InvalidCurrencyError


@pytest.fixture
def settings():
    return Settings(FIXERIO_API_KEY='fixer_key', PROVIDER_TIMEOUT_SECONDS=2.5)


def test_build_providers_in_priority_order(settings):
    providers = build_providers(settings)

    assert [p.name for p in providers] == ['exchangerate-api', 'exchangerate.host', 'fixerio']
    assert all(p.timeout == 2.5 for p in providers)
    assert providers[2].api_key == 'fixer_key'


def test_new_rate_resolver_wires_settings(settings, make_provider, clock):
    resolver = new_rate_resolver(settings, providers=[make_provider('stub')], clock=clock)

    assert isinstance(resolver, RateResolver)
    assert resolver.rate_service.timeout == 2.5
    assert resolver.rate_service.cache.clock is clock
    assert resolver.rate_service.cache.ttl.total_seconds() == 3600


def test_each_resolver_has_its_own_cache(settings, make_provider):
    first = new_rate_resolver(settings, providers=[make_provider('stub')])
    second = new_rate_resolver(settings, providers=[make_provider('stub')])

    assert first.rate_service.cache is not second.rate_service.cache


@pytest.mark.asyncio
async def test_total_failure_converts_with_offline_rates(settings, clock, failing_providers):
    resolver = new_rate_resolver(settings, providers=failing_providers, clock=clock)

    result = await resolver.convert_currency(50, 'EUR', 'USD')

    assert result.converted_amount == 52.63
    assert result.is_estimate is True
    # the offline rates are cached for a short while
    assert resolver.are_rates_up_to_date('EUR') is True
    clock.advance(minutes=6)
    assert resolver.are_rates_up_to_date('EUR') is False


@pytest.mark.asyncio
async def test_get_exchange_rates_and_status(settings, clock, make_provider):
    provider = make_provider('exchangerate-api', rates={'USD': {'EUR': 0.95, 'BRL': 5.4}})
    resolver = new_rate_resolver(settings, providers=[provider], clock=clock)

    assert resolver.are_rates_up_to_date('USD') is False
    rates = await resolver.get_exchange_rates('USD')

    assert set(rates) == {'USD-EUR', 'USD-BRL', 'USD-USD'}
    assert resolver.are_rates_up_to_date('USD') is True
    clock.advance(minutes=61)
    assert resolver.are_rates_up_to_date('USD') is False


@pytest.mark.asyncio
async def test_get_exchange_rates_rejects_unsupported_base(settings, make_provider):
    resolver = new_rate_resolver(settings, providers=[make_provider('stub')])

    with pytest.raises(InvalidCurrencyError):
        await resolver.get_exchange_rates('XYZ')


@pytest.mark.asyncio
async def test_refresh_rates_forces_reacquisition(settings, make_provider):
    provider = make_provider('exchangerate-api', rates={'GBP': {'USD': 1.27}})
    resolver = new_rate_resolver(settings, providers=[provider])

    await resolver.get_exchange_rates('GBP')
    await resolver.refresh_rates('GBP')

    assert provider.acquire.await_count == 2


@pytest.mark.asyncio
async def test_clear_cache(settings, make_provider):
    provider = make_provider('exchangerate-api', rates={'USD': {'EUR': 0.95}, 'EUR': {'USD': 1.05}})
    resolver = new_rate_resolver(settings, providers=[provider])
    await resolver.get_exchange_rates('USD')
    await resolver.get_exchange_rates('EUR')

    resolver.clear_cache()

    assert resolver.are_rates_up_to_date('USD') is False
    assert resolver.are_rates_up_to_date('EUR') is False


def test_supported_currencies_and_formatting(settings, make_provider):
    resolver = new_rate_resolver(settings, providers=[make_provider('stub')])

    assert [c.symbol for c in resolver.get_supported_currencies()] == ['$', '€', 'R$', '£', '¥']
    assert resolver.format_amount(1500, 'JPY') == '¥1,500'


@pytest.mark.asyncio
async def test_close_closes_every_provider(settings, failing_providers):
    resolver = new_rate_resolver(settings, providers=failing_providers)

    await resolver.close()

    for provider in failing_providers:
        provider.close.assert_awaited_once()
