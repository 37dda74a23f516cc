# nosec B101


import pytest
from unittest.mock import Mock, AsyncMock
import httpx

from infrastructure.providers.fixerio import FixerIOProvider
from domain.exceptions.currency import ProviderError


def _client_returning(payload: dict) -> AsyncMock:
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = Mock()
    mock_client.get.return_value = mock_response
    return mock_client


@pytest.mark.asyncio
async def test_fetch_rates_success_returns_rate_set(clock):
    mock_client = _client_returning({
        'success': True,
        'base': 'EUR',
        'rates': {'USD': 1.08, 'GBP': 0.86, 'CHF': 0.94}
    })

    provider = FixerIOProvider(api_key='test_key', client=mock_client, clock=clock)

    rates = await provider.fetch_rates('EUR')

    assert rates['EUR-USD'].rate == 1.08
    assert rates['EUR-GBP'].rate == 0.86
    assert rates['EUR-EUR'].rate == 1.0
    assert 'EUR-CHF' not in rates
    assert rates['EUR-USD'].source == 'fixerio'
    assert rates['EUR-USD'].observed_at == clock.now

    mock_client.get.assert_called_once()
    call_args = mock_client.get.call_args
    assert 'http://data.fixer.io/api/latest' in call_args[0][0]
    assert call_args[1]['params']['access_key'] == 'test_key'
    assert call_args[1]['params']['base'] == 'EUR'
    assert call_args[1]['params']['symbols'] == 'USD,EUR,BRL,GBP,JPY'


@pytest.mark.asyncio
async def test_missing_api_key_fails_without_request():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    provider = FixerIOProvider(api_key='', client=mock_client)

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_rates('USD')

    assert 'API key is not configured' in str(exc_info.value)
    mock_client.get.assert_not_called()


@pytest.mark.asyncio
async def test_fetch_rates_api_returns_error():
    mock_client = _client_returning({
        'success': False,
        'error': {
            'code': 101,
            'info': 'Invalid API key'
        }
    })

    provider = FixerIOProvider(api_key="invalid_key", client=mock_client)

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_rates('USD')

    assert 'Invalid API key' in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_rates_http_429_rate_limit():
    mock_client = AsyncMock(spec=httpx.AsyncClient)

    error_response = Mock()
    error_response.status_code = 429
    error_response.text = 'Rate limit exceeded'

    mock_client.get.side_effect = httpx.HTTPStatusError(
        'Rate limit',
        request=Mock(),
        response=error_response
    )
    provider = FixerIOProvider(api_key='test_key', client=mock_client)
    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_rates('USD')

    assert '429' in str(exc_info.value)


@pytest.mark.asyncio
async def test_acquire_reports_failure_as_result():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.side_effect = httpx.ConnectError('Connection refused')
    provider = FixerIOProvider(api_key='test_key', client=mock_client)

    result = await provider.acquire('USD')

    assert result.was_successful is False
    assert result.provider_name == 'fixerio'
    assert result.rates is None
    assert 'request failed' in result.error_message.lower()
    assert result.response_time_ms is not None


@pytest.mark.asyncio
async def test_close_closes_http_client():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    provider = FixerIOProvider(api_key='test_key', client=mock_client)

    await provider.close()

    mock_client.aclose.assert_awaited_once()
