from typing import Any

from domain.exceptions.currency import ProviderError
from domain.models.currency import SUPPORTED_CURRENCY_CODES
from infrastructure.providers.base import ExchangeRateProvider


class FixerIOProvider(ExchangeRateProvider):
	BASE_URL = 'http://data.fixer.io/api'

	def __init__(self, api_key: str, base_url: str = BASE_URL, **kwargs):
		super().__init__(base_url, **kwargs)
		self.api_key = api_key

	@property
	def name(self) -> str:
		return 'fixerio'

	def _build_request(self, base: str) -> tuple[str, dict[str, Any]]:
		if not self.api_key:
			raise ProviderError('Fixer.io API key is not configured')
		params = {
			'access_key': self.api_key,
			'base': base,
			'symbols': ','.join(SUPPORTED_CURRENCY_CODES),
		}
		return f'{self.base_url}/latest', params

	def _check_payload(self, data: dict[str, Any]) -> None:
		if not data.get('success', False):
			info = data.get('error', {}).get('info', 'Unknown error')
			raise ProviderError(f'Fixer.io API error: {info}')
