from typing import Any

from domain.exceptions.currency import ProviderError
from infrastructure.providers.base import ExchangeRateProvider


class ExchangeRateAPIProvider(ExchangeRateProvider):
    BASE_URL = "https://api.exchangerate-api.com/v4"

    def __init__(self, base_url: str = BASE_URL, **kwargs):
        super().__init__(base_url, **kwargs)

    @property
    def name(self) -> str:
        return "exchangerate-api"

    def _build_request(self, base: str) -> tuple[str, dict[str, Any]]:
        return f"{self.base_url}/latest/{base}", {}

    def _check_payload(self, data: dict[str, Any]) -> None:
        if data.get("result") == "error":
            raise ProviderError(
                f"ExchangeRate-API error: {data.get('error-type', 'Unknown error')}"
            )
