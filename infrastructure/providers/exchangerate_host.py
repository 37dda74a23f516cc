from typing import Any

from domain.exceptions.currency import ProviderError
from domain.models.currency import SUPPORTED_CURRENCY_CODES
from infrastructure.providers.base import ExchangeRateProvider


class ExchangeRateHostProvider(ExchangeRateProvider):
    BASE_URL = "https://api.exchangerate.host"

    def __init__(self, base_url: str = BASE_URL, access_key: str = "", **kwargs):
        super().__init__(base_url, **kwargs)
        self.access_key = access_key

    @property
    def name(self) -> str:
        return "exchangerate.host"

    def _build_request(self, base: str) -> tuple[str, dict[str, Any]]:
        params = {"base": base, "symbols": ",".join(SUPPORTED_CURRENCY_CODES)}
        if self.access_key:
            params["access_key"] = self.access_key
        return f"{self.base_url}/latest", params

    def _check_payload(self, data: dict[str, Any]) -> None:
        # success is not always present; only trust an explicit failure without rates
        if data.get("success") is False and "rates" not in data:
            error = data.get("error") or {}
            info = error.get("info", "Unknown error") if isinstance(error, dict) else error
            raise ProviderError(f"exchangerate.host API error: {info}")
