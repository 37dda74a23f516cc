import httpx
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Any

from domain.exceptions.currency import MalformedResponseError, ProviderError
from domain.models.currency import AcquisitionResult, RateSet
from domain.services.normalization import normalize_rates
from infrastructure.cache.memory_cache import utc_now


class ExchangeRateProvider(ABC):
    """A remote rate source. Handles the HTTP round trip and payload normalization.

    Subclasses only describe how to build the request for a base currency and,
    optionally, how to recognise an error payload.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 8.0,
        user_agent: str = "PersonalFinanceApp/1.0",
        clock: Callable[[], datetime] = utc_now,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.clock = clock
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": user_agent, "Accept": "application/json"},
        )

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def _build_request(self, base: str) -> tuple[str, dict[str, Any]]:
        ...

    def _check_payload(self, data: dict[str, Any]) -> None:
        """Raise ProviderError if the payload reports an error. No-op by default."""

    async def _request(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            # timeouts, connection errors, etc.
            raise ProviderError(f"{self.name} request failed: {e.__class__.__name__}") from e
        except Exception as e:
            raise ProviderError(f"{self.name} response parsing error: {str(e)}") from e

        if not isinstance(data, dict):
            raise MalformedResponseError(f"{self.name}: expected a JSON object")
        self._check_payload(data)
        return data

    async def fetch_rates(self, base: str) -> RateSet:
        url, params = self._build_request(base)
        data = await self._request(url, params)
        return normalize_rates(data, base, self.name, self.clock())

    async def acquire(self, base: str) -> AcquisitionResult:
        """Fetch a RateSet for ``base``, reporting failure as a result instead of raising."""
        start_time = datetime.now()
        try:
            rates = await self.fetch_rates(base)
        except ProviderError as e:
            return AcquisitionResult(
                provider_name=self.name,
                was_successful=False,
                error_message=str(e),
                response_time_ms=self._elapsed_ms(start_time),
            )

        return AcquisitionResult(
            provider_name=self.name,
            was_successful=True,
            rates=rates,
            response_time_ms=self._elapsed_ms(start_time),
        )

    @staticmethod
    def _elapsed_ms(start_time: datetime) -> int:
        return int((datetime.now() - start_time).total_seconds() * 1000)

    async def close(self) -> None:
        """Cleanly close the HTTP client."""
        await self._client.aclose()
