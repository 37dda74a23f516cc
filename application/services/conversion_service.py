import logging
from decimal import ROUND_HALF_UP, Decimal

from application.services.rate_service import RateService
from domain.exceptions.currency import InvalidCurrencyError, RateNotFoundError
from domain.models.currency import USD, ConversionResult, RateSet, STATIC_SOURCE, pair_key
from domain.services.fallback import build_static_rates

logger = logging.getLogger(__name__)

CENTS = Decimal('0.01')


def round_cents(value: Decimal | float) -> float:
	return float(Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP))


def _lookup(snapshots: dict[str, RateSet], base: str, target: str) -> float | None:
	"""Rate base -> target from the snapshots, taking the inverse if only target -> base is known."""
	if base == target:
		return 1.0
	direct = snapshots.get(base, {}).get(pair_key(base, target))
	if direct is not None:
		return direct.rate
	inverse = snapshots.get(target, {}).get(pair_key(target, base))
	if inverse is not None:
		return 1 / inverse.rate
	return None


class ConversionService:
	def __init__(self, rate_service: RateService):
		self.rate_service = rate_service

	async def convert(self, amount: float, from_currency: str, to_currency: str) -> ConversionResult:
		if from_currency == to_currency:
			return ConversionResult(converted_amount=amount, rate=1.0, is_estimate=False)

		try:
			rate, is_estimate = await self._resolve_rate(from_currency, to_currency)
		except Exception as e:
			logger.warning(
				f'Conversion {from_currency} -> {to_currency} failed ({e}), retrying with offline rates'
			)
			rate, is_estimate = self._resolve_static_rate(from_currency, to_currency, e)

		return ConversionResult(
			converted_amount=round_cents(Decimal(str(amount)) * Decimal(str(rate))),
			rate=rate,
			is_estimate=is_estimate,
		)

	async def _resolve_rate(self, from_currency: str, to_currency: str) -> tuple[float, bool]:
		# Both legs of a pivot come from these snapshots, never a later cache read.
		snapshots = {from_currency: await self.rate_service.get_rates(from_currency)}

		direct = snapshots[from_currency].get(pair_key(from_currency, to_currency))
		if direct is not None:
			is_estimate = direct.source == STATIC_SOURCE or self.rate_service.is_stale(direct)
			return direct.rate, is_estimate

		logger.warning(f'No direct rate for {from_currency} -> {to_currency}, pivoting via {USD}')
		if USD not in snapshots:
			snapshots[USD] = await self.rate_service.get_rates(USD)

		to_pivot = _lookup(snapshots, from_currency, USD)
		from_pivot = _lookup(snapshots, USD, to_currency)
		if to_pivot is None or from_pivot is None:
			raise RateNotFoundError(from_currency, to_currency)

		return to_pivot * from_pivot, True

	def _resolve_static_rate(
		self, from_currency: str, to_currency: str, error: Exception
	) -> tuple[float, bool]:
		try:
			rates = build_static_rates(from_currency, self.rate_service.cache.clock())
		except InvalidCurrencyError:
			raise RateNotFoundError(from_currency, to_currency) from error

		rate = rates.get(pair_key(from_currency, to_currency))
		if rate is None:
			raise RateNotFoundError(from_currency, to_currency) from error
		return rate.rate, True
