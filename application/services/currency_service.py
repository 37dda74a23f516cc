from domain.exceptions.currency import InvalidCurrencyError
from domain.models.currency import SupportedCurrency, is_supported

SUPPORTED_CURRENCIES: tuple[SupportedCurrency, ...] = (
	SupportedCurrency(code='USD', name='US Dollar', symbol='$'),
	SupportedCurrency(code='EUR', name='Euro', symbol='€'),
	SupportedCurrency(code='BRL', name='Brazilian Real', symbol='R$'),
	SupportedCurrency(code='GBP', name='British Pound', symbol='£'),
	SupportedCurrency(code='JPY', name='Japanese Yen', symbol='¥'),
)

# Currencies displayed without minor units.
ZERO_DECIMAL_CURRENCIES = frozenset({'JPY'})

# pt-BR grouping: dot for thousands, comma for decimals.
DECIMAL_COMMA_CURRENCIES = frozenset({'BRL'})
_SWAP_SEPARATORS = str.maketrans(',.', '.,')


class CurrencyService:
	def __init__(self, currencies: tuple[SupportedCurrency, ...] = SUPPORTED_CURRENCIES):
		self.currencies = currencies
		self._by_code = {c.code: c for c in currencies}

	def get_supported_currencies(self) -> list[SupportedCurrency]:
		return list(self.currencies)

	def validate_currency(self, code: str) -> None:
		if not is_supported(code) or code not in self._by_code:
			raise InvalidCurrencyError(f'Currency {code} is not supported')

	def get_currency_symbol(self, code: str) -> str:
		currency = self._by_code.get(code)
		return currency.symbol if currency else '$'

	def format_amount(self, amount: float, code: str) -> str:
		"""Symbol-prefixed amount with thousands separators, e.g. ``$1,234.50`` or ``R$ 1.234,50``."""
		places = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
		sign = '-' if amount < 0 else ''
		symbol = self.get_currency_symbol(code)
		separator = ' ' if len(symbol) > 1 else ''
		digits = f'{abs(amount):,.{places}f}'
		if code in DECIMAL_COMMA_CURRENCIES:
			digits = digits.translate(_SWAP_SEPARATORS)
		return f'{sign}{symbol}{separator}{digits}'
