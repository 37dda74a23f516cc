from .requests import ConversionRequest
from .responses import (
	ConversionResponse,
	CurrencyResponse,
	RateResponse,
	RateSetResponse,
	RateStatusResponse,
	SupportedCurrenciesResponse,
)

__all__ = [
	'ConversionRequest',
	'ConversionResponse',
	'CurrencyResponse',
	'RateResponse',
	'RateSetResponse',
	'RateStatusResponse',
	'SupportedCurrenciesResponse',
]
