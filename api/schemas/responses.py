from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RateResponse(BaseModel):
	base: str = Field(..., description='Base currency code')
	target: str = Field(..., description='Target currency code')
	rate: float = Field(..., gt=0, description='Units of target per unit of base')
	observed_at: datetime = Field(..., description='When the rate was fetched')
	source: str = Field(..., description='Provider of the rate')


class RateSetResponse(BaseModel):
	base: str = Field(..., description='Base currency code')
	up_to_date: bool = Field(..., description='Whether the cached rates are within the freshness window')
	rates: dict[str, RateResponse] = Field(..., description='Rates keyed by "{base}-{target}"')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'base': 'USD',
				'up_to_date': True,
				'rates': {
					'USD-EUR': {
						'base': 'USD',
						'target': 'EUR',
						'rate': 0.95,
						'observed_at': '2025-09-27T10:30:00Z',
						'source': 'exchangerate-api',
					}
				},
			}
		}
	)


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	original_amount: float = Field(..., description='Original amount requested')
	converted_amount: float = Field(..., description='Converted amount, rounded to cents')
	exchange_rate: float = Field(..., description='Exchange rate used for conversion')
	is_estimate: bool = Field(..., description='Rate is stale, derived via USD or from offline rates')
	formatted_amount: str = Field(..., description='Converted amount with currency symbol')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'from_currency': 'USD',
				'to_currency': 'EUR',
				'original_amount': 100.00,
				'converted_amount': 95.50,
				'exchange_rate': 0.955,
				'is_estimate': False,
				'formatted_amount': '€95.50',
			}
		}
	)


class CurrencyResponse(BaseModel):
	code: str
	name: str
	symbol: str


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[CurrencyResponse] = Field(description='Supported currencies, in display order')


class RateStatusResponse(BaseModel):
	base: str
	up_to_date: bool
