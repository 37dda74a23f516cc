from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversionRequest(BaseModel):
	from_currency: str = Field(..., min_length=3, max_length=3)
	to_currency: str = Field(..., min_length=3, max_length=3)
	amount: float

	@field_validator('from_currency', 'to_currency')
	@classmethod
	def uppercase_currency(cls, v: str):
		return v.upper()

	model_config = ConfigDict(
		json_schema_extra={
			'example': {'from_currency': 'EUR', 'to_currency': 'BRL', 'amount': 100.00}
		}
	)
