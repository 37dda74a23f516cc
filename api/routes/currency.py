from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from api.dependencies import get_rate_resolver
from api.schemas import (
	ConversionRequest,
	ConversionResponse,
	CurrencyResponse,
	RateResponse,
	RateSetResponse,
	RateStatusResponse,
	SupportedCurrenciesResponse,
)
from application.resolver import RateResolver

router = APIRouter(prefix='/api', tags=['currency'])

CurrencyCode = Annotated[str, Path(min_length=3, max_length=3)]


async def _convert(
	resolver: RateResolver, amount: float, from_currency: str, to_currency: str
) -> ConversionResponse:
	resolver.currency_service.validate_currency(from_currency)
	resolver.currency_service.validate_currency(to_currency)

	result = await resolver.convert_currency(amount, from_currency, to_currency)
	return ConversionResponse(
		from_currency=from_currency,
		to_currency=to_currency,
		original_amount=amount,
		converted_amount=result.converted_amount,
		exchange_rate=result.rate,
		is_estimate=result.is_estimate,
		formatted_amount=resolver.format_amount(result.converted_amount, to_currency),
	)


@router.get(
	'/convert/{from_currency}/{to_currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency(
	from_currency: CurrencyCode,
	to_currency: CurrencyCode,
	amount: float,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> ConversionResponse:
	return await _convert(resolver, amount, from_currency.upper(), to_currency.upper())


@router.post(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency_body(
	request: ConversionRequest,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> ConversionResponse:
	return await _convert(resolver, request.amount, request.from_currency, request.to_currency)


@router.get(
	'/rates/{base}',
	response_model=RateSetResponse,
	status_code=status.HTTP_200_OK,
	summary='Get exchange rates for a base currency',
)
async def get_exchange_rates(
	base: CurrencyCode,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> RateSetResponse:
	base = base.upper()
	rates = await resolver.get_exchange_rates(base)
	return RateSetResponse(
		base=base,
		up_to_date=resolver.are_rates_up_to_date(base),
		rates={
			key: RateResponse(
				base=rate.base,
				target=rate.target,
				rate=rate.rate,
				observed_at=rate.observed_at,
				source=rate.source,
			)
			for key, rate in rates.items()
		},
	)


@router.get(
	'/rates/{base}/status',
	response_model=RateStatusResponse,
	status_code=status.HTTP_200_OK,
	summary='Check whether cached rates are up to date',
)
async def get_rate_status(
	base: CurrencyCode,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> RateStatusResponse:
	base = base.upper()
	return RateStatusResponse(base=base, up_to_date=resolver.are_rates_up_to_date(base))


@router.post(
	'/rates/{base}/refresh',
	response_model=RateStatusResponse,
	status_code=status.HTTP_200_OK,
	summary='Drop cached rates and fetch them again',
)
async def refresh_rates(
	base: CurrencyCode,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> RateStatusResponse:
	base = base.upper()
	await resolver.refresh_rates(base)
	return RateStatusResponse(base=base, up_to_date=resolver.are_rates_up_to_date(base))


@router.delete(
	'/cache',
	status_code=status.HTTP_204_NO_CONTENT,
	summary='Clear all cached rates',
)
async def clear_cache(
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> Response:
	resolver.clear_cache()
	return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
	'/currencies',
	response_model=SupportedCurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List supported currencies',
)
async def get_supported_currencies(
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
) -> SupportedCurrenciesResponse:
	currencies = resolver.get_supported_currencies()
	return SupportedCurrenciesResponse(
		currencies=[CurrencyResponse(code=c.code, name=c.name, symbol=c.symbol) for c in currencies]
	)
