class CurrencyException(Exception):
    pass


class InvalidCurrencyError(CurrencyException):
    pass

class ProviderError(CurrencyException):
    pass

class MalformedResponseError(ProviderError):
    pass


class RateNotFoundError(CurrencyException):
    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(f"Exchange rate not found: {from_currency} -> {to_currency}")
