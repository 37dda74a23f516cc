from .base import ExchangeRateProvider
from .exchangerate_api import ExchangeRateAPIProvider
from .exchangerate_host import ExchangeRateHostProvider
from .fixerio import FixerIOProvider

__all__ = [
    'ExchangeRateProvider',
    'ExchangeRateAPIProvider',
    'ExchangeRateHostProvider',
    'FixerIOProvider',
]
