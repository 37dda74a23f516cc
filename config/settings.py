from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	EXCHANGERATE_API_URL: str = 'https://api.exchangerate-api.com/v4'
	EXCHANGERATE_HOST_URL: str = 'https://api.exchangerate.host'
	EXCHANGERATE_HOST_ACCESS_KEY: str = ''
	FIXERIO_URL: str = 'http://data.fixer.io/api'
	FIXERIO_API_KEY: str = ''

	PROVIDER_TIMEOUT_SECONDS: float = 8.0
	USER_AGENT: str = 'PersonalFinanceApp/1.0'

	CACHE_TTL_MINUTES: int = 60
	DEGRADED_TTL_MINUTES: int = 5

	# Application
	APP_NAME: str = 'Exchange Rate Resolver'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
