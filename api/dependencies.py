import logging

from application.resolver import RateResolver, new_rate_resolver
from config.settings import get_settings

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	resolver: RateResolver | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	deps.resolver = new_rate_resolver(get_settings())
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.resolver:
		await deps.resolver.close()
		deps.resolver = None

	logger.info('Cleanup complete')


def get_rate_resolver() -> RateResolver:
	if deps.resolver is None:
		raise RuntimeError('Rate resolver not initialized')
	return deps.resolver
