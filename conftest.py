import pytest


@pytest.fixture(autouse=True)
def fresh_store(settings):
    """Give every test a freshly seeded store and an empty throttle cache."""
    from django.core.cache import cache
    from apps.orders import providers

    settings.ORDERS_SEED_DATA = True
    cache.clear()
    store = providers.reset_store()
    yield store
    providers.reset_store()
