import pytest

from storefront_e2e.dom.service import LocatorStrategySet
from tests.fakes import FakePage


class SleepRecorder:
    """Stands in for asyncio.sleep so backoff delays can be asserted without waiting"""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def page():
    return FakePage()


@pytest.fixture
def locators():
    return LocatorStrategySet()


@pytest.fixture
def fake_sleep():
    return SleepRecorder()


@pytest.fixture(autouse=True)
def storefront_env(monkeypatch):
    """Keep tests independent of a developer's .env"""
    for name in ('E2E_SETTLE_DELAY', 'E2E_MAX_LISTINGS', 'E2E_DEFAULT_TIMEOUT',
                 'E2E_CART_FALLBACK_LISTING', 'E2E_WISHLIST_FALLBACK_LISTING', 'STOREFRONT_BASE_URL'):
        monkeypatch.delenv(name, raising=False)
