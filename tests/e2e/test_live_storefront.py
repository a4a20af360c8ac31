"""
Live scenarios against the real storefront. Opt in with E2E_LIVE=1; they need
network access and an installed Playwright browser.
"""

import pytest

from storefront_e2e.core.config import StorefrontConfig
from storefront_e2e.main import run_live_scenario, run_live_scenarios
from storefront_e2e.models.scenario import MONITOR_SCENARIO, SAMSUNG_TV_FALLBACK_SCENARIO, SAMSUNG_TV_SCENARIO

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(not StorefrontConfig.is_live_enabled(), reason='set E2E_LIVE=1 to run live storefront tests'),
]


@pytest.mark.asyncio
async def test_samsung_tv_under_ceiling_lands_in_cart():
    result = await run_live_scenario(SAMSUNG_TV_SCENARIO)

    assert result.success, 'no Samsung TV under R 15,000 among the first listings'
    assert result.selected.price <= SAMSUNG_TV_SCENARIO.max_price


@pytest.mark.asyncio
async def test_high_refresh_rate_monitor_lands_in_wishlist():
    result = await run_live_scenario(MONITOR_SCENARIO)

    assert result.success, 'no 120Hz+ monitor among the first listings'
    assert result.selected.refresh_rate >= MONITOR_SCENARIO.min_refresh_rate


@pytest.mark.asyncio
async def test_scenarios_run_in_isolated_contexts():
    results = await run_live_scenarios([SAMSUNG_TV_SCENARIO, MONITOR_SCENARIO])

    assert [r.scenario for r in results] == ['samsung-tv', 'monitor-120hz']
    assert [r.error for r in results] == [None, None]


@pytest.mark.asyncio
async def test_samsung_tv_with_fixed_listing_fallback():
    result = await run_live_scenario(SAMSUNG_TV_FALLBACK_SCENARIO)

    assert result.success
    if result.used_fallback:
        assert result.verification.listing_name == SAMSUNG_TV_FALLBACK_SCENARIO.fallback_listing
