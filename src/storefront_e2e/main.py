import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional

from playwright.async_api import async_playwright

from storefront_e2e.core.config import StorefrontConfig
from storefront_e2e.core.logger_config import component_logger
from storefront_e2e.dom.browser import PageQuery, PlaywrightPageQuery
from storefront_e2e.dom.service import LocatorStrategySet
from storefront_e2e.flows.action_dispatcher import ControlKind
from storefront_e2e.flows.product_scanner import ProductScanner
from storefront_e2e.flows.verification import TargetView
from storefront_e2e.models.scenario import ScenarioConfig, ScenarioResult
from storefront_e2e.pages import CartPage, HomePage, SearchResultsPage, WishlistPage

logger = component_logger('SCENARIO', source='main')

DEFAULT_USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'


class ScenarioRunner:
    """
    Main entry point for running a storefront scenario.
    Composes the page modules over one shared PageQuery.
    """

    def __init__(
        self,
        page: PageQuery,
        locators: Optional[LocatorStrategySet] = None,
        settle_delay: Optional[float] = None,
        dismiss_rounds: int = 3,
        logger=None,
    ):
        """
        Args:
            page: Browser collaborator (PlaywrightPageQuery or a test double)
            locators: Strategy overrides shared by every page module
            settle_delay: Seconds to let dynamic content load between steps
            dismiss_rounds: Notification sweeps after landing on the home page
        """
        self.log = component_logger('SCENARIO', logger, source='main')
        settle_delay = StorefrontConfig.get_settle_delay() if settle_delay is None else settle_delay
        self.locators = locators or LocatorStrategySet(logger=self.log.logger)
        self.dismiss_rounds = dismiss_rounds

        self.home = HomePage(page, self.locators, settle_delay=settle_delay, logger=self.log.logger)
        scanner = ProductScanner(page, self.locators, settle_delay=settle_delay, logger=self.log.logger)
        self.results = SearchResultsPage(page, self.locators, scanner=scanner, logger=self.log.logger)
        self.cart = CartPage(page, self.locators, logger=self.log.logger)
        self.wishlist = WishlistPage(page, self.locators, logger=self.log.logger)

    async def run(self, scenario: ScenarioConfig) -> ScenarioResult:
        """
        navigate -> dismiss -> search -> (filter) -> select -> add -> view -> verify

        When no listing qualifies the scenario's fallback listing, if any, is
        added and verified instead; without one the ScenarioResult comes back
        with selected=None. Every other failure propagates.
        """
        self.log.info(f"Running scenario '{scenario.name}': {scenario.search_term}")
        result = ScenarioResult(scenario=scenario.name)

        await self.home.navigate()
        if self.dismiss_rounds:
            await self.home.dismiss_notifications(self.dismiss_rounds)
        await self.home.search_for_product(scenario.search_term)

        if scenario.brand_filter:
            await self.results.filter_by_brand(scenario.brand_filter)

        selected = await self.results.find_first_match(scenario.to_criteria())
        control = ControlKind.ADD_TO_CART if scenario.target_view == TargetView.CART else ControlKind.ADD_TO_WISHLIST

        if selected is not None:
            result.selected = selected
            self.log.info(f"Selected: {selected.name} at {selected.price_text}")
            listing_name, expected_price = selected.name, scenario.expected_price
            if control == ControlKind.ADD_TO_CART:
                dispatch = await self.results.add_product_to_cart(listing_name)
            else:
                dispatch = await self.results.add_product_to_wishlist(listing_name)
        elif scenario.fallback_listing:
            self.log.warning(f"Dynamic selection failed, using fallback listing: {scenario.fallback_listing}")
            listing_name, expected_price = scenario.fallback_listing, scenario.fallback_expected_price
            dispatch = await self.results.add_fixed_listing(listing_name, control)
            result.used_fallback = True
        else:
            self.log.warning(f"No listing satisfies scenario '{scenario.name}'")
            return result

        if scenario.target_view == TargetView.CART:
            await self.home.go_to_cart()
            result.verification = await self.cart.verify_item_in_cart(listing_name, expected_price)
        else:
            await self.home.go_to_wishlist()
            result.verification = await self.wishlist.verify_item_in_wishlist(listing_name, expected_price)

        result.dispatch_strategy = f"{dispatch.method}: {dispatch.strategy}"
        self.log.info(f"Scenario '{scenario.name}' passed")
        return result


async def run_isolated(
    scenarios: Iterable[ScenarioConfig],
    run_one: Callable[[ScenarioConfig], Awaitable[ScenarioResult]],
) -> List[ScenarioResult]:
    """
    Run scenarios concurrently; one scenario's failure is recorded on its own
    result and never cancels or hides the others.
    """
    scenarios = list(scenarios)
    outcomes = await asyncio.gather(*(run_one(s) for s in scenarios), return_exceptions=True)

    results = []
    for scenario, outcome in zip(scenarios, outcomes):
        if isinstance(outcome, Exception):
            logger.error(f"Scenario '{scenario.name}' failed: {outcome}")
            results.append(ScenarioResult(scenario=scenario.name, error=f"{type(outcome).__name__}: {outcome}"))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results.append(outcome)
    return results


async def run_live_scenario(scenario: ScenarioConfig, headless: Optional[bool] = None, browser=None) -> ScenarioResult:
    """Run one scenario in its own browser context against the live storefront"""
    headless = StorefrontConfig.get_headless() if headless is None else headless

    if browser is not None:
        context = await browser.new_context(user_agent=DEFAULT_USER_AGENT, viewport={'width': 1440, 'height': 900})
        try:
            page = await context.new_page()
            return await ScenarioRunner(PlaywrightPageQuery(page)).run(scenario)
        finally:
            await context.close()

    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=headless,
            channel=StorefrontConfig.get_browser_channel(),
            args=['--disable-blink-features=AutomationControlled'],
        )
        try:
            return await run_live_scenario(scenario, headless, browser)
        finally:
            await browser.close()


async def run_live_scenarios(scenarios: Iterable[ScenarioConfig], headless: Optional[bool] = None) -> List[ScenarioResult]:
    """Scenarios share one browser but never a context; they run concurrently"""
    headless = StorefrontConfig.get_headless() if headless is None else headless

    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=headless,
            channel=StorefrontConfig.get_browser_channel(),
            args=['--disable-blink-features=AutomationControlled'],
        )
        try:
            return await run_isolated(scenarios, lambda s: run_live_scenario(s, headless, browser))
        finally:
            await browser.close()
