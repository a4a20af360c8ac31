"""
Search results page: brand filter, dynamic listing selection and add actions
"""

from typing import Optional

from storefront_e2e.core.exceptions import ElementNotFoundError
from storefront_e2e.core.logger_config import component_logger
from storefront_e2e.dom.browser import PageQuery
from storefront_e2e.dom.service import LocatorStrategySet, LocatorTarget, click_with_escalation
from storefront_e2e.flows.action_dispatcher import ActionDispatcher, ControlKind, DispatchResult
from storefront_e2e.flows.criteria import CriteriaFn
from storefront_e2e.flows.product_scanner import ProductScanner
from storefront_e2e.models.listing import ListingCandidate


class SearchResultsPage:

    def __init__(
        self,
        page: PageQuery,
        locators: Optional[LocatorStrategySet] = None,
        scanner: Optional[ProductScanner] = None,
        dispatcher: Optional[ActionDispatcher] = None,
        logger=None,
    ):
        self.page = page
        self.log = component_logger('RESULTS', logger, source='search_results_page')
        self.locators = locators or LocatorStrategySet(logger=self.log.logger)
        self.scanner = scanner or ProductScanner(page, self.locators, logger=self.log.logger)
        self.dispatcher = dispatcher or ActionDispatcher(page, self.locators, logger=self.log.logger)

    async def filter_by_brand(self, brand: str, settle_delay: float = 2.0) -> None:
        """Tick the brand facet in the filter panel"""
        facet = await self.locators.first_visible(self.page, LocatorTarget.BRAND_FILTER, brand, timeout=5.0)
        if facet is None:
            raise ElementNotFoundError(f"brand filter '{brand}'", self.locators.describe(LocatorTarget.BRAND_FILTER, brand))
        await click_with_escalation(facet, f"brand filter '{brand}'", logger=self.log)
        self.log.info(f"Applied brand filter: {brand}")
        await self.page.wait(settle_delay)

    async def find_first_match(self, criteria: CriteriaFn, description: Optional[str] = None) -> Optional[ListingCandidate]:
        return await self.scanner.find_first_match(criteria, description)

    async def find_first_samsung_tv_within_price(self, max_price: float) -> Optional[ListingCandidate]:
        return await self.scanner.find_first_samsung_tv_within_price(max_price)

    async def find_first_high_refresh_rate_monitor(self, min_refresh_rate: int) -> Optional[ListingCandidate]:
        return await self.scanner.find_first_high_refresh_rate_monitor(min_refresh_rate)

    async def add_product_to_cart(self, product_name: str) -> DispatchResult:
        return await self.dispatcher.activate_control(product_name, ControlKind.ADD_TO_CART)

    async def add_product_to_wishlist(self, product_name: str) -> DispatchResult:
        return await self.dispatcher.activate_control(product_name, ControlKind.ADD_TO_WISHLIST)

    async def add_fixed_listing(self, listing_name: str, control: ControlKind) -> DispatchResult:
        return await self.dispatcher.activate_fixed_listing(listing_name, control)
