"""
Storefront home page: navigation, notifications, search and header links
"""

from typing import Optional

from storefront_e2e.core.config import StorefrontConfig
from storefront_e2e.core.exceptions import ElementNotFoundError
from storefront_e2e.core.logger_config import component_logger
from storefront_e2e.dom.browser import PageQuery
from storefront_e2e.dom.service import LocatorStrategySet, LocatorTarget, click_with_escalation
from storefront_e2e.utils.error_handler import with_network_resilience
from storefront_e2e.utils.popup_dismisser import dismiss_popups


class HomePage:

    def __init__(
        self,
        page: PageQuery,
        locators: Optional[LocatorStrategySet] = None,
        base_url: Optional[str] = None,
        settle_delay: float = 3.0,
        logger=None,
    ):
        self.page = page
        self.log = component_logger('HOME', logger, source='home_page')
        self.locators = locators or LocatorStrategySet(logger=self.log.logger)
        self.base_url = base_url or StorefrontConfig.get_base_url()
        self.settle_delay = settle_delay

    async def navigate(self) -> None:
        """Open the storefront and give dynamic content time to load"""
        await with_network_resilience(
            lambda: self.page.navigate(self.base_url),
            should_retry=True,
            description=f"navigation to {self.base_url}",
            log=self.log,
        )
        await self.page.wait(self.settle_delay)

    async def dismiss_notifications(self, rounds: int = 3) -> int:
        return await dismiss_popups(self.page, self.locators, rounds=rounds, logger=self.log)

    async def search_for_product(self, search_term: str) -> None:
        match = await self.locators.first_match(self.page, LocatorTarget.SEARCH_BOX, limit=1)
        if match is None:
            raise ElementNotFoundError('search box', self.locators.describe(LocatorTarget.SEARCH_BOX))

        self.log.info(f"Searching for '{search_term}' using '{match.descriptor}'")
        await self.page.fill(match.descriptor, search_term)
        await self.page.press_key(match.descriptor, 'Enter')
        await self.page.wait(self.settle_delay)

    async def _follow_link(self, target: LocatorTarget, description: str) -> None:
        link = await self.locators.first_visible(self.page, target, timeout=5.0)
        if link is None:
            raise ElementNotFoundError(description, self.locators.describe(target))
        await click_with_escalation(link, description, logger=self.log)
        await self.page.wait(self.settle_delay)

    async def go_to_cart(self) -> None:
        await self._follow_link(LocatorTarget.CART_LINK, 'cart link')

    async def go_to_wishlist(self) -> None:
        await self._follow_link(LocatorTarget.WISHLIST_LINK, 'wishlist link')
