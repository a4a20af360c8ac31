"""
Wishlist page: confirm the dynamically selected listing landed in the wishlist
"""

from typing import Optional

from storefront_e2e.dom.browser import PageQuery
from storefront_e2e.dom.service import LocatorStrategySet
from storefront_e2e.flows.verification import TargetView, VerificationResult, Verifier


class WishlistPage:

    def __init__(self, page: PageQuery, locators: Optional[LocatorStrategySet] = None, logger=None):
        self.page = page
        self.verifier = Verifier(page, TargetView.WISHLIST, locators, logger=logger)

    async def verify_item_in_wishlist(self, product_name: str, expected_price: Optional[str] = None) -> VerificationResult:
        return await self.verifier.verify_presence(product_name, expected_price)
