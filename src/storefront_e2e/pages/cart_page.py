"""
Cart page: confirm the dynamically selected listing landed in the cart
"""

from typing import Optional

from storefront_e2e.dom.browser import PageQuery
from storefront_e2e.dom.service import LocatorStrategySet
from storefront_e2e.flows.verification import TargetView, VerificationResult, Verifier


class CartPage:

    def __init__(self, page: PageQuery, locators: Optional[LocatorStrategySet] = None, logger=None):
        self.page = page
        self.verifier = Verifier(page, TargetView.CART, locators, logger=logger)

    async def verify_item_in_cart(self, product_name: str, expected_price: Optional[str] = None) -> VerificationResult:
        """Presence is fatal; price is checked only when given and never fails the test"""
        return await self.verifier.verify_presence(product_name, expected_price)
