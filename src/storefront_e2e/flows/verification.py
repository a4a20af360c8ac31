#!/usr/bin/env python3
"""
Verification of a listing in the cart or wishlist view.

Presence is fatal when it fails. Price display is optional: its format
varies between views, so a price mismatch is logged and never raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from storefront_e2e.core.exceptions import VerificationError
from storefront_e2e.core.logger_config import component_logger
from storefront_e2e.dom.browser import PageQuery
from storefront_e2e.dom.service import LocatorStrategySet, LocatorTarget
from storefront_e2e.utils.error_handler import with_graceful_degradation
from storefront_e2e.utils.product_utils import derive_name_fragments


class TargetView(str, Enum):
    CART = 'cart'
    WISHLIST = 'wishlist'


@dataclass(frozen=True)
class VerificationResult:
    view: TargetView
    listing_name: str
    fragment: str
    strategy: str
    match_count: int
    price_verified: Optional[bool]  # None when no expected price was given


class Verifier:
    """Asserts a listing is present exactly once in the target view"""

    def __init__(
        self,
        page: PageQuery,
        view: TargetView = TargetView.CART,
        locators: Optional[LocatorStrategySet] = None,
        visible_timeout: float = 3.0,
        price_timeout: float = 2.0,
        logger=None,
    ):
        self.page = page
        self.view = TargetView(view)
        self.log = component_logger('VERIFY', logger, source=f"{self.view.value}_view")
        self.locators = locators or LocatorStrategySet(logger=self.log.logger)
        self.visible_timeout = visible_timeout
        self.price_timeout = price_timeout

    async def _verify_price(self, expected_price_text: str) -> bool:
        for descriptor in self.locators.descriptors(LocatorTarget.PRICE_DISPLAY, expected_price_text):
            elements = await self.page.find_all(descriptor, limit=1)
            if elements and await elements[0].is_visible(timeout=self.price_timeout):
                self.log.info(f"Price {expected_price_text} verified via '{descriptor}'")
                return True
        raise VerificationError(f"price {expected_price_text} not displayed in {self.view.value}")

    async def verify_presence(self, listing_name: str, expected_price_text: Optional[str] = None) -> VerificationResult:
        """
        Locate the listing by weakening name fragments and assert exactly one
        visible match for the chosen fragment.

        Raises:
            VerificationError: no fragment matched, or the chosen fragment matched more than once
        """
        self.log.info(f"Verifying '{listing_name}' in {self.view.value}")

        for fragment in derive_name_fragments(listing_name):
            match = await self.locators.first_match(self.page, LocatorTarget.SAVED_ITEM, fragment)
            if match is None:
                self.log.info(f"No {self.view.value} item contains '{fragment}'")
                continue

            if not await match.first.is_visible(timeout=self.visible_timeout):
                self.log.info(f"{self.view.value} item for '{fragment}' is not visible")
                continue

            count = len(match.elements)
            if count != 1:
                raise VerificationError(
                    f"Expected exactly 1 {self.view.value} item matching '{fragment}', found {count}"
                )

            self.log.info(f"Verified '{listing_name}' in {self.view.value} via fragment '{fragment}'")

            price_verified = None
            if expected_price_text:
                price_verified = await with_graceful_degradation(
                    lambda: self._verify_price(expected_price_text),
                    False,
                    f"price verification for {listing_name}",
                    log=self.log,
                )
                if not price_verified:
                    self.log.info(f"Price verification skipped for {listing_name} - price format may vary")
            else:
                self.log.info(f"Price verification skipped for dynamically selected product: {listing_name}")

            return VerificationResult(self.view, listing_name, fragment, str(match.descriptor), count, price_verified)

        raise VerificationError(f"'{listing_name}' not found in {self.view.value} using any name fragment")
