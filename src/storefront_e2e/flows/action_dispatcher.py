#!/usr/bin/env python3
"""
Robust Add to Cart / Add to Wishlist
Triggered once the scanner has picked a listing by name

Strategy order:
1. Container holding a name fragment, then the control inside it
   (fragments weaken: full name -> first words -> key words -> brand + model)
2. First visible control of the requested kind anywhere on the page
3. Known-fixed fallback listing (last resort)
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from storefront_e2e.core.config import StorefrontConfig
from storefront_e2e.core.exceptions import ElementNotFoundError
from storefront_e2e.core.logger_config import component_logger
from storefront_e2e.dom.browser import ElementHandle, PageQuery
from storefront_e2e.dom.service import LocatorStrategySet, LocatorTarget, click_with_escalation
from storefront_e2e.utils.product_utils import derive_name_fragments


class ControlKind(str, Enum):
    ADD_TO_CART = 'add_to_cart'
    ADD_TO_WISHLIST = 'add_to_wishlist'

    @property
    def target(self) -> LocatorTarget:
        return LocatorTarget(self.value)

    @property
    def label(self) -> str:
        return self.value.replace('_', ' ')


@dataclass(frozen=True)
class DispatchResult:
    control: ControlKind
    method: str  # 'fragment_container', 'page_level' or 'fixed_fallback'
    fragment: Optional[str]
    strategy: str
    click_method: str


class ActionDispatcher:
    """Finds and clicks a listing's add-to-cart / add-to-wishlist control"""

    def __init__(
        self,
        page: PageQuery,
        locators: Optional[LocatorStrategySet] = None,
        visible_timeout: Optional[float] = None,
        fallback_listings: Optional[dict] = None,
        logger=None,
    ):
        self.page = page
        self.log = component_logger('DISPATCHER', logger, source='action_dispatcher')
        self.locators = locators or LocatorStrategySet(logger=self.log.logger)
        self.visible_timeout = visible_timeout or StorefrontConfig.get_default_timeout()
        if fallback_listings is None:
            fallback_listings = {
                ControlKind.ADD_TO_CART: StorefrontConfig.get_cart_fallback_listing(),
                ControlKind.ADD_TO_WISHLIST: StorefrontConfig.get_wishlist_fallback_listing(),
            }
        self.fallback_listings = fallback_listings

    async def _click_control_in(self, container: ElementHandle, control: ControlKind, description: str) -> Optional[str]:
        button = await self.locators.first_visible(container, control.target, timeout=self.visible_timeout)
        if button is None:
            return None
        return await click_with_escalation(button, description, logger=self.log)

    async def _try_fragment(self, fragment: str, control: ControlKind, tried: List[str]) -> Optional[DispatchResult]:
        for descriptor in self.locators.descriptors(LocatorTarget.FRAGMENT_CONTAINER, fragment):
            tried.append(f"{descriptor} >> {control.label}")
            try:
                containers = await self.page.find_all(descriptor, limit=3)
            except Exception as e:
                self.log.warning(f"Container strategy '{descriptor}' failed: {e}")
                continue

            for position, container in enumerate(containers, start=1):
                try:
                    click_method = await self._click_control_in(container, control, f"{control.label} for '{fragment}'")
                except Exception as e:
                    self.log.warning(f"Container {position} for '{descriptor}' failed: {e}")
                    continue
                if click_method:
                    return DispatchResult(control, 'fragment_container', fragment, str(descriptor), click_method)
        return None

    async def _try_page_level(self, control: ControlKind, tried: List[str]) -> Optional[DispatchResult]:
        tried.extend(f"page >> {d}" for d in self.locators.describe(control.target))
        try:
            button = await self.locators.first_visible(self.page, control.target, timeout=self.visible_timeout)
            if button is None:
                return None
            click_method = await click_with_escalation(button, f"first visible {control.label}", logger=self.log)
            return DispatchResult(control, 'page_level', None, control.target.value, click_method)
        except Exception as e:
            self.log.warning(f"Page-level {control.label} failed: {e}")
            return None

    async def _try_fixed_listing(self, listing: str, control: ControlKind, tried: List[str]) -> Optional[DispatchResult]:
        tried.append(f"fixed listing '{listing}'")
        try:
            match = await self.locators.first_match(self.page, LocatorTarget.FALLBACK_LISTING, listing, limit=1)
            if match is None:
                return None
            click_method = await self._click_control_in(match.first, control, f"{control.label} for fixed '{listing}'")
            if click_method:
                return DispatchResult(control, 'fixed_fallback', listing, str(match.descriptor), click_method)
        except Exception as e:
            self.log.warning(f"Fixed listing '{listing}' failed: {e}")
        return None

    async def _try_fixed_fallback(self, control: ControlKind, tried: List[str]) -> Optional[DispatchResult]:
        listing = self.fallback_listings.get(control)
        if not listing:
            return None
        self.log.info(f"Falling back to fixed listing: {listing}")
        return await self._try_fixed_listing(listing, control, tried)

    async def activate_fixed_listing(self, listing: str, control: ControlKind) -> DispatchResult:
        """
        Click the control of a known listing located by its accessible label,
        without dynamic selection.

        Raises:
            ElementNotFoundError: the listing or its control is missing
        """
        control = ControlKind(control)
        tried: List[str] = []
        result = await self._try_fixed_listing(listing, control, tried)
        if result is None:
            raise ElementNotFoundError(f"{control.label} control for fixed listing '{listing}'", tried)
        self.log.info(f"{control.label.upper()}: Clicked fixed listing '{listing}' ({result.click_method})")
        return result

    async def activate_control(self, listing_name: str, control: ControlKind) -> DispatchResult:
        """
        Click the control of the given kind for the named listing.

        Raises:
            ElementNotFoundError: every strategy was exhausted
        """
        control = ControlKind(control)
        self.log.info(f"{control.label.upper()}: Starting robust search for '{listing_name}'")
        tried: List[str] = []

        for index, fragment in enumerate(derive_name_fragments(listing_name), start=1):
            self.log.info(f"{control.label.upper()}: Fragment {index} - '{fragment}'")
            result = await self._try_fragment(fragment, control, tried)
            if result:
                self.log.info(f"{control.label.upper()}: Clicked via '{result.strategy}' ({result.click_method})")
                return result

        self.log.info(f"{control.label.upper()}: Trying first visible control on the page")
        result = await self._try_page_level(control, tried)
        if result:
            return result

        result = await self._try_fixed_fallback(control, tried)
        if result:
            return result

        self.log.error(f"{control.label.upper()}: All strategies failed for '{listing_name}'")
        raise ElementNotFoundError(f"{control.label} control for '{listing_name}'", tried)

    async def add_product_to_cart(self, product_name: str) -> DispatchResult:
        return await self.activate_control(product_name, ControlKind.ADD_TO_CART)

    async def add_product_to_wishlist(self, product_name: str) -> DispatchResult:
        return await self.activate_control(product_name, ControlKind.ADD_TO_WISHLIST)
