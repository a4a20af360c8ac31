#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Element Locator Strategy Set

Every logical target on the storefront has a priority-ordered tuple of
descriptors, most specific (stable data attributes) first, generic role or
text matches last. Descriptors are tried strictly in order; the first one
that yields at least one element wins and the rest are not tried.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from storefront_e2e.core.exceptions import ClickFailedError, ElementNotFoundError
from storefront_e2e.core.logger_config import component_logger
from storefront_e2e.dom.browser import Descriptor, ElementHandle


class LocatorTarget(str, Enum):
    LISTING_CONTAINER = 'listing_container'
    PRODUCT_NAME = 'product_name'
    PRODUCT_PRICE = 'product_price'
    FRAGMENT_CONTAINER = 'fragment_container'
    ADD_TO_CART = 'add_to_cart'
    ADD_TO_WISHLIST = 'add_to_wishlist'
    NOTIFICATION_DISMISS = 'notification_dismiss'
    PAGE_BLOCKER = 'page_blocker'
    OVERLAY = 'overlay'
    OVERLAY_CLOSE = 'overlay_close'
    SAVED_ITEM = 'saved_item'
    PRICE_DISPLAY = 'price_display'
    SEARCH_BOX = 'search_box'
    CART_LINK = 'cart_link'
    WISHLIST_LINK = 'wishlist_link'
    BRAND_FILTER = 'brand_filter'
    FALLBACK_LISTING = 'fallback_listing'


def _d(selector: str, has_text: Optional[str] = None) -> Descriptor:
    return Descriptor(selector=selector, has_text=has_text)


# ============================================
# DEFAULT STRATEGIES (Takealot layout)
# ============================================

DEFAULT_STRATEGIES: Dict[LocatorTarget, Tuple[Descriptor, ...]] = {
    LocatorTarget.LISTING_CONTAINER: (
        _d('article[data-ref="product-item"]'),  # Takealot's data attribute
        _d('article'),
        _d('[data-ref="product-item"]'),
        _d('.product-item'),
        _d('.product-card'),
        _d('[data-testid*="product"]'),
    ),
    LocatorTarget.PRODUCT_NAME: (
        _d('[data-ref="product-title"]'),
        _d('.product-title'),
        _d('h3'),
        _d('h4'),
        _d('[data-testid*="title"]'),
        _d('a[href*="/product/"]'),
    ),
    LocatorTarget.PRODUCT_PRICE: (
        _d('[data-ref="price"]'),
        _d('.price'),
        _d('[class*="price"]'),
        _d('[data-testid*="price"]'),
        _d('span', has_text='R '),
        _d('div', has_text='R '),
    ),
    # Containers holding a given name fragment; rendered per fragment
    LocatorTarget.FRAGMENT_CONTAINER: (
        _d('[aria-label="{fragment}"]'),
        _d('[aria-label*="{fragment}"]'),
        _d('article', has_text='{fragment}'),
        _d('[data-ref="product-item"]', has_text='{fragment}'),
    ),
    LocatorTarget.ADD_TO_CART: (
        _d('button[aria-label="Add to Cart"]'),
        _d('button', has_text='Add to Cart'),
        _d('role=button[name=/add to (cart|basket)/i]'),
    ),
    LocatorTarget.ADD_TO_WISHLIST: (
        _d('[aria-label="Add to wishlist"]'),
        _d('button[aria-label*="wishlist"]'),
        _d('button[aria-label*="wishlist" i]'),
        _d('role=button[name=/wish\\s*list/i]'),
    ),
    LocatorTarget.NOTIFICATION_DISMISS: (
        _d('button', has_text='NOT NOW'),
        _d('button', has_text='Accept'),
        _d('button', has_text='Close'),
        _d('button', has_text='Dismiss'),
        _d('[aria-label*="Close"]'),
        _d('[aria-label*="Dismiss"]'),
        _d('.close-button'),
        _d('.cookie-accept'),
        _d('.cookie-dismiss'),
    ),
    LocatorTarget.PAGE_BLOCKER: (
        _d('.ab-page-blocker'),
        _d('.page-blocker'),
        _d('.overlay-blocker'),
        _d('.cookies-banner-module_cookie-banner_hsodu'),
    ),
    LocatorTarget.OVERLAY: (
        _d('[role="dialog"]'),
        _d('.modal'),
        _d('.popup'),
    ),
    LocatorTarget.OVERLAY_CLOSE: (
        _d('button', has_text='Close'),
        _d('button', has_text='×'),
        _d('[aria-label*="Close"]'),
    ),
    # Cart / wishlist entries; rendered per fragment
    LocatorTarget.SAVED_ITEM: (
        _d('a', has_text='{fragment}'),
        _d('[data-ref="product-link"]', has_text='{fragment}'),
        _d('.cart-item a', has_text='{fragment}'),
        _d('.product-item a', has_text='{fragment}'),
    ),
    # Price text in the cart / wishlist; rendered per expected price
    LocatorTarget.PRICE_DISPLAY: (
        _d('[aria-label="Shipped from Takealot"]', has_text='{fragment}'),
        _d('role=complementary', has_text='{fragment}'),
        _d('section', has_text='{fragment}'),
        _d('text="{fragment}"'),
    ),
    LocatorTarget.SEARCH_BOX: (
        _d('role=textbox[name="Search for products, brands..."]'),
        _d('input[name="search"]'),
        _d('input[type="search"]'),
    ),
    LocatorTarget.CART_LINK: (
        _d('role=link[name="Go to Cart"]'),
        _d('a[href*="/cart"]'),
    ),
    LocatorTarget.WISHLIST_LINK: (
        _d('role=link[name="wishlist"]'),
        _d('a[href*="wishlist"]'),
    ),
    # Brand facet in the results filter panel; rendered per brand
    LocatorTarget.BRAND_FILTER: (
        _d('label', has_text='{fragment}'),
        _d('[data-ref*="brand"]', has_text='{fragment}'),
        _d('text={fragment}'),
    ),
    # Known-fixed listing, located by its accessible label
    LocatorTarget.FALLBACK_LISTING: (
        _d('[aria-label="{fragment}"]'),
    ),
}


@dataclass(frozen=True)
class StrategyMatch:
    """The winning descriptor for a target and the elements it produced"""
    target: LocatorTarget
    descriptor: Descriptor
    index: int  # 1-based priority of the winning descriptor
    elements: List[ElementHandle]

    @property
    def first(self) -> ElementHandle:
        return self.elements[0]


class LocatorStrategySet:
    """Ordered descriptor lists per target, with first-non-empty evaluation"""

    def __init__(
        self,
        overrides: Optional[Mapping[LocatorTarget, Sequence[Descriptor]]] = None,
        logger=None,
    ):
        self.strategies: Dict[LocatorTarget, Tuple[Descriptor, ...]] = dict(DEFAULT_STRATEGIES)
        for target, descriptors in (overrides or {}).items():
            self.strategies[LocatorTarget(target)] = tuple(descriptors)
        self.log = component_logger('LOCATOR', logger, source='service')

    def descriptors(self, target: LocatorTarget, fragment: Optional[str] = None) -> Tuple[Descriptor, ...]:
        descriptors = self.strategies.get(target, ())
        if fragment is None:
            return descriptors
        return tuple(descriptor.render(fragment) for descriptor in descriptors)

    def describe(self, target: LocatorTarget, fragment: Optional[str] = None) -> List[str]:
        return [str(descriptor) for descriptor in self.descriptors(target, fragment)]

    async def first_match(
        self,
        root,
        target: LocatorTarget,
        fragment: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Optional[StrategyMatch]:
        """
        Try the target's descriptors in order against root (a page or an element).

        Returns the first descriptor with at least one element, or None. A
        descriptor whose query raises is logged and treated as empty.
        """
        for index, descriptor in enumerate(self.descriptors(target, fragment), start=1):
            try:
                elements = await root.find_all(descriptor, limit=limit)
            except Exception as e:
                self.log.debug(f"{target.value}: strategy {index} '{descriptor}' raised: {e}")
                continue

            if elements:
                self.log.info(f"{target.value}: found {len(elements)} using strategy {index} '{descriptor}'")
                return StrategyMatch(target, descriptor, index, elements)

            self.log.debug(f"{target.value}: strategy {index} '{descriptor}' found nothing")

        return None

    async def first_visible(
        self,
        root,
        target: LocatorTarget,
        fragment: Optional[str] = None,
        timeout: float = 2.0,
        limit: Optional[int] = 5,
    ) -> Optional[ElementHandle]:
        """First visible element of the first descriptor that yields any"""
        match = await self.first_match(root, target, fragment, limit=limit)
        if match is None:
            return None

        for element in match.elements:
            try:
                if await element.is_visible(timeout=timeout):
                    return element
            except Exception as e:
                self.log.debug(f"{target.value}: visibility check failed: {e}")
        return None

    async def read_field_text(
        self,
        container: ElementHandle,
        target: LocatorTarget,
        validator: Callable[[str], bool] = bool,
        timeout: float = 2.0,
    ) -> Tuple[str, Descriptor]:
        """
        Read a field (name, price) from inside a listing container.

        A field descriptor only succeeds when its first element's text is
        non-empty and passes the validator.

        Raises:
            ElementNotFoundError: no descriptor produced valid text
        """
        for index, descriptor in enumerate(self.descriptors(target), start=1):
            try:
                elements = await container.find_all(descriptor, limit=1)
                if not elements:
                    continue
                text = (await elements[0].read_text(timeout=timeout)).strip()
            except Exception as e:
                self.log.debug(f"{target.value} selector '{descriptor}' failed: {e}")
                continue

            if text and validator(text):
                return text, descriptor

        raise ElementNotFoundError(target.value, self.describe(target), 'no selector produced valid text')


def first_long_line(text: Optional[str], min_length: int = 10) -> Optional[str]:
    """First line of free text longer than min_length, for best-effort name extraction"""
    for line in (text or '').splitlines():
        line = line.strip()
        if len(line) > min_length:
            return line
    return None


async def click_with_escalation(element: ElementHandle, description: str = 'element', timeout: float = 5.0, logger=None) -> str:
    """
    Click with escalating force: normal click, forced click, script click.

    Returns:
        The method that worked: 'click', 'force_click' or 'script_click'

    Raises:
        ClickFailedError: all three failed
    """
    log = component_logger('LOCATOR', logger, source='service')
    errors: List[str] = []

    attempts: Iterable[Tuple[str, Callable]] = (
        ('click', lambda: element.click(force=False, timeout=timeout)),
        ('force_click', lambda: element.click(force=True, timeout=timeout)),
        ('script_click', lambda: element.script_click()),
    )

    for method, attempt in attempts:
        try:
            await attempt()
            if errors:
                log.info(f"Clicked {description} via {method} after {len(errors)} failed attempts")
            return method
        except Exception as e:
            errors.append(f"{method}: {e}")
            log.warning(f"{method} failed for {description}: {e}")

    raise ClickFailedError(description, errors)
