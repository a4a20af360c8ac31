#!/usr/bin/env python3
"""
Product Scanner
Walks the first listings of a results page in display order and returns the
first one satisfying the caller's criteria.

Tie-break rule: FIRST match in display order, never cheapest or best.
"""

from typing import List, Optional

from storefront_e2e.core.config import StorefrontConfig
from storefront_e2e.core.exceptions import ElementNotFoundError, NoListingsError
from storefront_e2e.core.logger_config import component_logger
from storefront_e2e.dom.browser import ElementHandle, PageQuery
from storefront_e2e.dom.service import LocatorStrategySet, LocatorTarget, first_long_line
from storefront_e2e.flows.criteria import (
    BrandCategoryPriceCriteria,
    CategoryRefreshRateCriteria,
    CriteriaFn,
    explain_rejection,
)
from storefront_e2e.models.listing import ListingCandidate, RetryPolicy
from storefront_e2e.utils.error_handler import (
    NETWORK_RETRY_POLICY,
    ErrorCollector,
    ValidationRule,
    safe_element_operation,
    validate_data,
    with_graceful_degradation,
    with_network_resilience,
)
from storefront_e2e.utils.price_utils import extract_price_text, looks_like_price

CANDIDATE_RULES = [
    ValidationRule(lambda data: bool(data['name']), 'Product name is empty or invalid'),
    ValidationRule(
        lambda data: bool(data['price']) and StorefrontConfig.CURRENCY_PREFIX in data['price'],
        'Product price is missing or invalid format',
    ),
]


class ProductScanner:
    """Finds the first listing on a results page that satisfies a predicate"""

    def __init__(
        self,
        page: PageQuery,
        locators: Optional[LocatorStrategySet] = None,
        max_listings: Optional[int] = None,
        settle_delay: Optional[float] = None,
        field_timeout: Optional[float] = None,
        retry_policy: RetryPolicy = NETWORK_RETRY_POLICY,
        logger=None,
    ):
        self.page = page
        self.log = component_logger('SCANNER', logger, source='product_scanner')
        self.locators = locators or LocatorStrategySet(logger=self.log.logger)
        self.max_listings = max_listings or StorefrontConfig.get_max_listings()
        self.settle_delay = StorefrontConfig.get_settle_delay() if settle_delay is None else settle_delay
        self.field_timeout = field_timeout or StorefrontConfig.get_default_timeout()
        self.retry_policy = retry_policy

    async def get_all_product_containers(self) -> List[ElementHandle]:
        """
        Wait for the results view to settle, then return up to max_listings
        containers from the first container strategy that yields any.
        """
        if self.settle_delay:
            await self.page.wait(self.settle_delay)

        match = await self.locators.first_match(
            self.page, LocatorTarget.LISTING_CONTAINER, limit=self.max_listings
        )
        if match is None:
            return []

        self.log.info(f"Found {len(match.elements)} products using selector: {match.descriptor}")
        return match.elements[:self.max_listings]

    async def get_product_name(self, container: ElementHandle) -> str:
        """Name field via strategies; falls back to the first long line of container text"""

        async def from_fields():
            text, _ = await self.locators.read_field_text(
                container, LocatorTarget.PRODUCT_NAME, timeout=min(2.0, self.field_timeout)
            )
            return text

        async def from_container_text():
            self.log.info("Using fallback product name extraction")
            all_text = await container.read_text(timeout=self.field_timeout)
            name = first_long_line(all_text)
            if not name:
                raise ElementNotFoundError('product name', detail='no readable product name found in container text')
            return name

        return await safe_element_operation(
            from_fields, from_container_text, self.field_timeout, 'product name extraction', log=self.log
        )

    async def get_product_price(self, container: ElementHandle) -> str:
        """Price field via strategies; falls back to a currency regex over container text"""

        async def from_fields():
            text, _ = await self.locators.read_field_text(
                container, LocatorTarget.PRODUCT_PRICE, validator=looks_like_price,
                timeout=min(2.0, self.field_timeout),
            )
            return text

        async def from_container_text():
            self.log.info("Using fallback price extraction from container text")
            all_text = await container.read_text(timeout=self.field_timeout)
            price = extract_price_text(all_text)
            if not price:
                raise ElementNotFoundError('product price', detail='no price information found in product container')
            self.log.info(f"Extracted price using pattern: {price}")
            return price

        return await safe_element_operation(
            from_fields, from_container_text, self.field_timeout, 'product price extraction', log=self.log
        )

    async def extract_candidate(self, container: ElementHandle, position: int) -> ListingCandidate:
        name = await self.get_product_name(container)
        price = await self.get_product_price(container)

        validate_data({'name': name, 'price': price}, CANDIDATE_RULES, f"Product {position} data")

        raw_text = await with_graceful_degradation(
            lambda: container.read_text(timeout=self.field_timeout), '', f"product {position} raw text", log=self.log
        )
        return ListingCandidate(name=name, price_text=price, raw_text=raw_text.strip(), position=position)

    async def scan(self, criteria: CriteriaFn, description: str = 'listing') -> Optional[ListingCandidate]:
        """One pass over the current results; no retry"""
        containers = await self.get_all_product_containers()
        self.log.info(f"Found {len(containers)} product containers to analyze")

        if not containers:
            raise NoListingsError(self.locators.describe(LocatorTarget.LISTING_CONTAINER))

        errors = ErrorCollector(f"{description} analysis", log=self.log)

        for position, container in enumerate(containers, start=1):
            try:
                candidate = await self.extract_candidate(container, position)
                self.log.info(f"Checking product {position}/{len(containers)}: {candidate.name} - {candidate.price_text}")
                matched = bool(criteria(candidate))
                reasons = [] if matched else explain_rejection(criteria, candidate)
            except Exception as e:
                errors.add(f"Product {position} analysis", e)
                continue

            if matched:
                errors.log_summary(len(containers))
                self.log.info(f"Found matching {description}: {candidate.name} at {candidate.price_text}")
                return candidate

            for reason in reasons:
                self.log.info(f"Rejected: {reason}")

        errors.log_summary(len(containers))
        self.log.info(f"No {description} found after analyzing {len(containers)} products")
        return None

    async def find_first_match(self, criteria: CriteriaFn, description: Optional[str] = None, **retry_kwargs) -> Optional[ListingCandidate]:
        """
        First listing in display order satisfying criteria, or None.

        An empty results view is retried with network-resilient backoff; a
        scan that finds no qualifying listing returns None without retrying.
        """
        description = description or str(criteria)
        self.log.info(f"Looking for {description}")

        return await with_network_resilience(
            lambda: self.scan(criteria, description),
            should_retry=True,
            description=f"{description} search operation",
            policy=self.retry_policy,
            log=self.log,
            **retry_kwargs,
        )

    async def find_first_brand_category_within_price(self, brand: str, category, max_price: float) -> Optional[ListingCandidate]:
        criteria = BrandCategoryPriceCriteria.build(brand, max_price, category)
        return await self.find_first_match(criteria)

    async def find_first_samsung_tv_within_price(self, max_price: float) -> Optional[ListingCandidate]:
        return await self.find_first_brand_category_within_price('Samsung', 'tv', max_price)

    async def find_first_high_refresh_rate_monitor(self, min_refresh_rate: int) -> Optional[ListingCandidate]:
        criteria = CategoryRefreshRateCriteria.build('monitor', min_refresh_rate)
        return await self.find_first_match(criteria)
