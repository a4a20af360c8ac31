from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront_e2e.core.exceptions import ScenarioConfigError
from storefront_e2e.flows.criteria import (
    BrandCategoryPriceCriteria,
    CategoryRefreshRateCriteria,
    CriteriaFn,
)
from storefront_e2e.flows.verification import TargetView, VerificationResult
from storefront_e2e.models.listing import ListingCandidate
from storefront_e2e.utils.ecommerce_keywords import CATEGORY_KEYWORDS


# -------------------------
# SCENARIO CONFIGURATION
# -------------------------

class ScenarioConfig(BaseModel):
    """Per-scenario selection parameters: what to search, what to pick, where it goes"""
    model_config = ConfigDict(frozen=True)

    name: str = 'scenario'
    search_term: str = Field(min_length=1)
    brand: Optional[str] = None
    category: Optional[str] = None  # key into CATEGORY_KEYWORDS
    max_price: Optional[float] = Field(default=None, gt=0)
    min_refresh_rate: Optional[int] = Field(default=None, gt=0)
    target_view: TargetView = TargetView.CART
    brand_filter: Optional[str] = None  # facet label to tick before scanning
    expected_price: Optional[str] = None
    # Known-fixed listing added instead when no listing qualifies
    fallback_listing: Optional[str] = None
    fallback_expected_price: Optional[str] = None

    @model_validator(mode='after')
    def check_criteria(self):
        if self.category is not None and self.category.lower() not in CATEGORY_KEYWORDS:
            raise ScenarioConfigError(f"Unknown category '{self.category}'. Known: {sorted(CATEGORY_KEYWORDS)}")
        if self.max_price is None and self.min_refresh_rate is None:
            raise ScenarioConfigError('Scenario needs a price ceiling (max_price) or a refresh-rate floor (min_refresh_rate)')
        if self.max_price is not None and not self.brand:
            raise ScenarioConfigError('A price-ceiling scenario needs a brand')
        if self.min_refresh_rate is not None and self.category is None:
            raise ScenarioConfigError('A refresh-rate scenario needs a category')
        if self.fallback_expected_price and not self.fallback_listing:
            raise ScenarioConfigError('fallback_expected_price needs a fallback_listing')
        return self

    def to_criteria(self) -> CriteriaFn:
        if self.max_price is not None:
            return BrandCategoryPriceCriteria.build(self.brand, self.max_price, self.category)
        return CategoryRefreshRateCriteria.build(self.category, self.min_refresh_rate)


SAMSUNG_TV_SCENARIO = ScenarioConfig(
    name='samsung-tv',
    search_term='65 tv',
    brand='Samsung',
    category='tv',
    max_price=15000,
    target_view=TargetView.CART,
    brand_filter='Samsung',
)

MONITOR_SCENARIO = ScenarioConfig(
    name='monitor-120hz',
    search_term='120Hz Monitor',
    category='monitor',
    min_refresh_rate=120,
    target_view=TargetView.WISHLIST,
)

SAMSUNG_TV_FALLBACK_SCENARIO = ScenarioConfig(
    name='samsung-tv-fallback',
    search_term='65 tv',
    brand='Samsung',
    category='tv',
    max_price=15000,
    target_view=TargetView.CART,
    fallback_listing='Samsung 65" DU7010 4K UHD',
    fallback_expected_price='R 10,499',
)

BUILTIN_SCENARIOS = {
    SAMSUNG_TV_SCENARIO.name: SAMSUNG_TV_SCENARIO,
    MONITOR_SCENARIO.name: MONITOR_SCENARIO,
    SAMSUNG_TV_FALLBACK_SCENARIO.name: SAMSUNG_TV_FALLBACK_SCENARIO,
}


# -------------------------
# SCENARIO RESULT
# -------------------------

class ScenarioResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    scenario: str
    selected: Optional[ListingCandidate] = None
    dispatch_strategy: Optional[str] = None
    verification: Optional[VerificationResult] = None
    used_fallback: bool = False
    error: Optional[str] = None  # set when the scenario raised while running alongside others

    @property
    def success(self) -> bool:
        return self.error is None and self.verification is not None
