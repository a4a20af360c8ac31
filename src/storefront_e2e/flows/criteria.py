"""
Selection criteria: immutable predicates over a ListingCandidate.

Any callable taking a ListingCandidate and returning bool is accepted by the
scanner; the classes here also explain rejections for the log.
"""

from typing import Callable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from storefront_e2e.models.listing import ListingCandidate
from storefront_e2e.utils.ecommerce_keywords import KeywordSet, get_category_keywords
from storefront_e2e.utils.price_utils import format_price, is_price_within_limit
from storefront_e2e.utils.product_utils import (
    extract_refresh_rate,
    is_brand_match,
    is_category_match,
)

CriteriaFn = Callable[[ListingCandidate], bool]


def _keywords(category: Union[str, KeywordSet, None]) -> Optional[KeywordSet]:
    if category is None or isinstance(category, KeywordSet):
        return category
    return get_category_keywords(category)


class BrandCategoryPriceCriteria(BaseModel):
    """brand matches AND category matches AND price <= ceiling"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    brand: str = Field(min_length=1)
    max_price: float = Field(gt=0)
    category: Optional[KeywordSet] = None  # None skips the category check

    @classmethod
    def build(cls, brand: str, max_price: float, category: Union[str, KeywordSet, None] = None):
        return cls(brand=brand, max_price=max_price, category=_keywords(category))

    def __call__(self, candidate: ListingCandidate) -> bool:
        return not self.explain(candidate)

    def explain(self, candidate: ListingCandidate) -> List[str]:
        """Reasons the candidate does not match; empty when it matches"""
        reasons = []
        if not is_brand_match(candidate.name, self.brand):
            reasons.append(f"Not {self.brand} brand: {candidate.name}")
        if self.category is not None and not is_category_match(candidate.name, self.category):
            reasons.append(f"Not in category {self.category.primary[0]!r}: {candidate.name}")
        if not is_price_within_limit(candidate.price_text, self.max_price):
            reasons.append(f"Price too high or unreadable: {candidate.price_text} > {format_price(self.max_price)}")
        return reasons

    def __str__(self):
        category = f" {self.category.primary[0]}" if self.category else ''
        return f"{self.brand}{category} under {format_price(self.max_price)}"


class CategoryRefreshRateCriteria(BaseModel):
    """category matches AND refresh rate >= floor"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    category: KeywordSet
    min_refresh_rate: int = Field(gt=0)

    @classmethod
    def build(cls, category: Union[str, KeywordSet], min_refresh_rate: int):
        return cls(category=_keywords(category), min_refresh_rate=min_refresh_rate)

    def __call__(self, candidate: ListingCandidate) -> bool:
        return not self.explain(candidate)

    def explain(self, candidate: ListingCandidate) -> List[str]:
        reasons = []
        if not is_category_match(candidate.name, self.category):
            reasons.append(f"Not a {self.category.primary[0]}: {candidate.name}")
        rate = extract_refresh_rate(candidate.name)
        if rate is None:
            reasons.append(f"No refresh rate found in: {candidate.name}")
        elif rate < self.min_refresh_rate:
            reasons.append(f"Refresh rate too low: {rate}Hz < {self.min_refresh_rate}Hz required")
        return reasons

    def __str__(self):
        return f"{self.category.primary[0]} with {self.min_refresh_rate}Hz or higher"


def explain_rejection(criteria: CriteriaFn, candidate: ListingCandidate) -> List[str]:
    explain = getattr(criteria, 'explain', None)
    if callable(explain):
        return explain(candidate)
    return ['criteria not satisfied']
