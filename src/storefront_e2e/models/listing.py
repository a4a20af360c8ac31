from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from storefront_e2e.utils.price_utils import parse_price
from storefront_e2e.utils.product_utils import extract_refresh_rate


# -------------------------
# LISTING MODELS
# -------------------------

class ListingCandidate(BaseModel):
    """One listing under evaluation, built from a single results container"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    price_text: str
    raw_text: str = ''
    position: int = Field(default=1, ge=1)  # 1-based display order

    @property
    def price(self) -> Optional[float]:
        return parse_price(self.price_text)

    @property
    def refresh_rate(self) -> Optional[int]:
        return extract_refresh_rate(self.name)


# -------------------------
# RETRY MODEL
# -------------------------

class RetryPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, ge=1)
    base_delay: float = Field(default=1.0, ge=0)  # seconds
    description: str = 'operation'

    def delay_after(self, attempt: int) -> float:
        """Backoff delay after a failed 1-based attempt"""
        return self.base_delay * 2 ** (attempt - 1)

    def max_total_delay(self) -> float:
        return self.base_delay * (2 ** self.max_attempts - 1)
