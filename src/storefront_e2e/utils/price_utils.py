#!/usr/bin/env python3
"""
Price parsing and comparison for Rand-formatted listing prices
Handles "R 10,499", "R10,499", "R10499" and "From R 2,749"
"""

import re
from typing import Optional

from storefront_e2e.core.config import StorefrontConfig

# Comma-grouped ("10,499"), space-grouped ("15 001", also NBSP / narrow NBSP, never a newline)
# or plain ("10499") amount with optional cents
_AMOUNT = r'(?:\d{1,3}(?:,\d{3})+|\d{1,3}(?:[ \u00a0\u202f]\d{3})+|\d+)(?:\.\d{1,2})?'

# Currency marker not preceded by a letter, so "HDR10" is not a price
PRICE_PATTERN = re.compile(r'(?<![A-Za-z])R\s*(?P<amount>' + _AMOUNT + r')')

# Ordered patterns for free-text fallback extraction
PRICE_TEXT_PATTERNS = [
    re.compile(r'From\s+R\s*' + _AMOUNT, re.IGNORECASE),   # Range format: From R 2,749
    re.compile(r'(?<![A-Za-z])R\s*' + _AMOUNT),             # Standard / compact: R 10,499, R10499
]


def parse_price(price_text: Optional[str]) -> Optional[float]:
    """
    Parse a Rand price string to a numeric value.

    Args:
        price_text: Price string like "R 10,499", "R10499" or "From R 2,749"

    Returns:
        Numeric price, or None when no currency amount is present.
        None is never coerced to 0.
    """
    if not price_text:
        return None

    match = PRICE_PATTERN.search(price_text)
    if not match:
        return None

    # Remove thousands separators and whitespace
    cleaned = re.sub(r'[,\s]', '', match.group('amount'))
    if not cleaned:
        return None

    try:
        return float(cleaned)
    except ValueError:
        return None


def is_price_within_limit(price_text: Optional[str], max_price: float) -> bool:
    """True iff the price parses and is not more than max_price"""
    price = parse_price(price_text)
    return price is not None and price <= max_price


def format_price(price: float) -> str:
    """Format a numeric price for display, e.g. 10499 -> "R 10,499" """
    if float(price).is_integer():
        amount = f"{int(price):,}"
    else:
        amount = f"{price:,.2f}"
    return f"{StorefrontConfig.CURRENCY_PREFIX} {amount}"


def looks_like_price(text: Optional[str]) -> bool:
    """Price text validator used by field extraction"""
    return bool(text) and StorefrontConfig.CURRENCY_PREFIX in text and parse_price(text) is not None


def extract_price_text(text: Optional[str]) -> Optional[str]:
    """Return the first currency-amount substring found in free text"""
    if not text:
        return None

    for pattern in PRICE_TEXT_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0).strip()

    return None
