#!/usr/bin/env python3
"""
Product analysis helpers for listing titles.
Every function here is pure: same text in, same answer out.
"""

import re
from typing import Iterable, List, Optional, Tuple, Union

from storefront_e2e.utils.ecommerce_keywords import (
    CATEGORY_KEYWORDS,
    FRAGMENT_STOP_WORDS,
    KeywordSet,
)

# Number, optional whitespace, Hz unit
REFRESH_RATE_PATTERN = re.compile(r'(\d+)\s*hz', re.IGNORECASE)


def extract_refresh_rate(product_text: Optional[str]) -> Optional[int]:
    """
    Extract the refresh rate from a listing title.

    Returns the FIRST "<number>Hz" occurrence, not the largest. Callers
    that want the best value across listings must scan every candidate.
    """
    if not product_text:
        return None

    match = REFRESH_RATE_PATTERN.search(product_text)
    if match:
        return int(match.group(1))
    return None


def meets_refresh_rate_requirement(product_text: Optional[str], min_refresh_rate: int) -> bool:
    refresh_rate = extract_refresh_rate(product_text)
    return refresh_rate is not None and refresh_rate >= min_refresh_rate


def is_brand_match(product_text: Optional[str], brand: str) -> bool:
    if not product_text or not brand:
        return False
    return brand.lower() in product_text.lower()


def is_category_match(product_text: Optional[str], category_keywords: Union[KeywordSet, Iterable[str]]) -> bool:
    """Case-insensitive keyword-set membership test"""
    if not product_text:
        return False
    if isinstance(category_keywords, KeywordSet):
        return category_keywords.matches(product_text)
    lowered = product_text.lower()
    return any(keyword.lower() in lowered for keyword in category_keywords)


def is_samsung_brand(product_text: Optional[str]) -> bool:
    return is_brand_match(product_text, 'samsung')


def is_tv(product_text: Optional[str]) -> bool:
    return is_category_match(product_text, CATEGORY_KEYWORDS['tv'])


def is_monitor(product_text: Optional[str]) -> bool:
    return is_category_match(product_text, CATEGORY_KEYWORDS['monitor'])


# ============================================
# NAME FRAGMENTS
# ============================================

def extract_key_words(product_name: str) -> List[str]:
    """Significant words (longer than 3 chars, not stop words) for flexible matching"""
    return [
        word for word in product_name.split()
        if len(word) > 3 and word.lower() not in FRAGMENT_STOP_WORDS
    ]


def create_partial_text(product_name: str, word_count: int = 3) -> str:
    """First few key words joined; the full name when fewer than 2 key words exist"""
    key_words = extract_key_words(product_name)
    if len(key_words) >= 2:
        return ' '.join(key_words[:word_count])
    return product_name


def extract_brand_and_model(product_name: str) -> Tuple[str, str]:
    words = product_name.split()
    brand = words[0] if words else ''
    model = words[1] if len(words) > 1 else ''
    return brand, model


def derive_name_fragments(product_name: str, word_count: int = 3, include_brand_only: bool = False) -> List[str]:
    """
    Fragments of a listing name, most specific first.

    Order: full name, first N words, first N key words, brand + second word,
    and optionally the bare brand. Duplicates are dropped, order is kept.
    """
    name = ' '.join(product_name.split())
    if not name:
        return []

    brand, model = extract_brand_and_model(name)
    candidates = [
        name,
        ' '.join(name.split()[:word_count]),
        create_partial_text(name, word_count),
        f"{brand} {model}".strip(),
    ]
    if include_brand_only:
        candidates.append(brand)

    fragments: List[str] = []
    for fragment in candidates:
        if fragment and fragment not in fragments:
            fragments.append(fragment)
    return fragments
