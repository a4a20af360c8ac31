#!/usr/bin/env python3
"""
E-commerce Keyword Library
Centralized keyword definitions for listing classification
"""

import re
from typing import Dict, List
from dataclasses import dataclass, field


@dataclass(frozen=True)
class KeywordSet:
    """Container for keyword variations"""
    primary: List[str]  # Primary keywords to try first
    secondary: List[str] = field(default_factory=list)  # Fallback keywords
    patterns: List[str] = field(default_factory=list)  # Regex patterns for flexible matching

    def all_keywords(self) -> List[str]:
        """Get all keywords combined"""
        return self.primary + self.secondary

    def matches(self, text: str) -> bool:
        """Case-insensitive substring match against any keyword or pattern"""
        if not text:
            return False
        lowered = text.lower()
        if any(keyword.lower() in lowered for keyword in self.all_keywords()):
            return True
        return any(re.search(pattern, text, re.IGNORECASE) for pattern in self.patterns)


# ============================================
# PRODUCT CATEGORIES
# ============================================

CATEGORY_KEYWORDS: Dict[str, KeywordSet] = {
    'tv': KeywordSet(
        primary=['tv', 'television', 'smart tv', 'led tv', 'qled', 'oled'],
    ),
    'monitor': KeywordSet(
        primary=['monitor', 'display', 'screen', 'lcd', 'gaming monitor'],
    ),
}


# Words ignored when shortening a product name into a matching fragment
FRAGMENT_STOP_WORDS = frozenset(['with', 'and', 'the', 'for', 'smart'])


def get_category_keywords(category: str) -> KeywordSet:
    """Look up a category keyword set by name ('tv', 'monitor')"""
    try:
        return CATEGORY_KEYWORDS[category.lower()]
    except KeyError:
        raise KeyError(f"Unknown product category '{category}'. Known: {sorted(CATEGORY_KEYWORDS)}") from None
