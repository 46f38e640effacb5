"""
Keyword-based category inference against a caller-supplied vocabulary.
"""

from typing import List, Optional, Sequence, Tuple
import re

DEFAULT_VOUCHER_CATEGORIES = [
    "Food & Dining",
    "Shopping",
    "Travel",
    "Entertainment",
    "Health & Beauty",
    "Electronics",
    "Groceries",
    "Fashion",
    "Services",
    "Others",
]

# Catch-all label that must never be inferred from text
CATCH_ALL_KEYWORD = 'others'
MIN_KEYWORD_LENGTH = 4

_TOKEN_SPLIT = re.compile(r'[^a-z0-9]+')


def category_keywords(category: str) -> List[str]:
    """
    Derive the match keywords for a category label.

    Examples:
        >>> category_keywords("Food & Dining")
        ['food', 'dining']
        >>> category_keywords("Others")
        []
    """
    return [
        token
        for token in _TOKEN_SPLIT.split(category.lower())
        if len(token) >= MIN_KEYWORD_LENGTH and token != CATCH_ALL_KEYWORD
    ]


def match_category(text: str, categories: Sequence[str]) -> Optional[Tuple[str, str]]:
    """Return (category, keyword) for the first category whose keyword appears in text."""
    normalized_text = (text or '').lower()

    for category in categories:
        for keyword in category_keywords(category):
            if keyword in normalized_text:
                return category, keyword

    return None


def pick_category(text: str, categories: Sequence[str]) -> str:
    """
    Pick the first category (in vocabulary order) mentioned in text.

    Args:
        text: Voucher text
        categories: Ordered category labels; earlier entries win ties

    Returns:
        The matching label verbatim, or '' if none match
    """
    match = match_category(text, categories)
    return match[0] if match else ''
