"""
Voucher field extractor for pasted or OCR'd voucher text.

Each field runs its own pipeline: labelled patterns first ("Code: ABC123"),
then a lower-confidence heuristic only if no label matched. The extractor
holds nothing but compiled patterns, so one instance can be shared freely.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from usemyvoucher.models.voucher import ExtractedVoucherFields
from usemyvoucher.utils.categories import DEFAULT_VOUCHER_CATEGORIES, match_category
from usemyvoucher.utils.dates import extract_date
from usemyvoucher.utils.text import get_extracted_text_lines, sanitize_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternSpec:
    """A named regex pattern with example and notes for documentation."""
    name: str
    pattern: str
    example: str
    notes: Optional[str] = None
    priority: Optional[int] = None
    flags: int = re.IGNORECASE
    compiled: re.Pattern = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'compiled', re.compile(self.pattern, self.flags))


def find_first_match(text: str, specs: Sequence[PatternSpec]) -> Optional[Tuple[str, str]]:
    """
    Try specs in order and return (value, spec name) for the first hit.

    A spec only counts as a hit if its first group is non-empty once
    trimmed; later specs are not tried after a hit.
    """
    for spec in specs:
        match = spec.compiled.search(text)
        if match and match.group(1):
            value = match.group(1).strip()
            if value:
                return value, spec.name
    return None


def _new_debug() -> Dict[str, Any]:
    return {'patterns_matched': {}, 'warnings': []}


class VoucherExtractor:
    """Service for extracting structured voucher fields from free text."""

    # Lines carrying voucher metadata are never merchant names
    MERCHANT_STOPWORDS = re.compile(
        r'(voucher|coupon|promo|discount|expiry|expires|valid|code|offer|receipt)',
        re.IGNORECASE
    )
    MERCHANT_MIN_LENGTH = 3
    MERCHANT_MAX_LENGTH = 60

    def __init__(self):
        """Initialize extractor with regex patterns."""
        self._init_patterns()

    def _init_patterns(self):
        """Initialize label patterns (priority order) and fallback patterns."""

        self.merchant_patterns = [
            PatternSpec(
                name='merchant_label',
                pattern=r'(?:merchant|store|shop|vendor|brand)\s*[:\-]\s*(.+)',
                example='Store: ACME Outlet',
                priority=1,
            ),
            PatternSpec(
                name='from_label',
                pattern=r'(?:from)\s*[:\-]\s*(.+)',
                example='From: ACME',
                priority=2,
            ),
        ]

        self.code_patterns = [
            PatternSpec(
                name='prefixed_code_label',
                pattern=r'(?:voucher|coupon|promo|discount)\s*code\s*[:#\-]?\s*([A-Za-z0-9][A-Za-z0-9\-_]{3,})',
                example='Coupon Code: SAVE2024X',
                priority=1,
            ),
            PatternSpec(
                name='bare_code_label',
                pattern=r'\bcode\s*[:#\-]?\s*([A-Za-z0-9][A-Za-z0-9\-_]{3,})',
                example='Code # ab12-cd',
                priority=2,
            ),
        ]

        self.discount_patterns = [
            PatternSpec(
                name='discount_label',
                pattern=r'(?:discount|offer|deal|save(?:\s*up\s*to)?)\s*[:\-]\s*(.+)',
                example='Save up to: 50%',
                priority=1,
            ),
        ]

        self.description_patterns = [
            PatternSpec(
                name='description_label',
                pattern=r'(?:description|details|terms?)\s*[:\-]\s*(.+)',
                example='Terms: Valid on orders above $20',
                priority=1,
            ),
        ]

        self.max_uses_patterns = [
            PatternSpec(
                name='max_uses_label',
                pattern=r'(?:max(?:imum)?\s*uses?|uses?)\s*[:\-]?\s*(\d{1,3})',
                example='Maximum uses: 5',
                notes='Whichever label comes first in the text wins',
                priority=1,
                flags=re.IGNORECASE | re.ASCII,
            ),
        ]

        # Fallback heuristics, used only when no label matched
        self.code_token_pattern = PatternSpec(
            name='uppercase_token',
            pattern=r'\b[A-Z0-9][A-Z0-9\-_]{5,20}\b',
            example='GET20NOW',
            notes='Case-sensitive: lower-case words are prose, not codes',
            flags=re.ASCII,
        )
        self.embedded_date_pattern = re.compile(r'\d{4}[\-/.]\d{1,2}[\-/.]\d{1,2}', re.ASCII)
        self.all_digits_pattern = re.compile(r'^\d+$', re.ASCII)

        self.discount_fallback_patterns = [
            PatternSpec(
                name='percentage',
                pattern=r'\b\d{1,3}\s?%\s*(?:off|discount)?\b',
                example='20% off',
                priority=1,
                flags=re.IGNORECASE | re.ASCII,
            ),
            PatternSpec(
                name='currency_amount',
                pattern=r'(?:\$|₹|€|£)\s?\d+(?:\.\d{1,2})?\s*(?:off|discount)?\b',
                example='₹150 off',
                priority=2,
                flags=re.IGNORECASE | re.ASCII,
            ),
        ]

    def parse(
        self,
        text: str,
        categories: Optional[Sequence[str]] = None,
        _debug: Optional[Dict[str, Any]] = None
    ) -> ExtractedVoucherFields:
        """
        Extract all voucher fields from raw text.

        Args:
            text: Pasted or OCR-extracted voucher text (may be empty)
            categories: Ordered category vocabulary; defaults to
                DEFAULT_VOUCHER_CATEGORIES
            _debug: Optional dict filled with the pattern that produced
                each field

        Returns:
            ExtractedVoucherFields with '' / None for anything not found
        """
        debug = _debug if _debug is not None else _new_debug()
        debug.setdefault('patterns_matched', {})
        debug.setdefault('warnings', [])

        sanitized = sanitize_text(text)
        lines = get_extracted_text_lines(sanitized)
        vocabulary = DEFAULT_VOUCHER_CATEGORIES if categories is None else list(categories)

        max_uses = self.extract_max_uses(sanitized, _debug=debug)

        result = ExtractedVoucherFields(
            merchant_name=self.extract_merchant(sanitized, lines, _debug=debug),
            voucher_code=self.extract_code(sanitized, _debug=debug).upper(),
            description=self.extract_description(sanitized, _debug=debug),
            discount_value=self.extract_discount(sanitized, _debug=debug),
            expiry_date=self.extract_expiry_date(sanitized, _debug=debug),
            category=self.extract_category(sanitized, vocabulary, _debug=debug),
            max_uses=max_uses if max_uses and max_uses > 0 else None,
        )

        logger.debug(
            "Extracted voucher fields from %d chars (%d lines): %s",
            len(sanitized), len(lines), debug['patterns_matched']
        )
        return result

    def _record(self, debug: Optional[Dict[str, Any]], field_name: str, pattern_name: str):
        if debug is not None:
            debug.setdefault('patterns_matched', {})[field_name] = pattern_name

    def _warn(self, debug: Optional[Dict[str, Any]], message: str):
        logger.warning(message, exc_info=True)
        if debug is not None:
            debug.setdefault('warnings', []).append(message)

    def extract_merchant(self, text: str, lines: Optional[List[str]] = None, _debug=None) -> str:
        """
        Extract the merchant name.

        Labelled lines ("Store: ...") win; otherwise the first short line
        that carries no voucher vocabulary is taken.
        """
        try:
            labelled = find_first_match(text, self.merchant_patterns)
            if labelled:
                self._record(_debug, 'merchant_name', labelled[1])
                return labelled[0]

            if lines is None:
                lines = get_extracted_text_lines(text)

            for line in lines:
                if not (self.MERCHANT_MIN_LENGTH <= len(line) <= self.MERCHANT_MAX_LENGTH):
                    continue
                if self.MERCHANT_STOPWORDS.search(line):
                    continue
                self._record(_debug, 'merchant_name', 'first_plain_line')
                return line

            return ''

        except (re.error, ValueError, AttributeError):
            self._warn(_debug, "Error extracting merchant")
            return ''

    def _is_code_candidate(self, token: str) -> bool:
        if self.all_digits_pattern.match(token):
            return False
        # Receipt dates like 2024-12-31 look like tokens too
        if self.embedded_date_pattern.search(token):
            return False
        return True

    def extract_code(self, text: str, _debug=None) -> str:
        """
        Extract the voucher code (not yet upper-cased).

        Without a label, the first upper-case alphanumeric token of 6-21
        characters that is neither all digits nor date-shaped is used.
        """
        try:
            labelled = find_first_match(text, self.code_patterns)
            if labelled:
                self._record(_debug, 'voucher_code', labelled[1])
                return labelled[0]

            for token in self.code_token_pattern.compiled.findall(text):
                if self._is_code_candidate(token):
                    self._record(_debug, 'voucher_code', self.code_token_pattern.name)
                    return token

            return ''

        except (re.error, ValueError, AttributeError):
            self._warn(_debug, "Error extracting voucher code")
            return ''

    def extract_discount(self, text: str, _debug=None) -> str:
        """Extract the discount, preferring a label, then a percentage, then a currency amount."""
        try:
            labelled = find_first_match(text, self.discount_patterns)
            if labelled:
                self._record(_debug, 'discount_value', labelled[1])
                return labelled[0]

            for spec in self.discount_fallback_patterns:
                match = spec.compiled.search(text)
                if match and match.group(0).strip():
                    self._record(_debug, 'discount_value', spec.name)
                    return match.group(0).strip()

            return ''

        except (re.error, ValueError, AttributeError):
            self._warn(_debug, "Error extracting discount")
            return ''

    def extract_description(self, text: str, _debug=None) -> str:
        try:
            labelled = find_first_match(text, self.description_patterns)
            if labelled:
                self._record(_debug, 'description', labelled[1])
                return labelled[0]
            return ''

        except (re.error, ValueError, AttributeError):
            self._warn(_debug, "Error extracting description")
            return ''

    def extract_max_uses(self, text: str, _debug=None) -> Optional[int]:
        """Extract the usage limit; None unless a positive number is labelled."""
        try:
            labelled = find_first_match(text, self.max_uses_patterns)
            if not labelled:
                return None

            value = int(labelled[0])
            if value <= 0:
                return None

            self._record(_debug, 'max_uses', labelled[1])
            return value

        except (re.error, ValueError, AttributeError):
            self._warn(_debug, "Error extracting max uses")
            return None

    def extract_expiry_date(self, text: str, _debug=None) -> str:
        try:
            date_debug: Dict[str, Any] = {}
            parsed = extract_date(text, _debug=date_debug)
            if parsed:
                self._record(_debug, 'expiry_date', date_debug.get('source', 'full_text'))
            return parsed

        except (re.error, ValueError, OverflowError, AttributeError):
            self._warn(_debug, "Error extracting expiry date")
            return ''

    def extract_category(self, text: str, categories: Sequence[str], _debug=None) -> str:
        try:
            match = match_category(text, categories)
            if not match:
                return ''

            category, keyword = match
            self._record(_debug, 'category', f'keyword:{keyword}')
            return category

        except (re.error, AttributeError):
            self._warn(_debug, "Error picking category")
            return ''


def extract_voucher_fields(
    raw_text: str,
    categories: Optional[Sequence[str]] = None
) -> ExtractedVoucherFields:
    """Extract voucher fields from raw text with a fresh extractor."""
    return VoucherExtractor().parse(raw_text, categories=categories)
