"""
Tests for line normalization and category keyword matching.
"""

from usemyvoucher.utils.categories import DEFAULT_VOUCHER_CATEGORIES, category_keywords, pick_category
from usemyvoucher.utils.text import get_extracted_text_lines, sanitize_text


class TestTextLines:

    def test_collapses_whitespace_and_drops_blank_lines(self):
        raw = "  ACME \t  Store  \r\n\r\n   \nCode:   X1  "
        assert get_extracted_text_lines(raw) == ['ACME Store', 'Code: X1']

    def test_bare_carriage_returns_split_lines(self):
        assert get_extracted_text_lines("one\rtwo") == ['one', 'two']
        assert sanitize_text("a\r\nb\rc") == "a\nb\nc"

    def test_empty(self):
        assert get_extracted_text_lines('') == []
        assert sanitize_text('') == ''


class TestCategories:

    def test_keywords(self):
        assert category_keywords("Food & Dining") == ['food', 'dining']
        assert category_keywords("Health & Beauty") == ['health', 'beauty']
        assert category_keywords("Others") == []
        assert category_keywords("Gym / Spa") == []

    def test_first_match_in_vocabulary_order(self):
        text = "Spa and beauty treatment at the travel lounge"
        assert pick_category(text, ["Travel", "Health & Beauty"]) == 'Travel'
        assert pick_category(text, ["Health & Beauty", "Travel"]) == 'Health & Beauty'

    def test_substring_match_is_case_insensitive(self):
        assert pick_category("ELECTRONICS MEGA SALE", DEFAULT_VOUCHER_CATEGORIES) == 'Electronics'

    def test_others_never_inferred(self):
        assert pick_category("for others", ["Others"]) == ''

    def test_no_match_or_empty(self):
        assert pick_category("", DEFAULT_VOUCHER_CATEGORIES) == ''
        assert pick_category("anything", []) == ''
