"""
Tests for profanity screening of extracted fields.
"""

from usemyvoucher.models.voucher import ExtractedVoucherFields
from usemyvoucher.utils.profanity import contains_profanity, flagged_fields


class TestContainsProfanity:

    def test_clean_text(self):
        assert contains_profanity("Free coffee with any pastry") is False

    def test_profane_text(self):
        assert contains_profanity("this deal is shit") is True

    def test_empty(self):
        assert contains_profanity("") is False


def test_flagged_fields_lists_only_profane_fields():
    fields = ExtractedVoucherFields(
        merchant_name="Shit Store",
        voucher_code="SAVE2024X",
        description="Valid on weekdays",
        discount_value="20% off",
    )
    assert flagged_fields(fields) == ['merchant_name']


def test_clean_record_is_not_flagged():
    assert flagged_fields(ExtractedVoucherFields()) == []
