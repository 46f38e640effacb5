"""
Profanity screening for user-visible voucher fields.
"""

from typing import List

from better_profanity import profanity

from usemyvoucher.models.voucher import ExtractedVoucherFields

# Free-text fields shown to other users when a voucher is shared
SCREENED_FIELDS = ('merchant_name', 'voucher_code', 'description', 'discount_value')


def contains_profanity(value: str) -> bool:
    if not value:
        return False
    return profanity.contains_profanity(value)


def flagged_fields(fields: ExtractedVoucherFields) -> List[str]:
    """Return the names of screened fields whose value contains profanity."""
    return [name for name in SCREENED_FIELDS if contains_profanity(getattr(fields, name))]
