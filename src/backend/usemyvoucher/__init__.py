"""
UseMyVoucher backend.

Turns pasted or OCR'd voucher text into structured form suggestions.
"""

__version__ = "0.1.0"
