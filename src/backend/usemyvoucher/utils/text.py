"""
Text normalization helpers shared by the voucher extractor.
"""

from typing import List
import re

_WHITESPACE_RUN = re.compile(r'\s+')


def sanitize_text(raw_text: str) -> str:
    """Normalize line endings (CRLF and bare CR) to LF."""
    if not raw_text:
        return ''
    return raw_text.replace('\r\n', '\n').replace('\r', '\n')


def get_extracted_text_lines(raw_text: str) -> List[str]:
    """
    Split text into cleaned, non-empty lines.

    Each line has internal whitespace collapsed to single spaces and is
    trimmed. Order is preserved so the first line is the first candidate
    for merchant detection.

    Examples:
        >>> get_extracted_text_lines("  ACME   Store \\r\\n\\n Code: X1 ")
        ['ACME Store', 'Code: X1']
    """
    lines = []
    for line in sanitize_text(raw_text).split('\n'):
        cleaned = _WHITESPACE_RUN.sub(' ', line).strip()
        if cleaned:
            lines.append(cleaned)
    return lines
