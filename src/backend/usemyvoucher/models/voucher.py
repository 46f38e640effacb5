"""
Pydantic models for voucher extraction.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional


class ExtractedVoucherFields(BaseModel):
    """
    Best-effort voucher fields recovered from free text.

    String fields are '' when nothing was found; max_uses is None (and
    omitted from to_dict()) when absent.
    """
    merchant_name: str = ""
    voucher_code: str = ""
    description: str = ""
    discount_value: str = ""
    expiry_date: str = Field(default="", description="YYYY-MM-DD or empty")
    category: str = ""
    max_uses: Optional[int] = None

    @field_validator('max_uses')
    @classmethod
    def _positive_max_uses(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError("max_uses must be a positive integer")
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with max_uses left out when absent."""
        return self.model_dump(exclude_none=True)


class ExtractionRequest(BaseModel):
    """Request model for the form-prefill endpoint."""
    text: str = ""
    categories: Optional[List[str]] = None
    include_debug: bool = False


class ExtractionResponse(BaseModel):
    """Response model for the form-prefill endpoint."""
    fields: ExtractedVoucherFields
    lines: List[str] = []
    flagged_fields: List[str] = []
    debug: Optional[Dict[str, Any]] = None


class CategoryList(BaseModel):
    """Configured default category vocabulary."""
    categories: List[str]
