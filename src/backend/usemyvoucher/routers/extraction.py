"""
Extraction API router for prefilling the submit-voucher form.

The client pastes (or OCRs) voucher text and receives suggested field
values; nothing is persisted here and the user edits every field before
submitting.
"""

from fastapi import APIRouter, HTTPException
import logging

from usemyvoucher.config import settings
from usemyvoucher.models.voucher import CategoryList, ExtractionRequest, ExtractionResponse
from usemyvoucher.services.extraction import VoucherExtractor
from usemyvoucher.utils.profanity import flagged_fields
from usemyvoucher.utils.text import get_extracted_text_lines

router = APIRouter(prefix="/extract", tags=["extract"])
logger = logging.getLogger(__name__)

extractor = VoucherExtractor()


@router.get("/categories", response_model=CategoryList)
async def list_categories():
    """Return the default category vocabulary used when none is supplied."""
    return CategoryList(categories=settings.DEFAULT_CATEGORIES)


@router.post("", response_model=ExtractionResponse, response_model_exclude_none=True)
def extract_fields(request: ExtractionRequest):
    """
    Extract voucher fields from raw text.

    Args:
        request: Raw text plus optional category vocabulary

    Returns:
        Suggested fields, the cleaned text lines, any fields flagged for
        profanity, and (on request) which pattern produced each field
    """
    if len(request.text) > settings.MAX_TEXT_LENGTH:
        raise HTTPException(
            status_code=413,
            detail=f"Text too long: {len(request.text)} characters. Maximum: {settings.MAX_TEXT_LENGTH}"
        )

    categories = request.categories if request.categories is not None else settings.DEFAULT_CATEGORIES
    debug = {'patterns_matched': {}, 'warnings': []}

    fields = extractor.parse(request.text, categories=categories, _debug=debug)
    logger.info(
        "Extracted voucher fields from %d chars, matched: %s",
        len(request.text), sorted(debug['patterns_matched'])
    )

    flagged = flagged_fields(fields)
    if flagged:
        logger.info("Profanity found in extracted fields: %s", flagged)

    return ExtractionResponse(
        fields=fields,
        lines=get_extracted_text_lines(request.text),
        flagged_fields=flagged,
        debug=debug if request.include_debug else None,
    )
