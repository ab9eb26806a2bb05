"""
SMS API Endpoints
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, get_sms_parser
from app.schemas.transaction import (
    SMSParseRequest,
    SMSParseResponse,
    SMSPreviewResponse,
    SMSTestResponse,
    SampleParseResult,
    TransactionResponse
)
from app.services.sms_parser import SMSParser
from app.services.transaction_service import process_sms_transaction

logger = logging.getLogger(__name__)

router = APIRouter()

def _require_message_and_sender(request: SMSParseRequest):
    if not request.message or not request.sender:
        raise HTTPException(status_code=400, detail="Message and sender are required")

@router.post("/parse", response_model=SMSParseResponse)
async def parse_sms(
    request: SMSParseRequest,
    db: AsyncSession = Depends(get_db),
    parser: SMSParser = Depends(get_sms_parser)
):
    """
    Parse a bank SMS and store the transaction it describes
    """
    _require_message_and_sender(request)

    try:
        transaction = await process_sms_transaction(
            db,
            request.message,
            request.sender,
            user_id=request.user_id,
            parser=parser
        )
    except Exception as e:
        logger.exception("SMS processing error")
        raise HTTPException(status_code=500, detail="Failed to process SMS") from e

    if transaction is None:
        return SMSParseResponse(
            success=False,
            message="Could not parse transaction from SMS"
        )

    return SMSParseResponse(
        success=True,
        message="Transaction created from SMS",
        transaction=TransactionResponse.model_validate(transaction)
    )

@router.post("/preview", response_model=SMSPreviewResponse)
async def preview_sms(
    request: SMSParseRequest,
    parser: SMSParser = Depends(get_sms_parser)
):
    """
    Parse a bank SMS without storing anything
    """
    _require_message_and_sender(request)

    result = parser.parse(request.message, request.sender)

    return SMSPreviewResponse(
        parsed_successfully=result.ok,
        failure=result.failure,
        transaction=result.transaction
    )

@router.get("/test", response_model=SMSTestResponse)
async def run_sms_self_test(
    parser: SMSParser = Depends(get_sms_parser)
):
    """
    Run the built-in sample messages through the parser (diagnostics only)
    """
    results = parser.run_samples()

    return SMSTestResponse(
        message="Check logs for SMS parsing test results",
        results=[
            SampleParseResult(
                message=sample['message'],
                sender=sample['sender'],
                parsed_successfully=result.ok,
                failure=result.failure,
                transaction=result.transaction
            )
            for sample, result in results
        ]
    )
