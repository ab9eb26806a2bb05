"""
Turns parsed SMS into stored transactions
"""

import logging
import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.datetime_utils import utc_now
from app.models.transaction import Transaction
from app.schemas.transaction import ParsedTransaction
from app.services.sms_parser import SMSParser, sms_parser

logger = logging.getLogger(__name__)


def build_transaction(parsed: ParsedTransaction, user_id: str) -> Transaction:
    """Map a parsed SMS onto a transaction row owned by user_id"""
    return Transaction(
        id=str(uuid.uuid4()),
        user_id=user_id,
        amount=parsed.amount,
        type=parsed.direction.value,
        category=parsed.category.value,
        title=parsed.description,
        date=parsed.date,
        notes=f"UPI Ref: {parsed.reference_id}" if parsed.reference_id else None,
        tags=[parsed.bank_name] if parsed.bank_name else [],
        is_recurring=False,
        created_at=utc_now()
    )


async def process_sms_transaction(
    db: AsyncSession,
    message: str,
    sender: str,
    user_id: Optional[str] = None,
    parser: SMSParser = sms_parser
) -> Optional[Transaction]:
    """
    Parse an incoming SMS and store it as a transaction

    Returns:
        The stored transaction, or None when the SMS could not be parsed
    """
    result = parser.parse(message, sender)
    if not result.ok:
        logger.info("Could not parse SMS from %s (%s)", sender, result.failure.value)
        return None

    parsed = result.transaction
    transaction = build_transaction(parsed, user_id or settings.DEFAULT_USER_ID)

    db.add(transaction)
    await db.commit()
    await db.refresh(transaction)

    logger.info(
        "Created transaction %s from SMS: %.2f %s %s %r",
        transaction.id, parsed.amount, parsed.direction.value,
        parsed.category.value, parsed.description
    )

    return transaction
