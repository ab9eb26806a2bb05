"""
FastAPI Dependencies
"""

from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import async_session
from app.services.sms_parser import SMSParser, sms_parser

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency"""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()

def get_sms_parser() -> SMSParser:
    """Shared stateless SMS parser"""
    return sms_parser
