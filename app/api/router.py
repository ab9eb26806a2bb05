"""
API Router
"""

from fastapi import APIRouter
from app.api.endpoints import sms

api_router = APIRouter()

api_router.include_router(
    sms.router,
    prefix="/sms",
    tags=["sms"]
)
