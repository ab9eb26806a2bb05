import uuid
from sqlalchemy import Column, String, Float, DateTime, Text, Boolean, JSON
from app.core.datetime_utils import utc_now
from app.core.database import Base

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False, index=True)

    amount = Column(Float, nullable=False)
    type = Column(String(10), nullable=False)  # income, expense
    title = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)

    date = Column(DateTime, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    tags = Column(JSON, default=list)
    is_recurring = Column(Boolean, default=False)

    created_at = Column(DateTime, default=utc_now)
