"""Database models initialization."""

# Import all models to ensure they're registered with SQLAlchemy
from .transaction import Transaction

__all__ = [
    "Transaction",
]
