"""
Keyword based transaction categorizer
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class Category(str, Enum):
    FOOD = "food"
    TRANSPORT = "transport"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    UTILITIES = "utilities"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    INVESTMENT = "investment"
    TRANSFER = "transfer"
    SALARY = "salary"
    OTHER = "other"


# Scanned in insertion order, first hit wins.
# Salary sits ahead of transfer: credits read "Salary Transfer from ..."
CATEGORY_KEYWORDS: Mapping[Category, Tuple[str, ...]] = MappingProxyType({
    Category.FOOD: (
        'swiggy', 'zomato', 'dominos', 'pizza', 'restaurant', 'cafe', 'food',
        'dining', 'kitchen', 'meal', 'lunch', 'dinner', 'breakfast'
    ),
    Category.TRANSPORT: (
        'uber', 'ola', 'metro', 'bus', 'taxi', 'petrol', 'diesel', 'fuel',
        'parking', 'toll', 'railway', 'irctc'
    ),
    Category.SHOPPING: (
        'amazon', 'flipkart', 'myntra', 'nykaa', 'shopping', 'retail', 'store',
        'mall', 'purchase', 'buy'
    ),
    Category.ENTERTAINMENT: (
        'netflix', 'spotify', 'hotstar', 'prime', 'movie', 'cinema', 'theater',
        'game', 'entertainment'
    ),
    Category.UTILITIES: (
        'electricity', 'water', 'gas', 'internet', 'mobile', 'recharge', 'bill',
        'utility', 'broadband'
    ),
    Category.HEALTHCARE: (
        'hospital', 'doctor', 'pharmacy', 'medicine', 'health', 'clinic', 'medical'
    ),
    Category.EDUCATION: (
        'school', 'college', 'university', 'course', 'education', 'training', 'study'
    ),
    Category.INVESTMENT: (
        'mutual fund', 'sip', 'equity', 'stock', 'investment', 'trading',
        'zerodha', 'groww'
    ),
    Category.SALARY: ('salary', 'wages', 'income', 'payroll', 'employment'),
    Category.TRANSFER: (
        'transfer', 'sent to', 'received from', 'family', 'friend', 'personal'
    ),
})

CASH_PATTERN = re.compile(r'atm|cash', re.IGNORECASE)
LOAN_PATTERN = re.compile(r'loan|emi|interest', re.IGNORECASE)


def categorize_transaction(description: str, merchant: Optional[str] = None) -> Category:
    """
    Return the first category whose keywords appear in description or merchant
    """
    text = f"{description or ''} {merchant or ''}".lower()

    for category, keywords in CATEGORY_KEYWORDS.items():
        for keyword in keywords:
            if keyword in text:
                return category

    # Cash withdrawals and loan repayments have no category of their own yet
    if CASH_PATTERN.search(text):
        return Category.OTHER

    if LOAN_PATTERN.search(text):
        return Category.OTHER

    return Category.OTHER
