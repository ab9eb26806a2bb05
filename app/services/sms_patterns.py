"""
Transaction grammars for Indian bank and UPI SMS messages

Grammars are tried in order and the first one found in the message wins.
Richer bank templates come first so a looser grammar never captures them.
"""

import re
from enum import Enum
from typing import NamedTuple, Optional, Tuple


class GrammarType(str, Enum):
    BANK = "bank"
    SIMPLE_BANK = "simple_bank"
    UPI = "upi"
    CARD = "card"
    ONLINE = "online"


class Grammar(NamedTuple):
    type: GrammarType
    pattern: re.Pattern
    # Date captures in priority order
    date_groups: Tuple[str, ...] = ("date",)


# Shared fragments
AMOUNT = r'(?:Rs\.?|INR|₹)\s*(?P<amount>[\d,]+(?:\.\d+)?)'
MASKED_NUMBER = r'(?P<account>\*+\d+)'
DATE = r'\d{1,2}-(?:\d{1,2}|[a-z]{3})-\d{2,4}'
TIME = r'\d{1,2}:\d{2}(?::\d{2})?\s*(?:AM|PM)?'
UPI_REF = r'\bUPI[\s:/-]*Ref(?:erence)?\.?(?:\s*No\.?)?[\s:]*(?P<ref>\w+)'
TXN_REF = r'\b(?:Ref(?:erence)?|Txn)\.?\s*(?:No\.?|ID)?[\s:]*(?P<txn_ref>\d\w*)'
# Free text between the date and a UPI reference
DETAILS_THEN_UPI_REF = r'(?:[\s.,:;-]*(?P<details>.*?)[\s.,:;-]*' + UPI_REF + r')?'
TRAILING_TEXT = r'[\s.,:;-]*(?P<description>.*?)[\s.]*$'

# Where a counterparty name stops
COUNTERPARTY_END = r'(?=\s+(?:via|using|through)\b|\s+on\s+\d|\s+UPI\b|\s*\.(?:\s|$)|\s*$)'
MERCHANT_END = r'(?=\s*\.(?:\s|$)|\s*$|\s+(?:Avl|Available|Ref|Txn)\b)'

BANK_PATTERN = (
    AMOUNT
    + r'\s*(?:credited|debited|withdrawn|spent|paid|received|transferred)\b'
    + r'.*?\b(?:A/c|account)\b[^*]*?' + MASKED_NUMBER
    + r'.*?\bon\s+(?P<date>' + DATE + r')'
    + r'(?:\s+at\s+(?P<time>' + TIME + r'))?'
    + DETAILS_THEN_UPI_REF
    + TRAILING_TEXT
)

# Same shape, but any word after "on" (e.g. 20Dec24) is accepted
SIMPLE_BANK_PATTERN = (
    AMOUNT
    + r'\s*(?:debited|credited)\b'
    + r'.*?\bfrom\b.*?\bA/c\b[^*]*?' + MASKED_NUMBER
    + r'.*?\bon\s+(?P<date>[\w-]+)'
    + DETAILS_THEN_UPI_REF
    + TRAILING_TEXT
)

UPI_PATTERN = (
    r'(?=.*\bUPI\b)'
    + AMOUNT
    + r'\s*(?:sent|received|paid|debited|credited|spent)\b'
    + r'.*?\b(?:to|from|on|at)\s+(?!(?:your\s+)?(?:A/c|account)\b|\d{1,2}-)(?P<merchant>\w.*?)'
    + COUNTERPARTY_END
    + r'(?:.*?\bon\s+(?P<date>' + DATE + r'))?'
    + r'(?:.*?' + UPI_REF + r')?'
)

CARD_PATTERN = (
    AMOUNT
    + r'\s*(?:spent|charged|debited)\b'
    + r'.*?\bcard\b[^*]*?' + MASKED_NUMBER
    + r'(?:\s+on\s+(?P<date_alt>' + DATE + r'))?'
    + r'.*?\bat\s+(?P<merchant>\w.*?)'
    + r'(?:\s+on\s+(?P<date>' + DATE + r'))?'
    + MERCHANT_END
    + r'(?:.*?' + TXN_REF + r')?'
)

ONLINE_PATTERN = (
    r'Payment\s+of\s+'
    + AMOUNT
    + r'\s*(?:made|received)\b'
    + r'.*?\b(?:to|from)\s+(?P<merchant>\w.*?)'
    + r'(?:\s+(?:via|using|through)\s+.+?)?'
    + r'(?:\s+on\s+(?P<date>' + DATE + r'))?'
    + r'(?=\s*\.(?:\s|$)|\s*$)'
)

# Order matters: first match wins
GRAMMARS: Tuple[Grammar, ...] = (
    Grammar(GrammarType.BANK, re.compile(BANK_PATTERN, re.IGNORECASE)),
    Grammar(GrammarType.SIMPLE_BANK, re.compile(SIMPLE_BANK_PATTERN, re.IGNORECASE)),
    Grammar(GrammarType.UPI, re.compile(UPI_PATTERN, re.IGNORECASE)),
    Grammar(GrammarType.CARD, re.compile(CARD_PATTERN, re.IGNORECASE), ("date", "date_alt")),
    Grammar(GrammarType.ONLINE, re.compile(ONLINE_PATTERN, re.IGNORECASE)),
)


def match_grammar(text: str, grammars: Tuple[Grammar, ...] = GRAMMARS) -> Optional[Tuple[Grammar, "re.Match"]]:
    """
    Find the first grammar that matches the message

    Returns:
        (grammar, match) or None when the SMS format is not supported
    """
    for grammar in grammars:
        match = grammar.pattern.search(text)
        if match:
            return grammar, match
    return None
