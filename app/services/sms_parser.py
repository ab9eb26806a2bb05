"""
SMS Parser for Indian Bank Transaction Messages
Supports major Indian banks and UPI apps: SBI, HDFC, ICICI, Axis, Kotak, etc.
"""

import logging
import math
import re
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from app.core.datetime_utils import resolve_date
from app.schemas.transaction import (
    ParsedTransaction,
    ParseFailure,
    ParseResult,
    TransactionDirection
)
from app.services.categorizer import categorize_transaction
from app.services.sms_patterns import Grammar, GrammarType, match_grammar

logger = logging.getLogger(__name__)

UNKNOWN_BANK = "Unknown Bank"

# Bank SMS fit in a few hundred characters; longer text is not a notification
MAX_MESSAGE_LENGTH = 1000

# SMS sender ID -> bank
BANK_SENDERS: Mapping[str, str] = MappingProxyType({
    'HDFCBK': 'HDFC Bank',
    'ICICIB': 'ICICI Bank',
    'SBIINB': 'State Bank of India',
    'SBMSMS': 'State Bank of India',
    'PAYTM': 'Paytm Payments Bank',
    'AXISBK': 'Axis Bank',
    'KOTAKB': 'Kotak Mahindra Bank',
    'PNBSMS': 'Punjab National Bank',
    'IOBNET': 'Indian Overseas Bank',
    'UNIONB': 'Union Bank of India',
})

CREDIT_PATTERN = re.compile(r'credited|received|refund', re.IGNORECASE)
DEBIT_PATTERN = re.compile(r'debited|spent|paid|withdrawn|charged', re.IGNORECASE)

UPI_REF_BOILERPLATE = re.compile(r'UPI.*?Ref\.?[\s:]*\w+', re.IGNORECASE)
WHITESPACE = re.compile(r'\s+')

DEFAULT_DESCRIPTIONS = {
    TransactionDirection.INCOME: 'Money received',
    TransactionDirection.EXPENSE: 'Payment made',
}

SAMPLE_MESSAGES: Tuple[Dict[str, str], ...] = (
    {
        'message': 'Rs.1500.00 debited from A/c **1234 on 09-Aug-25. UPI Ref 123456789. Swiggy Food Order',
        'sender': 'HDFCBK'
    },
    {
        'message': 'Rs.50000.00 credited to your A/c **5678 on 08-Aug-25 at 02:30PM. Salary Transfer from Company Ltd.',
        'sender': 'ICICIB'
    },
    {
        'message': 'Rs.299.00 spent on Netflix subscription via UPI. UPI Ref: 987654321',
        'sender': 'PAYTM'
    },
    {
        'message': 'Payment of Rs.2500.00 made to Amazon via Google Pay on 07-Aug-25',
        'sender': 'GOOGLEPAY'
    },
)


def normalize_message(message: str) -> str:
    """Collapse runs of whitespace (SMS often carry line breaks)"""
    return WHITESPACE.sub(' ', message).strip()


def parse_amount(raw: Optional[str]) -> Optional[float]:
    """Amount without thousands separators; None unless it is a positive number"""
    if not raw:
        return None
    try:
        amount = float(raw.replace(',', ''))
    except ValueError:
        return None
    if math.isnan(amount) or math.isinf(amount) or amount <= 0:
        return None
    return amount


def detect_direction(message: str) -> TransactionDirection:
    """
    Income only when the SMS talks about money coming in and nothing about
    money going out. Everything else counts as an expense.
    """
    is_credit = CREDIT_PATTERN.search(message) is not None
    is_debit = DEBIT_PATTERN.search(message) is not None

    if is_credit and not is_debit:
        return TransactionDirection.INCOME
    return TransactionDirection.EXPENSE


def clean_description(description: Optional[str], direction: TransactionDirection) -> str:
    """Strip UPI reference boilerplate, falling back to a generic label"""
    cleaned = UPI_REF_BOILERPLATE.sub('', description or '', count=1)
    cleaned = WHITESPACE.sub(' ', cleaned).strip(' .,;:-')

    return cleaned or DEFAULT_DESCRIPTIONS[direction]


def resolve_bank_name(sender: str) -> str:
    """Map an SMS sender ID (HDFCBK, VM-HDFCBK, JK-UNIONB-S) to a bank name"""
    sender_id = sender.strip().upper()
    if sender_id in BANK_SENDERS:
        return BANK_SENDERS[sender_id]

    for segment in sender_id.split('-'):
        if segment in BANK_SENDERS:
            return BANK_SENDERS[segment]

    return UNKNOWN_BANK


def _clean_span(value: Optional[str]) -> str:
    return (value or '').strip()


def extract_fields(grammar: Grammar, match: "re.Match") -> Dict[str, Any]:
    """
    Pull the raw transaction fields out of a grammar match

    Returns:
        Dictionary with amount_text, description, merchant, account,
        reference and date_tokens
    """
    groups = match.groupdict()

    description = ''
    merchant = ''

    if grammar.type in (GrammarType.BANK, GrammarType.SIMPLE_BANK):
        # Latest capture wins: trailing text, text before the UPI ref,
        # the ref itself, then the time
        description = _clean_span(
            groups.get('description')
            or groups.get('details')
            or groups.get('ref')
            or groups.get('time')
        )
    elif grammar.type == GrammarType.UPI:
        merchant = _clean_span(groups.get('merchant'))
        description = merchant
    elif grammar.type == GrammarType.CARD:
        merchant = _clean_span(groups.get('merchant'))
        description = f"Card payment at {merchant}"
    elif grammar.type == GrammarType.ONLINE:
        merchant = _clean_span(groups.get('merchant'))
        description = f"Payment to {merchant}"

    account = groups.get('account')

    return {
        'amount_text': groups.get('amount'),
        'description': description,
        'merchant': merchant or None,
        'account': account.replace('*', '') if account else None,
        'reference': groups.get('ref') or groups.get('txn_ref'),
        'date_tokens': [groups.get(name) for name in grammar.date_groups],
    }


class SMSParser:
    """
    Parses transaction SMS from Indian banks and UPI apps

    Stateless: one instance can be shared between request handlers.
    """

    def parse(self, message: Any, sender: Any, now: Optional[datetime] = None) -> ParseResult:
        """
        Parse SMS and extract transaction information

        Args:
            message: The SMS message text
            sender: SMS sender ID, e.g. HDFCBK
            now: Date used when the SMS carries none (defaults to current time)

        Returns:
            ParseResult holding either the transaction or the failure reason.
            Never raises.
        """
        if not isinstance(message, str) or not message.strip():
            logger.warning("Invalid message provided to SMS parser")
            return ParseResult.fail(ParseFailure.INVALID_INPUT)

        if not isinstance(sender, str) or not sender.strip():
            logger.warning("Invalid sender provided to SMS parser")
            return ParseResult.fail(ParseFailure.INVALID_INPUT)

        normalized = normalize_message(message)
        if len(normalized) > MAX_MESSAGE_LENGTH:
            logger.warning("SMS from %s too long to parse (%d chars)", sender, len(normalized))
            return ParseResult.fail(ParseFailure.INVALID_INPUT)

        try:
            return self._parse(normalized, sender, now)
        except Exception:
            logger.exception("SMS parsing error")
            return ParseResult.fail(ParseFailure.INTERNAL_ERROR)

    def _parse(self, message: str, sender: str, now: Optional[datetime]) -> ParseResult:
        matched = match_grammar(message)
        if matched is None:
            logger.debug("No transaction grammar matched SMS from %s", sender)
            return ParseResult.fail(ParseFailure.NO_MATCH)

        grammar, match = matched
        fields = extract_fields(grammar, match)

        amount = parse_amount(fields['amount_text'])
        if amount is None:
            logger.debug("Rejected amount %r in %s SMS", fields['amount_text'], grammar.type.value)
            return ParseResult.fail(ParseFailure.INVALID_AMOUNT)

        direction = detect_direction(message)
        description = clean_description(fields['description'], direction)
        merchant = fields['merchant']

        transaction = ParsedTransaction(
            amount=amount,
            direction=direction,
            category=categorize_transaction(description, merchant),
            description=description,
            date=resolve_date(fields['date_tokens'], now=now),
            account_number_masked=fields['account'] or None,
            reference_id=fields['reference'],
            merchant=merchant,
            bank_name=resolve_bank_name(sender),
            grammar=grammar.type
        )

        return ParseResult.success(transaction)

    def run_samples(
        self,
        samples: Sequence[Dict[str, str]] = SAMPLE_MESSAGES,
        now: Optional[datetime] = None
    ) -> List[Tuple[Dict[str, str], ParseResult]]:
        """
        Run a batch of sample SMS through the parser and log what came out
        (diagnostics only)
        """
        results = []

        logger.info("Testing SMS parsing on %d samples", len(samples))
        for index, sample in enumerate(samples, 1):
            result = self.parse(sample.get('message'), sample.get('sender'), now=now)

            if result.ok:
                parsed = result.transaction
                logger.info(
                    "Sample %d (%s): %.2f %s %s %r [%s]",
                    index, sample.get('sender'), parsed.amount, parsed.direction.value,
                    parsed.category.value, parsed.description, parsed.bank_name
                )
            else:
                logger.info("Sample %d (%s): failed to parse (%s)", index, sample.get('sender'), result.failure.value)

            results.append((sample, result))

        return results


sms_parser = SMSParser()


def parse_bank_sms(message: Any, sender: Any, now: Optional[datetime] = None) -> Optional[ParsedTransaction]:
    """Parse one SMS, returning None when it is not a supported transaction"""
    return sms_parser.parse(message, sender, now=now).transaction


# Example usage and testing
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    sms_parser.run_samples()
