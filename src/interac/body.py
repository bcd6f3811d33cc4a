"""
Body analysis for INTERAC notification emails.

The body follows a fixed template:

    Hi SAMPLE LANDLORD,
    SAMPLE TENANT has sent you a money transfer for the amount of $5.25 (CAD) ...
    Message: April rent
    Reference Number: CA1234abcd

Every field is read independently; a field that cannot be found is left
unset and never raises.
"""

import logging
import math
import re
from dataclasses import replace
from typing import List, Optional, Tuple

from .language import starts_with_token, contains_token, token_starts_line
from .models import BodyFacts

logger = logging.getLogger(__name__)

# Leading numeric prefix of a string (sign, digits, fraction, exponent)
_FLOAT_PREFIX = re.compile(r'[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')
_DIGIT = re.compile(r'[0-9]')

# Minimum number of characters between the currency parentheses
MIN_CURRENCY_LENGTH = 3


def normalize_lines(text: Optional[str]) -> List[str]:
    """Split text into lines, trim each line and drop blank ones."""
    lines = (line.strip() for line in (text or '').split('\n'))
    return [line for line in lines if line]


def read_upper_case(line: Optional[str]) -> str:
    """
    Read the leading run of upper-case characters of a line.

    Any character equal to its own upper-case form (letters, spaces,
    digits, punctuation) extends the run. The character just before the
    stop index is dropped from the result, so "SAMPLE TENANT has sent"
    gives "SAMPLE TENANT" and an all upper-case "SAMPLE TENANT" gives
    "SAMPLE TENAN".

    Args:
        line: Line to read (None is treated as empty)

    Returns:
        str: The captured run, trimmed
    """
    line = line or ''
    index = 0
    while index < len(line) and line[index] == line[index].upper():
        index += 1

    return line[:max(index - 1, 0)].strip()


def read_after(text: str, token: str, trim: bool = True) -> Optional[str]:
    """
    Return everything after the first occurrence of token.

    Returns:
        The remainder (trimmed unless trim=False), or None if token is absent
    """
    index = text.find(token)
    if index == -1:
        return None

    value = text[index + len(token):]
    return value.strip() if trim else value


def contains_line(lines: List[str], token: str) -> Optional[str]:
    """Return the first line containing token, or None."""
    for line in lines:
        if token in line:
            return line
    return None


def parse_leading_float(text: str) -> float:
    """
    Parse the leading number of a string, ignoring whatever follows it.

    Trailing garbage is ignored ("5.25." -> 5.25); a string without a
    leading number gives NaN.

    Example:
        >>> parse_leading_float("1000.50CAD")
        1000.5
    """
    match = _FLOAT_PREFIX.match(text.lstrip())
    if not match:
        return math.nan
    return float(match.group(0))


def _is_number(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def parse_amount(line: str) -> Tuple[Optional[float], Optional[str]]:
    """
    Read the amount from the line holding the dollar sign.

    Two strategies are tried:
    1. The text between '$' and the next space, with ',' removed
       (English: "$1,234.56 (CAD)").
    2. Only when that text was read and held no number, the text between
       the first digit and the next space, with ',' read as the decimal
       point (French: "1234,56 $ (CAD)").

    A '$' with no space after it stops both strategies, so digits found
    elsewhere on the line are never taken for the amount.

    Args:
        line: Line containing '$'

    Returns:
        Tuple of (amount, raw text last parsed). amount is None when no
        strategy could run and may be NaN when parsing failed.
    """
    amount_start = line.find('$')
    amount_end = line.find(' ', amount_start) if amount_start != -1 else -1
    if amount_start == -1 or amount_end == -1:
        return None, None

    amount_text = line[amount_start + 1:amount_end].strip().replace(',', '')
    amount = parse_leading_float(amount_text)
    if not math.isnan(amount):
        return amount, amount_text

    digit = _DIGIT.search(line)
    if digit:
        digit_end = line.find(' ', digit.start())
        if digit_end != -1:
            amount_text = line[digit.start():digit_end].strip().replace(',', '.')
            amount = parse_leading_float(amount_text)

    return amount, amount_text


def parse_currency(line: str) -> Optional[str]:
    """
    Read the currency code between the first pair of parentheses.

    Returns:
        The code (e.g., "CAD"), or None if the parentheses are missing or
        hold fewer than MIN_CURRENCY_LENGTH characters
    """
    start = line.find('(')
    if start == -1:
        return None

    end = line.find(')', start)
    if end == -1 or (end - start - 1) < MIN_CURRENCY_LENGTH:
        return None

    return line[start + 1:end]


def parse_body(text: Optional[str]) -> BodyFacts:
    """
    Derive transfer facts from the plain text body.

    Args:
        text: Raw plain text body (None is treated as empty)

    Returns:
        BodyFacts; missing fields stay unset
    """
    lines = normalize_lines(text)
    normalized = '\n'.join(lines)
    lowered = normalized.lower()

    language = starts_with_token(lowered, 'greeting')
    is_auto_deposit = contains_token(lowered, 'automatic_deposit') is not None

    # Sender name sits at the start of the line after the greeting
    from_name = read_upper_case(lines[1] if len(lines) > 1 else '')

    message = None
    message_line = token_starts_line(lines, 'message')
    if message_line:
        message = read_after(message_line, ':')

    reference = None
    reference_line = token_starts_line(lines, 'reference')
    if reference_line:
        reference = read_after(reference_line, ':')

    facts = BodyFacts(
        text=normalized,
        language=language,
        is_auto_deposit=is_auto_deposit,
        from_name=from_name,
        message=message,
        reference=reference,
    )

    amount_line = contains_line(lines, '$')
    if not amount_line:
        logger.debug("No line with '$' found in body")
        return facts

    amount, amount_text = parse_amount(amount_line)

    facts = replace(
        facts,
        amount=amount,
        amount_text=amount_text,
        currency=parse_currency(amount_line),
        is_valid_amount=_is_number(amount),
    )
    logger.debug(f"Body facts: language={facts.language}, amount={facts.amount}, "
                 f"currency={facts.currency}, auto_deposit={facts.is_auto_deposit}")
    return facts
