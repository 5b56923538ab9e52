"""
Amount Parsing - Convert report money tokens into Decimal values

Report amounts use comma thousands separators and exactly two decimals.
Negatives appear either with a leading minus or in parentheses:
    "1,234.56"   -> Decimal('1234.56')
    "(123.45)"   -> Decimal('-123.45')
    "-$42.00"    -> Decimal('-42.00')
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Iterable

CENTS = Decimal('0.01')
ZERO = Decimal('0.00')

# Money token as printed on POS/payroll reports
MONEY_PATTERN = r'\(?-?\$?\s*[\d,]+\.\d{2}\)?'
MONEY_TOKEN = re.compile(r'^' + MONEY_PATTERN + r'$')
MONEY_SEARCH = re.compile(r'(?<![\w.,])\(?-?\$?\d[\d,]*\.\d{2}(?!\d)\)?')
INTEGER_TOKEN = re.compile(r'^\d[\d,]*$')
# Digits with an optional sign and decimal point, once symbols are stripped
PLAIN_NUMBER = re.compile(r'^-?(?:\d+(?:\.\d*)?|\.\d+)$')


def parse_amount(token) -> Decimal:
    """
    Parse a locale-formatted money token

    Args:
        token: String such as "1,234.56", "(12.00)", "$5.00" (or a number)

    Returns:
        Decimal rounded to cents; Decimal('0.00') when the token is malformed
    """
    if token is None:
        return ZERO
    if isinstance(token, Decimal):
        return token.quantize(CENTS)
    if isinstance(token, (int, float)):
        return Decimal(str(token)).quantize(CENTS)

    cleaned = str(token).strip()
    if not cleaned:
        return ZERO

    negative = False
    if cleaned.startswith('(') and cleaned.endswith(')'):
        negative = True
        cleaned = cleaned[1:-1].strip()

    cleaned = cleaned.replace('$', '').replace(',', '').replace(' ', '')
    if not PLAIN_NUMBER.match(cleaned):
        return ZERO

    try:
        value = Decimal(cleaned).quantize(CENTS)
    except InvalidOperation:
        return ZERO

    if not value:
        return ZERO
    return -value if negative else value


def is_money_token(token: str) -> bool:
    """True when the whole token looks like a money amount"""
    return bool(MONEY_TOKEN.match(token.strip()))


def is_integer_token(token: str) -> bool:
    """True for a unit count such as "12" or "1,024" """
    return bool(INTEGER_TOKEN.match(token.strip()))


def find_money_tokens(line: str) -> list:
    """Return every money-formatted token in a line, left to right"""
    return MONEY_SEARCH.findall(line)


def sum_amounts(values: Iterable[Decimal]) -> Decimal:
    """Exact Decimal sum (starts at 0.00 so empty input stays a Decimal)"""
    return sum(values, ZERO)


def format_amount(value: Decimal) -> str:
    """Format to exactly two decimals without thousands separators"""
    return f"{Decimal(value).quantize(CENTS):.2f}"
