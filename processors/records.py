"""
Records - Immutable aggregated report records and journals

Aggregators create one record per source document (set); journals and the
consolidated table are derived from records and never mutate them.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from parsers.amounts import ZERO


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class PosRecord:
    """Point-of-sale report values for one store, keyed by schema row"""
    store_id: str
    values: Mapping[str, Decimal]
    warnings: Tuple[Dict, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'values', _freeze(self.values))
        object.__setattr__(self, 'warnings', tuple(self.warnings))

    def __getitem__(self, row: str) -> Decimal:
        return self.values[row]

    def get(self, row: str, default: Decimal = ZERO) -> Decimal:
        return self.values.get(row, default)

    def to_dict(self) -> Dict:
        return {
            'store_id': self.store_id,
            'values': {row: str(value) for row, value in self.values.items()},
            'warnings': list(self.warnings),
        }


@dataclass(frozen=True)
class PayrollRecord:
    """Payroll report totals for one location"""
    location: str = ''
    company_name: str = ''
    check_date: str = ''
    pay_period: str = ''
    bank_account: str = ''
    earnings: Mapping[str, Decimal] = field(default_factory=dict)
    employee_taxes: Mapping[str, Decimal] = field(default_factory=dict)
    employer_taxes: Mapping[str, Decimal] = field(default_factory=dict)
    deductions: Mapping[str, Decimal] = field(default_factory=dict)
    total_earnings: Decimal = ZERO
    total_taxes: Decimal = ZERO
    total_employer_taxes: Decimal = ZERO
    total_deductions: Decimal = ZERO
    net_pay: Decimal = ZERO
    warnings: Tuple[Dict, ...] = ()

    def __post_init__(self):
        for name in ('earnings', 'employee_taxes', 'employer_taxes', 'deductions'):
            object.__setattr__(self, name, _freeze(getattr(self, name)))
        object.__setattr__(self, 'warnings', tuple(self.warnings))

    def to_dict(self) -> Dict:
        def amounts(mapping):
            return {code: str(value) for code, value in mapping.items()}

        return {
            'location': self.location,
            'company_name': self.company_name,
            'check_date': self.check_date,
            'pay_period': self.pay_period,
            'bank_account': self.bank_account,
            'earnings': amounts(self.earnings),
            'employee_taxes': amounts(self.employee_taxes),
            'employer_taxes': amounts(self.employer_taxes),
            'deductions': amounts(self.deductions),
            'total_earnings': str(self.total_earnings),
            'total_taxes': str(self.total_taxes),
            'total_employer_taxes': str(self.total_employer_taxes),
            'total_deductions': str(self.total_deductions),
            'net_pay': str(self.net_pay),
            'warnings': list(self.warnings),
        }


@dataclass(frozen=True)
class JournalLine:
    """One debit-or-credit row against one ledger account"""
    account: str
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    description: str = ''
    name: str = ''

    def __post_init__(self):
        if self.debit and self.credit:
            raise ValueError(f"Journal line for {self.account} has both a debit and a credit")


@dataclass(frozen=True)
class Journal:
    """Ordered journal lines plus the balance check stamped at build time"""
    journal_no: str
    journal_date: str
    description: str
    lines: Tuple[JournalLine, ...]
    total_debits: Decimal = ZERO
    total_credits: Decimal = ZERO
    variance: Decimal = ZERO
    is_balanced: bool = True
    needs_review: bool = False
    review_reason: str = ''
    warnings: Tuple[Dict, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'lines', tuple(self.lines))
        object.__setattr__(self, 'warnings', tuple(self.warnings))

    def accounts(self) -> List[str]:
        return [line.account for line in self.lines]

    def find_lines(self, account: str) -> List[JournalLine]:
        return [line for line in self.lines if line.account == account]

    def find_line(self, account: str) -> Optional[JournalLine]:
        matches = self.find_lines(account)
        return matches[0] if matches else None
