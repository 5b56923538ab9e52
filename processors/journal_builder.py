"""
Journal Builder - Generate double-entry journals from aggregated report records
Creates journals ready for import into QuickBooks Online
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Union

from config import (BALANCE_TOLERANCE, CATEGORY_SALES_ACCOUNTS, DISCOUNT_ACCOUNTS,
                    EMPLOYER_TAX_CODES, INPUT_DATE_FORMATS, MEDICAL_DEDUCTION_CODES,
                    PAYROLL_ACCOUNTS, PAYROLL_JOURNAL_DESCRIPTION, POS_ACCOUNTS,
                    POS_JOURNAL_DESCRIPTION, SALARY_EARNING_CODES)
from parsers.amounts import ZERO, sum_amounts
from .records import Journal, JournalLine, PayrollRecord, PosRecord

# Discount & comp rows in journal order; Order Discounts are third-party
# platform fees and post to the delivery fee expense instead
DISCOUNT_ROWS = [
    "Non Vouchered Customer Credits",
    "Customer Credits",
    "Discounts",
    "Order Discounts",
    "Complimentary",
]

# Rows counted by the Cash (Over)/Short calculation. Tenders and summary rows
# are deliberately absent; this list is fixed by the chart of accounts.
BALANCE_DEBIT_ROWS = [
    "Net Sales",
    "House Account Payments",
    "Third-Party Delivery Tips",
    "Non Vouchered Customer Credits",
    "Customer Credits",
    "Discounts",
    "Order Discounts",
    "Complimentary",
    "Gift Card",
]
BALANCE_CREDIT_ROWS = [
    "Taxes",
    "Delivery Fees",
    "Gift Card Activations and Add",
    *CATEGORY_SALES_ACCOUNTS.keys(),
]


def format_journal_date(value: Union[date, datetime, str]) -> str:
    """
    Format a journal date as M/D/YY

    Args:
        value: date/datetime, or a string in one of INPUT_DATE_FORMATS

    Returns:
        e.g. "9/30/25"
    """
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, str):
        parsed = None
        for fmt in INPUT_DATE_FORMATS:
            try:
                parsed = datetime.strptime(value.strip(), fmt).date()
                break
            except ValueError:
                continue
        if parsed is None:
            raise ValueError(f"Unrecognized journal date: {value!r}")
        value = parsed
    return f"{value.month}/{value.day}/{value.strftime('%y')}"


def default_journal_date(today: Optional[date] = None) -> date:
    """Last day of the previous month"""
    today = today or date.today()
    return today.replace(day=1) - timedelta(days=1)


class JournalBuilder:
    """
    Build balanced journals for POS and payroll records
    Every build method is a pure function of its arguments
    """

    def __init__(self, tolerance: Decimal = BALANCE_TOLERANCE):
        """
        Initialize journal builder

        Args:
            tolerance: Largest debit/credit variance still considered balanced
        """
        self.tolerance = tolerance

    def validate_journal_balance(self, lines: Iterable[JournalLine]) -> Dict:
        """
        Validate that journal lines balance (debits = credits)

        Returns:
            Validation result dict with 'is_balanced', 'total_debits', 'total_credits', 'variance'
        """
        lines = list(lines)
        total_debits = sum_amounts(line.debit for line in lines)
        total_credits = sum_amounts(line.credit for line in lines)
        variance = abs(total_debits - total_credits)

        return {
            'is_balanced': variance <= self.tolerance,
            'total_debits': total_debits,
            'total_credits': total_credits,
            'variance': variance
        }

    def _finalize(self, journal_no: str, journal_date: str, description: str,
                  lines: List[JournalLine], warnings: List[Dict]) -> Journal:
        """Stamp the balance check and review flags onto a new Journal"""
        check = self.validate_journal_balance(lines)
        review_reasons = [w['message'] for w in warnings if w.get('severity') == 'high']

        if not check['is_balanced']:
            message = (f"UNBALANCED: DR={check['total_debits']:.2f} CR={check['total_credits']:.2f} "
                       f"(variance {check['variance']:.2f})")
            print(f"[WARNING] Journal {journal_no} does not balance. {message}", flush=True)
            warnings = warnings + [{
                'type': 'unbalanced_journal',
                'message': message,
                'severity': 'high'
            }]
            review_reasons.append(message)

        return Journal(
            journal_no=journal_no,
            journal_date=journal_date,
            description=description,
            lines=lines,
            total_debits=check['total_debits'],
            total_credits=check['total_credits'],
            variance=check['variance'],
            is_balanced=check['is_balanced'],
            needs_review=bool(review_reasons),
            review_reason=' | '.join(review_reasons),
            warnings=warnings,
        )

    # ═══════════════════════════════════════════════════════════════
    # POINT OF SALE
    # ═══════════════════════════════════════════════════════════════

    @staticmethod
    def _posted(record: Mapping[str, Decimal], rows) -> Decimal:
        """Sum of the rows that produce a journal line (positive values only)"""
        return sum_amounts(value for value in (record.get(row, ZERO) for row in rows) if value > 0)

    def calculate_total_debits(self, record: Mapping[str, Decimal]) -> Decimal:
        """Debit side of the Cash (Over)/Short calculation"""
        return self._posted(record, BALANCE_DEBIT_ROWS)

    def calculate_total_credits(self, record: Mapping[str, Decimal]) -> Decimal:
        """Credit side of the Cash (Over)/Short calculation"""
        total = self._posted(record, BALANCE_CREDIT_ROWS)

        # House Account Sales (absolute value since it's negative)
        house_sales = record.get("House Account Sales", ZERO)
        if house_sales < 0:
            total += abs(house_sales)
        return total

    def build_pos_journal(self, record: PosRecord, journal_no: str, journal_date: str) -> Journal:
        """
        Build the sales journal for one store

        Args:
            record: Aggregated POS record
            journal_no: Journal number (the store ID by convention)
            journal_date: Journal date already formatted for import

        Returns:
            Journal including a Cash (Over)/Short line when needed
        """
        description = POS_JOURNAL_DESCRIPTION
        lines: List[JournalLine] = []

        def debit(account, amount, name=''):
            lines.append(JournalLine(account, debit=amount, description=description, name=name))

        def credit(account, amount, name=''):
            lines.append(JournalLine(account, credit=amount, description=description, name=name))

        values = record.values

        if values["Net Sales"] > 0:
            debit(POS_ACCOUNTS['net_sales'], values["Net Sales"])

        if values["Taxes"] > 0:
            credit(POS_ACCOUNTS['taxes'], values["Taxes"])

        if values["Delivery Fees"] > 0:
            credit(POS_ACCOUNTS['delivery_fees'], values["Delivery Fees"])

        # House Account Sales: sale on account, only when negative
        if values["House Account Sales"] < 0:
            credit(POS_ACCOUNTS['accounts_receivable'], abs(values["House Account Sales"]),
                   name=POS_ACCOUNTS['accounts_receivable'])

        # House Account Payments: payment collected
        if values["House Account Payments"] > 0:
            debit(POS_ACCOUNTS['accounts_receivable'], values["House Account Payments"],
                  name=POS_ACCOUNTS['accounts_receivable'])

        if values["Gift Card Activations and Add"] > 0:
            credit(POS_ACCOUNTS['gift_cards'], values["Gift Card Activations and Add"])

        if values["Third-Party Delivery Tips"] > 0:
            debit(POS_ACCOUNTS['delivery_tips'], values["Third-Party Delivery Tips"])

        for row in DISCOUNT_ROWS:
            if values[row] > 0:
                account = POS_ACCOUNTS['order_discounts'] if row == "Order Discounts" else DISCOUNT_ACCOUNTS[row]
                debit(account, values[row])

        # Gift Card tender: redemption
        if values["Gift Card"] > 0:
            debit(POS_ACCOUNTS['gift_cards'], values["Gift Card"])

        for category, account in CATEGORY_SALES_ACCOUNTS.items():
            if values[category] > 0:
                credit(account, values[category])

        # Cash (Over)/Short absorbs POS rounding and untracked tenders
        difference = self.calculate_total_credits(values) - self.calculate_total_debits(values)
        if abs(difference) > self.tolerance:
            if difference > 0:
                debit(POS_ACCOUNTS['cash_over_short'], difference)
            else:
                credit(POS_ACCOUNTS['cash_over_short'], abs(difference))

        return self._finalize(journal_no, journal_date, description, lines, list(record.warnings))

    def build_pos_batch(self, records_by_store: Mapping[str, PosRecord], journal_date: str) -> Dict[str, Journal]:
        """
        Build one journal per store

        Returns:
            {store_id: Journal}, stores sorted
        """
        return {
            store_id: self.build_pos_journal(records_by_store[store_id], store_id, journal_date)
            for store_id in sorted(records_by_store)
        }

    # ═══════════════════════════════════════════════════════════════
    # PAYROLL
    # ═══════════════════════════════════════════════════════════════

    def build_payroll_journal(self, record: PayrollRecord, journal_no: str, journal_date: str) -> Journal:
        """
        Build the payroll journal for one location

        The net pay line needs both a net pay amount and a settlement
        account; without them the journal is still returned, flagged for
        review, and never balanced with an invented amount.
        """
        description = PAYROLL_JOURNAL_DESCRIPTION
        lines: List[JournalLine] = []
        warnings = list(record.warnings)

        def debit(account, amount):
            lines.append(JournalLine(account, debit=amount, description=description))

        def credit(account, amount):
            lines.append(JournalLine(account, credit=amount, description=description))

        earnings = record.earnings
        deductions = record.deductions

        salaries_wages = sum_amounts(earnings.get(code, ZERO) for code in SALARY_EARNING_CODES)
        if salaries_wages > 0:
            debit(PAYROLL_ACCOUNTS['salaries_wages'], salaries_wages)

        if earnings.get('BONUS', ZERO) > 0:
            debit(PAYROLL_ACCOUNTS['management_bonuses'], earnings['BONUS'])

        if earnings.get('DRAW', ZERO) > 0:
            debit(PAYROLL_ACCOUNTS['guaranteed_payments'], earnings['DRAW'])

        if earnings.get('DBONU', ZERO) > 0:
            debit(PAYROLL_ACCOUNTS['guaranteed_payments_bonus'], earnings['DBONU'])

        payroll_taxes = sum_amounts(record.employer_taxes.get(code, ZERO) for code in EMPLOYER_TAX_CODES)
        if payroll_taxes > 0:
            debit(PAYROLL_ACCOUNTS['payroll_taxes'], payroll_taxes)

        # Mileage is a reimbursement, not a withholding
        if deductions.get('MILES', ZERO) > 0:
            debit(PAYROLL_ACCOUNTS['mileage'], deductions['MILES'])

        medical_insurance = sum_amounts(deductions.get(code, ZERO) for code in MEDICAL_DEDUCTION_CODES)
        if medical_insurance > 0:
            credit(PAYROLL_ACCOUNTS['medical_insurance'], medical_insurance)

        if record.net_pay > 0 and record.bank_account:
            credit(record.bank_account, record.net_pay)
            print(f"[INFO] Bank Credit: {record.bank_account} - ${record.net_pay:,.2f}", flush=True)
        else:
            message = 'No net pay or bank account found for journal entry'
            print(f"[WARNING] {message}", flush=True)
            warnings.append({
                'type': 'missing_net_pay_line',
                'message': message,
                'severity': 'high'
            })

        return self._finalize(journal_no, journal_date, description, lines, warnings)

    def get_summary(self, journals: Mapping[str, Journal]) -> Dict:
        """Get summary of built journals"""
        return {
            'total_journals': len(journals),
            'total_lines': sum(len(j.lines) for j in journals.values()),
            'total_debits': sum_amounts(j.total_debits for j in journals.values()),
            'total_credits': sum_amounts(j.total_credits for j in journals.values()),
            'needs_review': sorted(no for no, j in journals.items() if j.needs_review),
            'unbalanced': sorted(no for no, j in journals.items() if not j.is_balanced),
        }
