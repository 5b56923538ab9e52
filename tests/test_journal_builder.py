from datetime import date, datetime
from decimal import Decimal

import pytest

from config import CATEGORY_SALES_ACCOUNTS, PAYROLL_ACCOUNTS, POS_ACCOUNTS
from conftest import POS_SCENARIO_TEXT
from parsers.amounts import ZERO
from processors import (JournalBuilder, JournalLine, PayrollAggregator, PayrollRecord,
                        PosAggregator, default_journal_date, format_journal_date)

CASH_OVER_SHORT = POS_ACCOUNTS["cash_over_short"]
CATERING_ACCOUNT = CATEGORY_SALES_ACCOUNTS["Catering"]


@pytest.fixture
def builder():
    return JournalBuilder()


@pytest.fixture
def pos_record(pos_text):
    return PosAggregator(debug=False).aggregate(pos_text, "FL008")


@pytest.fixture
def payroll_record(bank_mapper, payroll_documents):
    return PayrollAggregator(bank_mapper=bank_mapper, debug=False).aggregate(payroll_documents)


def _pos_record(text, store_id="FL001"):
    return PosAggregator(debug=False).aggregate(text, store_id)


# ═══════════════════════════════════════════════════════════════
# POINT OF SALE
# ═══════════════════════════════════════════════════════════════

def test_scenario_journal(builder):
    journal = builder.build_pos_journal(_pos_record(POS_SCENARIO_TEXT), "FL001", "9/30/25")
    assert [(line.account, line.debit, line.credit) for line in journal.lines] == [
        ("Sales", Decimal("1234.56"), ZERO),
        ("State Sales Tax Payable", ZERO, Decimal("61.73")),
        (CASH_OVER_SHORT, ZERO, Decimal("1172.83")),
    ]
    assert journal.is_balanced
    assert journal.total_debits == journal.total_credits == Decimal("1234.56")


def test_full_journal_line_order(builder, pos_record):
    journal = builder.build_pos_journal(pos_record, "FL008", "9/30/25")
    assert journal.accounts() == [
        "Sales",
        "State Sales Tax Payable",
        "Delivery Income",
        "Accounts Receivable",
        "Accounts Receivable",
        "Gift Cards",
        "Third-Party Delivery Fees:Door Dash Drive",
        "Discounts & Comps:Non-Vouchered",
        "Discounts & Comps:Customer Credits",
        "Discounts & Comps:Discounts",
        "Third-Party Delivery Fees",
        "Discounts & Comps:Complimentary",
        "Gift Cards",
        *CATEGORY_SALES_ACCOUNTS.values(),
        CASH_OVER_SHORT,
    ]


def test_full_journal_balances(builder, pos_record):
    journal = builder.build_pos_journal(pos_record, "FL008", "9/30/25")
    assert journal.find_line(CASH_OVER_SHORT).debit == Decimal("815.70")
    assert journal.total_debits == journal.total_credits == Decimal("11515.95")
    assert journal.is_balanced
    assert not journal.needs_review
    assert all(line.description == "To record sales" for line in journal.lines)


def test_house_account_sign_convention(builder, pos_record):
    journal = builder.build_pos_journal(pos_record, "FL008", "9/30/25")
    sale, payment = journal.find_lines("Accounts Receivable")
    assert (sale.debit, sale.credit) == (ZERO, Decimal("123.45"))
    assert (payment.debit, payment.credit) == (Decimal("200.00"), ZERO)
    assert sale.name == payment.name == "Accounts Receivable"


def test_tenders_are_not_posted(builder, pos_record):
    journal = builder.build_pos_journal(pos_record, "FL008", "9/30/25")
    amounts = {line.debit for line in journal.lines} | {line.credit for line in journal.lines}
    assert Decimal("4000.00") not in amounts
    assert Decimal("7000.00") not in amounts


def test_no_balancing_line_when_already_balanced(builder):
    record = _pos_record("NET SALES $ 100.00\nTaxes $ 7.00\n"
                         "ITEM CATEGORIES SOLD\nCategory Units Net Gross\n"
                         "Pizza 10 83.00 83.00\nWings 2 10.00 10.00\nSales / Tender\n")
    journal = builder.build_pos_journal(record, "FL001", "9/30/25")
    assert journal.find_line(CASH_OVER_SHORT) is None
    assert journal.is_balanced


def test_negative_category_is_left_out_of_the_balance(builder):
    record = _pos_record("NET SALES $ 100.00\nTaxes $ 7.00\n"
                         "ITEM CATEGORIES SOLD\nCategory Units Net Gross\n"
                         "Pizza 10 110.00 110.00\nCatering 1 (10.00) (10.00)\nSales / Tender\n")
    assert record["Catering"] == Decimal("-10.00")

    journal = builder.build_pos_journal(record, "FL001", "9/30/25")
    assert journal.find_line(CATERING_ACCOUNT) is None
    assert journal.find_line(CASH_OVER_SHORT).debit == Decimal("17.00")
    assert journal.total_debits == journal.total_credits == Decimal("117.00")
    assert journal.is_balanced
    assert not journal.needs_review


def test_balance_within_one_cent_is_left_alone(builder):
    record = _pos_record("NET SALES $ 100.01\nTaxes $ 100.00\n")
    journal = builder.build_pos_journal(record, "FL001", "9/30/25")
    assert journal.find_line(CASH_OVER_SHORT) is None
    assert journal.is_balanced
    assert journal.variance == Decimal("0.01")


def test_journal_is_deterministic(builder, pos_record):
    first = builder.build_pos_journal(pos_record, "FL008", "9/30/25")
    second = builder.build_pos_journal(pos_record, "FL008", "9/30/25")
    assert first == second


def test_pos_batch_uses_store_ids(builder, pos_record):
    records = {"FL010": _pos_record(POS_SCENARIO_TEXT, "FL010"), "FL008": pos_record}
    journals = builder.build_pos_batch(records, "9/30/25")
    assert list(journals) == ["FL008", "FL010"]
    assert journals["FL010"].journal_no == "FL010"

    summary = builder.get_summary(journals)
    assert summary["total_journals"] == 2
    assert summary["total_lines"] == 23 + 3
    assert summary["unbalanced"] == []


def test_journal_line_rejects_debit_and_credit():
    with pytest.raises(ValueError):
        JournalLine("Sales", debit=Decimal("1.00"), credit=Decimal("1.00"))


# ═══════════════════════════════════════════════════════════════
# PAYROLL
# ═══════════════════════════════════════════════════════════════

def test_payroll_journal(builder, payroll_record):
    journal = builder.build_payroll_journal(payroll_record, "1042", "9/30/25")
    assert [(line.account, line.debit, line.credit) for line in journal.lines] == [
        (PAYROLL_ACCOUNTS["salaries_wages"], Decimal("2250.00"), ZERO),
        (PAYROLL_ACCOUNTS["management_bonuses"], Decimal("500.00"), ZERO),
        (PAYROLL_ACCOUNTS["guaranteed_payments"], Decimal("2000.00"), ZERO),
        (PAYROLL_ACCOUNTS["payroll_taxes"], Decimal("302.88"), ZERO),
        (PAYROLL_ACCOUNTS["mileage"], Decimal("45.00"), ZERO),
        (PAYROLL_ACCOUNTS["medical_insurance"], ZERO, Decimal("120.00")),
        ("Fifth Third Checking 4681", ZERO, Decimal("4977.88")),
    ]
    assert journal.is_balanced
    assert not journal.needs_review
    assert journal.description == "To record payroll"


def test_payroll_without_net_pay_is_flagged_not_fixed(builder):
    record = PayrollRecord(location="300", bank_account="Fifth Third Checking 4681",
                           earnings={"REG": Decimal("1000.00")})
    journal = builder.build_payroll_journal(record, "7", "9/30/25")
    assert journal.accounts() == [PAYROLL_ACCOUNTS["salaries_wages"]]
    assert not journal.is_balanced
    assert journal.needs_review
    types = [w["type"] for w in journal.warnings]
    assert "missing_net_pay_line" in types
    assert "unbalanced_journal" in types


def test_payroll_unmapped_location_needs_review(builder):
    warning = {"type": "unmapped_location", "message": "No bank account mapped", "severity": "high"}
    record = PayrollRecord(bank_account="Default", net_pay=Decimal("10.00"),
                           earnings={"REG": Decimal("10.00")}, warnings=[warning])
    journal = builder.build_payroll_journal(record, "8", "9/30/25")
    assert journal.is_balanced
    assert journal.needs_review
    assert "No bank account mapped" in journal.review_reason


def test_dbonu_posts_to_guaranteed_payments_bonus(builder):
    record = PayrollRecord(bank_account="Bank", net_pay=Decimal("5.00"), earnings={"DBONU": Decimal("5.00")})
    journal = builder.build_payroll_journal(record, "9", "9/30/25")
    assert journal.lines[0].account == PAYROLL_ACCOUNTS["guaranteed_payments_bonus"]


# ═══════════════════════════════════════════════════════════════
# DATES
# ═══════════════════════════════════════════════════════════════

@pytest.mark.parametrize(
    "value, expected",
    [
        (date(2025, 9, 30), "9/30/25"),
        (datetime(2025, 1, 5, 14, 30), "1/5/25"),
        ("2025-09-30", "9/30/25"),
        ("09/30/2025", "9/30/25"),
        ("9/30/25", "9/30/25"),
    ],
)
def test_format_journal_date(value, expected):
    assert format_journal_date(value) == expected


def test_format_journal_date_rejects_garbage():
    with pytest.raises(ValueError):
        format_journal_date("September")


def test_default_journal_date_is_last_day_of_previous_month():
    assert default_journal_date(date(2025, 10, 15)) == date(2025, 9, 30)
    assert default_journal_date(date(2025, 3, 1)) == date(2025, 2, 28)
    assert default_journal_date(date(2026, 1, 10)) == date(2025, 12, 31)
