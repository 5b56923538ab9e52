"""Shared report fixtures.

The sample texts mimic what pdfplumber returns for SpeedLine end-of-period
reports and Paylocity labor distribution reports. Amounts are chosen so the
expected totals are easy to verify by hand (the POS item categories add up
to the report's net sales, the payroll net pay balances the journal).
"""

from decimal import Decimal

import pytest

from mappings import LocationBankMapper
from parsers import ParsedDocument


POS_REPORT_TEXT = """SpeedLine End of Period Report
Store ID: FL008
Sales Summary
NET SALES $ 10,250.00
Taxes $ 717.50
Delivery Charges 120 360.00
Min Charges 5 15.00
House Account Sales (123.45)
House Account Payments $ 200.00
Gift Card Activations and Add $ 50.00
Third-Party Delivery Tips $ 75.25
Discounts & Comps
Non Vouchered Customer Credits 2 20.00
Customer Credits 3 30.00
Order Discounts 4 40.00
Discounts 5 50.00
Complimentary 1 10.00
Tenders
Visa $ 4,000.00
Mastercard $ 2,000.00
Discover $ 300.00
American Express $ 700.00
Cash $ 1,500.00
Door Dash $ 600.00
Gift Card $ 25.00
ITEM CATEGORIES SOLD
Category Units Net Gross
Beverages 300 900.00 950.00
Catering 2 400.00 400.00
Desserts 40 160.00 180.00
Jet's Bread 150 600.00 650.00
Pizza 800 5,500.00 6,000.00
Pepperoni (modifier) 100 0.00 150.00
Salads 30 210.00 240.00
Sandwiches 60 480.00 510.00
Sides 90 270.00 300.00
Wings 120 960.00 1,020.00
Sales / Tender
Page 2 of 2
"""

# Only net sales, taxes and two card tenders
POS_SCENARIO_TEXT = """NET SALES $ 1,234.56
Taxes $ 61.73
Visa $500.00
Mastercard $300.00
"""

PAYROLL_HEADER_TEXT = """Florida Pizza 8 LLC (12345)
Labor Distribution - Detail
Location: 300
Check Date: 09/30/2025
Pay Period: 09/14/2025 to 09/27/2025
Department 10 - Kitchen
REG Reg 40.00 500.00
EE Net 400.00
"""

PAYROLL_TOTALS_TEXT = """Report Totals
Earnings
REG Reg 80.00 1,000.00
REG Reg 80.00 1,000.00
OT OT 5.00 150.00
BONUS Bonus 0.00 500.00
DRAW DRAW 0.00 2,000.00
CASH CASH 0.00 100.00
Employee Taxes
FITW 300.00
MED 54.38
SS 232.50
Employer Taxes
MED-R 54.38
SS-R 232.50
FLSUI 10.00
FUTA 6.00
Deductions
MDCL Medical 120.00
MILES MILES 45.00
EE Net 4,977.88
Paylocity Corporation
"""

PAYROLL_REPORT_TEXT = PAYROLL_HEADER_TEXT + PAYROLL_TOTALS_TEXT


def money(value: str) -> Decimal:
    return Decimal(value)


@pytest.fixture
def pos_text() -> str:
    return POS_REPORT_TEXT


@pytest.fixture
def pos_document() -> ParsedDocument:
    return ParsedDocument(store_id="FL008", text=POS_REPORT_TEXT, filename="fl8 September EOM.pdf")


@pytest.fixture
def payroll_documents() -> list:
    """One payroll run split across two files (header page, totals page)"""
    return [
        ParsedDocument(store_id="payroll_p1", text=PAYROLL_HEADER_TEXT, filename="payroll_p1.pdf"),
        ParsedDocument(store_id="payroll_p2", text=PAYROLL_TOTALS_TEXT, filename="payroll_p2.pdf"),
    ]


@pytest.fixture
def bank_mapper() -> LocationBankMapper:
    """Built-in location table, ignoring any local override file"""
    return LocationBankMapper(mapping_file="")
