from decimal import Decimal

from parsers import SectionBounds, SectionTableExtractor
from parsers.amounts import ZERO
from parsers.field_rules import ITEM_CATEGORIES, ITEM_CATEGORY_SECTION, REPORT_TOTALS_SECTION


def _extractor():
    return SectionTableExtractor(debug=False)


def test_line_pass_takes_gross_column_and_skips_modifiers(pos_text):
    table = _extractor().extract_table(pos_text, ITEM_CATEGORY_SECTION, ITEM_CATEGORIES)
    assert list(table) == list(ITEM_CATEGORIES)
    assert table["Beverage"] == Decimal("950.00")
    assert table["Pizza"] == Decimal("6000.00")
    assert table["Jet's Bread"] == Decimal("650.00")
    assert table["Wings"] == Decimal("1020.00")


def test_missing_section_returns_empty_table():
    assert _extractor().extract_table("NET SALES $ 1.00", ITEM_CATEGORY_SECTION, ITEM_CATEGORIES) == {}


def test_short_fragment_is_rejected_in_favour_of_real_table():
    text = (
        "Contents\nITEM CATEGORIES SOLD\nSales / Tender\n"
        "...\n"
        "ITEM CATEGORIES SOLD\n"
        "Category Units Net Gross\n"
        "Pizza 10 90.00 100.00\n"
        "Wings 5 45.00 50.00\n"
        "Sales / Tender\n"
    )
    table = _extractor().extract_table(text, ITEM_CATEGORY_SECTION, ITEM_CATEGORIES)
    assert table["Pizza"] == Decimal("100.00")
    assert table["Wings"] == Decimal("50.00")
    assert table["Salad"] == ZERO


def test_column_header_fallback_when_heading_is_lost():
    text = (
        "Category Units Net Gross\n"
        "Beverages 3 9.00 9.50\n"
        "Sandwiches 6 48.00 51.00\n"
        "Sales / Tender\n"
    )
    table = _extractor().extract_table(text, ITEM_CATEGORY_SECTION, ITEM_CATEGORIES)
    assert table["Beverage"] == Decimal("9.50")
    assert table["Sandwiches"] == Decimal("51.00")


def test_token_fallback_for_flattened_text():
    text = ("ITEM CATEGORIES SOLD Category Units Gross Beverages 300 950.00 "
            "Pizza 800 6,000.00 Sales / Tender")
    table = _extractor().extract_table(text, ITEM_CATEGORY_SECTION, ITEM_CATEGORIES)
    assert table["Beverage"] == Decimal("950.00")
    assert table["Pizza"] == Decimal("6000.00")
    assert table["Wings"] == ZERO


def test_section_runs_to_end_of_text_without_end_marker():
    bounds = SectionBounds(start=r"Totals", min_length=1)
    assert _extractor().locate_section("Header\nTotals\nA 1.00", bounds).strip() == "A 1.00"


def test_report_totals_section_keeps_heading(payroll_documents):
    text = "\n\n".join(doc.text for doc in payroll_documents)
    section = _extractor().locate_section(text, REPORT_TOTALS_SECTION)
    assert section.startswith("Report Totals")
    assert "Paylocity Corporation" not in section
    assert "Department 10" not in section


def test_custom_strategy_order():
    def last_line(text, bounds):
        yield text.strip().splitlines()[-1]

    extractor = SectionTableExtractor(strategies=[last_line], debug=False)
    bounds = SectionBounds(start=r"unused", min_length=1)
    assert extractor.locate_section("first\nsecond", bounds) == "second"
