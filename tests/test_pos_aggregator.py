from decimal import Decimal

import pytest

from conftest import POS_REPORT_TEXT, POS_SCENARIO_TEXT
from parsers import ParsedDocument
from parsers.amounts import ZERO
from processors import ROW_ORDER, PosAggregator


@pytest.fixture
def aggregator():
    return PosAggregator(debug=False)


def test_record_has_full_schema_in_order(aggregator):
    record = aggregator.aggregate(POS_SCENARIO_TEXT, "FL001")
    assert list(record.values) == ROW_ORDER
    assert len(ROW_ORDER) == len(set(ROW_ORDER))


def test_scenario_values(aggregator):
    record = aggregator.aggregate(POS_SCENARIO_TEXT, "FL001")
    assert record["Net Sales"] == Decimal("1234.56")
    assert record["Taxes"] == Decimal("61.73")
    assert record["Credit Cards Total"] == Decimal("800.00")
    untouched = set(ROW_ORDER) - {"Net Sales", "Taxes", "Visa", "Mastercard", "Credit Cards Total"}
    assert all(record[row] == ZERO for row in untouched)


def test_missing_category_section_is_recorded(aggregator):
    record = aggregator.aggregate(POS_SCENARIO_TEXT, "FL001")
    assert [w["type"] for w in record.warnings] == ["missing_section"]


def test_full_report(aggregator, pos_text):
    record = aggregator.aggregate(pos_text, "FL008")
    assert record["Delivery Fees"] == Decimal("375.00")
    assert record["House Account Sales"] == Decimal("-123.45")
    assert record["House Account Payments"] == Decimal("200.00")
    assert record["Amex"] == Decimal("700.00")
    assert record["Credit Cards Total"] == Decimal("7000.00")
    assert record["F&B Total"] == Decimal("10250.00")
    assert record["Cash"] == Decimal("1500.00")
    assert record.warnings == ()
    assert "Delivery Charges" not in record.values


def test_derived_totals_are_recomputed_not_read(aggregator):
    text = POS_SCENARIO_TEXT + "Credit Cards Total $ 9,999.99\n"
    assert aggregator.aggregate(text)["Credit Cards Total"] == Decimal("800.00")


def test_positive_house_account_sales_is_dropped(aggregator):
    record = aggregator.aggregate("House Account Sales $ 55.00\n")
    assert record["House Account Sales"] == ZERO


def test_records_are_immutable(aggregator):
    record = aggregator.aggregate(POS_SCENARIO_TEXT, "FL001")
    with pytest.raises(TypeError):
        record.values["Net Sales"] = Decimal("1.00")


def test_convert_groups_by_store(aggregator):
    documents = [
        ParsedDocument("FL010", POS_SCENARIO_TEXT, "fl10.pdf"),
        ParsedDocument("FL008", POS_REPORT_TEXT, "fl8.pdf"),
    ]
    records, row_order = aggregator.convert(documents)
    assert sorted(records) == ["FL008", "FL010"]
    assert row_order == ROW_ORDER
    assert records["FL010"]["Net Sales"] == Decimal("1234.56")


def test_convert_duplicate_store_keeps_later_report(aggregator):
    documents = [
        ParsedDocument("FL008", POS_REPORT_TEXT, "first.pdf"),
        ParsedDocument("FL008", POS_SCENARIO_TEXT, "second.pdf"),
    ]
    records, _ = aggregator.convert(documents)
    record = records["FL008"]
    assert record["Net Sales"] == Decimal("1234.56")
    assert "duplicate_store" in [w["type"] for w in record.warnings]


def test_concurrent_convert_matches_sequential(aggregator):
    documents = [
        ParsedDocument("FL008", POS_REPORT_TEXT, "fl8.pdf"),
        ParsedDocument("FL010", POS_SCENARIO_TEXT, "fl10.pdf"),
        ParsedDocument("FL017", "", "fl17.pdf"),
    ]
    sequential, _ = aggregator.convert(documents, max_workers=1)
    threaded, _ = aggregator.convert(documents, max_workers=3)
    assert {k: dict(v.values) for k, v in sequential.items()} == \
        {k: dict(v.values) for k, v in threaded.items()}


def test_aggregate_is_idempotent(aggregator, pos_text):
    first = aggregator.aggregate(pos_text, "FL008")
    second = aggregator.aggregate(pos_text, "FL008")
    assert first.to_dict() == second.to_dict()
