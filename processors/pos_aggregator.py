"""
POS Aggregator - Build one PosRecord per store from SpeedLine report text

Every record carries the full, ordered row schema; rows the report did not
print are 0. Credit Cards Total and F&B Total are always recomputed from
their rows, never read from the report.
"""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Dict, List, Sequence, Tuple

from config import DEBUG
from parsers import ParsedDocument, PatternExtractor, SectionTableExtractor
from parsers.amounts import ZERO, sum_amounts
from parsers.field_rules import ITEM_CATEGORIES, ITEM_CATEGORY_SECTION, POS_FIELD_RULES
from .records import PosRecord

CREDIT_CARD_ROWS = ["Visa", "Mastercard", "Discover", "Amex"]
CATEGORY_ROWS = list(ITEM_CATEGORIES.keys())

# Exact row order of the consolidated output
ROW_ORDER = [
    # Top
    "Net Sales", "Taxes", "Delivery Fees",
    # Reconciliation
    "House Account Sales", "House Account Payments",
    "Gift Card Activations and Add",
    "Third-Party Delivery Tips",
    # Discounts & Comps
    "Non Vouchered Customer Credits",
    "Customer Credits",
    "Discounts",
    "Order Discounts",
    "Complimentary",
    # Tenders
    "Visa", "Mastercard", "Discover", "Amex", "Cash",
    "UberEats", "Door Dash", "Grubhub", "EZ CATER",
    "Gift Card", "Text Order Credit", "Square", "Online Ordering", "Check", "JetBot Prepaid",
    # Item Categories
    *CATEGORY_ROWS,
    # Summary
    "Credit Cards Total", "F&B Total",
]

# Raw fields that feed a schema row instead of being one
COMBINED_FIELDS = {"Delivery Charges", "Min Charges"}


class PosAggregator:
    """Aggregate SpeedLine POS report text into PosRecords"""

    def __init__(self, debug: bool = None):
        self.debug = DEBUG if debug is None else debug
        self.field_extractor = PatternExtractor(debug=self.debug)
        self.table_extractor = SectionTableExtractor(debug=self.debug)
        self.row_order = list(ROW_ORDER)

    def extract_item_categories(self, text: str) -> Dict[str, Decimal]:
        """Item categories sold table; {} when the section is missing"""
        return self.table_extractor.extract_table(text, ITEM_CATEGORY_SECTION, ITEM_CATEGORIES)

    def aggregate(self, text: str, store_id: str = '') -> PosRecord:
        """
        Build the record for one report

        Args:
            text: Report text
            store_id: Store identifier resolved by the caller

        Returns:
            PosRecord with every ROW_ORDER row present
        """
        extracted = self.field_extractor.extract_all(text, POS_FIELD_RULES)
        warnings = []

        data = {row: value for row, value in extracted.items() if row not in COMBINED_FIELDS}

        # Delivery Fees = Delivery Charges + Min Charges
        data["Delivery Fees"] = extracted["Delivery Charges"] + extracted["Min Charges"]

        # House Account Sales only counts when printed as a negative (sales on account)
        if data["House Account Sales"] > 0:
            data["House Account Sales"] = ZERO

        categories = self.extract_item_categories(text)
        if not categories:
            warnings.append({
                'type': 'missing_section',
                'message': f"ITEM CATEGORIES SOLD section not found for store {store_id or '?'}",
                'severity': 'medium'
            })
        data.update(categories)

        # Initialize all schema rows with 0 if not present
        record = {row: data.get(row, ZERO) for row in self.row_order}

        record["Credit Cards Total"] = sum_amounts(record[row] for row in CREDIT_CARD_ROWS)
        record["F&B Total"] = sum_amounts(record[row] for row in CATEGORY_ROWS)

        if self.debug:
            found = sum(1 for value in record.values() if value)
            print(f"[DEBUG] Store {store_id}: {found} non-zero rows", flush=True)

        return PosRecord(store_id=store_id, values=record, warnings=warnings)

    def convert(self, documents: Sequence[ParsedDocument],
                max_workers: int = 1) -> Tuple[Dict[str, PosRecord], List[str]]:
        """
        Build one record per store

        Args:
            documents: Parsed reports tagged with store IDs
            max_workers: Threads used to aggregate documents concurrently

        Returns:
            Tuple of ({store_id: PosRecord}, row order)
        """
        if max_workers > 1 and len(documents) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                records = list(pool.map(lambda doc: self.aggregate(doc.text, doc.store_id), documents))
        else:
            records = [self.aggregate(doc.text, doc.store_id) for doc in documents]

        records_by_store: Dict[str, PosRecord] = {}
        for doc, record in zip(documents, records):
            if doc.store_id in records_by_store:
                message = (f"Store {doc.store_id} appears in more than one report; "
                           f"using {doc.filename or 'the later report'}")
                print(f"[WARNING] {message}", flush=True)
                record = PosRecord(
                    store_id=record.store_id,
                    values=record.values,
                    warnings=record.warnings + ({
                        'type': 'duplicate_store',
                        'message': message,
                        'severity': 'medium'
                    },)
                )
            records_by_store[doc.store_id] = record

        print(f"[INFO] Aggregated {len(records_by_store)} store(s) from {len(documents)} report(s)", flush=True)
        return records_by_store, list(self.row_order)
