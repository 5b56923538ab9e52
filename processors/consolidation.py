"""
Consolidation - Side-by-side comparison table of all stores
"""

from typing import Mapping, Optional, Sequence

import pandas as pd

from parsers.amounts import ZERO
from .records import PosRecord


def build_consolidated_table(records_by_store: Mapping[str, PosRecord],
                             row_order: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """
    Build the consolidated store table

    Args:
        records_by_store: {store_id: PosRecord}
        row_order: Row labels in output order (defaults to the first record's order)

    Returns:
        DataFrame indexed by row label, one column per store (sorted), Decimal cells
    """
    stores = sorted(records_by_store)
    if row_order is None:
        row_order = list(records_by_store[stores[0]].values) if stores else []

    data = {
        store_id: [records_by_store[store_id].get(row, ZERO) for row in row_order]
        for store_id in stores
    }
    return pd.DataFrame(data, index=list(row_order), columns=stores, dtype=object)
