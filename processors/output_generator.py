"""
Output Generator - Generate CSV/Excel content for import into accounting systems
Creates the consolidated store table and QuickBooks Online journal imports
"""

from io import BytesIO
from typing import Dict, List, Mapping

import pandas as pd

from config import CURRENCY, JOURNAL_CSV_HEADER, NOT_AVAILABLE, OUTPUT_FILES
from parsers.amounts import format_amount
from .records import Journal


class OutputGenerator:
    """
    Generate formatted output content

    Everything is returned as str/bytes; writing files is left to the caller
    (CLI writes to disk, the web app streams responses).
    """

    def __init__(self):
        self.generated_files = []

    # ═══════════════════════════════════════════════════════════════
    # CONSOLIDATED TABLE
    # ═══════════════════════════════════════════════════════════════

    @staticmethod
    def _map_cells(table: pd.DataFrame, func) -> pd.DataFrame:
        """Apply func to every cell, keeping row and column order"""
        return pd.DataFrame({column: table[column].map(func) for column in table.columns},
                            index=table.index, columns=table.columns)

    @staticmethod
    def _format_cell(value) -> str:
        """Two decimals, N/A for zero/absent"""
        if value is None or not value:
            return NOT_AVAILABLE
        return format_amount(value)

    def generate_consolidated_csv(self, table: pd.DataFrame) -> str:
        """
        Consolidated CSV: header ",<stores...>", one row per category

        Args:
            table: Output of build_consolidated_table()
        """
        formatted = self._map_cells(table, self._format_cell)
        content = formatted.to_csv(index=True, index_label='', lineterminator='\n')
        self.generated_files.append(OUTPUT_FILES['CONSOLIDATED'])
        return content

    def generate_consolidated_xlsx(self, table: pd.DataFrame) -> bytes:
        """Consolidated table as a formatted workbook"""
        df = self._map_cells(table, lambda value: float(value) if value else NOT_AVAILABLE)
        df = df.reset_index().rename(columns={'index': 'Category'})

        buffer = BytesIO()
        self._save_with_formatting(df, buffer, 'Consolidated')
        self.generated_files.append(OUTPUT_FILES['CONSOLIDATED_XLSX'])
        return buffer.getvalue()

    # ═══════════════════════════════════════════════════════════════
    # JOURNALS
    # ═══════════════════════════════════════════════════════════════

    def journal_rows(self, journal: Journal) -> List[Dict]:
        """One import row per journal line; blank debit/credit when not applicable"""
        rows = []
        for line in journal.lines:
            rows.append({
                '*JournalNo': journal.journal_no,
                '*JournalDate': journal.journal_date,
                '*AccountName': line.account,
                '*Debits': format_amount(line.debit) if line.debit else '',
                '*Credits': format_amount(line.credit) if line.credit else '',
                'Description': line.description,
                'Name': line.name,
                'Currency': CURRENCY,
                'Location': '',
                'Class': ''
            })
        return rows

    def generate_journal_csv(self, journal: Journal) -> str:
        """Journal import CSV for one journal"""
        df = pd.DataFrame(self.journal_rows(journal), columns=JOURNAL_CSV_HEADER)
        content = df.to_csv(index=False, lineterminator='\n')
        self.generated_files.append(f"{journal.journal_no}.csv")
        return content

    def generate_journal_files(self, journals: Mapping[str, Journal]) -> Dict[str, str]:
        """{filename: csv content} for a batch of journals"""
        return {
            f"{journal_no}.csv": self.generate_journal_csv(journal)
            for journal_no, journal in journals.items()
        }

    def _save_with_formatting(self, df, target, sheet_name: str):
        """Save DataFrame with professional formatting"""
        from openpyxl import Workbook
        from openpyxl.styles import Font, PatternFill, Alignment
        from openpyxl.utils.dataframe import dataframe_to_rows

        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        for r_idx, row in enumerate(dataframe_to_rows(df, index=False, header=True), 1):
            for c_idx, value in enumerate(row, 1):
                cell = ws.cell(row=r_idx, column=c_idx, value=value)

                if r_idx == 1:
                    cell.font = Font(bold=True, color='FFFFFF')
                    cell.fill = PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid')
                    cell.alignment = Alignment(horizontal='center')
                elif isinstance(value, float):
                    cell.number_format = '#,##0.00'

        for column in ws.columns:
            max_length = max(len(str(cell.value)) for cell in column if cell.value is not None)
            ws.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)

        ws.auto_filter.ref = ws.dimensions
        ws.freeze_panes = 'B2'
        wb.save(target)

    def get_generated_files(self) -> List[str]:
        return self.generated_files
