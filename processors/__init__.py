"""
Processors Package - Aggregation, journal and output modules
"""

from .records import PosRecord, PayrollRecord, JournalLine, Journal
from .pos_aggregator import PosAggregator, ROW_ORDER
from .payroll_aggregator import PayrollAggregator
from .journal_builder import JournalBuilder, format_journal_date, default_journal_date
from .consolidation import build_consolidated_table
from .output_generator import OutputGenerator
from .pipeline import convert_pos_documents, convert_payroll_documents

__all__ = ['PosRecord', 'PayrollRecord', 'JournalLine', 'Journal',
           'PosAggregator', 'ROW_ORDER', 'PayrollAggregator',
           'JournalBuilder', 'format_journal_date', 'default_journal_date',
           'build_consolidated_table', 'OutputGenerator',
           'convert_pos_documents', 'convert_payroll_documents']
