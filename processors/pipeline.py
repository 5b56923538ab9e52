"""
Pipeline - End-to-end conversion shared by the CLI and the web app

Report text -> aggregated records -> journals -> CSV content
"""

from typing import Dict, Optional, Sequence

from config import MAX_WORKERS, OUTPUT_FILES
from mappings import LocationBankMapper
from parsers import ParsedDocument
from .consolidation import build_consolidated_table
from .journal_builder import JournalBuilder, default_journal_date, format_journal_date
from .output_generator import OutputGenerator
from .payroll_aggregator import PayrollAggregator
from .pos_aggregator import PosAggregator


def _resolve_journal_date(journal_date) -> str:
    if journal_date is None or journal_date == '':
        journal_date = default_journal_date()
    return format_journal_date(journal_date)


def convert_pos_documents(documents: Sequence[ParsedDocument], journal_date=None,
                          max_workers: int = MAX_WORKERS, verbose: bool = False) -> Dict:
    """
    Convert POS reports into the consolidated table and one journal per store

    Args:
        documents: Parsed POS reports
        journal_date: date or date string (default: last day of previous month)
        max_workers: Threads used for aggregation
        verbose: Print step progress

    Returns:
        Dictionary with records, journals, CSV content and summary
    """
    journal_date = _resolve_journal_date(journal_date)

    if verbose:
        print(f"\n[1/3] Aggregating {len(documents)} POS report(s)...")
    aggregator = PosAggregator()
    records_by_store, row_order = aggregator.convert(documents, max_workers=max_workers)

    if verbose:
        print(f"      ✓ Stores: {', '.join(sorted(records_by_store)) or '(none)'}")
        print(f"\n[2/3] Building journals dated {journal_date}...")
    builder = JournalBuilder()
    journals = builder.build_pos_batch(records_by_store, journal_date)
    summary = builder.get_summary(journals)

    if verbose:
        print(f"      ✓ Built {summary['total_journals']} journals, {summary['total_lines']} lines")
        print("\n[3/3] Generating output files...")
    output_generator = OutputGenerator()
    table = build_consolidated_table(records_by_store, row_order)

    results = {
        'status': 'success',
        'journal_date': journal_date,
        'records': records_by_store,
        'row_order': row_order,
        'table': table,
        'journals': journals,
        'consolidated_csv': output_generator.generate_consolidated_csv(table),
        'journal_files': output_generator.generate_journal_files(journals),
        'summary': summary,
    }

    if verbose:
        print(f"      ✓ {OUTPUT_FILES['CONSOLIDATED']} + {len(results['journal_files'])} journal file(s)")
    return results


def convert_payroll_documents(documents: Sequence[ParsedDocument], journal_no: str, journal_date=None,
                              bank_mapper: Optional[LocationBankMapper] = None,
                              verbose: bool = False) -> Dict:
    """
    Convert the report files of one payroll run into a journal

    Args:
        documents: Parsed payroll report files (one location)
        journal_no: Journal number chosen by the operator
        journal_date: date or date string (default: last day of previous month)
        bank_mapper: Location -> settlement account lookup

    Returns:
        Dictionary with the record, journal, output filename and CSV content
    """
    journal_date = _resolve_journal_date(journal_date)

    if verbose:
        print(f"\n[1/2] Aggregating {len(documents)} payroll report file(s)...")
    record = PayrollAggregator(bank_mapper=bank_mapper).aggregate(documents)

    if verbose:
        print(f"\n[2/2] Building journal {journal_no} dated {journal_date}...")
    journal = JournalBuilder().build_payroll_journal(record, str(journal_no), journal_date)

    return {
        'status': 'success',
        'journal_date': journal_date,
        'record': record,
        'journal': journal,
        'filename': OUTPUT_FILES['PAYROLL'].format(journal_no=journal_no),
        'journal_csv': OutputGenerator().generate_journal_csv(journal),
    }
