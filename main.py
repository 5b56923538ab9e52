"""
Report-to-Ledger Converter - Main Entry Point

Command Line Interface for converting POS and payroll reports into
journal entry imports
"""

import os
import sys
import argparse
from typing import Dict, List

from config import MAX_WORKERS, OUTPUT_FILES, SUPPORTED_REPORT_EXTENSIONS
from parsers import PDFTextExtractor
from processors import convert_payroll_documents, convert_pos_documents


def print_banner():
    """Print application banner"""
    print("""
╔══════════════════════════════════════════════════════════════════════════════╗
║                        REPORT-TO-LEDGER CONVERTER                             ║
║                                                                               ║
║  SpeedLine POS and Paylocity payroll reports -> journal entry imports         ║
╚══════════════════════════════════════════════════════════════════════════════╝
    """)


def validate_files(file_paths: List[str]) -> List[str]:
    """Return a list of problems with the given input files"""
    errors = []
    for path in file_paths:
        if not os.path.exists(path):
            errors.append(f"File not found: {path}")
            continue
        ext = os.path.splitext(path)[1].lower()
        if ext not in SUPPORTED_REPORT_EXTENSIONS:
            errors.append(f"Unsupported file format: {ext} ({path}). "
                          f"Supported formats: {', '.join(SUPPORTED_REPORT_EXTENSIONS)}")
    return errors


def _write(output_dir: str, filename: str, content: str) -> str:
    path = os.path.join(output_dir, filename)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    return path


def process_pos_reports(file_paths: List[str], output_dir: str = None, journal_date: str = None,
                        max_workers: int = MAX_WORKERS) -> Dict:
    """
    Convert POS reports and write the consolidated table plus one journal per store

    Returns:
        Pipeline results with 'written_files' added
    """
    output_dir = output_dir or os.getcwd()
    os.makedirs(output_dir, exist_ok=True)

    documents = PDFTextExtractor().parse_files(file_paths, max_workers=max_workers)
    results = convert_pos_documents(documents, journal_date=journal_date,
                                    max_workers=max_workers, verbose=True)

    written = [_write(output_dir, OUTPUT_FILES['CONSOLIDATED'], results['consolidated_csv'])]
    for filename, content in results['journal_files'].items():
        written.append(_write(output_dir, filename, content))
    results['written_files'] = written

    summary = results['summary']
    print(f"\n{'='*70}")
    print("PROCESSING COMPLETE")
    print(f"{'='*70}")
    print(f"Stores: {summary['total_journals']}")
    print(f"Journal Lines: {summary['total_lines']}")
    print(f"Total Debits: ${summary['total_debits']:,.2f}")
    print(f"Total Credits: ${summary['total_credits']:,.2f}")
    if summary['needs_review']:
        print(f"Needs Review: {', '.join(summary['needs_review'])}")
    print(f"\nOutput Directory: {output_dir}")
    for path in written:
        print(f"  - {os.path.basename(path)}")
    return results


def process_payroll_reports(file_paths: List[str], journal_no: str, output_dir: str = None,
                            journal_date: str = None) -> Dict:
    """
    Convert the report files of one payroll run and write Payroll_<N>.csv

    Returns:
        Pipeline results with 'written_files' added
    """
    output_dir = output_dir or os.getcwd()
    os.makedirs(output_dir, exist_ok=True)

    documents = PDFTextExtractor().parse_files(file_paths)
    results = convert_payroll_documents(documents, journal_no, journal_date=journal_date, verbose=True)
    results['written_files'] = [_write(output_dir, results['filename'], results['journal_csv'])]

    journal = results['journal']
    print(f"\n{'='*70}")
    print("PROCESSING COMPLETE")
    print(f"{'='*70}")
    print(f"Location: {results['record'].location or '(unknown)'}")
    print(f"Journal Lines: {len(journal.lines)}")
    print(f"Total Debits: ${journal.total_debits:,.2f}")
    print(f"Total Credits: ${journal.total_credits:,.2f}")
    if journal.needs_review:
        print(f"Needs Review: {journal.review_reason}")
    print(f"\nOutput: {results['written_files'][0]}")
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Report-to-Ledger Converter - Turn POS and payroll reports into journal entry imports',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py pos "fl8 September EOM.pdf" fl12.pdf --date 2025-09-30
  python main.py pos reports/*.pdf --output ./output
  python main.py payroll payroll_p1.pdf payroll_p2.pdf --journal-no 1042
  python main.py --web
        """
    )
    parser.add_argument('--web', '-w', action='store_true', help='Launch web interface')

    subparsers = parser.add_subparsers(dest='command')

    pos = subparsers.add_parser('pos', help='Convert SpeedLine POS reports (one per store)')
    pos.add_argument('files', nargs='+', help='POS report files (PDF or text)')
    pos.add_argument('--date', '-d', help='Journal date (default: last day of previous month)')
    pos.add_argument('--output', '-o', help='Output directory (default: current directory)')
    pos.add_argument('--workers', type=int, default=MAX_WORKERS,
                     help=f'Worker threads (default: {MAX_WORKERS})')

    payroll = subparsers.add_parser('payroll', help='Convert Paylocity payroll report files (one location)')
    payroll.add_argument('files', nargs='+', help='Payroll report files (PDF or text)')
    payroll.add_argument('--journal-no', '-j', required=True, help='Journal number')
    payroll.add_argument('--date', '-d', help='Journal date (default: last day of previous month)')
    payroll.add_argument('--output', '-o', help='Output directory (default: current directory)')

    return parser


def main(argv: List[str] = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    print_banner()

    if args.web:
        print("Starting web interface...")
        from config import FLASK_HOST, FLASK_PORT, FLASK_DEBUG
        print(f"API listening on http://{FLASK_HOST}:{FLASK_PORT}")
        from app import app
        app.run(debug=FLASK_DEBUG, host=FLASK_HOST, port=FLASK_PORT)
        return 0

    if not args.command:
        parser.print_help()
        print("\n✗ Error: Please choose 'pos' or 'payroll', or use --web for the web interface")
        return 1

    errors = validate_files(args.files)
    if errors:
        for error in errors:
            print(f"[ERROR] {error}")
        return 1

    try:
        if args.command == 'pos':
            process_pos_reports(args.files, output_dir=args.output, journal_date=args.date,
                                max_workers=args.workers)
        else:
            process_payroll_reports(args.files, args.journal_no, output_dir=args.output,
                                    journal_date=args.date)
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 1

    print("\n✓ Processing completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
