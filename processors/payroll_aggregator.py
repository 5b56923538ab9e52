"""
Payroll Aggregator - Build a PayrollRecord from Paylocity labor distribution reports

A report may be split across several files; their text is concatenated and
only the "Report Totals" section is read. Each earning/tax/deduction code can
print once per department, so every occurrence is summed.
"""

from typing import Optional, Sequence

from config import DEBUG
from mappings import LocationBankMapper, get_location_bank_mapper
from parsers import ParsedDocument, PatternExtractor, SectionTableExtractor
from parsers.amounts import sum_amounts
from parsers.field_rules import (DEDUCTION_RULES, EARNING_RULES, EMPLOYEE_TAX_RULES,
                                 EMPLOYER_TAX_RULES, HEADER_PATTERNS, NET_PAY_RULE,
                                 REPORT_TOTALS_SECTION)
from .records import PayrollRecord


class PayrollAggregator:
    """Aggregate payroll report text into a PayrollRecord"""

    def __init__(self, bank_mapper: Optional[LocationBankMapper] = None, debug: bool = None):
        self.debug = DEBUG if debug is None else debug
        self.bank_mapper = bank_mapper or get_location_bank_mapper()
        self.field_extractor = PatternExtractor(debug=self.debug)
        self.section_extractor = SectionTableExtractor(debug=self.debug)

    def extract_header(self, document: Optional[ParsedDocument]) -> dict:
        """
        Location, company name, check date and pay period from the first report

        Each value is '' when not printed; location falls back to the
        document's store ID.
        """
        header = {name: '' for name in HEADER_PATTERNS}
        if document is None:
            return header

        for name, patterns in HEADER_PATTERNS.items():
            header[name] = self.field_extractor.extract_text(document.text, patterns)

        if not header['location']:
            header['location'] = document.store_id or ''
        return header

    def aggregate(self, documents: Sequence[ParsedDocument]) -> PayrollRecord:
        """
        Build the payroll record for one location

        Args:
            documents: Report files of one payroll run (pages may be split across files)

        Returns:
            PayrollRecord; all totals 0 when the Report Totals section is missing
        """
        documents = list(documents)
        full_text = '\n\n'.join(doc.text for doc in documents)
        warnings = []

        header = self.extract_header(documents[0] if documents else None)
        bank_account, lookup_warning = self.bank_mapper.resolve(header['location'])
        if lookup_warning:
            warnings.append(lookup_warning)

        print(f"[INFO] Location: {header['location'] or '(none)'} -> {bank_account}", flush=True)

        section = self.section_extractor.locate_section(full_text, REPORT_TOTALS_SECTION)
        if section is None:
            print("[ERROR] Could not find Report Totals section", flush=True)
            warnings.append({
                'type': 'missing_section',
                'message': 'Report Totals section not found; payroll totals are zero',
                'severity': 'high'
            })
            section = ''

        earnings = self.field_extractor.sum_all(section, EARNING_RULES)
        employee_taxes = self.field_extractor.sum_all(section, EMPLOYEE_TAX_RULES)
        employer_taxes = self.field_extractor.sum_all(section, EMPLOYER_TAX_RULES)
        deductions = self.field_extractor.sum_all(section, DEDUCTION_RULES)
        net_pay = self.field_extractor.extract_field(section, NET_PAY_RULE)

        if section and not net_pay:
            print("[WARNING] Could not extract net pay", flush=True)
            warnings.append({
                'type': 'missing_net_pay',
                'message': 'EE Net line not found in Report Totals',
                'severity': 'high'
            })

        record = PayrollRecord(
            location=header['location'],
            company_name=header['company_name'],
            check_date=header['check_date'],
            pay_period=header['pay_period'],
            bank_account=bank_account,
            earnings=earnings,
            employee_taxes=employee_taxes,
            employer_taxes=employer_taxes,
            deductions=deductions,
            total_earnings=sum_amounts(earnings.values()),
            total_taxes=sum_amounts(employee_taxes.values()),
            total_employer_taxes=sum_amounts(employer_taxes.values()),
            total_deductions=sum_amounts(deductions.values()),
            net_pay=net_pay,
            warnings=warnings,
        )

        print(f"[INFO] Total Earnings: ${record.total_earnings:,.2f}", flush=True)
        print(f"[INFO] Total Employee Taxes: ${record.total_taxes:,.2f}", flush=True)
        print(f"[INFO] Total Employer Taxes: ${record.total_employer_taxes:,.2f}", flush=True)
        print(f"[INFO] Total Deductions: ${record.total_deductions:,.2f}", flush=True)
        print(f"[INFO] Net Pay: ${record.net_pay:,.2f}", flush=True)
        return record
