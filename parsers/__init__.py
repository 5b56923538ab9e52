"""
Parsers Package - Report text extraction modules

Architecture:
1. PDFTextExtractor (pdf_text.py) - Report file -> text + store ID
2. PatternExtractor (field_extractor.py) - Named money fields via regex rules
3. SectionTableExtractor (section_extractor.py) - Category tables inside a report section
4. field_rules.py - Rule tables for SpeedLine POS and Paylocity payroll reports

To support a new report wording:
1. Add a pattern to the field's list in field_rules.py
2. No extractor changes needed!
"""

from .amounts import parse_amount, format_amount
from .field_extractor import ExtractionRule, PatternExtractor, extract_field
from .section_extractor import SectionBounds, SectionTableExtractor
from .pdf_text import ParsedDocument, PDFTextExtractor, resolve_store_id

__all__ = ['parse_amount', 'format_amount', 'ExtractionRule', 'PatternExtractor',
           'extract_field', 'SectionBounds', 'SectionTableExtractor',
           'ParsedDocument', 'PDFTextExtractor', 'resolve_store_id']
