"""
PDF Text Extraction - Turn report PDFs into line-grouped text

Only the text is needed downstream: pdfplumber keeps reading order and line
grouping for the SpeedLine and Paylocity reports. Plain .txt exports are
read as-is. Store IDs come from the report body ("Store ID: FL008") or,
failing that, the file name ("fl8 September EOM.pdf" -> "FL008").
"""

import os
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

import pdfplumber

from config import DEBUG, SUPPORTED_REPORT_EXTENSIONS


@dataclass(frozen=True)
class ParsedDocument:
    """Extracted report text tagged with its store/location identifier"""
    store_id: str
    text: str
    filename: str = ''


def extract_store_id_from_content(text: str) -> Optional[str]:
    """Look for "Store ID: FL###" in the report body"""
    match = re.search(r'Store\s+ID:\s*(FL\d+)', text or '', re.IGNORECASE)
    if match:
        return match.group(1).upper()
    return None


def extract_store_id_from_filename(filename: str) -> str:
    """FL### from the file name, else the sanitized file stem"""
    basename = os.path.basename(filename)
    match = re.search(r'fl\s*(\d+)', basename, re.IGNORECASE)
    if match:
        return f"FL{match.group(1).zfill(3)}"

    stem = re.sub(r'\.(pdf|txt)$', '', basename, flags=re.IGNORECASE)
    return re.sub(r'[^a-zA-Z0-9]', '_', stem)


def resolve_store_id(text: str, filename: str) -> str:
    """Content first, then file name"""
    return extract_store_id_from_content(text) or extract_store_id_from_filename(filename)


class PDFTextExtractor:
    """Extract report text from PDF (pdfplumber) or text files"""

    def __init__(self, debug: bool = None):
        self.debug = DEBUG if debug is None else debug

    def extract_text(self, file_path: str) -> str:
        """
        Extract text from a report file

        Args:
            file_path: Path to a .pdf or .txt report

        Returns:
            Page texts joined by newlines
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")

        ext = os.path.splitext(file_path)[1].lower()
        if ext not in SUPPORTED_REPORT_EXTENSIONS:
            raise ValueError(f"Unsupported file format: {ext}. Supported: {SUPPORTED_REPORT_EXTENSIONS}")

        if ext == '.txt':
            with open(file_path, 'r', encoding='utf-8') as f:
                return f.read()

        return self._extract_with_pdfplumber(file_path)

    def _extract_with_pdfplumber(self, file_path: str) -> str:
        """Extract text page by page with pdfplumber"""
        pages = []
        with pdfplumber.open(file_path) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    pages.append(page_text)

        text = '\n'.join(pages)
        if not text.strip():
            print(f"[WARNING] No text layer found in {os.path.basename(file_path)}", flush=True)
        elif self.debug:
            print(f"[DEBUG] Extracted {len(text)} characters from {os.path.basename(file_path)}", flush=True)
        return text

    def parse_file(self, file_path: str) -> ParsedDocument:
        """Extract text and resolve the store ID"""
        text = self.extract_text(file_path)
        filename = os.path.basename(file_path)
        store_id = resolve_store_id(text, filename)
        print(f"[INFO] {filename}: store {store_id}", flush=True)
        return ParsedDocument(store_id=store_id, text=text, filename=filename)

    def parse_files(self, file_paths: Sequence[str], max_workers: int = 1) -> List[ParsedDocument]:
        """
        parse_file() for each path, results in input order

        Args:
            file_paths: Report files
            max_workers: Threads used to read files concurrently (1 = sequential)
        """
        if max_workers <= 1 or len(file_paths) <= 1:
            return [self.parse_file(path) for path in file_paths]

        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(self.parse_file, file_paths))
