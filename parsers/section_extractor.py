"""
Sectioned Table Extractor - Read category/value tables out of a report section

Text reflow loses structure, so a section is located by an ordered list of
strategies (bounded start/end markers first, then the looser column-header
anchor) and a candidate span is only trusted when it is long enough to be
the real table rather than a menu or table-of-contents fragment.

Within the span each category is looked up line by line (rows read
"<category> <units> <gross>"), then through a token-stream scan for reports
whose lines were flattened into one.
"""

import re
from decimal import Decimal
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from config import DEBUG, MIN_SECTION_LENGTH
from .amounts import ZERO, find_money_tokens, is_integer_token, is_money_token, parse_amount

MODIFIER_MARKER = '(modifier)'


class SectionBounds:
    """Markers that delimit a report section"""

    def __init__(self, start: str, end: Sequence[str] = (), header: Optional[str] = None,
                 min_length: int = MIN_SECTION_LENGTH, include_start: bool = False):
        """
        Args:
            start: Regex of the section heading
            end: Regexes of headings that follow the section (end-of-text always ends it)
            header: Looser regex of the table's column header, used when the heading is lost
            min_length: Shortest span accepted as the real section
            include_start: Keep the heading text in the returned span
        """
        self.start = start
        self.end = tuple(end)
        self.header = header
        self.min_length = min_length
        self.include_start = include_start

    def end_pattern(self) -> str:
        if not self.end:
            return r'\Z'
        return r'(?:' + '|'.join(self.end) + r'|\Z)'

    def __repr__(self):
        return f"SectionBounds(start={self.start!r}, end={self.end!r}, header={self.header!r})"


def bounded_candidates(text: str, bounds: SectionBounds) -> Iterator[str]:
    """Every occurrence of the start marker up to the next end marker"""
    group = r'(' + bounds.start + r'[\s\S]*?)' if bounds.include_start else bounds.start + r'([\s\S]*?)'
    pattern = re.compile(group + r'(?=' + bounds.end_pattern() + r')', re.IGNORECASE)
    for match in pattern.finditer(text):
        yield match.group(1)


def header_candidates(text: str, bounds: SectionBounds) -> Iterator[str]:
    """From the column-header marker up to the next end marker"""
    if not bounds.header:
        return
    pattern = re.compile(r'(' + bounds.header + r'[\s\S]*?)(?=' + bounds.end_pattern() + r')',
                         re.IGNORECASE)
    for match in pattern.finditer(text):
        yield match.group(1)


DEFAULT_STRATEGIES: List[Callable[[str, SectionBounds], Iterable[str]]] = [
    bounded_candidates,
    header_candidates,
]


class SectionTableExtractor:
    """Locate a bounded section and extract category -> amount pairs from it"""

    def __init__(self, strategies=None, debug: bool = None):
        self.strategies = list(strategies or DEFAULT_STRATEGIES)
        self.debug = DEBUG if debug is None else debug

    def locate_section(self, text: str, bounds: SectionBounds) -> Optional[str]:
        """
        Find the section span

        Returns:
            The first candidate (in strategy order) that passes the length
            check, or None when no strategy yields a usable span
        """
        if not text:
            return None

        for strategy in self.strategies:
            for span in strategy(text, bounds):
                if len(span.strip()) >= bounds.min_length:
                    if self.debug:
                        print(f"[DEBUG] Section found via {strategy.__name__}: {span[:200]!r}", flush=True)
                    return span
                if self.debug:
                    print(f"[DEBUG] Rejected short span via {strategy.__name__}: {span!r}", flush=True)
        return None

    def extract_table(self, text: str, bounds: SectionBounds,
                      categories: Mapping[str, Sequence[str]]) -> Dict[str, Decimal]:
        """
        Extract a category table

        Args:
            text: Full report text
            bounds: Section markers
            categories: {category: [name and synonyms]}

        Returns:
            {category: amount} for every category (0 when not found), or {}
            when the section itself could not be located
        """
        section = self.locate_section(text, bounds)
        if section is None:
            print(f"[WARNING] Section not found: {bounds.start}", flush=True)
            return {}

        lines = section.split('\n')
        tokens = section.split()
        values = {}

        for category, names in categories.items():
            value = self._from_lines(lines, names)
            if value is None:
                value = self._from_tokens(tokens, names)
            if value is None:
                if self.debug:
                    print(f"[DEBUG] {category}: not found", flush=True)
                value = ZERO
            values[category] = value

        return values

    def _from_lines(self, lines: List[str], names: Sequence[str]) -> Optional[Decimal]:
        """Line pass: '<name> ... <units> <gross>' -> gross"""
        patterns = [_name_at_line_start(name) for name in names]
        for line in lines:
            if MODIFIER_MARKER in line.lower():
                continue
            stripped = line.strip()
            if not any(p.match(stripped) for p in patterns):
                continue
            amounts = find_money_tokens(stripped)
            if len(amounts) >= 2:
                return parse_amount(amounts[1])
            if len(amounts) == 1:
                return parse_amount(amounts[0])
        return None

    def _from_tokens(self, tokens: List[str], names: Sequence[str]) -> Optional[Decimal]:
        """Token pass: name token(s), then integer units, then money gross"""
        for name in names:
            name_tokens = [t.lower() for t in name.split()]
            width = len(name_tokens)
            for i in range(len(tokens) - width - 1):
                window = [t.lower() for t in tokens[i:i + width]]
                if window != name_tokens:
                    continue
                units, gross = tokens[i + width], tokens[i + width + 1]
                if is_integer_token(units) and is_money_token(gross):
                    return parse_amount(gross)
        return None


def _name_at_line_start(name: str):
    """Category name at the start of a line, whole words only"""
    words = [re.escape(w) for w in name.split()]
    return re.compile(r'^' + r'\s+'.join(words) + r'(?![\w\'])', re.IGNORECASE)
