"""
Pattern Field Extractor - Pull named money fields out of report text

Each field is described by an ExtractionRule: a name plus an ordered list of
regex patterns. Report vendors word the same line differently ("UberEats" vs
"UBER EATS"), so a rule may carry several patterns and a pattern may carry
several alternative capture groups. The first pattern that matches wins and,
within it, the first non-empty group.

A pattern may also capture a prefix in a group named "skip" (e.g. the
"Order" in front of "Discounts"). Matches where that group is present belong
to a different field and are passed over.

Absent fields are normal (not every report variant prints every line) and
extract as 0.
"""

import re
from decimal import Decimal
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence

from config import DEBUG
from .amounts import ZERO, parse_amount, sum_amounts

REGEX_FLAGS = re.IGNORECASE | re.MULTILINE
SKIP_GROUP = 'skip'


class ExtractionRule(NamedTuple):
    """Field name + ordered alternative patterns"""
    name: str
    patterns: Sequence[str]


@lru_cache(maxsize=512)
def compile_pattern(pattern: str):
    """Compile (and cache) a rule pattern with the shared flags"""
    return re.compile(pattern, REGEX_FLAGS)


def _first_group(match) -> Optional[str]:
    """First non-empty captured group of a match, the skip group aside"""
    skip_index = match.re.groupindex.get(SKIP_GROUP)
    for index, value in enumerate(match.groups(), start=1):
        if value and index != skip_index:
            return value
    return None


def _accepted_matches(pattern: str, text: str):
    """Matches of a pattern whose skip group (if any) did not participate"""
    for match in compile_pattern(pattern).finditer(text):
        if SKIP_GROUP in match.re.groupindex and match.group(SKIP_GROUP):
            continue
        yield match


class PatternExtractor:
    """Evaluate extraction rules against report text"""

    def __init__(self, debug: bool = None):
        self.debug = DEBUG if debug is None else debug

    def extract_field(self, text: str, rule: ExtractionRule) -> Decimal:
        """
        Extract one field

        Args:
            text: Report text
            rule: ExtractionRule to evaluate

        Returns:
            Parsed amount, Decimal('0.00') when no pattern matches
        """
        if not text:
            return ZERO

        for pattern in rule.patterns:
            match = next(_accepted_matches(pattern, text), None)
            if not match:
                continue
            value = _first_group(match)
            if value:
                amount = parse_amount(value)
                if self.debug:
                    print(f"[DEBUG] {rule.name}: {amount}", flush=True)
                return amount

        return ZERO

    def extract_all(self, text: str, rules: Iterable[ExtractionRule]) -> Dict[str, Decimal]:
        """Extract every rule; returns {field name: amount} in rule order"""
        return {rule.name: self.extract_field(text, rule) for rule in rules}

    def sum_matches(self, text: str, rule: ExtractionRule) -> Decimal:
        """
        Sum every match of every pattern in the rule

        Used where a code legitimately repeats (one line per department) and
        each occurrence must be added, not overwritten.
        """
        if not text:
            return ZERO

        amounts: List[Decimal] = []
        for pattern in rule.patterns:
            for match in _accepted_matches(pattern, text):
                value = _first_group(match)
                if value:
                    amounts.append(parse_amount(value))

        total = sum_amounts(amounts)
        if self.debug and amounts:
            print(f"[DEBUG] {rule.name}: {len(amounts)} match(es) = {total}", flush=True)
        return total

    def sum_all(self, text: str, rules: Iterable[ExtractionRule]) -> Dict[str, Decimal]:
        """sum_matches() for a group of rules"""
        return {rule.name: self.sum_matches(text, rule) for rule in rules}

    def extract_text(self, text: str, patterns: Sequence[str]) -> str:
        """Single-shot string capture (header metadata); '' when absent"""
        if not text:
            return ''
        for pattern in patterns:
            match = compile_pattern(pattern).search(text)
            if match:
                value = _first_group(match)
                if value:
                    return value.strip()
        return ''


def rules_from_mapping(patterns_by_field: Mapping[str, Sequence[str]]) -> List[ExtractionRule]:
    """Build ExtractionRules from a {field: [patterns]} table"""
    return [ExtractionRule(name, tuple(patterns)) for name, patterns in patterns_by_field.items()]


def extract_field(text: str, rule: ExtractionRule) -> Decimal:
    """Module-level shortcut for PatternExtractor().extract_field()"""
    return PatternExtractor(debug=False).extract_field(text, rule)
