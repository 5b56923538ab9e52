"""
Location Bank Mapping - Resolve a store/location code to its settlement account

Payroll journals credit net pay to the bank account of the location. Store
codes (fl008) and Paylocity numeric location codes (300) both resolve.
Unknown codes fall back to the default account and return a warning so the
substitution is visible to whoever reviews the journal.
"""

import json
import os
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from config import DEFAULT_BANK_ACCOUNT, LOCATION_BANKS_FILE


class LocationBankMapper:
    """Case-insensitive location -> bank account lookup (read-only after load)"""

    def __init__(self, mapping: Optional[Mapping[str, str]] = None,
                 default_account: str = DEFAULT_BANK_ACCOUNT,
                 mapping_file: str = LOCATION_BANKS_FILE):
        """
        Args:
            mapping: Explicit {code: account} table (skips file loading)
            default_account: Account used for unknown codes
            mapping_file: Optional JSON override of the built-in table
        """
        if mapping is None:
            mapping = self._load_mapping(mapping_file)
        self.mapping = MappingProxyType({str(k).strip().lower(): v for k, v in mapping.items()})
        self.default_account = default_account

    def _load_mapping(self, mapping_file: str) -> Dict[str, str]:
        """Load location table from JSON file"""
        if mapping_file and os.path.exists(mapping_file):
            with open(mapping_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            print(f"[INFO] Loaded {len(data)} location bank mappings from {mapping_file}", flush=True)
            return data

        # Return built-in table if file not found
        return self._get_default_mapping()

    def _get_default_mapping(self) -> Dict[str, str]:
        """Built-in store and payroll location codes"""
        return {
            # Store ID format (lowercase)
            'fl008': 'Fifth Third Checking 4681',
            'fl009': 'PNC Bank - Checking 6662',
            'fl010': 'PNC Bank - Checking 2691',
            'fl017': 'Fifth Third Checking 0844',
            'fl024': 'PNC Checking',
            'fl035': 'PNC Bank - Checking 3723',
            'fl041': 'Fifth Third Checking 3308',
            'fl045': 'PNC Bank - Checking 6107',
            'fl046': 'PNC Bank - Checking 6115',
            'fl051': 'FLORIDA PIZZA 8 LLC (6602) -1',
            'cc': 'PNC Checking',

            # Paylocity numeric location codes
            '300': 'Fifth Third Checking 4681',      # fl008
            '400': 'PNC Bank - Checking 6662',       # fl009
            '500': 'PNC Bank - Checking 2691',       # fl010
            '525': 'Fifth Third Checking 0844',      # fl017
            '600': 'PNC Checking',                   # fl024
            '700': 'PNC Bank - Checking 3723',       # fl035
            '800': 'Fifth Third Checking 3308',      # fl041
            '900': 'PNC Bank - Checking 6107',       # fl045
            '1000': 'PNC Bank - Checking 6115',      # fl046
            '1100': 'FLORIDA PIZZA 8 LLC (6602) -1',  # fl051
        }

    def resolve(self, location_code: Optional[str]) -> Tuple[str, Optional[Dict]]:
        """
        Resolve a location code

        Args:
            location_code: Store or payroll location code, any case

        Returns:
            Tuple of (account name, warning dict or None)
        """
        if not location_code or not str(location_code).strip():
            message = 'No location code provided, using default bank account ' + self.default_account
            print(f"[WARNING] {message}", flush=True)
            return self.default_account, {
                'type': 'unmapped_location',
                'message': message,
                'severity': 'high'
            }

        account = self.mapping.get(str(location_code).strip().lower())
        if account is None:
            message = (f"No bank account mapped for location: {location_code}, "
                       f"using default {self.default_account}")
            print(f"[WARNING] {message}", flush=True)
            return self.default_account, {
                'type': 'unmapped_location',
                'message': message,
                'severity': 'high',
                'location': str(location_code)
            }

        return account, None

    def get_bank_account(self, location_code: Optional[str]) -> str:
        """Account for a location (default account when unmapped)"""
        account, _ = self.resolve(location_code)
        return account

    def has_location(self, location_code: Optional[str]) -> bool:
        """Check if a location exists in the mapping"""
        return bool(location_code) and str(location_code).strip().lower() in self.mapping


# Process-wide instance, loaded on first use
_mapper_instance = None


def get_location_bank_mapper() -> LocationBankMapper:
    """
    Get singleton location bank mapper.

    Returns:
        LocationBankMapper instance
    """
    global _mapper_instance
    if _mapper_instance is None:
        _mapper_instance = LocationBankMapper()
    return _mapper_instance
