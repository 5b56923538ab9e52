"""
Mappings Package - Static reference data lookups
"""

from .location_bank import LocationBankMapper, get_location_bank_mapper

__all__ = ['LocationBankMapper', 'get_location_bank_mapper']
