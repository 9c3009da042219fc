"""
Module 'offerings': paliers de sponsoring et places individuelles (données de référence immuables).
"""

from .models import (
    VIP_ALL,
    SEATS_PER_TABLE,
    TierOffering,
    IndividualOffering,
    Offering,
)
from .repository import Catalog, load_catalog, get_catalog, find_tier, canonical_amount

__all__ = [
    # models
    "VIP_ALL",
    "SEATS_PER_TABLE",
    "TierOffering",
    "IndividualOffering",
    "Offering",
    # repository
    "Catalog",
    "load_catalog",
    "get_catalog",
    "find_tier",
    "canonical_amount",
]
