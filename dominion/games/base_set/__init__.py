"""
Base Set - The base game's cards and standard setup.
"""

from .cards import BASE_CARDS, BASIC_CARDS, DEFAULT_KINGDOM, KINGDOM_CARDS, get_card_by_name
from .catalog import BASE_CATALOG_ID, create_base_catalog
from .setup import setup_base_game, standard_supply_counts

__all__ = [
    "BASE_CARDS",
    "BASIC_CARDS",
    "KINGDOM_CARDS",
    "DEFAULT_KINGDOM",
    "BASE_CATALOG_ID",
    "get_card_by_name",
    "create_base_catalog",
    "setup_base_game",
    "standard_supply_counts",
]
