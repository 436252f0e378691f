"""
Base Set Catalog - Assembles the base cards into a validated CardCatalog.
"""

from __future__ import annotations

from ...card_schema import CardCatalog, validate_catalog
from .cards import BASE_CARDS

BASE_CATALOG_ID = "base_set"


def create_base_catalog() -> CardCatalog:
    """
    Create the base set card catalog.

    Raises CatalogValidationError if a definition is malformed.
    """
    catalog = CardCatalog.from_cards(BASE_CATALOG_ID, BASE_CARDS)
    validate_catalog(catalog, raise_on_error=True)
    return catalog
