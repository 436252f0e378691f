"""Card schema - card definitions, the effect DSL and catalog validation."""

from .card_catalog import CardCatalog, CardDefinition, CardType
from .effect_dsl import (
    EffectDescriptor,
    Operation,
    OpType,
    TargetType,
    GainDestination,
    DrawCards,
    GainActions,
    GainBuys,
    GainCoins,
    OtherPlayersDiscardTo,
    GainCard,
    TrashCard,
    TopdeckFromHand,
    SiftTopCards,
)
from .validation import validate_catalog, CatalogValidationError

__all__ = [
    "CardCatalog",
    "CardDefinition",
    "CardType",
    "EffectDescriptor",
    "Operation",
    "OpType",
    "TargetType",
    "GainDestination",
    "DrawCards",
    "GainActions",
    "GainBuys",
    "GainCoins",
    "OtherPlayersDiscardTo",
    "GainCard",
    "TrashCard",
    "TopdeckFromHand",
    "SiftTopCards",
    "validate_catalog",
    "CatalogValidationError",
]
