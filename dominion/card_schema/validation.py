"""
Catalog Validation - Schema validation for card catalogs.

Validates that:
1. Every definition is well-formed (name, cost, types)
2. Effects are consistent with the card's types
3. Operation parameters are in range
4. Card references inside effects exist in the catalog
"""

from __future__ import annotations
from dataclasses import dataclass

from .card_catalog import CardCatalog, CardDefinition, CardType
from .effect_dsl import (
    EffectDescriptor,
    Operation,
    OpType,
    GainCard,
    TrashCard,
)


class CatalogValidationError(Exception):
    """Raised when catalog validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalog validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_catalog(catalog: CardCatalog, raise_on_error: bool = False) -> ValidationResult:
    """
    Validate a complete card catalog.

    Returns ValidationResult with errors and warnings.
    Raises CatalogValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not catalog.catalog_id:
        errors.append("catalog_id is required")

    for key, card in catalog.cards.items():
        if key != card.name:
            errors.append(f"Catalog key '{key}' does not match card name '{card.name}'")
        errors.extend(_validate_card(card))
        errors.extend(_validate_references(card, catalog))
        warnings.extend(_card_warnings(card))

    if not catalog.cards_of_type(CardType.TREASURE):
        warnings.append("No treasure cards defined - nothing can be bought")

    result = ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)
    if raise_on_error and errors:
        raise CatalogValidationError(errors)
    return result


def _validate_card(card: CardDefinition) -> list[str]:
    """Validate a single card definition."""
    errors = []
    if not card.name:
        errors.append("Card has empty name")
    if card.cost < 0:
        errors.append(f"Card '{card.name}' has negative cost {card.cost}")
    if not card.types:
        errors.append(f"Card '{card.name}' has no type tags")

    if card.is_treasure:
        non_coin = [op for op in card.effect if op.op_type != OpType.GAIN_COINS]
        if non_coin or card.effect.is_empty:
            errors.append(f"Treasure '{card.name}' must have a single GainCoins effect")

    if not card.is_playable and not card.effect.is_empty:
        errors.append(f"Card '{card.name}' is not playable but has an effect")

    errors.extend(
        f"Card '{card.name}': {e}" for e in _validate_effect_structure(card.effect)
    )
    return errors


def _validate_effect_structure(effect: EffectDescriptor) -> list[str]:
    """Validate effect DSL structure (not references)."""
    errors = []
    for index, op in enumerate(effect):
        errors.extend(f"operation {index}: {e}" for e in _validate_operation(op))
    return errors


def _validate_operation(op: Operation) -> list[str]:
    """Validate a single operation's parameters."""
    errors = []

    n = getattr(op, "n", None)
    if n is not None and n < 0:
        errors.append(f"{op.op_type.value} has negative amount {n}")

    if op.op_type == OpType.SIFT_TOP_CARDS and op.n < 1:
        errors.append("sift_top_cards must look at one or more cards")

    if isinstance(op, GainCard):
        forms = [op.kind is not None, op.max_cost is not None, op.cost_above_trashed is not None]
        if sum(forms) != 1:
            errors.append("gain_card needs exactly one of kind, max_cost, cost_above_trashed")
        if op.max_cost is not None and op.max_cost < 0:
            errors.append(f"gain_card has negative max_cost {op.max_cost}")

    if isinstance(op, TrashCard) and op.count < 1:
        errors.append("trash_card must allow trashing one or more cards")

    return errors


def _validate_references(card: CardDefinition, catalog: CardCatalog) -> list[str]:
    """Validate card names referenced from effects."""
    errors = []
    for op in card.effect:
        if isinstance(op, GainCard) and op.kind is not None and op.kind not in catalog:
            errors.append(f"Card '{card.name}' gains unknown card '{op.kind}'")
    return errors


def _card_warnings(card: CardDefinition) -> list[str]:
    warnings = []
    if card.is_action and card.effect.is_empty:
        warnings.append(f"Action '{card.name}' has no effect")
    ops = list(card.effect)
    for index, op in enumerate(ops):
        if isinstance(op, GainCard) and op.cost_above_trashed is not None:
            if not any(isinstance(prev, TrashCard) for prev in ops[:index]):
                warnings.append(
                    f"Card '{card.name}' gains relative to a trashed card but never trashes"
                )
    return warnings
