"""
Tests for card definitions and catalog validation.
"""

import pytest

from ..card_schema import (
    CardCatalog,
    CardDefinition,
    CardType,
    CatalogValidationError,
    GainCard,
    GainCoins,
    validate_catalog,
)
from ..card_schema.effect_dsl import effect, treasure_effect
from ..games.base_set import BASE_CARDS, KINGDOM_CARDS


def _catalog(*cards) -> CardCatalog:
    return CardCatalog.from_cards("test", list(BASE_CARDS) + list(cards))


class TestBaseCatalog:
    """The shipped card set."""

    def test_valid(self, catalog):
        """The base catalog passes validation."""
        result = validate_catalog(catalog)

        assert result.valid, result.errors

    def test_contents(self, catalog):
        """The catalog holds every base card with its cost and value."""
        assert len(catalog) == len(BASE_CARDS)
        assert catalog.cost_of("Province") == 8
        assert catalog.get_card("Gold").treasure_value == 3
        assert catalog.get_card("Curse").victory_points == -1
        assert all(card.is_action for card in KINGDOM_CARDS)

    def test_types(self, catalog):
        """Card types drive playability and type lookups."""
        estate = catalog.get_card("Estate")

        assert not estate.is_playable
        assert estate.has_type(CardType.VICTORY)
        assert {c.name for c in catalog.cards_of_type(CardType.TREASURE)} == {"Copper", "Silver", "Gold"}


class TestValidation:
    """Malformed definitions are reported."""

    def test_negative_cost(self):
        """A negative cost is an error."""
        bad = CardDefinition(name="Bad", cost=-1, types=frozenset({CardType.ACTION}), effect=effect(GainCoins(1)))

        result = validate_catalog(_catalog(bad))

        assert not result.valid

    def test_treasure_needs_coin_effect(self):
        """A treasure without a coin effect is an error."""
        bad = CardDefinition(name="Fool's Gold", cost=2, types=frozenset({CardType.TREASURE}))

        assert not validate_catalog(_catalog(bad)).valid

    def test_gain_of_unknown_card(self):
        """Gaining a card missing from the catalog is an error."""
        bad = CardDefinition(
            name="Summoner",
            cost=4,
            types=frozenset({CardType.ACTION}),
            effect=effect(GainCard(kind="Platinum")),
        )

        assert not validate_catalog(_catalog(bad)).valid

    def test_ambiguous_gain(self):
        """A gain naming both a kind and a cost cap is an error."""
        bad = CardDefinition(
            name="Confused",
            cost=4,
            types=frozenset({CardType.ACTION}),
            effect=effect(GainCard(kind="Silver", max_cost=4)),
        )

        assert not validate_catalog(_catalog(bad)).valid

    def test_raise_on_error(self):
        """raise_on_error turns errors into an exception."""
        bad = CardDefinition(name="", cost=0, types=frozenset())

        with pytest.raises(CatalogValidationError) as exc_info:
            validate_catalog(_catalog(bad), raise_on_error=True)
        assert exc_info.value.errors

    def test_new_card_is_data_only(self):
        """A new card needs only a definition, no code."""
        platinum = CardDefinition(
            name="Platinum",
            cost=9,
            types=frozenset({CardType.TREASURE}),
            effect=treasure_effect(5),
        )

        result = validate_catalog(_catalog(platinum))

        assert result.valid
        assert platinum.treasure_value == 5
