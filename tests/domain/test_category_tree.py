"""Tests for the category tree model."""

import pytest

from cashflow_ledger.domain.constants import DEFAULT_CATEGORY_TREE
from cashflow_ledger.domain.models import (
    CategoryKind,
    CategoryTree,
    GroupCategory,
    LeafCategory,
)

INFLOW = CategoryKind.INFLOW
OUTFLOW = CategoryKind.OUTFLOW


def test_default_tree_lists_leaves_in_declaration_order() -> None:
    """Leaves should come out depth-first, in the order they are declared."""
    leaf_ids = DEFAULT_CATEGORY_TREE.leaf_ids()

    assert leaf_ids[:5] == (
        "inflow_direct",
        "inflow_third_party",
        "inflow_corporate",
        "inflow_bank_facility",
        "inflow_card_support",
    )
    assert leaf_ids[5:7] == ("outflow_loan_bankA", "outflow_loan_cc_repay")
    assert len(leaf_ids) == len(set(leaf_ids)) == 14


def test_lookups_distinguish_leaves_groups_and_unknown_ids() -> None:
    """find, is_leaf and kind_of should reflect the tree structure."""
    tree = DEFAULT_CATEGORY_TREE

    assert tree.is_leaf("outflow_supplier_1")
    assert not tree.is_leaf("outflow_supplier")
    assert tree.kind_of("outflow_supplier") == OUTFLOW
    assert tree.kind_of("inflow_card_support") == INFLOW
    assert tree.find("missing") is None
    assert tree.kind_of("missing") is None


def test_descends_from_follows_every_ancestor() -> None:
    """Leaves should descend from their parent group and the root."""
    tree = DEFAULT_CATEGORY_TREE

    assert tree.descends_from("outflow_supplier_2", "outflow_supplier")
    assert tree.descends_from("outflow_supplier_2", "outflow")
    assert not tree.descends_from("outflow_office_rent", "outflow_supplier")
    assert not tree.descends_from("outflow_supplier", "outflow_supplier")


def test_duplicate_ids_are_rejected() -> None:
    """Leaf ids must be unique across the whole tree."""
    with pytest.raises(ValueError, match="Duplicate"):
        CategoryTree(
            (
                GroupCategory("in", "In", INFLOW, (
                    LeafCategory("cash", "Cash", INFLOW),
                )),
                GroupCategory("more", "More", INFLOW, (
                    LeafCategory("cash", "Cash again", INFLOW),
                )),
            )
        )


def test_mixed_kinds_are_rejected() -> None:
    """A subtree cannot mix inflow and outflow categories."""
    with pytest.raises(ValueError, match="under inflow group"):
        CategoryTree(
            (
                GroupCategory("in", "In", INFLOW, (
                    LeafCategory("rent", "Rent", OUTFLOW),
                )),
            )
        )


def test_empty_groups_are_rejected() -> None:
    """Groups must carry at least one child."""
    with pytest.raises(ValueError, match="no children"):
        CategoryTree((GroupCategory("in", "In", INFLOW, ()),))
