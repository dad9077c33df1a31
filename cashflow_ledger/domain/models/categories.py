"""Domain models for the ledger category hierarchy."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class CategoryKind(str, Enum):
    """Direction of the cash moving through a category."""

    INFLOW = "inflow"
    OUTFLOW = "outflow"


@dataclass(frozen=True)
class LeafCategory:
    """Category holding payments directly."""

    id: str
    name: str
    kind: CategoryKind


@dataclass(frozen=True)
class GroupCategory:
    """Category whose amount is the roll-up of its children.

    Attributes:
        id: Stable category key.
        name: Display name.
        kind: Direction shared by every descendant.
        children: Non-empty tuple of child categories.
    """

    id: str
    name: str
    kind: CategoryKind
    children: tuple["Category", ...]


Category = LeafCategory | GroupCategory


class CategoryTree:
    """Validated, immutable category hierarchy with id lookups."""

    def __init__(self, roots: tuple[Category, ...]) -> None:
        """Build the tree and its indexes.

        Args:
            roots: Top-level categories.

        Raises:
            ValueError: If ids repeat, a group is empty, or kinds are mixed
                inside one subtree.
        """
        self._roots = tuple(roots)
        self._by_id: dict[str, Category] = {}
        self._parents: dict[str, str | None] = {}
        for root in self._roots:
            self._index(root, parent=None)

    def _index(self, category: Category, parent: GroupCategory | None) -> None:
        if category.id in self._by_id:
            raise ValueError(f"Duplicate category id: {category.id}")
        if parent is not None and category.kind != parent.kind:
            raise ValueError(
                f"Category {category.id} is {category.kind.value} "
                f"under {parent.kind.value} group {parent.id}"
            )
        self._by_id[category.id] = category
        self._parents[category.id] = parent.id if parent else None
        if isinstance(category, GroupCategory):
            if not category.children:
                raise ValueError(f"Group category {category.id} has no children")
            for child in category.children:
                self._index(child, parent=category)

    @property
    def roots(self) -> tuple[Category, ...]:
        return self._roots

    def find(self, category_id: str) -> Category | None:
        """Return the category with the given id, if any."""
        return self._by_id.get(category_id)

    def is_leaf(self, category_id: str) -> bool:
        return isinstance(self._by_id.get(category_id), LeafCategory)

    def kind_of(self, category_id: str) -> CategoryKind | None:
        """Return the kind of a known category, None when unknown."""
        category = self._by_id.get(category_id)
        return category.kind if category else None

    def leaves(self) -> Iterator[LeafCategory]:
        """Yield leaf categories in depth-first declaration order."""
        for root in self._roots:
            yield from _walk_leaves(root)

    def categories(self) -> Iterator[Category]:
        """Yield every category, parents before children."""
        return iter(self._by_id.values())

    def leaf_ids(self) -> tuple[str, ...]:
        return tuple(leaf.id for leaf in self.leaves())

    def descends_from(self, category_id: str, ancestor_id: str) -> bool:
        """Return True when ancestor_id is a strict ancestor of category_id."""
        parent = self._parents.get(category_id)
        while parent is not None:
            if parent == ancestor_id:
                return True
            parent = self._parents.get(parent)
        return False


def _walk_leaves(category: Category) -> Iterator[LeafCategory]:
    if isinstance(category, LeafCategory):
        yield category
        return
    for child in category.children:
        yield from _walk_leaves(child)


__all__ = [
    "CategoryKind",
    "LeafCategory",
    "GroupCategory",
    "Category",
    "CategoryTree",
]
