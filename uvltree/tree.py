"""
Feature tree nodes and groups.

A ``FeatureTree`` node wraps one feature. Its children are organized in
groups; every non-root node belongs to exactly one group of its parent,
identified by ``parent_group_id``. Nodes are only created through a
``FeatureModel`` (``add_root``) or an existing node (``add_feature_below``),
which assign each node its index in the model's node arena.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Range:
    """Inclusive integer range ``[lower, upper]``; ``upper=None`` is unbounded."""

    lower: int
    upper: Optional[int] = None

    def __post_init__(self):
        if self.lower < 0:
            raise ValueError(f"lower bound must not be negative: {self.lower}")
        if self.upper is not None and self.upper < self.lower:
            raise ValueError(f"upper bound {self.upper} is below lower bound {self.lower}")

    @classmethod
    def of(cls, lower, upper):
        return cls(lower, upper)

    @classmethod
    def exactly(cls, count):
        return cls(count, count)

    @classmethod
    def at_least(cls, lower):
        return cls(lower, None)

    @classmethod
    def at_most(cls, upper):
        return cls(0, upper)

    def is_unbounded(self):
        return self.upper is None

    def contains(self, value):
        return value >= self.lower and (self.upper is None or value <= self.upper)

    def __str__(self):
        return f"[{self.lower}..{'*' if self.upper is None else self.upper}]"


MANDATORY = Range.exactly(1)
OPTIONAL = Range.of(0, 1)


class GroupType(Enum):
    AND = "and"
    OR = "or"
    ALTERNATIVE = "alternative"
    CARDINALITY = "cardinality"


class Group:
    """A group of sibling nodes with a selection range."""

    def __init__(self, group_id, group_range, owner):
        self.id = group_id
        self.range = group_range
        self.owner = owner
        self.children = []

    @property
    def group_type(self):
        if self.range == Range.at_least(0):
            return GroupType.AND
        if self.range == Range.at_least(1):
            return GroupType.OR
        if self.range == Range.exactly(1):
            return GroupType.ALTERNATIVE
        return GroupType.CARDINALITY

    def is_and(self):
        return self.group_type is GroupType.AND

    def is_or(self):
        return self.group_type is GroupType.OR

    def is_alternative(self):
        return self.group_type is GroupType.ALTERNATIVE

    def is_cardinality(self):
        return self.group_type is GroupType.CARDINALITY

    def __repr__(self):
        return f"Group(id={self.id}, {self.group_type.value}, {self.range})"


class FeatureTree:
    """A node of the feature tree."""

    def __init__(self, feature, index, model):
        self.feature = feature
        self.index = index
        self.model = model
        self.parent = None
        self.parent_group_id = None
        self.feature_cardinality = OPTIONAL
        self.groups = []
        self._next_group_id = 0
        self.add_group(Range.at_least(0))

    @property
    def children(self):
        """All child nodes, group by group."""
        return [child for group in self.groups for child in group.children]

    def is_root(self):
        return self.parent is None

    def is_leaf(self):
        return not any(group.children for group in self.groups)

    def is_mandatory(self):
        return self.feature_cardinality == MANDATORY

    def is_optional(self):
        return self.feature_cardinality == OPTIONAL

    def get_group(self, group_id):
        for group in self.groups:
            if group.id == group_id:
                return group
        raise KeyError(f"{self.feature.name} has no group with id {group_id}")

    @property
    def parent_group(self):
        if self.parent is None:
            return None
        return self.parent.get_group(self.parent_group_id)

    # Mutation, used while building the tree.

    def add_group(self, group_range):
        group = Group(self._next_group_id, group_range, self)
        self._next_group_id += 1
        self.groups.append(group)
        return group

    def remove_group(self, group_id):
        group = self.get_group(group_id)
        if group.children:
            raise ValueError(f"group {group_id} of {self.feature.name} still has children")
        self.groups.remove(group)

    def add_feature_below(self, feature, group_id=0):
        """Create a child node for ``feature`` in the group ``group_id``."""
        group = self.get_group(group_id)
        child = self.model._new_node(feature)
        child.parent = self
        child.parent_group_id = group_id
        group.children.append(child)
        return child

    def set_parent_group_id(self, group_id):
        """Move this node into another group of its parent."""
        if self.parent is None:
            raise ValueError("the root node has no parent group")
        target = self.parent.get_group(group_id)
        if group_id == self.parent_group_id:
            return
        self.parent.get_group(self.parent_group_id).children.remove(self)
        target.children.append(self)
        self.parent_group_id = group_id

    def set_feature_cardinality(self, cardinality):
        self.feature_cardinality = cardinality

    def make_mandatory(self):
        self.feature_cardinality = MANDATORY

    def make_optional(self):
        self.feature_cardinality = OPTIONAL

    def __repr__(self):
        return f"FeatureTree({self.feature.name!r}, index={self.index})"
