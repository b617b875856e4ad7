"""Tree-builder weighting helpers.

These run on the editing side of the tree: they group siblings for the
pairwise comparison workflow and write derived weights back. Every function
returns new nodes and leaves its input untouched.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Mapping, Optional, Sequence, TypeVar, Union

from compass.engine.numeric import round_half_up

from .solver import AHPResult, PairwiseComparison, calculate_ahp_weights
from compass.models.tree import Factor, TreeNode

Node = Union[Factor, TreeNode]
N = TypeVar("N", Factor, TreeNode)


def sibling_groups(factors: Sequence[Factor]) -> list[list[Node]]:
    """Every sibling list with at least two members, root factors first.

    Child groups follow in pre-order so the comparison workflow walks the
    tree top-down, one group at a time.
    """
    groups: list[list[Node]] = []
    if len(factors) >= 2:
        groups.append(list(factors))

    def visit(nodes: Sequence[Node]) -> None:
        for node in nodes:
            if len(node.children) >= 2:
                groups.append(list(node.children))
            visit(node.children)

    visit(factors)
    return groups


def weights_by_id(nodes: Sequence[Node], weights_by_name: Mapping[str, int]) -> dict[str, int]:
    """Re-key a name-keyed AHP result by node id; unknown names get 0."""
    return {node.id: weights_by_name.get(node.name, 0) for node in nodes}


def apply_weights(nodes: Sequence[N], weights: Mapping[str, float]) -> list[N]:
    """Copy the tree, replacing the weight of any node whose id is in ``weights``."""
    updated: list[N] = []
    for node in nodes:
        children = apply_weights(node.children, weights)
        if node.id in weights:
            updated.append(replace(node, weight=weights[node.id], children=children))
        else:
            updated.append(replace(node, children=children))
    return updated


def raw_weight(node: Node) -> float:
    """Slider-derived weight; high uncertainty and regret pull it down."""
    importance = 50 if node.importance is None else node.importance
    emotional = 50 if node.emotional_weight is None else node.emotional_weight
    uncertainty = 50 if node.uncertainty is None else node.uncertainty
    regret = 50 if node.regret_potential is None else node.regret_potential
    return (importance + emotional + (100 - uncertainty) + (100 - regret)) / 4


def normalize_sibling_weights(nodes: Sequence[N]) -> list[N]:
    """Turn raw slider weights into rounded percentages of the group total."""
    raw = [raw_weight(node) for node in nodes]
    total = sum(raw)
    if total <= 0:
        return list(nodes)
    return [replace(node, weight=round_half_up(r / total * 100)) for node, r in zip(nodes, raw)]


def equal_weights(nodes: Sequence[N]) -> list[N]:
    """Give every sibling the same share; the last absorbs the remainder."""
    if not nodes:
        return []
    share = 100 // len(nodes)
    shares = [share] * len(nodes)
    shares[-1] += 100 - share * len(nodes)
    return [replace(node, weight=s) for node, s in zip(nodes, shares)]


WEIGHTING_METHODS = {
    "equal": equal_weights,
    "normalize": normalize_sibling_weights,
}


def reweight_group(
    factors: Sequence[Factor],
    method: str,
    parent_id: Optional[str] = None,
) -> list[Factor]:
    """Reweight one sibling group and return the updated tree.

    ``parent_id`` of None targets the root factors; otherwise the children of
    the node with that id. Raises ValueError for an unknown method or id.
    """
    if method not in WEIGHTING_METHODS:
        raise ValueError(f"unknown weighting method '{method}'")
    reweight = WEIGHTING_METHODS[method]

    group = sibling_group(factors, parent_id)
    weights = {node.id: node.weight for node in reweight(group) if node.weight is not None}
    return apply_weights(factors, weights)


def apply_ahp_weights(
    factors: Sequence[Factor],
    comparisons: Sequence[PairwiseComparison],
    parent_id: Optional[str] = None,
) -> tuple[list[Factor], AHPResult]:
    """Solve one sibling group's judgments and write the weights onto the tree.

    Comparisons name nodes by ``name``; the group is chosen as in
    ``reweight_group``.
    """
    group = sibling_group(factors, parent_id)
    result = calculate_ahp_weights([node.name for node in group], comparisons)
    return apply_weights(factors, weights_by_id(group, result.weights)), result


def sibling_group(factors: Sequence[Factor], parent_id: Optional[str] = None) -> Sequence[Node]:
    """The root factors, or the children of the node with ``parent_id``."""
    if parent_id is None:
        return factors
    parent = find_node(factors, parent_id)
    if parent is None:
        raise ValueError(f"node '{parent_id}' not found")
    return parent.children


def find_node(nodes: Sequence[Node], node_id: str) -> Optional[Node]:
    """Depth-first search for a node by id."""
    for node in nodes:
        if node.id == node_id:
            return node
        found = find_node(node.children, node_id)
        if found is not None:
            return found
    return None
