# Copyright Rand Arete @ Ananke 2025
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""Overlap graph between affinity groups.

Every query walks from affinity group to overlapping affinity group. Whether
two groups overlap never changes, so the relation is computed once, when the
engine is built, and stored as directed NextHop edges.

Target is a NextHop of source iff:
    (A) source and target share at least one dimension,
    (B) on every shared dimension their coordinate sets intersect, and
    (C) target touches at least one dimension source does not.

Rule (C) makes the relation asymmetric: a group that adds nothing to its
source is not an edge, even when the reverse edge exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple

from ..core.bundle import AffinityGroup, ConstraintBundle
from ..core.coordinates import Dimension
from ..core.ordering import CANONICAL_ORDERING, Ordering

logger = logging.getLogger(__name__)


# =============================================================================
# Pairwise relations
# =============================================================================


def are_orthogonal(a: ConstraintBundle, b: ConstraintBundle) -> bool:
    """True if the two bundles share no dimension."""
    return a.dimensions.isdisjoint(b.dimensions)


def are_compatible(a: ConstraintBundle, b: ConstraintBundle) -> bool:
    """True if the bundles intersect on every dimension both touch.

    Orthogonal bundles are compatible by definition.
    """
    for dimension in a.dimensions & b.dimensions:
        if not a.coordinate_set(dimension).touches(b.coordinate_set(dimension)):
            return False
    return True


def are_overlapping(a: ConstraintBundle, b: ConstraintBundle) -> bool:
    """True if the bundles are compatible and share at least one dimension."""
    return not are_orthogonal(a, b) and are_compatible(a, b)


@dataclass(frozen=True, slots=True)
class NextHop:
    """A directed overlap edge from one affinity group to another.

    Attributes:
        source: The group the path is extended from
        target: The group the path may be extended with
        new_dimensions: Dimensions target touches that source does not
    """

    source: AffinityGroup
    target: AffinityGroup
    new_dimensions: FrozenSet[Dimension]

    def __repr__(self) -> str:
        names = sorted(d.__name__ for d in self.new_dimensions)
        return f"NextHop({self.target} +{names})"


def next_hop_for(source: AffinityGroup, target: AffinityGroup) -> Optional[NextHop]:
    """Return target as a NextHop of source, or None if rules (A)-(C) fail."""
    shared = source.dimensions & target.dimensions
    new_dimensions = target.dimensions - source.dimensions
    if not shared or not new_dimensions:
        return None
    for dimension in shared:
        if not source.coordinate_set(dimension).touches(target.coordinate_set(dimension)):
            return None
    return NextHop(source=source, target=target, new_dimensions=new_dimensions)


# =============================================================================
# Graph
# =============================================================================


class OverlapGraph:
    """Immutable adjacency of NextHops, keyed by source group.

    Groups and each group's hops are kept in the order of the ordering the
    graph was built with.
    """

    def __init__(
        self,
        groups: Tuple[AffinityGroup, ...],
        adjacency: Mapping[AffinityGroup, Tuple[NextHop, ...]],
    ):
        self._groups = groups
        self._adjacency: Dict[AffinityGroup, Tuple[NextHop, ...]] = dict(adjacency)
        self._targets: Dict[AffinityGroup, FrozenSet[AffinityGroup]] = {
            source: frozenset(hop.target for hop in hops)
            for source, hops in self._adjacency.items()
        }
        self._edge_count = sum(len(hops) for hops in self._adjacency.values())

    @property
    def groups(self) -> Tuple[AffinityGroup, ...]:
        """All groups, in graph order."""
        return self._groups

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def next_hops(self, source: AffinityGroup) -> Tuple[NextHop, ...]:
        """Outgoing edges of ``source`` (empty for unknown groups)."""
        return self._adjacency.get(source, ())

    def targets_of(self, source: AffinityGroup) -> FrozenSet[AffinityGroup]:
        """Every group reachable from ``source`` in one hop."""
        return self._targets.get(source, frozenset())

    def has_edge(self, source: AffinityGroup, target: AffinityGroup) -> bool:
        return target in self.targets_of(source)

    def __contains__(self, group: object) -> bool:
        return group in self._adjacency

    def __iter__(self) -> Iterator[AffinityGroup]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        return f"OverlapGraph(groups={len(self._groups)}, edges={self._edge_count})"


def build_overlap_graph(
    groups: Iterable[AffinityGroup],
    ordering: Ordering = CANONICAL_ORDERING,
) -> OverlapGraph:
    """Compute the NextHops of every group against every other group.

    This is O(G^2 * D) for G groups touching D dimensions on average.

    Args:
        groups: Distinct affinity groups
        ordering: Order for groups and for each group's hops

    Returns:
        The immutable OverlapGraph
    """
    ordered = tuple(ordering.sort_bundles(groups))
    adjacency: Dict[AffinityGroup, Tuple[NextHop, ...]] = {}
    for source in ordered:
        hops = []
        for target in ordered:
            if target is source:
                continue
            hop = next_hop_for(source, target)
            if hop is not None:
                hops.append(hop)
        adjacency[source] = tuple(hops)

    graph = OverlapGraph(ordered, adjacency)
    logger.debug(f"Built overlap graph: {len(graph)} groups, {graph.edge_count} edges")
    return graph
