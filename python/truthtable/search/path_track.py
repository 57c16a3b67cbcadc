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
"""Immutable search state for a single path through the overlap graph.

A PathTrack records which affinity groups a path has visited, which
dimensions those groups touch, and the running intersection of every
coordinate set seen so far (fixed coordinates included) per dimension.

Extending a track never mutates it. The per-dimension map is copied; the
CoordinateSet values are immutable and shared between snapshots. A narrowing
that would empty a dimension produces no track at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Dict, FrozenSet, Mapping, Optional, Tuple

from ..core.bundle import AffinityGroup, FixedCoordinates
from ..core.coordinates import CoordinateSet, Dimension
from ..graph.overlap import NextHop


@dataclass(frozen=True, slots=True, eq=False)
class PathTrack:
    """A snapshot of one partial path.

    Attributes:
        groups: Visited groups in visiting order
        visited_groups: The same groups as a set
        visited_dimensions: Dimensions touched by visited groups. Dimensions
            that are only fixed do not count as visited.
        narrowed: Per-dimension intersection of fixed and visited sets
    """

    groups: Tuple[AffinityGroup, ...]
    visited_groups: FrozenSet[AffinityGroup]
    visited_dimensions: FrozenSet[Dimension]
    narrowed: Mapping[Dimension, CoordinateSet]

    @classmethod
    def seed(cls, fixed: FixedCoordinates = FixedCoordinates.EMPTY) -> PathTrack:
        """An empty path that starts out restricted to ``fixed``."""
        return cls(
            groups=(),
            visited_groups=frozenset(),
            visited_dimensions=frozenset(),
            narrowed={dimension: member for dimension, member in fixed.items()},
        )

    def extend(self, group: AffinityGroup) -> Optional[PathTrack]:
        """Visit ``group`` unconditionally, narrowing every dimension it touches.

        Returns:
            The extended track, or None if some dimension would be emptied
        """
        narrowed: Dict[Dimension, CoordinateSet] = dict(self.narrowed)
        for dimension, member in group.items():
            current = narrowed.get(dimension)
            if current is None:
                narrowed[dimension] = member
                continue
            met = current.meet(member)
            if met is None:
                return None
            narrowed[dimension] = met

        return PathTrack(
            groups=self.groups + (group,),
            visited_groups=self.visited_groups | {group},
            visited_dimensions=self.visited_dimensions | group.dimensions,
            narrowed=narrowed,
        )

    def visit(self, hop: NextHop) -> Optional[PathTrack]:
        """Follow a NextHop if it leads somewhere new.

        The hop is refused (None) when its target was visited already, when
        it adds no dimension this path has not visited, or when narrowing by
        it would empty a dimension.
        """
        if hop.target in self.visited_groups:
            return None
        if hop.new_dimensions <= self.visited_dimensions:
            return None
        return self.extend(hop.target)

    def covers(self, dimensions: AbstractSet[Dimension]) -> bool:
        """True once the path has visited every dimension in ``dimensions``."""
        return self.visited_dimensions >= dimensions

    def narrowed_on(self, dimension: Dimension) -> Optional[CoordinateSet]:
        return self.narrowed.get(dimension)

    def __repr__(self) -> str:
        return f"PathTrack({list(self.groups)})"
