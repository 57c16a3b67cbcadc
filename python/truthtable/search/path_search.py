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
"""Exhaustive path search behind every truth table query.

To answer "which coordinates of dimension D are valid given the fixed
coordinates F", the search:

1. Seeds an empty PathTrack restricted to F.
2. Starts one path at every affinity group touching D, in engine order.
   A group whose coordinates on D were all found already cannot add
   anything and is skipped.
3. Expands each path depth-first through the overlap graph. A hop is taken
   only if it reaches an unvisited group, adds an unvisited dimension, and
   leaves every dimension non-empty.
4. Every path that visits all registered dimensions is complete; its
   narrowed set on D joins the answer.

The search is exhaustive. It stops early only once the answer holds the
whole domain of D, since no further path could add to it.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Set, Tuple

from ..config import DEFAULT_SEARCH_CONFIG, SearchConfig
from ..core.bundle import AffinityGroup, FixedCoordinates
from ..core.coordinates import Coordinate, Dimension, domain_of
from ..graph.overlap import OverlapGraph
from .path_track import PathTrack
from .worklist import PathWorklist

logger = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """Statistics for one query.

    Attributes:
        starts_considered: Groups touching the queried dimension
        starts_pruned: Starting groups skipped because they could add nothing
        starts_rejected: Starting groups inconsistent with the fixed coordinates
        paths_expanded: Paths popped from the worklist
        complete_paths: Paths that visited every registered dimension
        duplicate_paths_skipped: Paths refused because their visited set was
            queued before
        early_exit: True if the search stopped on a full domain
        latency_ms: Total search time
    """

    starts_considered: int = 0
    starts_pruned: int = 0
    starts_rejected: int = 0
    paths_expanded: int = 0
    complete_paths: int = 0
    duplicate_paths_skipped: int = 0
    early_exit: bool = False
    latency_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "starts_considered": self.starts_considered,
            "starts_pruned": self.starts_pruned,
            "starts_rejected": self.starts_rejected,
            "paths_expanded": self.paths_expanded,
            "complete_paths": self.complete_paths,
            "duplicate_paths_skipped": self.duplicate_paths_skipped,
            "early_exit": self.early_exit,
            "latency_ms": self.latency_ms,
        }


@dataclass(frozen=True)
class QueryResult:
    """The answer to a query, with the statistics of the search behind it.

    Attributes:
        dimension: The queried dimension
        coordinates: Every valid coordinate of ``dimension``
        stats: Search statistics
    """

    dimension: Dimension
    coordinates: FrozenSet[Coordinate]
    stats: SearchStats = field(default_factory=SearchStats, compare=False)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self.coordinates

    def __len__(self) -> int:
        return len(self.coordinates)


class PathSearch:
    """Runs queries against a fixed overlap graph.

    A PathSearch holds no per-query state; every call to run() builds its own
    worklist, so one instance can serve any number of queries.

    Args:
        graph: The overlap graph between all affinity groups
        groups_by_dimension: Dimension -> groups touching it, in engine order
        dimensions: Every registered dimension
        config: Which search optimizations to apply
    """

    def __init__(
        self,
        graph: OverlapGraph,
        groups_by_dimension: Mapping[Dimension, Tuple[AffinityGroup, ...]],
        dimensions: FrozenSet[Dimension],
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    ):
        self._graph = graph
        self._groups_by_dimension = groups_by_dimension
        self._dimensions = dimensions
        self._config = config

    @property
    def config(self) -> SearchConfig:
        return self._config

    def run(
        self,
        dimension: Dimension,
        fixed: FixedCoordinates = FixedCoordinates.EMPTY,
    ) -> QueryResult:
        """Compute every valid coordinate of ``dimension`` under ``fixed``.

        Both arguments are assumed to be validated against the registered
        dimensions by the caller.

        Args:
            dimension: The dimension to query
            fixed: Restrictions every complete path must respect

        Returns:
            QueryResult with the answer and search statistics
        """
        start_time = time.perf_counter()
        stats = SearchStats()
        found: Set[Coordinate] = set()
        domain_size = len(domain_of(dimension))
        worklist = PathWorklist(deduplicate=self._config.deduplicate_paths)
        seed = PathTrack.seed(fixed)

        for group in self._groups_by_dimension.get(dimension, ()):
            stats.starts_considered += 1
            if self._config.prune_subsumed_starts and group.coordinate_set(dimension).issubset(
                found
            ):
                stats.starts_pruned += 1
                continue

            track = seed.extend(group)
            if track is None:
                stats.starts_rejected += 1
                continue

            worklist.add(track)
            if self._drain(worklist, dimension, found, domain_size, stats):
                stats.early_exit = True
                logger.debug(
                    f"Early exit on {dimension.__name__}: all {domain_size} coordinates found"
                )
                break

        stats.duplicate_paths_skipped = worklist.duplicates_skipped
        stats.latency_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Query {dimension.__name__} with {len(fixed)} fixed dimension(s): "
            f"{len(found)} coordinate(s), {stats.to_dict()}"
        )
        return QueryResult(dimension=dimension, coordinates=frozenset(found), stats=stats)

    def _drain(
        self,
        worklist: PathWorklist,
        dimension: Dimension,
        found: Set[Coordinate],
        domain_size: int,
        stats: SearchStats,
    ) -> bool:
        """Expand queued paths until none is left.

        Returns:
            True if early exit is enabled and the whole domain was found
        """
        while worklist:
            track = worklist.pop()
            stats.paths_expanded += 1

            if track.covers(self._dimensions):
                stats.complete_paths += 1
                found.update(track.narrowed_on(dimension))
                if self._config.early_exit and len(found) == domain_size:
                    return True
                continue

            for source in track.groups:
                for hop in self._graph.next_hops(source):
                    extended = track.visit(hop)
                    if extended is not None:
                        worklist.add(extended)
        return False
