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
"""The truth table engine.

A truth table answers, for one dimension and a set of fixed coordinates,
which coordinates are valid, without ever materializing the n-dimensional
table. It is assembled once from registered dimensions and affinity groups
and is read-only afterwards, so concurrent queries are safe.

Example:
    >>> table = build_truth_table(
    ...     [Bread, Entree, Wine],
    ...     [
    ...         AffinityGroup.of(
    ...             CoordinateSet.of(Bread.WHITE), CoordinateSet.of(Entree.CHICKEN)
    ...         ),
    ...         AffinityGroup.of(
    ...             CoordinateSet.of(Entree.CHICKEN), CoordinateSet.of(Wine.CHIANTI)
    ...         ),
    ...     ],
    ... )
    >>> table.get_all(Bread, FixedCoordinates.of(Wine.CHIANTI))
    frozenset({<Bread.WHITE: 4>})
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..config import DEFAULT_SEARCH_CONFIG, SearchConfig
from ..core.bundle import AffinityGroup, ConstraintBundle, FixedCoordinates
from ..core.coordinates import Coordinate, Dimension, is_dimension
from ..core.ordering import CANONICAL_ORDERING, Ordering
from ..errors import (
    DuplicateConstraint,
    DuplicateDimension,
    InvalidConfiguration,
    InvalidInput,
    UnreachedDimension,
    UnregisteredDimension,
)
from ..graph.overlap import OverlapGraph, build_overlap_graph
from ..search.path_search import PathSearch, QueryResult

logger = logging.getLogger(__name__)


class TruthTable(ABC):
    """Answers validity queries over registered dimensions."""

    @abstractmethod
    def get_all(
        self,
        dimension: Dimension,
        fixed: Optional[FixedCoordinates] = None,
    ) -> FrozenSet[Coordinate]:
        """Every valid coordinate of ``dimension`` given the ``fixed`` coordinates.

        Args:
            dimension: A registered dimension
            fixed: Restrictions to respect; None means no restriction

        Returns:
            The valid coordinates, possibly empty

        Raises:
            UnregisteredDimension: If ``dimension`` or a fixed dimension was
                never registered
        """
        raise NotImplementedError


class RealTruthTable(TruthTable):
    """The path-search backed truth table.

    Instances are produced by build_truth_table() or TruthTableBuilder.build(),
    which validate the input and compute the lookups passed in here.
    """

    def __init__(
        self,
        dimensions: Tuple[Dimension, ...],
        groups: Tuple[AffinityGroup, ...],
        coordinates_by_dimension: Dict[Dimension, FrozenSet[Coordinate]],
        groups_by_coordinate: Dict[Coordinate, Tuple[AffinityGroup, ...]],
        groups_by_dimension: Dict[Dimension, Tuple[AffinityGroup, ...]],
        overlap_graph: OverlapGraph,
        ordering: Ordering,
        config: SearchConfig,
    ):
        self._dimensions = dimensions
        self._dimension_set = frozenset(dimensions)
        self._groups = groups
        self._coordinates_by_dimension = coordinates_by_dimension
        self._groups_by_coordinate = groups_by_coordinate
        self._groups_by_dimension = groups_by_dimension
        self._overlap_graph = overlap_graph
        self._ordering = ordering
        self._config = config
        self._search = PathSearch(
            graph=overlap_graph,
            groups_by_dimension=groups_by_dimension,
            dimensions=self._dimension_set,
            config=config,
        )

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    @property
    def dimensions(self) -> Tuple[Dimension, ...]:
        """Registered dimensions, in registration order."""
        return self._dimensions

    @property
    def affinity_groups(self) -> Tuple[AffinityGroup, ...]:
        """Every affinity group, in engine order."""
        return self._groups

    @property
    def overlap_graph(self) -> OverlapGraph:
        return self._overlap_graph

    @property
    def ordering(self) -> Ordering:
        return self._ordering

    @property
    def config(self) -> SearchConfig:
        return self._config

    def coordinates_of(self, dimension: Dimension) -> FrozenSet[Coordinate]:
        """Coordinates of ``dimension`` that some affinity group mentions."""
        self._check_registered(dimension)
        return self._coordinates_by_dimension[dimension]

    def groups_involving(self, coordinate: Coordinate) -> Tuple[AffinityGroup, ...]:
        """Groups whose coordinate sets contain ``coordinate``, in engine order."""
        return self._groups_by_coordinate.get(coordinate, ())

    def groups_touching(self, dimension: Dimension) -> Tuple[AffinityGroup, ...]:
        """Groups touching ``dimension``, in engine order."""
        self._check_registered(dimension)
        return self._groups_by_dimension[dimension]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_all(
        self,
        dimension: Dimension,
        fixed: Optional[FixedCoordinates] = None,
    ) -> FrozenSet[Coordinate]:
        return self.query(dimension, fixed).coordinates

    def query(
        self,
        dimension: Dimension,
        fixed: Optional[FixedCoordinates] = None,
    ) -> QueryResult:
        """Like get_all(), but also returns the statistics of the search.

        Raises:
            UnregisteredDimension: If ``dimension`` or a fixed dimension was
                never registered
            InvalidInput: If ``fixed`` is not a constraint bundle
        """
        self._check_registered(dimension)
        if fixed is None:
            fixed = FixedCoordinates.EMPTY
        elif not isinstance(fixed, ConstraintBundle):
            raise InvalidInput(f"'{fixed!r}' is not a FixedCoordinates bundle.")
        for fixed_dimension in fixed.dimensions:
            self._check_registered(fixed_dimension)
        return self._search.run(dimension, fixed)

    def _check_registered(self, dimension: Dimension) -> None:
        if dimension not in self._dimension_set:
            raise UnregisteredDimension(dimension)

    def __repr__(self) -> str:
        names = [d.__name__ for d in self._dimensions]
        return (
            f"RealTruthTable(dimensions={names}, groups={len(self._groups)}, "
            f"edges={self._overlap_graph.edge_count})"
        )


# =============================================================================
# Assembly
# =============================================================================


def validate_dimensions(dimensions: Iterable[Dimension]) -> Tuple[Dimension, ...]:
    """Check every dimension is an enum class registered only once.

    Raises:
        InvalidInput: If a dimension is not an Enum subclass
        DuplicateDimension: If a dimension is given twice
    """
    registered: List[Dimension] = []
    for dimension in dimensions:
        if not is_dimension(dimension):
            raise InvalidInput(f"'{dimension!r}' is not an enum class.")
        if dimension in registered:
            raise DuplicateDimension(dimension)
        registered.append(dimension)
    return tuple(registered)


def validate_group(group: AffinityGroup, dimensions: FrozenSet[Dimension]) -> None:
    """Check a single group against the registered dimensions.

    Raises:
        InvalidConfiguration: If ``group`` is not an AffinityGroup or touches
            an unregistered dimension
    """
    if not isinstance(group, AffinityGroup):
        raise InvalidConfiguration(f"'{group!r}' is not an AffinityGroup.")
    unknown = group.dimensions - dimensions
    if unknown:
        names = sorted(d.__name__ for d in unknown)
        raise InvalidConfiguration(f"{group} touches unregistered dimension(s) {names}.")


def build_truth_table(
    dimensions: Iterable[Dimension],
    groups: Iterable[AffinityGroup],
    ordering: Ordering = CANONICAL_ORDERING,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> RealTruthTable:
    """Validate the input and compute every lookup the engine needs.

    Construction is atomic: either a complete engine is returned or an
    exception is raised.

    Args:
        dimensions: Every dimension queries may refer to
        groups: The affinity groups over those dimensions
        ordering: Order used for group iteration and NextHop order
        config: Search configuration for every query

    Returns:
        The immutable RealTruthTable

    Raises:
        InvalidInput: If a dimension is not an enum class
        DuplicateDimension: If a dimension is registered twice
        InvalidConfiguration: If a group is malformed or touches an
            unregistered dimension
        DuplicateConstraint: If the same group is given twice
        UnreachedDimension: If a registered dimension is touched by no group
    """
    registered = validate_dimensions(dimensions)
    dimension_set = frozenset(registered)

    unique: List[AffinityGroup] = []
    seen = set()
    for group in groups:
        validate_group(group, dimension_set)
        if group in seen:
            raise DuplicateConstraint(group)
        seen.add(group)
        unique.append(group)

    touched = frozenset(d for group in unique for d in group.dimensions)
    unreached = dimension_set - touched
    if unreached:
        raise UnreachedDimension(unreached)

    ordered = tuple(ordering.sort_bundles(unique))

    coordinates_by_dimension: Dict[Dimension, set] = {d: set() for d in registered}
    groups_by_coordinate: Dict[Coordinate, List[AffinityGroup]] = {}
    groups_by_dimension: Dict[Dimension, List[AffinityGroup]] = {d: [] for d in registered}
    for group in ordered:
        for dimension, member in group.items():
            coordinates_by_dimension[dimension].update(member)
            groups_by_dimension[dimension].append(group)
            for coordinate in member:
                groups_by_coordinate.setdefault(coordinate, []).append(group)

    graph = build_overlap_graph(ordered, ordering)

    table = RealTruthTable(
        dimensions=registered,
        groups=ordered,
        coordinates_by_dimension={d: frozenset(c) for d, c in coordinates_by_dimension.items()},
        groups_by_coordinate={c: tuple(g) for c, g in groups_by_coordinate.items()},
        groups_by_dimension={d: tuple(g) for d, g in groups_by_dimension.items()},
        overlap_graph=graph,
        ordering=ordering,
        config=config,
    )
    logger.debug(
        f"Built truth table: {len(registered)} dimensions, {len(ordered)} groups, "
        f"{graph.edge_count} edges"
    )
    return table
