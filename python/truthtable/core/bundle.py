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
"""Constraint bundles: per-dimension coordinate sets across several dimensions.

A bundle maps each dimension it touches to exactly one CoordinateSet. It is
usually incomplete (it does not touch every registered dimension) and usually
touches several coordinates per dimension.

Two kinds of bundles exist:

- AffinityGroup: a declared constraint spanning at least two dimensions.
  The group [[WHITE, WHEAT], [PASTA, SUSHI], [CHIANTI]] asserts that any pick
  of one coordinate per dimension is jointly valid, i.e. it stands for the
  four affinities (WHITE, PASTA, CHIANTI), (WHITE, SUSHI, CHIANTI),
  (WHEAT, PASTA, CHIANTI) and (WHEAT, SUSHI, CHIANTI).

- FixedCoordinates: a query-time restriction. It may be empty.
"""

from __future__ import annotations

from typing import ClassVar, Dict, FrozenSet, Iterable, Iterator, Optional, Tuple, Union

from ..errors import InvalidConfiguration
from .coordinates import Coordinate, CoordinateSet, Dimension, is_dimension


class ConstraintBundle:
    """A mapping from dimension to CoordinateSet, one entry per dimension.

    Raises:
        InvalidConfiguration: If a dimension is supplied more than once, or if
            fewer than ``MIN_DIMENSIONS`` dimensions are supplied.
    """

    __slots__ = ("_members", "_by_dimension", "_dimensions", "_coordinates", "_hash")

    MIN_DIMENSIONS: ClassVar[int] = 1

    def __init__(self, coordinate_sets: Iterable[CoordinateSet]):
        given = list(coordinate_sets)
        by_dimension: Dict[Dimension, CoordinateSet] = {}
        for coordinate_set in given:
            if not isinstance(coordinate_set, CoordinateSet):
                raise InvalidConfiguration(f"'{coordinate_set!r}' is not a CoordinateSet.")
            by_dimension[coordinate_set.dimension] = coordinate_set

        if len(by_dimension) != len(given):
            raise InvalidConfiguration(f"The same dimension is used more than once in {given}.")

        if len(given) < self.MIN_DIMENSIONS:
            raise InvalidConfiguration(
                f"A {type(self).__name__} must touch at least {self.MIN_DIMENSIONS} "
                f"dimension(s), got {len(given)}."
            )

        self._members: Tuple[CoordinateSet, ...] = tuple(sorted(given))
        self._by_dimension = {m.dimension: m for m in self._members}
        self._dimensions: FrozenSet[Dimension] = frozenset(by_dimension)
        self._coordinates: FrozenSet[Coordinate] = frozenset(
            c for m in self._members for c in m.coordinates
        )
        self._hash = hash(frozenset(self._members))

    @property
    def dimensions(self) -> FrozenSet[Dimension]:
        """Every dimension this bundle touches."""
        return self._dimensions

    @property
    def coordinates(self) -> FrozenSet[Coordinate]:
        """Every individual coordinate this bundle touches."""
        return self._coordinates

    def coordinate_set(self, dimension: Dimension) -> Optional[CoordinateSet]:
        """The coordinate set for ``dimension``, or None if not touched."""
        return self._by_dimension.get(dimension)

    def touches(self, item: Union[Coordinate, Dimension]) -> bool:
        """True if this bundle touches a coordinate or a dimension."""
        if is_dimension(item):
            return item in self._dimensions
        return item in self._coordinates

    def items(self) -> Iterator[Tuple[Dimension, CoordinateSet]]:
        for member in self._members:
            yield member.dimension, member

    def __iter__(self) -> Iterator[CoordinateSet]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstraintBundle):
            return NotImplemented
        return self._hash == other._hash and self._members == other._members

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        members = ", ".join(repr(m) for m in self._members)
        return f"{type(self).__name__}({members})"


class AffinityGroup(ConstraintBundle):
    """A declared constraint touching at least two dimensions."""

    __slots__ = ()

    MIN_DIMENSIONS: ClassVar[int] = 2

    @classmethod
    def of(cls, *coordinate_sets: CoordinateSet) -> AffinityGroup:
        return cls(coordinate_sets)


class FixedCoordinates(ConstraintBundle):
    """Query-time restrictions: the coordinates a query must stay within.

    Example:
        >>> table.get_all(Bread, FixedCoordinates.of(Wine.PORT))
    """

    __slots__ = ()

    MIN_DIMENSIONS: ClassVar[int] = 0

    EMPTY: ClassVar[FixedCoordinates]

    @classmethod
    def of(cls, *coordinates: Coordinate) -> FixedCoordinates:
        """One singleton set per coordinate; each must be in a different dimension."""
        return cls(CoordinateSet.of(c) for c in coordinates)


FixedCoordinates.EMPTY = FixedCoordinates(())
