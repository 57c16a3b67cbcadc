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
"""Dimensions, coordinates and single-dimension coordinate sets.

A dimension (or axis) is an ``enum.Enum`` subclass: a closed, finite domain
whose members are its coordinates. The dimension of a coordinate is simply
its enum class, so two dimensions can never share a value.

Example:
    >>> class Bread(Enum):
    ...     WHITE = auto()
    ...     WHEAT = auto()
    >>> breads = CoordinateSet.of(Bread.WHEAT, Bread.WHITE)
    >>> breads.dimension is Bread
    True
    >>> list(breads)  # declared order
    [<Bread.WHITE: 1>, <Bread.WHEAT: 2>]

Coordinate sets form a meet-semilattice under intersection. The meet of two
disjoint sets is absent (``None``): a narrowing that empties a dimension is
never stored.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Tuple, Type, Union

from ..errors import InvalidInput

Dimension = Type[Enum]
Coordinate = Enum


def is_dimension(candidate: object) -> bool:
    """True if ``candidate`` can be used as a dimension (an Enum subclass)."""
    return isinstance(candidate, type) and issubclass(candidate, Enum)


def dimension_of(coordinate: Coordinate) -> Dimension:
    """Return the dimension a coordinate belongs to."""
    return type(coordinate)


def dimension_name(dimension: Dimension) -> str:
    """Stable identity of a dimension, used for deterministic ordering."""
    return f"{dimension.__module__}.{dimension.__qualname__}"


@lru_cache(maxsize=None)
def _declared_indices(dimension: Dimension) -> Dict[Enum, int]:
    return {member: index for index, member in enumerate(dimension)}


def declared_index(coordinate: Coordinate) -> int:
    """Position of ``coordinate`` in its enum's declaration order."""
    return _declared_indices(type(coordinate))[coordinate]


def domain_of(dimension: Dimension) -> FrozenSet[Coordinate]:
    """Every coordinate of a dimension."""
    return frozenset(dimension)


class CoordinateSet:
    """A non-empty set of coordinates, all in the same dimension.

    Construction is strict: an empty collection, a coordinate given more than
    once, or coordinates from different dimensions raise ``InvalidInput``.

    Instances are immutable. Equality and hashing are structural; the
    ``<`` operator follows the canonical ordering (dimension name, then
    larger sets first, then declared indices).
    """

    __slots__ = ("_dimension", "_coordinates", "_ordered")

    def __init__(self, coordinates: Iterable[Coordinate]):
        given = list(coordinates)
        if not given:
            raise InvalidInput("A CoordinateSet must have at least one coordinate.")

        for coordinate in given:
            if not isinstance(coordinate, Enum):
                raise InvalidInput(f"'{coordinate!r}' is not an enum coordinate.")

        dimension = type(given[0])
        mixed = [c for c in given if type(c) is not dimension]
        if mixed:
            raise InvalidInput(
                f"Coordinates {given} span more than one dimension "
                f"({dimension.__name__} and {type(mixed[0]).__name__})."
            )

        frozen = frozenset(given)
        if len(frozen) != len(given):
            raise InvalidInput(f"A coordinate in {given} was present more than once.")

        self._init(dimension, frozen)

    def _init(self, dimension: Dimension, coordinates: FrozenSet[Coordinate]) -> None:
        self._dimension = dimension
        self._coordinates = coordinates
        self._ordered: Tuple[Coordinate, ...] = tuple(sorted(coordinates, key=declared_index))

    @classmethod
    def of(cls, *coordinates: Coordinate) -> CoordinateSet:
        """Varargs form of the constructor."""
        return cls(coordinates)

    @classmethod
    def _trusted(cls, dimension: Dimension, coordinates: FrozenSet[Coordinate]) -> CoordinateSet:
        # Already validated: used for intersections of existing sets
        result = cls.__new__(cls)
        result._init(dimension, coordinates)
        return result

    @property
    def dimension(self) -> Dimension:
        """The dimension every coordinate belongs to."""
        return self._dimension

    @property
    def coordinates(self) -> FrozenSet[Coordinate]:
        return self._coordinates

    @property
    def sort_key(self) -> Tuple[str, int, Tuple[int, ...]]:
        """Canonical sort key: dimension name, size descending, declared indices."""
        return (
            dimension_name(self._dimension),
            -len(self._coordinates),
            tuple(declared_index(c) for c in self._ordered),
        )

    def touches(self, other: Union[CoordinateSet, Iterable[Coordinate]]) -> bool:
        """True if this set shares at least one coordinate with ``other``."""
        if isinstance(other, CoordinateSet):
            return not self._coordinates.isdisjoint(other._coordinates)
        return not self._coordinates.isdisjoint(other)

    def issubset(self, other: Union[CoordinateSet, Iterable[Coordinate]]) -> bool:
        if isinstance(other, CoordinateSet):
            return self._coordinates <= other._coordinates
        return self._coordinates.issubset(other)

    def meet(self, other: CoordinateSet) -> Optional[CoordinateSet]:
        """Intersect with another set of the same dimension.

        Args:
            other: A coordinate set in the same dimension

        Returns:
            The intersection, or None if the two sets are disjoint

        Raises:
            InvalidInput: If the sets belong to different dimensions
        """
        if other._dimension is not self._dimension:
            raise InvalidInput(
                f"Cannot intersect {self._dimension.__name__} with "
                f"{other._dimension.__name__} coordinates."
            )
        if self._coordinates <= other._coordinates:
            return self
        if other._coordinates <= self._coordinates:
            return other
        shared = self._coordinates & other._coordinates
        if not shared:
            return None
        return CoordinateSet._trusted(self._dimension, shared)

    def __and__(self, other: CoordinateSet) -> Optional[CoordinateSet]:
        """Operator alias for meet: s1 & s2 == s1.meet(s2)"""
        return self.meet(other)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._coordinates

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._coordinates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoordinateSet):
            return NotImplemented
        return self._dimension is other._dimension and self._coordinates == other._coordinates

    def __hash__(self) -> int:
        return hash((self._dimension, self._coordinates))

    def __lt__(self, other: CoordinateSet) -> bool:
        if not isinstance(other, CoordinateSet):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __repr__(self) -> str:
        names = ", ".join(c.name for c in self._ordered)
        return f"{self._dimension.__name__}[{names}]"
