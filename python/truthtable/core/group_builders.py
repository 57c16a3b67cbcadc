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
"""Convenience builders for affinity groups.

Builders accumulate one CoordinateSet per dimension through a fluent
interface and then produce validated AffinityGroups:

Example:
    >>> groups = (
    ...     SimpleAffinityGroupBuilder()
    ...     .touching(Bread.WHITE, Bread.OAT)
    ...     .touching(Wine.PORT)
    ...     .create()
    ... )

produces the single group [[WHITE, OAT], [PORT]].
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import FrozenSet, Iterable, List, Mapping, Optional, Set, TypeVar

from ..errors import DuplicateDimension, InvalidConfiguration, InvalidInput
from .bundle import AffinityGroup
from .coordinates import Coordinate, CoordinateSet, Dimension

B = TypeVar("B", bound="AffinityGroupsBuilder")


class AffinityGroupsBuilder(ABC):
    """Base class for fluent affinity group builders.

    A dimension may be touched only once per builder; touching it again
    raises DuplicateDimension.
    """

    def __init__(self):
        self._coordinate_sets: List[CoordinateSet] = []
        self._dimensions_touched: Set[Dimension] = set()

    def touching(self: B, *coordinates: Coordinate) -> B:
        """Add coordinates of a single dimension.

        Accepts either coordinates as varargs or a single iterable of them.

        Args:
            coordinates: One or more coordinates of the same dimension

        Returns:
            Self for chaining

        Raises:
            InvalidInput: If no coordinates are given, one repeats, or
                they span more than one dimension
            DuplicateDimension: If this dimension was already touched
        """
        if len(coordinates) == 1 and not isinstance(coordinates[0], Enum):
            try:
                coordinates = tuple(coordinates[0])
            except TypeError:
                raise InvalidInput(f"'{coordinates[0]!r}' is not an enum coordinate.") from None
        return self.touching_all([CoordinateSet(coordinates)])

    def touching_all(self: B, coordinate_sets: Iterable[CoordinateSet]) -> B:
        """Add coordinate sets in several dimensions with a single call.

        Equivalent to calling touching() once per set.

        Args:
            coordinate_sets: Coordinate sets, each in a different dimension

        Returns:
            Self for chaining
        """
        for coordinate_set in coordinate_sets:
            if not isinstance(coordinate_set, CoordinateSet):
                raise InvalidInput(f"'{coordinate_set!r}' is not a CoordinateSet.")
            if coordinate_set.dimension in self._dimensions_touched:
                raise DuplicateDimension(coordinate_set.dimension)
            self._dimensions_touched.add(coordinate_set.dimension)
            self._coordinate_sets.append(coordinate_set)
        return self

    def has_touched(self, dimension: Dimension) -> bool:
        """True if ``dimension`` has been touched already."""
        return dimension in self._dimensions_touched

    @abstractmethod
    def create(self) -> FrozenSet[AffinityGroup]:
        """Create the affinity groups described so far."""
        raise NotImplementedError


class SimpleAffinityGroupBuilder(AffinityGroupsBuilder):
    """The canonical way to build one AffinityGroup.

    create() returns a set for symmetry with the other builders; it always
    holds exactly one group.
    """

    def create(self) -> FrozenSet[AffinityGroup]:
        return frozenset({AffinityGroup(self._coordinate_sets)})


class MultimapAffinityGroupBuilder(AffinityGroupsBuilder):
    """Expands a one-to-many mapping into one AffinityGroup per key.

    Example:
        >>> wines_to_entrees = {
        ...     Wine.CHIANTI: [Entree.PASTA, Entree.STEAK],
        ...     Wine.PORT: [Entree.STEAK],
        ...     Wine.MERLOT: [Entree.STEAK],
        ... }
        >>> groups = (
        ...     MultimapAffinityGroupBuilder()
        ...     .for_mapping(wines_to_entrees)
        ...     .touching(Bread.WHEAT, Bread.WHITE)
        ...     .create()
        ... )

    creates three groups:
        [[CHIANTI], [PASTA, STEAK], [WHEAT, WHITE]]
        [[PORT], [STEAK], [WHEAT, WHITE]]
        [[MERLOT], [STEAK], [WHEAT, WHITE]]

    Without a mapping this behaves just like SimpleAffinityGroupBuilder.
    """

    def __init__(self):
        super().__init__()
        self._mapping: Optional[Mapping[Coordinate, Iterable[Coordinate]]] = None

    def for_mapping(
        self, mapping: Mapping[Coordinate, Iterable[Coordinate]]
    ) -> MultimapAffinityGroupBuilder:
        """Set the mapping to be expanded by create().

        Args:
            mapping: Key coordinate -> coordinates of one other dimension

        Returns:
            Self for chaining

        Raises:
            InvalidConfiguration: If a mapping was already set
        """
        if self._mapping is not None:
            raise InvalidConfiguration("A mapping was already set on this builder.")
        if mapping is None:
            raise InvalidInput("The mapping to expand must not be None.")
        self._mapping = mapping
        return self

    def create(self) -> FrozenSet[AffinityGroup]:
        """One group per key: the shared sets, the key, and the key's values."""
        if self._mapping is None:
            return frozenset({AffinityGroup(self._coordinate_sets)})

        groups = set()
        for key, values in self._mapping.items():
            coordinate_sets = list(self._coordinate_sets)
            coordinate_sets.append(CoordinateSet.of(key))
            coordinate_sets.append(CoordinateSet(values))
            groups.add(AffinityGroup(coordinate_sets))
        return frozenset(groups)
