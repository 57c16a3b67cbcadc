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
"""Fluent assembly of truth tables.

Example:
    >>> table = (
    ...     TruthTableBuilder()
    ...     .for_dimensions(Bread, Entree, Wine)
    ...     .add_affinity_groups(
    ...         SimpleAffinityGroupBuilder()
    ...         .touching(Bread.WHITE)
    ...         .touching(Entree.CHICKEN, Entree.STEAK)
    ...         .create(),
    ...         SimpleAffinityGroupBuilder()
    ...         .touching(Entree.CHICKEN)
    ...         .touching(Wine.CHIANTI)
    ...         .create(),
    ...     )
    ...     .build()
    ... )
"""

from __future__ import annotations

from typing import Iterable, List, Set, Union

from ..config import DEFAULT_SEARCH_CONFIG, SearchConfig
from ..core.bundle import AffinityGroup
from ..core.coordinates import Dimension
from ..core.ordering import CANONICAL_ORDERING, Ordering
from ..errors import DuplicateConstraint, InvalidConfiguration
from .truth_table import RealTruthTable, build_truth_table, validate_dimensions, validate_group


class TruthTableBuilder:
    """Registers dimensions and affinity groups, then builds engines.

    Groups are validated as they are added. A rejected call leaves the
    builder unchanged. build() may be called any number of times, also after
    adding more groups; every call returns a new, independent engine.

    Args:
        ordering: Order for group iteration and NextHops in built engines
        config: Search configuration for built engines
    """

    def __init__(
        self,
        ordering: Ordering = CANONICAL_ORDERING,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    ):
        self._ordering = ordering
        self._config = config
        self._dimensions: List[Dimension] = []
        self._groups: List[AffinityGroup] = []
        self._group_set: Set[AffinityGroup] = set()

    def for_dimensions(self, *dimensions: Dimension) -> TruthTableBuilder:
        """Register the dimensions queries and groups may refer to.

        Raises:
            InvalidInput: If a dimension is not an enum class
            DuplicateDimension: If a dimension is registered twice
        """
        self._dimensions = list(validate_dimensions([*self._dimensions, *dimensions]))
        return self

    def add_affinity_groups(
        self, *groups: Union[AffinityGroup, Iterable[AffinityGroup]]
    ) -> TruthTableBuilder:
        """Add affinity groups, or collections of them as returned by group builders.

        Raises:
            InvalidConfiguration: If a group touches an unregistered dimension
            DuplicateConstraint: If a group was added before
        """
        flattened: List[AffinityGroup] = []
        for item in groups:
            if isinstance(item, AffinityGroup):
                flattened.append(item)
            elif isinstance(item, (str, bytes)) or not isinstance(item, Iterable):
                raise InvalidConfiguration(f"'{item!r}' is not an AffinityGroup.")
            else:
                flattened.extend(item)

        registered = frozenset(self._dimensions)
        pending: Set[AffinityGroup] = set()
        for group in flattened:
            validate_group(group, registered)
            if group in self._group_set or group in pending:
                raise DuplicateConstraint(group)
            pending.add(group)

        self._groups.extend(flattened)
        self._group_set |= pending
        return self

    def build(self) -> RealTruthTable:
        """Build an engine from everything registered so far.

        Raises:
            UnreachedDimension: If a registered dimension is touched by no group
        """
        return build_truth_table(
            self._dimensions,
            self._groups,
            ordering=self._ordering,
            config=self._config,
        )
