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
"""Deterministic total orders over coordinate sets and bundles.

The orders carry no meaning. They exist so that iteration over groups,
next hops and bundle members is reproducible. An engine uses exactly one
ordering for all of these; mixing orders inside one engine is not supported.

Canonical order:
    Coordinate sets: dimension name, then size descending (larger sets sort
    first), then declared indices lexicographically.
    Bundles: dimension count descending, then member coordinate sets pairwise
    in the ordering's own member order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, List, Tuple

from .coordinates import CoordinateSet

if TYPE_CHECKING:
    from .bundle import ConstraintBundle


class Ordering(ABC):
    """A total order over coordinate sets and constraint bundles.

    Subclasses provide sort keys. Keys must be injective on distinct values:
    two coordinate sets (or bundles) get equal keys only if they are equal.
    """

    @abstractmethod
    def coordinate_set_key(self, coordinate_set: CoordinateSet) -> Any:
        """Sort key for a single coordinate set."""
        raise NotImplementedError

    def bundle_key(self, bundle: ConstraintBundle) -> Any:
        """Sort key for a bundle: more dimensions first, then members in order."""
        members = self.sort_coordinate_sets(bundle)
        return (-len(members), tuple(self.coordinate_set_key(m) for m in members))

    def sort_coordinate_sets(self, coordinate_sets: Iterable[CoordinateSet]) -> List[CoordinateSet]:
        return sorted(coordinate_sets, key=self.coordinate_set_key)

    def sort_bundles(self, bundles: Iterable[Any]) -> List[Any]:
        return sorted(bundles, key=self.bundle_key)

    def compare_coordinate_sets(self, x: CoordinateSet, y: CoordinateSet) -> int:
        """Three-way comparison of two coordinate sets."""
        return _cmp(self.coordinate_set_key(x), self.coordinate_set_key(y))

    def compare_bundles(self, x: ConstraintBundle, y: ConstraintBundle) -> int:
        """Three-way comparison of two bundles."""
        return _cmp(self.bundle_key(x), self.bundle_key(y))


class CanonicalOrdering(Ordering):
    """The default ordering, derived purely from the values themselves."""

    def coordinate_set_key(self, coordinate_set: CoordinateSet) -> Tuple[str, int, Tuple[int, ...]]:
        return coordinate_set.sort_key

    def __repr__(self) -> str:
        return "CanonicalOrdering()"


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


CANONICAL_ORDERING: Ordering = CanonicalOrdering()
