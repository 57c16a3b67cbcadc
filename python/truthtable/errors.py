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
"""Exceptions raised by the truth table.

All failures are local validation errors. They are raised at the point of
violation (construction or query time) and are never retried.

Hierarchy:
    TruthTableError
    ├── InvalidInput            bad coordinate collection
    ├── InvalidConfiguration    malformed bundle or engine setup
    │   ├── DuplicateDimension  a builder touched a dimension twice
    │   └── DuplicateConstraint the same affinity group was added twice
    ├── UnreachedDimension      a registered dimension no group touches
    └── UnregisteredDimension   a query against an unknown dimension
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable


def _dimension_label(dimension: Any) -> str:
    return getattr(dimension, "__name__", repr(dimension))


class TruthTableError(Exception):
    """Base class for all truth table errors."""


class InvalidInput(TruthTableError, ValueError):
    """A coordinate collection is empty, repeats a coordinate, or mixes dimensions."""


class InvalidConfiguration(TruthTableError, ValueError):
    """A bundle or engine was configured inconsistently."""


class DuplicateDimension(InvalidConfiguration):
    """The same dimension was touched twice while assembling one bundle."""

    def __init__(self, dimension: Any):
        self.dimension = dimension
        super().__init__(f"Dimension '{_dimension_label(dimension)}' was touched twice.")


class DuplicateConstraint(InvalidConfiguration):
    """The same affinity group was added twice to an engine in progress."""

    def __init__(self, group: Any):
        self.group = group
        super().__init__(f"Trying to add the same affinity group '{group}' twice.")


class UnreachedDimension(TruthTableError, ValueError):
    """Some registered dimensions are never touched by any affinity group."""

    def __init__(self, dimensions: Iterable[Any]):
        self.dimensions: FrozenSet[Any] = frozenset(dimensions)
        names = sorted(_dimension_label(d) for d in self.dimensions)
        super().__init__(
            f"The dimensions {names} are never touched by the given affinity groups."
        )


class UnregisteredDimension(TruthTableError, ValueError):
    """A dimension was used that the engine does not know about."""

    def __init__(self, dimension: Any):
        self.dimension = dimension
        super().__init__(f"Dimension '{_dimension_label(dimension)}' was not registered.")
