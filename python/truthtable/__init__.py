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
"""Truthtable: reachability queries over n-dimensional compatibility relations.

Instead of materializing an n-dimensional table of valid combinations, the
relation is declared as affinity groups: partial constraints such as "white
bread goes with chicken or steak". A query asks which coordinates of one
dimension are valid given some fixed coordinates, and is answered by an
exhaustive search over chains of mutually compatible groups that together
touch every dimension.

Key Components:
    - core: Coordinates, coordinate sets, bundles, ordering, group builders
    - graph: Overlap graph (NextHop edges) between affinity groups
    - search: PathTrack state, worklist and the exhaustive path search
    - engine: RealTruthTable and TruthTableBuilder
    - testing: Fixture dimensions and helpers for deterministic tests
"""

# Use lazy imports so that submodules can be imported on their own
# Full imports are done on first access via __getattr__


def __getattr__(name: str):
    """Lazy import of module attributes."""
    # Coordinate model
    if name in ("Coordinate", "CoordinateSet", "Dimension"):
        from .core.coordinates import Coordinate, CoordinateSet, Dimension

        return locals()[name]

    # Bundles
    if name in ("AffinityGroup", "ConstraintBundle", "FixedCoordinates"):
        from .core.bundle import AffinityGroup, ConstraintBundle, FixedCoordinates

        return locals()[name]

    # Ordering
    if name in ("CANONICAL_ORDERING", "CanonicalOrdering", "Ordering"):
        from .core.ordering import CANONICAL_ORDERING, CanonicalOrdering, Ordering

        return locals()[name]

    # Group builders
    if name in (
        "AffinityGroupsBuilder",
        "MultimapAffinityGroupBuilder",
        "SimpleAffinityGroupBuilder",
    ):
        from .core.group_builders import (
            AffinityGroupsBuilder,
            MultimapAffinityGroupBuilder,
            SimpleAffinityGroupBuilder,
        )

        return locals()[name]

    # Engine
    if name in ("RealTruthTable", "TruthTable", "build_truth_table"):
        from .engine.truth_table import RealTruthTable, TruthTable, build_truth_table

        return locals()[name]

    if name == "TruthTableBuilder":
        from .engine.builder import TruthTableBuilder

        return TruthTableBuilder

    # Search results
    if name in ("QueryResult", "SearchStats"):
        from .search.path_search import QueryResult, SearchStats

        return locals()[name]

    # Configuration
    if name in ("DEFAULT_SEARCH_CONFIG", "EXHAUSTIVE_SEARCH_CONFIG", "SearchConfig"):
        from .config import DEFAULT_SEARCH_CONFIG, EXHAUSTIVE_SEARCH_CONFIG, SearchConfig

        return locals()[name]

    # Errors
    if name in (
        "DuplicateConstraint",
        "DuplicateDimension",
        "InvalidConfiguration",
        "InvalidInput",
        "TruthTableError",
        "UnreachedDimension",
        "UnregisteredDimension",
    ):
        from .errors import (
            DuplicateConstraint,
            DuplicateDimension,
            InvalidConfiguration,
            InvalidInput,
            TruthTableError,
            UnreachedDimension,
            UnregisteredDimension,
        )

        return locals()[name]

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Coordinate model
    "Coordinate",
    "CoordinateSet",
    "Dimension",
    # Bundles
    "ConstraintBundle",
    "AffinityGroup",
    "FixedCoordinates",
    # Ordering
    "Ordering",
    "CanonicalOrdering",
    "CANONICAL_ORDERING",
    # Group builders
    "AffinityGroupsBuilder",
    "SimpleAffinityGroupBuilder",
    "MultimapAffinityGroupBuilder",
    # Engine
    "TruthTable",
    "RealTruthTable",
    "TruthTableBuilder",
    "build_truth_table",
    "QueryResult",
    "SearchStats",
    # Configuration
    "SearchConfig",
    "DEFAULT_SEARCH_CONFIG",
    "EXHAUSTIVE_SEARCH_CONFIG",
    # Errors
    "TruthTableError",
    "InvalidInput",
    "InvalidConfiguration",
    "DuplicateDimension",
    "DuplicateConstraint",
    "UnreachedDimension",
    "UnregisteredDimension",
]

__version__ = "0.1.0"
