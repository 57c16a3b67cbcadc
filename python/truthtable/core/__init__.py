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
"""Coordinate model, constraint bundles, ordering and group builders."""

from .coordinates import (
    Coordinate,
    CoordinateSet,
    Dimension,
    declared_index,
    dimension_name,
    dimension_of,
    domain_of,
    is_dimension,
)
from .bundle import (
    AffinityGroup,
    ConstraintBundle,
    FixedCoordinates,
)
from .ordering import (
    CANONICAL_ORDERING,
    CanonicalOrdering,
    Ordering,
)
from .group_builders import (
    AffinityGroupsBuilder,
    MultimapAffinityGroupBuilder,
    SimpleAffinityGroupBuilder,
)

__all__ = [
    # Coordinates
    "Coordinate",
    "CoordinateSet",
    "Dimension",
    "declared_index",
    "dimension_name",
    "dimension_of",
    "domain_of",
    "is_dimension",
    # Bundles
    "ConstraintBundle",
    "AffinityGroup",
    "FixedCoordinates",
    # Ordering
    "Ordering",
    "CanonicalOrdering",
    "CANONICAL_ORDERING",
    # Builders
    "AffinityGroupsBuilder",
    "SimpleAffinityGroupBuilder",
    "MultimapAffinityGroupBuilder",
]
