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
"""Pytest configuration and shared fixtures for truthtable tests."""

import pytest

from truthtable.core.bundle import AffinityGroup
from truthtable.core.coordinates import CoordinateSet
from truthtable.core.group_builders import SimpleAffinityGroupBuilder
from truthtable.engine.builder import TruthTableBuilder
from truthtable.testing.enums import Bread, Cutlery, Dessert, Entree, MealTime, Wine


def group(*coordinate_lists) -> AffinityGroup:
    """Shorthand: one AffinityGroup from lists of same-dimension coordinates."""
    return AffinityGroup(CoordinateSet(c) for c in coordinate_lists)


@pytest.fixture
def bread_entree_table():
    """WHITE goes with CHICKEN/STEAK, WHEAT goes with CHICKEN/SUSHI."""
    return (
        TruthTableBuilder()
        .for_dimensions(Bread, Entree)
        .add_affinity_groups(
            SimpleAffinityGroupBuilder()
            .touching(Bread.WHITE)
            .touching(Entree.CHICKEN, Entree.STEAK)
            .create(),
            SimpleAffinityGroupBuilder()
            .touching(Bread.WHEAT)
            .touching(Entree.CHICKEN, Entree.SUSHI)
            .create(),
        )
        .build()
    )


@pytest.fixture
def star_table():
    """A PORT/PITA/DINNER hub with three spokes, over six dimensions."""
    return (
        TruthTableBuilder()
        .for_dimensions(Wine, Bread, Entree, Dessert, MealTime, Cutlery)
        .add_affinity_groups(
            group([Wine.PORT], [Bread.PITA], [MealTime.DINNER]),
            group([Wine.PORT], [Entree.CHICKEN]),
            group([Bread.PITA], [Dessert.CAKE]),
            group([MealTime.DINNER], [Cutlery.SILVER]),
        )
        .build()
    )
