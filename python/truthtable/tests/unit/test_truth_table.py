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
"""Tests for RealTruthTable queries and lookups."""

import logging

import pytest

from truthtable.config import EXHAUSTIVE_SEARCH_CONFIG, SearchConfig
from truthtable.core.bundle import AffinityGroup, FixedCoordinates
from truthtable.core.coordinates import CoordinateSet
from truthtable.core.group_builders import SimpleAffinityGroupBuilder
from truthtable.engine.builder import TruthTableBuilder
from truthtable.engine.truth_table import RealTruthTable, TruthTable, build_truth_table
from truthtable.errors import (
    InvalidConfiguration,
    InvalidInput,
    UnregisteredDimension,
)
from truthtable.search.path_search import QueryResult, SearchStats
from truthtable.testing.enums import Bread, Cutlery, Dessert, Entree, MealTime, Wine
from truthtable.testing.rigged import RiggedAffinityGroupBuilder


def g(*coordinate_lists):
    return AffinityGroup(CoordinateSet(c) for c in coordinate_lists)


# =============================================================================
# Basic queries
# =============================================================================


class TestBasicQueries:
    """Tests for get_all() on small tables."""

    def test_is_a_truth_table(self, bread_entree_table):
        """RealTruthTable implements the TruthTable interface."""
        assert isinstance(bread_entree_table, TruthTable)

    def test_get_all(self, bread_entree_table):
        """Every bread of some group is valid without restrictions."""
        breads = bread_entree_table.get_all(Bread)
        assert breads == frozenset({Bread.WHITE, Bread.WHEAT})
        assert Bread.OAT not in breads

    def test_get_all_equals_empty_restriction(self, bread_entree_table):
        """No restriction and the empty restriction are the same query."""
        assert bread_entree_table.get_all(Entree) == bread_entree_table.get_all(
            Entree, FixedCoordinates.EMPTY
        )

    def test_fixed_dimension(self, bread_entree_table):
        """Fixing STEAK leaves only the bread paired with steak."""
        breads = bread_entree_table.get_all(Bread, FixedCoordinates.of(Entree.STEAK))
        assert breads == frozenset({Bread.WHITE})

    def test_fixed_on_queried_dimension_narrows(self, bread_entree_table):
        """Restricting the queried dimension itself is allowed."""
        breads = bread_entree_table.get_all(Bread, FixedCoordinates.of(Bread.WHEAT))
        assert breads == frozenset({Bread.WHEAT})

    def test_fixed_unknown_coordinate_gives_empty(self, bread_entree_table):
        """If no group satisfies the restriction the answer is empty."""
        assert bread_entree_table.get_all(Bread, FixedCoordinates.of(Entree.UNICORN)) == frozenset()

    def test_multi_coordinate_restriction(self, bread_entree_table):
        """A restriction may allow several coordinates."""
        fixed = FixedCoordinates([CoordinateSet.of(Entree.STEAK, Entree.SUSHI)])
        assert bread_entree_table.get_all(Bread, fixed) == frozenset({Bread.WHITE, Bread.WHEAT})

    def test_restriction_on_same_dimension_twice_rejected(self):
        """Two fixed coordinates of one dimension cannot be combined."""
        with pytest.raises(InvalidConfiguration):
            FixedCoordinates.of(Entree.STEAK, Entree.CHICKEN)


# =============================================================================
# Query validation
# =============================================================================


class TestQueryValidation:
    """Tests for query-time errors."""

    def test_unregistered_query_dimension(self, bread_entree_table):
        """Querying an unregistered dimension raises."""
        with pytest.raises(UnregisteredDimension) as excinfo:
            bread_entree_table.get_all(Wine)
        assert excinfo.value.dimension is Wine
        assert isinstance(excinfo.value, ValueError)

    def test_unregistered_fixed_dimension(self, bread_entree_table):
        """Fixing a coordinate of an unregistered dimension raises."""
        with pytest.raises(UnregisteredDimension):
            bread_entree_table.get_all(Bread, FixedCoordinates.of(Wine.PORT))

    def test_fixed_must_be_a_bundle(self, bread_entree_table):
        """Raw coordinates are not accepted as restrictions."""
        with pytest.raises(InvalidInput):
            bread_entree_table.get_all(Bread, [Entree.STEAK])


# =============================================================================
# Paths spanning several groups
# =============================================================================


class TestMultiGroupPaths:
    """Tests where answers come from chains of groups."""

    def test_transitive_validity(self):
        """PORT reaches PITA through STEAK."""
        table = build_truth_table(
            [Wine, Bread, Entree],
            [
                g([Wine.PORT], [Entree.CHICKEN, Entree.STEAK]),
                g([Bread.PITA], [Entree.STEAK]),
            ],
        )
        breads = table.get_all(Bread, FixedCoordinates.of(Wine.PORT))
        assert breads == frozenset({Bread.PITA})

    def test_triple_combinations(self):
        """Groups over all dimensions stay separate from each other."""
        table = build_truth_table(
            [Wine, Bread, Entree],
            [
                g([Wine.PORT], [Bread.PITA], [Entree.STEAK]),
                g([Wine.CHIANTI], [Entree.CHICKEN], [Bread.WHEAT]),
            ],
        )
        assert table.get_all(Bread, FixedCoordinates.of(Wine.PORT)) == frozenset({Bread.PITA})
        assert table.get_all(Bread, FixedCoordinates.of(Wine.CHIANTI)) == frozenset({Bread.WHEAT})

    def test_mixing_combinations(self):
        """Sharing CHICKEN does not let PORT reach WHEAT."""
        table = build_truth_table(
            [Wine, Bread, Entree],
            [
                g([Wine.PORT], [Bread.PITA], [Entree.STEAK, Entree.CHICKEN]),
                g([Wine.CHIANTI], [Entree.CHICKEN], [Bread.WHEAT]),
            ],
        )
        assert table.get_all(Bread, FixedCoordinates.of(Wine.PORT)) == frozenset({Bread.PITA})
        assert table.get_all(Entree, FixedCoordinates.of(Wine.PORT)) == frozenset(
            {Entree.STEAK, Entree.CHICKEN}
        )
        assert table.get_all(Bread, FixedCoordinates.of(Wine.CHIANTI)) == frozenset({Bread.WHEAT})

    def test_star_configuration(self, star_table):
        """Every spoke hangs off the hub; PORT implies PITA."""
        breads = star_table.get_all(Bread, FixedCoordinates.of(Wine.PORT))
        assert breads == frozenset({Bread.PITA})

    def test_star_configuration_other_dimensions(self, star_table):
        """The spokes are reachable from each other through the hub."""
        assert star_table.get_all(Cutlery, FixedCoordinates.of(Dessert.CAKE)) == frozenset(
            {Cutlery.SILVER}
        )
        assert star_table.get_all(MealTime) == frozenset({MealTime.DINNER})

    def test_incomplete_paths_contribute_nothing(self):
        """A group that cannot join a complete path adds no coordinate."""
        table = build_truth_table(
            [Bread, Entree, Wine],
            [
                g([Bread.WHITE], [Entree.CHICKEN]),
                g([Entree.CHICKEN], [Wine.CHIANTI]),
                g([Bread.OAT], [Entree.PIZZA]),
            ],
        )
        assert table.get_all(Bread) == frozenset({Bread.WHITE})
        assert table.get_all(Bread, FixedCoordinates.of(Wine.CHIANTI)) == frozenset({Bread.WHITE})


# =============================================================================
# Exhaustiveness regression
# =============================================================================


def _exhaustive_groups(rigged):
    g1 = (
        rigged.touching(Bread.WHITE, Bread.WHEAT)
        .touching(Entree.CHICKEN, Entree.STEAK)
        .create_and_reset()
    )
    g2 = (
        rigged.touching(Bread.WHITE)
        .touching(Entree.CHICKEN)
        .touching(Wine.CHIANTI)
        .create_and_reset()
    )
    g3 = rigged.touching(Entree.STEAK).touching(Wine.MERLOT).create_and_reset()
    return g1, g2, g3


class TestExhaustiveSearch:
    """A first complete path must not end the search."""

    def test_exhaustive_with_g1_first(self):
        """WHEAT is only reachable through G1 then G3, after G1 then G2 succeeded."""
        rigged = RiggedAffinityGroupBuilder()
        g1, g2, g3 = _exhaustive_groups(rigged)
        table = (
            TruthTableBuilder(ordering=rigged.ordering)
            .for_dimensions(Bread, Entree, Wine)
            .add_affinity_groups(g1, g2, g3)
            .build()
        )
        assert table.affinity_groups[0] == g1
        breads = table.get_all(Bread)
        assert Bread.WHITE in breads
        assert Bread.WHEAT in breads

    def test_exhaustive_canonical(self):
        """The same groups under the canonical ordering give the same answer."""
        g1, g2, g3 = _exhaustive_groups(RiggedAffinityGroupBuilder())
        table = build_truth_table([Bread, Entree, Wine], [g1, g2, g3])
        assert table.get_all(Bread) == frozenset({Bread.WHITE, Bread.WHEAT})

    def test_exhaustive_without_optimizations(self):
        """Turning every optimization off does not change the answer."""
        rigged = RiggedAffinityGroupBuilder()
        g1, g2, g3 = _exhaustive_groups(rigged)
        table = build_truth_table(
            [Bread, Entree, Wine],
            [g1, g2, g3],
            ordering=rigged.ordering,
            config=EXHAUSTIVE_SEARCH_CONFIG,
        )
        assert table.get_all(Bread) == frozenset({Bread.WHITE, Bread.WHEAT})
        assert table.get_all(Wine, FixedCoordinates.of(Bread.WHEAT)) == frozenset({Wine.MERLOT})


# =============================================================================
# Lookups
# =============================================================================


class TestLookups:
    """Tests for the derived lookups owned by the engine."""

    def test_groups_involving(self):
        """groups_involving() finds groups by coordinate."""
        table = (
            TruthTableBuilder()
            .for_dimensions(Bread, Entree)
            .add_affinity_groups(
                SimpleAffinityGroupBuilder()
                .touching(Bread.WHITE)
                .touching(Entree.CHICKEN, Entree.STEAK)
                .create()
            )
            .build()
        )
        assert len(table.groups_involving(Bread.WHITE)) == 1
        assert table.groups_involving(Bread.OAT) == ()

    def test_coordinates_of(self, bread_entree_table):
        """coordinates_of() lists coordinates mentioned by any group."""
        assert bread_entree_table.coordinates_of(Entree) == frozenset(
            {Entree.CHICKEN, Entree.STEAK, Entree.SUSHI}
        )
        with pytest.raises(UnregisteredDimension):
            bread_entree_table.coordinates_of(Wine)

    def test_groups_touching(self, star_table):
        """groups_touching() lists groups by dimension in engine order."""
        touching = star_table.groups_touching(Bread)
        assert len(touching) == 2
        assert list(touching) == [grp for grp in star_table.affinity_groups if grp.touches(Bread)]

    def test_next_hops_both_ways(self):
        """Two groups that each add a dimension are NextHops of each other."""
        a = g([Wine.PORT], [Entree.CHICKEN, Entree.STEAK])
        b = g([Bread.PITA], [Entree.STEAK])
        table = build_truth_table([Wine, Bread, Entree], [a, b])
        assert table.overlap_graph.has_edge(a, b)
        assert table.overlap_graph.has_edge(b, a)

    def test_dimensions_in_registration_order(self, star_table):
        """dimensions keeps registration order."""
        assert star_table.dimensions == (Wine, Bread, Entree, Dessert, MealTime, Cutlery)

    def test_repr(self, bread_entree_table):
        """repr summarizes the engine."""
        assert repr(bread_entree_table).startswith("RealTruthTable(")


# =============================================================================
# Statistics and logging
# =============================================================================


class TestQueryStats:
    """Tests for query() results and logging."""

    def test_query_result(self, bread_entree_table):
        """query() returns the answer along with statistics."""
        result = bread_entree_table.query(Bread)
        assert isinstance(result, QueryResult)
        assert isinstance(result.stats, SearchStats)
        assert result.dimension is Bread
        assert result.coordinates == bread_entree_table.get_all(Bread)
        assert Bread.WHITE in result
        assert len(result) == 2
        assert result.stats.starts_considered == 2
        assert result.stats.complete_paths >= 1
        assert result.stats.latency_ms >= 0.0

    def test_rejected_starts_counted(self, bread_entree_table):
        """Starts inconsistent with the restriction are counted."""
        stats = bread_entree_table.query(Bread, FixedCoordinates.of(Entree.STEAK)).stats
        assert stats.starts_rejected == 1

    def test_pruned_starts_counted(self):
        """A start that cannot add a coordinate is pruned."""
        table = build_truth_table(
            [Bread, Entree],
            [
                g([Bread.WHITE, Bread.WHEAT], [Entree.CHICKEN]),
                g([Bread.WHITE], [Entree.STEAK]),
            ],
        )
        stats = table.query(Bread).stats
        assert stats.starts_pruned == 1
        unpruned = build_truth_table(
            table.dimensions,
            table.affinity_groups,
            config=SearchConfig(prune_subsumed_starts=False),
        )
        assert unpruned.query(Bread).stats.starts_pruned == 0
        assert unpruned.get_all(Bread) == table.get_all(Bread)

    def test_early_exit(self):
        """The search stops once the whole domain is found."""
        table = build_truth_table(
            [MealTime, Cutlery],
            [
                g(list(MealTime), [Cutlery.PLASTIC]),
                g([MealTime.DINNER], [Cutlery.SILVER]),
            ],
        )
        stats = table.query(MealTime).stats
        assert stats.early_exit
        assert stats.starts_considered == 1
        no_exit = build_truth_table(
            table.dimensions, table.affinity_groups, config=SearchConfig(early_exit=False)
        )
        assert not no_exit.query(MealTime).stats.early_exit

    def test_duplicate_paths_counted(self):
        """Paths reaching the same groups in another order are skipped."""
        hub = g([Bread.PITA], [Wine.PORT])
        table = build_truth_table(
            [Bread, Wine, Entree, Dessert],
            [hub, g([Bread.PITA], [Entree.STEAK]), g([Bread.PITA], [Dessert.CAKE])],
            config=SearchConfig(prune_subsumed_starts=False),
        )
        stats = table.query(Bread).stats
        assert stats.duplicate_paths_skipped > 0
        assert table.get_all(Bread) == frozenset({Bread.PITA})

    def test_query_logs_summary(self, bread_entree_table, caplog):
        """Each query logs a debug summary."""
        with caplog.at_level(logging.DEBUG, logger="truthtable"):
            bread_entree_table.get_all(Bread)
        assert any("Query Bread" in record.getMessage() for record in caplog.records)

    def test_stats_to_dict(self, bread_entree_table):
        """to_dict() exposes every counter."""
        stats = bread_entree_table.query(Bread).stats.to_dict()
        assert set(stats) == {
            "starts_considered",
            "starts_pruned",
            "starts_rejected",
            "paths_expanded",
            "complete_paths",
            "duplicate_paths_skipped",
            "early_exit",
            "latency_ms",
        }


# =============================================================================
# Immutability
# =============================================================================


class TestImmutability:
    """Queries never change the engine."""

    def test_repeated_queries_agree(self, star_table):
        """The same query returns the same answer every time."""
        fixed = FixedCoordinates.of(Wine.PORT)
        first = star_table.get_all(Bread, fixed)
        for _ in range(3):
            star_table.get_all(Entree)
            star_table.get_all(Cutlery, FixedCoordinates.of(Dessert.CAKE))
            assert star_table.get_all(Bread, fixed) == first

    def test_queries_do_not_mutate_lookups(self, star_table):
        """Groups and edges are unchanged by queries."""
        groups = star_table.affinity_groups
        edges = star_table.overlap_graph.edge_count
        star_table.get_all(Bread)
        assert star_table.affinity_groups == groups
        assert star_table.overlap_graph.edge_count == edges

    def test_engine_type(self, bread_entree_table):
        """Builders produce RealTruthTable instances."""
        assert type(bread_entree_table) is RealTruthTable
