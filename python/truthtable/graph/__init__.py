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
"""Overlap graph: precomputed NextHop edges between affinity groups."""

from .overlap import (
    NextHop,
    OverlapGraph,
    are_compatible,
    are_orthogonal,
    are_overlapping,
    build_overlap_graph,
    next_hop_for,
)

__all__ = [
    "NextHop",
    "OverlapGraph",
    "build_overlap_graph",
    "next_hop_for",
    "are_compatible",
    "are_orthogonal",
    "are_overlapping",
]
