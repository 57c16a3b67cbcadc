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
"""Path search over the overlap graph.

This package contains:
- PathTrack: immutable per-path search state
- PathWorklist: de-duplicating LIFO worklist of pending paths
- PathSearch: the exhaustive query search, with SearchStats and QueryResult
"""

from .path_search import PathSearch, QueryResult, SearchStats
from .path_track import PathTrack
from .worklist import PathWorklist

__all__ = [
    "PathTrack",
    "PathWorklist",
    "PathSearch",
    "SearchStats",
    "QueryResult",
]
