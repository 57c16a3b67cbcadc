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
"""Worklist of pending paths for the query search.

The worklist is a stack, so paths are expanded depth-first. It supports:
- Deduplication: two paths that visited the same set of affinity groups
  carry the same state, so only the first one is ever queued
- Termination detection (empty worklist = search exhausted)
"""

from __future__ import annotations

from typing import FrozenSet, List, Optional, Set

from ..core.bundle import AffinityGroup
from .path_track import PathTrack


class PathWorklist:
    """LIFO worklist of PathTracks, de-duplicated by visited group set.

    The set of seen paths lives as long as the worklist, i.e. for the whole
    query, so a path queued from one starting group is never re-queued from
    another.

    Example:
        >>> worklist = PathWorklist()
        >>> worklist.add(track)
        True
        >>> worklist.add(same_groups_other_order)
        False
        >>> worklist.pop() is track
        True
    """

    def __init__(self, deduplicate: bool = True):
        """Initialize an empty worklist.

        Args:
            deduplicate: Refuse paths whose visited set was queued before
        """
        self._stack: List[PathTrack] = []
        self._seen: Set[FrozenSet[AffinityGroup]] = set()
        self._deduplicate = deduplicate
        self._duplicates_skipped = 0

    def add(self, track: PathTrack) -> bool:
        """Queue a path.

        Args:
            track: The path to expand later

        Returns:
            True if queued, False if an equivalent path was queued before
        """
        if self._deduplicate:
            if track.visited_groups in self._seen:
                self._duplicates_skipped += 1
                return False
            self._seen.add(track.visited_groups)
        self._stack.append(track)
        return True

    def pop(self) -> Optional[PathTrack]:
        """Remove and return the most recently queued path, or None."""
        if not self._stack:
            return None
        return self._stack.pop()

    def is_empty(self) -> bool:
        return not self._stack

    @property
    def seen_count(self) -> int:
        """Number of distinct visited sets queued so far."""
        return len(self._seen)

    @property
    def duplicates_skipped(self) -> int:
        return self._duplicates_skipped

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return not self.is_empty()
