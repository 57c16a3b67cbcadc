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
"""Search configuration for truth table queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class SearchConfig:
    """Configuration for the path search behind every query.

    None of these switches changes a query's answer. They only decide how
    much of the search space is visited to compute it.

    Attributes:
        prune_subsumed_starts: Skip starting groups whose coordinates on the
            queried dimension were all found already.

        early_exit: Stop searching as soon as every coordinate of the queried
            dimension is part of the answer.

        deduplicate_paths: Never expand two paths that visited the same set of
            affinity groups. Such paths carry identical state.

    Example:
        >>> config = SearchConfig(early_exit=False)
        >>> builder = TruthTableBuilder(config=config)
    """

    prune_subsumed_starts: bool = True
    early_exit: bool = True
    deduplicate_paths: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "prune_subsumed_starts": self.prune_subsumed_starts,
            "early_exit": self.early_exit,
            "deduplicate_paths": self.deduplicate_paths,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SearchConfig":
        """Create from dictionary, ignoring unknown keys."""
        return cls(
            prune_subsumed_starts=bool(d.get("prune_subsumed_starts", True)),
            early_exit=bool(d.get("early_exit", True)),
            deduplicate_paths=bool(d.get("deduplicate_paths", True)),
        )


# Exhaustive reference configuration: every optimization switched off
EXHAUSTIVE_SEARCH_CONFIG = SearchConfig(
    prune_subsumed_starts=False,
    early_exit=False,
    deduplicate_paths=False,
)

DEFAULT_SEARCH_CONFIG = SearchConfig()
