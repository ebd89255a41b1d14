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
"""Runtime configuration for the roogle command line."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional

LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


@dataclass(frozen=True)
class RoogleConfig:
    """Settings for one roogle run.

    Attributes:
        document_path: Path to the rustdoc JSON document
        name_filter: Only print functions whose name contains this substring
        index_path: Where to write the name index, if anywhere
        log_level: Standard logging level name
    """

    document_path: str
    name_filter: Optional[str] = None
    index_path: Optional[str] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        level = self.log_level.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{self.log_level}'. "
                f"Expected one of: {', '.join(sorted(LOG_LEVELS))}"
            )
        object.__setattr__(self, "log_level", level)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RoogleConfig":
        """Create from parsed command line arguments."""
        return cls(
            document_path=args.path,
            name_filter=args.filter,
            index_path=args.index_out,
            log_level=args.log_level,
        )
