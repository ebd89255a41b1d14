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
"""Flat name index of documented items.

The index is a plain list of (name, doc) records that can be searched by
name substring and persisted as pretty-printed JSON:

    {"items": [{"name": "load", "doc": "Load a config file."}, ...]}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from .rustdoc.document import RustdocDocument

logger = logging.getLogger(__name__)


class IndexFileError(Exception):
    """An index file could not be written, read or understood."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Index file '{path}': {message}")


@dataclass(frozen=True)
class RoogleItem:
    """One index record.

    Attributes:
        name: Item name
        doc: Documentation text ("" when the item has none)
    """

    name: str
    doc: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"name": self.name, "doc": self.doc}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RoogleItem":
        """Create from dictionary.

        Raises:
            ValueError: If ``name`` or ``doc`` is not a string
        """
        name = d["name"]
        doc = d.get("doc", "")
        if not isinstance(name, str):
            raise ValueError(f"item name must be a string, got {type(name).__name__}")
        if not isinstance(doc, str):
            raise ValueError(f"item doc must be a string, got {type(doc).__name__}")
        return cls(name=name, doc=doc)


@dataclass
class RoogleIndex:
    """Append-only list of RoogleItem records."""

    items: List[RoogleItem] = field(default_factory=list)

    def add_item(self, name: str, doc: str) -> None:
        self.items.append(RoogleItem(name=name, doc=doc))

    def search_by_name(self, keyword: str) -> List[RoogleItem]:
        """Return the items whose name contains ``keyword``, in index order."""
        return [item for item in self.items if keyword in item.name]

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RoogleIndex":
        return cls(items=[RoogleItem.from_dict(item) for item in d.get("items", [])])

    @classmethod
    def from_document(cls, doc: RustdocDocument) -> "RoogleIndex":
        """Index every function item of a rustdoc document."""
        index = cls()
        for item in doc.function_items():
            index.add_item(item.display_name, item.docs or "")
        return index

    def save_to_file(self, path: Union[str, Path]) -> None:
        """Write the index as pretty-printed JSON.

        Raises:
            IndexFileError: If the file cannot be written
        """
        path = str(path)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise IndexFileError(path, str(e)) from e
        logger.info(f"Saved index with {len(self.items)} items to {path}")

    @classmethod
    def load_from_file(cls, path: Union[str, Path]) -> "RoogleIndex":
        """Read an index written by save_to_file().

        Raises:
            IndexFileError: If the file is missing, unreadable or malformed
        """
        path = str(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise IndexFileError(path, str(e)) from e

        try:
            return cls.from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise IndexFileError(path, f"unexpected layout: {e}") from e
