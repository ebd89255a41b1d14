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
"""Top-level rustdoc JSON document and its items.

A rustdoc document maps item ids to item records under ``index``. Only
function items are decoded in depth; every other item is kept with its kind
so callers can tell what was skipped.

Function signatures are decoded eagerly when the document is built, so a
single malformed signature fails the whole document before any output is
produced.

Example:
    >>> doc = RustdocDocument.from_dict(json.load(f))
    >>> for line in doc.render_signatures():
    ...     print(line)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..types.decoding import TypeDecodeError, decode_function_sig
from ..types.model import FunctionSig
from ..types.rendering import function_sig_to_string

logger = logging.getLogger(__name__)

# Display name of items that carry no name
UNKNOWN_NAME = "unknown"

FUNCTION_KIND = "function"

# Kind of items whose "inner" record does not identify one
UNKNOWN_KIND = "unknown"


@dataclass(frozen=True, slots=True)
class Item:
    """One entry of the rustdoc index.

    Attributes:
        id: Item id (the key under ``index``)
        name: Display name, if the item has one
        kind: Item kind ("function", "struct", "module", ...)
        docs: Documentation text, if any
        function: Decoded signature for function items, else None
    """

    id: str
    name: Optional[str]
    kind: str
    docs: Optional[str] = None
    function: Optional[FunctionSig] = None

    @property
    def is_function(self) -> bool:
        return self.function is not None

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else UNKNOWN_NAME

    @classmethod
    def from_dict(cls, item_id: str, d: Any, path: str = "$") -> "Item":
        """Create from a rustdoc item record.

        Raises:
            TypeDecodeError: If the record or a function signature is malformed
        """
        if not isinstance(d, dict):
            raise TypeDecodeError(path, "item record is not an object")

        inner = d.get("inner", {})
        if not isinstance(inner, dict):
            raise TypeDecodeError(f"{path}.inner", "expected an object")

        name = d.get("name")
        if name is not None and not isinstance(name, str):
            raise TypeDecodeError(f"{path}.name", "expected a string")
        docs = d.get("docs")
        if docs is not None and not isinstance(docs, str):
            raise TypeDecodeError(f"{path}.docs", "expected a string")

        kind = _item_kind(d, inner)
        function = None
        if kind == FUNCTION_KIND:
            function = _decode_function(inner, f"{path}.inner")

        return cls(id=item_id, name=name, kind=kind, docs=docs, function=function)


def _item_kind(d: Dict[str, Any], inner: Dict[str, Any]) -> str:
    # Older formats carry an explicit "kind"; newer ones key "inner" by kind
    kind = d.get("kind")
    if isinstance(kind, str):
        return kind
    if inner.get(FUNCTION_KIND) is not None:
        return FUNCTION_KIND
    present = [key for key, value in inner.items() if value is not None]
    if len(present) == 1:
        return present[0]
    return UNKNOWN_KIND


def _decode_function(inner: Dict[str, Any], path: str) -> FunctionSig:
    if inner.get(FUNCTION_KIND) is not None:
        payload, payload_path = inner[FUNCTION_KIND], f"{path}.{FUNCTION_KIND}"
    else:
        payload, payload_path = inner, path
    if not isinstance(payload, dict):
        raise TypeDecodeError(payload_path, "expected an object")

    for key in ("sig", "decl"):
        if key in payload:
            return decode_function_sig(payload[key], f"{payload_path}.{key}")

    raise TypeDecodeError(payload_path, "function without a 'sig'")


@dataclass(frozen=True, slots=True)
class RustdocDocument:
    """A decoded rustdoc JSON document.

    Attributes:
        items: Items in document order
        format_version: rustdoc JSON format version, if given
        crate_version: Crate version, if given
    """

    items: Tuple[Item, ...] = ()
    format_version: Optional[int] = None
    crate_version: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Any) -> "RustdocDocument":
        """Create from the parsed JSON document.

        Raises:
            TypeDecodeError: If the document or any function item is malformed
        """
        if not isinstance(d, dict):
            raise TypeDecodeError("$", "document is not an object")
        index = d.get("index")
        if not isinstance(index, dict):
            raise TypeDecodeError("$.index", "expected an object of items")

        items = tuple(
            Item.from_dict(str(item_id), record, f"$.index[{item_id!r}]")
            for item_id, record in index.items()
        )

        format_version = d.get("format_version")
        if not isinstance(format_version, int):
            format_version = None
        crate_version = d.get("crate_version")
        if not isinstance(crate_version, str):
            crate_version = None

        doc = cls(items=items, format_version=format_version, crate_version=crate_version)
        logger.info(
            f"Decoded {len(items)} items ({len(doc.function_items())} functions)"
        )
        return doc

    def function_items(self) -> List[Item]:
        """Return the function items, in document order."""
        return [item for item in self.items if item.is_function]

    def render_signatures(self, name_filter: Optional[str] = None) -> List[str]:
        """Render every function item as a signature line.

        Args:
            name_filter: If given, keep only items whose display name
                contains this substring

        Returns:
            One rendered signature per selected function item
        """
        lines = []
        for item in self.function_items():
            if name_filter is not None and name_filter not in item.display_name:
                continue
            lines.append(function_sig_to_string(item.display_name, item.function))
        return lines


def item_to_signature_string(item: Item) -> Optional[str]:
    """Render a function item's signature, or None for other items."""
    if item.function is None:
        return None
    return function_sig_to_string(item.display_name, item.function)
