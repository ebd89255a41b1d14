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
"""Roogle: readable function signatures from rustdoc JSON.

Roogle decodes the structural type descriptions of a rustdoc JSON document
and renders every function item as a one-line, Rust-like signature such as
``fn load(path: &str) -> Result<Config, Error>``.

Key Components:
    - types: Type expression model, structural decoder and renderer
    - rustdoc: Document and item decoding, file loading
    - index: Searchable (name, doc) index with JSON persistence
    - cli: The ``roogle`` command

Usage:
    >>> from roogle import load_document
    >>> for line in load_document("target/doc/mycrate.json").render_signatures():
    ...     print(line)
"""

from .rustdoc import (
    Item,
    RustdocDocument,
    RustdocLoadError,
    item_to_signature_string,
    load_document,
)
from .types import (
    FunctionSig,
    TypeDecodeError,
    TypeExpr,
    decode_function_sig,
    decode_type,
    function_sig_to_string,
    type_to_string,
)

__all__ = [
    "Item",
    "RustdocDocument",
    "RustdocLoadError",
    "item_to_signature_string",
    "load_document",
    "FunctionSig",
    "TypeDecodeError",
    "TypeExpr",
    "decode_function_sig",
    "decode_type",
    "function_sig_to_string",
    "type_to_string",
]
