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
"""Type expressions of rustdoc signatures.

Key Components:
- model: Immutable type expression hierarchy and FunctionSig
- decoding: Ordered structural decoder with opaque fallback
- rendering: Canonical Rust-like text for types and signatures

Usage:
    >>> from roogle.types import decode_type, type_to_string
    >>> type_to_string(decode_type({"primitive": "u32"}))
    'u32'
"""

from .model import (
    UNIT,
    FunctionSig,
    GenericParamType,
    NamedPathType,
    OpaqueType,
    PrimitiveType,
    ReferenceType,
    SliceType,
    TupleType,
    TypeExpr,
)
from .decoding import (
    TYPE_DECODERS,
    TypeDecodeError,
    VariantDecoder,
    decode_function_sig,
    decode_type,
    matching_variant,
)
from .rendering import (
    OPAQUE_MARKER,
    UNIT_STR,
    function_sig_to_string,
    type_to_string,
)

__all__ = [
    # Model
    "TypeExpr",
    "ReferenceType",
    "NamedPathType",
    "GenericParamType",
    "PrimitiveType",
    "TupleType",
    "SliceType",
    "OpaqueType",
    "FunctionSig",
    "UNIT",
    # Decoding
    "TYPE_DECODERS",
    "TypeDecodeError",
    "VariantDecoder",
    "decode_type",
    "decode_function_sig",
    "matching_variant",
    # Rendering
    "OPAQUE_MARKER",
    "UNIT_STR",
    "type_to_string",
    "function_sig_to_string",
]
