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
"""Type expressions found in rustdoc JSON signatures.

This module defines the immutable type hierarchy used to represent one type
occurrence of a function signature:

- ReferenceType: &T, &mut T, &'a T
- NamedPathType: resolved paths, optionally parameterized (Vec<T>)
- GenericParamType: unresolved generic placeholders (T, Self)
- PrimitiveType: built-in scalars (u32, str, bool)
- TupleType: (A, B, C); the empty tuple is the unit type
- SliceType: [T]
- OpaqueType: any shape the model does not know yet, kept verbatim

Exactly one variant is active per instance. Children are owned by their
parent and the tree is acyclic, so no instance is ever shared or mutated
after decoding.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


# =============================================================================
# Type Expression Hierarchy
# =============================================================================


class TypeExpr(ABC):
    """Abstract base class for all type expressions.

    Subclasses are frozen dataclasses, so equality is structural and
    instances can be freely passed between threads.
    """

    #: Short variant name, used in diagnostics and by the decoder table.
    variant: str = "type"

    def children(self) -> Tuple["TypeExpr", ...]:
        """Return the directly nested type expressions, in display order."""
        return ()

    def walk(self):
        """Yield this type expression and every nested one, pre-order."""
        stack: List[TypeExpr] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def contains_opaque(self) -> bool:
        """True if any node of this tree is an OpaqueType."""
        return any(isinstance(node, OpaqueType) for node in self.walk())


@dataclass(frozen=True, slots=True)
class ReferenceType(TypeExpr):
    """A borrowed reference &T or &mut T.

    Attributes:
        referent: The borrowed type
        mutable: Whether this is a &mut reference
        lifetime: Lifetime annotation text as emitted by rustdoc (e.g. "'a")
    """

    referent: TypeExpr
    mutable: bool = False
    lifetime: Optional[str] = None

    variant = "reference"

    def children(self) -> Tuple[TypeExpr, ...]:
        return (self.referent,)


@dataclass(frozen=True, slots=True)
class NamedPathType(TypeExpr):
    """A resolved type path such as Vec<u8> or Config.

    ``generic_arguments`` is None when the path carries no argument envelope
    at all, and an empty tuple when it carries an empty angle-bracketed
    envelope. Both render without brackets.

    Attributes:
        name: The path name
        generic_arguments: Decoded generic arguments, if any
    """

    name: str
    generic_arguments: Optional[Tuple[TypeExpr, ...]] = None

    variant = "named_path"

    def children(self) -> Tuple[TypeExpr, ...]:
        return self.generic_arguments or ()


@dataclass(frozen=True, slots=True)
class GenericParamType(TypeExpr):
    """An unresolved generic parameter (T, Self)."""

    name: str

    variant = "generic"


@dataclass(frozen=True, slots=True)
class PrimitiveType(TypeExpr):
    """A built-in scalar type (u32, str, bool)."""

    name: str

    variant = "primitive"


@dataclass(frozen=True, slots=True)
class TupleType(TypeExpr):
    """A tuple type. No elements means the unit type ()."""

    elements: Tuple[TypeExpr, ...] = ()

    variant = "tuple"

    @property
    def is_unit(self) -> bool:
        return not self.elements

    def children(self) -> Tuple[TypeExpr, ...]:
        return self.elements


@dataclass(frozen=True, slots=True)
class SliceType(TypeExpr):
    """A slice type [T]."""

    element: TypeExpr

    variant = "slice"

    def children(self) -> Tuple[TypeExpr, ...]:
        return (self.element,)


@dataclass(frozen=True, slots=True)
class OpaqueType(TypeExpr):
    """A type shape the model does not recognize.

    The raw JSON value is kept as decoded so it can be shown in diagnostics.
    It takes no part in hashing since JSON objects are unhashable.

    Attributes:
        raw: The original JSON value
    """

    raw: Any = field(hash=False)

    variant = "opaque"


# Unit type ()
UNIT = TupleType(())


# =============================================================================
# Function Signatures
# =============================================================================


@dataclass(frozen=True, slots=True)
class FunctionSig:
    """A function signature as found in rustdoc JSON.

    ``output`` is None when the signature has no return type. An explicit
    unit output is kept as UNIT; both render the same way.

    Attributes:
        inputs: (parameter name, type) pairs in declaration order
        output: Return type, if present
        is_variadic: Whether the function is C-variadic (not rendered)

    Example:
        >>> sig = FunctionSig(
        ...     inputs=(("path", PrimitiveType("str")),),
        ...     output=UNIT,
        ... )
    """

    inputs: Tuple[Tuple[str, TypeExpr], ...] = ()
    output: Optional[TypeExpr] = None
    is_variadic: bool = False

    @property
    def param_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.inputs)

    @property
    def returns_unit(self) -> bool:
        """True if the signature has no return type or returns ()."""
        return self.output is None or self.output == UNIT
