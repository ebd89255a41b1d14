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
"""Decoding of rustdoc JSON type values into type expressions.

rustdoc encodes a type as an object with a single discriminator key
(``{"primitive": "u32"}``, ``{"borrowed_ref": {...}}``) and no explicit tag
field. Variants are therefore told apart structurally, using the ordered
table TYPE_DECODERS:

    Reference -> NamedPath -> GenericParam -> Primitive -> Tuple -> Slice

A value is decoded as the first entry whose discriminator key is present and
whose payload, nested values included, decodes successfully. A value
matching no entry becomes an OpaqueType instead of an error, so documents
produced by newer rustdoc versions still decode.

Two failure modes are kept apart:

- unrecognized shape: OpaqueType, logged at debug level
- recognized discriminators whose payloads are all malformed:
  TypeDecodeError, reporting the first candidate's error

Decoding walks the tree with an explicit stack, so nesting depth is limited
only by the input, not by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .model import (
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

logger = logging.getLogger(__name__)


class TypeDecodeError(Exception):
    """A recognized JSON shape whose contents are malformed.

    Attributes:
        path: JSON path of the offending value (e.g. "$.inputs[0][1]")
        message: What was wrong with it
    """

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Malformed value at {path}: {message}")


@dataclass(frozen=True, slots=True)
class Child:
    """A nested value a variant needs decoded before it can be assembled.

    Attributes:
        value: The nested JSON value
        path: JSON path of ``value``
        opaque: Keep ``value`` verbatim as an OpaqueType instead of decoding it
    """

    value: Any
    path: str
    opaque: bool = False


@dataclass(frozen=True, slots=True)
class VariantPlan:
    """The shallow decoding of one variant's payload.

    Attributes:
        children: Nested values, in the order ``assemble`` expects them
        assemble: Builds the variant from the decoded children
    """

    children: Tuple[Child, ...]
    assemble: Callable[[List[TypeExpr]], TypeExpr]


@dataclass(frozen=True, slots=True)
class VariantDecoder:
    """One entry of the decoder table.

    Attributes:
        name: Variant name reported by matching_variant()
        key: Discriminator key that selects this variant
        plan: Checks the payload under ``key`` and lists its nested values
    """

    name: str
    key: str
    plan: Callable[[Any, str], VariantPlan]

    def matches(self, value: Any) -> bool:
        return isinstance(value, dict) and self.key in value


# =============================================================================
# Variant Plans
# =============================================================================


def _expect_object(payload: Any, path: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise TypeDecodeError(path, f"expected an object, got {type(payload).__name__}")
    return payload


def _expect_str(payload: Any, path: str) -> str:
    if not isinstance(payload, str):
        raise TypeDecodeError(path, f"expected a string, got {type(payload).__name__}")
    return payload


def _optional_bool(obj: Dict[str, Any], key: str, path: str) -> bool:
    value = obj.get(key, False)
    if not isinstance(value, bool):
        raise TypeDecodeError(f"{path}.{key}", "expected a boolean")
    return value


def _leaf(ty: TypeExpr) -> VariantPlan:
    return VariantPlan((), lambda _: ty)


def _plan_reference(payload: Any, path: str) -> VariantPlan:
    obj = _expect_object(payload, path)
    if "type" not in obj:
        raise TypeDecodeError(path, "reference without a 'type'")

    lifetime = obj.get("lifetime")
    if lifetime is not None:
        lifetime = _expect_str(lifetime, f"{path}.lifetime")
    mutable = _optional_bool(obj, "is_mutable", path)

    return VariantPlan(
        (Child(obj["type"], f"{path}.type"),),
        lambda decoded: ReferenceType(decoded[0], mutable=mutable, lifetime=lifetime),
    )


def _generic_arg_children(payload: Any, path: str) -> Optional[Tuple[Child, ...]]:
    """List the generic arguments of a resolved path.

    Only the angle-bracketed style is modeled. Any other envelope becomes a
    single opaque argument, and so does any argument that is not a type
    (lifetimes, consts, inferred arguments).
    """
    if payload is None:
        return None
    envelope = _expect_object(payload, path)

    if "angle_bracketed" not in envelope:
        logger.debug(f"Unrecognized generic argument envelope at {path}; keeping as opaque")
        return (Child(envelope, path, opaque=True),)

    bracketed = _expect_object(envelope["angle_bracketed"], f"{path}.angle_bracketed")
    args = bracketed.get("args", [])
    if args is None:
        args = []
    if not isinstance(args, list):
        raise TypeDecodeError(f"{path}.angle_bracketed.args", "expected a list")

    children: List[Child] = []
    for i, arg in enumerate(args):
        arg_path = f"{path}.angle_bracketed.args[{i}]"
        if isinstance(arg, dict) and "type" in arg:
            children.append(Child(arg["type"], f"{arg_path}.type"))
        else:
            logger.debug(f"Non-type generic argument at {arg_path}; keeping as opaque")
            children.append(Child(arg, arg_path, opaque=True))
    return tuple(children)


def _plan_named_path(payload: Any, path: str) -> VariantPlan:
    obj = _expect_object(payload, path)

    # Newer rustdoc emits "path" where older versions emit "name"
    name = obj.get("name")
    if name is None:
        name = obj.get("path")
    if not isinstance(name, str):
        raise TypeDecodeError(path, "resolved path without a string 'name'")

    children = _generic_arg_children(obj.get("args"), f"{path}.args")
    if children is None:
        return _leaf(NamedPathType(name))
    return VariantPlan(
        children,
        lambda decoded: NamedPathType(name, tuple(decoded)),
    )


def _plan_generic(payload: Any, path: str) -> VariantPlan:
    return _leaf(GenericParamType(_expect_str(payload, path)))


def _plan_primitive(payload: Any, path: str) -> VariantPlan:
    return _leaf(PrimitiveType(_expect_str(payload, path)))


def _plan_tuple(payload: Any, path: str) -> VariantPlan:
    if not isinstance(payload, list):
        raise TypeDecodeError(path, f"expected a list, got {type(payload).__name__}")
    return VariantPlan(
        tuple(Child(elem, f"{path}[{i}]") for i, elem in enumerate(payload)),
        lambda decoded: TupleType(tuple(decoded)),
    )


def _plan_slice(payload: Any, path: str) -> VariantPlan:
    return VariantPlan(
        (Child(payload, path),),
        lambda decoded: SliceType(decoded[0]),
    )


# Order matters: the first entry that decodes successfully wins.
TYPE_DECODERS: Tuple[VariantDecoder, ...] = (
    VariantDecoder("reference", "borrowed_ref", _plan_reference),
    VariantDecoder("named_path", "resolved_path", _plan_named_path),
    VariantDecoder("generic", "generic", _plan_generic),
    VariantDecoder("primitive", "primitive", _plan_primitive),
    VariantDecoder("tuple", "tuple", _plan_tuple),
    VariantDecoder("slice", "slice", _plan_slice),
)


# =============================================================================
# Decoding Stack
# =============================================================================


class _Frame:
    """Decoding state of one value on the explicit stack.

    The frame tries its candidate variants in table order. A candidate is
    rejected when its payload is malformed or when one of its children fails;
    the frame then moves on to the next candidate.
    """

    __slots__ = ("value", "path", "candidates", "plan", "decoded", "error")

    def __init__(self, value: Any, path: str):
        self.value = value
        self.path = path
        self.candidates: List[VariantDecoder] = [
            d for d in reversed(TYPE_DECODERS) if d.matches(value)
        ]
        self.plan: Optional[VariantPlan] = None
        self.decoded: List[TypeExpr] = []
        self.error: Optional[TypeDecodeError] = None

    def advance(self) -> Union["_Frame", TypeExpr, TypeDecodeError]:
        """Return a child frame to decode next, or this frame's outcome."""
        while True:
            if self.plan is None:
                if not self.candidates:
                    if self.error is not None:
                        return self.error
                    logger.debug(f"Unrecognized type shape at {self.path}; keeping as opaque")
                    return OpaqueType(self.value)

                decoder = self.candidates.pop()
                try:
                    self.plan = decoder.plan(self.value[decoder.key], f"{self.path}.{decoder.key}")
                except TypeDecodeError as e:
                    self.reject(e)
                    continue
                self.decoded = []

            if len(self.decoded) == len(self.plan.children):
                return self.plan.assemble(self.decoded)

            child = self.plan.children[len(self.decoded)]
            if child.opaque:
                self.decoded.append(OpaqueType(child.value))
                continue
            return _Frame(child.value, child.path)

    def accept(self, ty: TypeExpr) -> None:
        self.decoded.append(ty)

    def reject(self, error: TypeDecodeError) -> None:
        if self.error is None:
            self.error = error
        if self.candidates:
            logger.debug(f"Falling through to next variant at {self.path}: {error}")
        self.plan = None


# =============================================================================
# Public API
# =============================================================================


def matching_variant(value: Any) -> str:
    """Return the name of the first variant whose discriminator is present.

    Returns "opaque" when no table entry matches. decode_type() may still
    fall through to a later entry if this one's payload is malformed.
    """
    for decoder in TYPE_DECODERS:
        if decoder.matches(value):
            return decoder.name
    return OpaqueType.variant


def decode_type(value: Any, path: str = "$") -> TypeExpr:
    """Decode one rustdoc JSON type value.

    Args:
        value: The decoded JSON value
        path: JSON path of ``value``, used in error messages

    Returns:
        The first matching variant that decodes, or an OpaqueType for
        unknown shapes

    Raises:
        TypeDecodeError: If every recognized variant has a malformed payload
    """
    stack: List[_Frame] = [_Frame(value, path)]
    while True:
        step = stack[-1].advance()
        if isinstance(step, _Frame):
            stack.append(step)
            continue

        stack.pop()
        if isinstance(step, TypeDecodeError):
            if not stack:
                raise step
            stack[-1].reject(step)
        else:
            if not stack:
                return step
            stack[-1].accept(step)


def decode_function_sig(value: Any, path: str = "$") -> FunctionSig:
    """Decode a rustdoc function signature object.

    Accepts ``inputs`` as a list of ``[name, type]`` pairs, an optional
    ``output`` and the variadic flag under any of the keys rustdoc has used
    for it (``is_c_variadic``, ``c_variadic``, ``is_variadic``).

    Raises:
        TypeDecodeError: If the signature object is malformed
    """
    obj = _expect_object(value, path)

    raw_inputs = obj.get("inputs")
    if not isinstance(raw_inputs, list):
        raise TypeDecodeError(f"{path}.inputs", "expected a list of [name, type] pairs")

    inputs: List[Tuple[str, TypeExpr]] = []
    for i, pair in enumerate(raw_inputs):
        pair_path = f"{path}.inputs[{i}]"
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise TypeDecodeError(pair_path, "expected a [name, type] pair")
        name = _expect_str(pair[0], f"{pair_path}[0]")
        inputs.append((name, decode_type(pair[1], f"{pair_path}[1]")))

    raw_output = obj.get("output")
    output = None if raw_output is None else decode_type(raw_output, f"{path}.output")

    is_variadic = False
    for key in ("is_c_variadic", "c_variadic", "is_variadic"):
        if key in obj:
            is_variadic = _optional_bool(obj, key, path)
            break

    return FunctionSig(inputs=tuple(inputs), output=output, is_variadic=is_variadic)
