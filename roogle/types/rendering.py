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
"""Rendering of type expressions and signatures as Rust-like text.

Both functions are pure and total: every type expression, including
OpaqueType, has a rendering.
"""

from __future__ import annotations

import json
from typing import List, Tuple

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

# Prefix of the rendering of an OpaqueType, followed by the raw JSON
OPAQUE_MARKER = "/* unknown type */"

# Rendering of the unit type
UNIT_STR = "()"


def type_to_string(ty: TypeExpr) -> str:
    """Format a type expression as Rust syntax.

    The tree is rendered post-order with an explicit stack, so arbitrarily
    deep nesting renders without hitting the recursion limit.
    """
    rendered: List[str] = []
    stack: List[Tuple[TypeExpr, bool]] = [(ty, False)]
    while stack:
        node, children_done = stack.pop()
        children = node.children()
        if children and not children_done:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children))
            continue

        parts = rendered[len(rendered) - len(children):]
        del rendered[len(rendered) - len(children):]
        rendered.append(_render_node(node, parts))

    return rendered[0]


def _render_node(ty: TypeExpr, parts: List[str]) -> str:
    """Render one node given the renderings of its children."""
    if isinstance(ty, ReferenceType):
        mut_str = "mut " if ty.mutable else ""
        lifetime_str = f"{ty.lifetime} " if ty.lifetime is not None else ""
        return f"&{mut_str}{lifetime_str}{parts[0]}"

    if isinstance(ty, NamedPathType):
        if not parts:
            return ty.name
        return f"{ty.name}<{', '.join(parts)}>"

    if isinstance(ty, (GenericParamType, PrimitiveType)):
        return ty.name

    if isinstance(ty, TupleType):
        return f"({', '.join(parts)})"

    if isinstance(ty, SliceType):
        return f"[{parts[0]}]"

    if isinstance(ty, OpaqueType):
        return f"{OPAQUE_MARKER} {_raw_json(ty.raw)}"

    # TypeExpr subclasses outside this module still get a visible rendering
    return f"{OPAQUE_MARKER} {ty!r}"


def _raw_json(raw) -> str:
    try:
        return json.dumps(raw, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(raw)


def function_sig_to_string(name: str, sig: FunctionSig) -> str:
    """Render a function signature as ``fn name(a: A, b: B) -> R``.

    The return arrow is omitted when there is no output or when the output
    renders as the unit type.
    """
    params = ", ".join(
        f"{param_name}: {type_to_string(param_type)}"
        for param_name, param_type in sig.inputs
    )
    result = f"fn {name}({params})"

    if sig.output is not None:
        return_str = type_to_string(sig.output)
        if return_str != UNIT_STR:
            result += f" -> {return_str}"

    return result
