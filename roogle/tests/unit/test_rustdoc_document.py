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
"""Unit tests for RustdocDocument and Item decoding."""

import pytest

from roogle.rustdoc.document import (
    UNKNOWN_KIND,
    UNKNOWN_NAME,
    Item,
    RustdocDocument,
    item_to_signature_string,
)
from roogle.types.decoding import TypeDecodeError
from roogle.types.model import PrimitiveType


def _function_record(name, sig):
    return {"name": name, "inner": {"function": {"sig": sig}}}


class TestItem:
    """Tests for Item.from_dict."""

    def test_function_item(self):
        item = Item.from_dict("7", _function_record("len", {
            "inputs": [], "output": {"primitive": "usize"}, "is_c_variadic": False,
        }))
        assert item.id == "7"
        assert item.kind == "function"
        assert item.is_function
        assert item.function.output == PrimitiveType("usize")

    def test_struct_item(self):
        item = Item.from_dict("4", {"name": "Config", "inner": {"struct": {"kind": "unit"}}})
        assert item.kind == "struct"
        assert not item.is_function
        assert item_to_signature_string(item) is None

    def test_explicit_kind_field(self):
        """Older formats carry a "kind" field and the signature under "decl"."""
        item = Item.from_dict("1", {
            "name": "old",
            "kind": "function",
            "inner": {"decl": {"inputs": [["x", {"primitive": "u8"}]], "output": None, "c_variadic": True}},
        })
        assert item.is_function
        assert item.function.is_variadic
        assert item_to_signature_string(item) == "fn old(x: u8)"

    def test_missing_name_renders_unknown(self):
        item = Item.from_dict("3", _function_record(None, {"inputs": []}))
        assert item.display_name == UNKNOWN_NAME
        assert item_to_signature_string(item) == "fn unknown()"

    def test_docs_are_kept(self):
        record = _function_record("f", {"inputs": []})
        record["docs"] = "Does things."
        assert Item.from_dict("1", record).docs == "Does things."

    def test_function_without_sig(self):
        with pytest.raises(TypeDecodeError):
            Item.from_dict("1", {"name": "f", "inner": {"function": {"generics": {}}}})

    def test_record_not_object(self):
        with pytest.raises(TypeDecodeError):
            Item.from_dict("1", ["function"])

    def test_inner_not_object(self):
        with pytest.raises(TypeDecodeError):
            Item.from_dict("1", {"name": "f", "inner": "function"})

    def test_name_not_string(self):
        with pytest.raises(TypeDecodeError):
            Item.from_dict("1", {"name": 3, "inner": {}})

    def test_non_function_payload_is_not_inspected(self):
        item = Item.from_dict("1", {"name": "T", "inner": {"trait": "whatever"}})
        assert item.kind == "trait"

    def test_null_function_payload_is_not_a_function(self):
        item = Item.from_dict("1", {"name": "f", "inner": {"function": None}})
        assert item.kind == UNKNOWN_KIND
        assert not item.is_function
        assert item_to_signature_string(item) is None

    def test_null_payloads_do_not_hide_kind(self):
        item = Item.from_dict("1", {"name": "S", "inner": {"function": None, "struct": {}}})
        assert item.kind == "struct"

    def test_unidentified_kind(self):
        assert Item.from_dict("1", {"name": "x", "inner": {}}).kind == UNKNOWN_KIND
        assert Item.from_dict("1", {"name": "x", "inner": {"a": 1, "b": 2}}).kind == UNKNOWN_KIND


class TestRustdocDocument:
    """Tests for RustdocDocument."""

    def test_from_dict(self, sample_document):
        doc = RustdocDocument.from_dict(sample_document)
        assert len(doc.items) == 5
        assert doc.format_version == 39
        assert doc.crate_version == "0.3.1"
        assert [item.id for item in doc.function_items()] == ["1", "2", "3"]

    def test_render_signatures(self, sample_document, sample_signatures):
        doc = RustdocDocument.from_dict(sample_document)
        assert doc.render_signatures() == sample_signatures

    def test_render_signatures_filtered(self, sample_document):
        doc = RustdocDocument.from_dict(sample_document)
        assert doc.render_signatures("res") == ["fn reset(state: &mut 'a T, items: [(i32, T)])"]

    def test_filter_matches_unknown_name(self, sample_document):
        doc = RustdocDocument.from_dict(sample_document)
        assert doc.render_signatures("unknown") == ["fn unknown()"]

    def test_opaque_signature_still_renders(self, sample_document):
        sample_document["index"]["1"]["inner"]["function"]["sig"]["inputs"].append(
            ["cb", {"function_pointer": {"sig": {}}}]
        )
        doc = RustdocDocument.from_dict(sample_document)
        first = doc.render_signatures("load")[0]
        assert first.startswith("fn load(path: &str, cb: /* unknown type */ ")

    def test_one_malformed_signature_fails_document(self, sample_document):
        sample_document["index"]["2"]["inner"]["function"]["sig"]["inputs"][0][1] = {
            "borrowed_ref": {"is_mutable": True}
        }
        with pytest.raises(TypeDecodeError) as exc_info:
            RustdocDocument.from_dict(sample_document)
        assert "$.index['2']" in exc_info.value.path

    def test_missing_index(self):
        with pytest.raises(TypeDecodeError):
            RustdocDocument.from_dict({"root": "0"})

    def test_document_not_object(self):
        with pytest.raises(TypeDecodeError):
            RustdocDocument.from_dict([])

    def test_empty_index(self):
        doc = RustdocDocument.from_dict({"index": {}})
        assert doc.items == ()
        assert doc.render_signatures() == []

    def test_null_function_payload_does_not_fail_document(self, sample_document, sample_signatures):
        sample_document["index"]["5"] = {"id": "5", "name": "stub", "inner": {"function": None}}
        doc = RustdocDocument.from_dict(sample_document)
        assert len(doc.items) == 6
        assert doc.render_signatures() == sample_signatures
