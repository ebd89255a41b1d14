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
"""Pytest configuration for roogle tests.

Sets up the import path so tests run from a source checkout without
installing the package, and provides a small rustdoc document shared by the
document, loader, index and CLI tests.
"""

import json
import sys
from pathlib import Path

import pytest

# Add the repository root to path so `import roogle` works uninstalled
repo_root = Path(__file__).parent.parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


def _type_arg(ty):
    return {"type": ty}


SAMPLE_DOCUMENT = {
    "root": "0",
    "crate_version": "0.3.1",
    "format_version": 39,
    "index": {
        "0": {
            "id": "0",
            "name": "demo",
            "docs": "Demo crate.",
            "inner": {"module": {"is_crate": True, "items": ["1", "2", "3", "4"]}},
        },
        "1": {
            "id": "1",
            "name": "load",
            "docs": "Load a config file.",
            "inner": {
                "function": {
                    "sig": {
                        "inputs": [["path", {"borrowed_ref": {
                            "is_mutable": False,
                            "lifetime": None,
                            "type": {"primitive": "str"},
                        }}]],
                        "output": {"resolved_path": {
                            "name": "Result",
                            "id": "9",
                            "args": {"angle_bracketed": {
                                "args": [
                                    _type_arg({"resolved_path": {"name": "Config", "id": "4", "args": None}}),
                                    _type_arg({"resolved_path": {"name": "Error", "id": "8", "args": None}}),
                                ],
                                "constraints": [],
                            }},
                        }},
                        "is_c_variadic": False,
                    },
                    "generics": {"params": [], "where_predicates": []},
                    "has_body": True,
                },
            },
        },
        "2": {
            "id": "2",
            "name": "reset",
            "docs": None,
            "inner": {
                "function": {
                    "sig": {
                        "inputs": [
                            ["state", {"borrowed_ref": {
                                "is_mutable": True,
                                "lifetime": "'a",
                                "type": {"generic": "T"},
                            }}],
                            ["items", {"slice": {"tuple": [{"primitive": "i32"}, {"generic": "T"}]}}],
                        ],
                        "output": {"tuple": []},
                        "is_c_variadic": False,
                    },
                },
            },
        },
        "3": {
            "id": "3",
            "name": None,
            "inner": {
                "function": {
                    "sig": {
                        "inputs": [],
                        "output": None,
                        "is_c_variadic": False,
                    },
                },
            },
        },
        "4": {
            "id": "4",
            "name": "Config",
            "docs": "Configuration.",
            "inner": {"struct": {"kind": {"unit": None}, "generics": {}, "impls": []}},
        },
    },
}


SAMPLE_SIGNATURES = [
    "fn load(path: &str) -> Result<Config, Error>",
    "fn reset(state: &mut 'a T, items: [(i32, T)])",
    "fn unknown()",
]


@pytest.fixture
def sample_document():
    """A deep copy of the sample rustdoc document."""
    return json.loads(json.dumps(SAMPLE_DOCUMENT))


@pytest.fixture
def sample_signatures():
    return list(SAMPLE_SIGNATURES)


@pytest.fixture
def sample_path(tmp_path, sample_document):
    """The sample document written to a temporary file."""
    path = tmp_path / "demo.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path
