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
"""Loading rustdoc JSON documents from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from .document import RustdocDocument

logger = logging.getLogger(__name__)


class RustdocLoadError(Exception):
    """The document file could not be read or is not valid JSON."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Cannot load '{path}': {message}")


def load_document(path: Union[str, Path]) -> RustdocDocument:
    """Read, parse and decode a rustdoc JSON file.

    Args:
        path: Path to the JSON document

    Returns:
        The decoded document

    Raises:
        RustdocLoadError: If the file is missing, unreadable or not JSON
        TypeDecodeError: If the JSON is valid but a signature is malformed
    """
    path = str(path)
    logger.debug(f"Loading rustdoc document from {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise RustdocLoadError(path, "file not found") from None
    except json.JSONDecodeError as e:
        raise RustdocLoadError(path, f"invalid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise RustdocLoadError(path, str(e)) from e

    return RustdocDocument.from_dict(data)
