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
"""Print the function signatures of a rustdoc JSON document.

Usage:
    roogle PATH [--filter SUBSTRING] [--index-out FILE] [--log-level LEVEL]

Examples:
    cargo +nightly rustdoc -- -Z unstable-options --output-format json
    roogle target/doc/mycrate.json
    roogle target/doc/mycrate.json --filter parse --index-out index.json
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import LOG_LEVELS, RoogleConfig
from .index import IndexFileError, RoogleIndex
from .rustdoc.loader import RustdocLoadError, load_document
from .types.decoding import TypeDecodeError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roogle",
        description="Print the function signatures of a rustdoc JSON document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", help="Path to the rustdoc JSON document")
    parser.add_argument(
        "--filter",
        metavar="SUBSTRING",
        help="Only print functions whose name contains SUBSTRING",
    )
    parser.add_argument(
        "--index-out",
        metavar="FILE",
        help="Also write a (name, doc) index of the functions to FILE",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=sorted(LOG_LEVELS),
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = RoogleConfig.from_args(args)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    logger.debug(f"Running with {config}")

    try:
        doc = load_document(config.document_path)
    except RustdocLoadError as e:
        parser.error(str(e))
    except TypeDecodeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    for line in doc.render_signatures(config.name_filter):
        print(line)

    if config.index_path is not None:
        try:
            RoogleIndex.from_document(doc).save_to_file(config.index_path)
        except IndexFileError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
