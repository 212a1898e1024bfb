"""
Shared argument handling for commands that take leaf inputs.

--data, --file and --id all append to the same destination so the leaf
order on the command line is the leaf order in the tree.
"""

from __future__ import annotations

import argparse
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from cidtree.config.runtime import RuntimeConfig
from cidtree.schemas.inputs import IdInput, LiteralInput, PathInput
from cidtree.store import ContentStore, create_content_store


def _literal(value: str) -> LiteralInput:
    return LiteralInput.from_text(value)


def _path(value: str) -> PathInput:
    return PathInput(path=Path(value))


def _content_id(value: str) -> IdInput:
    return IdInput(content_id=value)


def add_input_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the ordered leaf input flags on ``parser``."""
    group = parser.add_argument_group("leaf inputs (repeatable, order preserved)")
    group.add_argument(
        "--data", "-d",
        dest="inputs",
        action="append",
        type=_literal,
        metavar="TEXT",
        help="Literal UTF-8 text to hash as a leaf",
    )
    group.add_argument(
        "--file", "-f",
        dest="inputs",
        action="append",
        type=_path,
        metavar="PATH",
        help="File whose contents are hashed as a leaf",
    )
    group.add_argument(
        "--id", "-i",
        dest="inputs",
        action="append",
        type=_content_id,
        metavar="CID",
        help="Pre-computed content identifier used as a leaf as-is",
    )


def ingest_options(config: RuntimeConfig) -> dict:
    """Keyword arguments for hash_inputs/build_tree_from_inputs from config."""
    return {
        "max_workers": config.ingest.max_workers,
        "timeout": config.ingest.hash_timeout,
    }


@contextmanager
def open_store(config: RuntimeConfig) -> Iterator[ContentStore]:
    """Create the configured content store and close it afterwards if it can be closed."""
    store = create_content_store(config.store)
    try:
        yield store
    finally:
        close = getattr(store, "close", None)
        if callable(close):
            close()
