"""
Leaf Ingestion

Turns tagged inputs into ordered leaf identifiers by hashing them through a
content store, then hands the identifiers to the tree builder.

Hashing calls are independent of each other and may block on network I/O,
so they fan out over a bounded thread pool. Results are reassembled in
input order; concurrency never reorders leaves.

Failure policy:
- A content-store error for any input propagates unchanged
- A call running longer than ``timeout`` raises ContentStoreTimeoutException;
  each call is timed from the moment a worker picks it up
- Pending calls are cancelled on the first failure; no tree is built
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from typing import Iterable, Optional, Sequence, Union

from cidtree.crypto.hashing import ContentId
from cidtree.merkle.tree import MerkleTree
from cidtree.schemas.errors import ContentStoreTimeoutException, EmptyInputException
from cidtree.schemas.inputs import IdInput, LiteralInput, PathInput, resolve_input
from cidtree.store.base import ContentStore


logger = logging.getLogger(__name__)


AnyInput = Union[LiteralInput, PathInput, IdInput]

DEFAULT_MAX_WORKERS = 8


def _hash_one(store: ContentStore, item: LiteralInput | PathInput) -> ContentId:
    return store.hash(resolve_input(item))


def _next_wait(
    indices: Iterable[int],
    started: dict[int, float],
    timeout: Optional[float],
) -> Optional[float]:
    """Seconds until the earliest running call reaches its own deadline."""
    if timeout is None:
        return None
    now = time.monotonic()
    remaining = [started[i] + timeout - now for i in indices if i in started]
    if not remaining:
        return timeout
    return max(0.0, min(remaining))


def _first_expired(
    indices: Iterable[int],
    started: dict[int, float],
    timeout: Optional[float],
) -> Optional[int]:
    """Lowest input index whose call has run for ``timeout`` seconds or more."""
    if timeout is None:
        return None
    now = time.monotonic()
    expired = [i for i in indices if i in started and now - started[i] >= timeout]
    return min(expired) if expired else None


def hash_inputs(
    inputs: Sequence[AnyInput],
    store: ContentStore,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    timeout: Optional[float] = None,
) -> list[ContentId]:
    """
    Resolve and hash ``inputs`` concurrently, returning identifiers in input order.

    IdInput items are passed through without touching the store.

    Args:
        inputs: Tagged leaf inputs
        store: Content store used for hashing
        max_workers: Upper bound on concurrent hash calls
        timeout: Seconds each call may run once started (None waits indefinitely)

    Returns:
        One identifier per input, in the same order

    Raises:
        ContentStoreTimeoutException: If a call does not finish in time
        InputResolutionException: If a path input cannot be read
        Exception: Whatever the content store raises, unchanged
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    results: list[Optional[ContentId]] = [None] * len(inputs)
    pending: list[tuple[int, AnyInput]] = []
    for i, item in enumerate(inputs):
        if isinstance(item, IdInput):
            results[i] = item.content_id
        else:
            pending.append((i, item))

    if pending:
        workers = min(max_workers, len(pending))
        logger.debug(f"Hashing {len(pending)} input(s) with {workers} worker(s)")

        started: dict[int, float] = {}

        def run(i: int, item: LiteralInput | PathInput) -> ContentId:
            started[i] = time.monotonic()
            return _hash_one(store, item)

        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="cidtree-hash",
        )
        waiting = {executor.submit(run, i, item): i for i, item in pending}
        try:
            while waiting:
                done, _ = concurrent.futures.wait(
                    waiting,
                    timeout=_next_wait(waiting.values(), started, timeout),
                    return_when=concurrent.futures.FIRST_COMPLETED,
                )
                for future in done:
                    results[waiting.pop(future)] = future.result()
                expired = _first_expired(waiting.values(), started, timeout)
                if expired is not None:
                    raise ContentStoreTimeoutException(
                        f"Hashing input {expired} timed out after {timeout}s",
                        details={"index": expired, "timeout": timeout},
                    )
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

    return [content_id for content_id in results if content_id is not None]


def build_tree_from_inputs(
    inputs: Sequence[AnyInput],
    store: ContentStore,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    timeout: Optional[float] = None,
) -> MerkleTree:
    """
    Hash ``inputs`` through ``store`` and build a tree over the identifiers.

    Raises:
        EmptyInputException: If inputs is empty (checked before any hashing)
    """
    if len(inputs) == 0:
        raise EmptyInputException()

    leaf_ids = hash_inputs(inputs, store, max_workers=max_workers, timeout=timeout)
    return MerkleTree.build(leaf_ids)
