# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MemRtConf - In-process hierarchical runtime configuration store.

This module provides the MemRtConf class, a trie of TrieNode instances
rooted at a single bucket. Keys are '/'-separated paths: intermediate
segments are buckets, the last segment of a set() is a leaf holding bytes.

Key Features:
    - **Leaf/bucket exclusivity**: a node holds either a value or children
    - **Create vs. replace**: set() only creates, update() only replaces
    - **Subtree deletion**: delete() drops a leaf or a whole bucket
    - **Enumeration**: full paths of every leaf below a prefix
    - **Watch**: block until an exact path is updated, bounded by a timeout

Concurrency:
    The trie is guarded by a ReadWriteLock. get() and enumerate() share it;
    set(), update() and delete() hold it exclusively for traversal plus
    mutation, so each structural change is all-or-nothing. Watchers live in
    a separate WatchRegistry with its own lock.

Example:
    Basic usage::

        conf = MemRtConf()
        conf.set('a/b/c/k1', b'val')
        conf.set('a/b/c/k2', b'other')

        conf.get('a/b/c/k1')     # b'val'
        conf.enumerate('a/b')    # {'a/b/c/k1', 'a/b/c/k2'}

    Watching from another thread::

        threading.Thread(target=conf.watch, args=('a/b/c/k1',)).start()
        conf.update('a/b/c/k1', b'new')  # releases the watcher
"""

from __future__ import annotations

import math
import threading
from typing import Any, Iterator

from ..exceptions import (
    BucketConflictError,
    InternalError,
    InvalidValueError,
    KeyExistsError,
    KeyNotFoundError,
    NotALeafError,
)
from ..interface import RtConf
from ..node import TrieNode
from ..paths import SEPARATOR, join_key, split_key
from .locks import ReadWriteLock
from .watch import WatchRegistry

DEFAULT_NAMESPACE = 'default'
DEFAULT_WATCH_TIMEOUT = 60.0


def _copy_value(value: Any) -> bytes:
    """Return an independent bytes copy of a bytes-like value.

    Raises:
        InvalidValueError: If value is None or not bytes-like.
    """
    if value is None:
        raise InvalidValueError("cannot set None value, use b'' for an empty value")
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise InvalidValueError(
            f"value must be bytes-like, not {type(value).__name__}"
        )
    return bytes(value)


class MemRtConf(RtConf):
    """An in-memory RtConf backed by a trie.

    MemRtConf provides:
    - set(key, value): Create a new leaf, creating buckets as needed
    - get(key): Read a leaf value
    - update(key, value): Replace a leaf value and release its watchers
    - delete(key): Remove a leaf or a bucket with everything below it
    - enumerate(prefix): Full paths of all leaves under prefix
    - watch(key): Block until key is updated or the watch times out

    Attributes:
        namespace: Informational label of the store, shown in repr().
            Keys are always resolved relative to the store's own root and
            never include the namespace.
        watch_timeout: Default maximum wait for watch(), in seconds.

    Example:
        >>> conf = MemRtConf()
        >>> conf.set('/a/b/', b'x')
        >>> conf.get('a/b')
        b'x'
    """

    __slots__ = ('namespace', 'watch_timeout', '_root', '_lock', '_watchers')

    def __init__(
        self,
        namespace: str = DEFAULT_NAMESPACE,
        watch_timeout: float = DEFAULT_WATCH_TIMEOUT,
    ) -> None:
        """Initialize a MemRtConf.

        Args:
            namespace: Label of the store. Must be non-empty and must not
                contain '/'.
            watch_timeout: Seconds a watch() call waits at most when no
                per-call timeout is given. Must be positive, finite and
                not above threading.TIMEOUT_MAX.

        Raises:
            ValueError: If namespace or watch_timeout is invalid.
        """
        if not namespace or SEPARATOR in namespace:
            raise ValueError(f"invalid namespace {namespace!r}")
        if not (
            math.isfinite(watch_timeout)
            and 0 < watch_timeout <= threading.TIMEOUT_MAX
        ):
            raise ValueError(
                f"watch_timeout must be positive and at most "
                f"{threading.TIMEOUT_MAX}, got {watch_timeout!r}"
            )
        self.namespace = namespace
        self.watch_timeout = watch_timeout
        self._root = TrieNode()
        self._lock = ReadWriteLock()
        self._watchers = WatchRegistry()

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing namespace and top-level size."""
        return f"MemRtConf({self.namespace!r}, entries={len(self._root.children)})"

    def __contains__(self, key: str) -> bool:
        """Check if key resolves to a node (leaf or bucket).

        Args:
            key: Path to check.

        Returns:
            True if the path exists, False otherwise.
        """
        segments = split_key(key)
        with self._lock.read_locked():
            try:
                self._traverse(segments)
            except KeyNotFoundError:
                return False
        return True

    # ==================== Traversal ====================

    def _traverse(self, segments: list[str]) -> TrieNode:
        """Walk from the root following segments.

        Args:
            segments: Normalized path segments (empty for the root).

        Returns:
            The node at the path.

        Raises:
            KeyNotFoundError: If any segment is missing.
        """
        node = self._root
        for i, segment in enumerate(segments):
            child = node.child(segment)
            if child is None:
                raise KeyNotFoundError(
                    f"key not found: {join_key(segments[:i + 1])!r}"
                )
            node = child
        return node

    def _traverse_parent(self, segments: list[str]) -> tuple[TrieNode, str]:
        """Resolve the parent of the node at segments.

        Returns:
            Tuple of (parent_node, final_label).

        Raises:
            KeyNotFoundError: If the parent or the final node is missing.
        """
        parent = self._traverse(segments[:-1])
        label = segments[-1]
        if label not in parent.children:
            raise KeyNotFoundError(f"key not found: {join_key(segments)!r}")
        return parent, label

    # ==================== Core API ====================

    def set(self, key: str, value: bytes) -> None:
        """Create a leaf at key, creating intermediate buckets as needed.

        Args:
            key: '/'-separated path of the new leaf.
            value: Bytes-like value. b'' is a valid, present value.

        Raises:
            InvalidKeyError: If key is empty.
            InvalidValueError: If value is None or not bytes-like.
            KeyExistsError: If a leaf or bucket already exists at key.
            BucketConflictError: If an intermediate segment is a leaf.
        """
        segments = split_key(key)
        data = _copy_value(value)

        with self._lock.write_locked():
            # Validate the whole path first so a failure creates nothing.
            node = self._root
            depth = 0
            for segment in segments:
                child = node.child(segment)
                if child is None:
                    break
                if child.is_leaf and depth < len(segments) - 1:
                    raise BucketConflictError(
                        f"cannot create {join_key(segments)!r}: "
                        f"{join_key(segments[:depth + 1])!r} is a value, not a bucket"
                    )
                node = child
                depth += 1
            else:
                raise KeyExistsError(f"key already exists: {join_key(segments)!r}")

            for segment in segments[depth:]:
                node = node.add_child(segment)
            if node.children:
                raise InternalError(f"new node {join_key(segments)!r} has children")
            node.value = data

    def get(self, key: str) -> bytes:
        """Return the value of the leaf at key.

        Args:
            key: '/'-separated path.

        Returns:
            The stored bytes (immutable, detached from caller buffers).

        Raises:
            InvalidKeyError: If key is empty.
            KeyNotFoundError: If the path does not exist.
            NotALeafError: If the path is a bucket.
        """
        segments = split_key(key)
        with self._lock.read_locked():
            node = self._traverse(segments)
            if node.children and node.value is not None:
                raise InternalError(
                    f"node {join_key(segments)!r} has both a value and children"
                )
            if node.children or node.value is None:
                raise NotALeafError(
                    f"key {join_key(segments)!r} is a bucket, not a value "
                    f"({len(node.children)} children)"
                )
            return node.value

    def update(self, key: str, value: bytes) -> None:
        """Replace the value of an existing leaf and release its watchers.

        Args:
            key: '/'-separated path of an existing leaf.
            value: New bytes-like value.

        Raises:
            InvalidKeyError: If key is empty.
            InvalidValueError: If value is None or not bytes-like.
            KeyNotFoundError: If the key does not exist. Nothing is created.
            BucketConflictError: If the key is a bucket with children.
        """
        segments = split_key(key)
        data = _copy_value(value)
        path = join_key(segments)

        with self._lock.write_locked():
            node = self._traverse(segments)
            if node.children:
                raise BucketConflictError(
                    f"cannot update {path!r}: key is a bucket, not a value"
                )
            node.value = data
            self._watchers.notify(path)

    def delete(self, key: str) -> None:
        """Delete the node at key together with its whole subtree.

        Args:
            key: '/'-separated path of a leaf or bucket.

        Raises:
            InvalidKeyError: If key is empty.
            KeyNotFoundError: If the path does not exist.
        """
        segments = split_key(key)
        with self._lock.write_locked():
            parent, label = self._traverse_parent(segments)
            del parent.children[label]

    # ==================== Enumeration ====================

    def walk(self, prefix: str = '') -> Iterator[tuple[str, TrieNode]]:
        """Walk the subtree below prefix depth-first.

        The generator reads the live tree without locking; use
        enumerate() for a consistent snapshot.

        Args:
            prefix: Path to start from. '' or '/' is the root.

        Yields:
            Tuples of (full_path, node) for every descendant.

        Raises:
            KeyNotFoundError: If prefix does not resolve.
        """
        segments = split_key(prefix, allow_root=True)
        start = self._traverse(segments)

        def _walk_gen(node: TrieNode, path: str) -> Iterator[tuple[str, TrieNode]]:
            for label, child in list(node.children.items()):
                child_path = f"{path}{SEPARATOR}{label}" if path else label
                yield child_path, child
                if child.children:
                    yield from _walk_gen(child, child_path)

        return _walk_gen(start, join_key(segments))

    def enumerate(self, prefix: str = '') -> set[str]:
        """Return the full paths of all leaves below prefix.

        Args:
            prefix: Path to enumerate. '' or '/' is the root.

        Returns:
            Set of normalized leaf paths. Buckets are never included. A
            prefix with no leaves below it yields an empty set.

        Raises:
            KeyNotFoundError: If prefix does not resolve.

        Example:
            >>> conf.enumerate('a/b')
            {'a/b/c/k1', 'a/b/c/k2'}
        """
        with self._lock.read_locked():
            return {path for path, node in self.walk(prefix) if node.is_leaf}

    # ==================== Watch ====================

    def watch(self, key: str, timeout: float | None = None) -> bool:
        """Block until key is updated or the watch times out.

        Only update() on the exact same normalized path releases the
        caller; set(), delete() and updates to descendants do not. All
        concurrent watchers of a path are released together.

        Args:
            key: '/'-separated path to watch. It need not exist yet.
            timeout: Maximum wait in seconds. Defaults to watch_timeout.
                Negative values count as 0 and values above
                threading.TIMEOUT_MAX (including inf) are clamped to it.

        Returns:
            True if released by an update, False if the timeout elapsed.
            Neither outcome is an error.

        Raises:
            InvalidKeyError: If key is empty.
        """
        path = join_key(split_key(key))
        if timeout is None or math.isnan(timeout):
            timeout = self.watch_timeout
        timeout = min(max(timeout, 0.0), threading.TIMEOUT_MAX)
        return self._watchers.wait(path, timeout)

    def watcher_count(self, key: str) -> int:
        """Return the number of callers currently blocked watching key."""
        return self._watchers.count(join_key(split_key(key)))

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to a nested dict snapshot.

        Buckets become dicts and leaves their bytes value.

        Returns:
            Nested dictionary representation of the tree.
        """

        def _as_dict(node: TrieNode) -> dict[str, Any]:
            result: dict[str, Any] = {}
            for label, child in node.children.items():
                result[label] = child.value if child.is_leaf else _as_dict(child)
            return result

        with self._lock.read_locked():
            return _as_dict(self._root)
