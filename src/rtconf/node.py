# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Trie node class."""

from __future__ import annotations


class TrieNode:
    """A vertex in the RtConf trie.

    Each node has:
    - children: Mapping from path segment to child node
    - value: Stored bytes, or None

    A node whose value is None is a bucket (directory); a node holding a
    value, possibly b'', is a leaf and never has children. A bucket may
    have no children once everything below it has been deleted.

    Example:
        >>> node = TrieNode(b'on')
        >>> node.is_leaf
        True
        >>> TrieNode().is_bucket
        True
    """

    __slots__ = ('children', 'value')

    def __init__(self, value: bytes | None = None) -> None:
        """Initialize a TrieNode.

        Args:
            value: The stored value. None creates a bucket.
        """
        self.children: dict[str, TrieNode] = {}
        self.value = value

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"TrieNode(value={self.value!r})"
        return f"TrieNode(children={sorted(self.children)!r})"

    @property
    def is_bucket(self) -> bool:
        """True if this node holds no value."""
        return self.value is None

    @property
    def is_leaf(self) -> bool:
        """True if this node holds a value."""
        return self.value is not None

    def child(self, label: str) -> TrieNode | None:
        """Return the child at label, or None."""
        return self.children.get(label)

    def add_child(self, label: str) -> TrieNode:
        """Create and attach an empty bucket child at label."""
        node = TrieNode()
        self.children[label] = node
        return node
