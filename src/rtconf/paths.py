# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Key normalization.

Keys are '/'-separated paths. Leading, trailing and repeated separators are
tolerated: empty segments are dropped, so '/a//b/' and 'a/b' name the same
node. Dot segments are cleaned like a rooted filesystem path: '.' is
dropped and '..' removes the preceding segment. A '..' at the root is
dropped, so no key can climb above the store root; 'a/..' names the root
itself and is therefore not a valid single-target key.

Example:
    >>> split_key('/a/b/c/')
    ['a', 'b', 'c']
    >>> split_key('a/./b/../c')
    ['a', 'c']
    >>> split_key('/', allow_root=True)
    []
    >>> join_key(['a', 'b'])
    'a/b'
"""

from __future__ import annotations

from .exceptions import InvalidKeyError

SEPARATOR = '/'
CURRENT = '.'
PARENT = '..'


def split_key(key: str, allow_root: bool = False) -> list[str]:
    """Split a key into its ordered, non-empty path segments.

    Args:
        key: The '/'-separated key.
        allow_root: If True, a key that names the root ('', '/', 'a/..')
            is accepted and yields an empty list.

    Returns:
        List of path segments.

    Raises:
        InvalidKeyError: If key is not a string, is empty, or has no
            segments and allow_root is False.
    """
    if not isinstance(key, str):
        raise InvalidKeyError(f"key must be str, not {type(key).__name__}")
    segments: list[str] = []
    for segment in key.strip().split(SEPARATOR):
        if not segment or segment == CURRENT:
            continue
        if segment == PARENT:
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    if not segments and not allow_root:
        raise InvalidKeyError(f"invalid key {key!r}: empty key is not allowed")
    return segments


def join_key(segments: list[str]) -> str:
    """Join path segments back into a normalized key."""
    return SEPARATOR.join(segments)
