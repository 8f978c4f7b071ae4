# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - In-process hierarchical runtime configuration.

The package is organized into:
- core: MemRtConf with traversal, mutation, enumeration and watch
- locks: Reader/writer lock guarding the trie structure
- watch: Per-path registry of waiting watchers

Example:
    >>> from rtconf import MemRtConf
    >>> conf = MemRtConf()
    >>> conf.set('config/name', b'MyApp')
    >>> conf.get('config/name')
    b'MyApp'
"""

from .core import DEFAULT_NAMESPACE, DEFAULT_WATCH_TIMEOUT, MemRtConf
from .locks import ReadWriteLock
from .watch import WatchHandle, WatchRegistry

__all__ = [
    "MemRtConf",
    "ReadWriteLock",
    "WatchHandle",
    "WatchRegistry",
    "DEFAULT_NAMESPACE",
    "DEFAULT_WATCH_TIMEOUT",
]
