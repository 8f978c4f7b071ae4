# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""RtConf - Hierarchical runtime configuration store with change notification.

A lightweight, zero-dependency library providing a path-addressed
key-value tree whose callers can block until a value is updated.
"""

import logging

__version__ = "0.1.0"

from .exceptions import (
    BucketConflictError,
    InternalError,
    InvalidKeyError,
    InvalidValueError,
    KeyExistsError,
    KeyNotFoundError,
    NotALeafError,
    RtConfError,
)
from .interface import KV, RtConf
from .node import TrieNode
from .paths import join_key, split_key
from .store import MemRtConf

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "MemRtConf",
    "TrieNode",
    # Interfaces
    "KV",
    "RtConf",
    # Key helpers
    "split_key",
    "join_key",
    # Exceptions
    "RtConfError",
    "InvalidKeyError",
    "InvalidValueError",
    "KeyNotFoundError",
    "KeyExistsError",
    "BucketConflictError",
    "NotALeafError",
    "InternalError",
]
