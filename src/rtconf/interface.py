# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Abstract store interfaces.

KV is the plain hierarchical key-value contract; RtConf adds value updates
and change notification. MemRtConf implements RtConf in-process. A remote
backend (for example a cloud runtime-config service) implements the same
contract with its own latency and failure modes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KV(ABC):
    """Hierarchical key-value storage with '/'-separated keys."""

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Return the value stored at a leaf key."""
        ...

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Create a new leaf. Never overwrites an existing key."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete a key and everything below it."""
        ...

    @abstractmethod
    def enumerate(self, prefix: str = '') -> set[str]:
        """Return the full paths of all leaves under prefix."""
        ...


class RtConf(KV):
    """Runtime configuration store with change notification."""

    @abstractmethod
    def update(self, key: str, value: bytes) -> None:
        """Replace the value of an existing leaf and release its watchers."""
        ...

    @abstractmethod
    def watch(self, key: str, timeout: float | None = None) -> bool:
        """Block until key is updated or timeout elapses.

        Returns True if released by an update, False on timeout.
        """
        ...
