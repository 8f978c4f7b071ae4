# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""RtConf exceptions."""

from __future__ import annotations


class RtConfError(Exception):
    """Base exception for RtConf errors."""

    pass


class InvalidKeyError(RtConfError, ValueError):
    """Raised when a key is empty or normalizes to zero path segments."""

    pass


class InvalidValueError(RtConfError, ValueError):
    """Raised when a value is missing or is not a bytes-like object."""

    pass


class KeyNotFoundError(RtConfError, KeyError):
    """Raised when a path cannot be resolved."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ''


class KeyExistsError(RtConfError):
    """Raised when set() targets a path that already exists."""

    pass


class BucketConflictError(RtConfError):
    """Raised when a value would be read or written through a bucket."""

    pass


class NotALeafError(RtConfError):
    """Raised when get() resolves to a node without a usable value."""

    pass


class InternalError(RtConfError):
    """Raised on an invariant violation inside the tree."""

    pass
