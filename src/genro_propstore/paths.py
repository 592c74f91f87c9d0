# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Dotted path helpers.

Paths are strings of '.'-separated segments. The empty path denotes
"this node" and is absorbed by join_paths, so the same helpers serve
both storage prefixes and identity labels.

Example:
    >>> join_paths('server', 'port')
    'server.port'
    >>> join_paths('', 'port')
    'port'
    >>> split_first('server.http.port')
    'server'
"""

from __future__ import annotations

SEPARATOR = '.'

# First character sorting after SEPARATOR: keys starting with
# 'prefix.' are exactly those in ['prefix.', 'prefix/').
_SEPARATOR_UPPER = chr(ord(SEPARATOR) + 1)


def join_paths(p1: str, p2: str) -> str:
    """Join two path segments with the separator.

    An empty side is absorbed: the other side is returned unchanged.
    """
    if not p1:
        return p2
    if not p2:
        return p1
    return f"{p1}{SEPARATOR}{p2}"


def is_simple_path(p: str) -> bool:
    """True if p is a single non-empty segment."""
    return bool(p) and SEPARATOR not in p


def split_first(p: str) -> str:
    """Return the first segment of p, or p itself if it has no separator."""
    return p.split(SEPARATOR, 1)[0]


def child_range(prefix: str) -> tuple[str, str]:
    """Return the half-open key bounds of all strict descendants of prefix.

    Args:
        prefix: A non-empty path.

    Returns:
        Tuple (low, high) such that low <= key < high iff
        key starts with prefix + SEPARATOR.
    """
    return f"{prefix}{SEPARATOR}", f"{prefix}{_SEPARATOR_UPPER}"
