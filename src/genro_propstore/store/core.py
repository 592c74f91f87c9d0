# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PropStore - A thread-safe flat store of dotted-path properties.

This module provides the PropStore class, the owner of all property
records. The hierarchy is not a tree of nodes: it is encoded in the
lexicographic order of full dotted keys, where every descendant of
'a.b' sorts into one contiguous run starting at 'a.b.'.

Key Features:
    - **Flat sorted storage**: dict for O(1) lookup plus a sorted key
      list for O(log N + K) range scans
    - **Single lock**: every accessor call is one short critical section
    - **Scoped views**: ConstRef/Ref handles carry a path prefix and an
      identity label, and never own data

Example:
    Basic usage::

        store = PropStore()
        root = store.root('main')
        root.set('server.port', 8080)
        root.get('server.port', 0)          # 8080

        server = root.get_subtree('server')
        server.list_keys()                  # ['port']
"""

from __future__ import annotations

import logging
import threading
from bisect import bisect_left, insort
from typing import Iterator

from ..config import PropStoreSettings
from ..paths import child_range
from ..record import PropRecord
from .refs import ConstRef, Ref

_logger = logging.getLogger(__name__)


class PropStore:
    """Owner of the property records and of the lock guarding them.

    PropStore has no knowledge of views beyond handing out root ones.
    All reads and writes go through ConstRef/Ref, which take `_lock`
    and call the internal record helpers below.

    Attributes:
        settings: The PropStoreSettings this store was created with.

    Example:
        >>> store = PropStore()
        >>> store.root().set('a.b', 1)
        >>> len(store)
        1
        >>> store.clear()
        >>> len(store)
        0
    """

    __slots__ = ('_records', '_keys', '_lock', 'settings')

    def __init__(self, settings: PropStoreSettings | None = None) -> None:
        """Initialize an empty PropStore.

        Args:
            settings: Optional settings. Defaults to PropStoreSettings(),
                which reads PROPSTORE_* environment variables.
        """
        self._records: dict[str, PropRecord] = {}
        self._keys: list[str] = []
        self._lock = threading.Lock()
        self.settings = settings if settings is not None else PropStoreSettings()

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"PropStore({len(self._records)} records)"

    def __len__(self) -> int:
        """Return the number of records, defined or not."""
        with self._lock:
            return len(self._records)

    # ==================== Views ====================

    def root(self, id: str = '') -> Ref:
        """Return a read-write view on the whole store.

        Args:
            id: Identity label of the view.
        """
        return Ref(self, '', id)

    def const_root(self, id: str = '') -> ConstRef:
        """Return a read-only view on the whole store.

        Args:
            id: Identity label of the view.
        """
        return ConstRef(self, '', id)

    def clear(self) -> None:
        """Drop all records.

        Views stay valid and simply see an empty store. No isolation is
        provided against callers that assume specific keys exist.
        """
        with self._lock:
            count = len(self._records)
            self._records.clear()
            self._keys.clear()
        _logger.debug("Cleared %d records", count)

    # ==================== Record Helpers (lock held) ====================

    def _get_or_create_record(self, full_path: str) -> PropRecord:
        """Return the record at full_path, inserting an undefined one if absent."""
        record = self._records.get(full_path)
        if record is None:
            record = PropRecord()
            self._records[full_path] = record
            insort(self._keys, full_path)
        return record

    def _find_record(self, full_path: str) -> PropRecord | None:
        """Return the record at full_path for a read.

        Misses materialize an undefined record unless the store is
        configured with materialize_on_read=False.
        """
        if self.settings.materialize_on_read:
            return self._get_or_create_record(full_path)
        return self._records.get(full_path)

    def _put_record(self, full_path: str, record: PropRecord) -> None:
        """Replace the record at full_path wholesale."""
        if full_path not in self._records:
            insort(self._keys, full_path)
        self._records[full_path] = record

    def _iter_range(self, prefix: str) -> Iterator[tuple[str, PropRecord]]:
        """Yield (key, record) for prefix itself and all its descendants.

        Keys come in sorted order. An empty prefix yields every record.
        """
        if not prefix:
            for key in self._keys:
                yield key, self._records[key]
            return

        own = self._records.get(prefix)
        if own is not None:
            yield prefix, own

        low, high = child_range(prefix)
        keys = self._keys
        i = bisect_left(keys, low)
        end = bisect_left(keys, high, lo=i)
        while i < end:
            key = keys[i]
            yield key, self._records[key]
            i += 1
