# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Scoped views on a PropStore.

A view is a small handle made of a back-reference to the store and two
independent strings:

- path: the prefix relative paths are resolved against ('' is the root)
- id: an identity label for diagnostics, joined with the same rule as
  paths but never used to address records

Views never hold records across calls: each accessor resolves its full
path, takes the store lock, does one operation and releases the lock.
Two calls are never atomic together.

Example:
    >>> store = PropStore()
    >>> root = store.root('app')
    >>> worker = root.get_subtree_for_sub_id('workers.w1', 'w1')
    >>> worker.path, worker.id
    ('workers.w1', 'app.w1')
    >>> worker.set('status', 'idle')
    >>> root.get('workers.w1.status')
    'idle'
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator

from ..converters import get_converter
from ..exceptions import BadFormatError, UndefinedPropertyError
from ..paths import SEPARATOR, join_paths, split_first
from ..record import Lookup, PropRecord

if TYPE_CHECKING:
    from typing import Self

    from .core import PropStore

_logger = logging.getLogger(__name__)

_MISSING: Any = object()


class ConstRef:
    """Read-only view on a PropStore.

    Provides:
    - get(path, default) / get(path, value_type=T): typed reads, lenient or strict
    - get_optional(path, T) / lookup(path, T): reads reporting absence
    - list_keys() / list_keys_recursive(): enumeration under the view path
    - get_subtree(path) / reidfy(sub_id): derived views

    The view does not own the store. Using it after the store is gone
    is the caller's responsibility.
    """

    __slots__ = ('_owner', '_path', '_id')

    def __init__(self, owner: PropStore, path: str = '', id: str = '') -> None:
        """Initialize a view.

        Args:
            owner: The store this view reads from.
            path: Path prefix of the view.
            id: Identity label of the view.
        """
        self._owner = owner
        self._path = path
        self._id = id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self._path!r}, id={self._id!r})"

    @property
    def owner(self) -> PropStore:
        """The store this view refers to."""
        return self._owner

    @property
    def path(self) -> str:
        """Path prefix used to resolve relative paths."""
        return self._path

    @property
    def id(self) -> str:
        """Identity label, independent from the path."""
        return self._id

    def _resolve(self, path: str) -> str:
        return join_paths(self._path, path)

    # ==================== Typed Reads ====================

    def lookup(self, path: str = '', value_type: type = str) -> Lookup:
        """Read the property at path as value_type.

        Args:
            path: Path relative to this view.
            value_type: Type to convert the stored text to.

        Returns:
            Lookup(value, defined). value is None when the property is
            undefined or unparsable; defined tells the two apart.

        Raises:
            UnsupportedTypeError: If value_type has no converter.
        """
        get_converter(value_type)
        full_path = self._resolve(path)
        owner = self._owner
        with owner._lock:
            record = owner._find_record(full_path)
            snapshot = record.copy() if record is not None else PropRecord()
        return snapshot.get_as(value_type)

    def get_optional(self, path: str = '', value_type: type = str) -> Any:
        """Read the property at path, or None if undefined or unparsable."""
        return self.lookup(path, value_type).value

    def get(
        self,
        path: str = '',
        default: Any = _MISSING,
        value_type: type | None = None,
    ) -> Any:
        """Read the property at path.

        With a default, never raises on a missing or malformed value and
        returns the default instead. Without one, the read is strict.

        Args:
            path: Path relative to this view.
            default: Fallback value. Its type is the conversion type when
                value_type is not given.
            value_type: Conversion type. Defaults to type(default), or str.

        Returns:
            The converted value, or default.

        Raises:
            UndefinedPropertyError: Strict read of an undefined property.
            BadFormatError: Strict read of a value not convertible to value_type.
            UnsupportedTypeError: If value_type has no converter.

        Example:
            >>> ref.get('server.port', 80)
            8080
            >>> ref.get('server.port', value_type=int)
            8080
            >>> ref.get('server.missing', value_type=int)
            Traceback (most recent call last):
            ...
            UndefinedPropertyError: Undefined property: server.missing
        """
        if value_type is None:
            if default is _MISSING or default is None:
                value_type = str
            else:
                value_type = type(default)

        value, defined = self.lookup(path, value_type)
        if value is not None:
            return value
        if default is not _MISSING:
            return default

        full_path = self._resolve(path)
        if defined:
            raise BadFormatError(full_path, value_type)
        raise UndefinedPropertyError(full_path)

    def get_value(self, default: Any = _MISSING, value_type: type | None = None) -> Any:
        """Read this view's own property. Same rules as get('')."""
        return self.get('', default, value_type)

    def get_optional_value(self, value_type: type = str) -> Any:
        """Read this view's own property, or None."""
        return self.get_optional('', value_type)

    def is_defined(self, path: str = '') -> bool:
        """True if the property at path currently holds a value."""
        full_path = self._resolve(path)
        owner = self._owner
        with owner._lock:
            record = owner._find_record(full_path)
            return record is not None and record.defined

    def get_record(self, path: str = '') -> PropRecord:
        """Return a copy of the record at path.

        A missing record is returned as a fresh undefined one.
        """
        full_path = self._resolve(path)
        owner = self._owner
        with owner._lock:
            record = owner._find_record(full_path)
            return record.copy() if record is not None else PropRecord()

    # ==================== Enumeration ====================

    def list_keys_recursive(
        self,
        out: list[str] | None = None,
        include_undefined: bool = False,
    ) -> list[str]:
        """List all keys under this view, relative to its path.

        The scan holds the store lock for its whole duration and
        therefore sees a consistent snapshot of the range. The view's own
        record, if listed, is reported as ''.

        Args:
            out: Optional list to append to.
            include_undefined: Also list undefined records.

        Returns:
            The list the keys were appended to, in sorted key order.
        """
        result = out if out is not None else []
        prefix = self._path
        cut = len(prefix) + len(SEPARATOR)
        owner = self._owner
        with owner._lock:
            for key, record in owner._iter_range(prefix):
                if not (include_undefined or record.defined):
                    continue
                if not prefix:
                    result.append(key)
                elif key == prefix:
                    result.append('')
                else:
                    result.append(key[cut:])
        return result

    def list_keys(
        self,
        out: list[str] | None = None,
        include_undefined: bool = False,
    ) -> list[str]:
        """List the immediate child names under this view.

        A child is listed if it, or any of its descendants, passes the
        definedness filter. Each name appears once.

        Args:
            out: Optional list to append to.
            include_undefined: Also consider undefined records.

        Returns:
            The list the names were appended to.
        """
        result = out if out is not None else []
        seen = {''}
        for key in self.list_keys_recursive(include_undefined=include_undefined):
            name = split_first(key)
            if name not in seen:
                seen.add(name)
                result.append(name)
        return result

    def iter_items(self, include_undefined: bool = False) -> Iterator[tuple[str, str]]:
        """Yield (relative key, text) pairs from a snapshot of this view's range."""
        prefix = self._path
        cut = len(prefix) + len(SEPARATOR)
        owner = self._owner
        with owner._lock:
            items = [
                (key if not prefix else key[cut:], record.value)
                for key, record in owner._iter_range(prefix)
                if include_undefined or record.defined
            ]
        yield from items

    def as_dict(self, include_undefined: bool = False) -> dict[str, Any]:
        """Convert the records under this view to a nested dict of texts.

        A node that has both a value and children keeps its own text
        under the '_value' key.

        Example:
            >>> ref.set('db.host', 'localhost')
            >>> ref.set('db', 'primary')
            >>> ref.as_dict()
            {'db': {'_value': 'primary', 'host': 'localhost'}}
        """
        result: dict[str, Any] = {}
        for key, text in self.iter_items(include_undefined):
            if not key:
                result['_value'] = text
                continue
            parts = key.split(SEPARATOR)
            current = result
            for part in parts[:-1]:
                child = current.get(part)
                if not isinstance(child, dict):
                    child = {} if child is None else {'_value': child}
                    current[part] = child
                current = child
            label = parts[-1]
            if isinstance(current.get(label), dict):
                current[label]['_value'] = text
            else:
                current[label] = text
        return result

    # ==================== Derived Views ====================

    def get_subtree(self, path: str) -> Self:
        """Return a view rooted at path, with the same identity."""
        return type(self)(self._owner, self._resolve(path), self._id)

    def get_subtree_for_sub_id(self, path: str, sub_id: str) -> Self:
        """Return a view rooted at path, with identity extended by sub_id."""
        return type(self)(self._owner, self._resolve(path), join_paths(self._id, sub_id))

    def reidfy(self, sub_id: str) -> Self:
        """Return a view on the same path, with identity extended by sub_id."""
        return type(self)(self._owner, self._path, join_paths(self._id, sub_id))


class Ref(ConstRef):
    """Read-write view on a PropStore.

    Adds to ConstRef:
    - set(path, value): typed write, never raises on a bad value
    - set_value(value): typed write of this view's own property
    - undefine(path): clear a property
    - set_record(path, record): replace a record wholesale
    - update(source): bulk load from nested dicts

    Derived views (get_subtree, reidfy, ...) are Ref instances too.
    """

    __slots__ = ()

    def set(
        self,
        path: str,
        value: Any,
        value_type: type | None = None,
        path_data: Any = None,
    ) -> None:
        """Write the property at path.

        If the converter rejects value, the record becomes undefined and
        holds the store's placeholder text. Nothing is raised.

        A None value without value_type undefines the property, keeping
        its text, like undefine(path).

        Args:
            path: Path relative to this view.
            value: Value to store, or None to undefine.
            value_type: Converter to use. Defaults to type(value).
            path_data: Optional provenance to attach to the record.

        Raises:
            UnsupportedTypeError: If the type has no converter.
        """
        if value is not None or value_type is not None:
            get_converter(value_type or type(value))
        full_path = self._resolve(path)
        owner = self._owner
        placeholder = owner.settings.invalid_placeholder
        with owner._lock:
            record = owner._get_or_create_record(full_path)
            if value is None and value_type is None:
                record.undefine()
                converted = True
            else:
                converted = record.set_as(value, value_type, placeholder)
            if path_data is not None:
                record.path_data = path_data
        if not converted:
            _logger.debug("Value %r not convertible, undefined %s", value, full_path)

    def set_value(self, value: Any, value_type: type | None = None) -> None:
        """Write this view's own property. Provenance is left untouched.

        None without value_type undefines the property, as in set().
        """
        if value is None and value_type is None:
            self.undefine()
            return
        get_converter(value_type or type(value))
        owner = self._owner
        placeholder = owner.settings.invalid_placeholder
        with owner._lock:
            converted = owner._get_or_create_record(self._path).set_as(
                value, value_type, placeholder
            )
        if not converted:
            _logger.debug("Value %r not convertible, undefined %s", value, self._path)

    def undefine(self, path: str = '') -> None:
        """Mark the property at path undefined."""
        full_path = self._resolve(path)
        owner = self._owner
        with owner._lock:
            owner._get_or_create_record(full_path).undefine()

    def set_record(self, path: str, record: PropRecord) -> None:
        """Replace the record at path with a copy of record, provenance included."""
        full_path = self._resolve(path)
        copied = record.copy()
        owner = self._owner
        with owner._lock:
            owner._put_record(full_path, copied)

    def update(self, source: dict | list, ignore_none: bool = False) -> int:
        """Set every leaf of a nested source under this view.

        Args:
            source: Either
                - dict: nested dict, keys are path segments (or dotted
                  paths); a '_value' key addresses the enclosing node
                - list: list of (path, value) tuples, values may nest
            ignore_none: If True, None leaves are skipped. Otherwise they
                undefine their property.

        Returns:
            Number of properties written.

        Raises:
            TypeError: If source is not a dict or list.
            ValueError: If a list entry is not a (path, value) tuple.
            UnsupportedTypeError: If a leaf has no converter.

        The whole source is validated before the first write. Each
        property is then written by an independent set(); the load as a
        whole is not atomic with respect to other threads.

        Example:
            >>> ref.update({'server': {'host': 'localhost', 'port': 8080}})
            2
            >>> ref.get('server.port', 0)
            8080
        """
        if not isinstance(source, (dict, list)):
            raise TypeError(
                f"source must be dict or list, not {type(source).__name__}"
            )
        leaves = [
            (path, value)
            for path, value in _flatten(source, '')
            if value is not None or not ignore_none
        ]
        for _, value in leaves:
            if value is not None:
                get_converter(type(value))
        for path, value in leaves:
            self.set(path, value)
        _logger.debug("Loaded %d properties under %r", len(leaves), self._path)
        return len(leaves)

    def as_const(self) -> ConstRef:
        """Return a read-only view with the same path and identity."""
        return ConstRef(self._owner, self._path, self._id)


def _flatten(source: dict | list, prefix: str) -> Iterator[tuple[str, Any]]:
    """Yield (path, value) for every leaf of a nested dict/list source."""
    if isinstance(source, dict):
        items = source.items()
    else:
        items = []
        for entry in source:
            if not isinstance(entry, tuple) or len(entry) != 2:
                raise ValueError(
                    f"list entries must be (path, value) tuples, got {entry!r}"
                )
            items.append(entry)

    for key, value in items:
        path = prefix if key == '_value' else join_paths(prefix, str(key))
        if isinstance(value, (dict, list)):
            yield from _flatten(value, path)
        else:
            yield path, value
