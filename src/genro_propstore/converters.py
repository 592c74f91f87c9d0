# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""String conversion registry for typed property access.

Every property is stored as text. A type can be read or written through
the typed accessors only if a converter pair is registered for it:

- dumps(value) -> str
- loads(text) -> value

Converters signal failure by raising ValueError or TypeError. Lookup
walks the MRO of the requested type, so bool is found before int and
subclasses fall back to their base converter.

Example:
    >>> from decimal import Decimal
    >>> register_converter(Decimal, str, Decimal)
    >>> to_text(Decimal('1.50'))
    '1.50'
    >>> from_text('1.50', Decimal)
    Decimal('1.50')
"""

from __future__ import annotations

import re
from typing import Any, Callable, NamedTuple, TypeVar

from .exceptions import UnsupportedTypeError

T = TypeVar('T')

_INT_RE = re.compile(r'^\s*[+-]?\d+\s*$')


class Converter(NamedTuple):
    """A dumps/loads pair for one type."""

    dumps: Callable[[Any], str]
    loads: Callable[[str], Any]


def _dump_int(value: int) -> str:
    result = int(value)
    if result != value:
        raise ValueError(f"not an integral value: {value!r}")
    return str(result)


def _load_int(text: str) -> int:
    if not _INT_RE.match(text):
        raise ValueError(f"invalid integer literal: {text!r}")
    return int(text)


def _dump_float(value: float) -> str:
    if isinstance(value, (str, bytes)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return repr(float(value))


def _load_float(text: str) -> float:
    if '_' in text:
        raise ValueError(f"invalid float literal: {text!r}")
    return float(text)


def _dump_bool(value: bool) -> str:
    return 'true' if value else 'false'


_BOOL_TEXT = {'true': True, '1': True, 'false': False, '0': False}


def _load_bool(text: str) -> bool:
    try:
        return _BOOL_TEXT[text]
    except KeyError:
        raise ValueError(f"invalid boolean literal: {text!r}") from None


def _dump_str(value: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    return value


_registry: dict[type, Converter] = {
    str: Converter(_dump_str, str),
    int: Converter(_dump_int, _load_int),
    float: Converter(_dump_float, _load_float),
    bool: Converter(_dump_bool, _load_bool),
}


def register_converter(
    value_type: type[T],
    dumps: Callable[[T], str],
    loads: Callable[[str], T],
) -> None:
    """Register (or replace) the converter for value_type."""
    _registry[value_type] = Converter(dumps, loads)


def unregister_converter(value_type: type) -> None:
    """Remove the converter registered for exactly value_type, if any."""
    _registry.pop(value_type, None)


def get_converter(value_type: type) -> Converter:
    """Find the converter for value_type.

    Raises:
        UnsupportedTypeError: If neither value_type nor any of its bases
            has a registered converter.
    """
    for klass in getattr(value_type, '__mro__', (value_type,)):
        converter = _registry.get(klass)
        if converter is not None:
            return converter
    raise UnsupportedTypeError(value_type)


def to_text(value: Any, value_type: type | None = None) -> str:
    """Convert value to its stored text.

    Args:
        value: The value to convert.
        value_type: Converter to use. Defaults to type(value).

    Raises:
        UnsupportedTypeError: If no converter exists.
        ValueError, TypeError: If the converter rejects the value.
    """
    converter = get_converter(value_type or type(value))
    return converter.dumps(value)


def from_text(text: str, value_type: type[T]) -> T:
    """Parse stored text as value_type.

    Raises:
        UnsupportedTypeError: If no converter exists.
        ValueError, TypeError: If the text is not a valid value_type.
    """
    return get_converter(value_type).loads(text)
