# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PropStore record class."""

from __future__ import annotations

from typing import Any, NamedTuple

from .converters import from_text, get_converter

INVALID_PLACEHOLDER = '<invalid>'


class Lookup(NamedTuple):
    """Result of a typed record read.

    Attributes:
        value: The converted value, or None if undefined or unparsable.
        defined: Whether the record was defined, even if parsing failed.
    """

    value: Any
    defined: bool


class PropRecord:
    """One stored property.

    Each record has:
    - value: The textual representation of the property
    - defined: True iff a value has been set and not since undefined
    - path_data: Opaque provenance data, never interpreted by the store

    Readers must check `defined`; an undefined record may still carry
    stale text.

    Example:
        >>> rec = PropRecord()
        >>> rec.defined
        False
        >>> rec.set_as(8080)
        True
        >>> rec.value, rec.defined
        ('8080', True)
        >>> rec.get_as(int)
        Lookup(value=8080, defined=True)
    """

    __slots__ = ('value', 'defined', 'path_data')

    def __init__(
        self,
        value: str = '',
        defined: bool = False,
        path_data: Any = None,
    ) -> None:
        """Initialize a PropRecord.

        Args:
            value: Stored text.
            defined: Whether the text is meaningful.
            path_data: Optional provenance of the value.
        """
        self.value = value
        self.defined = defined
        self.path_data = path_data

    def __repr__(self) -> str:
        state = 'defined' if self.defined else 'undefined'
        return f"PropRecord({self.value!r}, {state})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropRecord):
            return NotImplemented
        return (
            self.value == other.value
            and self.defined == other.defined
            and self.path_data == other.path_data
        )

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> PropRecord:
        """Return a shallow copy (path_data is shared, not copied)."""
        return PropRecord(self.value, self.defined, self.path_data)

    def set_value(self, text: str, path_data: Any = None) -> None:
        """Store raw text and mark the record defined.

        Args:
            text: The text to store.
            path_data: If not None, replaces the record provenance.
        """
        self.value = text
        self.defined = True
        if path_data is not None:
            self.path_data = path_data

    def undefine(self) -> None:
        """Mark the record undefined. The text is kept but meaningless."""
        self.defined = False

    def get_as(self, value_type: type) -> Lookup:
        """Convert the stored text to value_type.

        Never raises on bad text: an unparsable value yields
        Lookup(None, True).

        Raises:
            UnsupportedTypeError: If value_type has no converter.
        """
        if not self.defined:
            return Lookup(None, False)
        try:
            return Lookup(from_text(self.value, value_type), True)
        except (ValueError, TypeError):
            return Lookup(None, True)

    def set_as(
        self,
        value: Any,
        value_type: type | None = None,
        placeholder: str = INVALID_PLACEHOLDER,
    ) -> bool:
        """Convert value to text and store it.

        A value the converter rejects leaves the record undefined with
        `placeholder` as its text.

        Args:
            value: The value to store.
            value_type: Converter to use. Defaults to type(value).
            placeholder: Text stored on conversion failure.

        Returns:
            True if the conversion succeeded.

        Raises:
            UnsupportedTypeError: If there is no converter for the type.
        """
        converter = get_converter(value_type or type(value))
        try:
            text = converter.dumps(value)
        except (ValueError, TypeError):
            self.value = placeholder
            self.defined = False
            return False
        self.value = text
        self.defined = True
        return True
