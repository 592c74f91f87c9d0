# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PropStore exceptions."""

from __future__ import annotations


class PropStoreError(Exception):
    """Base exception for PropStore errors."""

    pass


class PropertyError(PropStoreError):
    """Raised by strict reads that cannot produce a value.

    Attributes:
        path: The fully resolved dotted path of the property.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{message}{path}")
        self.path = path


class UndefinedPropertyError(PropertyError, LookupError):
    """Raised when a property has never been set or has been undefined."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "Undefined property: ")


class BadFormatError(PropertyError, ValueError):
    """Raised when a defined property cannot be converted to the requested type."""

    def __init__(self, path: str, value_type: type) -> None:
        super().__init__(path, f"Bad format for {value_type.__name__} property: ")
        self.value_type = value_type


class UnsupportedTypeError(PropStoreError, TypeError):
    """Raised when no converter is registered for a value type."""

    def __init__(self, value_type: type) -> None:
        super().__init__(
            f"No converter registered for type '{getattr(value_type, '__name__', value_type)}'"
        )
        self.value_type = value_type
