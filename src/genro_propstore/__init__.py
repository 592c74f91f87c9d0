# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-PropStore - Thread-safe hierarchical property store.

A small library providing a shared, dotted-path addressed property
registry with typed accessors and scoped views, for the Genro ecosystem
(Genro Kyō).
"""

__version__ = "0.1.0"

from .config import PropStoreSettings
from .converters import register_converter, unregister_converter
from .exceptions import (
    BadFormatError,
    PropertyError,
    PropStoreError,
    UndefinedPropertyError,
    UnsupportedTypeError,
)
from .paths import is_simple_path, join_paths, split_first
from .record import Lookup, PropRecord
from .store import ConstRef, PropStore, Ref
from .worker import Worker

__all__ = [
    # Core classes
    "PropStore",
    "PropRecord",
    "Lookup",
    # Views
    "ConstRef",
    "Ref",
    # Path helpers
    "join_paths",
    "is_simple_path",
    "split_first",
    # Conversion
    "register_converter",
    "unregister_converter",
    # Configuration
    "PropStoreSettings",
    # Threads
    "Worker",
    # Exceptions
    "PropStoreError",
    "PropertyError",
    "UndefinedPropertyError",
    "BadFormatError",
    "UnsupportedTypeError",
]
