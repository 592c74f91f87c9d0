# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PropStore package - Thread-safe dotted-path property store.

The package is organized into:
- core: PropStore, the owner of the records and of the lock
- refs: ConstRef and Ref, the read-only and read-write scoped views

Example:
    >>> from genro_propstore import PropStore
    >>> store = PropStore()
    >>> store.root().set('config.name', 'MyApp')
    >>> store.root().get('config.name')
    'MyApp'
"""

from .core import PropStore
from .refs import ConstRef, Ref

__all__ = ["PropStore", "ConstRef", "Ref"]
