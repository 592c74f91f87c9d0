# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Configuration settings using Pydantic Settings.

Usage:
    from genro_propstore import PropStore, PropStoreSettings

    # Load from environment variables (PROPSTORE_*)
    store = PropStore()

    # Or override with explicit values
    store = PropStore(settings=PropStoreSettings(materialize_on_read=False))
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from .record import INVALID_PLACEHOLDER


class PropStoreSettings(BaseSettings):  # type: ignore[misc]
    """Behavior switches of a PropStore.

    Attributes:
        invalid_placeholder: Text stored when a typed write fails to
            convert. The record is left undefined either way.
        materialize_on_read: If True, a read that misses inserts an
            undefined record at the path, so it shows up in listings
            with include_undefined. If False, reads never modify the store.

    Environment Variables:
        PROPSTORE_INVALID_PLACEHOLDER
        PROPSTORE_MATERIALIZE_ON_READ
    """

    model_config = SettingsConfigDict(
        env_prefix="PROPSTORE_",
        extra="ignore",
        frozen=True,
    )

    invalid_placeholder: str = INVALID_PLACEHOLDER
    materialize_on_read: bool = True
