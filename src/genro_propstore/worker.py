# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Minimal thread launcher for store consumers.

A Worker runs its run() method once on a dedicated thread. It is the
standard way to start the threads that share a PropStore; the store
itself never calls into it.

Example:
    >>> class Counter(Worker):
    ...     def __init__(self, ref):
    ...         super().__init__()
    ...         self.ref = ref
    ...     def run(self):
    ...         for i in range(3):
    ...             self.ref.set_value(i)
    >>> w = Counter(PropStore().root().get_subtree('count'))
    >>> w.start()
    >>> w.join()
    True
    >>> w.join()
    False
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod

_logger = logging.getLogger(__name__)


class Worker(ABC):
    """A unit of work executed on its own thread.

    Subclasses implement run(). A joined worker can be started again.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name or type(self).__name__
        self._thread: threading.Thread | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, running={self.is_running()})"

    @abstractmethod
    def run(self) -> None:
        """Body of the worker, executed on the worker thread."""

    def start(self) -> None:
        """Begin executing run() on a new thread.

        Raises:
            RuntimeError: If the worker is running and not yet joined.
        """
        if self._thread is not None:
            raise RuntimeError(f"Worker {self.name!r} already started")
        self._thread = threading.Thread(target=self.run, name=self.name, daemon=True)
        self._thread.start()
        _logger.debug("Started worker %r", self.name)

    def is_running(self) -> bool:
        """True from start() until the worker has been joined."""
        return self._thread is not None

    def join(self, timeout: float | None = None) -> bool:
        """Wait for run() to complete.

        Args:
            timeout: Optional maximum wait in seconds.

        Returns:
            True if a thread was joined, False if there was nothing to join
            or the timeout expired first.
        """
        thread = self._thread
        if thread is None:
            return False
        thread.join(timeout)
        if thread.is_alive():
            return False
        self._thread = None
        return True

