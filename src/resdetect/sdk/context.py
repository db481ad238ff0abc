# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Cancellable, deadline-bounded context passed to every detector.

A :class:`DetectContext` carries an optional deadline and a cancellation
signal.  Derived contexts (:meth:`DetectContext.with_timeout`,
:meth:`DetectContext.with_cancel`) inherit both from their parent:
cancelling a parent cancels every descendant, and a child deadline never
extends past the parent's.

Detectors that block (network probes, file reads on slow mounts) should use
:meth:`DetectContext.wait` or :meth:`DetectContext.remaining` to bound their
work, and check :meth:`DetectContext.error` before starting.
"""

from __future__ import annotations

import threading
import time
from typing import List, Optional

from resdetect.errors import ContextCancelledError, ContextError, DeadlineExceededError


class DetectContext:
    """Deadline plus cancellation signal."""

    def __init__(self, deadline: Optional[float] = None, parent: Optional[DetectContext] = None) -> None:
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self.deadline = deadline
        self._parent = parent
        self._cancelled = threading.Event()
        self._children: List[DetectContext] = []
        self._lock = threading.Lock()
        if parent is not None:
            parent._add_child(self)

    @classmethod
    def background(cls) -> DetectContext:
        """A root context with no deadline that is never cancelled."""
        return cls()

    def with_timeout(self, timeout: Optional[float]) -> DetectContext:
        """Derive a child that expires *timeout* seconds from now.

        ``None`` derives a child with the parent's deadline only.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        return DetectContext(deadline=deadline, parent=self)

    def with_cancel(self) -> DetectContext:
        return DetectContext(parent=self)

    def cancel(self) -> None:
        """Cancel this context and its descendants, and detach it from its parent."""
        with self._lock:
            self._cancelled.set()
            children = list(self._children)
            self._children.clear()
        for child in children:
            child.cancel()
        if self._parent is not None:
            self._parent._remove_child(self)

    def _add_child(self, child: DetectContext) -> None:
        with self._lock:
            self._children.append(child)
            cancelled = self._cancelled.is_set()
        if cancelled:
            child.cancel()

    def _remove_child(self, child: DetectContext) -> None:
        with self._lock:
            if child in self._children:
                self._children.remove(child)

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` without a deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def error(self) -> Optional[ContextError]:
        if self._cancelled.is_set():
            return ContextCancelledError()
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return DeadlineExceededError()
        return None

    def done(self) -> bool:
        return self.error() is not None

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the context is done or *timeout* elapses.

        Returns:
            ``True`` if the context is done.
        """
        remaining = self.remaining()
        if remaining is not None:
            timeout = remaining if timeout is None else min(timeout, remaining)
        self._cancelled.wait(timeout)
        return self.done()

    def raise_if_done(self) -> None:
        err = self.error()
        if err is not None:
            raise err

    def __repr__(self) -> str:
        return f"DetectContext(remaining={self.remaining()!r}, cancelled={self._cancelled.is_set()})"


__all__ = ["DetectContext"]
