# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""One-time computation gate shared by many callers.

:class:`OnceResult` runs a function at most once per instance.  The first
caller computes; every other caller, whether it arrives during or after the
computation, blocks on a condition variable until the single result is
stored and then receives that same result.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class OnceResult(Generic[T]):
    """Mutex + completion flag + condition variable."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._started = False
        self._done = False
        self._value: Optional[T] = None
        self._error: Optional[BaseException] = None

    @property
    def done(self) -> bool:
        with self._cond:
            return self._done

    def do(self, fn: Callable[[], T]) -> Tuple[Optional[T], Optional[BaseException]]:
        """Run *fn* if no caller has yet, then return the stored outcome.

        Returns:
            ``(value, None)`` when *fn* returned, ``(None, exc)`` when it
            raised.  Every caller sees the same pair, except that the
            computing caller re-raises a ``BaseException`` such as
            ``KeyboardInterrupt`` instead of returning it.
        """
        with self._cond:
            compute = not self._started
            self._started = True
            if not compute:
                while not self._done:
                    self._cond.wait()
                return self._value, self._error

        value: Optional[T] = None
        error: Optional[BaseException] = None
        try:
            value = fn()
        except Exception as exc:
            error = exc
        except BaseException as exc:
            # interrupts still propagate; waiters observe them as the stored error
            error = exc
            raise
        finally:
            with self._cond:
                self._value = value
                self._error = error
                self._done = True
                self._cond.notify_all()
        return value, error


__all__ = ["OnceResult"]
