# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Deferred values that are computed at most once."""

from __future__ import annotations

from collections.abc import Callable
import threading
from typing import Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class LazyValue(Generic[T]):
    """A value produced by ``factory`` on first :meth:`get`, then cached.

    The factory runs under a lock, so concurrent first reads still call it
    only once. If the factory raises, nothing is cached and the next
    :meth:`get` tries again.

    Example:
        ```python
        languages = LazyValue(lambda: query_os_languages())
        languages.evaluated  # False
        languages.get()      # runs the query
        languages.get()      # cached
        ```
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._value: object = _UNSET
        self._lock = threading.Lock()

    @property
    def evaluated(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T:
        if self._value is _UNSET:
            with self._lock:
                if self._value is _UNSET:
                    self._value = self._factory()
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.evaluated:
            return f"LazyValue({self._value!r})"
        return "LazyValue(<pending>)"


def force(value: object) -> object:
    """Return the underlying value of a LazyValue, or ``value`` unchanged."""
    if isinstance(value, LazyValue):
        return value.get()
    return value
