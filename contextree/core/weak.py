# contextree/core/weak.py
from __future__ import annotations
import weakref
from collections.abc import Iterator
from typing import Generic, TypeVar

__all__ = ["WeakHandle", "WeakHandleSet"]

T = TypeVar("T")



class WeakHandle(Generic[T]):
    """
    Non-owning handle to an object. Hash and equality follow the identity of
    the referent captured at construction, so a handle can still be found
    (and removed) after its referent is gone.
    """
    __slots__ = ("_ref", "_key", "__weakref__")

    def __init__(self, value: T, callback=None) -> None:
        self._ref = weakref.ref(value, callback) if callback else weakref.ref(value)
        self._key = id(value)

    @property
    def value(self) -> T | None:
        return self._ref()

    @property
    def key(self) -> int:
        return self._key

    def isAlive(self) -> bool:
        return self._ref() is not None

    def __hash__(self) -> int:
        return self._key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeakHandle):
            return NotImplemented
        return self._key == other._key

    def __repr__(self) -> str:
        return f"WeakHandle({self._ref()!r})"



class WeakHandleSet(Generic[T]):
    """
    Insertion-ordered set of weak handles. A handle is dropped as soon as its
    referent is collected, so the set never keeps anything alive and never
    yields dead entries.
    """
    def __init__(self) -> None:
        self._handles: dict[int, WeakHandle[T]] = {}

    def _makeDropper(self):
        selfRef = weakref.ref(self)

        def _drop(ref: weakref.ref) -> None:
            owner = selfRef()
            if owner is None:
                return
            for key, handle in list(owner._handles.items()):
                if handle._ref is ref:
                    del owner._handles[key]
                    break
        return _drop

    def add(self, value: T) -> T:
        """Inserts `value` (no-op when already present) and returns it."""
        key = id(value)
        existing = self._handles.get(key)
        if existing is None or existing.value is not value:
            self._handles[key] = WeakHandle(value, self._makeDropper())
        return value

    def discard(self, value: T) -> bool:
        handle = self._handles.get(id(value))
        if handle is None or handle.value is not value:
            return False
        del self._handles[id(value)]
        return True

    def __contains__(self, value: object) -> bool:
        handle = self._handles.get(id(value))
        return handle is not None and handle.value is value

    def __iter__(self) -> Iterator[T]:
        # Snapshot: callers may add/remove while iterating
        for handle in list(self._handles.values()):
            value = handle.value
            if value is not None:
                yield value

    def __len__(self) -> int:
        return sum(1 for handle in list(self._handles.values()) if handle.isAlive())
