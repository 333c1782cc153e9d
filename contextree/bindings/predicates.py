# contextree/bindings/predicates.py
from __future__ import annotations
import weakref
from typing import Any, Callable, Protocol, runtime_checkable

__all__ = [
    "Predicate",
    "HostLifecycle",
    "always",
    "never",
    "expiresWithObject",
    "hostIsActive",
    "hostIsGone",
    "hostIsInactive",
    "resolveExpiry",
]

Predicate = Callable[[], bool]



@runtime_checkable
class HostLifecycle(Protocol):
    """
    What the registry needs to know about a host object (a view, a window,
    a session...). `isActive` is required; a host may also expose `isAlive`
    to report its own teardown before it is garbage collected.
    """
    def isActive(self) -> bool: ...



def always() -> bool:
    return True



def never() -> bool:
    return False



def _weakHandle(obj: Any) -> Callable[[], Any]:
    try:
        return weakref.ref(obj)
    except TypeError as err:
        raise TypeError(
            f"{type(obj).__name__} can't be weakly referenced; bind expiry to an object that supports weakref"
        ) from err



def expiresWithObject(obj: Any) -> Predicate:
    """Expired once `obj` has been garbage collected."""
    ref = _weakHandle(obj)
    return lambda: ref() is None



def _aliveHost(ref: Callable[[], Any]) -> Any | None:
    host = ref()
    if host is None:
        return None
    isAlive = getattr(host, "isAlive", None)
    if callable(isAlive) and not isAlive():
        return None
    return host



def hostIsActive(host: HostLifecycle) -> Predicate:
    ref = _weakHandle(host)
    def _isActive() -> bool:
        alive = _aliveHost(ref)
        return alive is not None and bool(alive.isActive())
    return _isActive



def hostIsGone(host: HostLifecycle) -> Predicate:
    ref = _weakHandle(host)
    return lambda: _aliveHost(ref) is None



def hostIsInactive(host: HostLifecycle) -> Predicate:
    isActive = hostIsActive(host)
    return lambda: not isActive()



def resolveExpiry(
    isAvailable: Predicate | None,
    *,
    isExpired: Predicate | None = None,
    expiresWith: Any = None,
    ifActive: HostLifecycle | None = None,
    whileActive: HostLifecycle | None = None,
) -> tuple[Predicate, Predicate]:
    """
    Collapse the convenience forms into an (isAvailable, isExpired) pair.

      - isExpired:   explicit predicate
      - expiresWith: expired once the object is collected
      - ifActive:    available while the host is active, expired once it's gone
      - whileActive: available while the host is active, expired as soon as it isn't

    At most one expiry form may be given. The host forms supply availability
    themselves and can't be combined with an explicit availability predicate.
    """
    given = [
        key for key, value in (
            ("isExpired", isExpired),
            ("expiresWith", expiresWith),
            ("ifActive", ifActive),
            ("whileActive", whileActive),
        ) if value is not None
    ]
    if len(given) > 1:
        raise ValueError(f"Only one expiry form may be given; got {', '.join(given)}")
    for label, pred in (("availability predicate", isAvailable), ("isExpired", isExpired)):
        if pred is not None and not callable(pred):
            raise TypeError(f"{label} must be callable; got {type(pred).__name__}")

    host = ifActive if ifActive is not None else whileActive
    if host is not None:
        if isAvailable is not None:
            raise ValueError("ifActive/whileActive supply availability; don't pass one as well")
        if not isinstance(host, HostLifecycle):
            raise TypeError(f"{type(host).__name__} does not implement isActive()")
        available = hostIsActive(host)
        expired = hostIsGone(host) if ifActive is not None else hostIsInactive(host)
        return available, expired

    available = isAvailable or always
    if expiresWith is not None:
        return available, expiresWithObject(expiresWith)
    return available, isExpired or never
