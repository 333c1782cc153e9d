# contextree/bindings/notification.py
from __future__ import annotations
import weakref
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

from .names import NotificationName

if TYPE_CHECKING:
    from contextree.scope.context import Context

__all__ = ["Notification"]



@dataclass(frozen=True)
class Notification:
    """
    One posted event. Created fresh per `post` and not retained after
    delivery. The origin scope is referenced weakly: an observer holding on
    to a notification must not keep the posting scope alive.
    """
    name: NotificationName
    payload: Any = None
    _originRef: weakref.ReferenceType[Context] | None = field(default=None, repr=False, compare=False)

    @classmethod
    def make(cls, name: NotificationName, origin: Context, payload: Any = None) -> Notification:
        return cls(name=name, payload=payload, _originRef=weakref.ref(origin))

    @property
    def origin(self) -> Context | None:
        return self._originRef() if self._originRef is not None else None
