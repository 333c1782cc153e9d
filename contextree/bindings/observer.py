# contextree/bindings/observer.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING

from contextree.core.errors import ExpiredObserverError
from .names import NotificationName
from .predicates import Predicate

if TYPE_CHECKING:
    from .notification import Notification

__all__ = ["Observer"]



@dataclass(frozen=True, eq=False)
class Observer:
    notificationName: NotificationName
    deliver: Callable[[Notification], None]
    isObserving: Predicate
    isExpired: Predicate

    def notify(self, notification: Notification) -> bool:
        """
        Delivers `notification` if observing. Returns whether it was delivered.
        Raises ExpiredObserverError so the owning context can prune this observer.
        """
        if self.isExpired():
            raise ExpiredObserverError(f"Observer for {self.notificationName} has expired")
        if not self.isObserving():
            return False
        self.deliver(notification)
        return True
