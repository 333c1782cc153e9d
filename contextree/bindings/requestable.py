# contextree/bindings/requestable.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable

from contextree.core.errors import ExpiredBindingError, UnavailableBindingError
from .names import RequestableName
from .predicates import Predicate

__all__ = ["Requestable"]



@dataclass(frozen=True, eq=False)
class Requestable:
    """A named on-demand value: `server()` is called on every request."""
    name: RequestableName
    server: Callable[[], Any]
    isRequestable: Predicate
    isExpired: Predicate

    def request(self) -> Any:
        if self.isExpired():
            raise ExpiredBindingError(f"Cannot request an expired requestable named {self.name}", binding=self.name.rawValue)
        if not self.isRequestable():
            raise UnavailableBindingError(f"Cannot request an unrequestable requestable named {self.name}", binding=self.name.rawValue)
        return self.server()
