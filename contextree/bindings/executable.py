# contextree/bindings/executable.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable

from contextree.core.errors import ExpiredBindingError, UnavailableBindingError
from .names import ExecutableName
from .predicates import Predicate

__all__ = ["Executable"]



@dataclass(frozen=True, eq=False)
class Executable:
    """A named fire-and-forget action: `action()` runs on every execute."""
    name: ExecutableName
    action: Callable[[], None]
    isExecutable: Predicate
    isExpired: Predicate

    def execute(self) -> None:
        if self.isExpired():
            raise ExpiredBindingError(f"Cannot execute an expired executable named {self.name}", binding=self.name.rawValue)
        if not self.isExecutable():
            raise UnavailableBindingError(f"Cannot execute an unexecutable executable named {self.name}", binding=self.name.rawValue)
        self.action()
