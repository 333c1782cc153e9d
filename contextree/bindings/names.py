# contextree/bindings/names.py
from __future__ import annotations
from typing import ClassVar, Literal

from contextree.core.errors import NameInUseError, scram

__all__ = [
    "NameKind",
    "NameLedger",
    "BindingName",
    "RequestableName",
    "ExecutableName",
    "NotificationName",
    "FlagName",
]



NameKind = Literal["requestable", "executable", "notification", "flag"]
_ALL_KINDS: tuple[NameKind, ...] = ("requestable", "executable", "notification", "flag")



class NameLedger:
    """
    Append-only record of every name string ever coined, per kind. It says
    nothing about whether a binding is currently registered; it exists so two
    unrelated components can't pick the same identifier by accident.
    """
    def __init__(self) -> None:
        self._inUse: dict[str, set[str]] = {kind: set() for kind in _ALL_KINDS}

    def declare(self, name: BindingName) -> None:
        names = self._inUse[name.kind]
        if name.rawValue in names:
            scram(NameInUseError(
                f"{name.rawValue} {name.kind}s are already in use",
                binding=name.rawValue,
            ))
        names.add(name.rawValue)

    def isInUse(self, name: BindingName) -> bool:
        return name.rawValue in self._inUse[name.kind]

    def namesInUse(self, kind: NameKind) -> frozenset[str]:
        return frozenset(self._inUse[kind])



class BindingName:
    """
    Interned identifier for one binding kind. Construct each name once,
    typically as a module constant:

        TOTAL = RequestableName("cart.total")

    Equality is structural (same kind and raw string), so the constant can be
    shared freely; constructing the same string twice fails.
    """
    __slots__ = ("rawValue",)

    kind: ClassVar[NameKind]

    def __init__(self, rawValue: str, *, ledger: NameLedger | None = None) -> None:
        if not isinstance(rawValue, str) or not rawValue:
            raise ValueError(f"{type(self).__name__} must be a non-empty string; got {rawValue!r}")
        self.rawValue = rawValue
        if ledger is None:
            from contextree.app.globals import getNameLedger
            ledger = getNameLedger()
        ledger.declare(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BindingName):
            return NotImplemented
        return self.kind == other.kind and self.rawValue == other.rawValue

    def __hash__(self) -> int:
        return hash((self.kind, self.rawValue))

    def __str__(self) -> str:
        return self.rawValue

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rawValue!r})"



class RequestableName(BindingName):
    __slots__ = ()
    kind = "requestable"



class ExecutableName(BindingName):
    __slots__ = ()
    kind = "executable"



class NotificationName(BindingName):
    __slots__ = ()
    kind = "notification"



class FlagName(BindingName):
    __slots__ = ()
    kind = "flag"
