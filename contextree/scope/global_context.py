# contextree/scope/global_context.py
from __future__ import annotations

from contextree.bindings.names import BindingName, NameLedger
from .context import Context

__all__ = ["GlobalContext"]



class GlobalContext(Context):
    """
    The root scope. Besides being the top of the tree it owns the name
    ledger: every Name constructed in the process is declared here, so no
    two components can coin the same identifier for one kind.
    """
    isRoot = True

    def __init__(self, name: str = "global", *, ledger: NameLedger | None = None) -> None:
        super().__init__(name)
        self.ledger = ledger if ledger is not None else NameLedger()

    def declareUseOf(self, name: BindingName) -> None:
        self.ledger.declare(name)

    def nameIsInUse(self, name: BindingName) -> bool:
        return self.ledger.isInUse(name)
