# tests/contextree/bindings/test_names.py
from __future__ import annotations

import pytest

hypothesis = pytest.importorskip("hypothesis")
from hypothesis import HealthCheck, given, settings, strategies as st  # type: ignore[no-redef]

from contextree import (
    ExecutableName,
    FlagName,
    GlobalContext,
    NameInUseError,
    NameLedger,
    NotificationName,
    RequestableName,
    getNameLedger,
)


# ----------------------------
# Ledger through the global context
# ----------------------------

def test_sameKindTwice_scrams(root: GlobalContext) -> None:
    RequestableName("total")
    with pytest.raises(NameInUseError) as info:
        RequestableName("total")
    assert str(info.value) == "total requestables are already in use"
    assert info.value.binding == "total"


def test_sameStringAcrossKinds_isAllowed(root: GlobalContext) -> None:
    names = [
        RequestableName("refresh"),
        ExecutableName("refresh"),
        NotificationName("refresh"),
        FlagName("refresh"),
    ]
    assert len(set(names)) == 4
    assert getNameLedger() is root.ledger


def test_globalContext_reportsNamesInUse(root: GlobalContext) -> None:
    total = RequestableName("total")
    assert root.nameIsInUse(total)
    assert root.ledger.namesInUse("requestable") == frozenset({"total"})
    assert root.ledger.namesInUse("executable") == frozenset()


def test_declareUseOf_reservesNameForLaterConstruction(root: GlobalContext) -> None:
    scratch = NameLedger()
    name = FlagName("editing", ledger=scratch)

    root.declareUseOf(name)

    with pytest.raises(NameInUseError):
        FlagName("editing")


def test_emptyOrNonString_isRejected() -> None:
    with pytest.raises(ValueError):
        RequestableName("")
    with pytest.raises(ValueError):
        ExecutableName(7)  # type: ignore[arg-type]


# ----------------------------
# Value semantics
# ----------------------------

def test_equalityAndHash_followKindAndRawValue() -> None:
    ledger = NameLedger()
    other = NameLedger()
    first = RequestableName("total", ledger=ledger)
    again = RequestableName("total", ledger=other)
    executable = ExecutableName("total", ledger=ledger)

    assert first == again
    assert hash(first) == hash(again)
    assert first != executable
    assert {first: 1}[again] == 1
    assert str(first) == "total"
    assert repr(executable) == "ExecutableName('total')"


def test_nameIsNotAString() -> None:
    name = NotificationName("closed", ledger=NameLedger())
    assert name != "closed"


# Autouse fixtures are function scoped; each example builds its own ledger
@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(st.lists(st.text(min_size=1, max_size=12), min_size=1, max_size=20))
def test_ledger_acceptsEachStringOncePerKind(raw: list[str]) -> None:
    ledger = NameLedger()
    seen: set[str] = set()
    for value in raw:
        if value in seen:
            with pytest.raises(NameInUseError):
                FlagName(value, ledger=ledger)
        else:
            FlagName(value, ledger=ledger)
            seen.add(value)
    assert ledger.namesInUse("flag") == frozenset(seen)
    assert ledger.namesInUse("requestable") == frozenset()
