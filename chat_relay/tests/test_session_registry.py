"""SessionRegistry identity semantics and thread safety."""

from __future__ import annotations

import threading

from chat_relay.base.streaming import SessionRegistry


class _Token:
    """Stand-in session; registry only cares about identity."""


def test_add_and_remove_by_identity():
    reg: SessionRegistry[_Token] = SessionRegistry()
    a, b = _Token(), _Token()
    reg.add(a)
    reg.add(b)
    assert len(reg) == 2
    assert a in reg
    assert reg.remove_all(a) == 1
    assert a not in reg
    assert reg.snapshot() == [b]


def test_duplicates_all_removed():
    reg: SessionRegistry[_Token] = SessionRegistry()
    a = _Token()
    reg.add(a)
    reg.add(a)
    assert len(reg) == 2
    assert reg.remove_all(a) == 2
    assert len(reg) == 0


def test_removing_absent_entry_is_noop():
    reg: SessionRegistry[_Token] = SessionRegistry()
    reg.add(_Token())
    assert reg.remove_all(_Token()) == 0
    assert len(reg) == 1


def test_snapshot_is_a_copy():
    reg: SessionRegistry[_Token] = SessionRegistry()
    a = _Token()
    reg.add(a)
    snap = reg.snapshot()
    snap.clear()
    assert a in reg


def test_concurrent_add_remove_leaves_registry_empty():
    reg: SessionRegistry[_Token] = SessionRegistry()
    start = threading.Barrier(8)
    failures = []

    def _worker() -> None:
        start.wait()
        for _ in range(500):
            s = _Token()
            reg.add(s)
            if reg.remove_all(s) != 1:
                failures.append(s)

    threads = [threading.Thread(target=_worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert failures == []
    assert len(reg) == 0
