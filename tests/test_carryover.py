from __future__ import annotations

import unittest

from carryover import CarryoverEngine
from errors import RemoteError
from store import Checkbox, MemoryStore, Relation, RichText, Status


class _FlakyStore(MemoryStore):
    """Fails the nth update call."""

    def __init__(self, fail_on: int):
        super().__init__()
        self.fail_on = fail_on
        self.updates = 0

    def update(self, record_id, fields):
        self.updates += 1
        if self.updates == self.fail_on:
            raise RemoteError("rate limited", status=429, code="rate_limited")
        return super().update(record_id, fields)


def _task(store: MemoryStore, day: str, status):
    return store.add("tasks", Day=Relation((day,)), Status=Status(status),
                     Carryover=Checkbox(False), **{"Carried From": RichText("")})


class TestCarryoverEngine(unittest.TestCase):
    def test_only_done_tasks_carries_nothing(self) -> None:
        store = MemoryStore()
        _task(store, "y", "Done")
        _task(store, "y", "Done")
        count = CarryoverEngine(store, "tasks").carry_over("y", "t", "2026-Feb-27 Fri")
        self.assertEqual(count, 0)
        self.assertFalse([c for c in store.calls if c[0] == "update"])

    def test_open_tasks_move_to_today(self) -> None:
        store = MemoryStore()
        open_tasks = [_task(store, "y", s) for s in ("Todo", "In progress", None)]
        done = _task(store, "y", "Done")
        other = _task(store, "older", "Todo")
        count = CarryoverEngine(store, "tasks").carry_over("y", "t", "2026-Feb-27 Fri")
        self.assertEqual(count, 3)
        for rec in open_tasks:
            self.assertEqual(rec.properties["Day"], Relation(("t",)))
            self.assertEqual(rec.properties["Carryover"], Checkbox(True))
            self.assertEqual(rec.properties["Carried From"], RichText("2026-Feb-27 Fri"))
        self.assertEqual(done.properties["Day"], Relation(("y",)))
        self.assertEqual(other.properties["Day"], Relation(("older",)))

    def test_relation_is_replaced_not_appended(self) -> None:
        store = MemoryStore()
        rec = store.add("tasks", Day=Relation(("y", "z")), Status=Status("Todo"))
        CarryoverEngine(store, "tasks").carry_over("y", "t", "Y")
        self.assertEqual(rec.properties["Day"], Relation(("t",)))

    def test_custom_done_status(self) -> None:
        store = MemoryStore()
        _task(store, "y", "Complete")
        kept = _task(store, "y", "Done")
        count = CarryoverEngine(store, "tasks", done_status="Complete").carry_over("y", "t", "Y")
        self.assertEqual(count, 1)
        self.assertEqual(kept.properties["Day"], Relation(("t",)))

    def test_second_pass_finds_nothing(self) -> None:
        store = MemoryStore()
        _task(store, "y", "Todo")
        engine = CarryoverEngine(store, "tasks")
        self.assertEqual(engine.carry_over("y", "t", "Y"), 1)
        self.assertEqual(engine.carry_over("y", "t", "Y"), 0)

    def test_failure_aborts_remaining_and_keeps_earlier_updates(self) -> None:
        store = _FlakyStore(fail_on=2)
        first, second, third = (_task(store, "y", "Todo") for _ in range(3))
        with self.assertRaises(RemoteError):
            CarryoverEngine(store, "tasks").carry_over("y", "t", "Y")
        self.assertEqual(first.properties["Day"], Relation(("t",)))
        self.assertEqual(second.properties["Day"], Relation(("y",)))
        self.assertEqual(third.properties["Day"], Relation(("y",)))


if __name__ == "__main__":
    unittest.main(verbosity=2)
