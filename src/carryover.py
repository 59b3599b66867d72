"""Carryover: move unfinished tasks from yesterday's note to today's.

Each task is updated on its own; a failure part way leaves earlier tasks
moved and aborts the rest. The returned count is the size of the
selection, taken before any update is sent.
"""
from __future__ import annotations
from typing import List
from models import DONE, TASK_CARRIED_FROM, TASK_CARRYOVER, TASK_DAY, TASK_STATUS, Task
from store import AllOf, Checkbox, Relation, RemoteStore, RichText, Where


class CarryoverEngine:
    def __init__(self, store: RemoteStore, collection: str, done_status: str = DONE):
        self.store = store
        self.collection = collection
        self.done_status = done_status

    def open_tasks(self, note_id: str) -> List[Task]:
        where = AllOf(
            Where(TASK_DAY, 'relation', 'contains', note_id),
            Where(TASK_STATUS, 'status', 'does_not_equal', self.done_status),
        )
        # Materialized up front: relinking changes what the query matches,
        # which would shift later pages mid-iteration.
        return [Task.from_record(r) for r in self.store.query_all(self.collection, where)]

    def carry_over(self, yesterday_note_id: str, today_note_id: str, yesterday_title: str) -> int:
        tasks = self.open_tasks(yesterday_note_id)
        for task in tasks:
            self.store.update(task.id, {
                TASK_DAY: Relation((today_note_id,)),
                TASK_CARRYOVER: Checkbox(True),
                TASK_CARRIED_FROM: RichText(yesterday_title),
            })
        return len(tasks)
