"""Data models for the daily note job.

Exposes DailyNote, Task and DateKey. Notes and tasks are decoded from store
records; a record missing a field the job depends on raises SchemaError
instead of silently defaulting. The one tolerated gap is an empty note
title, which falls back to the note's ISO date.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
from errors import SchemaError
from store import Checkbox, Date, Record, Relation, RichText, Status, Title

# Property names as they appear in the workspace.
NOTE_TITLE = 'Name'
NOTE_DATE = 'Date'
TASK_DAY = 'Day'
TASK_STATUS = 'Status'
TASK_CARRYOVER = 'Carryover'
TASK_CARRIED_FROM = 'Carried From'

DONE = 'Done'


@dataclass(frozen=True)
class DateKey:
    """Calendar day in the configured timezone.

    Fields:
        iso_date: "YYYY-MM-DD"; sorts in calendar order.
        title: Display form, e.g. "2026-Feb-28 Sat".
    """
    iso_date: str
    title: str


@dataclass
class DailyNote:
    """One record per calendar day; tasks relate to it through Task.day."""
    id: str
    date: str
    title: str = ''

    @property
    def display_title(self) -> str:
        return self.title.strip() or self.date

    @classmethod
    def from_record(cls, record: Record) -> 'DailyNote':
        date = record.properties.get(NOTE_DATE)
        if not isinstance(date, Date) or not date.start:
            raise SchemaError(f'Daily note {record.id} has no {NOTE_DATE!r} date')
        title = record.properties.get(NOTE_TITLE)
        return cls(
            id=record.id,
            date=date.start[:10],
            title=title.text if isinstance(title, Title) else '',
        )

    def fields(self) -> dict:
        return {NOTE_TITLE: Title(self.title), NOTE_DATE: Date(self.date)}


@dataclass
class Task:
    """A task linked to one or more daily notes.

    Fields:
        day: Ids of the related daily notes (normally one).
        status: Workspace status name; None when unset.
        carryover: True once moved forward by the job.
        carried_from: Title of the note the task last left.
    """
    id: str
    day: Tuple[str, ...] = ()
    status: Optional[str] = None
    carryover: bool = False
    carried_from: str = ''

    @classmethod
    def from_record(cls, record: Record) -> 'Task':
        day = record.properties.get(TASK_DAY)
        if not isinstance(day, Relation):
            raise SchemaError(f'Task {record.id} has no {TASK_DAY!r} relation')
        status = record.properties.get(TASK_STATUS)
        carryover = record.properties.get(TASK_CARRYOVER)
        carried_from = record.properties.get(TASK_CARRIED_FROM)
        return cls(
            id=record.id,
            day=day.ids,
            status=status.name if isinstance(status, Status) else None,
            carryover=carryover.checked if isinstance(carryover, Checkbox) else False,
            carried_from=carried_from.text if isinstance(carried_from, RichText) else '',
        )

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, day={self.day}, status={self.status})"
