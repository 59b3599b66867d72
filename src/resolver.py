"""Find-or-create for the one daily note per calendar date.

Idempotence rests on the lookup before creation; the store itself has no
uniqueness constraint, so two overlapping runs can both create a note.
If a date ever maps to several notes the first match wins.
"""
from __future__ import annotations
from typing import Optional, Tuple
from models import NOTE_DATE, DailyNote
from store import RemoteStore, Where


class DailyNoteResolver:
    def __init__(self, store: RemoteStore, collection: str, template: Optional[str] = None):
        self.store = store
        self.collection = collection
        self.template = template

    def find_daily_note(self, iso_date: str) -> Optional[DailyNote]:
        record = self.store.query_one(self.collection, Where(NOTE_DATE, 'date', 'equals', iso_date))
        if record is None:
            return None
        return DailyNote.from_record(record)

    def ensure_daily_note(self, iso_date: str, title: str) -> Tuple[DailyNote, bool]:
        """Return (note, created). Creates the note from the template when absent."""
        existing = self.find_daily_note(iso_date)
        if existing is not None:
            return existing, False
        fields = DailyNote(id='', date=iso_date, title=title).fields()
        record = self.store.create(self.collection, fields, template=self.template)
        note = DailyNote.from_record(record)
        return note, True
