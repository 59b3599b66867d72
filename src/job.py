"""Daily run: make sure today's note exists, then carry yesterday's open tasks.

Steps run strictly in order with one store call in flight at a time.
A missing note for yesterday ends the run successfully with nothing carried.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional
import click
from carryover import CarryoverEngine
from config import Config
from datekeys import date_key_for, resolve_tz, yesterday_of
from models import DailyNote, DateKey
from resolver import DailyNoteResolver
from store import RemoteStore
from theme import CARRIED_COLOR, CREATED_COLOR, EXISTS_COLOR, SKIPPED_COLOR, color


@dataclass(frozen=True)
class RunResult:
    today: DailyNote
    created: bool
    carried: int = 0
    yesterday: Optional[DateKey] = None
    yesterday_note: Optional[DailyNote] = None


class DailyJob:
    def __init__(self, store: RemoteStore, config: Config, echo: Callable[[str], None] = click.echo):
        self.config = config
        self.tz = resolve_tz(config.timezone)
        self.notes = DailyNoteResolver(store, config.daily_db_id, template=config.template_id)
        self.carryover = CarryoverEngine(store, config.tasks_db_id, done_status=config.done_status)
        self.echo = echo

    def run(self, now: Optional[datetime] = None) -> RunResult:
        now = now or datetime.now(timezone.utc)
        today = date_key_for(now, self.tz)

        note, created = self.notes.ensure_daily_note(today.iso_date, today.title)
        if created:
            self.echo(color(f"Created today: {today.title}", CREATED_COLOR))
        else:
            self.echo(color(f"Today exists: {today.title}", EXISTS_COLOR))

        yesterday = date_key_for(yesterday_of(now), self.tz)
        prev = self.notes.find_daily_note(yesterday.iso_date)
        if prev is None:
            self.echo(color("No yesterday page found, skipping carryover.", SKIPPED_COLOR))
            return RunResult(today=note, created=created, yesterday=yesterday)

        carried = self.carryover.carry_over(prev.id, note.id, prev.display_title)
        self.echo(color(f"Carried over tasks: {carried}", CARRIED_COLOR))
        return RunResult(today=note, created=created, carried=carried, yesterday=yesterday, yesterday_note=prev)
