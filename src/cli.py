"""Command-line entry for the daily note job.

Exit status is 0 on success (including "nothing to carry") and 1 on any
configuration, store or schema failure, with the error on stderr.
"""
from datetime import datetime
from pathlib import Path
from typing import Optional
import click
from config import ENV_FILE, Config, load_config
from errors import ConfigurationError, DailyError
from job import DailyJob
from notion import NotionStore
from store import RemoteStore
from theme import error_text


def make_store(config: Config) -> RemoteStore:
    return NotionStore(config.token, notion_version=config.notion_version, api_url=config.api_url)


def _parse_now(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        ts = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        raise click.BadParameter(f'not an ISO-8601 timestamp: {value}')
    if ts.tzinfo is None:
        raise click.BadParameter('timestamp needs a UTC offset, e.g. 2026-02-28T09:00:00+04:00')
    return ts


@click.command(name='daily-carryover')
@click.option('--now', 'now', callback=_parse_now, metavar='TIMESTAMP',
              help='Run as if the current instant were TIMESTAMP (ISO-8601 with offset).')
@click.option('--timezone', 'tz_name', metavar='ZONE', help='Override DAILY_TZ (IANA name, UTC or +HH:MM).')
@click.option('--env-file', type=click.Path(dir_okay=False, path_type=Path), default=ENV_FILE,
              show_default=True, help='Optional KEY=VALUE file read before the environment.')
def cli(now: Optional[datetime], tz_name: Optional[str], env_file: Path) -> None:
    """Ensure today's daily note exists and carry yesterday's open tasks into it."""
    try:
        config = load_config(env_file=env_file, timezone=tz_name or '')
        DailyJob(make_store(config), config).run(now)
    except ConfigurationError as e:
        click.echo(error_text(f"Error: {e}"), err=True)
        raise SystemExit(1)
    except DailyError as e:
        click.echo(error_text(f"Error: {type(e).__name__}: {e}"), err=True)
        raise SystemExit(1)
