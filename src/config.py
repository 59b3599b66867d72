"""Configuration loaded once at startup from the environment and a .env file.

Priority: real environment variable > .env entry > default. Every missing
required variable is reported at once, before any remote call is made.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional
from datekeys import DEFAULT_TZ, resolve_tz
from errors import ConfigurationError
from models import DONE
from notion import DEFAULT_API_URL, DEFAULT_VERSION

ENV_FILE = Path('.env')

REQUIRED = {
    'token': 'NOTION_TOKEN',
    'daily_db_id': 'DAILY_DB_ID',
    'tasks_db_id': 'TASKS_DB_ID',
    'template_id': 'TEMPLATE_PAGE_ID',
}
OPTIONAL = {
    'timezone': ('DAILY_TZ', DEFAULT_TZ),
    'notion_version': ('NOTION_VERSION', DEFAULT_VERSION),
    'done_status': ('DAILY_DONE_STATUS', DONE),
    'api_url': ('NOTION_API_URL', DEFAULT_API_URL),
}


@dataclass(frozen=True)
class Config:
    token: str
    daily_db_id: str
    tasks_db_id: str
    template_id: str
    timezone: str = DEFAULT_TZ
    notion_version: str = DEFAULT_VERSION
    done_status: str = DONE
    api_url: str = DEFAULT_API_URL

    def __repr__(self) -> str:  # keep the token out of tracebacks
        return (f"Config(daily_db_id={self.daily_db_id!r}, tasks_db_id={self.tasks_db_id!r}, "
                f"template_id={self.template_id!r}, timezone={self.timezone!r})")


def read_env_file(path: Path) -> Dict[str, str]:
    """Parse KEY=VALUE lines (optionally prefixed by 'export'). Missing file -> {}."""
    if not path.exists():
        return {}
    values: Dict[str, str] = {}
    for raw_line in path.read_text(encoding='utf-8').splitlines():
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('export '):
            line = line[len('export '):].strip()
        if '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip()
        if len(v) >= 2 and v[0] == v[-1] and v[0] in {'"', "'"}:
            v = v[1:-1]
        if k:
            values[k] = v
    return values


def load_config(environ: Optional[Mapping[str, str]] = None, env_file: Optional[Path] = ENV_FILE,
                **overrides: str) -> Config:
    """Build a Config; keyword overrides (e.g. timezone=...) win over everything."""
    env = dict(read_env_file(env_file)) if env_file is not None else {}
    # Set-but-empty variables do not mask a .env value.
    env.update({k: v for k, v in (os.environ if environ is None else environ).items() if v and v.strip()})

    def get(name: str) -> str:
        return (env.get(name) or '').strip()

    values: Dict[str, str] = {}
    missing = []
    for attr, name in REQUIRED.items():
        values[attr] = get(name)
        if not values[attr]:
            missing.append(name)
    if missing:
        raise ConfigurationError('Missing required configuration:', missing=missing)
    for attr, (name, default) in OPTIONAL.items():
        values[attr] = get(name) or default
    values.update({k: v for k, v in overrides.items() if v})

    resolve_tz(values['timezone'])  # fail fast on an unknown zone
    return Config(**values)
