"""Error taxonomy for the daily note job.

Every failure propagates to the CLI, which prints it and exits non-zero.
The only expected "absence" (no note for yesterday) is a normal branch and
never an exception.
"""
from __future__ import annotations
from typing import Iterable, Optional, Tuple


class DailyError(Exception):
    """Base class for all job failures."""


class ConfigurationError(DailyError):
    def __init__(self, message: str, missing: Iterable[str] = ()):
        self.missing: Tuple[str, ...] = tuple(missing)
        if self.missing:
            message = message + ''.join(f"\n  - {name}" for name in self.missing)
        super().__init__(message)


class RemoteError(DailyError):
    """Transport or validation failure reported by the record store."""

    def __init__(self, message: str, status: Optional[int] = None, code: Optional[str] = None):
        self.status = status
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        tags = [str(x) for x in (self.status, self.code) if x is not None]
        if tags:
            return f"{base} [{' '.join(tags)}]"
        return base


class NotFoundError(RemoteError):
    pass


class SchemaError(DailyError):
    """A record came back without a field we rely on."""
