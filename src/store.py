"""Record store abstraction: typed property values, filters, adapters.

Decisions:
- Property values are small frozen dataclasses so the Notion adapter can
  encode them without a separate schema and the in-memory store can compare
  them directly.
- Filters evaluate themselves against a Record; the Notion adapter instead
  serializes them to the API's filter JSON.
- Adapters never retry. Errors surface as RemoteError / NotFoundError.
"""
from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union
from errors import NotFoundError


# -------------------- property values --------------------
@dataclass(frozen=True)
class Title:
    text: str = ''


@dataclass(frozen=True)
class RichText:
    text: str = ''


@dataclass(frozen=True)
class Date:
    start: Optional[str] = None  # YYYY-MM-DD


@dataclass(frozen=True)
class Relation:
    ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Status:
    name: Optional[str] = None


@dataclass(frozen=True)
class Checkbox:
    checked: bool = False


@dataclass(frozen=True)
class Unsupported:
    kind: str


Value = Union[Title, RichText, Date, Relation, Status, Checkbox, Unsupported]


@dataclass
class Record:
    id: str
    properties: Dict[str, Value] = field(default_factory=dict)
    template: Optional[str] = None  # set only by MemoryStore


# -------------------- filters --------------------
def _comparable(value: Optional[Value]) -> Any:
    if isinstance(value, (Title, RichText)):
        return value.text
    if isinstance(value, Date):
        return value.start
    if isinstance(value, Status):
        return value.name
    if isinstance(value, Checkbox):
        return value.checked
    if isinstance(value, Relation):
        return value.ids
    return None


@dataclass(frozen=True)
class Where:
    """Single-property condition, e.g. Where('Date', 'date', 'equals', '2026-02-28')."""
    prop: str
    kind: str
    op: str
    value: Any

    def matches(self, record: Record) -> bool:
        actual = _comparable(record.properties.get(self.prop))
        if self.op == 'equals':
            return actual == self.value
        if self.op == 'does_not_equal':
            return actual != self.value
        if self.op == 'contains':
            return actual is not None and self.value in actual
        raise ValueError(f'Unsupported filter op: {self.op}')


class AllOf:
    def __init__(self, *clauses: Where):
        self.clauses: Tuple[Where, ...] = clauses

    def matches(self, record: Record) -> bool:
        return all(c.matches(record) for c in self.clauses)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"AllOf{self.clauses!r}"


Filter = Union[Where, AllOf]


# -------------------- adapters --------------------
class RemoteStore:
    """Query/create/update contract over a record store.

    Collections are addressed by the identifier the backing store uses.
    Implementations perform exactly one remote call per operation (plus
    pagination) and never retry.
    """

    def query_one(self, collection: str, where: Filter) -> Optional[Record]:
        raise NotImplementedError

    def query_all(self, collection: str, where: Filter) -> Iterable[Record]:
        """Every match. Iterating the result again re-runs the query."""
        raise NotImplementedError

    def create(self, collection: str, fields: Mapping[str, Value],
               template: Optional[str] = None, children: Optional[List[Dict[str, Any]]] = None) -> Record:
        raise NotImplementedError

    def update(self, record_id: str, fields: Mapping[str, Value]) -> Record:
        raise NotImplementedError

    @staticmethod
    def _check_create_args(template: Optional[str], children: Optional[List[Dict[str, Any]]]) -> None:
        # The store applies template content itself; mixing both is rejected upstream.
        if template and children:
            raise ValueError('children cannot be supplied together with a template')


class _MemoryQuery:
    def __init__(self, store: 'MemoryStore', collection: str, where: Filter):
        self._store = store
        self._collection = collection
        self._where = where

    def __iter__(self) -> Iterator[Record]:
        for record in list(self._store.collections.get(self._collection, [])):
            if self._where.matches(record):
                yield record


class MemoryStore(RemoteStore):
    """In-process store keyed by collection name. Insertion order is query order."""

    def __init__(self, collections: Optional[Mapping[str, Iterable[Record]]] = None):
        self.collections: Dict[str, List[Record]] = {}
        self.calls: List[Tuple[str, str]] = []
        for name, records in (collections or {}).items():
            self.collections[name] = list(records)

    def add(self, collection: str, record_id: Optional[str] = None, **fields: Value) -> Record:
        """Seed a record directly (no call is recorded)."""
        record = Record(id=record_id or uuid.uuid4().hex, properties=dict(fields))
        self.collections.setdefault(collection, []).append(record)
        return record

    def get(self, record_id: str) -> Record:
        for records in self.collections.values():
            for record in records:
                if record.id == record_id:
                    return record
        raise NotFoundError(f'Record {record_id} not found', status=404, code='object_not_found')

    def query_one(self, collection: str, where: Filter) -> Optional[Record]:
        self.calls.append(('query', collection))
        return next(iter(_MemoryQuery(self, collection, where)), None)

    def query_all(self, collection: str, where: Filter) -> Iterable[Record]:
        self.calls.append(('query', collection))
        return _MemoryQuery(self, collection, where)

    def create(self, collection: str, fields: Mapping[str, Value],
               template: Optional[str] = None, children: Optional[List[Dict[str, Any]]] = None) -> Record:
        self._check_create_args(template, children)
        self.calls.append(('create', collection))
        record = Record(id=uuid.uuid4().hex, properties=dict(fields), template=template)
        self.collections.setdefault(collection, []).append(record)
        return record

    def update(self, record_id: str, fields: Mapping[str, Value]) -> Record:
        record = self.get(record_id)
        self.calls.append(('update', record_id))
        record.properties.update(fields)
        return record
