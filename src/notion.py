"""Notion-backed RemoteStore.

Uses the data-source API (Notion-Version 2025-09-03): a database id is
resolved to its first data source once, then queries and page creation
address that data source.
"""
from __future__ import annotations
from typing import Any, Dict, Iterator, List, Mapping, Optional
import requests
from errors import NotFoundError, RemoteError, SchemaError
from store import (AllOf, Checkbox, Date, Filter, Record, Relation, RemoteStore, RichText,
                   Status, Title, Unsupported, Value)

DEFAULT_API_URL = 'https://api.notion.com/v1'
DEFAULT_VERSION = '2025-09-03'
PAGE_SIZE = 100


# -------------------- encoding --------------------
def _rich(text: str) -> List[Dict[str, Any]]:
    return [{'type': 'text', 'text': {'content': text}}]


def encode_value(value: Value) -> Dict[str, Any]:
    if isinstance(value, Title):
        return {'title': _rich(value.text)}
    if isinstance(value, RichText):
        return {'rich_text': _rich(value.text)}
    if isinstance(value, Date):
        return {'date': {'start': value.start} if value.start else None}
    if isinstance(value, Relation):
        return {'relation': [{'id': rid} for rid in value.ids]}
    if isinstance(value, Status):
        return {'status': {'name': value.name} if value.name else None}
    if isinstance(value, Checkbox):
        return {'checkbox': bool(value.checked)}
    raise ValueError(f'Cannot encode {value!r}')


def encode_filter(where: Filter) -> Dict[str, Any]:
    if isinstance(where, AllOf):
        return {'and': [encode_filter(c) for c in where.clauses]}
    return {'property': where.prop, where.kind: {where.op: where.value}}


# -------------------- decoding --------------------
def _plain(parts: Optional[List[Dict[str, Any]]]) -> str:
    return ''.join(p.get('plain_text') or (p.get('text') or {}).get('content', '') for p in parts or [])


def decode_value(raw: Mapping[str, Any]) -> Value:
    kind = raw.get('type')
    if kind == 'title':
        return Title(_plain(raw.get('title')))
    if kind == 'rich_text':
        return RichText(_plain(raw.get('rich_text')))
    if kind == 'date':
        date = raw.get('date') or {}
        return Date(date.get('start'))
    if kind == 'relation':
        return Relation(tuple(r['id'] for r in raw.get('relation') or [] if r.get('id')))
    if kind == 'status':
        status = raw.get('status') or {}
        return Status(status.get('name'))
    if kind == 'checkbox':
        return Checkbox(bool(raw.get('checkbox')))
    return Unsupported(str(kind))


def decode_page(page: Mapping[str, Any]) -> Record:
    page_id = page.get('id')
    props = page.get('properties')
    if not page_id or not isinstance(props, Mapping):
        raise SchemaError(f'Malformed page object: missing id or properties ({page.get("object")})')
    return Record(id=str(page_id), properties={name: decode_value(raw) for name, raw in props.items()})


# -------------------- adapter --------------------
class _Query:
    """Lazily paginated query; every iteration starts from the first page."""

    def __init__(self, store: 'NotionStore', collection: str, where: Filter, page_size: int = PAGE_SIZE):
        self._store = store
        self._collection = collection
        self._where = where
        self._page_size = page_size

    def __iter__(self) -> Iterator[Record]:
        source = self._store.data_source_id(self._collection)
        body: Dict[str, Any] = {'filter': encode_filter(self._where), 'page_size': self._page_size}
        while True:
            data = self._store._request('POST', f'data_sources/{source}/query', body)
            for page in data.get('results') or []:
                yield decode_page(page)
            cursor = data.get('next_cursor')
            if not data.get('has_more') or not cursor:
                return
            body = dict(body, start_cursor=cursor)


class NotionStore(RemoteStore):
    def __init__(self, token: str, notion_version: str = DEFAULT_VERSION, api_url: str = DEFAULT_API_URL,
                 session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {token}',
            'Notion-Version': notion_version,
            'Content-Type': 'application/json',
        })
        self._sources: Dict[str, str] = {}

    # ---- transport ----
    def _request(self, method: str, path: str, body: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        url = f'{self.api_url}/{path}'
        try:
            resp = self.session.request(method, url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteError(f'{method} {path} failed: {e}', code='transport') from e
        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not resp.ok:
            code = data.get('code') if isinstance(data, dict) else None
            message = (data.get('message') if isinstance(data, dict) else None) or resp.reason or 'request failed'
            if resp.status_code == 404 or code == 'object_not_found':
                raise NotFoundError(f'{method} {path}: {message}', status=resp.status_code, code=code)
            raise RemoteError(f'{method} {path}: {message}', status=resp.status_code, code=code)
        if not isinstance(data, dict):
            raise RemoteError(f'{method} {path}: unexpected response body', status=resp.status_code)
        return data

    def data_source_id(self, database_id: str) -> str:
        if database_id not in self._sources:
            db = self._request('GET', f'databases/{database_id}')
            sources = db.get('data_sources') or []
            if not sources or not sources[0].get('id'):
                raise SchemaError(f'No data_sources found for database {database_id}')
            self._sources[database_id] = sources[0]['id']
        return self._sources[database_id]

    # ---- RemoteStore ----
    def query_one(self, collection: str, where: Filter) -> Optional[Record]:
        return next(iter(_Query(self, collection, where, page_size=1)), None)

    def query_all(self, collection: str, where: Filter) -> _Query:
        return _Query(self, collection, where)

    def create(self, collection: str, fields: Mapping[str, Value],
               template: Optional[str] = None, children: Optional[List[Dict[str, Any]]] = None) -> Record:
        self._check_create_args(template, children)
        body: Dict[str, Any] = {
            'parent': {'type': 'data_source_id', 'data_source_id': self.data_source_id(collection)},
            'properties': {name: encode_value(v) for name, v in fields.items()},
        }
        if template:
            body['template'] = {'type': 'template_id', 'template_id': template}
        elif children:
            body['children'] = children
        return decode_page(self._request('POST', 'pages', body))

    def update(self, record_id: str, fields: Mapping[str, Value]) -> Record:
        body = {'properties': {name: encode_value(v) for name, v in fields.items()}}
        return decode_page(self._request('PATCH', f'pages/{record_id}', body))
