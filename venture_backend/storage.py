"""
Storage collaborator for projects, tasks and time entries.

Records cross this boundary as plain dicts keyed by their JSON field names.
``update`` takes an optional ``expect`` mapping and only applies the patch
when the stored record still matches it, which is how a timer is stopped at
most once.
"""

import copy
import itertools
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass

from venture_backend.errors import InvalidParameter
from venture_backend.models import Project, Task, TimeEntry
from venture_backend.parsing import parse_number

PROJECT_PATCHABLE = frozenset(
    {"name", "description", "status", "startDate", "endDate", "budget"}
)
# patchable fields that may not be cleared
PROJECT_REQUIRED = frozenset({"name", "status", "budget"})
PROJECT_NUMERIC = frozenset({"budget"})


def checked_patch(patch, allowed, required=frozenset(), numeric=frozenset()):
    if not isinstance(patch, dict):
        raise InvalidParameter("request body must be a JSON object")
    unknown = sorted(set(patch) - allowed)
    if unknown:
        raise InvalidParameter(f"fields cannot be updated: {', '.join(unknown)}")
    cleared = sorted(k for k in required if k in patch and patch[k] in (None, ""))
    if cleared:
        raise InvalidParameter(f"fields cannot be empty: {', '.join(cleared)}")
    checked = dict(patch)
    for key in numeric:
        if checked.get(key) is not None:
            checked[key] = parse_number(key, checked[key])
    return checked


class UuidIds:
    def __call__(self):
        return str(uuid.uuid4())


class CounterIds:
    """Sequential ids "1", "2", ... for deterministic tests."""

    def __init__(self, start=1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            return str(next(self._counter))


class Repository(ABC):
    @abstractmethod
    def list(self, **filters):
        """Records matching every filter, in insertion order."""

    @abstractmethod
    def get(self, record_id):
        """The record or None."""

    @abstractmethod
    def insert(self, fields):
        """Store a new record (``fields`` must carry its ``id``) and return it."""

    @abstractmethod
    def update(self, record_id, patch, expect=None):
        """Apply ``patch``; None when the record is missing or ``expect`` fails."""

    @abstractmethod
    def delete(self, record_id):
        """True when a record was removed."""


class MemoryRepository(Repository):
    def __init__(self):
        self._rows = {}
        self._lock = threading.Lock()

    def list(self, **filters):
        with self._lock:
            return [
                copy.deepcopy(row)
                for row in self._rows.values()
                if all(row.get(k) == v for k, v in filters.items())
            ]

    def get(self, record_id):
        with self._lock:
            row = self._rows.get(record_id)
            return copy.deepcopy(row) if row is not None else None

    def insert(self, fields):
        with self._lock:
            if fields["id"] in self._rows:
                raise InvalidParameter(f"duplicate id {fields['id']}")
            self._rows[fields["id"]] = copy.deepcopy(fields)
            return copy.deepcopy(fields)

    def update(self, record_id, patch, expect=None):
        with self._lock:
            row = self._rows.get(record_id)
            if row is None:
                return None
            if expect and any(row.get(k) != v for k, v in expect.items()):
                return None
            row.update(copy.deepcopy(patch))
            return copy.deepcopy(row)

    def delete(self, record_id):
        with self._lock:
            return self._rows.pop(record_id, None) is not None


class SqlRepository(Repository):
    def __init__(self, db, model):
        self.db = db
        self.model = model

    def _query(self, fields):
        return self.model.query.filter_by(**self.model.columns(fields))

    def list(self, **filters):
        return [row.to_dict() for row in self._query(filters).order_by(self.model.pk)]

    def get(self, record_id):
        row = self._query({"id": record_id}).first()
        return row.to_dict() if row is not None else None

    def insert(self, fields):
        row = self.model(**self.model.columns(fields))
        self.db.session.add(row)
        self.db.session.commit()
        return row.to_dict()

    def update(self, record_id, patch, expect=None):
        criteria = dict(expect or {}, id=record_id)
        if not patch:
            row = self._query(criteria).first()
            return row.to_dict() if row is not None else None
        # single UPDATE ... WHERE, so concurrent writers cannot both match
        count = self._query(criteria).update(
            self.model.columns(patch), synchronize_session=False
        )
        self.db.session.commit()
        if count != 1:
            return None
        return self.get(record_id)

    def delete(self, record_id):
        count = self._query({"id": record_id}).delete(synchronize_session=False)
        self.db.session.commit()
        return count == 1


@dataclass
class Store:
    projects: Repository
    tasks: Repository
    time_entries: Repository

    @classmethod
    def memory(cls):
        return cls(MemoryRepository(), MemoryRepository(), MemoryRepository())

    @classmethod
    def sql(cls, db):
        return cls(
            SqlRepository(db, Project),
            SqlRepository(db, Task),
            SqlRepository(db, TimeEntry),
        )
