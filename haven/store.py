"""Flat document store: one JSON list per collection name.

Every collection lives in a single row of the ``collections`` table and is
always read and written as a whole. There are no partial updates and no
indices; lookups are linear scans over the list.
"""
import copy
import secrets
import threading
import time
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy.orm.attributes import flag_modified

from .extensions import db

USERS = 'users'
BATCHES = 'batches'
ENROLLMENTS = 'enrollments'
ATTENDANCE = 'attendance'
QUIZZES = 'quizzes'
RESULTS = 'results'

_locks = {}
_locks_guard = threading.Lock()


def new_id():
    return secrets.token_urlsafe(16)


def now_ms():
    return int(time.time() * 1000)


class Collection(db.Model):
    __tablename__ = 'collections'
    name = db.Column(db.String(64), primary_key=True)
    records = db.Column(db.JSON, nullable=False, default=list)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class DocumentStore:
    """Whole-collection get/set over the ``collections`` table."""

    def get(self, name):
        row = db.session.get(Collection, name)
        if row is None:
            return []
        # callers mutate the list freely, so never hand out the ORM-held one
        return copy.deepcopy(row.records)

    def set(self, name, records):
        row = db.session.get(Collection, name)
        if row is None:
            row = Collection(name=name, records=list(records))
            db.session.add(row)
        else:
            row.records = list(records)
            flag_modified(row, 'records')
        db.session.commit()


store = DocumentStore()


def _lock_for(name):
    with _locks_guard:
        if name not in _locks:
            _locks[name] = threading.Lock()
        return _locks[name]


class Repository:
    """List-all / replace-all access to one collection.

    ``mutate()`` serializes read-modify-write cycles on the same collection
    within this process. Separate processes sharing the database still race,
    and the later write wins.
    """

    def __init__(self, name, backend=None):
        self.name = name
        self.backend = backend or store

    def list_all(self):
        return self.backend.get(self.name)

    def replace_all(self, records):
        self.backend.set(self.name, records)

    def find(self, **fields):
        for record in self.list_all():
            if _matches(record, fields):
                return record
        return None

    def filter(self, **fields):
        return [r for r in self.list_all() if _matches(r, fields)]

    @contextmanager
    def mutate(self):
        with _lock_for(self.name):
            records = self.list_all()
            yield records
            self.replace_all(records)

    def append(self, record):
        with self.mutate() as records:
            records.append(record)
        return record


def _matches(record, fields):
    return all(record.get(key) == value for key, value in fields.items())


users = Repository(USERS)
batches = Repository(BATCHES)
enrollments = Repository(ENROLLMENTS)
attendance = Repository(ATTENDANCE)
quizzes = Repository(QUIZZES)
results = Repository(RESULTS)
