"""In-memory stand-ins for the Firestore client and a GCS bucket.

Only the calls the jobs make are implemented: collection/document paths,
chained FieldFilter queries with limit, write batches, update with the
DELETE_FIELD / SERVER_TIMESTAMP sentinels, and collection.add.
"""
from datetime import datetime, timezone

import pytest
from google.api_core import exceptions as gcs_exceptions
from google.cloud import firestore

SERVER_NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _resolve(value):
    if value is firestore.SERVER_TIMESTAMP:
        return SERVER_NOW
    return value


class DummySnapshot:
    def __init__(self, ref, data):
        self.reference = ref
        self._data = dict(data)

    @property
    def id(self):
        return self.reference.id

    def to_dict(self):
        return dict(self._data)


class DummyDocRef:
    def __init__(self, db, path):
        self._db = db
        self.path = path

    @property
    def id(self):
        return self.path.rsplit('/', 1)[1]

    def collection(self, name):
        return DummyCollection(self._db, f"{self.path}/{name}")

    def set(self, data):
        self._db.docs[self.path] = {k: _resolve(v) for k, v in data.items()}

    def get(self):
        return DummySnapshot(self, self._db.docs.get(self.path, {}))

    def update(self, data):
        if self.path in self._db.fail_updates:
            raise gcs_exceptions.ServiceUnavailable(f'update of {self.path} failed')
        if self.path not in self._db.docs:
            raise gcs_exceptions.NotFound(f'No document to update: {self.path}')
        doc = self._db.docs[self.path]
        for key, value in data.items():
            if value is firestore.DELETE_FIELD:
                doc.pop(key, None)
            else:
                doc[key] = _resolve(value)
        self._db.updates.append((self.path, dict(data)))

    def delete(self):
        self._db.docs.pop(self.path, None)


_OPS = {
    '==': lambda a, b: a == b,
    '<=': lambda a, b: a <= b,
    '<': lambda a, b: a < b,
    '>=': lambda a, b: a >= b,
    '>': lambda a, b: a > b,
}


class DummyQuery:
    def __init__(self, coll, filters=(), limit=None):
        self._coll = coll
        self._filters = list(filters)
        self._limit = limit

    def where(self, filter=None):
        return DummyQuery(self._coll, self._filters + [filter], self._limit)

    def limit(self, n):
        return DummyQuery(self._coll, self._filters, n)

    def _matches(self, data):
        for f in self._filters:
            if f.field_path not in data:
                return False
            try:
                if not _OPS[f.op_string](data[f.field_path], f.value):
                    return False
            except TypeError:
                return False
        return True

    def stream(self):
        db = self._coll._db
        db.queries.append(self._coll.path)
        results = []
        for path in sorted(db.docs):
            parent, _ = path.rsplit('/', 1)
            if parent != self._coll.path:
                continue
            if self._matches(db.docs[path]):
                results.append(DummySnapshot(DummyDocRef(db, path), db.docs[path]))
            if self._limit is not None and len(results) >= self._limit:
                break
        return iter(results)


class DummyCollection(DummyQuery):
    def __init__(self, db, path):
        self._db = db
        self.path = path
        super().__init__(self)

    def document(self, doc_id=None):
        if doc_id is None:
            self._db.auto_id += 1
            doc_id = f"auto{self._db.auto_id}"
        return DummyDocRef(self._db, f"{self.path}/{doc_id}")

    def add(self, data):
        ref = self.document()
        ref.set(data)
        return SERVER_NOW, ref


class DummyBatch:
    def __init__(self, db):
        self._db = db
        self._refs = []

    def delete(self, ref):
        self._refs.append(ref)

    def commit(self):
        if len(self._refs) > 500:
            raise gcs_exceptions.InvalidArgument('maximum 500 writes allowed per request')
        for ref in self._refs:
            ref.delete()
        self._db.commits.append(len(self._refs))


class DummyFirestoreClient:
    def __init__(self):
        self.docs = {}
        self.auto_id = 0
        self.commits = []
        self.updates = []
        self.queries = []
        self.fail_updates = set()
        self.server_now = SERVER_NOW

    def collection(self, name):
        return DummyCollection(self, name)

    def batch(self):
        return DummyBatch(self)

    # test helpers
    def add_stream(self, stream_id, children=None, **fields):
        self.docs[f"live_streams/{stream_id}"] = dict(fields)
        for name, count in (children or {}).items():
            for i in range(count):
                self.docs[f"live_streams/{stream_id}/{name}/{name[:-1]}{i:04d}"] = {'n': i}

    def stream(self, stream_id):
        return self.docs.get(f"live_streams/{stream_id}")

    def child_count(self, stream_id, name=None):
        prefix = f"live_streams/{stream_id}/"
        if name:
            prefix += f"{name}/"
        return sum(1 for p in self.docs if p.startswith(prefix))

    def collection_docs(self, name):
        return [d for p, d in self.docs.items() if p.rsplit('/', 1)[0] == name]


class DummyBlob:
    def __init__(self, bucket, name, size=None):
        self._bucket = bucket
        self.name = name
        self.size = size

    def delete(self):
        self._bucket.delete_attempts.append(self.name)
        if self.name in self._bucket.fail_deletes:
            raise gcs_exceptions.Forbidden(f'permission denied for {self.name}')
        if self.name not in self._bucket.blobs:
            raise gcs_exceptions.NotFound(f'No such object: {self.name}')
        del self._bucket.blobs[self.name]


class DummyBucket:
    def __init__(self, blobs=None):
        self.blobs = dict(blobs or {})
        self.delete_attempts = []
        self.fail_deletes = set()
        self.list_error = None

    def blob(self, name):
        return DummyBlob(self, name, self.blobs.get(name))

    def list_blobs(self, prefix=None):
        if self.list_error:
            raise self.list_error
        return iter([
            DummyBlob(self, name, size)
            for name, size in sorted(self.blobs.items())
            if prefix is None or name.startswith(prefix)
        ])


@pytest.fixture
def db():
    return DummyFirestoreClient()


@pytest.fixture
def bucket():
    return DummyBucket()
