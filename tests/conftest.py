import copy
import uuid
from types import SimpleNamespace

import pytest
from supabase import AuthError, PostgrestAPIError, StorageException


class FakeQuery:
    """Chainable stand-in for the PostgREST request builder."""

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.op = 'select'
        self.payload = None
        self.filters = []
        self.orders = []
        self.limit_to = None

    def select(self, columns='*'):
        self.op = 'select'
        return self

    def insert(self, payload):
        self.op, self.payload = 'insert', payload
        return self

    def update(self, payload):
        self.op, self.payload = 'update', payload
        return self

    def upsert(self, payload):
        self.op, self.payload = 'upsert', payload
        return self

    def delete(self):
        self.op = 'delete'
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) >= value)
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def limit(self, count):
        self.limit_to = count
        return self

    def _matches(self, row):
        return all(check(row) for check in self.filters)

    def execute(self):
        self.client.calls.append((self.table, self.op))
        failure = self.client.failures.get((self.table, self.op)) or self.client.failures.get((self.table, None))
        if failure:
            raise PostgrestAPIError({'message': failure, 'code': 'XX000', 'hint': None, 'details': None})

        rows = self.client.tables.setdefault(self.table, [])
        if self.op == 'select':
            found = [copy.deepcopy(row) for row in rows if self._matches(row)]
            for column, desc in reversed(self.orders):
                found.sort(key=lambda row: (row.get(column) is None, row.get(column)), reverse=desc)
            if self.limit_to is not None:
                found = found[:self.limit_to]
            return SimpleNamespace(data=found)

        if self.op == 'insert':
            row = dict(self.payload)
            row.setdefault('id', uuid.uuid4().hex)
            row.setdefault('created_at', '2026-01-01T00:00:00+00:00')
            rows.append(row)
            self.client.writes.append((self.table, 'insert', dict(self.payload)))
            return SimpleNamespace(data=[row])

        if self.op == 'upsert':
            self.client.writes.append((self.table, 'upsert', dict(self.payload)))
            key = self.payload.get('id')
            for row in rows:
                if key is not None and row.get('id') == key:
                    row.update(self.payload)
                    return SimpleNamespace(data=[row])
            row = dict(self.payload)
            row.setdefault('id', uuid.uuid4().hex)
            rows.append(row)
            return SimpleNamespace(data=[row])

        if self.op == 'update':
            self.client.writes.append((self.table, 'update', dict(self.payload)))
            changed = [row for row in rows if self._matches(row)]
            for row in changed:
                row.update(self.payload)
            return SimpleNamespace(data=changed)

        if self.op == 'delete':
            self.client.writes.append((self.table, 'delete', None))
            kept = [row for row in rows if not self._matches(row)]
            removed = len(rows) - len(kept)
            rows[:] = kept
            return SimpleNamespace(data=[None] * removed)

        raise AssertionError(f'unexpected op {self.op}')


class FakeBucket:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def create_signed_url(self, path, expires_in):
        self.client.signed.append((self.name, path, expires_in))
        if path in self.client.missing_objects:
            raise StorageException({'message': 'Object not found', 'statusCode': 400})
        return {'signedURL': f'https://cdn.test/{self.name}/{path}?token=t&ttl={expires_in}'}

    def upload(self, path, file, file_options=None):
        if self.client.upload_error:
            raise StorageException({'message': self.client.upload_error, 'statusCode': 400})
        self.client.uploads.append((self.name, path, file, file_options))
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f'https://cdn.test/public/{self.name}/{path}'


class FakeStorage:
    def __init__(self, client):
        self.client = client

    def from_(self, bucket):
        return FakeBucket(self.client, bucket)


class FakeAuth:
    """Password auth with a fixed set of users; tokens rotate on demand."""

    def __init__(self):
        self.users = {}
        self.sessions = {}
        self.rotations = {}
        self.signed_out = 0

    def add_user(self, user_id, email, password):
        self.users[email] = (SimpleNamespace(id=user_id, email=email), password)

    def _session(self, user, access_token=None):
        access_token = access_token or f'access-{uuid.uuid4().hex[:8]}'
        session = SimpleNamespace(access_token=access_token, refresh_token=f'refresh-{access_token}', user=user)
        self.sessions[access_token] = session
        return session

    def sign_in_with_password(self, credentials):
        user, password = self.users.get(credentials['email'], (None, None))
        if user is None or password != credentials['password']:
            raise AuthError('Invalid login credentials', 'invalid_credentials')
        session = self._session(user)
        return SimpleNamespace(user=user, session=session)

    def set_session(self, access_token, refresh_token):
        session = self.sessions.get(access_token)
        if session is None or session.refresh_token != refresh_token:
            raise AuthError('Invalid Refresh Token: Refresh Token Not Found', 'refresh_token_not_found')
        if access_token in self.rotations:
            session = self._session(session.user, self.rotations.pop(access_token))
        return SimpleNamespace(user=session.user, session=session)

    def sign_out(self):
        self.signed_out += 1


class FakeSupabaseClient:
    def __init__(self, tables=None):
        self.tables = copy.deepcopy(tables or {})
        self.calls = []
        self.writes = []
        self.failures = {}
        self.signed = []
        self.uploads = []
        self.missing_objects = set()
        self.upload_error = None
        self.storage = FakeStorage(self)
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)

    def fail(self, table, op=None, message='boom'):
        self.failures[(table, op)] = message


ADMIN_ID = 'admin-1'
ADMIN_EMAIL = 'admin@kizuna.bg'
ADMIN_PASSWORD = 'secret-pass'


@pytest.fixture
def fake_client(monkeypatch):
    client = FakeSupabaseClient()
    client.auth.add_user(ADMIN_ID, ADMIN_EMAIL, ADMIN_PASSWORD)
    client.auth.add_user('user-2', 'visitor@kizuna.bg', 'visitor-pass')
    client.tables['admins'] = [{'user_id': ADMIN_ID}]
    monkeypatch.setattr('school.backend.get_client', lambda: client)
    return client


@pytest.fixture
def teachers(fake_client):
    rows = [
        {'id': 't1', 'name': 'Yuki Tanaka', 'title': 'Sensei', 'image': 'teachers/yuki.png',
         'description': 'Носител на езика', 'created_at': '2026-01-02T00:00:00+00:00'},
        {'id': 't2', 'name': 'Mina Kobayashi', 'title': None,
         'image': 'https://x.supabase.co/storage/v1/object/public/teachers/mina.jpg',
         'description': None, 'created_at': '2026-01-01T00:00:00+00:00'},
    ]
    fake_client.tables['teachers'] = rows
    return rows


@pytest.fixture
def admin_client(client, fake_client):
    response = client.post('/login/', {'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert response.status_code == 302
    return client
