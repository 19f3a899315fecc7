"""
Shared fixtures.

mongomock has no sessions, so the fake client below hands out sessions
whose transaction snapshots every collection and restores it when the
unit of work raises.
"""

import functools
from contextlib import contextmanager
from typing import Dict, List
from unittest.mock import MagicMock

import mongomock
import pytest
from fastapi.testclient import TestClient

from elnursery.app import ElnurseryApp
from elnursery.services.email_service import EmailService
from elnursery.utils.config import AuthSettings, BootstrapSettings, Settings
from elnursery_web.main import create_app


class SessionlessCollection:
    """Forwards to a mongomock collection, dropping the ``session`` argument"""

    def __init__(self, collection):
        self._collection = collection

    def __getattr__(self, name):
        attr = getattr(self._collection, name)
        if not callable(attr):
            return attr

        @functools.wraps(attr)
        def call(*args, **kwargs):
            kwargs.pop("session", None)
            return attr(*args, **kwargs)

        return call


class FakeDatabase:
    def __init__(self, db):
        self._db = db

    def __getitem__(self, name):
        return SessionlessCollection(self._db[name])

    def list_collection_names(self):
        return self._db.list_collection_names()


class FakeSession:
    def __init__(self, client: "FakeClient"):
        self.client = client

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    @contextmanager
    def start_transaction(self):
        snapshot = self.client.snapshot()
        try:
            yield self
        except Exception:
            self.client.restore(snapshot)
            self.client.aborted += 1
            raise
        self.client.committed += 1


class FakeClient:
    """Session-aware stand-in for ``pymongo.MongoClient`` over mongomock"""

    def __init__(self):
        self._client = mongomock.MongoClient()
        self._databases: Dict[str, object] = {}
        self.committed = 0
        self.aborted = 0

    def __getitem__(self, name):
        if name not in self._databases:
            self._databases[name] = self._client[name]
        return FakeDatabase(self._databases[name])

    def start_session(self):
        return FakeSession(self)

    def snapshot(self) -> Dict[tuple, List[dict]]:
        data = {}
        for db_name, db in self._databases.items():
            for coll_name in db.list_collection_names():
                data[(db_name, coll_name)] = list(db[coll_name].find())
        return data

    def restore(self, snapshot: Dict[tuple, List[dict]]) -> None:
        for db_name, db in self._databases.items():
            for coll_name in db.list_collection_names():
                collection = db[coll_name]
                collection.delete_many({})
                docs = snapshot.get((db_name, coll_name))
                if docs:
                    collection.insert_many(docs)

    def close(self):
        pass


@pytest.fixture
def settings() -> Settings:
    return Settings(
        auth=AuthSettings(jwt_secret="test-secret", bcrypt_rounds=4),
        bootstrap=BootstrapSettings(admin_email="owner@example.com", admin_name="Owner"),
    )


@pytest.fixture
def mongo_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def email_service() -> MagicMock:
    return MagicMock(spec=EmailService)


@pytest.fixture
def elnursery_app(settings, mongo_client, email_service) -> ElnurseryApp:
    return ElnurseryApp(settings=settings, client=mongo_client, email_service=email_service)


@pytest.fixture
def db(elnursery_app):
    return elnursery_app.db


@pytest.fixture
def client(elnursery_app) -> TestClient:
    return TestClient(create_app(elnursery_app))


def sent_password(email_service: MagicMock, email: str) -> str:
    """Plaintext password handed to the credentials email for ``email``"""
    for call in email_service.send_account_credentials.call_args_list:
        if call.args[0] == email:
            return call.args[2]
    raise AssertionError(f"No credentials email sent to {email}")


@pytest.fixture
def make_admin(elnursery_app, email_service):
    """Create an admin and return ``(admin, password)``"""

    def _make(email="admin@example.com", name="Admin", roles=None):
        admin = elnursery_app.admin_service.create(name, email, roles)
        return admin, sent_password(email_service, email)

    return _make


@pytest.fixture
def make_user(elnursery_app, email_service):
    """Create a user and return ``(user, password)``"""

    def _make(email="parent@example.com", name="Parent", class_category=None, children=None):
        user = elnursery_app.user_service.create(name, email, class_category, children)
        return user, sent_password(email_service, email)

    return _make
