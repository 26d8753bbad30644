"""
Shared fixtures: a fake Redis server, a mocked Elasticsearch client and a
Flask test client with login helpers.
"""
from unittest.mock import MagicMock

import fakeredis
import pytest
from elasticsearch import Elasticsearch

from feedhub.app import create_app
from feedhub.models import bind_store
from feedhub.search import SearchIndex
from feedhub.storage import FeedStore

ADMIN_EMAIL = "admin@example.com"


@pytest.fixture
def cache():
    """A Redis client talking to a fresh in-process fake server."""
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def es_client(es_hits):
    """A mocked Elasticsearch client; search() answers with es_hits."""
    client = MagicMock(spec=Elasticsearch)
    client.search.side_effect = lambda **kwargs: {"hits": {"hits": [{"_id": i} for i in es_hits]}}
    return client


@pytest.fixture
def es_hits():
    """Ids the mocked engine returns from _search; tests may append to it."""
    return []


@pytest.fixture
def search_index(es_client):
    return SearchIndex(es_client)


@pytest.fixture
def store(cache, search_index):
    """A FeedStore bound for the Feed entity."""
    feed_store = FeedStore(cache, search_index)
    bind_store(feed_store)
    return feed_store


@pytest.fixture
def app(cache, search_index):
    return create_app(
        {"TESTING": True, "SECRET_KEY": "test", "ADMINISTRATORS": [ADMIN_EMAIL]},
        cache=cache,
        search_index=search_index,
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Sign a user into the test client's session and return the user."""

    def _login(name="user", email="user@example.com"):
        user = {"id": email, "name": name, "email": email}
        with client.session_transaction() as session:
            session["user"] = user
        return user

    return _login


@pytest.fixture
def login_admin(login):
    def _login_admin():
        return login("Admin", ADMIN_EMAIL)

    return _login_admin


@pytest.fixture
def logout(client):
    def _logout():
        with client.session_transaction() as session:
            session.pop("user", None)

    return _logout
