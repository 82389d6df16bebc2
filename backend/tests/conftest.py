import os
import sys
import pytest
import httpx

# Ensure the backend root (containing the `tastevote` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tastevote import create_app, registry, socketio
from tastevote.models import Candidate


BUSINESSES = {
    'a': {'id': 'a', 'name': 'Pizza Hut', 'rating': 3.5},
    'b': {'id': 'b', 'name': 'Burger King', 'rating': 3.0},
    'c': {'id': 'c', 'name': 'Taco Bell', 'rating': 4.0},
}

# search term -> business ids returned
SEARCHES = {
    'none': [],
    'one': ['a'],
    'two': ['a', 'b'],
}


class FakeYelp:
    """httpx.MockTransport handler standing in for the Yelp Fusion API."""

    def __init__(self):
        self.fail = False
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            return httpx.Response(503, json={'error': {'code': 'SERVICE_UNAVAILABLE'}})
        path = request.url.path
        if path.endswith('/businesses/search'):
            ids = SEARCHES.get(request.url.params.get('term'), ['a', 'b', 'c'])
            return httpx.Response(200, json={'businesses': [BUSINESSES[i] for i in ids]})
        if path.endswith('/reviews'):
            business_id = path.split('/')[-2]
            return httpx.Response(200, json={'reviews': [{'id': f'r-{business_id}', 'rating': 5, 'text': 'Great'}]})
        if path.endswith('/autocomplete'):
            text = request.url.params.get('text')
            return httpx.Response(200, json={'terms': [{'text': f'{text} tacos'}]})
        if '/businesses/' in path:
            business = BUSINESSES.get(path.rsplit('/', 1)[-1])
            if business is None:
                return httpx.Response(404, json={'error': {'code': 'BUSINESS_NOT_FOUND'}})
            return httpx.Response(200, json=dict(business, photos=['http://img/' + business['id']]))
        return httpx.Response(404)


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    YELP_API_KEY = 'test-key'
    YELP_API_URL = 'https://yelp.test/v3'
    YELP_SEARCH_LIMIT = 10
    YELP_TIMEOUT_SEC = 1
    JOIN_CODE_LENGTH = 6
    CORS_ORIGINS = ['http://localhost:8080']


def candidates(*ids):
    return [Candidate.from_business(BUSINESSES[i]) for i in ids]


@pytest.fixture()
def fake_yelp():
    return FakeYelp()


@pytest.fixture()
def flask_app(fake_yelp):
    class _Config(TestConfig):
        YELP_HTTP_TRANSPORT = httpx.MockTransport(fake_yelp)

    registry.clear()
    application = create_app(_Config)
    with application.app_context():
        yield application
    registry.clear()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory opening Socket.IO test clients bound to a join code."""
    opened = []

    def _connect(join_code):
        test_client = socketio.test_client(
            flask_app,
            namespace='/ws',
            query_string=f'joinCode={join_code}',
            flask_test_client=flask_app.test_client(),
        )
        opened.append(test_client)
        return test_client

    yield _connect
    for test_client in opened:
        try:
            test_client.disconnect(namespace='/ws')
        except Exception:
            pass
