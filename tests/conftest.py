"""Pytest fixtures for tubeload tests."""
import json

import pytest
from multidict import CIMultiDict

from tubeload.core.api import APIConfig, OAuthConfig
from tubeload.core.auth import TokenProvider
from tubeload.core.upload.models import UploadRequest, UploadSession
from tubeload.core.upload.services import BytesPayload


MIB = 1024 * 1024
SESSION_URL = 'https://www.googleapis.com/upload/youtube/v3/videos?uploadType=resumable&upload_id=xyz'


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse used as an async context manager."""

    def __init__(self, status, body='', headers=None):
        self.status = status
        self._body = body if isinstance(body, str) else json.dumps(body)
        self.headers = CIMultiDict(headers or {})

    async def text(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None


class FakeHTTPSession:
    """
    Records calls and replays queued responses in order.

    Queue an exception instance to have the call raise it.
    """

    def __init__(self, responses=None):
        self.calls = []
        self._responses = list(responses or [])
        self.closed = False

    def queue(self, *responses):
        self._responses.extend(responses)
        return self

    def _next(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def post(self, url, **kwargs):
        return self._next('POST', url, kwargs)

    def put(self, url, **kwargs):
        return self._next('PUT', url, kwargs)

    async def close(self):
        self.closed = True

    def calls_for(self, method):
        return [call for call in self.calls if call[0] == method]


class FakeTokenClient:
    """Token client that records prompts and optionally answers at once."""

    def __init__(self, client_id, scopes, callback, response=None, auto=True):
        self.client_id = client_id
        self.scopes = scopes
        self.callback = callback
        self.response = response if response is not None else {
            'access_token': 'ya29.token',
            'expires_in': 3599,
        }
        self.auto = auto
        self.prompts = []

    def request_access_token(self, prompt=''):
        self.prompts.append(prompt)
        if self.auto:
            self.callback(self.response)

    def deliver(self, response):
        self.callback(response)


class FakeTokenClientFactory:
    """Builds FakeTokenClient instances and remembers them."""

    def __init__(self, **client_kwargs):
        self.client_kwargs = client_kwargs
        self.clients = []

    def __call__(self, client_id, scopes, callback):
        client = FakeTokenClient(client_id, scopes, callback, **self.client_kwargs)
        self.clients.append(client)
        return client

    @property
    def client(self):
        return self.clients[-1]


def make_request(size=16, chunk_data=None, media_type='video/mp4', **kwargs):
    """Create an UploadRequest over an in-memory payload."""
    data = chunk_data if chunk_data is not None else bytes(range(256)) * (size // 256) + bytes(size % 256)
    kwargs.setdefault('title', 'Test video')
    return UploadRequest(payload=BytesPayload(data, media_type, 'clip.mp4'), **kwargs)


def make_session(request=None):
    return UploadSession(url=SESSION_URL, request=request or make_request())


@pytest.fixture
def http_session():
    """Create an empty fake HTTP session."""
    return FakeHTTPSession()


@pytest.fixture
def oauth_config():
    return OAuthConfig(client_id='1234.apps.googleusercontent.com', grant_timeout=1.0)


@pytest.fixture
def token_factory():
    return FakeTokenClientFactory()


@pytest.fixture
def token_provider(oauth_config, token_factory):
    return TokenProvider(oauth_config, token_factory)


@pytest.fixture
def api_config():
    return APIConfig.for_client('1234.apps.googleusercontent.com')


@pytest.fixture
def upload_request():
    return make_request(size=16)


@pytest.fixture
def video_resource():
    """Returns a sample video resource from the provider."""
    return {
        'kind': 'youtube#video',
        'id': 'dQw4w9WgXcQ',
        'snippet': {'title': 'Test video'},
        'status': {'privacyStatus': 'private', 'uploadStatus': 'uploaded'},
    }
