"""Pytest fixtures for pgrest tests."""
import json

import pytest
from unittest.mock import AsyncMock, Mock
from multidict import CIMultiDict, CIMultiDictProxy

from pgrest.core.api import BufferedResponse, RequestBuilder

BASE_URL = 'https://db.example.com/users'


def make_response(body=None, headers=None, status=200, raw=None):
    """Build a buffered response from a JSON-serializable body."""
    payload = raw if raw is not None else json.dumps(body).encode('utf-8')
    return BufferedResponse(
        status=status,
        headers=CIMultiDictProxy(CIMultiDict(headers or {})),
        body=payload,
    )


@pytest.fixture
def transport():
    """Transport double returning an empty JSON list by default."""
    fake = Mock()
    fake.fetch = AsyncMock(return_value=make_response([]))
    return fake


@pytest.fixture
def builder(transport):
    """GET builder bound to the transport double."""
    return RequestBuilder('GET', BASE_URL, transport)


@pytest.fixture
def sample_rows():
    """Returns a page of rows as PostgREST would."""
    return [
        {'id': 1, 'name': 'Ada', 'age': 36},
        {'id': 2, 'name': 'Grace', 'age': 45},
    ]


@pytest.fixture
def response_factory():
    """Returns the make_response helper."""
    return make_response
