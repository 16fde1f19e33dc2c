from unittest import mock

import pytest
import requests

from bugzlink.client import Client

from helpers import API_KEY, ENDPOINT, FakeBugzilla


@pytest.fixture
def serve():
    """Return a function building a Client wired to a FakeBugzilla."""
    def _serve(handler, **kwargs):
        server = FakeBugzilla(handler)
        session = requests.Session()
        session.send = mock.Mock(side_effect=server.send)
        kwargs.setdefault('api_key', API_KEY)
        client = Client(ENDPOINT, session=session, **kwargs)
        return client, server
    return _serve
