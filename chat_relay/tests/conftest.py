"""Shared fixtures for the relay test suite.

Transport is always an ``httpx.MockTransport`` so no test touches the
network.
"""

from __future__ import annotations

from typing import Iterator, List

import httpx
import pytest

from chat_relay.backends import FirebaseBackend
from chat_relay.base.credentials import static_token
from chat_relay.base.dto import ChatMessage, ChatQuery
from chat_relay.base.http import close_all_clients
from chat_relay.client import GatewayClient
from relay_helpers import BASE_URL, Handler, RecordingTransport


@pytest.fixture()
def query() -> ChatQuery:
    return ChatQuery(model="gpt-4o-mini", messages=[ChatMessage(role="user", content="who are you")])


@pytest.fixture()
def make_client():
    """Factory building a client over a recording mock transport.

    Defaults to a Firebase backend with a static token; pass ``backend`` to
    override and any ``GatewayClient`` keyword (e.g. ``executor``).
    """
    created: List[httpx.Client] = []

    def _make(handler: Handler, backend=None, **kwargs):
        transport = RecordingTransport(handler)
        http = httpx.Client(transport=transport)
        created.append(http)
        backend = backend or FirebaseBackend(token_provider=static_token("app-check-token"), base_url=BASE_URL)
        return GatewayClient(backend, http_client=http, **kwargs), transport

    yield _make
    for http in created:
        http.close()


@pytest.fixture(autouse=True)
def _close_shared_clients() -> Iterator[None]:
    yield
    close_all_clients()
