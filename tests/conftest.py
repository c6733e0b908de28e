"""Pytest configuration and fixtures for FinanceiroLB tests."""

import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def installment_rows():
    """Five installments with mixed statuses, as shown by the list page."""
    return [
        {
            "id": "1",
            "descricao": "MUNDO KIDS LTDA",
            "valor_parcela": 4543.0,
            "data_vencimento": "2024-05-05",
            "status": "a_vencer",
            "forma_pagto": None,
            "pago_em": None,
            "credor": {"nome": "MUNDO KIDS LTDA"},
        },
        {
            "id": "2",
            "descricao": "GRENDENE S/A - FILIAL 5 (FOR)",
            "valor_parcela": 1714747.0,
            "data_vencimento": "2024-06-15",
            "status": "vencido",
            "forma_pagto": None,
            "pago_em": None,
            "credor": {"nome": "GRENDENE S/A"},
        },
        {
            "id": "3",
            "descricao": "KYLY INDUSTRIA TEXTIL LTDA",
            "valor_parcela": 3853506.0,
            "data_vencimento": "2024-04-20",
            "status": "pago",
            "forma_pagto": "pix",
            "pago_em": "2024-04-18",
            "credor": {"nome": "KYLY INDUSTRIA TEXTIL LTDA"},
        },
        {
            "id": "4",
            "descricao": "MON SUCRE CONFECCOES LTDA",
            "valor_parcela": 214201.0,
            "data_vencimento": "2024-07-10",
            "status": "a_vencer",
            "forma_pagto": None,
            "pago_em": None,
            "credor": {"nome": "MON SUCRE CONFECCOES LTDA"},
        },
        {
            "id": "5",
            "descricao": "TEMPO DE CRIANCA MODA INFANTIL LTDA",
            "valor_parcela": 127805.0,
            "data_vencimento": "2024-05-25",
            "status": "vencido",
            "forma_pagto": None,
            "pago_em": None,
            "credor": {"nome": "TEMPO DE CRIANCA MODA INFANTIL LTDA"},
        },
    ]


@pytest.fixture
def letter_rows():
    """Rows A..F for selection tests."""
    return [{"id": letter, "nome": letter} for letter in "ABCDEF"]


@pytest.fixture
def demo_backend():
    """Create a seeded in-memory DuckDB demo backend."""
    from src.backend.demo import DemoBackend

    backend = DemoBackend()
    yield backend
    backend.close()


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.reason = "Bad Request" if status_code >= 400 else "OK"

    @property
    def ok(self):
        return self.status_code < 400

    @property
    def content(self):
        return self.text.encode()

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    """Records requests and replays queued responses (or raises queued exceptions)."""

    def __init__(self):
        self.headers = {}
        self.calls = []
        self.responses = []

    def queue(self, *items):
        self.responses.extend(items)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.responses.pop(0) if self.responses else FakeResponse(200, [])
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        pass


@pytest.fixture
def fake_session():
    """Fake HTTP session for the REST client."""
    return FakeSession()


@pytest.fixture
def make_response():
    """Factory for fake HTTP responses."""
    return FakeResponse


@pytest.fixture
def rest_client(fake_session):
    """REST client wired to the fake session."""
    from src.backend.client import BackendClient

    return BackendClient(
        url="https://example.supabase.co",
        anon_key="anon-key",
        timeout=5,
        session=fake_session,
    )
