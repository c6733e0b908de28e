"""Tests for the REST backend client."""

from decimal import Decimal

import pytest
import requests


class TestBackendClient:
    """Tests for BackendClient against a fake HTTP session."""

    def test_auth_headers(self, rest_client, fake_session):
        """Test the anon key is sent as apikey and bearer token."""
        assert fake_session.headers["apikey"] == "anon-key"
        assert fake_session.headers["Authorization"] == "Bearer anon-key"

    def test_missing_configuration_raises(self, fake_session):
        """Test a client without URL or key cannot be built."""
        from src.backend.client import BackendClient
        from src.errors import BackendError

        with pytest.raises(BackendError):
            BackendClient(url="", anon_key="", session=fake_session)

    def test_select_builds_postgrest_query(self, rest_client, fake_session, make_response):
        """Test ordering and limit parameters."""
        fake_session.queue(make_response(200, [{"id": 2}, {"id": 1}]))

        rows = rest_client.select("entidades", order_by="id", ascending=False, limit=500)

        assert rows == [{"id": 2}, {"id": 1}]
        call = fake_session.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == "https://example.supabase.co/rest/v1/entidades"
        assert call["params"] == {"select": "*", "order": "id.desc", "limit": 500}
        assert call["timeout"] == 5

    def test_update_uses_in_filter(self, rest_client, fake_session, make_response):
        """Test bulk update targets ids with the in operator and serializes Decimal."""
        fake_session.queue(make_response(200, []))

        rest_client.update("parcelas_conta_pagar", {"status": "pago", "valor_parcela": Decimal("10.5")}, ["1", "3"])

        call = fake_session.calls[0]
        assert call["method"] == "PATCH"
        assert call["params"] == {"id": "in.(1,3)"}
        assert call["json"] == {"status": "pago", "valor_parcela": 10.5}
        assert call["headers"] == {"Prefer": "return=representation"}

    def test_update_without_ids_is_noop(self, rest_client, fake_session):
        """Test no request is sent for an empty id list."""
        assert rest_client.update("parcelas_conta_pagar", {"status": "pago"}, []) == []
        assert fake_session.calls == []

    def test_update_one_uses_eq_filter(self, rest_client, fake_session, make_response):
        """Test single-row updates."""
        fake_session.queue(make_response(200, [{"id": 3}]))

        rest_client.update_one("parcelas_conta_pagar", {"status": "pago"}, "3")

        assert fake_session.calls[0]["params"] == {"id": "eq.3"}

    def test_delete(self, rest_client, fake_session, make_response):
        """Test delete sends DELETE with the id filter."""
        fake_session.queue(make_response(204, text=""))

        rest_client.delete("entidades", [7])

        call = fake_session.calls[0]
        assert call["method"] == "DELETE"
        assert call["params"] == {"id": "in.(7)"}

    def test_insert_returns_stored_row(self, rest_client, fake_session, make_response):
        """Test insert posts the payload and returns the first row."""
        fake_session.queue(make_response(201, [{"id": 101, "nome": "ACME"}]))

        created = rest_client.insert("entidades", {"nome": "ACME", "metadados": None})

        assert created == {"id": 101, "nome": "ACME"}
        assert fake_session.calls[0]["method"] == "POST"
        assert fake_session.calls[0]["json"] == {"nome": "ACME", "metadados": None}

    def test_error_payload_becomes_backend_error(self, rest_client, fake_session, make_response):
        """Test PostgREST errors are raised with message, code and details."""
        from src.errors import BackendError

        fake_session.queue(make_response(409, {
            "message": "duplicate key value violates unique constraint",
            "code": "23505",
            "details": "Key (documento)=(123) already exists.",
        }))

        with pytest.raises(BackendError) as excinfo:
            rest_client.insert("entidades", {"nome": "ACME"})

        error = excinfo.value
        assert error.code == "23505"
        assert error.status_code == 409
        assert "already exists" in str(error)

    def test_non_json_error_body(self, rest_client, fake_session, make_response):
        """Test plain-text error bodies still raise BackendError."""
        from src.errors import BackendError

        fake_session.queue(make_response(502, text="Bad gateway"))

        with pytest.raises(BackendError, match="Bad gateway"):
            rest_client.delete("entidades", [1])

    def test_write_connection_error_is_not_retried(self, rest_client, fake_session):
        """Test writes fail once with BackendError on connection errors."""
        from src.errors import BackendError

        fake_session.queue(requests.exceptions.ConnectionError("down"))

        with pytest.raises(BackendError):
            rest_client.update("entidades", {"ativo": False}, [1])

        assert len(fake_session.calls) == 1

    def test_read_retries_transient_errors(self, rest_client, fake_session, make_response, monkeypatch):
        """Test reads are retried after a connection error."""
        monkeypatch.setattr("time.sleep", lambda seconds: None)
        fake_session.queue(
            requests.exceptions.ConnectionError("reset"),
            make_response(200, [{"id": 1}]),
        )

        assert rest_client.select("entidades") == [{"id": 1}]
        assert len(fake_session.calls) == 2

    def test_read_gives_up_after_three_attempts(self, rest_client, fake_session, monkeypatch):
        """Test persistent connection errors surface as BackendError."""
        from src.errors import BackendError

        monkeypatch.setattr("time.sleep", lambda seconds: None)
        fake_session.queue(*[requests.exceptions.Timeout("slow")] * 3)

        with pytest.raises(BackendError):
            rest_client.select("entidades")

        assert len(fake_session.calls) == 3

    def test_http_errors_are_not_retried(self, rest_client, fake_session, make_response):
        """Test a 4xx response fails immediately."""
        from src.errors import BackendError

        fake_session.queue(make_response(404, {"message": "relation does not exist", "code": "42P01"}))

        with pytest.raises(BackendError):
            rest_client.select("missing")

        assert len(fake_session.calls) == 1

    def test_undecodable_success_body_becomes_backend_error(self, rest_client, fake_session, make_response):
        """Test a 2xx response that is not JSON raises BackendError."""
        from src.errors import BackendError

        fake_session.queue(make_response(200, text="<html>proxy</html>"))

        with pytest.raises(BackendError):
            rest_client.update("parcelas_conta_pagar", {"status": "pago"}, ["1"])

    def test_undecodable_read_body_becomes_backend_error(self, rest_client, fake_session, make_response):
        """Test reads wrap undecodable bodies too, without retrying."""
        from src.errors import BackendError

        fake_session.queue(make_response(200, text="not json"))

        with pytest.raises(BackendError):
            rest_client.select("entidades")

        assert len(fake_session.calls) == 1

    @pytest.mark.parametrize("error", [
        requests.exceptions.ChunkedEncodingError("truncated"),
        requests.exceptions.TooManyRedirects("loop"),
    ])
    def test_other_request_errors_become_backend_error(self, rest_client, fake_session, error):
        """Test any requests failure on a write surfaces as BackendError."""
        from src.errors import BackendError

        fake_session.queue(error)

        with pytest.raises(BackendError):
            rest_client.delete("entidades", [1])
