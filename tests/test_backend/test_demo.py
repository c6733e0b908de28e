"""Tests for the in-memory demo backend."""

from datetime import date
from decimal import Decimal

import pytest


class TestDemoBackend:
    """Tests for DemoBackend."""

    def test_seeded_rows(self, demo_backend):
        """Test the sample data is loaded."""
        installments = demo_backend.select("parcelas_conta_pagar")
        entities = demo_backend.select("entidades")

        assert len(installments) == 5
        assert len(entities) == 7
        assert sum(1 for e in entities if e["ativo"]) == 5

    def test_select_order_and_limit(self, demo_backend):
        """Test ordering by due date and limiting rows."""
        rows = demo_backend.select("parcelas_conta_pagar", order_by="data_vencimento", ascending=False, limit=2)

        assert [r["id"] for r in rows] == [4, 2]
        assert rows[0]["data_vencimento"] == date(2024, 7, 10)
        assert rows[0]["valor_parcela"] == Decimal("214201.00")

    def test_unknown_table(self, demo_backend):
        """Test unknown tables raise BackendError."""
        from src.errors import BackendError

        with pytest.raises(BackendError) as excinfo:
            demo_backend.select("contas")

        assert excinfo.value.code == "42P01"

    def test_update_many(self, demo_backend):
        """Test a patch is applied to every listed id."""
        updated = demo_backend.update("parcelas_conta_pagar", {"status": "pago", "forma_pagto": "boleto"}, ["1", "4"])

        assert sorted(r["id"] for r in updated) == [1, 4]
        rows = {r["id"]: r for r in demo_backend.select("parcelas_conta_pagar")}
        assert rows[1]["status"] == "pago"
        assert rows[4]["forma_pagto"] == "boleto"
        assert rows[2]["status"] == "vencido"

    def test_update_unknown_column(self, demo_backend):
        """Test patches naming unknown columns are rejected."""
        from src.errors import BackendError

        with pytest.raises(BackendError) as excinfo:
            demo_backend.update("parcelas_conta_pagar", {"banco": "341"}, [1])

        assert excinfo.value.code == "PGRST204"

    def test_update_one_with_payment(self, demo_backend):
        """Test a payment patch is stored on a single row."""
        demo_backend.update_one(
            "parcelas_conta_pagar",
            {"status": "pago", "valor_parcela": Decimal("4600.50"), "pago_em": "2024-05-10T09:30:00"},
            2,
        )

        rows = {r["id"]: r for r in demo_backend.select("parcelas_conta_pagar")}
        assert rows[2]["status"] == "pago"
        assert rows[2]["valor_parcela"] == Decimal("4600.50")
        assert rows[2]["pago_em"].date() == date(2024, 5, 10)

    def test_delete(self, demo_backend):
        """Test rows are removed by id."""
        demo_backend.delete("entidades", ["6", "7"])

        assert [r["id"] for r in demo_backend.select("entidades", order_by="id")] == [1, 2, 3, 4, 5]

    def test_insert_assigns_id_and_keeps_metadata(self, demo_backend):
        """Test inserted rows get a fresh id and metadata round-trips."""
        created = demo_backend.insert("entidades", {
            "id": 1,
            "nome": "ACME",
            "tipo_pessoa": "JURIDICA",
            "documento": "99888777000166",
            "metadados": {"observacoes": "novo fornecedor"},
        })

        assert created["id"] >= 100
        assert created["metadados"] == {"observacoes": "novo fornecedor"}
        assert created["ativo"] is True

    def test_duplicate_document_is_rejected(self, demo_backend):
        """Test the unique document constraint surfaces as BackendError."""
        from src.errors import BackendError

        with pytest.raises(BackendError) as excinfo:
            demo_backend.insert("entidades", {"nome": "Copia", "documento": "11222333000181"})

        assert excinfo.value.status_code == 409

    def test_seed_restores_sample_rows(self, demo_backend):
        """Test seeding again discards changes."""
        demo_backend.delete("parcelas_conta_pagar", [1, 2, 3])

        demo_backend.seed()

        assert len(demo_backend.select("parcelas_conta_pagar")) == 5

    def test_concurrent_reads_from_threads(self, demo_backend):
        """Test threads sharing one backend each get their own table's rows."""
        import threading

        expected = {"parcelas_conta_pagar": 5, "entidades": 7}
        failures = []

        def worker(table):
            for _ in range(100):
                try:
                    rows = demo_backend.select(table, order_by="id")
                except Exception as e:
                    failures.append(repr(e))
                    continue
                if len(rows) != expected[table]:
                    failures.append(f"{table}: {len(rows)} row(s)")

        threads = [threading.Thread(target=worker, args=(table,)) for table in list(expected) * 2]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert failures == []
