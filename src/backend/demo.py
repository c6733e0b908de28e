"""In-memory demo backend.

Offers the same read/write operations as ``BackendClient`` over an in-memory
DuckDB database seeded with sample installments and entities, so the
application runs without a hosted project.

A DuckDB connection keeps one pending result, so every statement together
with the read of its result runs under the instance lock.
"""

import json
import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence
from pathlib import Path
import sys

import duckdb

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.constants import TABLE_ENTITIES, TABLE_INSTALLMENTS
from config.logging_config import get_logger
from src.errors import BackendError

logger = get_logger("demo_backend")


SCHEMA = [
    "CREATE SEQUENCE parcelas_id_seq START 100",
    f"""
    CREATE TABLE {TABLE_INSTALLMENTS} (
        id INTEGER PRIMARY KEY DEFAULT nextval('parcelas_id_seq'),
        num_parcela INTEGER DEFAULT 1,
        descricao VARCHAR,
        credor_nome VARCHAR,
        valor_parcela DECIMAL(14, 2) NOT NULL,
        data_vencimento DATE NOT NULL,
        status VARCHAR DEFAULT 'a_vencer',
        forma_pagto VARCHAR,
        doc_pagto VARCHAR,
        pago_em TIMESTAMP,
        observacoes VARCHAR
    )
    """,
    "CREATE SEQUENCE entidades_id_seq START 100",
    f"""
    CREATE TABLE {TABLE_ENTITIES} (
        id INTEGER PRIMARY KEY DEFAULT nextval('entidades_id_seq'),
        nome VARCHAR NOT NULL,
        tipo_pessoa VARCHAR DEFAULT 'JURIDICA',
        documento VARCHAR UNIQUE,
        email VARCHAR,
        telefone VARCHAR,
        ativo BOOLEAN DEFAULT true,
        metadados VARCHAR,
        criado_em TIMESTAMP DEFAULT current_timestamp
    )
    """,
]

SAMPLE_INSTALLMENTS = [
    (1, "MUNDO KIDS LTDA", "MUNDO KIDS LTDA", 4543, "2024-05-05", "a_vencer", None, None),
    (2, "GRENDENE S/A - FILIAL 5 (FOR)", "GRENDENE S/A", 1714747, "2024-06-15", "vencido", None, None),
    (3, "KYLY INDUSTRIA TEXTIL LTDA", "KYLY INDUSTRIA TEXTIL LTDA", 3853506, "2024-04-20", "pago", "pix", "2024-04-18"),
    (4, "MON SUCRE CONFECCOES LTDA", "MON SUCRE CONFECCOES LTDA", 214201, "2024-07-10", "a_vencer", None, None),
    (5, "TEMPO DE CRIANCA MODA INFANTIL LTDA", "TEMPO DE CRIANCA MODA INFANTIL LTDA", 127805, "2024-05-25", "vencido", None, None),
]

SAMPLE_ENTITIES = [
    (1, "MUNDO KIDS LTDA", "JURIDICA", "11222333000181", "financeiro@mundokids.com.br", "(11) 3333-4444", True),
    (2, "GRENDENE S/A", "JURIDICA", "89850341000160", None, "(54) 2109-9000", True),
    (3, "KYLY INDUSTRIA TEXTIL LTDA", "JURIDICA", "79431251000172", "contato@kyly.com.br", None, True),
    (4, "MON SUCRE CONFECCOES LTDA", "JURIDICA", "05486217000107", None, None, False),
    (5, "TEMPO DE CRIANCA MODA INFANTIL LTDA", "JURIDICA", "12345678000195", None, None, True),
    (6, "MARIA APARECIDA SOUZA", "FISICA", "52998224725", "maria.souza@email.com", "(11) 98888-7777", True),
    (7, "JOAO CARLOS PEREIRA", "FISICA", "11144477735", None, None, False),
]


class DemoBackend:
    """Seeded in-memory stand-in for the hosted backend."""

    def __init__(self, connection: Optional[duckdb.DuckDBPyConnection] = None):
        """
        Initialize the demo backend.

        Args:
            connection: Existing DuckDB connection (defaults to a new in-memory one).
        """
        self.conn = connection or duckdb.connect(":memory:")
        self._lock = threading.RLock()
        self._create_schema()
        self.seed()

    def _create_schema(self) -> None:
        with self._lock:
            for statement in SCHEMA:
                self.conn.execute(statement)

    def seed(self) -> None:
        """Replace table contents with the sample rows."""
        with self._lock:
            self.conn.execute(f"DELETE FROM {TABLE_INSTALLMENTS}")
            self.conn.execute(f"DELETE FROM {TABLE_ENTITIES}")
            self.conn.executemany(
                f"""
                INSERT INTO {TABLE_INSTALLMENTS}
                    (id, descricao, credor_nome, valor_parcela, data_vencimento, status, forma_pagto, pago_em)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [list(row) for row in SAMPLE_INSTALLMENTS],
            )
            self.conn.executemany(
                f"""
                INSERT INTO {TABLE_ENTITIES}
                    (id, nome, tipo_pessoa, documento, email, telefone, ativo)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [list(row) for row in SAMPLE_ENTITIES],
            )
        logger.info(
            f"Seeded demo backend: {len(SAMPLE_INSTALLMENTS)} installment(s), "
            f"{len(SAMPLE_ENTITIES)} entit(ies)"
        )

    def _columns(self, table: str) -> List[str]:
        if table not in (TABLE_INSTALLMENTS, TABLE_ENTITIES):
            raise BackendError(f"Tabela desconhecida: {table}", code="42P01", status_code=404)
        with self._lock:
            return [row[0] for row in self.conn.execute(f"DESCRIBE {table}").fetchall()]

    def _check_columns(self, table: str, names: Iterable[str]) -> None:
        known = set(self._columns(table))
        for name in names:
            if name not in known:
                raise BackendError(
                    f"Coluna '{name}' não encontrada em {table}",
                    code="PGRST204",
                    status_code=400,
                )

    def _fetch(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with self._lock:
            cursor = self.conn.execute(sql, list(params))
            names = [d[0] for d in cursor.description]
            rows = [dict(zip(names, values)) for values in cursor.fetchall()]
        for row in rows:
            if isinstance(row.get("metadados"), str):
                row["metadados"] = json.loads(row["metadados"])
        return rows

    def _encode(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        encoded = dict(patch)
        if isinstance(encoded.get("metadados"), dict):
            encoded["metadados"] = json.dumps(encoded["metadados"])
        return encoded

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> None:
        try:
            with self._lock:
                self.conn.execute(sql, list(params))
        except duckdb.ConstraintException as e:
            raise BackendError("Violação de restrição", code="23505", details=str(e), status_code=409) from e
        except duckdb.ConversionException as e:
            raise BackendError("Valor inválido", code="22P02", details=str(e), status_code=400) from e
        except duckdb.Error as e:
            raise BackendError("Erro no banco de dados", details=str(e), status_code=500) from e

    def select(
        self,
        table: str,
        columns: str = "*",
        order_by: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Read rows from a table (``columns`` other than '*' is ignored)."""
        sql = f"SELECT * FROM {table}"
        if order_by:
            self._check_columns(table, [order_by])
            sql += f" ORDER BY {order_by} {'ASC' if ascending else 'DESC'}"
        else:
            self._columns(table)
        if limit is not None:
            sql += f" LIMIT {int(limit)}"
        rows = self._fetch(sql)
        logger.info(f"Loaded {len(rows)} row(s) from {table}")
        return rows

    def update(self, table: str, patch: Dict[str, Any], ids: Iterable[Any]) -> List[Dict[str, Any]]:
        """Apply the same patch to every row whose id is in ``ids``."""
        ids = [int(i) for i in ids]
        if not ids or not patch:
            return []
        self._check_columns(table, patch)
        encoded = self._encode(patch)
        assignments = ", ".join(f"{name} = ?" for name in encoded)
        placeholders = ", ".join("?" for _ in ids)
        self._execute(
            f"UPDATE {table} SET {assignments} WHERE id IN ({placeholders})",
            list(encoded.values()) + ids,
        )
        logger.info(f"Updated {len(ids)} row(s) in {table}: {sorted(patch)}")
        return self._fetch(f"SELECT * FROM {table} WHERE id IN ({placeholders})", ids)

    def update_one(self, table: str, patch: Dict[str, Any], row_id: Any) -> List[Dict[str, Any]]:
        """Apply a patch to a single row."""
        return self.update(table, patch, [row_id])

    def delete(self, table: str, ids: Iterable[Any]) -> None:
        """Delete every row whose id is in ``ids``."""
        ids = [int(i) for i in ids]
        if not ids:
            return
        self._columns(table)
        placeholders = ", ".join("?" for _ in ids)
        self._execute(f"DELETE FROM {table} WHERE id IN ({placeholders})", ids)
        logger.info(f"Deleted {len(ids)} row(s) from {table}")

    def insert(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored."""
        payload = {k: v for k, v in payload.items() if k != "id"}
        self._check_columns(table, payload)
        encoded = self._encode(payload)
        names = ", ".join(encoded)
        placeholders = ", ".join("?" for _ in encoded)
        with self._lock:
            new_id = self.conn.execute(f"SELECT nextval('{_sequence(table)}')").fetchone()[0]
            self._execute(
                f"INSERT INTO {table} (id, {names}) VALUES (?, {placeholders})",
                [new_id] + list(encoded.values()),
            )
        logger.info(f"Inserted row {new_id} into {table}")
        return self._fetch(f"SELECT * FROM {table} WHERE id = ?", [new_id])[0]

    def close(self) -> None:
        with self._lock:
            self.conn.close()


def _sequence(table: str) -> str:
    return "parcelas_id_seq" if table == TABLE_INSTALLMENTS else "entidades_id_seq"
