from __future__ import annotations

import re
from dataclasses import dataclass

from sqlalchemy.engine import make_url

TEST_DB_NAME_RE = re.compile(r"test", re.IGNORECASE)
ALLOWED_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "postgres", "millionaire_postgres"})


@dataclass(frozen=True, slots=True)
class IntegrationDbSafetyResult:
    is_safe: bool
    reason: str
    database_name: str
    host: str


def assess_integration_db_safety(database_url: str) -> IntegrationDbSafetyResult:
    parsed = make_url(database_url)
    db_name = (parsed.database or "").strip()
    host = (parsed.host or "").strip().lower()

    def _result(reason: str | None) -> IntegrationDbSafetyResult:
        return IntegrationDbSafetyResult(
            is_safe=reason is None,
            reason=reason or "ok",
            database_name=db_name,
            host=host,
        )

    if parsed.get_backend_name() != "postgresql":
        return _result("Only PostgreSQL test databases are supported.")
    if not db_name:
        return _result("Database name is empty.")
    if TEST_DB_NAME_RE.search(db_name) is None:
        return _result("Database name must contain 'test'.")
    if host not in ALLOWED_LOCAL_HOSTS:
        return _result("Host is not a local test database host.")
    return _result(None)


def assert_safe_integration_db(database_url: str) -> None:
    result = assess_integration_db_safety(database_url)
    if result.is_safe:
        return

    raise RuntimeError(
        "Refusing to touch a database that does not look like a local test database.\n"
        f"Reason: {result.reason}\n"
        f"Resolved DB: name='{result.database_name}' host='{result.host}'\n"
        "Required: a dedicated local PostgreSQL test DB, e.g. 'millionaire_test'."
    )
