from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from dashboard.core.config import settings


def serialize_sqlite_writers(eng: Engine) -> Engine:
    """Start every SQLite transaction with BEGIN IMMEDIATE.

    pysqlite defers BEGIN until the first write, so two sessions could both
    read the latest ledger row before either appends. Taking the write lock
    up front makes the read-then-append atomic, like FOR UPDATE on PostgreSQL.
    """

    @event.listens_for(eng, "connect")
    def _no_implicit_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return eng


engine = create_engine(settings.database_url, pool_pre_ping=True, future=True)
if engine.dialect.name == "sqlite":
    serialize_sqlite_writers(engine)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
