from typing import Iterator
from fastapi import Request
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from customer_directory.domain.models import Base

class Database:
    """Process-wide store handle: one engine, one session factory."""

    def __init__(self, url: str, echo: bool = False):
        connect_args = {}
        if url.startswith("sqlite"):
            # Sync endpoints run in the threadpool and share the engine
            connect_args = {"check_same_thread": False}
        self.url = url
        self.engine: Engine = create_engine(url, echo=echo, future=True, connect_args=connect_args)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False)

    def init_models(self) -> None:
        Base.metadata.create_all(self.engine)

    def has_schema(self) -> bool:
        tables = set(inspect(self.engine).get_table_names())
        return {"customer", "address"} <= tables

    def has_migration_history(self) -> bool:
        return "alembic_version" in inspect(self.engine).get_table_names()

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()

def get_database(request: Request) -> Database:
    return request.app.state.database

def get_db(request: Request) -> Iterator[Session]:
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
