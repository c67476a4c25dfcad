# backend/Auth/database.py
"""
One engine per process, one Session per request.

DATABASE_URL picks the backend (SQLite file by default). SQLite leaves
foreign keys unchecked unless every connection switches them on, so
engines built here (and the test engines) go through
`enforce_foreign_keys`.
"""
import os

from dotenv import load_dotenv
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./district.db")


def enforce_foreign_keys(engine: Engine) -> Engine:
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine, "connect")
    def _foreign_keys_on(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def make_engine(url: str, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return enforce_foreign_keys(create_engine(url, echo=False, **kwargs))


engine = make_engine(DATABASE_URL)


def init_db() -> None:
    import Auth.models  # noqa: F401
    import Records.models  # noqa: F401
    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
