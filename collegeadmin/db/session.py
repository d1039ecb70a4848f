# collegeadmin/db/session.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from collegeadmin.core.config import settings


def enable_sqlite_foreign_keys(engine: Engine) -> Engine:
    """
    SQLite не проверяет внешние ключи, пока PRAGMA не включена на каждом
    соединении. Без неё ondelete="CASCADE" / "SET NULL" молча игнорируются.
    """

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # SQLite по умолчанию запрещает доступ из других потоков
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
if engine.dialect.name == "sqlite":
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
