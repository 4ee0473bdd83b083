# shopapi/data/database.py
from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from shopapi.utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # sqlite domyslnie ignoruje ON DELETE CASCADE / SET NULL
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Jawnie tworzony komponent bazy (engine + fabryka sesji).
    Otwierany przy starcie aplikacji, zamykany przy shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        is_sqlite = url.startswith("sqlite")
        kwargs = {}

        if is_sqlite:
            kwargs["connect_args"] = {"check_same_thread": False}
            # baza w pamieci zyje tylko w jednym polaczeniu
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, echo=echo, **kwargs)

        if is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
        )

    def create_all(self) -> None:
        # import modeli zeby zarejestrowac tabele w Base.metadata
        import shopapi.data.models  # noqa: F401

        logger.info(f"Creating tables: {sorted(Base.metadata.tables.keys())}")
        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        logger.info("Disposing database engine")
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
