from contextlib import contextmanager
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlalchemy import create_engine, event
from storefront.core.config import settings
from storefront.core.errors import StoreError

class Base(DeclarativeBase): pass

def make_engine(url: str, echo: bool = False):
    if url.startswith('sqlite'):
        # one shared connection so an in-memory database survives across sessions
        engine = create_engine(url, echo=echo, connect_args={'check_same_thread': False}, poolclass=StaticPool)

        @event.listens_for(engine, 'connect')
        def _enable_foreign_keys(dbapi_conn, _):
            cur = dbapi_conn.cursor()
            cur.execute('PRAGMA foreign_keys=ON')
            cur.close()

        return engine
    return create_engine(url, echo=echo, pool_pre_ping=True)

engine = make_engine(settings.POSTGRES_DSN, echo=settings.SQL_ECHO)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

def init_db(bind=None):
    import storefront.db.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)

@contextmanager
def transaction(db: Session):
    """Commit everything done inside the block, or nothing.

    Any exception rolls the session back. Driver and ORM failures surface
    as ``StoreError``; domain errors propagate unchanged.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError(f'database failure: {exc.__class__.__name__}') from exc
    except Exception:
        db.rollback()
        raise
