# gsi_orders/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from gsi_orders.utils.settings import DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # one shared in-memory db for every session (tests, local runs)
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_pre_ping": True}


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    # models have to be imported so they land in Base.metadata
    import gsi_orders.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables():
    import gsi_orders.data.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
