from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Build an engine for the metadata store.

    In-memory SQLite gets a single shared connection, otherwise every session
    would see its own empty database.
    """
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, connect_args={"check_same_thread": False})
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def create_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=bind)


def init_db(bind: Engine) -> None:
    """Create the metadata tables if they do not exist yet."""
    # registers the models on Base.metadata
    import crowdfunding_fields.models  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("Metadata tables created (if not existing).")

