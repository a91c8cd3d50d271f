# storefront/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.utils.settings import DATABASE_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> bool:
    """
    Tworzy tabele przy starcie. Brak bazy nie blokuje startu,
    koszyki dzialaja wtedy tylko w pamieci.
    """
    #rejestracja modeli w Base.metadata
    from storefront.data.models import CartStoreModel  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.warning(f"Database unavailable, carts fall back to memory: {e}")
        return False

    logger.info(f"Database tables ready: {list(Base.metadata.tables.keys())}")
    return True
