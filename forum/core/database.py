import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool

from forum.core.config import settings

# -----------------------
# Logging setup
# -----------------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# -----------------------
# SQLAlchemy engine
# -----------------------
def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for PostgreSQL (production) or SQLite (local runs and tests)."""
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        # Request handlers run in a thread pool; writers wait on the file lock
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
        )

    engine = create_engine(
        url,
        echo=echo,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        connect_args={"connect_timeout": 5},
    )

    @event.listens_for(engine, "connect")
    def set_timezone(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute(f"SET timezone='{settings.db_timezone}'")
        cursor.close()

    return engine


DATABASE_URL = settings.sqlalchemy_database_url

# Hide password in logs
safe_db_url = make_url(DATABASE_URL).render_as_string(hide_password=True)
logger.info(f"Connecting to database: {safe_db_url}")

engine = build_engine(DATABASE_URL, echo=settings.debug)

# -----------------------
# Test connection
# -----------------------
try:
    with engine.connect() as conn:
        logger.info("Database connection successful ✅")
except Exception as e:
    logger.error(f"Failed to connect to database ❌: {str(e)}")
    raise

# -----------------------
# Session and Base
# -----------------------
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# -----------------------
# Dependency for FastAPI
# -----------------------
def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database error occurred: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()
