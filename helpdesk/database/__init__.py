# helpdesk/database/__init__.py
# Initializes SQLAlchemy components: Engine, session factory, Base metadata.
# The Database object is built once at startup and handed to every repository.
# Uses local imports for logger/errors to prevent circular dependencies during Alembic runs.

import threading
from typing import Optional, Generator
from contextlib import contextmanager
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

# Importar Base diretamente - ESSENCIAL para Alembic
from .base import Base


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the SQLAlchemy engine and the session factory.
    """

    def __init__(self, database_uri: str, pool_size: int = 10, max_overflow: int = 20):
        self.database_uri = database_uri
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker[Session]] = None
        self._lock = threading.Lock()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database engine has not been initialized. Call init() first.")
        return self._engine

    def init(self, seed: bool = False) -> Engine:
        """
        Initializes the SQLAlchemy engine, session factory, and database schema.
        Should be called once during application startup.
        """
        # --- Importações locais ---
        from helpdesk.utils.logger import logger
        from helpdesk.api.errors import DatabaseError, ConfigurationError
        # -------------------------

        with self._lock:
            if self._engine and self._session_factory:
                logger.warning("SQLAlchemy engine and session factory already initialized.")
                return self._engine

            if not self.database_uri:
                raise ConfigurationError("Database URI is missing in configuration.")

            logger.info("Initializing SQLAlchemy engine and session factory...")
            engine = None
            try:
                # 1. Create the Engine (SQLite has no connection pool sizing)
                engine_kwargs = {"echo": False}
                if not self.database_uri.startswith("sqlite"):
                    engine_kwargs.update(
                        pool_size=self.pool_size,
                        max_overflow=self.max_overflow,
                        pool_recycle=3600,
                    )
                engine = create_engine(self.database_uri, **engine_kwargs)
                if self.database_uri.startswith("sqlite"):
                    event.listen(engine, "connect", _enable_sqlite_foreign_keys)

                # 2. Test Connection
                try:
                    with engine.connect():
                        logger.info("Database connection successful.")
                except SQLAlchemyError as conn_err:
                    logger.critical(f"Database connection failed: {conn_err}", exc_info=True)
                    raise DatabaseError(f"Failed to connect to the database: {conn_err}") from conn_err

                # 3. Create Session Factory
                self._session_factory = sessionmaker(
                    autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
                )
                logger.info("SQLAlchemy session factory created.")

                # 4. Initialize Schema (uses the engine)
                from .schema_manager import SchemaManager
                try:
                    logger.info("Initializing database schema...")
                    SchemaManager(engine).initialize_schema(seed=seed)
                    logger.info("Database schema initialization complete.")
                except Exception as schema_err:
                    logger.critical(f"Database schema initialization failed: {schema_err}", exc_info=True)
                    engine.dispose()
                    raise DatabaseError(f"Schema initialization failed: {schema_err}") from schema_err

                self._engine = engine
                logger.info("SQLAlchemy initialization complete.")
                return self._engine

            except (DatabaseError, ConfigurationError):
                 raise
            except SQLAlchemyError as e:
                 logger.critical(f"SQLAlchemy engine/session factory initialization failed: {e}", exc_info=True)
                 raise DatabaseError(f"SQLAlchemy initialization failed: {e}") from e
            except Exception as e:
                 logger.critical(f"Unexpected error during SQLAlchemy initialization: {e}", exc_info=True)
                 if engine is not None:
                     engine.dispose()
                 raise DatabaseError(f"Unexpected error during database initialization: {e}") from e

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Context manager to get a database session.
        Manages session lifecycle (commit, rollback, close).
        """
        from helpdesk.utils.logger import logger
        from helpdesk.api.errors import DatabaseError

        if not self._session_factory:
            raise RuntimeError("Database session factory has not been initialized.")

        db: Optional[Session] = None
        try:
            db = self._session_factory()
            yield db
            db.commit()
            logger.debug("Database session committed successfully.")
        except SQLAlchemyError as sql_ex:
            logger.error(f"Database error occurred in session: {sql_ex}", exc_info=True)
            if db:
                db.rollback()
                logger.warning("Database session rolled back due to SQLAlchemyError.")
            raise DatabaseError(f"Database operation failed: {sql_ex}") from sql_ex
        except Exception:
            if db:
                db.rollback()
                logger.debug("Database session rolled back due to exception.")
            raise
        finally:
            if db:
                db.close()
                logger.debug("Database session closed.")

    def dispose(self):
        """Closes all connections in the engine's pool. Call during application shutdown."""
        from helpdesk.utils.logger import logger

        with self._lock:
            if self._engine:
                logger.info("Disposing SQLAlchemy engine connection pool...")
                try:
                    self._engine.dispose()
                    logger.info("SQLAlchemy engine connection pool disposed.")
                except Exception as e:
                    logger.error(f"Error disposing SQLAlchemy engine pool: {e}", exc_info=True)
                finally:
                    self._engine = None
                    self._session_factory = None
            else:
                logger.debug("SQLAlchemy engine shutdown called, but engine already disposed or not initialized.")


__all__ = [
    "Database",
    "Base", # Essencial
]
