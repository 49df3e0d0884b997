import logging
import math
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from config import Config
from hotel_console.database import ResultTable

logger = logging.getLogger(__name__)


class DatabaseConnectionError(Exception):
    """Raised when the initial connection cannot be opened."""


class DatabaseUnavailable(Exception):
    """Raised when the open connection is closed or lost mid-session."""


def calculate_distance(lat1, long1, lat2, long2):
    """
    Straight-line distance between two latitude/longitude pairs, treating them
    as planar coordinates. Deliberately not geodesic.
    """
    if None in (lat1, long1, lat2, long2):
        return None
    t1 = (float(lat1) - float(lat2)) ** 2
    t2 = (float(long1) - float(long2)) ** 2
    return math.sqrt(t1 + t2)


def _register_sqlite_functions(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("calculate_distance", 4, calculate_distance)


def build_database_url(host: str, port, database: str, user: str, password: str = "") -> URL:
    return URL.create(
        Config.DB_DRIVER,
        username=user,
        password=password or None,
        host=host,
        port=int(port),
        database=database,
    )


class DatabaseClient:
    """
    Holds the single connection used for the whole process.

    Every statement is committed on success and rolled back on failure, so a
    failed statement never leaves the connection in an aborted transaction.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._connection: Optional[Connection] = None

    @classmethod
    def from_url(cls, url, echo: bool = Config.DB_ECHO) -> "DatabaseClient":
        engine = create_engine(url, echo=echo)
        if engine.dialect.name == "sqlite":
            _register_sqlite_functions(engine)
        client = cls(engine)
        client.open()
        return client

    @classmethod
    def connect(cls, host: str, port, database: str, user: str, password: str = "") -> "DatabaseClient":
        try:
            url = build_database_url(host, port, database, user, password)
        except (TypeError, ValueError) as e:
            raise DatabaseConnectionError(f"Invalid connection settings: {e}") from e
        return cls.from_url(url)

    def open(self) -> None:
        try:
            self._connection = self.engine.connect()
        except SQLAlchemyError as e:
            self.engine.dispose()
            raise DatabaseConnectionError(str(e)) from e
        logger.info("Connected to %s", self.engine.url.render_as_string(hide_password=True))

    @property
    def connection(self) -> Connection:
        if self._connection is None or self._connection.closed:
            raise DatabaseUnavailable("Database connection is not open")
        return self._connection

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def _execute(self, sql: str, params: Optional[Dict[str, Any]] = None):
        connection = self.connection
        try:
            result = connection.execute(text(sql), params or {})
            if result.returns_rows:
                table = ResultTable.from_result(result)
            else:
                table = None
            rowcount = result.rowcount
            connection.commit()
        except SQLAlchemyError:
            self.rollback()
            raise
        return table, rowcount

    def execute_write(self, sql: str, params: Optional[Dict[str, Any]] = None) -> int:
        _, rowcount = self._execute(sql, params)
        return rowcount

    def execute_read(self, sql: str, params: Optional[Dict[str, Any]] = None) -> ResultTable:
        table, _ = self._execute(sql, params)
        if table is None:
            return ResultTable(columns=[])
        return table

    def execute_count(self, sql: str, params: Optional[Dict[str, Any]] = None) -> int:
        return self.execute_read(sql, params).row_count

    def current_sequence_value(self, sequence: str) -> Optional[int]:
        """
        Value most recently handed out for an identity column.
        Not atomic with the insert that produced it.
        """
        if self.dialect_name == "sqlite":
            value = self.execute_read("SELECT last_insert_rowid()").scalar()
        else:
            # identifier from Config, never user input
            value = self.execute_read(f"SELECT last_value FROM {sequence}").scalar()
        return int(value) if value is not None else None

    def rollback(self) -> None:
        if self._connection is None or self._connection.closed:
            return
        try:
            self._connection.rollback()
        except SQLAlchemyError as e:
            logger.warning("Rollback failed: %s", e)

    def close(self) -> None:
        """Release the connection. Safe to call more than once; never raises."""
        try:
            if self._connection is not None and not self._connection.closed:
                self._connection.close()
            self.engine.dispose()
            logger.info("Disconnected from database")
        except Exception as e:
            logger.warning("Ignoring error while closing the connection: %s", e)
        finally:
            self._connection = None


@contextmanager
def open_client(host: str, port, database: str, user: str, password: str = "") -> Iterator[DatabaseClient]:
    client = DatabaseClient.connect(host, port, database, user, password)
    try:
        yield client
    finally:
        client.close()
