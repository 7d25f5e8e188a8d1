from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Generator, List, Mapping, Optional

from sqlalchemy import Connection, Engine, create_engine, make_url, text
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.pool import StaticPool

from .exceptions import ConfigError, StorageError
from .models import TodoEntity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    description: str = "description"
    done: str = "done"


_COLS = _Cols()

_CREATE_TABLE = text(
    f"""
    CREATE TABLE IF NOT EXISTS {_COLS.table} (
        {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
        {_COLS.description} TEXT NOT NULL,
        {_COLS.done} BOOLEAN NOT NULL DEFAULT FALSE
    )
    """
)
_SELECT_ALL = text(
    f"SELECT {_COLS.id}, {_COLS.description}, {_COLS.done} FROM {_COLS.table} ORDER BY {_COLS.id}"
)
_INSERT = text(f"INSERT INTO {_COLS.table} ({_COLS.description}) VALUES (:description)")
_DELETE = text(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = :id")
_UPDATE = text(
    f"UPDATE {_COLS.table} SET {_COLS.description} = :description, {_COLS.done} = :done "
    f"WHERE {_COLS.id} = :id"
)


# PUBLIC_INTERFACE
class TodoStore:
    """
    Storage gateway for todo items.

    Wraps a single SQLAlchemy engine whose connection pool is shared by every
    in-flight request. Each operation is one statement with bound parameters,
    committed on its own. Failures from the pool or the driver are raised as
    StorageError.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> "TodoStore":
        """
        Build a store and its connection pool from a database URL.

        Raises:
            ConfigError: if the URL cannot be parsed, names an unknown dialect,
                or its driver is not installed.
        """
        try:
            url = make_url(database_url)
            kwargs: dict[str, Any] = {}
            if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
                # In-memory databases live on a single shared connection
                kwargs["connect_args"] = {"check_same_thread": False}
                kwargs["poolclass"] = StaticPool
            engine = create_engine(url, **kwargs)
        except (ArgumentError, ImportError, ValueError) as e:
            raise ConfigError(f"DATABASE_URL is not a valid database URL: {e}") from e
        logger.info("Created database engine for %s", url.render_as_string(hide_password=True))
        return cls(engine)

    @contextmanager
    def _conn(self, action: str) -> Generator[Connection, None, None]:
        try:
            with self._engine.begin() as conn:
                yield conn
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to {action}") from e

    def _execute(self, action: str, statement, params: Optional[Mapping[str, Any]] = None) -> None:
        with self._conn(action) as conn:
            conn.execute(statement, params or {})

    def _row_to_entity(self, row) -> TodoEntity:
        return {
            "id": int(row.id),
            "description": str(row.description),
            "done": bool(row.done),
        }

    def init_schema(self) -> None:
        """Create the todos table if it does not exist yet."""
        self._execute("initialize schema", _CREATE_TABLE)

    def list_all(self) -> List[TodoEntity]:
        """Return every todo ordered by ascending id; empty list when there are none."""
        with self._conn("list todos") as conn:
            rows = conn.execute(_SELECT_ALL).fetchall()
        return [self._row_to_entity(r) for r in rows]

    def create(self, description: str) -> None:
        """Insert a todo; storage assigns the id and done defaults to false."""
        self._execute("create todo", _INSERT, {"description": description})

    def delete_by_id(self, todo_id: int) -> None:
        """Delete the todo with the given id. A missing id is not an error."""
        self._execute("delete todo", _DELETE, {"id": todo_id})

    def update_by_id(self, todo_id: int, description: str, done: bool) -> None:
        """Overwrite description and done of the todo with the given id. A missing id is not an error."""
        self._execute(
            "update todo",
            _UPDATE,
            {"id": todo_id, "description": description, "done": done},
        )

    def dispose(self) -> None:
        """Close all pooled connections."""
        self._engine.dispose()
