"""SQLite storage for todo tasks."""

from __future__ import annotations

import enum
import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path


class DBError(Exception):
    """Raised when the task database cannot be opened, queried or understood."""


class TaskStatus(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"
    DELETED = "deleted"


@dataclass(frozen=True)
class OpenTask:
    id: int
    create_time: str
    task: str


@dataclass(frozen=True)
class Task:
    id: int
    create_time: str
    finished_time: str | None
    task: str
    status: TaskStatus


_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS todo
(
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    create_time TIMESTAMP NOT NULL DEFAULT (DATETIME('now', 'localtime')),
    finished_time TIMESTAMP,
    task TEXT NOT NULL,
    status TEXT NOT NULL CHECK (status IN ('open', 'closed', 'deleted')) DEFAULT 'open'
)
"""

_INSERT = "INSERT INTO todo (task) VALUES (?)"

_DELETE = "UPDATE todo SET status = 'deleted' WHERE id = ?"

_DONE = """
UPDATE todo
SET status = 'closed',
    finished_time = DATETIME('now', 'localtime')
WHERE id = ?
"""

_CLEAN = """
DELETE FROM todo
WHERE (status = 'closed' OR status = 'deleted') AND
    (finished_time IS NULL OR finished_time <= DATETIME('now', 'localtime', '-1 weeks'))
"""

_LIST_OPEN = "SELECT id, create_time, task FROM todo WHERE status = 'open'"

_LIST_ALL = "SELECT id, create_time, finished_time, status, task FROM todo"


def _run(conn: sqlite3.Connection, sql: str, params: tuple = ()) -> list[tuple]:
    try:
        with conn:
            return conn.execute(sql, params).fetchall()
    except sqlite3.Error as exc:
        raise DBError(f"failed to run sql '{sql.strip()}'") from exc


def create_connection(home: str | os.PathLike[str] | None = None) -> sqlite3.Connection:
    """Open the task database under ``<home>/.todo``, creating the directory."""
    if home is None:
        try:
            home = os.environ["HOME"]
        except KeyError as exc:
            raise DBError("cannot find environment 'HOME'") from exc
    dir_path = Path(home) / ".todo"
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DBError(f"failed to create directory in '{dir_path}'") from exc
    db_path = dir_path / "todo.db"
    try:
        return sqlite3.connect(db_path, isolation_level=None)
    except sqlite3.Error as exc:
        raise DBError(f"failed to connect to database in '{db_path}'") from exc


def ensure_table(conn: sqlite3.Connection) -> None:
    _run(conn, _CREATE_TABLE)


def insert_task(conn: sqlite3.Connection, task: str) -> None:
    _run(conn, _INSERT, (task,))


def delete_task(conn: sqlite3.Connection, task_id: int) -> None:
    _run(conn, _DELETE, (task_id,))


def done_task(conn: sqlite3.Connection, task_id: int) -> None:
    _run(conn, _DONE, (task_id,))


def clean_outdate_task(conn: sqlite3.Connection) -> None:
    """Remove closed and deleted tasks finished over a week ago or never finished."""
    _run(conn, _CLEAN)


def list_tasks(conn: sqlite3.Connection) -> list[OpenTask]:
    return [OpenTask(*row) for row in _run(conn, _LIST_OPEN)]


def list_all_tasks(conn: sqlite3.Connection) -> list[Task]:
    tasks = []
    for task_id, create_time, finished_time, status, task in _run(conn, _LIST_ALL):
        try:
            task_status = TaskStatus(status)
        except ValueError as exc:
            raise DBError("invalid database") from exc
        tasks.append(Task(task_id, create_time, finished_time, task, task_status))
    return tasks