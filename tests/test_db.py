import sqlite3

import pytest

from todokeeper import db


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    db.ensure_table(connection)
    yield connection
    connection.close()


def test_ensure_table_is_idempotent(conn):
    db.ensure_table(conn)
    db.insert_task(conn, "write report")
    db.ensure_table(conn)
    assert [t.task for t in db.list_tasks(conn)] == ["write report"]


def test_insert_and_list_open_tasks(conn):
    db.insert_task(conn, "first")
    db.insert_task(conn, "second")
    tasks = db.list_tasks(conn)
    assert [(t.id, t.task) for t in tasks] == [(1, "first"), (2, "second")]
    assert all(t.create_time for t in tasks)


def test_delete_marks_task_deleted(conn):
    db.insert_task(conn, "gone")
    db.insert_task(conn, "kept")
    db.delete_task(conn, 1)
    assert [t.task for t in db.list_tasks(conn)] == ["kept"]
    deleted = db.list_all_tasks(conn)[0]
    assert deleted.status is db.TaskStatus.DELETED
    assert deleted.finished_time is None


def test_done_closes_task_with_finish_time(conn):
    db.insert_task(conn, "finish me")
    db.done_task(conn, 1)
    assert db.list_tasks(conn) == []
    task = db.list_all_tasks(conn)[0]
    assert task.status is db.TaskStatus.CLOSED
    assert task.finished_time is not None
    assert task.finished_time >= task.create_time


def test_clean_removes_outdated_tasks(conn):
    db.insert_task(conn, "open one")
    db.insert_task(conn, "closed one")
    db.insert_task(conn, "deleted one")
    db.done_task(conn, 2)
    db.delete_task(conn, 3)
    db.clean_outdate_task(conn)
    assert [t.task for t in db.list_all_tasks(conn)] == ["open one", "closed one"]

    conn.execute("UPDATE todo SET finished_time = '2000-01-01 00:00:00' WHERE id = 2")
    conn.commit()
    db.clean_outdate_task(conn)
    assert [t.task for t in db.list_all_tasks(conn)] == ["open one"]


def test_unknown_status_is_invalid_database():
    connection = sqlite3.connect(":memory:")
    connection.execute(
        "CREATE TABLE todo (id INTEGER PRIMARY KEY, create_time TEXT,"
        " finished_time TEXT, task TEXT, status TEXT)"
    )
    connection.execute(
        "INSERT INTO todo VALUES (1, '2024-01-01 00:00:00', NULL, 'x', 'weird')"
    )
    connection.commit()
    with pytest.raises(db.DBError, match="invalid database"):
        db.list_all_tasks(connection)


def test_query_without_table_raises():
    connection = sqlite3.connect(":memory:")
    with pytest.raises(db.DBError, match="failed to run sql") as info:
        db.list_tasks(connection)
    assert isinstance(info.value.__cause__, sqlite3.Error)


def test_create_connection_creates_database(tmp_path):
    connection = db.create_connection(tmp_path)
    try:
        db.ensure_table(connection)
        db.insert_task(connection, "persisted")
    finally:
        connection.close()
    assert (tmp_path / ".todo" / "todo.db").is_file()
    again = db.create_connection(tmp_path)
    try:
        assert [t.task for t in db.list_tasks(again)] == ["persisted"]
    finally:
        again.close()


def test_create_connection_uses_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    connection = db.create_connection()
    try:
        db.ensure_table(connection)
        db.insert_task(connection, "from home")
        assert [t.task for t in db.list_tasks(connection)] == ["from home"]
    finally:
        connection.close()
    assert (tmp_path / ".todo" / "todo.db").is_file()
    again = sqlite3.connect(tmp_path / ".todo" / "todo.db")
    try:
        rows = again.execute("SELECT task FROM todo").fetchall()
    finally:
        again.close()
    assert rows == [("from home",)]


def test_create_connection_without_home(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    with pytest.raises(db.DBError, match="cannot find environment 'HOME'"):
        db.create_connection()


def test_create_connection_directory_failure(tmp_path):
    (tmp_path / ".todo").write_text("not a directory")
    with pytest.raises(db.DBError, match="failed to create directory"):
        db.create_connection(tmp_path)