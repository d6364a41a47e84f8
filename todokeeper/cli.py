"""Command line for keeping a list of todo tasks."""

from __future__ import annotations

import argparse
import sqlite3
import sys
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

from todokeeper import db, interaction


class TodoError(Exception):
    """A failure reported to the user."""


class InputError(TodoError):
    def __init__(self, input: str, expect: str) -> None:
        super().__init__(f"invalid input '{input}', expected '{expect}'")
        self.input = input
        self.expect = expect


class UserCancelled(TodoError):
    def __init__(self) -> None:
        super().__init__("operator cancelled by user")


_STATUS_LABELS = {
    db.TaskStatus.OPEN: "OPEN",
    db.TaskStatus.CLOSED: "CLOSE",
    db.TaskStatus.DELETED: "DELETE",
}


@contextmanager
def _database(cases: str) -> Iterator[None]:
    try:
        yield
    except db.DBError as exc:
        raise TodoError(f"database error when {cases}") from exc


@contextmanager
def _open_connection(cases: str) -> Iterator[sqlite3.Connection]:
    with _database(cases):
        conn = db.create_connection()
    try:
        yield conn
    finally:
        conn.close()


def _require_task(task: str) -> None:
    if not task:
        raise InputError(task, "string task")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo", description="todo command line tools")
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("add", help="add a task")
    commands.add_parser("del", help="delete a task")
    commands.add_parser("done", help="mark a task as done")
    list_parser = commands.add_parser("list", help="list tasks")
    list_parser.add_argument("--all", action="store_true", help="include closed and deleted tasks")
    commands.add_parser("clean", help="remove old closed and deleted tasks")
    return parser


def format_open_task(task: db.OpenTask) -> str:
    return f"{task.id}({task.create_time}): {task.task}"


def format_task(task: db.Task) -> str:
    finished = task.finished_time or ""
    label = _STATUS_LABELS[task.status]
    return f"{task.id}[{label}]({task.create_time} - {finished}): {task.task}"


def open_task_lines(conn: sqlite3.Connection) -> list[str]:
    with _database("list task"):
        db.ensure_table(conn)
        tasks = db.list_tasks(conn)
    return [format_open_task(task) for task in tasks]


def all_task_lines(conn: sqlite3.Connection) -> list[str]:
    with _database("list task"):
        db.ensure_table(conn)
        tasks = db.list_all_tasks(conn)
    return [format_task(task) for task in tasks]


def add_task(conn: sqlite3.Connection, task: str) -> list[str]:
    """Store a new task and return the open task listing."""
    _require_task(task)
    with _database("add task"):
        db.ensure_table(conn)
        db.insert_task(conn, task)
    return open_task_lines(conn)


def select_task(
    conn: sqlite3.Connection,
    chooser: Callable[[Sequence[str]], int] | None = None,
) -> db.OpenTask | None:
    """Ask the user to pick an open task; None means the user cancelled."""
    chooser = chooser or interaction.select
    with _database("select task"):
        db.ensure_table(conn)
        tasks = db.list_tasks(conn)
    names = [task.task for task in tasks] + ["cancel"]
    try:
        index = chooser(names)
    except interaction.InteractionError as exc:
        raise TodoError("user interaction error") from exc
    return None if index == len(tasks) else tasks[index]


def delete_selected_task(
    conn: sqlite3.Connection,
    chooser: Callable[[Sequence[str]], int] | None = None,
) -> db.OpenTask:
    task = select_task(conn, chooser)
    if task is None:
        raise UserCancelled()
    with _database("delete task"):
        db.delete_task(conn, task.id)
    return task


def done_selected_task(
    conn: sqlite3.Connection,
    chooser: Callable[[Sequence[str]], int] | None = None,
) -> db.OpenTask:
    task = select_task(conn, chooser)
    if task is None:
        raise UserCancelled()
    with _database("done task"):
        db.done_task(conn, task.id)
    return task


def clean_tasks(conn: sqlite3.Connection) -> list[str]:
    """Remove outdated tasks and return the full task listing."""
    with _database("clean task"):
        db.ensure_table(conn)
        db.clean_outdate_task(conn)
    return all_task_lines(conn)


def _report(error: BaseException) -> str:
    lines = [str(error)]
    causes = []
    cause = error.__cause__
    while cause is not None:
        causes.append(str(cause))
        cause = cause.__cause__
    if causes:
        lines += ["", "Caused by these errors (recent errors listed first):"]
        lines += [f"{number:>3}: {message}" for number, message in enumerate(causes, 1)]
    return "\n".join(lines)


def _run(args: argparse.Namespace) -> list[str]:
    if args.command == "add":
        task = interaction.read_input("task")
        _require_task(task)
        with _open_connection("add task") as conn:
            return add_task(conn, task)
    if args.command == "del":
        with _open_connection("delete task") as conn:
            task = delete_selected_task(conn)
        return [f"delete task {task.task} with id {task.id}"]
    if args.command == "done":
        with _open_connection("done task") as conn:
            task = done_selected_task(conn)
        return [f"done task '{task.task}' with id {task.id}"]
    if args.command == "clean":
        with _open_connection("clean task") as conn:
            return clean_tasks(conn)
    with _open_connection("list task") as conn:
        return all_task_lines(conn) if args.all else open_task_lines(conn)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        lines = _run(args)
    except TodoError as exc:
        print(f"Error stack:\n{_report(exc)}", file=sys.stderr)
        return 1
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())