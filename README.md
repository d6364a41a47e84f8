# todokeeper

A small to-do list for the terminal. Tasks live in a SQLite database at
`$HOME/.todo/todo.db`. The directory, the database and its table are created
on first use. The `HOME` environment variable must be set.

## Installation

```
pip install todokeeper
```

## Usage

Add a task. You are prompted with `task>> ` for the text. Input goes on line
by line until you enter an empty line, or until end of input or Ctrl-C. The
lines are joined together with nothing between them. An empty task is
refused. After the task is added, the open tasks are shown:

```
todo add
```

Show the open tasks, one per line as `id(created): task`:

```
todo list
```

Show every task, including closed and deleted ones, one per line as
`id[STATUS](created - finished): task`. `STATUS` is `OPEN`, `CLOSE` or
`DELETE`, and `finished` is empty for tasks that were never finished:

```
todo list --all
```

Mark a task as done or delete it. Both commands open a full-screen menu of the
open tasks followed by a `cancel` entry. Move with the Up and Down arrow keys
and press Enter to choose. Marking a task as done sets its finish time to now.
Deleting only marks the task as deleted. It stays in the database until it is
cleaned. Choosing `cancel` leaves the tasks unchanged and reports
`operator cancelled by user` as an error:

```
todo done
todo del
```

Remove old tasks, then show every remaining task as `todo list --all` does.
A closed or deleted task is removed when it has no finish time, or when it
was finished a week or more ago. Open tasks are never removed:

```
todo clean
```

`todo --version` prints the version.

If a command fails, `todo` prints `Error stack:` and the error to standard
error, followed by the errors that caused it, and exits with status 1.

## Library use

`todokeeper.db` holds the storage:

- `create_connection(home=None)` opens `<home>/.todo/todo.db`. By default
  `home` is `$HOME`.
- `ensure_table(conn)` creates the `todo` table if it is missing.
- `insert_task(conn, task)`, `done_task(conn, task_id)` and
  `delete_task(conn, task_id)` change the tasks.
- `clean_outdate_task(conn)` removes outdated tasks.
- `list_tasks(conn)` returns `OpenTask` records, with `id`, `create_time` and
  `task`.
- `list_all_tasks(conn)` returns `Task` records, with `id`, `create_time`,
  `finished_time`, `task` and a `TaskStatus` `status`.

Failures raise `DBError`.

`todokeeper.interaction` holds the terminal input:

- `read_input(prompt, reader=input)` reads the joined lines.
- `select(options, terminal=None)` shows the menu with `blessed` and returns
  the index that was chosen.
- `Menu` keeps the selection, with `move_up`, `move_down` and `render`.

Terminal failures raise `InteractionError`.

`todokeeper.cli` holds the commands as functions that take a connection:

- `add_task`, `open_task_lines`, `all_task_lines` and `clean_tasks` return the
  lines to print.
- `select_task`, `delete_selected_task` and `done_selected_task` take an
  optional `chooser` callable in place of the menu.

These functions raise `TodoError`, `InputError` or `UserCancelled`.
`main(argv=None)` runs the command line and returns the exit status.

## Development

```
pip install -e ".[test]"
pytest
```