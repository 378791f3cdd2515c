# reckon

A terminal productivity tool that combines a daily journal with multi-day
task tracking. Everything lives in plain markdown files under `~/.reckon/`,
with an SQLite index (`~/.reckon/reckon.db`) kept alongside.

## Installation

```
pip install .
```

This installs the `rk` command.

## Daily journal

Each day gets a markdown file at `~/.reckon/journal/YYYY-MM-DD.md` with three
sections: **Intentions**, **Wins** and **Log**.

```
rk log Reviewed the design document
rk log [meeting:standup] 30m Sync with the team
rk log [break] 45m Lunch
```

Each log entry is stamped with the current time. An entry starting with
`[meeting:...]` or `[break]` is recorded as a meeting or a break.

When a journal file is read back, each `- HH:MM text` line under **Log**
becomes an entry: a `[task:<id>]` reference links it to a task,
`[meeting:...]` or `[break]` anywhere in the text sets its type, and a
duration such as `30m`, `2h` or `1h30m` is picked up from the text.

The first time today's journal is created, the open intentions of
yesterday's journal are carried into it, marked `[>]` with the date they came
from.

Print journals to stdout, for example to pass them to other tools:

```
rk today     # today's journal (an error if it has not been created yet)
rk week      # the last seven days that have a journal, oldest first
```

If you edit the markdown files by hand, rebuild the index from them:

```
rk rebuild
```

## Tasks

Tasks span several days and keep their own log. Each task is a markdown file
with YAML frontmatter under `~/.reckon/tasks/<id>.md`.

```
rk task new Write the quarterly report --tags work,writing
rk task list
rk task list --status active --tag work
rk task show <task-id>
rk task log <task-id> Drafted the introduction
rk task done <task-id>
```

`rk task list` shows the newest tasks first; with several `--tag` values only
tasks carrying all of them are listed. `rk task show` prints the task file.
`rk task log` writes to the task file and also adds a `[task:<id>]` entry to
today's journal. Task statuses are `active`, `done`, `waiting` and `someday`.

When a command fails, `rk` prints `Error: ...` to stderr and exits with
status 1.

## Interactive mode

Run `rk` with no arguments to open the full-screen curses interface. The
terminal must be at least 80×24; a smaller one shows a notice instead.

| Key            | Action                                        |
|----------------|-----------------------------------------------|
| `h` / `←`      | Previous day                                  |
| `l` / `→`      | Next day (never past today)                   |
| `t`            | Jump to today                                 |
| `tab`          | Next section, or switch panes in task mode    |
| `shift+tab`    | Previous section                              |
| `j`/`k`, `↑`/`↓` | Move within the focused section             |
| `i`            | Add intention                                 |
| `w`            | Add win                                       |
| `L`            | Add log entry (to the task in the task pane)  |
| `enter`        | Toggle the selected intention                 |
| `ctrl+t`       | Open the task picker over active tasks        |
| `ctrl+n`       | Create a new task                             |
| `ctrl+w`       | Close the task pane                           |
| `?`            | Toggle help                                   |
| `q` / `ctrl+c` | Quit                                          |

In the task picker, typing filters tasks by title or tag, `↑`/`↓` move,
`enter` opens the task beside the journal and `esc` cancels.

Changes made to journal files by other programs are picked up and reindexed
while the interface is running.

## What it does not do

- There is no notes or knowledge-base feature. A `~/.reckon/notes/`
  directory can be located by `reckon.config.notes_dir()`, but nothing uses it.
- Tasks cannot be deleted from the command line or the interface;
  `TaskService.delete` exists only in the library.
- The index has tables for global tasks, task notes and schedule items, and
  matching data classes exist in `reckon.journal.models`, but no command or
  screen reads or writes them.

## Development

```
pip install -e .[test]
pytest
```