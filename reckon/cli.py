"""The ``rk`` command: journal, tasks and the interactive screen."""

from __future__ import annotations

import argparse
import datetime as dt
import sqlite3
import sys
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

from reckon import config
from reckon.journal.repository import JournalRepository
from reckon.journal.service import JournalService
from reckon.storage.database import Database
from reckon.storage.filesystem import FileStore
from reckon.task.models import Status
from reckon.task.parser import write_task
from reckon.task.repository import TaskRepository
from reckon.task.service import TaskService
from reckon.tui import app
from reckon.tui.model import Model
from reckon.watcher import Watcher

_ERRORS = (OSError, sqlite3.Error, LookupError, ValueError, RuntimeError)


class _CommandError(Exception):
    """A command failed; the message is ready to show."""


@contextmanager
def _failing(message: str) -> Iterator[None]:
    try:
        yield
    except _ERRORS as exc:
        raise _CommandError(f"{message}: {exc}") from exc


@contextmanager
def _services() -> Iterator[Tuple[JournalService, TaskService]]:
    db = Database(config.database_path())
    try:
        journal_service = JournalService(JournalRepository(db), FileStore())
        yield journal_service, TaskService(TaskRepository(db), journal_service)
    finally:
        db.close()


def _split_tags(value: str) -> List[str]:
    return [tag for tag in value.split(",") if tag]


def _print_tags(tags: Sequence[str]) -> None:
    if tags:
        print(f"  Tags: {', '.join(tags)}")


def _run_tui(args, journal_service: JournalService, task_service: TaskService) -> None:
    try:
        watcher: Optional[Watcher] = Watcher(journal_service)
    except OSError:
        watcher = None
    app.run(Model(journal_service, task_service, watcher))


def _log(args, journal_service: JournalService, task_service: TaskService) -> None:
    message = " ".join(args.message)
    with _failing("failed to get today's journal"):
        journal = journal_service.get_today()
    with _failing("failed to append log"):
        journal_service.append_log(journal, message)
    print(f"✓ Logged: {message}")


def _today(args, journal_service: JournalService, task_service: TaskService) -> None:
    with _failing("failed to get today's journal"):
        content = journal_service.get_journal_content(dt.date.today().strftime("%Y-%m-%d"))
    print(content, end="")


def _week(args, journal_service: JournalService, task_service: TaskService) -> None:
    with _failing("failed to get week's journals"):
        content = journal_service.get_week_content()
    print(content, end="")


def _rebuild(args, journal_service: JournalService, task_service: TaskService) -> None:
    print("Rebuilding database from markdown files...")
    with _failing("failed to rebuild database"):
        journal_service.rebuild()
    print("✓ Database rebuilt successfully")


def _task_new(args, journal_service: JournalService, task_service: TaskService) -> None:
    title = " ".join(args.title)
    with _failing("failed to create task"):
        task = task_service.create(title, args.tags)
    print(f"✓ Created task: {task.id}")
    print(f"  Title: {task.title}")
    _print_tags(task.tags)


def _task_list(args, journal_service: JournalService, task_service: TaskService) -> None:
    status = Status(args.status) if args.status else None
    with _failing("failed to list tasks"):
        tasks = task_service.list(status, args.tag)
    if not tasks:
        print("No tasks found")
        return
    print(f"Found {len(tasks)} task(s):\n")
    for task in tasks:
        print(f"[{task.status}] {task.title}")
        print(f"  ID: {task.id}")
        print(f"  Created: {task.created}")
        _print_tags(task.tags)
        print()


def _task_show(args, journal_service: JournalService, task_service: TaskService) -> None:
    with _failing("failed to get task"):
        task = task_service.get_by_id(args.task_id)
    print(write_task(task), end="")


def _task_log(args, journal_service: JournalService, task_service: TaskService) -> None:
    message = " ".join(args.message)
    with _failing("failed to append log"):
        task_service.append_log(args.task_id, message)
    print(f"✓ Logged to task {args.task_id}")
    print("  Also added to today's journal")


def _task_done(args, journal_service: JournalService, task_service: TaskService) -> None:
    with _failing("failed to mark task as done"):
        task_service.update_status(args.task_id, Status.DONE)
    print(f"✓ Marked task {args.task_id} as done")


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``rk`` and its subcommands."""
    parser = argparse.ArgumentParser(
        prog="rk",
        description="Reckon - a terminal-based productivity tool combining daily "
        "journaling, task management, and knowledge base.",
    )
    parser.set_defaults(handler=_run_tui)
    commands = parser.add_subparsers(dest="command", metavar="command")

    log = commands.add_parser("log", help="Append a log entry to today's journal")
    log.add_argument("message", nargs="+")
    log.set_defaults(handler=_log)

    today = commands.add_parser("today", help="Output today's journal to stdout")
    today.set_defaults(handler=_today)

    week = commands.add_parser("week", help="Output the last 7 days of journals to stdout")
    week.set_defaults(handler=_week)

    rebuild = commands.add_parser(
        "rebuild", help="Rebuild the SQLite database from markdown files"
    )
    rebuild.set_defaults(handler=_rebuild)

    task = commands.add_parser("task", help="Manage multi-day tasks")
    task.set_defaults(handler=lambda *_: task.print_help())
    task_commands = task.add_subparsers(dest="task_command", metavar="command")

    new = task_commands.add_parser("new", help="Create a new task")
    new.add_argument("title", nargs="+")
    new.add_argument(
        "--tags", type=_split_tags, action="extend", default=[],
        help="Task tags (comma-separated)",
    )
    new.set_defaults(handler=_task_new)

    listing = task_commands.add_parser("list", help="List tasks")
    listing.add_argument(
        "--status", default="", choices=[s.value for s in Status],
        help="Filter by status (active, done, waiting, someday)",
    )
    listing.add_argument(
        "--tag", type=_split_tags, action="extend", default=[], help="Filter by tags"
    )
    listing.set_defaults(handler=_task_list)

    show = task_commands.add_parser("show", help="Show task details")
    show.add_argument("task_id")
    show.set_defaults(handler=_task_show)

    task_log = task_commands.add_parser("log", help="Append a log entry to a task")
    task_log.add_argument("task_id")
    task_log.add_argument("message", nargs="+")
    task_log.set_defaults(handler=_task_log)

    done = task_commands.add_parser("done", help="Mark a task as done")
    done.add_argument("task_id")
    done.set_defaults(handler=_task_done)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run ``rk`` with ``argv``; return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        with _services() as (journal_service, task_service):
            args.handler(args, journal_service, task_service)
    except _CommandError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except _ERRORS as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())