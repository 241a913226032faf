"""
Command-line front end for the task console.

Usage:
    python -m task_manager.console login <TOKEN>
    python -m task_manager.console list
    python -m task_manager.console add --title "Write report" --deadline 2026-11-01T09:00:00Z
    python -m task_manager.console edit 3 --status completed
    python -m task_manager.console delete 3 --yes
"""

import argparse
import logging
import sys
from typing import List, Optional

from task_manager.console.client import GatewayClient
from task_manager.console.config import ConsoleSettings
from task_manager.console.errors import GatewayError
from task_manager.console.session import CredentialStore, Session
from task_manager.console.state import TaskConsole
from task_manager.core.logging import configure_logging
from task_manager.models.task import TaskStatus
from task_manager.schemas.task import TaskRead
from task_manager.utils.time import utc_now

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_SESSION = 2


def render_task_line(task: TaskRead) -> str:
    overdue = task.deadline <= utc_now() and task.status != TaskStatus.COMPLETED.value
    marker = " (overdue)" if overdue else ""
    return f"#{task.id:<5} [{task.status:<11}] {task.deadline:%Y-%m-%d %H:%M}{marker}  {task.title}"


def render_task_detail(task: TaskRead) -> str:
    lines = [
        f"Task #{task.id}: {task.title}",
        f"  Status:   {task.status}",
        f"  Deadline: {task.deadline.isoformat()}",
        f"  Created:  {task.created_at.isoformat()}",
        f"  Updated:  {task.updated_at.isoformat()}",
    ]
    if task.description:
        lines.append("")
        lines.append(f"  {task.description}")
    return "\n".join(lines)


def render_errors(console: TaskConsole) -> str:
    lines = []
    if console.general_error:
        lines.append(console.general_error)
    for field, messages in console.errors.items():
        for message in messages:
            lines.append(f"{field}: {message}")
    return "\n".join(lines)


def _confirm_prompt(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="task-console", description="Manage your tasks")
    parser.add_argument("-v", "--verbose", action="store_true", help="log API calls")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="store a bearer token")
    login.add_argument("token")
    sub.add_parser("logout", help="forget the stored token")
    sub.add_parser("list", help="list your tasks")

    show = sub.add_parser("show", help="show one task")
    show.add_argument("task_id", type=int)

    add = sub.add_parser("add", help="create a task")
    add.add_argument("--title", required=True)
    add.add_argument("--description", default="")
    add.add_argument("--deadline", required=True, help="ISO date or date-time")
    add.add_argument("--status", default=TaskStatus.PENDING.value,
                     choices=[s.value for s in TaskStatus])

    edit = sub.add_parser("edit", help="update a task")
    edit.add_argument("task_id", type=int)
    edit.add_argument("--title")
    edit.add_argument("--description")
    edit.add_argument("--deadline")
    edit.add_argument("--status", choices=[s.value for s in TaskStatus])

    delete = sub.add_parser("delete", help="delete a task")
    delete.add_argument("task_id", type=int)
    delete.add_argument("-y", "--yes", action="store_true", help="do not ask for confirmation")

    return parser


def login(store: CredentialStore, client: GatewayClient) -> int:
    """Check the client's token against the API; store it with the user only if accepted."""
    session = client.session
    try:
        session.user = client.current_user()
    except GatewayError as exc:
        print(exc.message, file=sys.stderr)
        return EXIT_FAILED
    store.save(session)
    print(f"Logged in as {session.user.name} <{session.user.email}>")
    return EXIT_OK


def run_command(args: argparse.Namespace, console: TaskConsole) -> int:
    """Execute one parsed command against a mounted console."""
    if not console.mount():
        print(render_errors(console), file=sys.stderr)
        return EXIT_FAILED

    if args.command == "list":
        if not console.tasks:
            print("No tasks yet. Create your first task to get started!")
        for task in console.tasks:
            print(render_task_line(task))
        return EXIT_OK

    if args.command == "add":
        console.draft.title = args.title
        console.draft.description = args.description
        console.draft.deadline = args.deadline
        console.draft.status = args.status
        task = console.submit_create()
        if task is None:
            print(render_errors(console), file=sys.stderr)
            return EXIT_FAILED
        print(f"Created task #{task.id}")
        return EXIT_OK

    if args.command == "show":
        task = console.open(args.task_id)
        if task is None:
            print(render_errors(console), file=sys.stderr)
            return EXIT_FAILED
        print(render_task_detail(task))
        return EXIT_OK

    task = console.find(args.task_id)
    if task is None:
        print("Task not found", file=sys.stderr)
        return EXIT_FAILED

    if args.command == "edit":
        console.start_edit(task)
        for field in ("title", "description", "deadline", "status"):
            value = getattr(args, field)
            if value is not None:
                setattr(console.draft, field, value)
        updated = console.submit_update()
        if updated is None:
            print(render_errors(console), file=sys.stderr)
            return EXIT_FAILED
        print(render_task_detail(updated))
        return EXIT_OK

    if args.command == "delete":
        confirm = (lambda _prompt: True) if args.yes else _confirm_prompt
        if not console.delete(task.id, confirm):
            if console.general_error or console.errors:
                print(render_errors(console), file=sys.stderr)
                return EXIT_FAILED
            print("Cancelled")
            return EXIT_OK
        print(f"Deleted task #{task.id}")
        return EXIT_OK

    raise ValueError(f"unknown command {args.command!r}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    settings = ConsoleSettings()
    store = CredentialStore(settings.CREDENTIALS_PATH)

    if args.command == "login":
        session = Session(token=args.token)
        with GatewayClient(session, base_url=settings.API_BASE_URL, timeout=settings.TIMEOUT) as client:
            return login(store, client)
    if args.command == "logout":
        store.clear()
        print("Logged out")
        return EXIT_OK

    session = store.load()
    if session is None:
        print("Not logged in. Run: task-console login <TOKEN>", file=sys.stderr)
        return EXIT_NO_SESSION

    with GatewayClient(session, base_url=settings.API_BASE_URL, timeout=settings.TIMEOUT) as client:
        return run_command(args, TaskConsole(client))
