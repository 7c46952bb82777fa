# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..core.envelope import Response, respond
from ..core.state import AppState
from ..tasks import task_api
from ..users import user_api


@dataclass(slots=True)
class ConsoleSession:
    """Per-console context: who is "logged in" (a username lookup, no auth)."""

    current_user_id: str | None = None
    current_username: str | None = None


CommandHandler = Callable[[AppState, list[str], ConsoleSession], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /task, /user, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        session: ConsoleSession | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]
        session = session if session is not None else ConsoleSession()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args, session)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument / output helpers ----

_FIELD_ALIASES = {
    "title": "title",
    "description": "description",
    "desc": "description",
    "priority": "priority",
    "status": "status",
    "assignedto": "assignedTo",
    "assigned_to": "assignedTo",
    "assignee": "assignedTo",
    "dependencies": "dependencies",
    "deps": "dependencies",
}


def parse_fields(args: list[str]) -> dict[str, Any]:
    """
    Turn ["title=Write docs", "deps=a,b", "assignee="] into a client payload.

    Only keys that appear are included; "assignee=" (empty) means unassign
    and "deps=" means no dependencies.
    """
    payload: dict[str, Any] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got {arg!r}")
        field_name = _FIELD_ALIASES.get(key.strip().lower())
        if field_name is None:
            raise ValueError(f"Unknown field {key!r}")
        if field_name == "dependencies":
            payload[field_name] = [d.strip() for d in value.split(",") if d.strip()]
        else:
            payload[field_name] = value
    return payload


def _format_task(t: dict[str, Any]) -> str:
    deps = ", ".join(t.get("dependencies") or []) or "-"
    assignee = t.get("assignedTo") or "-"
    return (
        f"[{t['id']}] {t['title']} ({t['priority']}, {t['status']})"
        f" assignee={assignee} deps={deps}"
    )


def _format_user(u: dict[str, Any]) -> str:
    return f"[{u['id']}] {u['username']} <{u['email']}>"


def render(response: Response) -> str:
    """Readable text for an envelope response."""
    code, body = response
    if not body.get("success"):
        if "errors" in body:
            return f"Error ({code}):\n" + "\n".join(f"  - {e}" for e in body["errors"])
        return f"Error ({code}): {body.get('message', 'unknown error')}"

    lines: list[str] = []
    if body.get("message"):
        lines.append(str(body["message"]))
    if "task" in body:
        lines.append(_format_task(body["task"]))
    if "user" in body:
        lines.append(_format_user(body["user"]))
    if "tasks" in body:
        tasks = body["tasks"]
        lines.append(f"{len(tasks)} task(s)")
        lines.extend(f"  {_format_task(t)}" for t in tasks)
    if "users" in body:
        users = body["users"]
        lines.append(f"{len(users)} user(s)")
        lines.extend(f"  {_format_user(u)}" for u in users)
    return "\n".join(lines) or "OK"


# ---- handlers ----


def cmd_help(state: AppState, args: list[str], session: ConsoleSession) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], session: ConsoleSession) -> str:
    counts = task_api.health_summary(state)
    guard = "ON" if state.guard_done_on_update else "OFF"
    who = session.current_username or "(nobody)"
    return (
        "Status:\n"
        f"  Users: {counts['users']}\n"
        f"  Tasks: {counts['tasks']}\n"
        f"  Done guard on update: {guard}\n"
        f"  Current user: {who}"
    )


_USER_USAGE = (
    "Usage:\n"
    "  /user add <username> <email>\n"
    "  /user list\n"
    "  /user show <user_id>\n"
    "  /user login <username>\n"
    "  /user logout"
)


def cmd_user(state: AppState, args: list[str], session: ConsoleSession) -> str:
    if not args:
        return _USER_USAGE

    sub = args[0].lower()
    rest = args[1:]

    if sub == "add":
        if len(rest) != 2:
            return "Usage: /user add <username> <email>"
        username, email = rest
        return render(
            respond(
                lambda: user_api.create_user(state, username=username, email=email),
                key="user",
                message="User created successfully",
                status=201,
            )
        )

    if sub == "list":
        return render(respond(lambda: user_api.list_users(state), key="users"))

    if sub == "show":
        if len(rest) != 1:
            return "Usage: /user show <user_id>"
        return render(respond(lambda: user_api.get_user(state, rest[0]), key="user"))

    if sub == "login":
        if len(rest) != 1:
            return "Usage: /user login <username>"
        response = respond(lambda: user_api.find_user_by_username(state, rest[0]), key="user")
        code, body = response
        if body.get("success"):
            session.current_user_id = body["user"]["id"]
            session.current_username = body["user"]["username"]
            logger.debug("Console user set to %s", session.current_username)
            return f"Logged in as {session.current_username}."
        return render(response)

    if sub == "logout":
        session.current_user_id = None
        session.current_username = None
        return "Logged out."

    return "Unknown /user subcommand.\n" + _USER_USAGE


_TASK_USAGE = (
    "Usage:\n"
    "  /task add title=... description=... priority=Low|Medium|High "
    "status='To Do'|'In Progress'|Done [assignee=<user_id>] [deps=id1,id2]\n"
    "  /task list [priority=...] [status=...] [assignee=...]\n"
    "  /task show <task_id>\n"
    "  /task update <task_id> key=value ...\n"
    "  /task done <task_id>\n"
    "  /task rm <task_id>\n"
    "  /task blocked   - tasks that cannot be completed right now\n"
    "  /task waiting   - open tasks that have any dependencies\n"
    "  /task mine      - tasks assigned to the current user"
)


def cmd_task(state: AppState, args: list[str], session: ConsoleSession) -> str:
    if not args:
        return _TASK_USAGE

    sub = args[0].lower()
    rest = args[1:]

    payload: dict[str, Any] = {}
    if sub in ("add", "update", "list"):
        fields_args = rest[1:] if sub == "update" else rest
        try:
            payload = parse_fields(fields_args)
        except ValueError as e:
            return f"{e}.\n{_TASK_USAGE}"

    if sub == "add":
        return render(
            respond(
                lambda: task_api.create_task_from_payload(state, payload),
                key="task",
                message="Task created successfully",
                status=201,
            )
        )

    if sub == "list":
        return render(
            respond(
                lambda: task_api.list_tasks(
                    state,
                    priority=payload.get("priority") or None,
                    status=payload.get("status") or None,
                    assigned_to=payload.get("assignedTo") or None,
                ),
                key="tasks",
            )
        )

    if sub == "update":
        if not rest:
            return "Usage: /task update <task_id> key=value ..."
        task_id = rest[0]
        return render(
            respond(
                lambda: task_api.update_task_from_payload(state, task_id, payload),
                key="task",
                message="Task updated successfully",
            )
        )

    if sub in ("show", "done", "rm"):
        if len(rest) != 1:
            return f"Usage: /task {sub} <task_id>"
        task_id = rest[0]
        if sub == "show":
            return render(respond(lambda: task_api.get_task(state, task_id), key="task"))
        if sub == "done":
            return render(
                respond(
                    lambda: task_api.complete_task(state, task_id),
                    key="task",
                    message="Task marked as complete",
                )
            )
        return render(
            respond(lambda: task_api.delete_task(state, task_id), message="Task deleted successfully")
        )

    if sub == "blocked":
        return render(respond(lambda: task_api.list_blocked_tasks(state), key="tasks"))

    if sub == "waiting":
        return render(
            respond(lambda: task_api.list_tasks_with_open_dependencies(state), key="tasks")
        )

    if sub == "mine":
        if not session.current_user_id:
            return "Nobody is logged in. Use /user login <username> first."
        user_id = session.current_user_id
        return render(respond(lambda: task_api.list_user_tasks(state, user_id), key="tasks"))

    return "Unknown /task subcommand.\n" + _TASK_USAGE


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show user/task counts and current user.")
registry.register("user", cmd_user, help_text="Users: /user add | list | show | login | logout.")
registry.register(
    "task",
    cmd_task,
    help_text="Tasks: /task add | list | show | update | done | rm | blocked | waiting | mine.",
    aliases=["t"],
)
