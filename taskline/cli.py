from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .config import default_log_level, default_store_path
from .errors import ConversionError, CorruptLineError
from .models import Task, TaskProximity, TaskStatus
from .store import TaskStore
from .timestamp import Datetime

logger = logging.getLogger(__name__)


def _parse_datetime(text: str) -> Datetime:
    if text == "now":
        return Datetime.now()
    try:
        return Datetime.parse(text)
    except ConversionError as e:
        raise argparse.ArgumentTypeError(f"Invalid datetime '{text}'. Use YYYY-M-D.H:M or 'now'.") from e


def _store_path_from_args(ns: argparse.Namespace) -> Path:
    if getattr(ns, "file", None):
        return Path(ns.file).expanduser().resolve()
    return default_store_path()


def _open_store(path: Path, *, strict: bool = False) -> TaskStore:
    store = TaskStore()
    if path.exists():
        store.load(path, strict=strict)
    else:
        logger.debug("No task file at %s yet, starting empty", path)
    return store


def _save_store(store: TaskStore, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    store.save(path, atomic=True)


def _print_tasks(rows: list[tuple[int, Task]]) -> None:
    if not rows:
        print("No tasks found.")
        return
    print(f"{'#':>3}  {'WHEN':<16}  {'P':<2} {'ST':<2}  CONTENT")
    print("-" * 60)
    for index, t in rows:
        print(f"{index:>3}  {t.datetime.format():<16}  {t.proximity.code:<2} {t.status.code:<2}  {t.content}")


def _task_at(store: TaskStore, index: int) -> Optional[Task]:
    if 1 <= index <= len(store):
        return store[index - 1]
    return None


def cmd_add(ns: argparse.Namespace) -> int:
    path = _store_path_from_args(ns)
    store = _open_store(path)
    task = Task.create(ns.datetime, ns.proximity, " ".join(ns.content), status=ns.status)
    store.append(task)
    _save_store(store, path)
    print(f"Added task #{len(store)}: {task.content}")
    return 0


def cmd_list(ns: argparse.Namespace) -> int:
    path = _store_path_from_args(ns)
    store = _open_store(path)
    rows = []
    for index, t in enumerate(store, start=1):
        if ns.status and t.status.code != ns.status:
            continue
        if not ns.status and not ns.all and t.status is TaskStatus.DELETED:
            continue
        rows.append((index, t))
    _print_tasks(rows)
    return 0


def _set_status(ns: argparse.Namespace, status: TaskStatus, verb: str) -> int:
    path = _store_path_from_args(ns)
    store = _open_store(path)
    index = int(ns.index)
    task = _task_at(store, index)
    if task is None:
        print(f"Task #{index} not found.", file=sys.stderr)
        return 1
    store.tasks[index - 1] = replace(task, status=status)
    _save_store(store, path)
    print(f"Marked task #{index} as {verb}.")
    return 0


def cmd_done(ns: argparse.Namespace) -> int:
    return _set_status(ns, TaskStatus.FINISHED, "finished")


def cmd_start(ns: argparse.Namespace) -> int:
    return _set_status(ns, TaskStatus.IN_PROGRESS, "in progress")


def cmd_delete(ns: argparse.Namespace) -> int:
    return _set_status(ns, TaskStatus.DELETED, "deleted")


def cmd_check(ns: argparse.Namespace) -> int:
    path = _store_path_from_args(ns)
    store = _open_store(path, strict=True)
    print(f"{path}: {len(store)} valid tasks.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="taskline",
        description="taskline: a personal task list kept as one task per line of text.",
    )
    p.add_argument(
        "--file",
        help="Path to the task file (default: ~/.taskline/tasks.txt or TASKLINE_FILE env var)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("add", help="Add a new task.")
    s.add_argument("datetime", type=_parse_datetime, help="When, as YYYY-M-D.H:M or 'now'.")
    s.add_argument(
        "proximity",
        choices=[x.code for x in TaskProximity],
        help="Proximity code (VH, H, M, L, VL).",
    )
    s.add_argument("content", nargs="+", help="Task text.")
    s.add_argument(
        "--status",
        choices=[x.code for x in TaskStatus],
        default=TaskStatus.TODO.code,
        help="Status code (default: Td).",
    )
    s.set_defaults(func=cmd_add)

    s = sub.add_parser("list", help="List tasks.")
    s.add_argument("--status", choices=[x.code for x in TaskStatus], help="Only tasks with this status.")
    s.add_argument("--all", action="store_true", help="Include deleted tasks.")
    s.set_defaults(func=cmd_list)

    for name, func, help_text in (
        ("done", cmd_done, "Mark a task as finished."),
        ("start", cmd_start, "Mark a task as in progress."),
        ("delete", cmd_delete, "Mark a task as deleted (it stays in the file)."),
    ):
        s = sub.add_parser(name, help=help_text)
        s.add_argument("index", type=int, help="Task number as shown by 'list'.")
        s.set_defaults(func=func)

    s = sub.add_parser("check", help="Report the first line of the task file that is not a valid task.")
    s.set_defaults(func=cmd_check)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else default_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return int(ns.func(ns))
    except CorruptLineError as e:
        print(str(e), file=sys.stderr)
        return 1
    except ConversionError as e:
        print(f"Invalid task: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Cannot access task file: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
