from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .errors import ConversionError, CorruptLineError
from .models import Task

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def decode_lines(text: str, *, strict: bool = False) -> list[Task]:
    """
    Decode a task file body, one task per line.

    Best-effort by default: lines that are not valid tasks are dropped.
    With strict=True the first non-blank bad line raises CorruptLineError.
    """
    tasks: list[Task] = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        try:
            tasks.append(Task.parse(line))
        except ConversionError as e:
            if strict and line.strip():
                raise CorruptLineError(lineno, line, e) from e
            if line:
                logger.debug("Dropping line %d (%s): %r", lineno, e, line)
    return tasks


def encode_lines(tasks: Iterable[Task]) -> str:
    return "\n".join(t.format() for t in tasks) + "\n"


class TaskStore:
    """
    Ordered, in-memory list of tasks backed by a flat text file.

    Position is the only identity: duplicates are allowed and there is no
    update/delete API. Mutate `tasks` directly, then save() the whole file.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None) -> None:
        self.tasks: list[Task] = list(tasks) if tasks is not None else []

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def __getitem__(self, index: int) -> Task:
        return self.tasks[index]

    def append(self, task: Task) -> None:
        self.tasks.append(task)

    def load(self, path: PathLike, *, strict: bool = False) -> None:
        """Replace the held tasks with the contents of `path`."""
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        self.tasks = decode_lines(text, strict=strict)
        logger.info("Loaded %d tasks from %s", len(self.tasks), path)

    def save(self, path: PathLike, *, atomic: bool = False) -> None:
        """
        Overwrite `path` with every held task, one per line.

        atomic=True writes a sibling temp file first and renames it into
        place, so a crash mid-write leaves the previous file intact.
        """
        path = Path(path)
        data = encode_lines(self.tasks)
        if atomic:
            tmp = path.with_name(path.name + ".tmp")
            tmp.write_text(data, encoding="utf-8")
            os.replace(tmp, path)
        else:
            path.write_text(data, encoding="utf-8")
        logger.info("Saved %d tasks to %s", len(self.tasks), path)
