from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from .errors import ConversionError, RangeError, TooFewArgumentsError
from .timestamp import Datetime


class _CodedEnum(Enum):
    """Enum whose value is the fixed code written to the task file."""

    @classmethod
    def parse(cls, code: str):
        try:
            return cls(code)
        except ValueError:
            raise RangeError("Task") from None

    @property
    def code(self) -> str:
        return self.value

    def format(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class TaskProximity(_CodedEnum):
    VERY_HIGH = "VH"
    HIGH = "H"
    MEDIUM = "M"
    LOW = "L"
    VERY_LOW = "VL"


class TaskStatus(_CodedEnum):
    TODO = "Td"
    IN_PROGRESS = "In"
    FINISHED = "Fn"
    DELETED = "Dl"


DatetimeLike = Union[Datetime, str, Tuple[Tuple[int, int, int], Tuple[int, int]]]


@dataclass(frozen=True)
class Task:
    datetime: Datetime
    proximity: TaskProximity
    status: TaskStatus
    content: str

    def __post_init__(self) -> None:
        # one task per line in the file
        if "\n" in self.content:
            raise RangeError("Task")

    @classmethod
    def create(
        cls,
        datetime: DatetimeLike,
        proximity: Union[TaskProximity, str],
        content: str,
        status: Union[TaskStatus, str] = TaskStatus.TODO,
    ) -> Task:
        """
        Build a task from already-typed values, codes, or numeric tuples:

            Task.create(((2023, 10, 22), (23, 10)), "M", "Hello.")
        """
        try:
            if isinstance(datetime, str):
                datetime = Datetime.parse(datetime)
            elif not isinstance(datetime, Datetime):
                datetime = Datetime.from_tuples(*datetime)
        except ConversionError as e:
            raise e.for_subject("Task") from e
        if not isinstance(proximity, TaskProximity):
            proximity = TaskProximity.parse(proximity)
        if not isinstance(status, TaskStatus):
            status = TaskStatus.parse(status)
        return cls(datetime, proximity, status, content)

    @classmethod
    def parse(cls, line: str, *, first_token_content: bool = False) -> Task:
        """
        Decode one line: `<datetime> <proximity> <status> <content>`.

        Content is everything after the third space. With
        first_token_content=True only the word up to the next space is kept,
        which is how files written by older versions were read.
        """
        tokens = line.split(" ", 3)
        if len(tokens) < 4:
            raise TooFewArgumentsError("Task")

        try:
            datetime = Datetime.parse(tokens[0])
        except ConversionError as e:
            raise e.for_subject("Task") from e

        proximity = TaskProximity.parse(tokens[1])
        status = TaskStatus.parse(tokens[2])

        content = tokens[3]
        if first_token_content:
            content = content.split(" ", 1)[0]
        return cls(datetime, proximity, status, content)

    def format(self) -> str:
        return f"{self.datetime} {self.proximity} {self.status} {self.content}"

    def __str__(self) -> str:
        return self.format()
