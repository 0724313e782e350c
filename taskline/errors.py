from __future__ import annotations

from typing import Optional


class ConversionError(ValueError):
    """
    Base for every failure to turn text (or numbers) into a taskline value.

    `subject` names the record being built ("Datetime" or "Task") and only
    affects the message. Use for_subject() to re-raise the same kind of
    error on behalf of an enclosing record.
    """

    def __init__(self, subject: str = "Datetime") -> None:
        self.subject = subject
        super().__init__(self.describe())

    def describe(self) -> str:
        return f"This {self.subject} could not be converted."

    def for_subject(self, subject: str) -> ConversionError:
        return type(self)(subject)


class RangeError(ConversionError):
    def describe(self) -> str:
        return f"This {self.subject} has values that are out of range."


class ParseError(ConversionError):
    """A token could not be read as an unsigned integer."""

    def __init__(self, cause: ValueError, subject: str = "Datetime") -> None:
        self.cause = cause
        super().__init__(subject)
        self.__cause__ = cause

    def describe(self) -> str:
        return f"Error occurred during parse integer: {self.cause}"

    def for_subject(self, subject: str) -> ConversionError:
        return ParseError(self.cause, subject)


class TooFewArgumentsError(ConversionError):
    def describe(self) -> str:
        return "Too few arguments."


class CorruptLineError(ValueError):
    """Raised by a strict load for the first line that is not a valid task."""

    def __init__(self, line_number: int, line: str, error: Optional[ConversionError] = None) -> None:
        self.line_number = line_number
        self.line = line
        self.error = error
        detail = f": {error}" if error else ""
        super().__init__(f"Line {line_number} is not a valid task ({line!r}){detail}")
