from dataclasses import dataclass
from typing import Any


class ResultError(Exception):
    def __str__(self):
        return "Unknown result error."


@dataclass
class NoneValueError(ResultError, ValueError):
    variant: str

    def __str__(self):
        return f"`{self.variant}` can not hold `None`, use `unit` instead."


@dataclass
class UnwrapError(ResultError):
    error: Any

    def __str__(self):
        return f"Called `get_or_raise` on a failed result: {self.error!r}"
