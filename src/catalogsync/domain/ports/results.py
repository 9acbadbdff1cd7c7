"""Outcome of a create or update call against a target."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class FailureKind(StrEnum):
    CONFLICT = "conflict"
    REMOTE = "remote"


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    kind: FailureKind
    error: BaseException

    @property
    def is_conflict(self) -> bool:
        return self.kind is FailureKind.CONFLICT


type Result[T] = Ok[T] | Failure


__all__ = ["Failure", "FailureKind", "Ok", "Result"]
