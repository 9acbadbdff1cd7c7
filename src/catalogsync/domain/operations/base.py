"""Base type for update operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateOperation:
    """Named instruction carrying only the data a target needs to apply it.

    ``ACTION`` is the wire name of the operation; adapters translate on it.
    """

    ACTION: ClassVar[str] = ""

    @property
    def action(self) -> str:
        return self.ACTION
