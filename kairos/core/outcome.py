from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

T = TypeVar("T")

Source = Literal["ai", "local", "fallback"]


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """A pipeline result tagged with the path that produced it."""

    value: T
    source: Source

    @property
    def degraded(self) -> bool:
        return self.source == "fallback"
