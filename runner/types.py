from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class StepResult:
    """Outcome of one HTTP call made during the smoke run."""

    name: str
    method: str
    path: str
    expected_status: int
    status_code: int | None
    elapsed_ms: float
    problems: list[str] = field(default_factory=list)
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code == self.expected_status and not self.problems


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., health never ready)."""


class StepFailed(SmokeError):
    """Raised when a step whose output later steps depend on did not succeed."""

    def __init__(self, result: StepResult) -> None:
        super().__init__(f"{result.name}: expected {result.expected_status}, got {result.status_code}")
        self.result = result
