"""Data models for the policy evaluator engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

RowStatus = Literal["ok", "warn", "error"]


@dataclass(frozen=True)
class EvaluatedRow:
    """One package classified against the policy."""

    name: str
    version: str
    license: str  # display value, original casing
    status: RowStatus


@dataclass
class Report:
    """Aggregated result of one evaluation.

    ``rows`` keeps scanner order; ignored packages are absent.
    """

    total: int = 0
    errors: int = 0
    warnings: int = 0
    fail: bool = False
    rows: list[EvaluatedRow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "errors": self.errors,
            "warnings": self.warnings,
            "fail": self.fail,
            "rows": [asdict(row) for row in self.rows],
        }
