from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Literal, Optional


OutcomeStatus = Literal["processed", "unrecorded", "failed", "skipped"]


@dataclass(frozen=True)
class SubmissionOutcome:
    url: str
    status: OutcomeStatus
    error: Optional[str]
    finished_at: datetime

    @property
    def submitted(self) -> bool:
        return self.status in {"processed", "unrecorded"}

    def to_json_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["finished_at"] = self.finished_at.isoformat(timespec="seconds")
        return data


@dataclass
class RunSummary:
    outcomes: list[SubmissionOutcome] = field(default_factory=list)
    generation_triggered: bool = False

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def submitted(self) -> int:
        return sum(1 for o in self.outcomes if o.submitted)
