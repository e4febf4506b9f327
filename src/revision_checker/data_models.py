"""
Data models for revision checking.
"""

from dataclasses import dataclass, field
from typing import Any

from .config import Environment


@dataclass(frozen=True)
class RevisionRecord:
    """A revision value with its normalized UTC commit timestamp."""

    digest: str
    commit_date: str  # e.g., "2025-09-24 09:55:10 +0000"

    def __post_init__(self):
        if not self.digest:
            raise ValueError("digest must not be empty")

    def to_dict(self) -> dict[str, str]:
        return {"digest": self.digest, "commit_date": self.commit_date}


@dataclass(frozen=True)
class TipRevision:
    """Current value of the tracked file on a checked out branch."""

    value: str
    commit_date: str  # raw git "%ci" output


@dataclass(frozen=True)
class HistoricalCommitRecord:
    """Value of the tracked file as of one commit inside the scan window."""

    commit_id: str
    commit_date: str  # raw git "%ci" output
    value: str


@dataclass
class AggregateResult:
    """Per-environment revision records for a single run."""

    environments: dict[Environment, list[RevisionRecord]] = field(
        default_factory=dict
    )
    failed_branches: dict[str, str] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    def records_for(self, environment: Environment) -> list[RevisionRecord]:
        return self.environments.get(environment, [])

    @property
    def succeeded(self) -> bool:
        return not self.failed_branches
