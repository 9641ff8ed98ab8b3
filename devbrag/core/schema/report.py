from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Tuple

from devbrag.core.schema.activity import CommitEvent, Identity, PullRequestEvent
from devbrag.core.schema.timeline import DateRange, TimelineBucket


class ReportTone(Enum):
    PROFESSIONAL = "Professional"
    ENTHUSIASTIC = "Enthusiastic"
    CONCISE = "Concise"


class Badge(Enum):
    QUICK_MERGE = "quick_merge"
    HIGH_IMPACT = "high_impact"
    SIGNIFICANT = "significant"


@dataclass(frozen=True, slots=True)
class ActivityStats:
    total_pull_requests: int
    merged_pull_requests: int
    total_commits: int
    repositories_touched: int


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    identity: Identity
    date_range: DateRange
    selected_repository_ids: FrozenSet[int]


@dataclass(frozen=True, slots=True)
class DashboardView:
    snapshot: SessionSnapshot
    pull_requests: Tuple[PullRequestEvent, ...]
    commits: Tuple[CommitEvent, ...]
    timeline: Tuple[TimelineBucket, ...]
    stats: ActivityStats

    @property
    def has_data(self) -> bool:
        return bool(self.pull_requests or self.commits)
